import sys

from loguru import logger

from errchain import json_stack, new_with_fields, restore_raw, wrap_with_fields

# Show the library's debug output while running the example.
logger.remove()
logger.add(sys.stderr, level="DEBUG")
logger.enable("errchain")

err = new_with_fields("1", {"f1": "v1"})
err = wrap_with_fields(err, "2", {"f2": "v2"})

data = json_stack(err)
print(data.decode("utf-8"))
# [{"fields":{"f2":"v2"},"message":"2"},{"fields":{"f1":"v1"},"message":"1"}]

# Restore the error from the JSON stack.
restored = restore_raw(data)
if restored is not None:
    print(restored)
# 2: 1

# Undecodable input degrades to None and leaves a debug line behind.
print(restore_raw(b"not json"))
