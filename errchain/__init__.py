"""
Chained errors with structured context.

This package provides:
- ChainError values carrying a message, contextual fields and a cause
- Chain traversal across native and foreign exceptions (unwrap, is_, as_)
- Flattening a chain into an ordered stack of records and a JSON encoding of it
- Restoring an equivalent chain from either representation
"""

from loguru import logger

from errchain.chain import Unwrapper, as_, describe, is_, iter_chain, unwrap
from errchain.errors import StackDecodeError, StackError
from errchain.node import (
    FIELDS_KEY,
    MESSAGE_KEY,
    SEPARATOR,
    ChainError,
    Fields,
    new,
    new_with_fields,
    wrap,
    wrap_with_fields,
)
from errchain.settings import StackSettings, resolve_settings
from errchain.stack import Record, json_stack, load_stack, restore, restore_raw, stack

# Library logging stays silent until the application calls logger.enable("errchain").
logger.disable("errchain")

__all__ = [
    # Errors
    "ChainError",
    "Fields",
    "new",
    "new_with_fields",
    "wrap",
    "wrap_with_fields",
    "MESSAGE_KEY",
    "FIELDS_KEY",
    "SEPARATOR",
    # Chain
    "Unwrapper",
    "unwrap",
    "iter_chain",
    "describe",
    "is_",
    "as_",
    # Stack
    "Record",
    "stack",
    "json_stack",
    "load_stack",
    "restore",
    "restore_raw",
    "StackError",
    "StackDecodeError",
    # Settings
    "StackSettings",
    "resolve_settings",
]
