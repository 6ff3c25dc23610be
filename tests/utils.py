from __future__ import annotations

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from loguru import logger

from errchain import ChainError, new, wrap

TESTDATA_DIR = Path(__file__).parent / "testdata"


def read_json(name: str) -> bytes:
    """Load a testdata file in the compact, key-sorted form json_stack emits."""
    payload = json.loads((TESTDATA_DIR / name).read_text(encoding="utf-8"))
    return json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")


def make_chain(*messages: str, root: Optional[BaseException] = None) -> Optional[BaseException]:
    """Wrap ``root`` (or a new error) with each message in turn, innermost first."""
    err: Optional[BaseException] = root
    for message in messages:
        err = new(message) if err is None else wrap(err, message)
    return err


def make_deep_chain(depth: int) -> ChainError:
    err = new("0")
    for index in range(1, depth):
        err = wrap(err, str(index))
    return err


@contextmanager
def capture_logs() -> Iterator[list[str]]:
    messages: list[str] = []
    logger.enable("errchain")
    sink_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    try:
        yield messages
    finally:
        logger.remove(sink_id)
        logger.disable("errchain")


class WrappedError(Exception):
    """A foreign error that exposes its cause through unwrap()."""

    def __init__(self, message: str, inner: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.inner = inner

    def unwrap(self) -> Optional[BaseException]:
        return self.inner


class UnprintableError(Exception):
    def __str__(self) -> str:
        raise RuntimeError("no text")


class NotFoundError(ChainError):
    pass
