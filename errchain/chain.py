"""
Chain traversal helpers.

Any object exposing ``unwrap()`` takes part in a chain. Plain Python
exceptions are followed through their explicit ``__cause__`` only; an
implicit ``__context__`` from an exception handled along the way is ignored.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional, Protocol, runtime_checkable

from loguru import logger


@runtime_checkable
class Unwrapper(Protocol):
    def unwrap(self) -> Optional[BaseException]:
        ...


def unwrap(err: Any) -> Any:
    """Return the immediate cause of ``err``, or None when it is a root."""
    if err is None:
        return None
    if isinstance(err, Unwrapper) and callable(err.unwrap):
        return err.unwrap()
    if isinstance(err, BaseException):
        return err.__cause__
    return None


def iter_chain(err: Any, max_depth: Optional[int] = None) -> Iterator[Any]:
    """Yield every error in the chain, outermost first.

    Stops at the root, after ``max_depth`` links, or when an error is seen
    twice.
    """
    seen: set[int] = set()
    current = err
    depth = 0
    while current is not None:
        if id(current) in seen:
            logger.debug(f"Error chain loops back to {type(current).__name__}; stopping")
            return
        if max_depth is not None and depth >= max_depth:
            logger.debug(f"Error chain truncated at depth {max_depth}")
            return
        seen.add(id(current))
        yield current
        depth += 1
        current = unwrap(current)


def describe(err: Any) -> str:
    try:
        return str(err)
    except Exception:
        return f"<unprintable {type(err).__name__}>"


def is_(err: Any, target: Any) -> bool:
    """Report whether any error in the chain of ``err`` is or equals ``target``."""
    if target is None:
        return err is None
    for current in iter_chain(err):
        if current is target or current == target:
            return True
    return False


def as_(err: Any, target_type: type) -> Any:
    """Return the first error in the chain that is an instance of ``target_type``.

    Returns None when nothing matches.
    """
    if not isinstance(target_type, type):
        raise TypeError(f"target_type must be a class, got {type(target_type).__name__}")
    for current in iter_chain(err):
        if isinstance(current, target_type):
            return current
    return None
