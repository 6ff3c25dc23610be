from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional

from errchain.chain import describe, iter_chain

MESSAGE_KEY = "message"
FIELDS_KEY = "fields"
SEPARATOR = ": "

Fields = dict[str, Any]


class ChainError(Exception):
    """
    An immutable error carrying a message, contextual fields and a cause.

    ``str()`` renders the whole chain, outermost message first, joined with
    ``": "``. The cause may be another ``ChainError`` or any other exception.

    Args:
        message: Human-readable error message.
        fields: Optional contextual key/value pairs. A shallow copy is kept.
        cause: Optional error that led to this one.
    """

    def __init__(
        self,
        message: str,
        fields: Optional[Mapping[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._fields: Fields = dict(fields) if fields else {}
        self._cause = cause
        if isinstance(cause, BaseException):
            # Chained traceback: ChainError <- cause
            self.__cause__ = cause

    @property
    def message(self) -> str:
        return self._message

    @property
    def fields(self) -> Mapping[str, Any]:
        return MappingProxyType(self._fields)

    @property
    def cause(self) -> Optional[BaseException]:
        return self._cause

    def unwrap(self) -> Optional[BaseException]:
        return self._cause

    def to_record(self) -> dict[str, Any]:
        """This node's own entry in a stack; ``fields`` only when non-empty."""
        record: dict[str, Any] = {MESSAGE_KEY: self._message}
        if self._fields:
            record[FIELDS_KEY] = dict(self._fields)
        return record

    def __str__(self) -> str:
        return SEPARATOR.join(
            node.message if isinstance(node, ChainError) else describe(node)
            for node in iter_chain(self)
        )

    def __repr__(self) -> str:
        parts = [repr(self._message)]
        if self._fields:
            parts.append(f"fields={self._fields!r}")
        if self._cause is not None:
            parts.append(f"cause={self._cause!r}")
        return f"{type(self).__name__}({', '.join(parts)})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self._message, self._fields or None, self._cause))


def new(message: str) -> ChainError:
    return ChainError(message)


def new_with_fields(message: str, fields: Optional[Mapping[str, Any]]) -> ChainError:
    return ChainError(message, fields)


def wrap(cause: Optional[BaseException], message: str) -> Optional[ChainError]:
    """Wrap ``cause`` with an explanatory message. Wrapping None gives None."""
    if cause is None:
        return None
    return ChainError(message, cause=cause)


def wrap_with_fields(
    cause: Optional[BaseException],
    message: str,
    fields: Optional[Mapping[str, Any]],
) -> Optional[ChainError]:
    """Like :func:`wrap`, attaching contextual fields to the new error."""
    if cause is None:
        return None
    return ChainError(message, fields, cause)
