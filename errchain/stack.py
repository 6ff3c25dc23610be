from __future__ import annotations

import json
from typing import Any, Iterable, Mapping, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from errchain.chain import describe, iter_chain
from errchain.errors import StackDecodeError
from errchain.node import FIELDS_KEY, MESSAGE_KEY, ChainError
from errchain.settings import StackSettings, resolve_settings


class Record(BaseModel):
    """One decoded stack entry."""

    message: str = ""
    fields: Optional[dict[str, Any]] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("message", mode="before")
    @classmethod
    def _coerce_message(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("fields", mode="before")
    @classmethod
    def _drop_malformed_fields(cls, value: Any) -> Optional[dict[str, Any]]:
        if not isinstance(value, Mapping):
            return None
        return {str(key): item for key, item in value.items()}

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {MESSAGE_KEY: self.message}
        if self.fields:
            data[FIELDS_KEY] = dict(self.fields)
        return data


def stack(
    err: Optional[BaseException],
    settings: StackSettings | Mapping[str, Any] | None = None,
) -> list[dict[str, Any]]:
    """Flatten the chain of ``err`` into records, outermost first."""
    resolved = resolve_settings(settings)
    records: list[dict[str, Any]] = []
    for current in iter_chain(err, max_depth=resolved.max_depth):
        if isinstance(current, ChainError):
            records.append(current.to_record())
        else:
            records.append({MESSAGE_KEY: describe(current)})
    return records


def json_stack(
    err: Optional[BaseException],
    settings: StackSettings | Mapping[str, Any] | None = None,
) -> bytes:
    """JSON-encode :func:`stack`. Returns ``b""`` if encoding fails."""
    resolved = resolve_settings(settings)
    try:
        text = json.dumps(
            stack(err, resolved),
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=resolved.ensure_ascii,
            allow_nan=False,
        )
    except Exception:
        logger.opt(exception=True).debug("Failed to encode error stack")
        return b""
    return text.encode("utf-8")


def restore(records: Iterable[Record | Mapping[str, Any]]) -> Optional[ChainError]:
    """Rebuild a chain of ``ChainError`` from records produced by :func:`stack`."""
    parsed = _coerce_records(records or ())
    err: Optional[ChainError] = None
    for record in reversed(parsed):
        err = ChainError(record.message, record.fields, err)
    return err


def load_stack(data: bytes | bytearray | memoryview | str) -> list[Record]:
    """Decode a serialized stack into records.

    Raises:
        StackDecodeError: The payload is not JSON or not a JSON array.
    """
    if isinstance(data, memoryview):
        data = data.tobytes()
    try:
        payload = json.loads(data)
    except (TypeError, ValueError, RecursionError) as exc:
        raise StackDecodeError("Invalid JSON error stack") from exc
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise StackDecodeError(
            f"Error stack JSON must be an array, got {type(payload).__name__}"
        )

    return _coerce_records(payload)


def restore_raw(data: bytes | bytearray | memoryview | str) -> Optional[ChainError]:
    """Rebuild a chain from the output of :func:`json_stack`; never raises."""
    try:
        records = load_stack(data)
    except StackDecodeError:
        logger.opt(exception=True).debug("Discarding undecodable error stack")
        return None
    return restore(records)


def _coerce_records(items: Iterable[Any]) -> list[Record]:
    records: list[Record] = []
    for index, item in enumerate(items):
        record = _coerce_record(item)
        if record is None:
            logger.debug(f"Skipping malformed stack entry at index {index}")
            continue
        records.append(record)
    return records


def _coerce_record(item: Any) -> Optional[Record]:
    if isinstance(item, Record):
        return item
    if not isinstance(item, Mapping):
        return None
    try:
        return Record.model_validate(dict(item))
    except ValidationError:
        return None
