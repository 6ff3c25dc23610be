"""错误栈序列化配置。"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from loguru import logger


_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class StackSettings:
    max_depth: Optional[int] = None
    ensure_ascii: bool = False

    @classmethod
    def from_mapping(cls, settings: Optional[Mapping[str, Any]]) -> "StackSettings":
        settings = settings or {}
        return cls(
            max_depth=_parse_max_depth(settings.get("max_depth")),
            ensure_ascii=_parse_flag(settings.get("ensure_ascii", False)),
        )


def resolve_settings(
    settings: StackSettings | Mapping[str, Any] | None = None,
) -> StackSettings:
    """Use explicit settings when given, otherwise the defaults (no depth limit)."""
    if isinstance(settings, StackSettings):
        return settings
    if settings is not None:
        return StackSettings.from_mapping(settings)
    return StackSettings()


def _parse_max_depth(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        depth = int(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring invalid max_depth setting: {value!r}")
        return None
    if depth <= 0:
        logger.warning(f"Ignoring non-positive max_depth setting: {depth}")
        return None
    return depth


def _parse_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)
