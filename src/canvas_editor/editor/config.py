"""Editor settings with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "CANVAS_EDITOR_"
DEFAULT_FONT_FAMILY = '"Courier New", Courier, monospace'


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    raw = env.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return fallback
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{key} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{ENV_PREFIX}{key} must be positive, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class EditorConfig:
    blink_interval_ms: int = 500
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: int = 14
    width: int = 640
    height: int = 480

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        """Build a config from ``CANVAS_EDITOR_*`` variables.

        Unset variables keep their defaults; malformed numbers raise
        ``ValueError``.
        """

        source = os.environ if env is None else env
        defaults = cls()
        return cls(
            blink_interval_ms=_env_int(source, "BLINK_MS", defaults.blink_interval_ms),
            font_family=source.get(f"{ENV_PREFIX}FONT_FAMILY", defaults.font_family),
            font_size=_env_int(source, "FONT_SIZE", defaults.font_size),
            width=_env_int(source, "WIDTH", defaults.width),
            height=_env_int(source, "HEIGHT", defaults.height),
        )
