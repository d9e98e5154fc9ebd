"""
Engine-wide settings.

Values are read once from the environment at import time and can be
changed afterwards with `configure`.
"""
import os
from dataclasses import dataclass, replace


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off", "")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    """
    check_progress: `many` raises NonAdvancingParser when its body succeeds
        without consuming input. When off, such a body loops forever.
    trace_preview: number of characters of remaining input shown by
        `parser_trace`.
    """
    check_progress: bool = True
    trace_preview: int = 30


settings = Settings(
    check_progress=_env_flag("PYPARSA_CHECK_PROGRESS", True),
    trace_preview=_env_int("PYPARSA_TRACE_PREVIEW", 30),
)


def configure(**changes) -> Settings:
    """Update the global settings. Returns the previous settings."""
    global settings
    previous = settings
    settings = replace(settings, **changes)
    return previous


def restore(previous: Settings) -> None:
    global settings
    settings = previous
