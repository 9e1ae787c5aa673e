from __future__ import annotations

from typing import Final

_CONTROL_CHARS: Final[frozenset[str]] = frozenset(
    chr(code) for code in range(0x00, 0x20) if chr(code) not in {"\t", "\n"}
)

_MAX_LOGGED_LENGTH: Final[int] = 256


def sanitize_log_message(value: str | None) -> str | None:
    """Normalise caller-supplied values before they reach the log sinks."""

    if value is None:
        return None
    normalised = value.replace("\r\n", "\n").replace("\r", "\n")
    cleaned = "".join(ch for ch in normalised if ch not in _CONTROL_CHARS)
    if len(cleaned) > _MAX_LOGGED_LENGTH:
        return f"{cleaned[: _MAX_LOGGED_LENGTH - 3]}..."
    return cleaned


__all__ = ["sanitize_log_message"]
