"""Duration and timestamp helpers for recipe conversion."""

import re
from typing import Optional

_MACHINE_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?")
_FREE_TEXT_MINUTES_RE = re.compile(r"(\d+)\s*minutes?", re.I)
_COMPACT_RE = re.compile(r"(?:(\d+)h)?\s*(?:(\d+)m)?")
_CREATED_RE = re.compile(r"\((\d+)\)")


def format_minutes(minutes) -> str:
    """Render minutes as `Xh Ym`, `Xh` or `Ym`; empty for zero or unknown."""
    if not minutes:
        return ""
    minutes = int(minutes)
    if minutes < 60:
        return f"{minutes}m"
    hours, rest = divmod(minutes, 60)
    return f"{hours}h" if rest == 0 else f"{hours}h {rest}m"


def parse_machine_duration(code) -> str:
    """Render a `PT<h>H<m>M` duration code compactly.

    Values that are not duration codes come back unchanged (as a string) so
    callers can keep free-text durations like "20 minutes".
    """
    if code is None:
        return ""
    if not isinstance(code, str):
        return str(code)
    if not code.startswith("PT"):
        return code
    match = _MACHINE_DURATION_RE.match(code)
    if not match:
        return code
    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    return format_minutes(hours * 60 + minutes)


def parse_free_text_minutes(text) -> int:
    """Return the first integer followed by "minute(s)", or 0."""
    if not text:
        return 0
    match = _FREE_TEXT_MINUTES_RE.search(str(text))
    return int(match.group(1)) if match else 0


def parse_compact_minutes(text) -> int:
    """Inverse of `format_minutes` for strings such as "1h 30m"."""
    if not text or not isinstance(text, str):
        return 0
    match = _COMPACT_RE.fullmatch(text.strip())
    if not match or not any(match.groups()):
        return 0
    return int(match.group(1) or 0) * 60 + int(match.group(2) or 0)


def decode_created_timestamp(value) -> Optional[int]:
    """Decode "CookBook App (1750853689812)" style stamps into Unix seconds."""
    if not value:
        return None
    match = _CREATED_RE.search(str(value))
    if not match:
        return None
    return int(match.group(1)) // 1000
