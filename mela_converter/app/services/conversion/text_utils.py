"""Text normalization helpers for recipe conversion."""

import re
from typing import Iterable, List

TITLE_CASE_MODES = ("title", "proper")

_WORD_START_RE = re.compile(r"(^|[\s-])([^\s-])")


def to_proper_case(text: str) -> str:
    """Uppercase the first character and lowercase the rest."""
    if not text:
        return ""
    return text[0].upper() + text[1:].lower()


def to_title_case(text: str) -> str:
    """Uppercase the first letter of every whitespace or hyphen delimited word."""
    if not text:
        return ""
    return _WORD_START_RE.sub(lambda m: m.group(1) + m.group(2).upper(), text)


def split_lines(value) -> List[str]:
    """Split a multi-line field into trimmed, non-blank lines."""
    if not value:
        return []
    if isinstance(value, str):
        candidates = value.split("\n")
    elif isinstance(value, (list, tuple)):
        candidates = [str(item) for item in value if item is not None]
    else:
        candidates = [str(value)]
    return [line.strip() for line in candidates if line.strip()]


def join_lines(lines: Iterable[str]) -> str:
    """Join ingredient-like lines with single newlines."""
    return "\n".join(line.strip() for line in lines if line and line.strip())


def join_steps(steps: Iterable[str]) -> str:
    """Join instruction-like steps with a blank line between them."""
    return "\n\n".join(step.strip() for step in steps if step and step.strip())


def as_text(value) -> str:
    """Coerce a structured-data value into display text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        lines = []
        for key, item in value.items():
            if str(key).startswith("@") or item in (None, ""):
                continue
            lines.append(f"{key}: {as_text(item)}")
        return "\n".join(lines)
    if isinstance(value, (list, tuple)):
        return ", ".join(as_text(item) for item in value if item not in (None, ""))
    return str(value)


class TextNormalizer:
    """Applies the configured title casing mode."""

    def __init__(self, title_case_mode: str = "title"):
        if title_case_mode not in TITLE_CASE_MODES:
            raise ValueError(f"Unknown title case mode: {title_case_mode}")
        self.title_case_mode = title_case_mode

    def title(self, text: str) -> str:
        if self.title_case_mode == "proper":
            return to_proper_case(text)
        return to_title_case(text)
