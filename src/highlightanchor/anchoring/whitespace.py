"""Whitespace normalisation and whitespace-tolerant search patterns.

Everything that compares highlight text against document text goes through
``normalize_whitespace`` first, so a selection captured as ``"a\\nb"`` and
stored as ``"a b"`` is treated as the same passage.
"""

# Pattern: Functional Core (pure functions, no I/O)

from __future__ import annotations

import re

_WHITESPACE_RUN = re.compile(r"\s+")

# Characters with syntactic meaning inside a pattern
_REGEX_SPECIAL = re.compile(r"[.*+?^${}()|\[\]\\]")


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run to a single space and trim both ends."""
    return _WHITESPACE_RUN.sub(" ", text).strip()


def escape_regex(text: str) -> str:
    r"""Backslash-escape pattern metacharacters in *text*.

    Only ``. * + ? ^ $ { } ( ) | [ ] \`` are escaped, so whitespace stays
    literal and can be folded by ``create_flexible_pattern`` afterwards.
    """
    return _REGEX_SPECIAL.sub(r"\\\g<0>", text)


def create_flexible_pattern(text: str) -> re.Pattern[str]:
    """Compile a pattern matching *text* with any amount of whitespace between words.

    Example:
        ``create_flexible_pattern("hello world")`` matches ``"hello\\n  world"``.
    """
    escaped = escape_regex(text)
    return re.compile(_WHITESPACE_RUN.sub(r"\\s+", escaped))
