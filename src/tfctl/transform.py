"""Transform chains: tokenizing and resolving per-field formatting directives.

A chain is the third field of an ``--attrs`` entry, e.g. ``name::u,20``.
Global chains from the ``*`` entry are prepended to each field's own chain,
so every resolver here picks the *last* matching token: the field-specific
directive always outranks the global one.
"""

from __future__ import annotations

import logging
import os
import re
from datetime import datetime
from typing import List, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from . import config

logger = logging.getLogger(__name__)

Token = Union[int, str]

_TOKEN = re.compile(r"-?\d+|[A-Za-z]")
_RFC3339 = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|z|[+-]\d{2}:\d{2})$"
)

TIME_FORMAT = "%Y-%m-%dT%H:%M:%S%Z"
TIMEZONE_TOKENS = ("t", "T")
LOWER_TOKENS = ("l", "L")
UPPER_TOKENS = ("u", "U")


def tokenize(chain: str) -> List[Token]:
    """Split a chain into integer and single-letter tokens.

    Commas are separators only; anything that is neither a digit run nor a
    letter is ignored.

    Examples:
        >>> tokenize("u,-10")
        ['u', -10]
        >>> tokenize("t,l20")
        ['t', 'l', 20]
    """
    tokens: List[Token] = []
    for match in _TOKEN.finditer(chain or ""):
        text = match.group(0)
        tokens.append(text if text.isalpha() else int(text))
    return tokens


def wants_timezone(tokens: List[Token]) -> bool:
    return any(t in TIMEZONE_TOKENS for t in tokens if isinstance(t, str))


def resolve_case(tokens: List[Token]) -> Optional[str]:
    """Return ``"lower"``, ``"upper"`` or None; the last case token wins."""
    for token in reversed(tokens):
        if token in LOWER_TOKENS:
            return "lower"
        if token in UPPER_TOKENS:
            return "upper"
    return None


def resolve_length(tokens: List[Token]) -> Optional[int]:
    """Return the last length token, or None when the chain has none."""
    for token in reversed(tokens):
        if isinstance(token, int):
            return token
    return None


def strip_timezone(chain: str) -> str:
    """Remove the timezone letters from a raw chain string."""
    for letter in TIMEZONE_TOKENS:
        chain = chain.replace(letter, "")
    return chain


def resolve_timezone() -> Optional[ZoneInfo]:
    """Find the target zone: the ``timezone`` config key, then ``$TZ``."""
    name = config.get_string("timezone", "") or os.environ.get("TZ", "")
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.debug("unknown timezone: %s", name)
        return None


def convert_timezone(text: str, zone: ZoneInfo) -> str:
    """Reformat an RFC 3339 timestamp in ``zone``.

    Raises:
        ValueError: ``text`` is not an RFC 3339 timestamp.
    """
    if not _RFC3339.match(text):
        raise ValueError(f"not an RFC 3339 timestamp: {text}")
    stamp = datetime.fromisoformat(text.replace("z", "Z"))
    return stamp.astimezone(zone).strftime(TIME_FORMAT)


def apply_case(text: str, case: Optional[str]) -> str:
    if case == "lower":
        return text.lower()
    if case == "upper":
        return text.upper()
    return text


def apply_length(text: str, length: Optional[int]) -> str:
    """Truncate (positive) or middle-abbreviate (negative) ``text``.

    Examples:
        >>> apply_length("hello world", 5)
        'hello'
        >>> apply_length("hello world", -8)
        'hel..rld'
    """
    if length is None:
        return text

    limit = abs(length)
    if len(text) <= limit:
        return text

    if length >= 0:
        return text[:length]

    half = max(limit // 2 - 1, 0)
    return text[:half] + ".." + text[len(text) - half:]


__all__ = [
    "TIME_FORMAT",
    "Token",
    "apply_case",
    "apply_length",
    "convert_timezone",
    "resolve_case",
    "resolve_length",
    "resolve_timezone",
    "strip_timezone",
    "tokenize",
    "wants_timezone",
]
