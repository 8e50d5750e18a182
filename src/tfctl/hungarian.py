"""Detect resource names that repeat their own type (Hungarian notation)."""

import re

_NAME_SEPARATORS = re.compile(r"[^a-z0-9]+")


def is_hungarian(type_: str, name: str) -> bool:
    """Return True if any ``_`` token of ``type_`` appears in ``name``.

    Matching is case-insensitive. A token matches when it is a whole
    separator-delimited part of the name, or anywhere inside it, which covers
    names jammed together without separators (``aws_s3_bucket.mybucket``).

    Examples:
        >>> is_hungarian("aws_s3_bucket", "logs-bucket")
        True
        >>> is_hungarian("aws_instance", "web")
        False
    """
    if not type_ or not name:
        return False

    name_lower = name.lower()
    name_parts = set(_NAME_SEPARATORS.split(name_lower))

    for token in type_.lower().split("_"):
        if not token:
            continue
        if token in name_parts or token in name_lower:
            return True

    return False


__all__ = ["is_hungarian"]
