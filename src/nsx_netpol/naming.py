"""DNS-1123 label sanitization for service display names."""

from __future__ import annotations

import re

MAX_LABEL_LENGTH = 63

_INVALID_RUN = re.compile(r"[^a-z0-9-]+")
_HYPHEN_RUN = re.compile(r"-{2,}")
_LABEL_PATTERN = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")


def sanitize_name(display_name: str) -> str:
    """Convert a display name into a DNS-1123 label.

    Lower-cases the name, replaces every run of characters outside
    ``[a-z0-9-]`` with one hyphen, collapses repeated hyphens and strips
    hyphens from both ends. Names without any alphanumeric character
    sanitize to the empty string. The result is not truncated to 63
    characters.

    Example:
        >>> sanitize_name("A!! B__C")
        'a-b-c'
        >>> sanitize_name("Web   Service--X")
        'web-service-x'
        >>> sanitize_name("###")
        ''
    """
    name = _INVALID_RUN.sub("-", display_name.lower())
    name = _HYPHEN_RUN.sub("-", name)
    return name.strip("-")


def is_dns1123_label(value: str) -> bool:
    """Check whether a value is a valid DNS-1123 label."""
    return len(value) <= MAX_LABEL_LENGTH and bool(_LABEL_PATTERN.match(value))


__all__ = ["MAX_LABEL_LENGTH", "is_dns1123_label", "sanitize_name"]
