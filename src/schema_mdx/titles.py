"""Human readable titles from operation identifiers."""

from __future__ import annotations

import re

_EXPLICIT_BOUNDARY = re.compile(r"[\s-]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def id_to_title(identifier: str) -> str:
    """Convert *identifier* into a space separated, capitalized title.

    Uppercase letters following a lowercase letter or a digit start a new
    word, hyphens and whitespace separate words, and digits stay attached
    to the word they follow.

    >>> id_to_title("getKey")
    'Get Key'
    >>> id_to_title("requestId30")
    'Request Id30'
    >>> id_to_title("requestId-30")
    'Request Id 30'
    """
    segments: list[str] = []
    for chunk in _EXPLICIT_BOUNDARY.split(identifier):
        segments.extend(part for part in _CAMEL_BOUNDARY.split(chunk) if part)
    return " ".join(segment[:1].upper() + segment[1:] for segment in segments)
