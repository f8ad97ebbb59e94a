"""Parsing of raw ``-H key:value`` tokens.

Every function here is a **pure** transformation.  Malformed tokens (no
colon at all) are dropped without raising: a bad ``-H`` flag never
fails the whole invocation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sigv4.core.models import Headers

logger = logging.getLogger(__name__)


def parse_header(token: str) -> tuple[str, str] | None:
    """Split *token* on its first colon, or return ``None`` if it has none.

    Both the name and value are stripped of surrounding whitespace;
    any further colons stay in the value.
    """
    parts = token.split(":", 1)
    if len(parts) != 2:
        return None
    name, value = parts
    return name.strip(), value.strip()


def parse_headers(tokens: Iterable[str]) -> Headers:
    """Parse header tokens, preserving order and duplicate names."""
    parsed: list[tuple[str, str]] = []
    for token in tokens:
        pair = parse_header(token)
        if pair is None:
            logger.debug("Ignoring malformed header token %r", token)
            continue
        parsed.append(pair)
    return tuple(parsed)


def header_values(headers: Headers, name: str) -> list[str]:
    """Return every value for *name*, matched case-insensitively, in order."""
    wanted = name.lower()
    return [value for key, value in headers if key.lower() == wanted]
