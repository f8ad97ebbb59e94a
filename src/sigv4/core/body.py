"""Request body resolution for the ``-d`` option.

A body specifier is classified once by :func:`classify_body_source`
and then read by :func:`resolve_body`:

* ``@-``      : the whole of standard input.
* ``@<path>``: the whole of the file at ``<path>``.
* anything else, including a bare ``@`` and ``""``: the literal text.

Reads are strict and whole-buffer; bodies are expected to fit in memory.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

from sigv4.core.models import BodySource, BodySourceKind
from sigv4.exceptions import BodyReadError

logger = logging.getLogger(__name__)

_FILE_PREFIX = "@"
_STDIN_MARKER = "-"


def classify_body_source(spec: str) -> BodySource:
    """Classify a ``-d`` value into a :class:`BodySource`."""
    if spec.startswith(_FILE_PREFIX) and len(spec) > 1:
        remainder = spec[1:]
        if remainder == _STDIN_MARKER:
            return BodySource(BodySourceKind.STDIN, remainder)
        return BodySource(BodySourceKind.FILE, remainder)
    return BodySource(BodySourceKind.LITERAL, spec)


def resolve_body(spec: str, stdin: BinaryIO | None) -> bytes:
    """Return the body bytes selected by *spec*.

    Parameters
    ----------
    spec:
        The raw ``-d`` value.
    stdin:
        Binary stream consulted only for ``@-``; ``None`` when the
        process has no standard input.

    Raises
    ------
    BodyReadError
        When stdin is missing or unreadable, or the named file cannot
        be read.
    """
    source = classify_body_source(spec)
    logger.debug("Resolving %s body source", source.kind.value)

    if source.kind is BodySourceKind.STDIN:
        return _read_stdin(stdin)
    if source.kind is BodySourceKind.FILE:
        return _read_file(Path(source.value))
    return source.value.encode("utf-8")


def _read_stdin(stdin: BinaryIO | None) -> bytes:
    if stdin is None:
        raise BodyReadError(
            "Cannot read request body from stdin: stdin is closed.",
            hint="Pipe the body in, or pass it with -d @<path> or as literal text.",
        )
    try:
        return stdin.read()
    except (OSError, ValueError) as exc:
        raise BodyReadError(f"Failed to read request body from stdin: {exc}") from exc


def _read_file(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError as exc:
        raise BodyReadError(
            f"Body file not found: {path}",
            hint="Use '@-' to read the body from stdin, or drop the '@' to send literal text.",
        ) from exc
    except OSError as exc:
        raise BodyReadError(f"Failed to read body file {path}: {exc}") from exc
