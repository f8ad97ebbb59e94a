"""Terminal rendering of a buffered response.

Layout::

    HTTP/2 <status> <reason>      } only with -i/--include
    <name>: <value>               }
                                  }
    <body>

The body is shown only when it is non-empty UTF-8 text.  A body served
as exactly ``application/json`` is pretty-printed (and highlighted when
colors are on); if it is not strict JSON, the raw text is shown instead.

Rich is used for decoration only.  Undecorated text never passes
through it, so raw bodies reach the terminal byte for byte.
"""

from __future__ import annotations

import io
import json
import math
from typing import Any

from rich.console import Console
from rich.highlighter import JSONHighlighter
from rich.text import Text

from sigv4.core.headers import header_values
from sigv4.core.models import BufferedResponse, DisplayOptions

JSON_CONTENT_TYPE: str = "application/json"

_INVALID_JSON = object()


# ---------------------------------------------------------------------------
# Decoration
# ---------------------------------------------------------------------------

def _to_ansi(text: Text) -> str:
    """Render *text* to a string containing ANSI escape sequences."""
    console = Console(
        file=io.StringIO(),
        force_terminal=True,
        color_system="standard",
        no_color=False,
        legacy_windows=False,
        highlight=False,
        soft_wrap=True,
    )
    with console.capture() as capture:
        console.print(text, end="")
    return capture.get()


def _styled(value: str, style: str, *, color: bool) -> str:
    if not color:
        return value
    return _to_ansi(Text(value, style=style))


# ---------------------------------------------------------------------------
# Body formatting (pure)
# ---------------------------------------------------------------------------

def _decode_body(body: bytes) -> str | None:
    """Return *body* as text, or ``None`` when it is not valid UTF-8."""
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError:
        return None


def _is_json(response: BufferedResponse) -> bool:
    return JSON_CONTENT_TYPE in header_values(response.headers, "content-type")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {literal}")
    return value


def _reject_constant(literal: str) -> Any:
    raise ValueError(f"Not a JSON value: {literal}")


def parse_json(text: str) -> Any:
    """Parse strict JSON, returning a sentinel instead of raising.

    Non-finite numbers are rejected, and so is nesting deeper than the
    interpreter's recursion limit.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
    except (ValueError, RecursionError):
        return _INVALID_JSON


def format_json(document: Any, *, color: bool) -> str:
    """Pretty-print a parsed document with two-space indentation.

    Raises
    ------
    ValueError
        When the document cannot be written back out as UTF-8 JSON,
        e.g. a string holding a lone surrogate.
    RecursionError
        When the document is nested too deeply to serialise.
    """
    pretty = json.dumps(document, indent=2, ensure_ascii=False, allow_nan=False)
    pretty.encode("utf-8")
    if not color:
        return pretty
    return _to_ansi(JSONHighlighter()(Text(pretty)))


def render_body(response: BufferedResponse, *, color: bool) -> str:
    """Format the response body according to its content type."""
    text = _decode_body(response.body)
    if not text:
        return ""
    if not _is_json(response):
        return text

    document = parse_json(text)
    if document is _INVALID_JSON:
        return text
    try:
        return format_json(document, color=color)
    except (ValueError, RecursionError):
        return text


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def render_response(
    response: BufferedResponse,
    options: DisplayOptions,
    *,
    is_terminal: bool = False,
) -> str:
    """Render *response* for the terminal.

    Parameters
    ----------
    response:
        The fully buffered response.
    options:
        Header echo and color settings.
    is_terminal:
        Whether the destination is a terminal; consulted only when the
        color mode is ``auto``.

    Returns
    -------
    str
        The rendered text without a trailing newline.
    """
    color = options.color_mode.enabled(is_terminal)
    parts: list[str] = []

    if options.include_headers:
        parts.append(f"HTTP/2 {_styled(response.status_line, 'bold', color=color)}\n")
        for name, value in response.headers:
            parts.append(f"{_styled(name, 'dim', color=color)}: {value}\n")
        parts.append("\n")

    parts.append(render_body(response, color=color))
    return "".join(parts)
