"""Assembly of a :class:`~sigv4.core.models.RequestDraft` from CLI options."""

from __future__ import annotations

from typing import BinaryIO

from sigv4.core.body import resolve_body
from sigv4.core.headers import parse_headers
from sigv4.core.models import Endpoint, RequestDraft, RequestOptions


def build_draft(options: RequestOptions, stdin: BinaryIO | None) -> RequestDraft:
    """Turn parsed CLI options into an immutable request draft.

    The body is resolved only when a ``-d`` value was given; otherwise
    the draft carries no body at all.

    Raises
    ------
    BodyReadError
        When the body file or stdin cannot be read.
    """
    body: bytes | None = None
    if options.data is not None:
        body = resolve_body(options.data, stdin)

    return RequestDraft(
        endpoint=Endpoint(region=options.region, uri=options.uri),
        service=options.service,
        method=options.method,
        headers=parse_headers(options.header_tokens),
        body=body,
    )
