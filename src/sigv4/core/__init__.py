"""Core / service layer: request assembly and pipeline orchestration.

Rules
-----
* No ``print()`` calls.
* No network I/O; the only reads are of the request body (file/stdin).
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from sigv4.core.body import classify_body_source, resolve_body
from sigv4.core.draft import build_draft
from sigv4.core.headers import header_values, parse_headers
from sigv4.core.models import (
    BodySource,
    BodySourceKind,
    BufferedResponse,
    ColorMode,
    DisplayOptions,
    Endpoint,
    RequestDraft,
    RequestOptions,
    SignedRequest,
)
from sigv4.core.pipeline import PipelineStage, RequestPipeline
from sigv4.core.protocols import CredentialsProvider, Signer, SigningCredentials, Transport

__all__: list[str] = [
    "BodySource",
    "BodySourceKind",
    "BufferedResponse",
    "ColorMode",
    "CredentialsProvider",
    "DisplayOptions",
    "Endpoint",
    "PipelineStage",
    "RequestDraft",
    "RequestOptions",
    "RequestPipeline",
    "SignedRequest",
    "Signer",
    "SigningCredentials",
    "Transport",
    "build_draft",
    "classify_body_source",
    "header_values",
    "parse_headers",
    "resolve_body",
]
