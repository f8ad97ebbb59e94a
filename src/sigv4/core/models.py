"""Domain models for sigv4.

All models are **frozen** dataclasses: immutable value objects with no
behaviour beyond data access.  They carry zero I/O and zero
dependencies on external packages.

Headers are always an ordered tuple of ``(name, value)`` pairs rather
than a mapping: order is preserved for transmission and display, and
duplicate names are allowed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

Headers = tuple[tuple[str, str], ...]


# ---------------------------------------------------------------------------
# CLI input
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RequestOptions:
    """Loosely-structured request parameters as supplied on the CLI."""

    uri: str
    """Target endpoint URI."""

    region: str = "us-east-1"
    """Region name used in the signature scope."""

    service: str = "execute-api"
    """Service name used in the signature scope."""

    method: str = "GET"
    """HTTP method, passed through verbatim."""

    header_tokens: tuple[str, ...] = ()
    """Raw ``key:value`` tokens from repeated ``-H`` flags."""

    data: str | None = None
    """Body source specifier, or ``None`` when no ``-d`` was given."""


# ---------------------------------------------------------------------------
# Body source
# ---------------------------------------------------------------------------

class BodySourceKind(Enum):
    """Where the request body comes from."""

    LITERAL = "literal"
    FILE = "file"
    STDIN = "stdin"


@dataclass(frozen=True, slots=True)
class BodySource:
    """A classified ``-d`` value.

    For :attr:`BodySourceKind.LITERAL` the value is the original string,
    for :attr:`BodySourceKind.FILE` it is the path, and for
    :attr:`BodySourceKind.STDIN` it is ``"-"``.
    """

    kind: BodySourceKind
    value: str


# ---------------------------------------------------------------------------
# Request draft
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Endpoint:
    """Signing region paired with the physical network target.

    The two are independent: a request can be signed for ``us-east-1``
    while being sent to ``http://localhost:8080``.
    """

    region: str
    uri: str


@dataclass(frozen=True, slots=True)
class RequestDraft:
    """The unsigned, fully-assembled request handed to a signer."""

    endpoint: Endpoint
    service: str
    method: str
    headers: Headers = ()
    body: bytes | None = None
    """``None`` means no body at all, which is distinct from ``b""``."""

    @property
    def region(self) -> str:
        return self.endpoint.region

    @property
    def uri(self) -> str:
        return self.endpoint.uri


@dataclass(frozen=True, slots=True)
class SignedRequest:
    """A request carrying SigV4 authentication headers, ready to send."""

    method: str
    url: str
    headers: Headers
    body: bytes | None = None


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BufferedResponse:
    """An HTTP response whose body has been read entirely into memory."""

    status: int
    reason: str
    headers: Headers = ()
    body: bytes = b""

    @property
    def status_line(self) -> str:
        """``"<status> <reason>"``, e.g. ``"200 OK"``."""
        return f"{self.status} {self.reason}".rstrip()


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------

class ColorMode(Enum):
    """Whether terminal escape sequences are emitted."""

    AUTO = "auto"
    ON = "on"
    OFF = "off"

    def enabled(self, is_terminal: bool) -> bool:
        """Resolve the mode against the output destination."""
        if self is ColorMode.AUTO:
            return is_terminal
        return self is ColorMode.ON


@dataclass(frozen=True, slots=True)
class DisplayOptions:
    """How a response is rendered to the terminal."""

    include_headers: bool = False
    color_mode: ColorMode = ColorMode.AUTO
