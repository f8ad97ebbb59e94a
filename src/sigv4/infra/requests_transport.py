"""requests backed implementation of :class:`~sigv4.core.protocols.Transport`.

This module is the **only** place in the codebase that imports
``requests``.  All requests exceptions are caught here and re-raised as
:class:`~sigv4.exceptions.DispatchError`.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

import requests
import requests.auth

from sigv4.core.models import BufferedResponse, Headers, SignedRequest
from sigv4.exceptions import DispatchError

logger = logging.getLogger(__name__)


class _SignatureOnly(requests.auth.AuthBase):
    """Send the request exactly as signed.

    Passing any ``auth`` stops requests from filling in credentials from
    ``.netrc``, which would overwrite the SigV4 ``Authorization`` header.
    """

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        return request


class RequestsTransport:
    """Concrete :class:`Transport` that sends one request with ``requests``.

    Redirects are not followed: the signature covers the original host
    and path only.

    Parameters
    ----------
    timeout:
        Seconds to wait for the server, or ``None`` to wait indefinitely.
    session:
        Session to send with; a fresh one is created when omitted.
    """

    def __init__(
        self,
        *,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._timeout: float | None = timeout
        self._session: requests.Session = session if session is not None else requests.Session()

    @staticmethod
    def _merge_headers(headers: Headers) -> dict[str, str]:
        """Collapse duplicate names into one comma-joined value.

        SigV4 canonicalises repeated headers the same way, so the
        signature still matches what goes on the wire.
        """
        merged: dict[str, str] = {}
        canonical: dict[str, str] = {}
        for name, value in headers:
            key = canonical.setdefault(name.lower(), name)
            merged[key] = f"{merged[key]},{value}" if key in merged else value
        return merged

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def dispatch(self, request: SignedRequest) -> BufferedResponse:
        """Send *request* and buffer the full response.

        Raises
        ------
        DispatchError
            For connection, TLS, timeout or URL errors.
        """
        logger.debug("Dispatching %s %s", request.method, request.url)
        try:
            response = self._session.request(
                request.method,
                request.url,
                headers=self._merge_headers(request.headers),
                data=request.body,
                auth=_SignatureOnly(),
                timeout=self._timeout,
                allow_redirects=False,
            )
        except (
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
            requests.exceptions.InvalidURL,
        ) as exc:
            raise DispatchError(
                f"Invalid URI {request.url}: {exc}",
                hint="URI must include a scheme, e.g. https://example.com/path",
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise DispatchError(f"Request to {request.url} failed: {exc}") from exc

        return BufferedResponse(
            status=response.status_code,
            reason=_reason(response),
            headers=_response_headers(response),
            body=response.content,
        )


def _reason(response: requests.Response) -> str:
    """Prefer the standard phrase, as HTTP/2 carries no reason text."""
    try:
        return HTTPStatus(response.status_code).phrase
    except ValueError:
        return response.reason or ""


def _response_headers(response: requests.Response) -> Headers:
    """Return received headers, lowercased, with duplicates kept.

    ``response.headers`` merges repeated names, so the underlying
    urllib3 header container is read when it is available.  urllib3
    groups repeated names at the position of their first occurrence.
    """
    raw_headers: Any = getattr(response.raw, "headers", None)
    source: Any = raw_headers if raw_headers is not None else response.headers
    return tuple((str(name).lower(), str(value)) for name, value in source.items())
