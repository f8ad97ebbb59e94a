"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols, never on concrete
implementations, so the pipeline can be exercised without network or
credential access.
"""

from __future__ import annotations

from typing import Protocol

from sigv4.core.models import BufferedResponse, RequestDraft, SignedRequest


class SigningCredentials(Protocol):
    """Resolved key material, e.g. botocore's ``ReadOnlyCredentials``."""

    @property
    def access_key(self) -> str: ...  # pragma: no cover

    @property
    def secret_key(self) -> str: ...  # pragma: no cover

    @property
    def token(self) -> str | None: ...  # pragma: no cover


class CredentialsProvider(Protocol):
    """Contract for credential discovery backends."""

    def resolve(self) -> SigningCredentials:
        """Return credentials usable for signing.

        Raises
        ------
        CredentialsError
            When no credentials can be found or loaded.
        """
        ...  # pragma: no cover


class Signer(Protocol):
    """Contract for request signing backends.

    Implementations must map all backend-specific exceptions to
    :class:`~sigv4.exceptions.Sigv4Error` subclasses.
    """

    def sign(
        self,
        draft: RequestDraft,
        credentials: CredentialsProvider,
    ) -> SignedRequest:
        """Sign *draft* with credentials obtained from *credentials*.

        Raises
        ------
        CredentialsError
            When *credentials* cannot resolve anything to sign with.
        SigningError
            For any other signing failure.
        """
        ...  # pragma: no cover


class Transport(Protocol):
    """Contract for HTTP dispatch backends."""

    def dispatch(self, request: SignedRequest) -> BufferedResponse:
        """Send *request* and buffer the complete response.

        Any HTTP status, including 4xx and 5xx, is a successful dispatch.

        Raises
        ------
        DispatchError
            When the exchange cannot be completed.
        """
        ...  # pragma: no cover
