"""botocore backed implementations of the signing protocols.

This module is the **only** place in the codebase that imports
``botocore``.  All botocore exceptions are caught here and re-raised as
typed :class:`~sigv4.exceptions.Sigv4Error` subclasses, so nothing raw
escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
from typing import Any

import botocore.session
from botocore.auth import S3SigV4Auth, SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.exceptions import BotoCoreError

from sigv4.core.models import RequestDraft, SignedRequest
from sigv4.core.protocols import CredentialsProvider, SigningCredentials
from sigv4.exceptions import CredentialsError, SigningError, credentials_hint

logger = logging.getLogger(__name__)

_S3_SERVICE = "s3"


class BotocoreCredentialsProvider:
    """Concrete :class:`CredentialsProvider` using botocore's default chain.

    Environment variables, shared config/credential files, SSO, container
    and instance metadata are all consulted, in botocore's order.

    Parameters
    ----------
    profile:
        Named profile to load instead of the default one.
    """

    def __init__(self, profile: str | None = None) -> None:
        self._profile: str | None = profile

    def resolve(self) -> SigningCredentials:
        """Return frozen credentials from the botocore chain.

        Raises
        ------
        CredentialsError
            When no credentials are found or the profile cannot be loaded.
        """
        try:
            session = botocore.session.Session(profile=self._profile)
            credentials = session.get_credentials()
            frozen = credentials.get_frozen_credentials() if credentials is not None else None
        except BotoCoreError as exc:
            raise CredentialsError(str(exc), hint=credentials_hint(self._profile)) from exc

        if frozen is None:
            raise CredentialsError(
                "Unable to locate AWS credentials.",
                hint=credentials_hint(self._profile),
            )
        logger.debug("Resolved credentials (profile=%s)", self._profile or "default")
        return frozen


class BotocoreSigner:
    """Concrete :class:`Signer` backed by ``botocore.auth.SigV4Auth``.

    Requests for the ``s3`` service use ``S3SigV4Auth``, which also
    signs the payload hash header S3 insists on.

    This class satisfies the :class:`~sigv4.core.protocols.Signer`
    protocol structurally, without explicit inheritance required.
    """

    @staticmethod
    def _build_request(draft: RequestDraft) -> AWSRequest:
        """Translate a draft into a botocore request.

        Headers are assigned one at a time: botocore's header container
        appends on assignment, so duplicate names survive.
        """
        request = AWSRequest(method=draft.method, url=draft.uri, data=draft.body)
        for name, value in draft.headers:
            request.headers[name] = value
        return request

    @staticmethod
    def _auth_class(service: str) -> type[SigV4Auth]:
        """S3 requires the ``X-Amz-Content-SHA256`` payload hash header."""
        if service == _S3_SERVICE:
            return S3SigV4Auth
        return SigV4Auth

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def sign(
        self,
        draft: RequestDraft,
        credentials: CredentialsProvider,
    ) -> SignedRequest:
        """Sign *draft* for its service and region.

        Raises
        ------
        CredentialsError
            Propagated from *credentials*.
        SigningError
            When botocore rejects the request.
        """
        resolved: Any = credentials.resolve()
        request = self._build_request(draft)

        try:
            auth = self._auth_class(draft.service)(resolved, draft.service, draft.region)
            auth.add_auth(request)
        except BotoCoreError as exc:
            raise SigningError(f"Failed to sign request: {exc}") from exc
        except ValueError as exc:
            raise SigningError(
                f"Failed to sign request for {draft.uri}: {exc}",
                hint="Check that the URI is well formed, e.g. https://example.com/path",
            ) from exc

        logger.debug("Signed %s %s for %s/%s", draft.method, draft.uri, draft.region, draft.service)
        return SignedRequest(
            method=draft.method,
            url=draft.uri,
            headers=tuple((name, str(value)) for name, value in request.headers.items()),
            body=draft.body,
        )
