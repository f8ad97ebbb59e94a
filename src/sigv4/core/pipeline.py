"""Core request pipeline: assemble, sign, dispatch.

The pipeline depends on a :class:`~sigv4.core.protocols.Signer`, a
:class:`~sigv4.core.protocols.Transport` and a
:class:`~sigv4.core.protocols.CredentialsProvider` injected at
construction time, keeping the core free of botocore and requests.

Stages run strictly in order and never overlap::

    ASSEMBLING -> SIGNING -> DISPATCHING   (-> RENDERING, in the CLI)

Guarantees
----------
* Only :class:`~sigv4.exceptions.Sigv4Error` subclasses escape.
* A failure in any stage stops the pipeline; nothing is retried.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import BinaryIO

from sigv4.core.draft import build_draft
from sigv4.core.models import BufferedResponse, RequestDraft, RequestOptions, SignedRequest
from sigv4.core.protocols import CredentialsProvider, Signer, Transport
from sigv4.exceptions import DispatchError, Sigv4Error, SigningError

logger = logging.getLogger(__name__)


class PipelineStage(Enum):
    """Named stages of a single invocation."""

    ASSEMBLING = "assembling"
    SIGNING = "signing"
    DISPATCHING = "dispatching"
    RENDERING = "rendering"


class RequestPipeline:
    """Runs one signed request from CLI options to a buffered response.

    Parameters
    ----------
    signer:
        Any object satisfying the :class:`Signer` protocol.
    transport:
        Any object satisfying the :class:`Transport` protocol.
    credentials:
        Credential source handed to *signer*.
    """

    def __init__(
        self,
        signer: Signer,
        transport: Transport,
        credentials: CredentialsProvider,
    ) -> None:
        self._signer: Signer = signer
        self._transport: Transport = transport
        self._credentials: CredentialsProvider = credentials

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def execute(
        self,
        options: RequestOptions,
        *,
        stdin: BinaryIO | None,
    ) -> BufferedResponse:
        """Assemble, sign and dispatch the request described by *options*.

        Raises
        ------
        BodyReadError
            When the request body cannot be read.
        CredentialsError
            When signing credentials cannot be resolved.
        DispatchError
            For any other signing or transport failure.
        """
        self._enter(PipelineStage.ASSEMBLING)
        draft = build_draft(options, stdin)

        self._enter(PipelineStage.SIGNING)
        signed = self._sign(draft)

        self._enter(PipelineStage.DISPATCHING)
        response = self._dispatch(signed)
        logger.debug("Received %s (%d body bytes)", response.status_line, len(response.body))
        return response

    # ------------------------------------------------------------------
    # Collaborator delegation (safe boundary)
    # ------------------------------------------------------------------

    @staticmethod
    def _enter(stage: PipelineStage) -> None:
        logger.debug("Pipeline stage: %s", stage.value)

    def _sign(self, draft: RequestDraft) -> SignedRequest:
        """Call the signer and ensure only our exceptions escape."""
        try:
            return self._signer.sign(draft, self._credentials)
        except Sigv4Error:
            # Already one of ours, let it propagate unchanged.
            raise
        except Exception as exc:
            raise SigningError(f"Unexpected signing error: {exc}") from exc

    def _dispatch(self, request: SignedRequest) -> BufferedResponse:
        """Call the transport and ensure only our exceptions escape."""
        try:
            return self._transport.dispatch(request)
        except Sigv4Error:
            raise
        except Exception as exc:
            raise DispatchError(f"Unexpected dispatch error: {exc}") from exc
