"""Infrastructure layer: external system integration.

This layer wraps all interaction with botocore (credentials, SigV4
signing) and requests (HTTP dispatch).  Every raw third-party exception
must be caught here and re-raised as a
:class:`~sigv4.exceptions.Sigv4Error` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from sigv4.infra.botocore_signer import BotocoreCredentialsProvider, BotocoreSigner
from sigv4.infra.requests_transport import RequestsTransport

__all__: list[str] = [
    "BotocoreCredentialsProvider",
    "BotocoreSigner",
    "RequestsTransport",
]
