"""Custom exception hierarchy for sigv4.

All exceptions that cross layer boundaries must inherit from
:class:`Sigv4Error`.  Raw third-party exceptions (botocore, requests,
``OSError``) must NEVER propagate beyond the layer that called them;
they must be caught and re-raised as a typed subclass defined here.

Hierarchy
---------
Sigv4Error
├── BodyReadError
├── CredentialsError
└── DispatchError
    └── SigningError
"""

from __future__ import annotations


class Sigv4Error(Exception):
    """Base exception for all sigv4 errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean
    single-line message without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Request assembly ------------------------------------------------------

class BodyReadError(Sigv4Error):
    """Raised when the request body cannot be read from a file or stdin."""


# --- Signing ---------------------------------------------------------------

class CredentialsError(Sigv4Error):
    """Raised when signing credentials cannot be resolved."""


# --- Dispatch --------------------------------------------------------------

class DispatchError(Sigv4Error):
    """Raised when the request cannot be signed or delivered."""


class SigningError(DispatchError):
    """Raised when signing fails for a reason other than credentials."""


def credentials_hint(profile: str | None) -> str:
    """Build the guidance shown when no credentials could be found."""
    if profile:
        return f"Check that profile '{profile}' exists in your AWS config files."
    return "Set AWS_PROFILE, export AWS_ACCESS_KEY_ID/AWS_SECRET_ACCESS_KEY, or pass --profile."
