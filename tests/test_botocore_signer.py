"""Tests for the botocore signing adapters (infra/botocore_signer.py).

Signing runs for real against static credentials; credential discovery
is mocked at the ``botocore.session.Session`` boundary so the caller's
AWS configuration is never read.
"""

from __future__ import annotations

import hashlib
from unittest.mock import MagicMock, patch

import pytest
from botocore.credentials import ReadOnlyCredentials
from botocore.exceptions import NoCredentialsError, ProfileNotFound

from sigv4.core.models import Endpoint, RequestDraft
from sigv4.exceptions import CredentialsError, SigningError
from sigv4.infra.botocore_signer import BotocoreCredentialsProvider, BotocoreSigner

_STATIC = ReadOnlyCredentials("AKIDEXAMPLE", "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY", None)
_SESSION = "botocore.session.Session"


def _provider(credentials: object = _STATIC) -> MagicMock:
    provider = MagicMock()
    if isinstance(credentials, Exception):
        provider.resolve.side_effect = credentials
    else:
        provider.resolve.return_value = credentials
    return provider


def _draft(**overrides: object) -> RequestDraft:
    defaults: dict[str, object] = {
        "endpoint": Endpoint(region="us-west-2", uri="https://abc123.execute-api.us-west-2.amazonaws.com/prod/items?limit=5"),
        "service": "execute-api",
        "method": "GET",
    }
    defaults.update(overrides)
    return RequestDraft(**defaults)  # type: ignore[arg-type]


def _header(headers: tuple[tuple[str, str], ...], name: str) -> list[str]:
    return [value for key, value in headers if key.lower() == name.lower()]


# ---------------------------------------------------------------------------
# BotocoreSigner
# ---------------------------------------------------------------------------

class TestBotocoreSigner:
    def test_adds_authorization(self) -> None:
        signed = BotocoreSigner().sign(_draft(), _provider())
        (authorization,) = _header(signed.headers, "Authorization")
        assert authorization.startswith("AWS4-HMAC-SHA256 Credential=AKIDEXAMPLE/")
        assert "/us-west-2/execute-api/aws4_request" in authorization
        assert "Signature=" in authorization

    def test_adds_date_header(self) -> None:
        signed = BotocoreSigner().sign(_draft(), _provider())
        assert len(_header(signed.headers, "X-Amz-Date")) == 1

    def test_region_is_independent_of_uri(self) -> None:
        draft = _draft(endpoint=Endpoint(region="eu-north-1", uri="http://localhost:8080/"))
        signed = BotocoreSigner().sign(draft, _provider())
        (authorization,) = _header(signed.headers, "Authorization")
        assert "/eu-north-1/execute-api/aws4_request" in authorization
        assert signed.url == "http://localhost:8080/"

    def test_service_name_is_used(self) -> None:
        signed = BotocoreSigner().sign(_draft(service="es"), _provider())
        (authorization,) = _header(signed.headers, "Authorization")
        assert "/us-west-2/es/aws4_request" in authorization

    def test_custom_headers_are_kept_and_signed(self) -> None:
        draft = _draft(headers=(("X-Trace", "1"), ("Accept", "application/json")))
        signed = BotocoreSigner().sign(draft, _provider())
        assert _header(signed.headers, "X-Trace") == ["1"]
        (authorization,) = _header(signed.headers, "Authorization")
        assert "x-trace" in authorization
        assert "accept" in authorization

    def test_duplicate_headers_survive(self) -> None:
        draft = _draft(headers=(("x-dup", "a"), ("x-dup", "b")))
        signed = BotocoreSigner().sign(draft, _provider())
        assert _header(signed.headers, "x-dup") == ["a", "b"]

    def test_session_token_is_sent(self) -> None:
        temporary = ReadOnlyCredentials("ASIAEXAMPLE", "secret", "session-token")
        signed = BotocoreSigner().sign(_draft(), _provider(temporary))
        assert _header(signed.headers, "X-Amz-Security-Token") == ["session-token"]

    def test_method_and_body_pass_through(self) -> None:
        signed = BotocoreSigner().sign(_draft(method="POST", body=b'{"a":1}'), _provider())
        assert signed.method == "POST"
        assert signed.body == b'{"a":1}'

    def test_absent_body_stays_absent(self) -> None:
        assert BotocoreSigner().sign(_draft(), _provider()).body is None

    def test_s3_signs_payload_hash(self) -> None:
        draft = _draft(
            endpoint=Endpoint(region="us-east-1", uri="https://bucket.s3.amazonaws.com/key.txt"),
            service="s3",
            method="PUT",
            body=b"hello",
        )
        signed = BotocoreSigner().sign(draft, _provider())
        assert _header(signed.headers, "X-Amz-Content-SHA256") == [hashlib.sha256(b"hello").hexdigest()]
        (authorization,) = _header(signed.headers, "Authorization")
        assert "x-amz-content-sha256" in authorization
        assert "/us-east-1/s3/aws4_request" in authorization

    def test_s3_without_body_signs_empty_hash(self) -> None:
        draft = _draft(endpoint=Endpoint(region="us-east-1", uri="https://bucket.s3.amazonaws.com/"), service="s3")
        signed = BotocoreSigner().sign(draft, _provider())
        assert _header(signed.headers, "X-Amz-Content-SHA256") == [hashlib.sha256(b"").hexdigest()]

    def test_other_services_skip_payload_hash_header(self) -> None:
        signed = BotocoreSigner().sign(_draft(body=b"hello"), _provider())
        assert _header(signed.headers, "X-Amz-Content-SHA256") == []

    def test_credentials_error_propagates(self) -> None:
        with pytest.raises(CredentialsError, match="none"):
            BotocoreSigner().sign(_draft(), _provider(CredentialsError("none")))

    def test_botocore_failure_is_signing_error(self) -> None:
        with patch("sigv4.infra.botocore_signer.SigV4Auth") as mock_auth:
            mock_auth.return_value.add_auth.side_effect = NoCredentialsError()
            with pytest.raises(SigningError):
                BotocoreSigner().sign(_draft(), _provider())


# ---------------------------------------------------------------------------
# BotocoreCredentialsProvider
# ---------------------------------------------------------------------------

class TestBotocoreCredentialsProvider:
    def test_returns_frozen_credentials(self) -> None:
        with patch(_SESSION) as mock_session_cls:
            mock_session_cls.return_value.get_credentials.return_value.get_frozen_credentials.return_value = _STATIC
            assert BotocoreCredentialsProvider().resolve() is _STATIC

    def test_profile_is_forwarded(self) -> None:
        with patch(_SESSION) as mock_session_cls:
            BotocoreCredentialsProvider(profile="dev").resolve()
        mock_session_cls.assert_called_once_with(profile="dev")

    def test_no_credentials(self) -> None:
        with patch(_SESSION) as mock_session_cls:
            mock_session_cls.return_value.get_credentials.return_value = None
            with pytest.raises(CredentialsError, match="Unable to locate") as exc_info:
                BotocoreCredentialsProvider().resolve()
        assert exc_info.value.hint is not None

    def test_unknown_profile(self) -> None:
        with patch(_SESSION) as mock_session_cls:
            mock_session_cls.return_value.get_credentials.side_effect = ProfileNotFound(profile="nope")
            with pytest.raises(CredentialsError, match="nope") as exc_info:
                BotocoreCredentialsProvider(profile="nope").resolve()
        assert "'nope'" in (exc_info.value.hint or "")
        assert isinstance(exc_info.value.__cause__, ProfileNotFound)
