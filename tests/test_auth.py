from unittest.mock import MagicMock, patch

import pytest
import requests

from app.core.exceptions import TransientInfraError, UnauthorizedError
from app.services.auth import FirebaseTokenVerifier

CERTS_URL = "https://certs.example.com"


@pytest.fixture
def http():
    session = MagicMock()
    session.get.return_value.json.return_value = {"kid-1": "-----BEGIN CERTIFICATE-----"}
    return session


@pytest.fixture
def verifier(http):
    return FirebaseTokenVerifier("pixie-test", CERTS_URL, session=http)


def test_missing_token(verifier):
    with pytest.raises(UnauthorizedError):
        verifier.verify_token("")


def test_malformed_token(verifier):
    with pytest.raises(UnauthorizedError):
        verifier.verify_token("not-a-jwt")


def test_unknown_key_id(verifier):
    with patch("app.services.auth.jwt.get_unverified_header", return_value={"kid": "kid-2"}):
        with pytest.raises(UnauthorizedError):
            verifier.verify_token("header.payload.signature")


def test_valid_token_returns_subject(verifier, http):
    claims = {"sub": "firebase-uid-1", "user_id": "firebase-uid-1"}
    with patch("app.services.auth.jwt.get_unverified_header", return_value={"kid": "kid-1"}), \
         patch("app.services.auth.jwt.decode", return_value=claims) as decode:
        result = verifier.verify_token("header.payload.signature")

    assert result.subject_id == "firebase-uid-1"
    assert decode.call_args.kwargs["audience"] == "pixie-test"
    assert decode.call_args.kwargs["issuer"] == "https://securetoken.google.com/pixie-test"


def test_certificates_are_fetched_once(verifier, http):
    with patch("app.services.auth.jwt.get_unverified_header", return_value={"kid": "kid-1"}), \
         patch("app.services.auth.jwt.decode", return_value={"sub": "uid"}):
        verifier.verify_token("a.b.c")
        verifier.verify_token("a.b.c")

    http.get.assert_called_once_with(CERTS_URL, timeout=10)


def test_unreachable_certificate_endpoint_is_transient(verifier, http):
    http.get.side_effect = requests.ConnectionError("offline")
    with patch("app.services.auth.jwt.get_unverified_header", return_value={"kid": "kid-1"}):
        with pytest.raises(TransientInfraError):
            verifier.verify_token("a.b.c")
