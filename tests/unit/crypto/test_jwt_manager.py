"""Tests for provider token issuance."""

import jwt
import pytest

from apnjwt.core.settings import ProviderSettings
from apnjwt.crypto.encoding import default_codecs
from apnjwt.crypto.jwt_manager import JWTManager, epoch_seconds, issue_token, provider_token
from apnjwt.crypto.keys import public_key_to_jwk
from apnjwt.crypto.types import JWTAuthHeader, JWTAuthPayload, SigningKeyData
from apnjwt.crypto.verifier import verify

ISSUER = "TEAMID1234"
NOW = 1_700_000_000


def _fixed_clock() -> int:
    return NOW


@pytest.fixture
def jwt_mgr(ec_keypair: SigningKeyData) -> JWTManager:
    """A manager signing ES256 tokens at a fixed time."""
    return JWTManager(
        secret=ec_keypair.private_key,
        kid=ec_keypair.kid,
        issuer=ISSUER,
        clock=_fixed_clock,
    )


class TestProviderToken:
    """Tests for the default provider token."""

    def test_header_and_payload(self, ec_keypair: SigningKeyData) -> None:
        token = provider_token(ISSUER, "KEYID", ec_keypair.private_key, clock=_fixed_clock)
        assert jwt.get_unverified_header(token) == {"alg": "ES256", "kid": "KEYID"}
        claims = jwt.decode(token, options={"verify_signature": False})
        assert claims == {"iss": ISSUER, "iat": NOW}

    def test_verifies_with_pyjwt(self, ec_keypair: SigningKeyData) -> None:
        token = provider_token(ISSUER, "KEYID", ec_keypair.private_key)
        claims = jwt.decode(token, ec_keypair.public_key_pem, algorithms=["ES256"])
        assert claims["iss"] == ISSUER

    def test_default_clock_is_current_time(self, ec_keypair: SigningKeyData) -> None:
        before = epoch_seconds()
        token = provider_token(ISSUER, "KEYID", ec_keypair.private_key)
        claims = jwt.decode(token, options={"verify_signature": False})
        assert before <= claims["iat"] <= epoch_seconds()


class TestJWTManager:
    """Tests for the manager facade."""

    def test_round_trip_with_extension_claims(self, jwt_mgr: JWTManager) -> None:
        exp = NOW + 3600
        token = jwt_mgr.create_token(sub="com.example.app", name="test", exp=exp)
        decoded = jwt_mgr.decode(token)
        assert decoded is not None
        assert decoded.header.alg == "ES256"
        assert decoded.payload.model_dump() == {
            "iss": ISSUER,
            "iat": NOW,
            "sub": "com.example.app",
            "name": "test",
            "exp": exp,
        }
        assert decoded.signature is not None
        assert len(decoded.signature) == 64

    def test_custom_header_and_payload(self, jwt_mgr: JWTManager) -> None:
        header = JWTAuthHeader(kid="OTHER", typ="JWT")
        payload = JWTAuthPayload(iss="JANE", iat=1516239022, admin=True)
        decoded = jwt_mgr.decode(jwt_mgr.create_token_for(header, payload))
        assert decoded is not None
        assert decoded.header.model_dump() == header.model_dump()
        assert decoded.payload.model_dump() == payload.model_dump()

    def test_rs256_token_verifies_with_jwk(self, rsa_keypair: SigningKeyData) -> None:
        mgr = JWTManager(
            secret=rsa_keypair.private_key,
            kid=rsa_keypair.kid,
            issuer=ISSUER,
            algorithm="RS256",
        )
        token = mgr.create_token()
        jwk = public_key_to_jwk(rsa_keypair.public_key_pem, rsa_keypair.kid)
        assert verify(token, jwk) is True

    def test_standard_signature_segment(self, rsa_keypair: SigningKeyData) -> None:
        header = JWTAuthHeader(alg="RS256", kid=rsa_keypair.kid)
        payload = JWTAuthPayload(iss=ISSUER, iat=NOW)
        token = issue_token(
            header,
            payload,
            rsa_keypair.private_key,
            codecs=default_codecs(standard_signature=True),
        )
        assert token.endswith("=")
        jwk = public_key_to_jwk(rsa_keypair.public_key_pem, rsa_keypair.kid)
        assert verify(token, jwk) is True

    def test_from_settings(
        self, monkeypatch: pytest.MonkeyPatch, ec_keypair: SigningKeyData
    ) -> None:
        monkeypatch.setenv("APNJWT_TEAM_ID", ISSUER)
        monkeypatch.setenv("APNJWT_KEY_ID", "ENVKEY")
        monkeypatch.setenv("APNJWT_SECRET", ec_keypair.private_key)
        mgr = JWTManager.from_settings(ProviderSettings())
        token = mgr.create_token()
        assert jwt.get_unverified_header(token)["kid"] == "ENVKEY"
        claims = jwt.decode(token, ec_keypair.public_key_pem, algorithms=["ES256"])
        assert claims["iss"] == ISSUER
