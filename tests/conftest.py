"""Shared test fixtures for apn-jwt."""

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from apnjwt.crypto.encoding import b64_decode
from apnjwt.crypto.keys import (
    generate_ec_keypair,
    generate_rsa_keypair,
    public_key_to_jwk,
)
from apnjwt.crypto.types import JWKObject, SigningKeyData

SETTINGS_ENV = (
    "APNJWT_TEAM_ID",
    "APNJWT_KEY_ID",
    "APNJWT_SECRET",
    "APNJWT_ALGORITHM",
    "APNJWT_SIGNATURE_ENCODING",
)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host environment variables out of settings under test."""
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def ec_keypair() -> SigningKeyData:
    """A P-256 keypair shared across the session."""
    return generate_ec_keypair()


@pytest.fixture(scope="session")
def rsa_keypair() -> SigningKeyData:
    """An RSA-2048 keypair shared across the session."""
    return generate_rsa_keypair()


@pytest.fixture(scope="session")
def rsa_private_key(rsa_keypair: SigningKeyData) -> rsa.RSAPrivateKey:
    """The RSA private key as a cryptography object."""
    key = serialization.load_der_private_key(
        b64_decode(rsa_keypair.private_key), password=None
    )
    assert isinstance(key, rsa.RSAPrivateKey)
    return key


@pytest.fixture(scope="session")
def rsa_jwk(rsa_keypair: SigningKeyData) -> JWKObject:
    """The RSA public key published as a JWK."""
    return public_key_to_jwk(rsa_keypair.public_key_pem, rsa_keypair.kid)
