"""Signing key generation and JWK conversion."""

import uuid_utils
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from apnjwt.crypto.encoding import b64_encode, b64url_encode
from apnjwt.crypto.signer import ES256, RS256, PrivateKey
from apnjwt.crypto.types import JWKObject, SigningKeyData

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537


def _to_signing_key_data(private_key: PrivateKey, algorithm: str) -> SigningKeyData:
    private_der = private_key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = (
        private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )
    return SigningKeyData(
        kid=str(uuid_utils.uuid7()),
        algorithm=algorithm,
        private_key=b64_encode(private_der),
        public_key_pem=public_pem,
    )


def generate_ec_keypair() -> SigningKeyData:
    """Generate a P-256 keypair for ES256 signing."""
    return _to_signing_key_data(ec.generate_private_key(ec.SECP256R1()), ES256)


def generate_rsa_keypair() -> SigningKeyData:
    """Generate a new RSA-2048 keypair for RS256 signing."""
    private_key = rsa.generate_private_key(
        public_exponent=RSA_PUBLIC_EXPONENT,
        key_size=RSA_KEY_SIZE,
    )
    return _to_signing_key_data(private_key, RS256)


def _int_to_base64url(value: int) -> str:
    """Encode an integer as base64url without padding."""
    byte_length = (value.bit_length() + 7) // 8
    return b64url_encode(value.to_bytes(byte_length, byteorder="big"))


def public_key_to_jwk(public_key_pem: str, kid: str) -> JWKObject:
    """Convert a PEM RSA public key to JWK format."""
    loaded = serialization.load_pem_public_key(public_key_pem.encode())
    if not isinstance(loaded, RSAPublicKey):
        raise ValueError("Only RSA public keys can be published as JWKs")
    numbers = loaded.public_numbers()
    return JWKObject(
        kid=kid,
        n=_int_to_base64url(numbers.n),
        e=_int_to_base64url(numbers.e),
    )
