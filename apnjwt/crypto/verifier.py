"""RS256 verification against RSA keys published as JWKs."""

import logging

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from apnjwt.crypto.codec import CHARSET, TOKEN_DELIMITER, split_token
from apnjwt.crypto.encoding import b64_decode as default_b64_decode
from apnjwt.crypto.signer import RS256
from apnjwt.crypto.types import B64Decode, B64Encode, JWKObject, JWKSet, JWTAuthHeader

logger = logging.getLogger(__name__)

VERIFY_ALGORITHMS = (RS256, "SHA256withRSA")


def _unsigned_int(data: bytes) -> int:
    return int.from_bytes(data, byteorder="big", signed=False)


def jwk_to_public_key(
    jwk: JWKObject,
    b64_decode: B64Decode = default_b64_decode,
) -> rsa.RSAPublicKey | None:
    """Build an RSA public key from the JWK modulus and exponent.

    Returns None when the JWK cannot be turned into a usable key.
    """
    if jwk.kty != "RSA":
        logger.debug("JWK %s has unsupported key type %s", jwk.kid, jwk.kty)
        return None
    try:
        modulus = _unsigned_int(b64_decode(jwk.n))
        exponent = _unsigned_int(b64_decode(jwk.e))
        return rsa.RSAPublicNumbers(e=exponent, n=modulus).public_key()
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        logger.debug("JWK %s is not a valid RSA public key: %s", jwk.kid, exc)
        return None


def jwk_to_public_key_string(
    jwk: JWKObject,
    b64_encode: B64Encode,
    b64_decode: B64Decode = default_b64_decode,
) -> str | None:
    """Return the JWK as base64 X.509 SubjectPublicKeyInfo DER, or None."""
    key = jwk_to_public_key(jwk, b64_decode)
    if key is None:
        return None
    der = key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return b64_encode(der)


def verify(
    token: str,
    jwk: JWKObject,
    b64_decode: B64Decode = default_b64_decode,
    algorithm: str = RS256,
) -> bool:
    """Check the token signature with the RSA key described by ``jwk``.

    The signed bytes are the first two segments exactly as they appear in the
    token. Every failure, including malformed input, yields False.
    """
    if algorithm not in VERIFY_ALGORITHMS:
        logger.debug("Refusing to verify with algorithm %s", algorithm)
        return False

    public_key = jwk_to_public_key(jwk, b64_decode)
    if public_key is None:
        return False

    parts = split_token(token)
    if len(parts) != 3:
        return False

    header_segment, payload_segment, signature_segment = parts
    signing_input = f"{header_segment}{TOKEN_DELIMITER}{payload_segment}"
    try:
        signature = b64_decode(signature_segment)
        public_key.verify(
            signature,
            signing_input.encode(CHARSET),
            padding.PKCS1v15(),
            hashes.SHA256(),
        )
    except InvalidSignature:
        logger.debug("Signature mismatch for JWK %s", jwk.kid)
        return False
    except (ValueError, TypeError) as exc:
        logger.debug("Unreadable token signature: %s", exc)
        return False
    return True


def verify_with_jwks(
    token: str,
    jwks: JWKSet,
    b64_decode: B64Decode = default_b64_decode,
) -> bool:
    """Verify using the key whose ``kid`` matches the token header."""
    parts = split_token(token)
    if len(parts) != 3:
        return False
    try:
        header = JWTAuthHeader.model_validate_json(b64_decode(parts[0]))
    except ValueError as exc:
        logger.debug("Unreadable token header: %s", exc)
        return False

    jwk = jwks.find(header.kid)
    if jwk is None:
        logger.debug("No published key for kid %s", header.kid)
        return False
    return verify(token, jwk, b64_decode)
