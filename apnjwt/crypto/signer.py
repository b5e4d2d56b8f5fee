"""ES256 and RS256 signatures over a token signing input."""

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature

from apnjwt.crypto.codec import CHARSET
from apnjwt.crypto.encoding import b64_decode as default_b64_decode
from apnjwt.crypto.errors import KeyParsingError, UnsupportedAlgorithmError
from apnjwt.crypto.types import B64Decode

ES256 = "ES256"
RS256 = "RS256"
SUPPORTED_ALGORITHMS = (ES256, RS256)

# P-256 coordinates are 32 bytes; JOSE signatures are r || s at that width.
ES256_COORDINATE_SIZE = 32

PrivateKey = ec.EllipticCurvePrivateKey | rsa.RSAPrivateKey


def load_private_key(
    algorithm: str,
    private_key_material: str,
    b64_decode: B64Decode = default_b64_decode,
) -> PrivateKey:
    """Parse a bare base64 PKCS#8 secret into the key type ``algorithm`` needs.

    Line breaks and other whitespace in the secret are ignored, so keys copied
    over several lines load as is.
    """
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise UnsupportedAlgorithmError(algorithm)
    try:
        der = b64_decode("".join(private_key_material.split()))
        key = serialization.load_der_private_key(der, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyParsingError(f"Invalid PKCS#8 private key for {algorithm}") from exc

    if algorithm == ES256:
        if not isinstance(key, ec.EllipticCurvePrivateKey):
            raise KeyParsingError("ES256 requires an EC private key")
        if not isinstance(key.curve, ec.SECP256R1):
            raise KeyParsingError(f"ES256 requires a P-256 key, got {key.curve.name}")
        return key

    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyParsingError("RS256 requires an RSA private key")
    return key


def _es256(key: ec.EllipticCurvePrivateKey, data: bytes) -> bytes:
    der_signature = key.sign(data, ec.ECDSA(hashes.SHA256()))
    r, s = decode_dss_signature(der_signature)
    return r.to_bytes(ES256_COORDINATE_SIZE, "big") + s.to_bytes(
        ES256_COORDINATE_SIZE, "big"
    )


def _rs256(key: rsa.RSAPrivateKey, data: bytes) -> bytes:
    return key.sign(data, padding.PKCS1v15(), hashes.SHA256())


def sign(
    algorithm: str,
    private_key_material: str,
    signing_input: str,
    b64_decode: B64Decode = default_b64_decode,
) -> bytes:
    """Sign the signing input with the given algorithm and private key.

    ES256 signatures use the fixed-width ``r || s`` form used by JWS rather
    than DER, and differ between calls.
    """
    key = load_private_key(algorithm, private_key_material, b64_decode)
    data = signing_input.encode(CHARSET)
    if isinstance(key, ec.EllipticCurvePrivateKey):
        return _es256(key, data)
    return _rs256(key, data)
