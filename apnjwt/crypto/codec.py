"""Compact JWT serialization: signing input, assembly and unverified decode."""

from typing import Any

from apnjwt.crypto.types import B64Decode, B64Encode, JsonDecoder, JsonEncode, JWTToken

TOKEN_DELIMITER = "."
CHARSET = "utf-8"


def build_signing_input(
    header: Any,
    payload: Any,
    json_encode: JsonEncode,
    b64url_encode: B64Encode,
) -> str:
    """Return ``b64url(json(header)) + "." + b64url(json(payload))``."""
    header_segment = b64url_encode(json_encode(header).encode(CHARSET))
    payload_segment = b64url_encode(json_encode(payload).encode(CHARSET))
    return f"{header_segment}{TOKEN_DELIMITER}{payload_segment}"


def assemble_token(signing_input: str, signature: bytes, b64_encode: B64Encode) -> str:
    """Append the encoded signature segment to the signing input."""
    return f"{signing_input}{TOKEN_DELIMITER}{b64_encode(signature)}"


def split_token(token: str) -> list[str]:
    return token.split(TOKEN_DELIMITER)


def decode(
    token: str,
    json_decoder: JsonDecoder[Any, Any],
    b64_decode: B64Decode,
) -> JWTToken[Any, Any] | None:
    """Decode a token into header, payload and raw signature bytes.

    Returns None when the string has fewer than two segments. The signature
    is included only for three-segment tokens and is never verified here.
    """
    parts = split_token(token)
    if len(parts) < 2:
        return None

    header = json_decoder.header_from(b64_decode(parts[0]).decode(CHARSET))
    payload = json_decoder.payload_from(b64_decode(parts[1]).decode(CHARSET))

    if len(parts) == 3:
        return JWTToken(header=header, payload=payload, signature=b64_decode(parts[2]))
    return JWTToken(header=header, payload=payload)
