"""Default JSON and base64 capabilities for the token codec."""

import base64
import binascii
from typing import TypeVar

from pydantic import BaseModel

from apnjwt.crypto.types import Codecs, JsonDecoder

H = TypeVar("H", bound=BaseModel)
P = TypeVar("P", bound=BaseModel)

_TO_STANDARD = str.maketrans("-_", "+/")


def b64url_encode(data: bytes) -> str:
    """Encode bytes as base64url without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64_encode(data: bytes) -> str:
    """Encode bytes as standard, padded base64."""
    return base64.b64encode(data).decode("ascii")


def b64_decode(data: str) -> bytes:
    """Decode standard or URL-safe base64, with or without trailing padding.

    Any character outside the two alphabets, including whitespace, is an error.
    """
    standard = data.translate(_TO_STANDARD)
    padded = standard + "=" * (-len(standard) % 4)
    return binascii.a2b_base64(padded.encode("ascii"), strict_mode=True)


def model_to_json(model: BaseModel) -> str:
    """Serialize a model to compact JSON in field declaration order."""
    return model.model_dump_json()


def model_json_decoder(header_type: type[H], payload_type: type[P]) -> JsonDecoder[H, P]:
    """Build a decoder that validates header and payload JSON into models."""
    return JsonDecoder(
        header_from=header_type.model_validate_json,
        payload_from=payload_type.model_validate_json,
    )


def default_codecs(*, standard_signature: bool = False) -> Codecs:
    """Codecs producing URL-safe segments; optionally a standard base64 signature."""
    return Codecs(
        json_encode=model_to_json,
        b64url_encode=b64url_encode,
        signature_encode=b64_encode if standard_signature else b64url_encode,
        b64_decode=b64_decode,
    )
