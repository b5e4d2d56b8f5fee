"""Type definitions for JWT headers, payloads, JWKs and codec capabilities."""

from collections.abc import Callable
from typing import Any, Generic, NamedTuple, TypeVar

from pydantic import BaseModel, ConfigDict

DEFAULT_ALGORITHM = "ES256"

H = TypeVar("H")
P = TypeVar("P")
M = TypeVar("M", bound=BaseModel)

JsonEncode = Callable[[Any], str]
B64Encode = Callable[[bytes], str]
B64Decode = Callable[[str], bytes]
Clock = Callable[[], int]


class JWTAuthHeader(BaseModel):
    """JWT header with the signing algorithm and key identifier."""

    model_config = ConfigDict(frozen=True, extra="allow")

    alg: str = DEFAULT_ALGORITHM
    kid: str


class JWTAuthPayload(BaseModel):
    """Provider assertion claims.

    Extension claims such as ``sub``, ``name`` or ``exp`` are passed as extra
    keyword arguments and serialized after ``iss`` and ``iat``.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    iss: str
    iat: int


class JWTToken(BaseModel, Generic[H, P]):
    """Decoded token. The signature is not verified."""

    model_config = ConfigDict(frozen=True)

    header: H
    payload: P
    signature: bytes | None = None


class JWKObject(BaseModel):
    """RSA public key published as a JSON Web Key."""

    model_config = ConfigDict(frozen=True)

    kty: str = "RSA"
    kid: str
    use: str = "sig"
    alg: str = "RS256"
    n: str
    e: str


class JWKSet(BaseModel):
    """JSON Web Key Set as published by a token provider."""

    model_config = ConfigDict(frozen=True)

    keys: list[JWKObject]

    def find(self, kid: str) -> JWKObject | None:
        """Return the key with the given identifier, if published."""
        for key in self.keys:
            if key.kid == kid:
                return key
        return None


class SigningKeyData(BaseModel):
    """A generated keypair for token signing."""

    kid: str
    algorithm: str
    private_key: str
    public_key_pem: str


class JsonDecoder(NamedTuple, Generic[H, P]):
    """Pair of deserializers turning header and payload JSON into objects."""

    header_from: Callable[[str], H]
    payload_from: Callable[[str], P]


class Codecs(NamedTuple):
    """Encoding capabilities used while issuing a token."""

    json_encode: JsonEncode
    b64url_encode: B64Encode
    signature_encode: B64Encode
    b64_decode: B64Decode
