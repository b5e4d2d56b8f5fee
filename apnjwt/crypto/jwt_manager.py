"""Provider token issuance: codec, signer and clock wired together."""

from datetime import UTC, datetime
from typing import Any

from apnjwt.core.settings import ProviderSettings
from apnjwt.crypto import codec
from apnjwt.crypto.encoding import default_codecs, model_json_decoder
from apnjwt.crypto.signer import sign
from apnjwt.crypto.types import (
    DEFAULT_ALGORITHM,
    Clock,
    Codecs,
    JsonDecoder,
    JWTAuthHeader,
    JWTAuthPayload,
    JWTToken,
)


def epoch_seconds() -> int:
    """Current time in whole seconds since the Unix epoch."""
    return int(datetime.now(UTC).timestamp())


def issue_token(
    header: JWTAuthHeader,
    payload: Any,
    secret: str,
    *,
    codecs: Codecs | None = None,
) -> str:
    """Sign ``header`` and ``payload`` with ``header.alg`` and return the token.

    Does not include a "bearer" prefix.
    """
    codecs = codecs or default_codecs()
    signing_input = codec.build_signing_input(
        header, payload, codecs.json_encode, codecs.b64url_encode
    )
    signature = sign(header.alg, secret, signing_input, codecs.b64_decode)
    return codec.assemble_token(signing_input, signature, codecs.signature_encode)


def provider_token(
    team_id: str,
    key_id: str,
    secret: str,
    *,
    clock: Clock = epoch_seconds,
    codecs: Codecs | None = None,
) -> str:
    """Issue an ES256 provider token for a team, timestamped now."""
    header = JWTAuthHeader(kid=key_id)
    payload = JWTAuthPayload(iss=team_id, iat=clock())
    return issue_token(header, payload, secret, codecs=codecs)


class JWTManager:
    """Issues provider tokens for a single signing key."""

    def __init__(
        self,
        secret: str,
        kid: str,
        issuer: str,
        algorithm: str = DEFAULT_ALGORITHM,
        clock: Clock = epoch_seconds,
        codecs: Codecs | None = None,
    ) -> None:
        self._secret = secret
        self._kid = kid
        self._issuer = issuer
        self._algorithm = algorithm
        self._clock = clock
        self._codecs = codecs or default_codecs()

    @classmethod
    def from_settings(cls, settings: ProviderSettings) -> "JWTManager":
        """Create a manager from environment-driven settings."""
        return cls(
            secret=settings.secret,
            kid=settings.key_id,
            issuer=settings.team_id,
            algorithm=settings.algorithm,
            codecs=default_codecs(standard_signature=settings.standard_signature),
        )

    def create_token(self, **claims: Any) -> str:
        """Issue a token for this key; ``claims`` are added to the payload."""
        header = JWTAuthHeader(alg=self._algorithm, kid=self._kid)
        payload = JWTAuthPayload(iss=self._issuer, iat=self._clock(), **claims)
        return self.create_token_for(header, payload)

    def create_token_for(self, header: JWTAuthHeader, payload: Any) -> str:
        """Sign an arbitrary header and payload with this manager's secret."""
        return issue_token(header, payload, self._secret, codecs=self._codecs)

    def decode(
        self,
        token: str,
        json_decoder: JsonDecoder[Any, Any] | None = None,
    ) -> JWTToken[Any, Any] | None:
        """Decode a token without verifying its signature."""
        json_decoder = json_decoder or model_json_decoder(JWTAuthHeader, JWTAuthPayload)
        return codec.decode(token, json_decoder, self._codecs.b64_decode)
