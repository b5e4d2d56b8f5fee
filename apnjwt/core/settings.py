"""Provider token settings loaded from environment variables."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from apnjwt.crypto.types import DEFAULT_ALGORITHM


class ProviderSettings(BaseSettings):
    """Credentials and encoding options for issuing provider tokens."""

    model_config = SettingsConfigDict(env_prefix="APNJWT_")

    team_id: str = ""
    key_id: str = ""
    secret: str = ""
    algorithm: str = DEFAULT_ALGORITHM
    signature_encoding: Literal["urlsafe", "standard"] = "urlsafe"

    @property
    def standard_signature(self) -> bool:
        """Whether the signature segment uses standard base64."""
        return self.signature_encoding == "standard"
