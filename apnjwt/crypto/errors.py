"""Exceptions raised while issuing tokens."""


class JWTError(Exception):
    """Base class for token issuance failures."""


class KeyParsingError(JWTError):
    """Private key material could not be parsed for the requested algorithm."""


class UnsupportedAlgorithmError(JWTError):
    """The requested signing algorithm is not ES256 or RS256."""

    def __init__(self, algorithm: str) -> None:
        super().__init__(f"Unsupported signing algorithm: {algorithm!r}")
        self.algorithm = algorithm
