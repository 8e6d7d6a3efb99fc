from __future__ import annotations


class ConfigError(RuntimeError):
    """Raised when required settings are missing or malformed."""


class DataAccessError(RuntimeError):
    """Datastore query or insert failure."""


class FeedError(RuntimeError):
    """Quote provider returned a non-2xx response or could not be reached."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
