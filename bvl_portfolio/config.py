from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from bvl_portfolio.exceptions import ConfigError

DEFAULT_FEED_URL = "https://dataondemand.bvl.com.pe/v1/stock-quote/daily"
# Lima time, no daylight saving.
DEFAULT_REFERENCE_UTC_OFFSET_MINUTES = -300


@dataclass(frozen=True)
class Settings:
    """Explicit runtime configuration for the API, the reconciler and the worker."""

    datastore_url: str
    datastore_key: str
    feed_base_url: str = DEFAULT_FEED_URL
    reference_utc_offset_minutes: int = DEFAULT_REFERENCE_UTC_OFFSET_MINUTES
    frontend_origins: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        missing = [
            name
            for name in ("feed_base_url", "datastore_url", "datastore_key")
            if not (getattr(self, name) or "").strip()
        ]
        if missing:
            raise ConfigError(f"Missing required settings: {', '.join(missing)}")
        if not isinstance(self.reference_utc_offset_minutes, int):
            raise ConfigError("reference_utc_offset_minutes must be an integer")
        if abs(self.reference_utc_offset_minutes) >= 24 * 60:
            raise ConfigError(
                f"reference_utc_offset_minutes out of range: {self.reference_utc_offset_minutes}"
            )

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from the process environment (and a local .env file, if any).

        Raises:
            ConfigError: a required variable is unset or the offset is not an integer.
        """
        load_dotenv()

        raw_offset = os.getenv("REFERENCE_UTC_OFFSET_MINUTES")
        if raw_offset is None or not raw_offset.strip():
            offset = DEFAULT_REFERENCE_UTC_OFFSET_MINUTES
        else:
            try:
                offset = int(raw_offset)
            except ValueError:
                raise ConfigError(
                    f"REFERENCE_UTC_OFFSET_MINUTES is not an integer: {raw_offset!r}"
                )

        origins = tuple(
            origin
            for origin in (os.getenv("FRONTEND_BASE_URL"), "http://localhost:3000")
            if origin
        )

        return cls(
            feed_base_url=os.getenv("BVL_FEED_URL", DEFAULT_FEED_URL),
            datastore_url=os.getenv("DATABASE_URL", ""),
            datastore_key=os.getenv("DATABASE_KEY", ""),
            reference_utc_offset_minutes=offset,
            frontend_origins=origins,
        )
