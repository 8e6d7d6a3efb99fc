from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from bvl_portfolio.exceptions import FeedError

logger = logging.getLogger("bvlportfolio.sync.feed")


class QuoteFeed(Protocol):
    """Source of intraday quote snapshots for one symbol and day."""

    def fetch_daily(self, symbol: str, today: str) -> list[Any]:
        raise NotImplementedError


class BvlQuoteFeed(QuoteFeed):
    """BVL daily stock-quote endpoint (dataondemand.bvl.com.pe)."""

    def __init__(self, base_url: str, client: httpx.Client | None = None) -> None:
        self._base_url = base_url
        self._client = client or httpx.Client()

    def fetch_daily(self, symbol: str, today: str) -> list[Any]:
        """
        Fetch the day's quote rows for a symbol.

        Args:
            symbol (str): BVL nemonico
            today (str): trading day as YYYY-MM-DD

        Returns:
            list: raw JSON rows; an empty list when the body is not a JSON array.

        Raises:
            FeedError: non-2xx status, transport failure or undecodable body.
        """
        params = {"nemonico": symbol, "today": today}
        try:
            response = self._client.get(
                self._base_url,
                params=params,
                headers={"Cache-Control": "no-store"},
            )
        except httpx.HTTPError as e:
            raise FeedError(f"BVL request failed for {symbol}: {e}") from e

        if not response.is_success:
            raise FeedError(
                f"BVL error ({response.status_code}): {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise FeedError(
                f"BVL returned invalid JSON for {symbol}: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

        if not isinstance(data, list):
            logger.info("BVL returned non-list payload for %s; treating as empty", symbol)
            return []
        return data

    def close(self) -> None:
        self._client.close()
