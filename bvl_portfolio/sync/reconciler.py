from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, ClassVar, Union
import logging

from sqlalchemy.orm import sessionmaker

from bvl_portfolio.config import Settings
from bvl_portfolio.exceptions import DataAccessError, FeedError

from .clock import day_window, feed_minute_key, parse_instant, trading_day, utc_minute_key
from .feed import BvlQuoteFeed, QuoteFeed
from .repository import PriceRecord, QuoteRepository, SqlQuoteRepository

logger = logging.getLogger("bvlportfolio.sync.reconciler")

SYNC_MESSAGE = "Consultando a la Bolsa de Valores de Lima..."
UNKNOWN_ERROR_MESSAGE = "Error desconocido"


class SyncStatus(str, Enum):
    FETCHED = "fetched"
    ERROR = "error"


@dataclass(frozen=True)
class QuoteSnapshot:
    """Feed row that passed validation, keyed by minute for deduplication."""
    symbol: str
    timestamp: str
    price: Decimal
    minute_key: str
    instant: datetime

    def to_record(self) -> PriceRecord:
        return PriceRecord(symbol=self.symbol, timestamp=self.instant, price=self.price)

    def to_row(self) -> dict:
        return {
            "nemonico": self.symbol,
            "fecha_hora": self.timestamp,
            "valor": str(self.price),
        }


@dataclass(frozen=True)
class SymbolSynced:
    symbol: str
    persisted_count: int
    feed_count: int
    to_insert: list[QuoteSnapshot]
    data: list[QuoteSnapshot]

    status: ClassVar[SyncStatus] = SyncStatus.FETCHED

    @property
    def inserted(self) -> int:
        return len(self.to_insert)

    @property
    def synced(self) -> bool:
        # Count comparison only; equal-sized but different minute sets still read as synced.
        return self.persisted_count == self.feed_count

    def to_dict(self) -> dict:
        rows = [snapshot.to_row() for snapshot in self.to_insert]
        return {
            "nemonico": self.symbol,
            "supabaseCount": self.persisted_count,
            "bvlCount": self.feed_count,
            "synced": self.synced,
            "inserted": self.inserted,
            "status": self.status.value,
            "toInsert": rows,
            "insertedValues": list(rows),
            "data": [
                {**snapshot.to_row(), "minuteKey": snapshot.minute_key}
                for snapshot in self.data
            ],
        }


@dataclass(frozen=True)
class SymbolFailed:
    symbol: str
    message: str

    status: ClassVar[SyncStatus] = SyncStatus.ERROR
    persisted_count: ClassVar[int] = 0
    feed_count: ClassVar[int] = 0
    inserted: ClassVar[int] = 0
    synced: ClassVar[bool] = False

    def to_dict(self) -> dict:
        return {
            "nemonico": self.symbol,
            "supabaseCount": 0,
            "bvlCount": 0,
            "synced": False,
            "inserted": 0,
            "status": self.status.value,
            "error": self.message,
        }


SymbolOutcome = Union[SymbolSynced, SymbolFailed]


@dataclass(frozen=True)
class SyncSummary:
    executed_at: datetime
    today: str
    results: list[SymbolOutcome] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.results)

    def to_dict(self) -> dict:
        return {
            "status": "ok",
            "message": SYNC_MESSAGE,
            "executedAt": self.executed_at.isoformat().replace("+00:00", "Z"),
            "today": self.today,
            "processed": self.processed,
            "results": [result.to_dict() for result in self.results],
        }


class DailyQuoteReconciler:
    """Merges the BVL intraday feed into acciones_historial without duplicating minutes."""

    def __init__(
        self,
        feed: QuoteFeed,
        repo: QuoteRepository,
        reference_utc_offset_minutes: int = -300,
    ) -> None:
        self._feed = feed
        self._repo = repo
        self._offset = reference_utc_offset_minutes

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        session_factory: sessionmaker,
    ) -> "DailyQuoteReconciler":
        return cls(
            feed=BvlQuoteFeed(settings.feed_base_url),
            repo=SqlQuoteRepository(session_factory),
            reference_utc_offset_minutes=settings.reference_utc_offset_minutes,
        )

    def reconcile(self, now: datetime | None = None) -> SyncSummary:
        """
        Run one reconciliation pass over every tracked symbol for the current trading day.

        Raises:
            DataAccessError: the tracked symbol set could not be resolved.
        """
        now = now or datetime.now(timezone.utc)
        today = trading_day(now, self._offset)
        start_utc, end_utc = day_window(today, self._offset)

        symbols = self._repo.list_tracked_symbols()
        logger.info("Reconciling %d symbols for %s", len(symbols), today)

        results: list[SymbolOutcome] = []
        for symbol in symbols:
            try:
                outcome = self._reconcile_symbol(symbol, today, start_utc, end_utc)
            except (FeedError, DataAccessError) as exc:
                logger.warning("Sync failed for %s: %s", symbol, exc)
                outcome = SymbolFailed(symbol=symbol, message=str(exc) or UNKNOWN_ERROR_MESSAGE)
            except Exception as exc:
                logger.exception("Unexpected error while syncing %s", symbol)
                outcome = SymbolFailed(symbol=symbol, message=str(exc) or UNKNOWN_ERROR_MESSAGE)
            results.append(outcome)

        return SyncSummary(executed_at=now, today=today, results=results)

    def _reconcile_symbol(
        self,
        symbol: str,
        today: str,
        start_utc: datetime,
        end_utc: datetime,
    ) -> SymbolSynced:
        snapshots = normalize_snapshots(self._feed.fetch_daily(symbol, today), symbol)
        persisted = self._repo.list_price_times(symbol, start_utc, end_utc)

        if not persisted:
            # Bootstrap: nothing stored for the day yet, take the feed as-is.
            to_insert = list(snapshots)
        else:
            existing_keys = {utc_minute_key(value) for value in persisted}
            to_insert = [s for s in snapshots if s.minute_key not in existing_keys]

        if to_insert:
            self._repo.insert_prices([snapshot.to_record() for snapshot in to_insert])
            logger.info("Inserted %d quotes for %s", len(to_insert), symbol)

        return SymbolSynced(
            symbol=symbol,
            persisted_count=len(persisted),
            feed_count=len(snapshots),
            to_insert=to_insert,
            data=snapshots,
        )


def normalize_snapshots(rows: list[Any], fallback_symbol: str) -> list[QuoteSnapshot]:
    """Drop rows without a timestamp or with a missing/zero price; key the rest by minute."""
    snapshots: list[QuoteSnapshot] = []
    for row in rows:
        if not isinstance(row, dict):
            continue
        timestamp = row.get("lastDate")
        price = _to_price(row.get("lastValue"))
        if not timestamp or not isinstance(timestamp, str) or price is None:
            continue
        try:
            instant = parse_instant(timestamp)
            minute_key = feed_minute_key(timestamp)
        except ValueError:
            logger.warning("Discarding %s quote with unparseable lastDate=%r", fallback_symbol, timestamp)
            continue
        snapshots.append(
            QuoteSnapshot(
                symbol=row.get("nemonico") or row.get("symbol") or fallback_symbol,
                timestamp=timestamp,
                price=price,
                minute_key=minute_key,
                instant=instant,
            )
        )
    return snapshots


def _to_price(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        price = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not price.is_finite() or price == 0:
        return None
    return price
