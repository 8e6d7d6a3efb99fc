from .clock import day_window, feed_minute_key, trading_day, utc_minute_key
from .feed import BvlQuoteFeed, QuoteFeed
from .reconciler import (
    DailyQuoteReconciler,
    QuoteSnapshot,
    SymbolFailed,
    SymbolOutcome,
    SymbolSynced,
    SyncStatus,
    SyncSummary,
    normalize_snapshots,
)
from .repository import PriceRecord, QuoteRepository, SqlQuoteRepository

__all__ = [
    "BvlQuoteFeed",
    "DailyQuoteReconciler",
    "PriceRecord",
    "QuoteFeed",
    "QuoteRepository",
    "QuoteSnapshot",
    "SqlQuoteRepository",
    "SymbolFailed",
    "SymbolOutcome",
    "SymbolSynced",
    "SyncStatus",
    "SyncSummary",
    "day_window",
    "feed_minute_key",
    "normalize_snapshots",
    "trading_day",
    "utc_minute_key",
]
