from __future__ import annotations

from celery import shared_task

from bvl_portfolio.api.database.database import build_engine, build_session_factory
from bvl_portfolio.config import Settings
from bvl_portfolio.sync.feed import BvlQuoteFeed
from bvl_portfolio.sync.reconciler import DailyQuoteReconciler
from bvl_portfolio.sync.repository import SqlQuoteRepository


@shared_task(name="bvl_sync.reconcile_daily_quotes")
def reconcile_daily_quotes() -> dict:
    """
    Scheduled reconciliation of today's BVL quotes into acciones_historial.
    Returns the same JSON-safe summary served by GET /api/bvl-sync.
    """
    return run_sync()


def run_sync(settings: Settings | None = None) -> dict:
    settings = settings or Settings.from_env()
    engine = build_engine(settings)
    feed = BvlQuoteFeed(settings.feed_base_url)
    try:
        reconciler = DailyQuoteReconciler(
            feed=feed,
            repo=SqlQuoteRepository(build_session_factory(engine)),
            reference_utc_offset_minutes=settings.reference_utc_offset_minutes,
        )
        return reconciler.reconcile().to_dict()
    finally:
        # Both handles live for one run only.
        feed.close()
        engine.dispose()
