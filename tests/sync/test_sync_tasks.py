from __future__ import annotations

import pytest

import bvl_portfolio.sync.tasks as tasks_module
from bvl_portfolio.config import Settings
from bvl_portfolio.exceptions import DataAccessError


class _FakeEngine:
    def __init__(self) -> None:
        self.disposed = False

    def dispose(self) -> None:
        self.disposed = True


class _FakeFeed:
    def __init__(self, base_url: str) -> None:
        self.base_url = base_url
        self.closed = False

    def close(self) -> None:
        self.closed = True


class _FakeSummary:
    def to_dict(self) -> dict:
        return {"status": "ok", "processed": 2}


def _patch(monkeypatch: pytest.MonkeyPatch, reconcile) -> tuple[_FakeEngine, dict]:
    engine = _FakeEngine()
    captured: dict = {}

    def make_feed(base_url: str) -> _FakeFeed:
        captured["feed"] = _FakeFeed(base_url)
        return captured["feed"]

    class _Reconciler:
        def __init__(self, feed, repo, reference_utc_offset_minutes: int) -> None:
            captured["reconciler_feed"] = feed
            captured["offset"] = reference_utc_offset_minutes

        def reconcile(self) -> _FakeSummary:
            return reconcile()

    monkeypatch.setattr(tasks_module, "build_engine", lambda settings: engine)
    monkeypatch.setattr(tasks_module, "build_session_factory", lambda e: "factory")
    monkeypatch.setattr(tasks_module, "BvlQuoteFeed", make_feed)
    monkeypatch.setattr(tasks_module, "DailyQuoteReconciler", _Reconciler)
    return engine, captured


def test_run_sync_returns_summary_and_releases_handles(
    monkeypatch: pytest.MonkeyPatch,
    settings: Settings,
) -> None:
    engine, captured = _patch(monkeypatch, _FakeSummary)

    result = tasks_module.run_sync(settings)

    assert result == {"status": "ok", "processed": 2}
    assert captured["reconciler_feed"] is captured["feed"]
    assert captured["feed"].base_url == settings.feed_base_url
    assert captured["offset"] == -300
    assert captured["feed"].closed is True
    assert engine.disposed is True


def test_run_sync_releases_handles_when_symbols_cannot_be_resolved(
    monkeypatch: pytest.MonkeyPatch,
    settings: Settings,
) -> None:
    def reconcile() -> _FakeSummary:
        raise DataAccessError("acciones unavailable")

    engine, captured = _patch(monkeypatch, reconcile)

    with pytest.raises(DataAccessError, match="acciones unavailable"):
        tasks_module.run_sync(settings)

    assert captured["feed"].closed is True
    assert engine.disposed is True


def test_reconcile_task_is_registered_by_name() -> None:
    assert tasks_module.reconcile_daily_quotes.name == "bvl_sync.reconcile_daily_quotes"


def test_beat_schedule_targets_reconcile_task() -> None:
    from bvl_portfolio.celery_app import app

    entry = app.conf.beat_schedule["reconcile_daily_quotes"]
    assert entry["task"] == tasks_module.reconcile_daily_quotes.name
    assert app.conf.timezone == "America/Lima"
