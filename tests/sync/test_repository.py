from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import text

from bvl_portfolio.exceptions import DataAccessError
from bvl_portfolio.models.price_history import PriceHistory
from bvl_portfolio.models.stock import Stock
from bvl_portfolio.models.stock_operation import StockOperation
from bvl_portfolio.sync.clock import day_window
from bvl_portfolio.sync.repository import PriceRecord, SqlQuoteRepository


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def _operation(symbol: str, when: datetime) -> StockOperation:
    return StockOperation(
        nemonico=symbol,
        fecha_hora=when,
        tipo="COMPRA",
        precio=Decimal("1"),
        cantidad=Decimal("10"),
    )


def test_tracked_symbols_newest_first(session_factory) -> None:
    with session_factory() as session:
        session.add_all(
            [
                Stock(nemonico="BVN", nombre_completo="Buenaventura", moneda="USD", created_at=_utc(2024, 1, 1)),
                Stock(nemonico="CVERDEC1", nombre_completo="Cerro Verde", moneda="USD", created_at=_utc(2024, 3, 1)),
                Stock(nemonico="FERREYC1", nombre_completo="Ferreycorp", moneda="PEN", created_at=_utc(2024, 2, 1)),
            ]
        )
        session.commit()

    symbols = SqlQuoteRepository(session_factory).list_tracked_symbols()

    assert symbols == ["CVERDEC1", "FERREYC1", "BVN"]


def test_tracked_symbols_fall_back_to_operations(session_factory) -> None:
    with session_factory() as session:
        session.add_all(
            [
                _operation("BVN", _utc(2024, 1, 1)),
                _operation("FERREYC1", _utc(2024, 1, 3)),
                _operation("BVN", _utc(2024, 1, 5)),
                _operation("ALICORC1", _utc(2024, 1, 2)),
            ]
        )
        session.commit()

    symbols = SqlQuoteRepository(session_factory).list_tracked_symbols()

    assert symbols == ["BVN", "FERREYC1", "ALICORC1"]


def test_tracked_symbols_empty_when_nothing_stored(session_factory) -> None:
    assert SqlQuoteRepository(session_factory).list_tracked_symbols() == []


def test_price_window_is_half_open(session_factory) -> None:
    start_utc, end_utc = day_window("2024-01-02", -300)
    repo = SqlQuoteRepository(session_factory)
    repo.insert_prices(
        [
            PriceRecord(symbol="BVN", timestamp=start_utc, price=Decimal("20.1")),
            PriceRecord(symbol="BVN", timestamp=_utc(2024, 1, 2, 14, 30), price=Decimal("20.2")),
            PriceRecord(symbol="BVN", timestamp=end_utc, price=Decimal("20.3")),
            PriceRecord(symbol="FERREYC1", timestamp=_utc(2024, 1, 2, 14, 30), price=Decimal("2.5")),
        ]
    )

    times = repo.list_price_times("BVN", start_utc, end_utc)

    assert sorted(t.replace(tzinfo=timezone.utc) for t in times) == [
        start_utc,
        _utc(2024, 1, 2, 14, 30),
    ]


def test_insert_prices_persists_every_record(session_factory) -> None:
    repo = SqlQuoteRepository(session_factory)

    inserted = repo.insert_prices(
        [
            PriceRecord(symbol="BVN", timestamp=_utc(2024, 1, 2, 14, 30), price=Decimal("20.1")),
            PriceRecord(symbol="BVN", timestamp=_utc(2024, 1, 2, 14, 30), price=Decimal("20.1")),
        ]
    )

    with session_factory() as session:
        rows = session.query(PriceHistory).all()
    assert inserted == 2
    assert len(rows) == 2
    assert repo.insert_prices([]) == 0


def test_query_errors_become_data_access_errors(engine, session_factory) -> None:
    with engine.begin() as connection:
        connection.execute(text("DROP TABLE acciones_historial"))
    repo = SqlQuoteRepository(session_factory)
    start_utc, end_utc = day_window("2024-01-02", -300)

    with pytest.raises(DataAccessError, match="BVN"):
        repo.list_price_times("BVN", start_utc, end_utc)

    with pytest.raises(DataAccessError, match="insert"):
        repo.insert_prices([PriceRecord(symbol="BVN", timestamp=start_utc, price=Decimal("1"))])
