from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from bvl_portfolio.exceptions import DataAccessError
from bvl_portfolio.models.price_history import PriceHistory
from bvl_portfolio.models.stock import Stock
from bvl_portfolio.models.stock_operation import StockOperation


@dataclass(frozen=True)
class PriceRecord:
    """Price snapshot as persisted in acciones_historial."""
    symbol: str
    timestamp: datetime
    price: Decimal


class QuoteRepository(Protocol):
    """Persistence boundary used by the daily quote reconciler."""

    def list_tracked_symbols(self) -> list[str]:
        raise NotImplementedError

    def list_price_times(
        self,
        symbol: str,
        start_utc: datetime,
        end_utc: datetime,
    ) -> list[datetime]:
        raise NotImplementedError

    def insert_prices(self, records: list[PriceRecord]) -> int:
        raise NotImplementedError


class SqlQuoteRepository(QuoteRepository):
    """SQLAlchemy-backed repository. Each call runs in its own short-lived session."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def list_tracked_symbols(self) -> list[str]:
        session = self._session_factory()
        try:
            rows = session.execute(
                select(Stock.nemonico).order_by(Stock.created_at.desc())
            ).scalars().all()
            symbols = _unique_symbols(rows)
            if symbols:
                return symbols

            # No tracked instruments yet: fall back to whatever was traded.
            rows = session.execute(
                select(StockOperation.nemonico).order_by(StockOperation.fecha_hora.desc())
            ).scalars().all()
            return _unique_symbols(rows)
        except SQLAlchemyError as e:
            raise DataAccessError(f"Could not resolve tracked symbols: {e}") from e
        finally:
            session.close()

    def list_price_times(
        self,
        symbol: str,
        start_utc: datetime,
        end_utc: datetime,
    ) -> list[datetime]:
        session = self._session_factory()
        try:
            stmt = (
                select(PriceHistory.fecha_hora)
                .where(PriceHistory.nemonico == symbol)
                .where(PriceHistory.fecha_hora >= start_utc)
                .where(PriceHistory.fecha_hora < end_utc)
            )
            return list(session.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise DataAccessError(f"Could not read price history for {symbol}: {e}") from e
        finally:
            session.close()

    def insert_prices(self, records: list[PriceRecord]) -> int:
        if not records:
            return 0

        session = self._session_factory()
        try:
            session.add_all(
                PriceHistory(
                    nemonico=record.symbol,
                    fecha_hora=record.timestamp,
                    valor=record.price,
                )
                for record in records
            )
            session.commit()
            return len(records)
        except SQLAlchemyError as e:
            session.rollback()
            raise DataAccessError(f"Could not insert price history: {e}") from e
        finally:
            session.close()


def _unique_symbols(rows) -> list[str]:
    # dict preserves first-seen order.
    return list(dict.fromkeys(symbol for symbol in rows if symbol))
