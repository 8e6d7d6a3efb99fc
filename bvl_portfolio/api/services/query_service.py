from sqlalchemy.orm import Session
from sqlalchemy import select
from typing import List, Optional

from bvl_portfolio.models.price_history import PriceHistory
from bvl_portfolio.models.stock import Stock
from bvl_portfolio.models.stock_operation import StockOperation


def list_stocks(db: Session) -> List[Stock]:
    """Tracked stocks, most recently added first."""
    stmt = select(Stock).order_by(Stock.created_at.desc())
    return list(db.execute(stmt).scalars().all())


def list_price_history(db: Session, nemonico: Optional[str] = None) -> List[PriceHistory]:
    """
    Price history ordered oldest to newest.

    Args:
        db (Session): Database session
        nemonico (str): restrict to one symbol when given

    Returns:
        List[PriceHistory]: matching price records
    """
    stmt = select(PriceHistory).order_by(PriceHistory.fecha_hora.asc())
    if nemonico is not None:
        stmt = stmt.where(PriceHistory.nemonico == nemonico)
    return list(db.execute(stmt).scalars().all())


def list_operations(db: Session, nemonico: Optional[str] = None) -> List[StockOperation]:
    """Buy/sell operations, newest first, optionally for one symbol."""
    stmt = select(StockOperation).order_by(StockOperation.fecha_hora.desc())
    if nemonico is not None:
        stmt = stmt.where(StockOperation.nemonico == nemonico)
    return list(db.execute(stmt).scalars().all())
