from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from bvl_portfolio.api.database.database import get_db
from bvl_portfolio.api.services import query_service
from bvl_portfolio.models.schemas import PriceHistoryResponse

router = APIRouter(prefix="/api/history", tags=["history"])


@router.get("/", response_model=List[PriceHistoryResponse])
def get_price_history(db: Session = Depends(get_db)):
    """Full price history for every symbol, oldest first."""
    return query_service.list_price_history(db)


@router.get("/{nemonico}", response_model=List[PriceHistoryResponse])
def get_price_history_by_stock(nemonico: str, db: Session = Depends(get_db)):
    """
    Price history for a single stock

    Args:
        nemonico (str): the BVL symbol

    Returns:
        price records ordered by fecha_hora ascending (empty when the symbol has none)
    """
    return query_service.list_price_history(db, nemonico=nemonico)
