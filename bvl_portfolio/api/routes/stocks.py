from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from bvl_portfolio.api.database.database import get_db
from bvl_portfolio.api.services import query_service
from bvl_portfolio.models.schemas import StockResponse

router = APIRouter(prefix="/api/stocks", tags=["stocks"])


@router.get("/", response_model=List[StockResponse])
def get_stocks(db: Session = Depends(get_db)):
    return query_service.list_stocks(db)
