from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from bvl_portfolio.api.database.database import get_db
from bvl_portfolio.api.services import query_service
from bvl_portfolio.models.schemas import StockOperationResponse

router = APIRouter(prefix="/api/operations", tags=["operations"])


@router.get("/", response_model=List[StockOperationResponse])
def get_operations(db: Session = Depends(get_db)):
    return query_service.list_operations(db)


@router.get("/{nemonico}", response_model=List[StockOperationResponse])
def get_operations_by_stock(nemonico: str, db: Session = Depends(get_db)):
    return query_service.list_operations(db, nemonico=nemonico)
