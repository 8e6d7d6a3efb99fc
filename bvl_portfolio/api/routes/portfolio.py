from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bvl_portfolio.api.database.database import get_db
from bvl_portfolio.services.portfolio import PortfolioService

router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])


@router.get("/")
def get_portfolio(db: Session = Depends(get_db)):
    """Open holdings with invested/current value and overall gain or loss."""
    return PortfolioService().load_summary(db).to_dict()
