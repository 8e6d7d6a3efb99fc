from bvl_portfolio.api.database.database import Base
from sqlalchemy import Column, String, TIMESTAMP, text


class Stock(Base):
    # Stock is a tracked BVL instrument shown on the dashboard.
    __tablename__ = "acciones"

    nemonico = Column(String, primary_key=True, nullable=False)
    nombre_completo = Column(String, nullable=True)
    moneda = Column(String, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=text("CURRENT_TIMESTAMP"))
