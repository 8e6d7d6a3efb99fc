from bvl_portfolio.api.database.database import Base
from sqlalchemy import Column, Integer, Numeric, String, TIMESTAMP, Index


class PriceHistory(Base):
    # Intraday price snapshot for a symbol. Append-only; no unique constraint on
    # (nemonico, fecha_hora), the quote reconciler handles deduplication.
    __tablename__ = "acciones_historial"
    __table_args__ = (Index("ix_acciones_historial_nemonico_fecha_hora", "nemonico", "fecha_hora"),)

    id_historial = Column(Integer, primary_key=True, nullable=False)
    nemonico = Column(String, nullable=False)
    fecha_hora = Column(TIMESTAMP(timezone=True), nullable=False)
    valor = Column(Numeric(14, 4), nullable=False)
