from bvl_portfolio.api.database.database import Base
from sqlalchemy import Column, Integer, Numeric, String, TIMESTAMP, Index, Enum

OPERATION_TYPE_BUY = "COMPRA"
OPERATION_TYPE_SELL = "VENTA"
OPERATION_TYPE_VALUES = (
    OPERATION_TYPE_BUY,
    OPERATION_TYPE_SELL,
)

operation_type_enum = Enum(
    *OPERATION_TYPE_VALUES,
    name="operation_type",
    native_enum=False,
)


class StockOperation(Base):
    # StockOperation is a buy/sell entry in the personal transaction log.
    __tablename__ = "acciones_operaciones"
    __table_args__ = (Index("ix_acciones_operaciones_nemonico", "nemonico"),)

    id_operacion = Column(Integer, primary_key=True, nullable=False)
    nemonico = Column(String, nullable=False)
    fecha_hora = Column(TIMESTAMP(timezone=True), nullable=False)
    tipo = Column(operation_type_enum, nullable=False)
    precio = Column(Numeric(14, 4), nullable=False)
    cantidad = Column(Numeric(14, 4), nullable=False)
    monto_total = Column(Numeric(14, 2), nullable=True)
