from datetime import datetime
from decimal import Decimal
from typing import Optional, Literal

from pydantic import BaseModel

OperationType = Literal["COMPRA", "VENTA"]


class StockResponse(BaseModel):
    nemonico: str
    nombre_completo: Optional[str]
    moneda: Optional[str]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class PriceHistoryResponse(BaseModel):
    id_historial: int
    nemonico: str
    fecha_hora: datetime
    valor: Decimal

    class Config:
        from_attributes = True


class StockOperationResponse(BaseModel):
    id_operacion: int
    nemonico: str
    fecha_hora: datetime
    tipo: OperationType
    precio: Decimal
    cantidad: Decimal
    monto_total: Optional[Decimal]

    class Config:
        from_attributes = True
