from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Protocol

from sqlalchemy.orm import Session

from bvl_portfolio.api.services import query_service
from bvl_portfolio.models.stock_operation import OPERATION_TYPE_BUY, OPERATION_TYPE_SELL
from bvl_portfolio.utils.helper import round_2_decimals


class StockRow(Protocol):
    nemonico: str
    nombre_completo: str | None


class PriceRow(Protocol):
    nemonico: str
    fecha_hora: datetime
    valor: Decimal


class OperationRow(Protocol):
    nemonico: str
    fecha_hora: datetime
    tipo: str
    precio: Decimal
    cantidad: Decimal


@dataclass(frozen=True)
class Holding:
    """Open position in a tracked stock."""
    symbol: str
    company: str
    quantity: Decimal
    purchase_price: Decimal
    purchase_date: datetime | None
    current_price: Decimal

    @property
    def gain_loss(self) -> Decimal:
        return self.quantity * self.current_price - self.quantity * self.purchase_price

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "company": self.company,
            "quantity": str(self.quantity),
            "purchasePrice": str(self.purchase_price),
            "purchaseDate": self.purchase_date.isoformat() if self.purchase_date else None,
            "currentPrice": str(self.current_price),
            "gainLoss": str(self.gain_loss),
        }


@dataclass(frozen=True)
class PortfolioSummary:
    holdings: list[Holding]
    total_invested: Decimal
    total_current: Decimal

    @property
    def total_gain_loss(self) -> Decimal:
        return self.total_current - self.total_invested

    @property
    def gain_loss_percent(self) -> Decimal:
        if self.total_invested <= 0:
            return Decimal("0.00")
        return round_2_decimals(self.total_gain_loss / self.total_invested * 100)

    def to_dict(self) -> dict:
        return {
            "totalInvested": str(self.total_invested),
            "totalCurrent": str(self.total_current),
            "totalGainLoss": str(self.total_gain_loss),
            "gainLossPercent": str(self.gain_loss_percent),
            "activePositions": len(self.holdings),
            "holdings": [holding.to_dict() for holding in self.holdings],
        }


class PortfolioService:
    """Derives holdings and totals from the operations log and price history."""

    def load_summary(self, session: Session) -> PortfolioSummary:
        return self.build_summary(
            stocks=query_service.list_stocks(session),
            history=query_service.list_price_history(session),
            operations=query_service.list_operations(session),
        )

    def build_summary(
        self,
        stocks: Iterable[StockRow],
        history: Iterable[PriceRow],
        operations: Iterable[OperationRow],
    ) -> PortfolioSummary:
        operations = list(operations)
        latest_prices = self._latest_prices(history)

        holdings: list[Holding] = []
        for stock in stocks:
            symbol = stock.nemonico
            own_ops = [op for op in operations if op.nemonico == symbol]
            quantity = self._net_quantity(own_ops)
            if quantity <= 0:
                continue

            purchases = [op for op in own_ops if op.tipo == OPERATION_TYPE_BUY]
            holdings.append(
                Holding(
                    symbol=symbol,
                    company=stock.nombre_completo or symbol,
                    quantity=quantity,
                    purchase_price=self._average_cost(purchases),
                    purchase_date=min((op.fecha_hora for op in purchases), default=None),
                    current_price=latest_prices.get(symbol, Decimal("0")),
                )
            )

        return PortfolioSummary(
            holdings=holdings,
            total_invested=sum(
                (h.quantity * h.purchase_price for h in holdings), Decimal("0")
            ),
            total_current=sum(
                (h.quantity * h.current_price for h in holdings), Decimal("0")
            ),
        )

    def _latest_prices(self, history: Iterable[PriceRow]) -> dict[str, Decimal]:
        latest: dict[str, PriceRow] = {}
        for row in history:
            current = latest.get(row.nemonico)
            if current is None or row.fecha_hora > current.fecha_hora:
                latest[row.nemonico] = row
        return {symbol: Decimal(str(row.valor)) for symbol, row in latest.items()}

    def _net_quantity(self, operations: list[OperationRow]) -> Decimal:
        quantity = Decimal("0")
        for op in operations:
            if op.tipo == OPERATION_TYPE_BUY:
                quantity += Decimal(str(op.cantidad))
            elif op.tipo == OPERATION_TYPE_SELL:
                quantity -= Decimal(str(op.cantidad))
        return quantity

    def _average_cost(self, purchases: list[OperationRow]) -> Decimal:
        total_quantity = sum((Decimal(str(op.cantidad)) for op in purchases), Decimal("0"))
        if total_quantity <= 0:
            return Decimal("0")
        total_cost = sum(
            (Decimal(str(op.precio)) * Decimal(str(op.cantidad)) for op in purchases),
            Decimal("0"),
        )
        return total_cost / total_quantity
