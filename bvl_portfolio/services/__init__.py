from .portfolio import Holding, PortfolioService, PortfolioSummary

__all__ = [
    "Holding",
    "PortfolioService",
    "PortfolioSummary",
]
