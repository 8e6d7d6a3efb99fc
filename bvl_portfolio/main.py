import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import sessionmaker

from bvl_portfolio.api.database.database import build_engine, build_session_factory
from bvl_portfolio.api.routes import history, operations, portfolio, stocks, sync
from bvl_portfolio.config import Settings
from bvl_portfolio.sync.reconciler import DailyQuoteReconciler


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker | None = None,
    reconciler: DailyQuoteReconciler | None = None,
) -> FastAPI:
    """
    Build the API. Run with `uvicorn bvl_portfolio.main:create_app --factory`.

    The engine/session factory and the reconciler are created once here and
    shared by every request.
    """
    settings = settings or Settings.from_env()
    logging.basicConfig(level=logging.INFO)

    if session_factory is None:
        session_factory = build_session_factory(build_engine(settings))
    if reconciler is None:
        reconciler = DailyQuoteReconciler.from_settings(settings, session_factory)

    app = FastAPI()
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.reconciler = reconciler

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.frontend_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def read_root():
        return {"message": "Hello, FastAPI!"}

    # ROUTES --------------------------------------------------------------------------------------
    app.include_router(sync.router)
    app.include_router(stocks.router)
    app.include_router(history.router)
    app.include_router(operations.router)
    app.include_router(portfolio.router)

    return app
