import logging

from fastapi import APIRouter, HTTPException, Request

from bvl_portfolio.exceptions import DataAccessError

logger = logging.getLogger("bvlportfolio.api.sync")

router = APIRouter(prefix="/api", tags=["bvl-sync"])


@router.get("/bvl-sync")
def run_bvl_sync(request: Request):
    """
    Reconcile today's BVL quotes with the stored price history.

    Per-symbol failures are reported inside `results` and still return 200;
    only a failure to resolve the tracked symbols is an error response.
    """
    reconciler = request.app.state.reconciler
    try:
        summary = reconciler.reconcile()
    except DataAccessError as e:
        logger.exception("BVL sync aborted")
        raise HTTPException(status_code=500, detail=str(e))
    return summary.to_dict()
