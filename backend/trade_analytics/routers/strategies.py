import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import OptimizationReport
from ..services.optimization_service import InvalidUserIdError, build_optimization_report

logger = logging.getLogger(__name__)

router = APIRouter()

DbDep = Annotated[Session, Depends(get_db)]


@router.get(
    "/optimize/{user_id}",
    response_model=OptimizationReport,
    summary="Strategy optimization report over the last 30 days",
    responses={
        400: {"description": "Malformed userId"},
        500: {"description": "Trade store or aggregation failure"},
    },
)
def optimize_strategies(user_id: str, db: DbDep):
    """
    Analyse a user's trades from the last 30 days.

    Returns the strategies with a win rate below 50%, the average outcome per
    risk level, the correlation between risk score and outcome, and the
    suggestions derived from them. Errors are reported as `{"error": ...}`
    bodies rather than FastAPI's default `{"detail": ...}`.
    """
    try:
        return build_optimization_report(db=db, user_id=user_id)
    except InvalidUserIdError:
        return JSONResponse(status_code=400, content={"error": "Invalid userId"})
    except Exception:
        logger.exception("/optimize error for user %s", user_id)
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})
