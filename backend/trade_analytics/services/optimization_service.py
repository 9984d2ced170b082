import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from ..schemas import (
    OptimizationReport,
    ReportMeta,
    RiskAverageOut,
    UnderperformingStrategyOut,
)
from .aggregation_service import aggregate_trades, underperforming_strategies
from .correlation import risk_outcome_correlation
from .suggestion_service import DEFAULT_SUGGESTION_CONFIG, SuggestionConfig, generate_suggestions
from .trade_query import fetch_trades_in_window, is_valid_user_id

logger = logging.getLogger(__name__)

# The optimization report always looks back over the same trailing window.
OPTIMIZATION_WINDOW_DAYS: int = 30


class InvalidUserIdError(ValueError):
    """Raised when a user id is not a well-formed store identifier."""

    def __init__(self, user_id: object) -> None:
        super().__init__(f"Invalid userId: {user_id!r}")
        self.user_id = user_id


def build_optimization_report(
    db: Session,
    user_id: str,
    config: SuggestionConfig = DEFAULT_SUGGESTION_CONFIG,
    now: datetime | None = None,
) -> OptimizationReport:
    """
    Build the strategy optimization report for a user.

    Steps:
    1. Validate `user_id`; a malformed id raises `InvalidUserIdError` before
       the trade store is touched.
    2. Load the user's trades over the last `OPTIMIZATION_WINDOW_DAYS` days
       (one query; every later step works on this same list).
    3. Aggregate per strategy and per risk level, and correlate risk score
       with outcome.
    4. Derive suggestions from those statistics.

    An empty window is not special-cased: every step degrades to empty lists
    and a null correlation on its own. `now` only moves the window; the
    report's `generatedAt` is always the wall clock at assembly time.
    """
    if not is_valid_user_id(user_id):
        raise InvalidUserIdError(user_id)

    trades = fetch_trades_in_window(
        db=db,
        user_id=user_id.lower(),
        window_days=OPTIMIZATION_WINDOW_DAYS,
        now=now,
    )

    aggregation = aggregate_trades(trades)
    underperforming = underperforming_strategies(
        aggregation.by_strategy,
        win_rate_threshold=config.underperforming_win_rate,
    )
    correlation = risk_outcome_correlation(trades)
    suggestions = generate_suggestions(
        underperforming=underperforming,
        risk_averages=aggregation.by_risk,
        correlation=correlation,
        config=config,
    )

    logger.debug(
        "optimization report user=%s trades=%d strategies=%d underperforming=%d suggestions=%d",
        user_id,
        len(trades),
        len(aggregation.by_strategy),
        len(underperforming),
        len(suggestions),
    )

    return OptimizationReport(
        user_id=user_id,
        window_days=OPTIMIZATION_WINDOW_DAYS,
        underperforming_strategies=[
            UnderperformingStrategyOut(strategy_id=s.strategy_id, win_rate=s.win_rate)
            for s in underperforming
        ],
        risk_averages=[
            RiskAverageOut(risk_level=b.risk_level, avg_outcome=b.avg_outcome, count=b.count)
            for b in aggregation.by_risk
        ],
        risk_outcome_correlation=correlation,
        suggestions=suggestions,
        meta=ReportMeta(
            total_trades_analyzed=len(trades),
            generated_at=datetime.now(timezone.utc),
        ),
    )
