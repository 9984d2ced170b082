from collections.abc import Sequence

from pydantic import BaseModel

from ..models import RiskLevel
from .aggregation_service import RiskBucketStat, StrategyStat


class SuggestionConfig(BaseModel):
    """
    Thresholds behind the advisory suggestions.

    - underperforming_win_rate: strategies strictly below this win rate are
      flagged for refinement;
    - low_risk_min_count / low_risk_min_avg_outcome: the low-risk bucket must
      have at least this many trades and an average outcome strictly above
      this value before we suggest sizing up;
    - correlation_threshold: a risk/outcome correlation strictly below this
      value means risk is not being paid for.
    """

    underperforming_win_rate: float = 0.5
    low_risk_min_count: int = 3
    low_risk_min_avg_outcome: float = 0.0
    correlation_threshold: float = -0.2


DEFAULT_SUGGESTION_CONFIG = SuggestionConfig()

REFINE_STRATEGY_TEMPLATE = "Refine entry criteria for strategy {strategy_id}"
INCREASE_LOW_RISK_SIZE = "Increase position size for low-risk trades"
REDUCE_HIGH_RISK_EXPOSURE = "Reduce exposure to high-risk trades"


def generate_suggestions(
    underperforming: Sequence[StrategyStat],
    risk_averages: Sequence[RiskBucketStat],
    correlation: float | None,
    config: SuggestionConfig = DEFAULT_SUGGESTION_CONFIG,
) -> list[str]:
    """
    Turn window statistics into human readable suggestions.

    Rules are applied in a fixed order, which is also the output order:
    1. one "refine" line per underperforming strategy, in the given order;
    2. one "increase size" line if the low-risk bucket is big enough and
       profitable on average;
    3. one "reduce exposure" line if risk and outcome are negatively
       correlated beyond the threshold.
    """
    suggestions: list[str] = [
        REFINE_STRATEGY_TEMPLATE.format(strategy_id=s.strategy_id) for s in underperforming
    ]

    low_risk = next((b for b in risk_averages if b.risk_level == RiskLevel.LOW.value), None)
    if (
        low_risk is not None
        and low_risk.count >= config.low_risk_min_count
        and low_risk.avg_outcome > config.low_risk_min_avg_outcome
    ):
        suggestions.append(INCREASE_LOW_RISK_SIZE)

    if correlation is not None and correlation < config.correlation_threshold:
        suggestions.append(REDUCE_HIGH_RISK_EXPOSURE)

    return suggestions
