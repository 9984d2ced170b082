from collections.abc import Iterable
from dataclasses import dataclass, field

from ..models import Trade, risk_level_name


@dataclass
class StrategyStat:
    """Win/loss totals for one strategy within the window."""

    strategy_id: str
    total: int = 0
    wins: int = 0

    @property
    def win_rate(self) -> float:
        # Grouping never yields an empty bucket, but keep the division total.
        return self.wins / self.total if self.total > 0 else 0.0


@dataclass
class RiskBucketStat:
    """Average outcome of the trades sharing one risk level."""

    risk_level: str
    count: int = 0
    outcome_sum: float = 0.0

    @property
    def avg_outcome(self) -> float:
        return self.outcome_sum / self.count if self.count > 0 else 0.0


@dataclass
class TradeAggregation:
    by_strategy: list[StrategyStat] = field(default_factory=list)
    by_risk: list[RiskBucketStat] = field(default_factory=list)


def aggregate_trades(trades: Iterable[Trade]) -> TradeAggregation:
    """
    Group trades by strategy and by risk level in a single pass.

    - `by_strategy` is sorted by win rate ascending so the weakest strategies
      come first. The sort is stable, so ties keep first-encounter order.
    - `by_risk` only contains levels that actually occur and is sorted by the
      level name as a plain string, i.e. high, low, medium. Consumers rely on
      this ordering, so it is not a severity ordering.
    """
    strategies: dict[str, StrategyStat] = {}
    risk_buckets: dict[str, RiskBucketStat] = {}

    for t in trades:
        stat = strategies.get(t.strategy_id)
        if stat is None:
            stat = strategies[t.strategy_id] = StrategyStat(strategy_id=t.strategy_id)
        stat.total += 1
        if t.win:
            stat.wins += 1

        level = risk_level_name(t.risk_level)
        bucket = risk_buckets.get(level)
        if bucket is None:
            bucket = risk_buckets[level] = RiskBucketStat(risk_level=level)
        bucket.count += 1
        bucket.outcome_sum += t.outcome

    return TradeAggregation(
        by_strategy=sorted(strategies.values(), key=lambda s: s.win_rate),
        by_risk=sorted(risk_buckets.values(), key=lambda b: b.risk_level),
    )


def underperforming_strategies(
    stats: Iterable[StrategyStat],
    win_rate_threshold: float = 0.5,
) -> list[StrategyStat]:
    """
    Strategies with at least one trade and a win rate strictly below the threshold.

    Input order is preserved.
    """
    return [s for s in stats if s.total > 0 and s.win_rate < win_rate_threshold]
