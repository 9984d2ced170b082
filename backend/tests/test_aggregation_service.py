import pytest

from trade_analytics.services.aggregation_service import (
    RiskBucketStat,
    StrategyStat,
    aggregate_trades,
    underperforming_strategies,
)


def test_empty_trade_set_gives_empty_groupings():
    aggregation = aggregate_trades([])

    assert aggregation.by_strategy == []
    assert aggregation.by_risk == []
    assert underperforming_strategies(aggregation.by_strategy) == []


def test_strategy_totals_and_win_rates(make_trade):
    trades = [
        make_trade(strategy_id="breakout", win=True),
        make_trade(strategy_id="breakout", win=False),
        make_trade(strategy_id="breakout", win=True),
        make_trade(strategy_id="scalp", win=False),
    ]

    stats = {s.strategy_id: s for s in aggregate_trades(trades).by_strategy}

    assert stats["breakout"].total == 3
    assert stats["breakout"].wins == 2
    assert stats["breakout"].win_rate == pytest.approx(2 / 3)
    assert stats["scalp"].total == 1
    assert stats["scalp"].wins == 0
    assert stats["scalp"].win_rate == 0.0


def test_strategies_sorted_by_win_rate_with_stable_ties(make_trade):
    trades = [
        make_trade(strategy_id="a", win=True),
        make_trade(strategy_id="b", win=False),
        make_trade(strategy_id="c", win=True),
        make_trade(strategy_id="d", win=False),
        make_trade(strategy_id="c", win=False),
    ]

    order = [s.strategy_id for s in aggregate_trades(trades).by_strategy]

    # b and d tie at 0.0 and keep first-encounter order.
    assert order == ["b", "d", "c", "a"]


def test_win_flag_is_independent_of_outcome_sign(make_trade):
    trades = [
        make_trade(strategy_id="s", win=True, outcome=-50.0),
        make_trade(strategy_id="s", win=False, outcome=80.0),
    ]

    (stat,) = aggregate_trades(trades).by_strategy

    assert stat.wins == 1
    assert stat.win_rate == 0.5


def test_risk_buckets_use_lexical_order_and_skip_empty_levels(make_trade):
    trades = [
        make_trade(risk_level="medium", outcome=10.0),
        make_trade(risk_level="low", outcome=4.0),
        make_trade(risk_level="medium", outcome=-2.0),
        make_trade(risk_level="high", outcome=-9.0),
        make_trade(risk_level="low", outcome=6.0),
    ]

    buckets = aggregate_trades(trades).by_risk

    assert [b.risk_level for b in buckets] == ["high", "low", "medium"]
    assert [b.count for b in buckets] == [1, 2, 2]
    assert [b.avg_outcome for b in buckets] == pytest.approx([-9.0, 5.0, 4.0])

    only_medium = aggregate_trades([make_trade(risk_level="medium", outcome=1.0)]).by_risk
    assert [b.risk_level for b in only_medium] == ["medium"]


def test_underperforming_threshold_is_exclusive(make_trade):
    trades = [
        # exactly 0.5
        make_trade(strategy_id="even", win=True),
        make_trade(strategy_id="even", win=False),
        # 1/3
        make_trade(strategy_id="weak", win=True),
        make_trade(strategy_id="weak", win=False),
        make_trade(strategy_id="weak", win=False),
        # 0
        make_trade(strategy_id="broken", win=False),
    ]

    flagged = underperforming_strategies(aggregate_trades(trades).by_strategy)

    assert [s.strategy_id for s in flagged] == ["broken", "weak"]


def test_underperforming_requires_trades():
    stats = [StrategyStat(strategy_id="ghost"), StrategyStat(strategy_id="real", total=4, wins=1)]

    assert stats[0].win_rate == 0.0
    assert [s.strategy_id for s in underperforming_strategies(stats)] == ["real"]


def test_all_wins_flags_nothing(make_trade):
    trades = [
        make_trade(strategy_id=f"s{i % 3}", win=True, outcome=-float(i)) for i in range(9)
    ]

    stats = aggregate_trades(trades).by_strategy

    assert all(0.0 <= s.win_rate <= 1.0 for s in stats)
    assert underperforming_strategies(stats) == []


def test_empty_risk_bucket_average_is_zero():
    assert RiskBucketStat(risk_level="low").avg_outcome == 0.0


def test_truthy_win_flags_count_as_wins(make_trade):
    trades = [make_trade(strategy_id="s", win=1), make_trade(strategy_id="s", win=0)]

    (stat,) = aggregate_trades(trades).by_strategy

    assert stat.wins == 1
