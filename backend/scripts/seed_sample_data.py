from __future__ import annotations

"""
Seed the local database with a demo user's trade history.

The generated history is shaped so that the optimization report has
something to say:
- several strategies, one of them ("mean-reversion") winning less than half
  of the time;
- low-risk trades that are mostly profitable, high-risk trades that mostly
  lose, so risk and outcome are negatively correlated;
- a handful of trades older than the 30-day window, which the report must
  ignore.

Usage (from the `backend` directory):

    cd backend
    python -m scripts.seed_sample_data
"""

from datetime import datetime, timedelta, timezone
import random

from sqlalchemy import func, select

from trade_analytics.db import SessionLocal, init_db
from trade_analytics.models import RiskLevel, Trade

DEMO_USER_ID = "64b7f0c2a1d3e4f5a6b7c8d9"

# strategy -> probability that a trade is flagged as a win
STRATEGY_WIN_RATES: dict[str, float] = {
    "breakout": 0.62,
    "trend-follow": 0.55,
    "mean-reversion": 0.42,
}

# risk level -> (mean outcome, outcome spread)
RISK_OUTCOMES: dict[RiskLevel, tuple[float, float]] = {
    RiskLevel.LOW: (45.0, 20.0),
    RiskLevel.MEDIUM: (5.0, 30.0),
    RiskLevel.HIGH: (-38.0, 60.0),
}


def _random_trade(user_id: str, trade_date: datetime) -> Trade:
    strategy_id = random.choice(list(STRATEGY_WIN_RATES))
    risk_level = random.choice(list(RISK_OUTCOMES))
    mean, spread = RISK_OUTCOMES[risk_level]
    outcome = random.gauss(mean, spread)

    return Trade(
        user_id=user_id,
        strategy_id=strategy_id,
        trade_date=trade_date,
        risk_level=risk_level.value,
        outcome=round(outcome, 2),
        # Win flag is recorded independently of the outcome sign.
        win=random.random() < STRATEGY_WIN_RATES[strategy_id],
        performance_notes="seeded demo trade",
    )


def seed(user_id: str = DEMO_USER_ID, num_trades: int = 60, num_stale: int = 5) -> None:
    """
    Insert demo trades for `user_id` unless that user already has some.

    `num_trades` land inside the last 30 days, `num_stale` are 35-60 days old.
    """
    init_db()

    with SessionLocal() as db:
        existing = db.scalar(
            select(func.count()).select_from(Trade).where(Trade.user_id == user_id)
        ) or 0
        if existing:
            print(f"[seed] user {user_id} already has {existing} trades, skipping.")
            return

        now = datetime.now(timezone.utc)
        trades = [
            _random_trade(user_id, now - timedelta(days=random.uniform(0, 29.5)))
            for _ in range(num_trades)
        ]
        trades += [
            _random_trade(user_id, now - timedelta(days=random.uniform(35, 60)))
            for _ in range(num_stale)
        ]

        db.add_all(trades)
        db.commit()
        print(
            f"[seed] inserted {num_trades} trades in window and {num_stale} stale trades "
            f"for user {user_id}."
        )
        print(f"[seed] try: GET /api/strategies/optimize/{user_id}")


if __name__ == "__main__":
    seed()
