"""
Shared fixtures for the trade analytics tests.

Every test gets its own in-memory SQLite database; the FastAPI app is wired
to it by overriding the `get_db` dependency.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from trade_analytics.db import Base, get_db, init_db
from trade_analytics.main import app
from trade_analytics.models import Trade

USER_ID = "64b7f0c2a1d3e4f5a6b7c8d9"
OTHER_USER_ID = "0123456789abcdef01234567"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine, class_=Session)
    with TestingSession() as session:
        yield session


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_trade():
    """
    Build a transient Trade; `days_ago` is relative to the current UTC time.
    """

    def _make(
        strategy_id: str = "breakout",
        risk_level: str = "medium",
        outcome: float = 0.0,
        win: bool = False,
        days_ago: float = 1.0,
        user_id: str = USER_ID,
    ) -> Trade:
        return Trade(
            user_id=user_id,
            strategy_id=strategy_id,
            trade_date=datetime.now(timezone.utc) - timedelta(days=days_ago),
            risk_level=risk_level,
            outcome=outcome,
            win=win,
        )

    return _make


@pytest.fixture
def add_trades(db):
    """Persist trades and return them."""

    def _add(trades: list[Trade]) -> list[Trade]:
        db.add_all(trades)
        db.commit()
        return trades

    return _add


@pytest.fixture
def scenario_trades(make_trade):
    """
    27 trades: 12 low-risk averaging +45.2, 9 medium averaging +5.7,
    6 high averaging -38.4. "mean-reversion" wins 5 of 12 trades
    (win rate ~0.42); "breakout" wins all 15 of its trades.
    """
    trades: list[Trade] = []

    low_outcomes = [40.2, 50.2] * 6  # mean 45.2
    medium_outcomes = [3.7, 7.7, 5.7] * 3  # mean 5.7
    high_outcomes = [-30.4, -46.4] * 3  # mean -38.4

    outcomes = (
        [("low", o) for o in low_outcomes]
        + [("medium", o) for o in medium_outcomes]
        + [("high", o) for o in high_outcomes]
    )

    for i, (risk_level, outcome) in enumerate(outcomes):
        if i % 9 < 4:
            # 12 trades: indices 0-3, 9-12, 18-21
            strategy_id = "mean-reversion"
            win = i in {0, 1, 9, 10, 18}
        else:
            strategy_id = "breakout"
            win = True
        trades.append(
            make_trade(
                strategy_id=strategy_id,
                risk_level=risk_level,
                outcome=outcome,
                win=win,
                days_ago=1 + i * 0.5,
            )
        )
    return trades
