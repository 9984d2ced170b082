"""
SQLAlchemy ORM models for the trade store.
"""

from .trade import RiskLevel, Trade, risk_level_name, risk_score

__all__ = [
    "RiskLevel",
    "Trade",
    "risk_level_name",
    "risk_score",
]
