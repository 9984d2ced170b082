from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from ..db import Base


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Ordinal encoding used only for the risk/outcome correlation.
RISK_SCORES: dict[str, int] = {
    RiskLevel.LOW.value: 1,
    RiskLevel.MEDIUM.value: 2,
    RiskLevel.HIGH.value: 3,
}
DEFAULT_RISK_SCORE: int = RISK_SCORES[RiskLevel.MEDIUM.value]


def risk_level_name(risk_level: RiskLevel | str | None) -> str:
    """Plain string form of a risk level, as stored and reported."""
    if isinstance(risk_level, RiskLevel):
        return risk_level.value
    return "" if risk_level is None else str(risk_level)


def risk_score(risk_level: RiskLevel | str | None) -> int:
    """
    Map a risk level to its ordinal score (low=1, medium=2, high=3).

    Unknown or missing values score as medium, so malformed stored rows
    never break a report.
    """
    return RISK_SCORES.get(risk_level_name(risk_level), DEFAULT_RISK_SCORE)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Trade(Base):
    """
    A normalized trade record, either synced from a broker or entered by hand.

    `win` is set by whoever records the trade and is not derived from the
    sign of `outcome`.
    """

    __tablename__ = "trades"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    # Store-native object id of the owning user (24 hex characters).
    user_id: Mapped[str] = mapped_column(String(24), index=True, nullable=False)

    strategy_id: Mapped[str] = mapped_column(String(128), nullable=False)
    trade_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True, nullable=False)
    risk_level: Mapped[str] = mapped_column(String(16), nullable=False)  # 'low' / 'medium' / 'high'
    outcome: Mapped[float] = mapped_column(Float, nullable=False)
    win: Mapped[bool] = mapped_column(Boolean, nullable=False)
    performance_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    @validates("user_id")
    def _normalize_user_id(self, key: str, value: str) -> str:
        # Object ids are hex; store them lowercase so equality lookups match.
        return value.lower() if isinstance(value, str) else value

    @validates("trade_date")
    def _normalize_trade_date(self, key: str, value: datetime) -> datetime:
        # SQLite drops tzinfo, so persist UTC wall-clock time. Naive values are taken as UTC.
        if isinstance(value, datetime) and value.tzinfo is not None:
            return value.astimezone(timezone.utc)
        return value

    @property
    def risk_score(self) -> int:
        return risk_score(self.risk_level)
