from datetime import datetime

from pydantic import BaseModel, Field


class UnderperformingStrategyOut(BaseModel):
    strategy_id: str = Field(..., alias="strategyId")
    win_rate: float = Field(..., alias="winRate", ge=0.0, le=1.0)

    class Config:
        populate_by_name = True


class RiskAverageOut(BaseModel):
    risk_level: str = Field(..., alias="riskLevel")
    avg_outcome: float = Field(..., alias="avgOutcome")
    count: int

    class Config:
        populate_by_name = True


class ReportMeta(BaseModel):
    total_trades_analyzed: int = Field(..., alias="totalTradesAnalyzed")
    generated_at: datetime = Field(..., alias="generatedAt")

    class Config:
        populate_by_name = True


class OptimizationReport(BaseModel):
    """
    Strategy optimization report for one user over the trailing window.

    Field names are snake_case in Python and camelCase on the wire, so
    endpoints must serialize with `by_alias=True` (FastAPI does this for
    `response_model` by default).
    """

    user_id: str = Field(..., alias="userId")
    window_days: int = Field(..., alias="windowDays")
    underperforming_strategies: list[UnderperformingStrategyOut] = Field(
        default_factory=list, alias="underperformingStrategies"
    )
    # Ordered by risk level name (high, low, medium).
    risk_averages: list[RiskAverageOut] = Field(default_factory=list, alias="riskAverages")
    # None when fewer than two trades or no variance in risk or outcome.
    risk_outcome_correlation: float | None = Field(None, alias="riskOutcomeCorrelation")
    suggestions: list[str] = Field(default_factory=list)
    meta: ReportMeta

    class Config:
        populate_by_name = True
