"""
Pydantic models (schemas) used for response payloads.
"""

from .optimization import (
    OptimizationReport,
    ReportMeta,
    RiskAverageOut,
    UnderperformingStrategyOut,
)

__all__ = [
    "OptimizationReport",
    "ReportMeta",
    "RiskAverageOut",
    "UnderperformingStrategyOut",
]
