"""Pydantic models for Axiom market data and token analyses."""

from axiomtrack.models.analysis import Recommendation, SignalScores, TokenAnalysis
from axiomtrack.models.token import LaunchEvent, TokenMetrics, TrendingMetrics

__all__ = [
    "LaunchEvent",
    "Recommendation",
    "SignalScores",
    "TokenAnalysis",
    "TokenMetrics",
    "TrendingMetrics",
]
