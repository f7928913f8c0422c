"""Token analysis models produced by the scoring engine."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny

from axiomtrack.models.token import TokenMetrics


class Recommendation(str, Enum):
    """Discrete trade recommendation."""

    STRONG_BUY = "strong_buy"
    BUY = "buy"
    HOLD = "hold"
    SELL = "sell"
    AVOID = "avoid"


class SignalScores(BaseModel):
    """Weighted sub-scores for one token.

    Attributes:
        liquidity_score: 0..100, saturates at 1000 SOL.
        volume_score: 0..100, saturates at 1M 24h volume.
        momentum_score: -100..100, doubled 24h price change.
        risk_score: 0..100, higher with fewer holders.
    """

    model_config = ConfigDict(populate_by_name=True)

    liquidity_score: float = Field(alias="liquidityScore")
    volume_score: float = Field(alias="volumeScore")
    momentum_score: float = Field(alias="momentumScore")
    risk_score: float = Field(alias="riskScore")


class TokenAnalysis(BaseModel):
    """Scoring output for one token."""

    model_config = ConfigDict(populate_by_name=True)

    token: SerializeAsAny[TokenMetrics]
    signals: SignalScores
    composite_score: float = Field(alias="compositeScore")
    recommendation: Recommendation
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str
