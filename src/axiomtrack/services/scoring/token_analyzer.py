"""Deterministic token signal scoring.

Scoring formula:
1. Liquidity: liquidity_sol / 1000 * 100, capped at 100
2. Volume: volume_24h / 1M * 100, capped at 100
3. Momentum: 24h price change doubled, clamped to [-100, 100]
4. Risk: 100 - holders / 1000 * 100 (capped), fewer holders = riskier
5. Composite: 0.30 liquidity + 0.30 volume + 0.25 momentum + 0.15 (100 - risk)

The recommendation is an ordered cascade; the first matching branch wins.
"""

from __future__ import annotations

from collections.abc import Iterable

from axiomtrack.constants.scoring import (
    AVOID_MAX_LIQUIDITY_SOL,
    AVOID_MIN_RISK,
    BUY_MIN_COMPOSITE,
    BUY_MIN_LIQUIDITY_SOL,
    DEFAULT_ANALYSIS_LIMIT,
    HOLD_MIN_COMPOSITE,
    HOLDER_SATURATION,
    HOLDER_WEIGHT,
    LIQUIDITY_SATURATION_SOL,
    LIQUIDITY_WEIGHT,
    MOMENTUM_MULTIPLIER,
    MOMENTUM_WEIGHT,
    SCORE_CEILING,
    STRONG_BUY_MIN_COMPOSITE,
    STRONG_BUY_MIN_LIQUIDITY_SOL,
    STRONG_BUY_MIN_MOMENTUM,
    VOLUME_SATURATION_24H,
    VOLUME_WEIGHT,
)
from axiomtrack.models.analysis import Recommendation, SignalScores, TokenAnalysis
from axiomtrack.models.token import TokenMetrics


def score_signals(token: TokenMetrics) -> SignalScores:
    """Compute the four sub-scores for a token."""
    liquidity = min(token.liquidity_sol / LIQUIDITY_SATURATION_SOL * 100, SCORE_CEILING)
    volume = min(token.volume_24h / VOLUME_SATURATION_24H * 100, SCORE_CEILING)

    doubled = token.price_change_24h * MOMENTUM_MULTIPLIER
    if token.price_change_24h > 0:
        momentum = min(doubled, SCORE_CEILING)
    else:
        momentum = max(doubled, -SCORE_CEILING)

    risk = SCORE_CEILING - min(token.holders / HOLDER_SATURATION * 100, SCORE_CEILING)

    return SignalScores(
        liquidity_score=liquidity,
        volume_score=volume,
        momentum_score=momentum,
        risk_score=risk,
    )


def composite_score(signals: SignalScores) -> float:
    return (
        signals.liquidity_score * LIQUIDITY_WEIGHT
        + signals.volume_score * VOLUME_WEIGHT
        + signals.momentum_score * MOMENTUM_WEIGHT
        + (SCORE_CEILING - signals.risk_score) * HOLDER_WEIGHT
    )


def classify(
    token: TokenMetrics, signals: SignalScores, composite: float
) -> tuple[Recommendation, str]:
    """Apply the recommendation cascade.

    Returns:
        Recommendation and its reasoning text.
    """
    liquidity_sol = token.liquidity_sol

    if (
        composite >= STRONG_BUY_MIN_COMPOSITE
        and liquidity_sol > STRONG_BUY_MIN_LIQUIDITY_SOL
        and signals.momentum_score > STRONG_BUY_MIN_MOMENTUM
    ):
        return (
            Recommendation.STRONG_BUY,
            f"High liquidity ({liquidity_sol:.0f} SOL), strong volume, positive momentum "
            f"({signals.momentum_score:+.1f})",
        )
    if composite >= BUY_MIN_COMPOSITE and liquidity_sol > BUY_MIN_LIQUIDITY_SOL:
        return (
            Recommendation.BUY,
            f"Good fundamentals with {liquidity_sol:.0f} SOL liquidity and "
            f"{token.holders} holders",
        )
    if composite >= HOLD_MIN_COMPOSITE:
        return Recommendation.HOLD, "Mixed signals - monitor closely"
    if liquidity_sol < AVOID_MAX_LIQUIDITY_SOL or signals.risk_score > AVOID_MIN_RISK:
        return (
            Recommendation.AVOID,
            f"High risk: Low liquidity ({liquidity_sol:.0f} SOL) or few holders "
            f"({token.holders})",
        )
    return (
        Recommendation.SELL,
        f"Negative momentum ({signals.momentum_score:+.1f}) and weak fundamentals",
    )


def analyze_token(token: TokenMetrics) -> TokenAnalysis:
    """Score one token and derive a recommendation.

    Pure: no I/O and no shared state; equal inputs give equal outputs.

    Args:
        token: Token metrics (trending or single-token).

    Returns:
        TokenAnalysis with sub-scores, composite, recommendation,
        confidence in [0, 1] and reasoning.
    """
    signals = score_signals(token)
    composite = composite_score(signals)
    recommendation, reasoning = classify(token, signals, composite)

    return TokenAnalysis(
        token=token,
        signals=signals,
        composite_score=composite,
        recommendation=recommendation,
        confidence=min(max(composite / 100, 0.0), 1.0),
        reasoning=reasoning,
    )


def analyze_tokens(
    tokens: Iterable[TokenMetrics], limit: int = DEFAULT_ANALYSIS_LIMIT
) -> list[TokenAnalysis]:
    """Analyze the first ``limit`` tokens in order."""
    analyses: list[TokenAnalysis] = []
    for token in tokens:
        if len(analyses) >= limit:
            break
        analyses.append(analyze_token(token))
    return analyses
