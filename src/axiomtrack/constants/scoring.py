"""Token signal scoring constants."""

from typing import Final

# =============================================================================
# Sub-score saturation points
# =============================================================================

LIQUIDITY_SATURATION_SOL: Final[float] = 1_000.0
VOLUME_SATURATION_24H: Final[float] = 1_000_000.0
HOLDER_SATURATION: Final[float] = 1_000.0
MOMENTUM_MULTIPLIER: Final[float] = 2.0
SCORE_CEILING: Final[float] = 100.0

# =============================================================================
# Composite weights (sum to 1.0)
# =============================================================================

LIQUIDITY_WEIGHT: Final[float] = 0.30
VOLUME_WEIGHT: Final[float] = 0.30
MOMENTUM_WEIGHT: Final[float] = 0.25
HOLDER_WEIGHT: Final[float] = 0.15  # applied to (100 - risk)

# =============================================================================
# Recommendation cascade
# =============================================================================

STRONG_BUY_MIN_COMPOSITE: Final[float] = 80.0
STRONG_BUY_MIN_LIQUIDITY_SOL: Final[float] = 500.0  # strict >
STRONG_BUY_MIN_MOMENTUM: Final[float] = 10.0  # strict >

BUY_MIN_COMPOSITE: Final[float] = 60.0
BUY_MIN_LIQUIDITY_SOL: Final[float] = 100.0  # strict >

HOLD_MIN_COMPOSITE: Final[float] = 40.0

AVOID_MAX_LIQUIDITY_SOL: Final[float] = 10.0  # strict <
AVOID_MIN_RISK: Final[float] = 80.0  # strict >

# Number of tokens analyzed per trending batch
DEFAULT_ANALYSIS_LIMIT: Final[int] = 10
