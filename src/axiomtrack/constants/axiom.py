"""Axiom venue constants."""

from typing import Final

# REST paths
TRENDING_PATH: Final[str] = "/axiom-trending"
PAIR_INFO_PATH: Final[str] = "/pair-info"
PULSE_PATH: Final[str] = "/pulse"

# Trending aggregation windows
TIMEFRAMES: Final[tuple[str, ...]] = ("1h", "6h", "24h")
DEFAULT_TIMEFRAME: Final[str] = "1h"

DEFAULT_LAUNCH_LIMIT: Final[int] = 20

# Session cookie names
ACCESS_TOKEN_COOKIE: Final[str] = "auth-access-token"
REFRESH_TOKEN_COOKIE: Final[str] = "auth-refresh-token"

USER_AGENT: Final[str] = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

# Push channel protocol
SUBSCRIBE_MESSAGE_TYPE: Final[str] = "subscribe"
NEW_TOKENS_CHANNEL: Final[str] = "new_tokens"
NEW_TOKEN_MESSAGE_TYPE: Final[str] = "new_token"

SOURCE_NAME: Final[str] = "Axiom"
