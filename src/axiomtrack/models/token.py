"""Token market data models.

These models are the fixed internal shape that untyped Axiom payloads are
normalized into. Python attributes are snake_case; serialized output uses the
venue's camelCase names (``liquiditySol``, ``priceChange24h``, ...).
"""

from pydantic import BaseModel, ConfigDict, Field


class TokenMetrics(BaseModel):
    """Market-observed token.

    Attributes:
        mint: Token mint address.
        name: Token name.
        symbol: Token ticker symbol.
        liquidity_sol: Pool liquidity in SOL.
        liquidity_usd: Pool liquidity in USD.
        volume_24h: 24-hour trading volume.
        price_usd: Current price in USD.
        price_change_24h: 24-hour price change in percent.
        holders: Holder count.
        market_cap: Market capitalization.
        created_at: Creation timestamp as reported upstream (ISO string).
    """

    model_config = ConfigDict(populate_by_name=True)

    mint: str = ""
    name: str = "Unknown"
    symbol: str = "???"
    liquidity_sol: float = Field(default=0.0, alias="liquiditySol")
    liquidity_usd: float = Field(default=0.0, alias="liquidityUsd")
    volume_24h: float = Field(default=0.0, alias="volume24h")
    price_usd: float = Field(default=0.0, alias="priceUsd")
    price_change_24h: float = Field(default=0.0, alias="priceChange24h")
    holders: int = 0
    market_cap: float = Field(default=0.0, alias="marketCap")
    created_at: str = Field(default="", alias="createdAt")


class TrendingMetrics(TokenMetrics):
    """Token from the trending endpoint with its ranking context.

    ``rank`` is the 1-based position in the list as received; the venue's
    ``score`` is passed through and never used for ordering.
    """

    rank: int = Field(ge=1)
    score: float = 0.0


class LaunchEvent(BaseModel):
    """Newly deployed token, from the pulse endpoint or the push channel.

    Attributes:
        mint: Token mint address.
        name: Token name.
        symbol: Token ticker symbol.
        liquidity_sol: Initial pool liquidity in SOL.
        deployer: Deployer wallet address.
        timestamp: Launch time in epoch milliseconds.
    """

    model_config = ConfigDict(populate_by_name=True)

    mint: str = ""
    name: str = "New Token"
    symbol: str = "???"
    liquidity_sol: float = Field(default=0.0, alias="liquiditySol")
    deployer: str = ""
    timestamp: int = 0
