"""Field-mapping tables for untyped Axiom payloads.

Each target field lists the upstream keys it may arrive under, in priority
order, plus a default. A candidate is used when it is present and truthy after
coercion; null, empty strings and zero fall through to the next key, then to
the default. Supporting a new upstream key variant means editing a table here.
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from axiomtrack.core.exceptions import MalformedPayloadError

FieldKind = Literal["str", "float", "int", "epoch_ms"]


def now_ms() -> int:
    return int(time.time() * 1000)


def now_iso() -> str:
    return datetime.now(UTC).isoformat()


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Mapping of one target field to its candidate upstream keys."""

    target: str
    sources: tuple[str, ...]
    default: Any = None
    kind: FieldKind = "str"
    default_factory: Callable[[], Any] | None = None

    def resolve(self, payload: Mapping[str, Any], default: Any = None) -> Any:
        for key in self.sources:
            value = coerce(payload.get(key), self.kind)
            if value:
                return value
        if default is not None:
            return default
        if self.default_factory is not None:
            return self.default_factory()
        return self.default


def coerce(value: Any, kind: FieldKind) -> Any:
    """Coerce a raw upstream value to ``kind``; None when it cannot be."""
    if value is None or isinstance(value, bool):
        return None
    if kind == "str":
        if isinstance(value, str):
            return value
        if isinstance(value, int | float):
            return str(value)
        return None
    if kind == "epoch_ms":
        return _to_epoch_ms(value)

    number = _to_float(value)
    if number is None:
        return None
    if kind == "int":
        return int(number)
    return number


def _to_float(value: Any) -> float | None:
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _to_epoch_ms(value: Any) -> int | None:
    number = _to_float(value)
    if number is not None:
        return int(number)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return int(parsed.timestamp() * 1000)
    return None


# =============================================================================
# Tables
# =============================================================================

TOKEN_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("mint", ("tokenMint", "mint"), ""),
    FieldSpec("name", ("name", "tokenName"), "Unknown"),
    FieldSpec("symbol", ("symbol", "tokenTicker"), "???"),
    FieldSpec("liquidity_sol", ("liquiditySol", "liquidity_sol"), 0.0, "float"),
    FieldSpec("liquidity_usd", ("liquidityUsd",), 0.0, "float"),
    FieldSpec("volume_24h", ("volume24h", "volumeSol"), 0.0, "float"),
    FieldSpec("price_usd", ("priceUsd",), 0.0, "float"),
    FieldSpec("price_change_24h", ("priceChange24h",), 0.0, "float"),
    FieldSpec("holders", ("holders",), 0, "int"),
    FieldSpec("market_cap", ("marketCap", "marketCapSol"), 0.0, "float"),
    FieldSpec("created_at", ("createdAt",), default_factory=now_iso),
)

TRENDING_FIELDS: tuple[FieldSpec, ...] = (
    *TOKEN_FIELDS,
    FieldSpec("score", ("score",), 0.0, "float"),
)

LAUNCH_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("mint", ("tokenMint", "mint"), ""),
    FieldSpec("name", ("name", "tokenName"), "New Token"),
    FieldSpec("symbol", ("symbol", "tokenTicker"), "???"),
    FieldSpec("liquidity_sol", ("liquiditySol", "liquidity_sol"), 0.0, "float"),
    FieldSpec("deployer", ("deployer", "creator"), ""),
    FieldSpec("timestamp", ("createdAt",), kind="epoch_ms", default_factory=now_ms),
)

# Push-channel payloads carry the launch fields under their own names
STREAM_LAUNCH_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("mint", ("mint",), ""),
    FieldSpec("name", ("name",), "New Token"),
    FieldSpec("symbol", ("symbol",), "???"),
    FieldSpec("liquidity_sol", ("liquiditySol",), 0.0, "float"),
    FieldSpec("deployer", ("deployer",), ""),
    FieldSpec("timestamp", ("timestamp",), kind="epoch_ms", default_factory=now_ms),
)


def normalize(
    payload: Any,
    fields: tuple[FieldSpec, ...],
    defaults: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Map one upstream object onto target field names.

    Args:
        payload: Decoded JSON object.
        fields: Field table to apply.
        defaults: Per-call defaults that take precedence over the table's.

    Raises:
        MalformedPayloadError: If ``payload`` is not a JSON object.
    """
    if not isinstance(payload, Mapping):
        raise MalformedPayloadError(f"expected object, got {type(payload).__name__}")
    overrides = defaults or {}
    return {spec.target: spec.resolve(payload, overrides.get(spec.target)) for spec in fields}
