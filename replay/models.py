#!/usr/bin/env python3
"""Dataclasses shared by the normalizer, the replay engine and the service clients."""
from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Context, Decimal
from typing import Any, Dict, Optional, Tuple, Union

from web3 import Web3

RawAmount = Union[int, float, str]


def parse_raw_amount(value: Any) -> int:
    """Converts a raw (smallest-unit) amount to an int.

    Accepts ints, integral floats and digit strings. Raises ``ValueError`` for
    anything negative, fractional or non-numeric.
    """
    if isinstance(value, bool):
        raise ValueError(f"raw amount must be numeric, got {value!r}")
    if isinstance(value, int):
        amount = value
    elif isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise ValueError(f"raw amount must be integral, got {value!r}")
        amount = int(value)
    elif isinstance(value, str) and value.isdigit():
        amount = int(value)
    else:
        raise ValueError(f"raw amount must be a non-negative integer, got {value!r}")
    if amount < 0:
        raise ValueError(f"raw amount must be non-negative, got {value!r}")
    return amount


@dataclass(frozen=True)
class TradeRecord:
    """A historical swap, as exported from the trades dataset."""
    token_a_address: str
    token_a_amount_raw: RawAmount
    token_b_address: str
    token_b_amount_raw: RawAmount
    usd_amount: Union[int, float]
    tx_hash: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'token_a_address': self.token_a_address,
            'token_a_amount_raw': self.token_a_amount_raw,
            'token_b_address': self.token_b_address,
            'token_b_amount_raw': self.token_b_amount_raw,
            'usd_amount': self.usd_amount,
            'tx_hash': self.tx_hash,
        }


@dataclass(frozen=True)
class AssetIdentity:
    """One side of the replayed trading pair."""
    chain_id: int
    address: str
    decimals: int
    symbol: str

    @classmethod
    def create(cls, chain_id: int, address: str, decimals: int, symbol: str) -> AssetIdentity:
        if decimals < 0:
            raise ValueError(f"decimals must be non-negative, got {decimals}")
        return cls(
            chain_id=chain_id,
            address=Web3.to_checksum_address(address),
            decimals=decimals,
            symbol=symbol,
        )

    def matches(self, address: str) -> bool:
        return self.address.lower() == address.lower()


@dataclass(frozen=True)
class CurrencyAmount:
    """An integer amount of ``asset`` in its smallest unit."""
    asset: AssetIdentity
    raw: int

    @classmethod
    def from_raw_amount(cls, asset: AssetIdentity, raw: RawAmount) -> CurrencyAmount:
        return cls(asset=asset, raw=parse_raw_amount(raw))

    def _check_same_asset(self, other: CurrencyAmount) -> None:
        if self.asset != other.asset:
            raise ValueError(
                f"cannot compare {self.asset.symbol} amount with {other.asset.symbol} amount"
            )

    def __gt__(self, other: CurrencyAmount) -> bool:
        self._check_same_asset(other)
        return self.raw > other.raw

    def __sub__(self, other: CurrencyAmount) -> CurrencyAmount:
        self._check_same_asset(other)
        return CurrencyAmount(asset=self.asset, raw=self.raw - other.raw)

    def to_exact(self) -> str:
        """Full-precision decimal string, without exponent or trailing zeros."""
        ctx = Context(prec=max(len(str(abs(self.raw))), 1))
        exact = Decimal(self.raw).scaleb(-self.asset.decimals, ctx).normalize(ctx)
        return format(exact, 'f')


@dataclass(frozen=True)
class RouteQuery:
    """A single quote request pinned to a historical block."""
    amount: CurrencyAmount
    quote_asset: AssetIdentity
    trade_direction: str
    block_number: int
    protocols: Tuple[str, ...]
    force_mixed_routes: bool = False


@dataclass(frozen=True)
class RouteResult:
    quote: CurrencyAmount
    route: str


@dataclass(frozen=True)
class ComparisonOutcome:
    """A trade for which the forced mixed route beat the baseline quote."""
    mixed_route_quote: str
    old_quote: str
    delta: str
    data: TradeRecord
    mixed_route: Optional[str] = None
    baseline_route: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'mixedRouteQuote': self.mixed_route_quote,
            'oldQuote': self.old_quote,
            'delta': self.delta,
            'data': self.data.to_dict(),
        }
