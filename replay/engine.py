#!/usr/bin/env python3
"""Replays a historical swap twice against the routing API.

The first quote only considers non-mixed routes, the second forces mixed
routes. Both are pinned to the block the swap was confirmed in, so the delta
between them measures what mixed routing would have added at that state.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence, Tuple

from constants import (
    C_BLUE,
    C_GREEN,
    C_RED,
    C_RESET,
    C_YELLOW,
    PROTOCOL_MIXED,
    PROTOCOL_V2,
    PROTOCOL_V3,
    TRADE_TYPE_EXACT_INPUT,
)
from replay.accumulator import ResultAccumulator
from replay.errors import ChainLookupError, NoRouteFound
from replay.models import (
    AssetIdentity,
    ComparisonOutcome,
    CurrencyAmount,
    RouteQuery,
    RouteResult,
    TradeRecord,
)

if TYPE_CHECKING:
    from services.chain_data_client import ChainDataClient
    from services.routing_api_client import RoutingApiClient


@dataclass(frozen=True)
class RoutingConfig:
    trade_direction: str
    baseline_protocols: Tuple[str, ...]
    mixed_protocols: Tuple[str, ...]
    force_mixed: bool


DEFAULT_ROUTING_CONFIG = RoutingConfig(
    # Not every exported trade was exact-input; all are replayed as such.
    trade_direction=TRADE_TYPE_EXACT_INPUT,
    baseline_protocols=(PROTOCOL_V2, PROTOCOL_V3),
    mixed_protocols=(PROTOCOL_V2, PROTOCOL_V3, PROTOCOL_MIXED),
    force_mixed=True,
)


class ReplayEngine:
    def __init__(
        self,
        chain_client: ChainDataClient,
        route_oracle: RoutingApiClient,
        routing_config: RoutingConfig = DEFAULT_ROUTING_CONFIG,
    ) -> None:
        self.chain_client = chain_client
        self.route_oracle = route_oracle
        self.routing_config = routing_config

    async def evaluate(
        self,
        trade: TradeRecord,
        asset_a: AssetIdentity,
        asset_b: AssetIdentity,
    ) -> Optional[ComparisonOutcome]:
        """Returns an outcome only when the forced mixed route strictly beats the baseline."""
        try:
            block_number = await self.chain_client.get_transaction_block_number(trade.tx_hash)
        except ChainLookupError as exc:
            print(f"{C_RED}Could not resolve block for {trade.tx_hash} ({exc.reason}); skipping {trade}{C_RESET}")
            return None

        print(f"{C_BLUE}[{trade.tx_hash}] blockNumber: {block_number}{C_RESET}")

        amount_in = CurrencyAmount.from_raw_amount(asset_a, trade.token_a_amount_raw)

        try:
            baseline = await self._quote(
                amount_in,
                asset_b,
                block_number,
                self.routing_config.baseline_protocols,
                force_mixed_routes=False,
            )
            mixed = await self._quote(
                amount_in,
                asset_b,
                block_number,
                self.routing_config.mixed_protocols,
                force_mixed_routes=self.routing_config.force_mixed,
            )
        except NoRouteFound as exc:
            print(f"{C_YELLOW}Could not find {exc} for {trade}{C_RESET}")
            return None

        executed = CurrencyAmount.from_raw_amount(asset_b, trade.token_b_amount_raw)
        print(f"Original swap executed on chain quote was: {executed.to_exact()} {asset_b.symbol}")
        print(f"Old quote returned: {baseline.quote.to_exact()} via {baseline.route}")
        print(f"Mixed route quote returned: {mixed.quote.to_exact()} via {mixed.route}")

        if not mixed.quote > baseline.quote:
            return None

        delta = mixed.quote - baseline.quote
        print(f"{C_GREEN}Mixed route beats the regular quote. Gain: {delta.to_exact()} {asset_b.symbol}{C_RESET}")
        return ComparisonOutcome(
            mixed_route_quote=mixed.quote.to_exact(),
            old_quote=baseline.quote.to_exact(),
            delta=delta.to_exact(),
            data=trade,
            mixed_route=mixed.route,
            baseline_route=baseline.route,
        )

    async def replay_all(
        self,
        trades: Sequence[TradeRecord],
        asset_a: AssetIdentity,
        asset_b: AssetIdentity,
        accumulator: ResultAccumulator,
        *,
        max_concurrency: int = 1,
    ) -> ResultAccumulator:
        """Evaluates every trade and appends the winners to ``accumulator`` in input order."""
        if max_concurrency <= 1:
            for trade in trades:
                outcome = await self.evaluate(trade, asset_a, asset_b)
                if outcome is not None:
                    accumulator.add(outcome)
            return accumulator

        semaphore = asyncio.Semaphore(max_concurrency)

        async def _bounded(trade: TradeRecord) -> Optional[ComparisonOutcome]:
            async with semaphore:
                return await self.evaluate(trade, asset_a, asset_b)

        # gather keeps input order regardless of completion order
        outcomes = await asyncio.gather(*(_bounded(trade) for trade in trades))
        for outcome in outcomes:
            if outcome is not None:
                accumulator.add(outcome)
        return accumulator

    async def _quote(
        self,
        amount_in: CurrencyAmount,
        quote_asset: AssetIdentity,
        block_number: int,
        protocols: Tuple[str, ...],
        *,
        force_mixed_routes: bool,
    ) -> RouteResult:
        query = RouteQuery(
            amount=amount_in,
            quote_asset=quote_asset,
            trade_direction=self.routing_config.trade_direction,
            block_number=block_number,
            protocols=protocols,
            force_mixed_routes=force_mixed_routes,
        )
        result = await self.route_oracle.route(query)
        if result is None:
            raise NoRouteFound("mixed route swap" if force_mixed_routes else "swap")
        return result
