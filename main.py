#!/usr/bin/env python3
import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence, Tuple

import aiohttp

import constants
from config import AppConfig, load_config
from replay.accumulator import ResultAccumulator
from replay.engine import ReplayEngine
from replay.errors import MalformedInputError, ReplayError
from replay.models import AssetIdentity, TradeRecord
from replay.normalizer import normalize
from services.chain_data_client import ChainDataClient
from services.routing_api_client import RoutingApiClient
from storage import JsonResultStore, load_dataset


def build_asset_pair(trade: TradeRecord, config: AppConfig) -> Tuple[AssetIdentity, AssetIdentity]:
    """Fixes the replayed pair from a dataset's first trade."""
    try:
        token_a = AssetIdentity.create(
            config.chain_id,
            trade.token_a_address,
            config.token_a_decimals,
            config.token_a_symbol,
        )
        token_b = AssetIdentity.create(
            config.chain_id,
            trade.token_b_address,
            config.token_b_decimals,
            config.token_b_symbol,
        )
    except ValueError as exc:
        raise MalformedInputError(f"invalid token address in first trade: {exc}") from exc
    return token_a, token_b


def _warn_on_foreign_pairs(trades: Sequence[TradeRecord], token_a: AssetIdentity, token_b: AssetIdentity) -> None:
    foreign = sum(
        1 for trade in trades
        if not (token_a.matches(trade.token_a_address) and token_b.matches(trade.token_b_address))
    )
    if foreign:
        print(
            f"{constants.C_YELLOW}Warning: {foreign} trade(s) do not match the {token_a.symbol}/{token_b.symbol} pair "
            f"and will be replayed as if they did.{constants.C_RESET}"
        )


async def replay_dataset(
    dataset_path: Path | str,
    output_path: Path | str,
    engine: ReplayEngine,
    chain_client: ChainDataClient,
    config: AppConfig,
) -> ResultAccumulator:
    """Replays one dataset and writes its results once, overwriting ``output_path``."""
    trades = normalize(load_dataset(dataset_path))
    print(f"{constants.C_BLUE}Loaded {len(trades)} transactions from {dataset_path}{constants.C_RESET}")

    current_block = await chain_client.get_block_number()
    print(f"Current blockNumber: {current_block}")

    accumulator = ResultAccumulator()
    if trades:
        token_a, token_b = build_asset_pair(trades[0], config)
        _warn_on_foreign_pairs(trades, token_a, token_b)
        await engine.replay_all(
            trades,
            token_a,
            token_b,
            accumulator,
            max_concurrency=config.max_concurrency,
        )

    print(
        f"{constants.C_GREEN}Processed {len(trades)} trades; found {len(accumulator)} where mixed routes "
        f"were better than the regular quote.{constants.C_RESET}"
    )

    written = await JsonResultStore(output_path).write_results(accumulator.all())
    print(f"Results written to {written}")
    return accumulator


async def run(config: AppConfig) -> None:
    async with aiohttp.ClientSession(headers={'User-Agent': constants.HTTP_USER_AGENT}) as session:
        chain_client = ChainDataClient(session, rpc_url=config.rpc_url, timeout=config.timeout)
        route_oracle = RoutingApiClient(
            session,
            api_url=config.routing_api_url,
            timeout=config.timeout,
            api_key=config.routing_api_key,
        )
        engine = ReplayEngine(chain_client, route_oracle)
        for dataset in config.datasets:
            await replay_dataset(dataset, config.output_path_for(dataset), engine, chain_client, config)


def main() -> None:
    """The main synchronous entry point for the application."""
    config = load_config()
    if config.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        asyncio.run(run(config))
    except MalformedInputError as exc:
        print(f"{constants.C_RED}Malformed input: {exc}{constants.C_RESET}")
        sys.exit(1)
    except FileNotFoundError as exc:
        print(f"{constants.C_RED}Dataset not found: {exc.filename}{constants.C_RESET}")
        sys.exit(1)
    except (ReplayError, aiohttp.ClientError, asyncio.TimeoutError) as exc:
        print(f"{constants.C_RED}Replay aborted before the current dataset's results were written: {exc}{constants.C_RESET}")
        sys.exit(1)


if __name__ == "__main__":
    main()
