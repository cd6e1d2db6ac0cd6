#!/usr/bin/env python3
import os
import argparse
from pathlib import Path
from typing import NamedTuple, Optional
import constants

class AppConfig(NamedTuple):
    """Typed configuration object."""
    datasets: list[str]
    output: Optional[str]
    chain_id: int
    token_a_symbol: str
    token_b_symbol: str
    token_a_decimals: int
    token_b_decimals: int
    max_concurrency: int
    timeout: float
    verbose: bool
    rpc_url: str
    routing_api_url: str
    routing_api_key: Optional[str]

    def output_path_for(self, dataset: str) -> Path:
        """Where the results of ``dataset`` are written."""
        if self.output:
            return Path(self.output)
        return Path(constants.RESULTS_DIR) / f"{Path(dataset).stem}{constants.RESULTS_SUFFIX}"


def _resolve_rpc_url(chain_id: int) -> Optional[str]:
    rpc_url = os.environ.get(constants.JSON_RPC_URL_ENV_VAR)
    if rpc_url:
        return rpc_url
    infura_key = os.environ.get(constants.INFURA_KEY_ENV_VAR)
    template = constants.INFURA_URL_TEMPLATE.get(chain_id)
    if infura_key and template:
        return template.format(key=infura_key)
    return None


def load_config() -> AppConfig:
    """
    Parses command-line arguments and loads environment variables to create a configuration object.
    """
    parser = argparse.ArgumentParser(
        description="Replay historical swaps against a routing API and measure the gain of forcing mixed routes.",
        epilog="Example: ./main.py --dataset data/uni-aave-100.json --token-a-symbol UNI --token-b-symbol AAVE"
    )
    parser.add_argument('--dataset', nargs='+', required=True, help='One or more JSON trade exports to replay.')
    parser.add_argument('--output', type=str, help='Output file for the results (only valid with a single dataset).')
    parser.add_argument('--chain-id', type=int, default=constants.DEFAULT_CHAIN_ID, help='Chain ID the trades were executed on (default: 1).')
    parser.add_argument('--token-a-symbol', type=str, default=constants.DEFAULT_TOKEN_A_SYMBOL, help='Symbol of the input token (default: UNI).')
    parser.add_argument('--token-b-symbol', type=str, default=constants.DEFAULT_TOKEN_B_SYMBOL, help='Symbol of the output token (default: AAVE).')
    parser.add_argument('--token-a-decimals', type=int, default=constants.DEFAULT_TOKEN_DECIMALS, help='Decimals of the input token (default: 18).')
    parser.add_argument('--token-b-decimals', type=int, default=constants.DEFAULT_TOKEN_DECIMALS, help='Decimals of the output token (default: 18).')
    parser.add_argument('--max-concurrency', type=int, default=1, help='Number of trades replayed in parallel (default: 1, sequential).')
    parser.add_argument('--timeout', type=float, default=constants.DEFAULT_REQUEST_TIMEOUT, help='Timeout in seconds for each RPC or routing request (default: 30).')
    parser.add_argument('--verbose', action='store_true', help='Log request-level debug output.')

    args = parser.parse_args()

    if args.output and len(args.dataset) > 1:
        parser.error('--output can only be used with a single --dataset.')
    if args.max_concurrency < 1:
        parser.error('--max-concurrency must be at least 1.')
    if args.token_a_decimals < 0 or args.token_b_decimals < 0:
        parser.error('Token decimals must be non-negative.')

    # Load from environment
    rpc_url = _resolve_rpc_url(args.chain_id)
    routing_api_url = os.environ.get(constants.ROUTING_API_URL_ENV_VAR)
    routing_api_key = os.environ.get(constants.ROUTING_API_KEY_ENV_VAR)

    if not rpc_url:
        print(f"{constants.C_RED}Neither {constants.JSON_RPC_URL_ENV_VAR} nor {constants.INFURA_KEY_ENV_VAR} is set; a JSON-RPC endpoint is required to resolve transaction blocks.{constants.C_RESET}")
        exit(1)

    if not routing_api_url:
        print(f"{constants.C_RED}{constants.ROUTING_API_URL_ENV_VAR} environment variable not set; a routing API is required to request quotes.{constants.C_RESET}")
        exit(1)

    return AppConfig(
        datasets=args.dataset,
        output=args.output,
        chain_id=args.chain_id,
        token_a_symbol=args.token_a_symbol,
        token_b_symbol=args.token_b_symbol,
        token_a_decimals=args.token_a_decimals,
        token_b_decimals=args.token_b_decimals,
        max_concurrency=args.max_concurrency,
        timeout=args.timeout,
        verbose=args.verbose,
        rpc_url=rpc_url,
        routing_api_url=routing_api_url.rstrip('/'),
        routing_api_key=routing_api_key,
    )
