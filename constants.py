#!/usr/bin/env python3
from typing import Dict

# --- ANSI Color Codes ---
C_GREEN = '\033[92m'
C_RED = '\033[91m'
C_YELLOW = '\033[93m'
C_BLUE = '\033[94m'
C_RESET = '\033[0m'

# --- Environment Variable Names ---
JSON_RPC_URL_ENV_VAR = 'JSON_RPC_URL'
INFURA_KEY_ENV_VAR = 'INFURA_KEY'
ROUTING_API_URL_ENV_VAR = 'ROUTING_API_URL'
ROUTING_API_KEY_ENV_VAR = 'ROUTING_API_KEY'

# --- API Configuration ---
INFURA_URL_TEMPLATE: Dict[int, str] = {
    1: 'https://mainnet.infura.io/v3/{key}',
    10: 'https://optimism-mainnet.infura.io/v3/{key}',
    137: 'https://polygon-mainnet.infura.io/v3/{key}',
    42161: 'https://arbitrum-mainnet.infura.io/v3/{key}',
}
HTTP_USER_AGENT = 'MixedRouteReplay/1.0'
DEFAULT_REQUEST_TIMEOUT = 30.0

# --- Routing ---
TRADE_TYPE_EXACT_INPUT = 'exactIn'
PROTOCOL_V2 = 'v2'
PROTOCOL_V3 = 'v3'
PROTOCOL_MIXED = 'mixed'
NO_ROUTE_ERROR_CODE = 'NO_ROUTE'

# --- Dataset Defaults ---
MALFORMED_HEX_PREFIX = '\\x'
HEX_PREFIX = '0x'
DEFAULT_CHAIN_ID = 1
DEFAULT_TOKEN_DECIMALS = 18
DEFAULT_TOKEN_A_SYMBOL = 'UNI'
DEFAULT_TOKEN_B_SYMBOL = 'AAVE'
RESULTS_DIR = 'results'
RESULTS_SUFFIX = '-results.json'
