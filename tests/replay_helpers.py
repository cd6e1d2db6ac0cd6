
from replay.errors import ChainLookupError
from replay.models import CurrencyAmount, RouteResult

UNI_ADDRESS = '0x1f9840a85d5af5bf1d1762f925bdaddc4201f984'
AAVE_ADDRESS = '0x7fc66500c84a76ad7e9c93437bfc5ac33e2ddae9'
ONE_TOKEN = 10 ** 18


class FakeChainClient:
    def __init__(self, blocks, current_block=17_000_000):
        self._blocks = dict(blocks)
        self._current_block = current_block
        self.lookups = []

    async def get_transaction_block_number(self, tx_hash):
        self.lookups.append(tx_hash)
        if tx_hash not in self._blocks:
            raise ChainLookupError(tx_hash)
        return self._blocks[tx_hash]

    async def get_block_number(self):
        return self._current_block


class FakeRouteOracle:
    """Answers quotes keyed by (block_number, force_mixed_routes); values are whole tokens or None."""

    def __init__(self, quotes):
        self._quotes = dict(quotes)
        self.queries = []

    async def route(self, query):
        self.queries.append(query)
        whole = self._quotes.get((query.block_number, query.force_mixed_routes))
        if whole is None:
            return None
        label = 'mixed' if query.force_mixed_routes else 'v3'
        return RouteResult(
            quote=CurrencyAmount(asset=query.quote_asset, raw=whole * ONE_TOKEN),
            route=f"[{label}] UNI -> AAVE",
        )


def raw_row(tx_hash, amount_in=5 * ONE_TOKEN, amount_out=ONE_TOKEN, usd_amount=42.5,
            token_a=UNI_ADDRESS, token_b=AAVE_ADDRESS):
    return {
        'data': {
            'token_a_address': token_a.replace('0x', '\\x', 1),
            'token_a_amount_raw': amount_in,
            'token_b_address': token_b.replace('0x', '\\x', 1),
            'token_b_amount_raw': amount_out,
            'usd_amount': usd_amount,
            'tx_hash': tx_hash.replace('0x', '\\x', 1),
        }
    }


