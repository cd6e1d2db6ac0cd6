"""Exceptions raised while replaying historical swaps."""


class ReplayError(Exception):
    """Base class for replay failures."""


class MalformedInputError(ReplayError):
    """A raw trade record does not have the expected shape. Fatal for the run."""


class ChainLookupError(ReplayError):
    """A transaction hash could not be resolved to a block number."""

    def __init__(self, tx_hash: str, reason: str = "transaction not found") -> None:
        super().__init__(f"{reason}: {tx_hash}")
        self.tx_hash = tx_hash
        self.reason = reason


class NoRouteFound(ReplayError):
    """The routing API returned no viable route for a query."""


class RpcError(ReplayError):
    """Unexpected response from the chain node or the routing API."""
