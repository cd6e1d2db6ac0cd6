#!/usr/bin/env python3
import asyncio
import logging
from typing import Any, Optional

from aiohttp import ClientSession

from replay.errors import ChainLookupError, RpcError

_INVALID_PARAMS_CODE = -32602


class ChainDataClient:
    """Resolves transaction and block metadata through a JSON-RPC node."""

    def __init__(
        self,
        session: ClientSession,
        *,
        rpc_url: str,
        timeout: float,
    ) -> None:
        self._session = session
        self._rpc_url = rpc_url
        self._timeout = timeout
        self._id_lock = asyncio.Lock()
        self._next_request_id = 1
        self.logger = logging.getLogger(__name__)

    async def get_transaction_block_number(self, tx_hash: str) -> int:
        """Block number that confirmed ``tx_hash``. Raises ``ChainLookupError`` if unknown."""
        try:
            receipt = await self._rpc_call("eth_getTransactionReceipt", [tx_hash])
        except RpcError as exc:
            error = exc.args[0] if exc.args else None
            if isinstance(error, dict) and error.get('code') == _INVALID_PARAMS_CODE:
                raise ChainLookupError(tx_hash, reason=f"invalid transaction hash ({error.get('message')})") from exc
            raise
        if not receipt:
            raise ChainLookupError(tx_hash)
        block_hex = receipt.get('blockNumber')
        if not block_hex:
            raise ChainLookupError(tx_hash, reason="transaction is pending")
        return int(block_hex, 16)

    async def get_block_number(self) -> int:
        result = await self._rpc_call("eth_blockNumber", [])
        if result is None:
            raise RpcError("eth_blockNumber returned no result")
        return int(result, 16)

    async def _rpc_call(self, method: str, params: list) -> Optional[Any]:
        request_id = await self._get_request_id()
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": request_id,
        }
        self.logger.debug("rpc %s #%s params=%s", method, request_id, params)
        async with self._session.post(self._rpc_url, json=payload, timeout=self._timeout) as response:
            response.raise_for_status()
            data = await response.json()
        if 'error' in data:
            raise RpcError(data['error'])
        return data.get('result')

    async def _get_request_id(self) -> int:
        async with self._id_lock:
            request_id = self._next_request_id
            self._next_request_id += 1
        return request_id
