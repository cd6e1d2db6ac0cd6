#!/usr/bin/env python3
import logging
from http import HTTPStatus
from typing import Dict, Optional

import aiohttp

from constants import NO_ROUTE_ERROR_CODE
from replay.errors import RpcError
from replay.models import CurrencyAmount, RouteQuery, RouteResult


class RoutingApiClient:
    """Requests historical quotes from a smart-order-router HTTP API."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        *,
        api_url: str,
        timeout: float,
        api_key: Optional[str] = None,
    ) -> None:
        self.session = session
        self.api_url = api_url.rstrip('/')
        self.timeout = timeout
        self.headers = {'x-api-key': api_key} if api_key else {}
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def build_params(query: RouteQuery) -> Dict[str, str]:
        token_in = query.amount.asset
        token_out = query.quote_asset
        return {
            'tokenInAddress': token_in.address,
            'tokenInChainId': str(token_in.chain_id),
            'tokenOutAddress': token_out.address,
            'tokenOutChainId': str(token_out.chain_id),
            'amount': str(query.amount.raw),
            'type': query.trade_direction,
            'protocols': ','.join(query.protocols),
            'forceMixedRoutes': 'true' if query.force_mixed_routes else 'false',
            'blockNumber': str(query.block_number),
        }

    async def route(self, query: RouteQuery) -> Optional[RouteResult]:
        """Returns the best route for ``query``, or None when the router finds none."""
        params = self.build_params(query)
        url = f"{self.api_url}/quote"
        self.logger.debug("GET %s params=%s", url, params)
        async with self.session.get(url, params=params, headers=self.headers, timeout=self.timeout) as response:
            if response.status == HTTPStatus.NOT_FOUND:
                return None
            response.raise_for_status()
            data = await response.json()

        if data.get('errorCode') == NO_ROUTE_ERROR_CODE:
            return None
        if data.get('quote') is None:
            raise RpcError(f"routing API response has no quote: {data}")

        return RouteResult(
            quote=CurrencyAmount.from_raw_amount(query.quote_asset, str(data['quote'])),
            route=data.get('routeString') or '',
        )
