"""SX Bet API Router.

Submits payloads built by ``sx_bet_sdk.exchange`` to the SX Bet matching API
and fetches active orders and trades. The router only moves bytes: every order, fill and
cancellation must already be signed.

Example:
    ```python
    async with SXBetRouter() as router:
        orders = await router.get_active_orders(market_hashes=[market_hash])
        fill = build_fill(orders[:1], [amount], taker, private_key)
        result = await router.fill_orders(fill)
    ```
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, TypedDict

import httpx
import structlog

from ..errors import SXBetAPIError, ValidationError
from ..exchange import (
    CancelPayload,
    ExchangeConfig,
    ExchangeConfigDict,
    FillPayload,
    Order,
    resolve_exchange_config,
)

logger = structlog.get_logger("sx_bet_sdk.router")

DEFAULT_TIMEOUT_SECONDS = 10.0
MAX_TRADES_PAGE_SIZE = 100


class SXBetRouterConfig(TypedDict, total=False):
    """Configuration for the router."""

    exchange: ExchangeConfigDict
    """Exchange overrides (chain, contracts, API URL). Default: mainnet"""

    timeout: float
    """HTTP timeout in seconds. Default: 10"""


class SXBetRouter:
    """Async client for the SX Bet order endpoints.

    Args:
        config: Optional configuration for the router
        http_client: Client to send requests with. The router closes it only
            if it created it.
    """

    def __init__(
        self,
        config: Optional[SXBetRouterConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        config = config or {}
        self._exchange = resolve_exchange_config(config.get("exchange"))
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(
            timeout=config.get("timeout", DEFAULT_TIMEOUT_SECONDS)
        )

    @property
    def exchange_config(self) -> ExchangeConfig:
        """Get the exchange configuration."""
        return self._exchange

    async def post_orders(self, orders: Sequence[Order]) -> Any:
        """Post signed maker orders (``POST /orders/new``).

        Raises:
            ValidationError: If no orders are given or one is unsigned
            SXBetAPIError: If the API rejects the request
        """
        if not orders:
            raise ValidationError("orders must not be empty", field="orders")
        for index, order in enumerate(orders):
            if not order.signature:
                raise ValidationError(
                    f"Order {index} is not signed", field=f"orders[{index}].signature"
                )
        return await self._request(
            "POST", "/orders/new", json={"orders": [order.to_api() for order in orders]}
        )

    async def fill_orders(self, fill: FillPayload) -> Any:
        """Submit a signed fill (``POST /orders/fill``)."""
        return await self._request("POST", "/orders/fill", json=fill.to_api())

    async def cancel_orders(self, cancel: CancelPayload) -> Any:
        """Submit a signed cancellation (``POST /orders/cancel/v2``)."""
        params = {}
        if self._exchange.chain_version:
            params["chainVersion"] = self._exchange.chain_version
        return await self._request(
            "POST", "/orders/cancel/v2", json=cancel.to_api(), params=params
        )

    async def get_active_orders(
        self,
        maker: Optional[str] = None,
        market_hashes: Optional[Sequence[str]] = None,
        base_token: Optional[str] = None,
    ) -> List[Order]:
        """Fetch active orders (``GET /orders``).

        Args:
            maker: Only orders from this maker
            market_hashes: Only orders on these markets
            base_token: Only orders in this token

        Returns:
            Orders, with ``fill_amount`` as reported by the API
        """
        params: Dict[str, str] = {}
        if maker:
            params["maker"] = maker
        if market_hashes:
            params["marketHashes"] = ",".join(market_hashes)
        if base_token:
            params["baseToken"] = base_token

        data = await self._request("GET", "/orders", params=params)
        return [Order.from_api(item) for item in data or []]

    async def get_trades(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        pagination_key: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Fetch one page of trades (``GET /trades``).

        Args:
            filters: Query filters in API casing (e.g. ``bettor``,
                ``marketHashes``, ``startDate``). Sequences are comma-joined
                and ``None`` values dropped.
            pagination_key: ``nextKey`` from the previous page
            page_size: Trades per page (API maximum 100)

        Returns:
            Dict with ``trades`` and, if more pages exist, ``nextKey``
        """
        params: Dict[str, Any] = {}
        for key, value in (filters or {}).items():
            if value is None or value == "":
                continue
            if isinstance(value, (list, tuple)):
                value = ",".join(str(item) for item in value)
            elif isinstance(value, bool):
                value = "true" if value else "false"
            params[key] = value
        if pagination_key:
            params["paginationKey"] = pagination_key
        if page_size:
            params["pageSize"] = page_size

        return await self._request("GET", "/trades", params=params) or {}

    async def get_all_trades(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        max_records: int = 100,
    ) -> List[Dict[str, Any]]:
        """Fetch trades across pages (``GET /trades`` following ``nextKey``).

        Stops when the API returns no ``nextKey`` or ``max_records`` trades
        are collected.

        Raises:
            ValidationError: If max_records is not positive
        """
        if max_records <= 0:
            raise ValidationError(
                f"Invalid max_records: {max_records}. Must be positive", field="max_records"
            )

        trades: List[Dict[str, Any]] = []
        next_key: Optional[str] = None
        page_size = min(MAX_TRADES_PAGE_SIZE, max_records)
        while True:
            page = await self.get_trades(filters, pagination_key=next_key, page_size=page_size)
            trades.extend(page.get("trades") or [])
            next_key = page.get("nextKey")
            if not next_key or len(trades) >= max_records:
                break

        logger.debug("router.trades_fetched", count=min(len(trades), max_records))
        return trades[:max_records]

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self._exchange.api_url}{path}"
        logger.info("router.request", method=method, path=path)
        response = await self._http_client.request(method, url, **kwargs)

        # Parse response
        try:
            body = response.json()
        except ValueError:
            raise SXBetAPIError(
                f"Server request failed: {response.status_code} {response.text}",
                status_code=response.status_code,
                body=response.text,
            ) from None

        if not response.is_success or not isinstance(body, dict) or body.get("status") != "success":
            logger.warning(
                "router.request_failed",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            raise SXBetAPIError(
                f"{method} {path} failed: {response.status_code} {body}",
                status_code=response.status_code,
                body=body,
            )

        return body.get("data")

    async def close(self) -> None:
        """Close the HTTP client if the router created it."""
        if self._owns_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "SXBetRouter":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()


__all__ = [
    "SXBetRouter",
    "SXBetRouterConfig",
]
