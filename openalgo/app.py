"""Top-level client combining the REST sub-clients and the streaming client."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from openalgo.data.account import AccountAPI
from openalgo.data.clients import OpenAlgoClient
from openalgo.data.market_data import DataAPI
from openalgo.data.utilities import UtilitiesAPI
from openalgo.data.websocket import OpenAlgoWebSocket
from openalgo.execution.analyzer import AnalyzerAPI
from openalgo.execution.orders import OrderAPI
from openalgo.infra.config import DEFAULT_HOST, DEFAULT_VERSION, DEFAULT_WS_URL, OpenAlgoConfig


class OpenAlgo:
    """Entry point for the trading platform API.

    One :class:`OpenAlgoConfig` is shared read-only by every sub-client::

        client = OpenAlgo("my-api-key")
        client.quotes("RELIANCE", "NSE")
        commands, events = await client.websocket().connect()
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        host: str = DEFAULT_HOST,
        version: str = DEFAULT_VERSION,
        ws_url: str = DEFAULT_WS_URL,
        config: Optional[OpenAlgoConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if config is None:
            if api_key is None:
                raise ValueError("api_key or config is required")
            config = OpenAlgoConfig(api_key=api_key, host=host, version=version, ws_url=ws_url)
        self.config = config
        self.logger = logging.getLogger("openalgo")

        self.client = OpenAlgoClient(config, session=session, logger=self.logger.getChild("rest"))
        self.orders = OrderAPI(self.client)
        self.data = DataAPI(self.client)
        self.account = AccountAPI(self.client)
        self.utilities = UtilitiesAPI(self.client)
        self.analyzer = AnalyzerAPI(self.client)

    @classmethod
    def from_config(cls, config: OpenAlgoConfig, session: Optional[requests.Session] = None) -> "OpenAlgo":
        return cls(config=config, session=session)

    def websocket(self, **kwargs: Any) -> OpenAlgoWebSocket:
        """Create a streaming client bound to this client's key and endpoint."""

        kwargs.setdefault("logger", self.logger.getChild("ws"))
        return OpenAlgoWebSocket.from_config(self.config, **kwargs)

    # --- Shortcuts -------------------------------------------------------
    def quotes(self, symbol: str, exchange: str) -> Dict[str, Any]:
        return self.data.quotes(symbol, exchange)

    def depth(self, symbol: str, exchange: str) -> Dict[str, Any]:
        return self.data.depth(symbol, exchange)

    def history(self, symbol: str, exchange: str, interval: str, **kwargs: Any) -> Dict[str, Any]:
        return self.data.history(symbol, exchange, interval, **kwargs)

    def place_order(self, *args: Any, **kwargs: Any) -> Dict[str, Any]:
        return self.orders.place_order(*args, **kwargs)

    def place_limit_order(self, *args: Any, **kwargs: Any) -> Dict[str, Any]:
        return self.orders.place_limit_order(*args, **kwargs)

    def cancel_order(self, orderid: str, strategy: str) -> Dict[str, Any]:
        return self.orders.cancel_order(orderid, strategy)

    def order_status(self, orderid: str, strategy: str) -> Dict[str, Any]:
        return self.orders.order_status(orderid, strategy)

    def funds(self) -> Dict[str, Any]:
        return self.account.funds()

    def positionbook(self) -> Dict[str, Any]:
        return self.account.positionbook()


__all__ = ["OpenAlgo"]
