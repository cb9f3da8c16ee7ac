import unittest
from typing import Any, Dict, List, Optional, Tuple

import requests

from openalgo.app import OpenAlgo
from openalgo.data.account import MarginPosition
from openalgo.data.clients import OpenAlgoClient
from openalgo.errors import ApiError, RequestError
from openalgo.execution.orders import BasketOrderItem, OptionsLeg
from openalgo.infra.config import OpenAlgoConfig


class StubResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self._payload = payload if payload is not None else {"status": "success"}
        self.text = text if text is not None else str(self._payload)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class StubSession:
    def __init__(self, response: Optional[StubResponse] = None, error: Optional[Exception] = None) -> None:
        self.response = response or StubResponse()
        self.error = error
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []

    def post(self, url: str, headers=None, json=None, timeout=None) -> StubResponse:
        self.calls.append(("POST", url, json))
        if self.error:
            raise self.error
        return self.response

    def get(self, url: str, headers=None, params=None, timeout=None) -> StubResponse:
        self.calls.append(("GET", url, params))
        if self.error:
            raise self.error
        return self.response


CONFIG = OpenAlgoConfig(api_key="key-123", host="http://broker.local:5000/")


class OpenAlgoClientTest(unittest.TestCase):
    def test_build_url_strips_trailing_slash(self) -> None:
        client = OpenAlgoClient(CONFIG, session=StubSession())
        self.assertEqual("http://broker.local:5000/api/v1/quotes", client.build_url("quotes"))

    def test_post_injects_api_key(self) -> None:
        session = StubSession(StubResponse(payload={"status": "success", "data": {"ltp": 10}}))
        client = OpenAlgoClient(CONFIG, session=session)

        result = client.post("quotes", {"symbol": "SBIN", "exchange": "NSE"})

        self.assertEqual({"status": "success", "data": {"ltp": 10}}, result)
        self.assertEqual(
            ("POST", "http://broker.local:5000/api/v1/quotes", {"apikey": "key-123", "symbol": "SBIN", "exchange": "NSE"}),
            session.calls[0],
        )

    def test_http_error_raises_api_error(self) -> None:
        session = StubSession(StubResponse(status_code=403, payload={"status": "error"}, text="Invalid API key"))
        client = OpenAlgoClient(CONFIG, session=session)

        with self.assertRaises(ApiError) as ctx:
            client.post("funds")
        self.assertEqual(403, ctx.exception.status_code)
        self.assertIn("Invalid API key", str(ctx.exception))

    def test_non_json_body_raises_api_error(self) -> None:
        session = StubSession(StubResponse(payload=ValueError("no json"), text="<html>"))
        with self.assertRaises(ApiError):
            OpenAlgoClient(CONFIG, session=session).get("ping")

    def test_transport_failure_raises_request_error(self) -> None:
        session = StubSession(error=requests.ConnectionError("refused"))
        with self.assertRaises(RequestError):
            OpenAlgoClient(CONFIG, session=session).post("funds")


class SubClientPayloadTest(unittest.TestCase):
    def setUp(self) -> None:
        self.session = StubSession()
        self.client = OpenAlgo(config=CONFIG, session=self.session)

    def last_call(self) -> Tuple[str, Dict[str, Any]]:
        _, url, body = self.session.calls[-1]
        return url.rsplit("/api/v1/", 1)[1], body

    def test_place_order_omits_unset_prices(self) -> None:
        self.client.place_order("Strat", "SBIN", "BUY", "NSE", "MARKET", "MIS", "1")
        endpoint, body = self.last_call()
        self.assertEqual("placeorder", endpoint)
        self.assertNotIn("price", body)
        self.assertNotIn("trigger_price", body)

    def test_sl_order_sets_pricetype_and_prices(self) -> None:
        self.client.orders.place_sl_order("Strat", "SBIN", "SELL", "NSE", "MIS", "1", "500", "499")
        _, body = self.last_call()
        self.assertEqual("SL", body["pricetype"])
        self.assertEqual("500", body["price"])
        self.assertEqual("499", body["trigger_price"])

    def test_multi_leg_and_basket_orders_serialize_items(self) -> None:
        self.client.orders.options_multi_order(
            "Iron", "NIFTY", "NSE_INDEX", [OptionsLeg("OTM2", "CE", "SELL", "75")], expiry_date="26DEC24"
        )
        endpoint, body = self.last_call()
        self.assertEqual("optionsmultiorder", endpoint)
        self.assertEqual([{"offset": "OTM2", "option_type": "CE", "action": "SELL", "quantity": "75"}], body["legs"])

        self.client.orders.basket_order("Basket", [BasketOrderItem("SBIN", "NSE", "BUY", 2, "MARKET", "MIS")])
        _, body = self.last_call()
        self.assertEqual(2, body["orders"][0]["quantity"])

    def test_history_without_dates(self) -> None:
        self.client.history("SBIN", "NSE", "5m")
        endpoint, body = self.last_call()
        self.assertEqual("history", endpoint)
        self.assertEqual({"apikey": "key-123", "symbol": "SBIN", "exchange": "NSE", "interval": "5m"}, body)

    def test_account_and_utility_endpoints(self) -> None:
        self.client.account.margin([MarginPosition("SBIN", "NSE", "BUY", "MIS", "MARKET", "10")])
        endpoint, body = self.last_call()
        self.assertEqual("margin", endpoint)
        self.assertEqual("SBIN", body["positions"][0]["symbol"])

        self.client.utilities.holidays(2025)
        self.assertEqual(("market/holidays", {"apikey": "key-123", "year": 2025}), self.last_call())

        self.client.analyzer.toggle(True)
        self.assertEqual(("analyzer/toggle", {"apikey": "key-123", "mode": True}), self.last_call())

    def test_websocket_uses_shared_config(self) -> None:
        ws = self.client.websocket()
        self.assertEqual("key-123", ws.api_key)
        self.assertEqual(CONFIG.ws_url, ws.ws_url)
        self.assertEqual(CONFIG.event_capacity, ws.event_capacity)

    def test_requires_key_or_config(self) -> None:
        with self.assertRaises(ValueError):
            OpenAlgo()


if __name__ == "__main__":
    unittest.main()
