"""REST market-data endpoints: quotes, depth, history, option chains, symbols."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Tuple

from .clients import OpenAlgoClient, compact


class DataAPI:
    """Thin wrappers over the market-data endpoints, returning decoded JSON."""

    def __init__(self, client: OpenAlgoClient) -> None:
        self.client = client

    def quotes(self, symbol: str, exchange: str) -> Dict[str, Any]:
        return self.client.post("quotes", {"symbol": symbol, "exchange": exchange})

    def multi_quotes(self, symbols: Iterable[Tuple[str, str]]) -> Dict[str, Any]:
        """Fetch quotes for several ``(symbol, exchange)`` pairs in one call."""

        payload = [{"symbol": symbol, "exchange": exchange} for symbol, exchange in symbols]
        return self.client.post("multiquotes", {"symbols": payload})

    def depth(self, symbol: str, exchange: str) -> Dict[str, Any]:
        return self.client.post("depth", {"symbol": symbol, "exchange": exchange})

    def history(
        self,
        symbol: str,
        exchange: str,
        interval: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Historical candles; omit the dates to get the latest data."""

        payload = compact(
            {
                "symbol": symbol,
                "exchange": exchange,
                "interval": interval,
                "start_date": start_date,
                "end_date": end_date,
            }
        )
        return self.client.post("history", payload)

    def intervals(self) -> Dict[str, Any]:
        return self.client.post("intervals")

    def option_chain(
        self,
        underlying: str,
        exchange: str,
        expiry_date: str,
        strike_count: Optional[int] = None,
    ) -> Dict[str, Any]:
        payload = compact(
            {
                "underlying": underlying,
                "exchange": exchange,
                "expiry_date": expiry_date,
                "strike_count": strike_count,
            }
        )
        return self.client.post("optionchain", payload)

    def symbol(self, symbol: str, exchange: str) -> Dict[str, Any]:
        return self.client.post("symbol", {"symbol": symbol, "exchange": exchange})

    def search(self, query: str, exchange: str) -> Dict[str, Any]:
        return self.client.post("search", {"query": query, "exchange": exchange})

    def option_symbol(
        self,
        underlying: str,
        exchange: str,
        expiry_date: str,
        offset: str,
        option_type: str,
    ) -> Dict[str, Any]:
        """Resolve an option contract from an ATM offset such as ``ITM2`` or ``OTM1``."""

        return self.client.post(
            "optionsymbol",
            {
                "underlying": underlying,
                "exchange": exchange,
                "expiry_date": expiry_date,
                "offset": offset,
                "option_type": option_type,
            },
        )

    def synthetic_future(self, underlying: str, exchange: str, expiry_date: str) -> Dict[str, Any]:
        return self.client.post(
            "syntheticfuture",
            {"underlying": underlying, "exchange": exchange, "expiry_date": expiry_date},
        )

    def option_greeks(
        self,
        symbol: str,
        exchange: str,
        interest_rate: float,
        underlying_symbol: str,
        underlying_exchange: str,
    ) -> Dict[str, Any]:
        return self.client.post(
            "optiongreeks",
            {
                "symbol": symbol,
                "exchange": exchange,
                "interest_rate": interest_rate,
                "underlying_symbol": underlying_symbol,
                "underlying_exchange": underlying_exchange,
            },
        )

    def expiry(self, symbol: str, exchange: str, instrumenttype: str) -> Dict[str, Any]:
        return self.client.post(
            "expiry",
            {"symbol": symbol, "exchange": exchange, "instrumenttype": instrumenttype},
        )

    def instruments(self, exchange: str) -> Dict[str, Any]:
        return self.client.post("instruments", {"exchange": exchange})


__all__ = ["DataAPI"]
