"""Account endpoints: funds, books, holdings, and margin requirements."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable

from .clients import OpenAlgoClient


@dataclass
class MarginPosition:
    """One leg of a margin calculation request."""

    symbol: str
    exchange: str
    action: str
    product: str
    pricetype: str
    quantity: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class AccountAPI:
    def __init__(self, client: OpenAlgoClient) -> None:
        self.client = client

    def funds(self) -> Dict[str, Any]:
        return self.client.post("funds")

    def orderbook(self) -> Dict[str, Any]:
        return self.client.post("orderbook")

    def tradebook(self) -> Dict[str, Any]:
        return self.client.post("tradebook")

    def positionbook(self) -> Dict[str, Any]:
        return self.client.post("positionbook")

    def holdings(self) -> Dict[str, Any]:
        return self.client.post("holdings")

    def margin(self, positions: Iterable[MarginPosition]) -> Dict[str, Any]:
        """Margin required for a basket of prospective positions."""

        return self.client.post("margin", {"positions": [position.to_dict() for position in positions]})


__all__ = ["AccountAPI", "MarginPosition"]
