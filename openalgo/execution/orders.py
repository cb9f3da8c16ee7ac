"""Order placement, modification, and status endpoints."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Literal, Optional

from openalgo.data.clients import OpenAlgoClient, compact

OrderAction = Literal["BUY", "SELL"]
PriceType = Literal["MARKET", "LIMIT", "SL", "SL-M"]


@dataclass
class OptionsLeg:
    """A single leg of a multi-leg options order."""

    offset: str
    option_type: str
    action: str
    quantity: str
    expiry_date: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return compact(asdict(self))


@dataclass
class BasketOrderItem:
    """One order inside a basket submission."""

    symbol: str
    exchange: str
    action: str
    quantity: int
    pricetype: str
    product: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class OrderAPI:
    """Wrappers over the order endpoints; every call returns the decoded response."""

    def __init__(self, client: OpenAlgoClient):
        self.client = client

    def place_order(
        self,
        strategy: str,
        symbol: str,
        action: OrderAction,
        exchange: str,
        pricetype: PriceType,
        product: str,
        quantity: str,
        price: Optional[str] = None,
        trigger_price: Optional[str] = None,
        disclosed_quantity: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Place a regular order. Optional prices are left out when ``None``."""

        payload = compact(
            {
                "strategy": strategy,
                "symbol": symbol,
                "action": action,
                "exchange": exchange,
                "pricetype": pricetype,
                "product": product,
                "quantity": quantity,
                "price": price,
                "trigger_price": trigger_price,
                "disclosed_quantity": disclosed_quantity,
            }
        )
        return self.client.post("placeorder", payload)

    def place_limit_order(
        self,
        strategy: str,
        symbol: str,
        action: OrderAction,
        exchange: str,
        product: str,
        quantity: str,
        price: str,
    ) -> Dict[str, Any]:
        return self.place_order(strategy, symbol, action, exchange, "LIMIT", product, quantity, price=price)

    def place_sl_order(
        self,
        strategy: str,
        symbol: str,
        action: OrderAction,
        exchange: str,
        product: str,
        quantity: str,
        price: str,
        trigger_price: str,
    ) -> Dict[str, Any]:
        return self.place_order(
            strategy, symbol, action, exchange, "SL", product, quantity, price=price, trigger_price=trigger_price
        )

    def place_smart_order(
        self,
        strategy: str,
        symbol: str,
        action: OrderAction,
        exchange: str,
        pricetype: PriceType,
        product: str,
        quantity: str,
        position_size: str,
    ) -> Dict[str, Any]:
        """Place an order sized against the strategy's current position."""

        return self.client.post(
            "placesmartorder",
            {
                "strategy": strategy,
                "symbol": symbol,
                "action": action,
                "exchange": exchange,
                "pricetype": pricetype,
                "product": product,
                "quantity": quantity,
                "position_size": position_size,
            },
        )

    def options_order(
        self,
        strategy: str,
        underlying: str,
        exchange: str,
        expiry_date: str,
        offset: str,
        option_type: str,
        action: OrderAction,
        quantity: str,
        pricetype: PriceType,
        product: str,
        splitsize: str = "0",
    ) -> Dict[str, Any]:
        return self.client.post(
            "optionsorder",
            {
                "strategy": strategy,
                "underlying": underlying,
                "exchange": exchange,
                "expiry_date": expiry_date,
                "offset": offset,
                "option_type": option_type,
                "action": action,
                "quantity": quantity,
                "pricetype": pricetype,
                "product": product,
                "splitsize": splitsize,
            },
        )

    def options_multi_order(
        self,
        strategy: str,
        underlying: str,
        exchange: str,
        legs: Iterable[OptionsLeg],
        expiry_date: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = compact(
            {
                "strategy": strategy,
                "underlying": underlying,
                "exchange": exchange,
                "expiry_date": expiry_date,
            }
        )
        payload["legs"] = [leg.to_dict() for leg in legs]
        return self.client.post("optionsmultiorder", payload)

    def basket_order(self, strategy: str, orders: Iterable[BasketOrderItem]) -> Dict[str, Any]:
        return self.client.post(
            "basketorder",
            {"strategy": strategy, "orders": [order.to_dict() for order in orders]},
        )

    def split_order(
        self,
        strategy: str,
        symbol: str,
        action: OrderAction,
        exchange: str,
        quantity: int,
        splitsize: int,
        pricetype: PriceType,
        product: str,
    ) -> Dict[str, Any]:
        """Split ``quantity`` into child orders of at most ``splitsize``."""

        return self.client.post(
            "splitorder",
            {
                "strategy": strategy,
                "symbol": symbol,
                "action": action,
                "exchange": exchange,
                "quantity": quantity,
                "splitsize": splitsize,
                "pricetype": pricetype,
                "product": product,
            },
        )

    def modify_order(
        self,
        orderid: str,
        strategy: str,
        symbol: str,
        action: OrderAction,
        exchange: str,
        pricetype: PriceType,
        product: str,
        quantity: str,
        price: str,
        disclosed_quantity: Optional[str] = None,
        trigger_price: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = compact(
            {
                "orderid": orderid,
                "strategy": strategy,
                "symbol": symbol,
                "action": action,
                "exchange": exchange,
                "pricetype": pricetype,
                "product": product,
                "quantity": quantity,
                "price": price,
                "disclosed_quantity": disclosed_quantity,
                "trigger_price": trigger_price,
            }
        )
        return self.client.post("modifyorder", payload)

    def cancel_order(self, orderid: str, strategy: str) -> Dict[str, Any]:
        return self.client.post("cancelorder", {"orderid": orderid, "strategy": strategy})

    def cancel_all_order(self, strategy: str) -> Dict[str, Any]:
        return self.client.post("cancelallorder", {"strategy": strategy})

    def close_position(
        self,
        strategy: str,
        product: Optional[str] = None,
        symbolgroup: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = compact({"strategy": strategy, "product": product, "symbolgroup": symbolgroup})
        return self.client.post("closeposition", payload)

    def order_status(self, orderid: str, strategy: str) -> Dict[str, Any]:
        return self.client.post("orderstatus", {"orderid": orderid, "strategy": strategy})

    def open_position(self, strategy: str, symbol: str, exchange: str, product: str) -> Dict[str, Any]:
        return self.client.post(
            "openposition",
            {"strategy": strategy, "symbol": symbol, "exchange": exchange, "product": product},
        )


__all__ = ["OrderAPI", "OptionsLeg", "BasketOrderItem", "OrderAction", "PriceType"]
