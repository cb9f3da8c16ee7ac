"""Instruments, subscription commands, and market-data events for streaming."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, List, Optional, Sequence, Union


@dataclass(frozen=True)
class Instrument:
    """An exchange + symbol pair identifying a tradable security."""

    exchange: str
    symbol: str

    @classmethod
    def parse(cls, value: str) -> "Instrument":
        """Build an instrument from ``EXCHANGE:SYMBOL`` notation."""

        exchange, sep, symbol = value.partition(":")
        if not sep or not exchange or not symbol:
            raise ValueError(f"Expected EXCHANGE:SYMBOL, got {value!r}")
        return cls(exchange=exchange, symbol=symbol)

    def to_dict(self) -> Dict[str, str]:
        return {"exchange": self.exchange, "symbol": self.symbol}


class SubscriptionMode(str, Enum):
    """Streaming mode; the value is the outbound wire name."""

    LTP = "ltp"
    QUOTE = "quote"
    DEPTH = "depth"

    @property
    def code(self) -> int:
        """Numeric tag carried by inbound frames of this mode."""

        return _MODE_CODES[self]

    @classmethod
    def from_code(cls, code: int) -> Optional["SubscriptionMode"]:
        for mode, mode_code in _MODE_CODES.items():
            if mode_code == code:
                return mode
        return None


_MODE_CODES = {
    SubscriptionMode.LTP: 1,
    SubscriptionMode.QUOTE: 2,
    SubscriptionMode.DEPTH: 3,
}


# --- Commands (caller -> writer) -----------------------------------------
@dataclass(frozen=True)
class _SubscriptionChange:
    mode: SubscriptionMode
    instruments: Sequence[Instrument]

    action: ClassVar[str] = ""

    def __post_init__(self) -> None:
        # instruments are forwarded in caller order, never deduplicated
        object.__setattr__(self, "instruments", tuple(self.instruments))


@dataclass(frozen=True)
class Subscribe(_SubscriptionChange):
    action: ClassVar[str] = "subscribe"


@dataclass(frozen=True)
class Unsubscribe(_SubscriptionChange):
    action: ClassVar[str] = "unsubscribe"


@dataclass(frozen=True)
class Disconnect:
    """Ask the writer to close the socket and stop."""


SubscriptionCommand = Union[Subscribe, Unsubscribe]
Command = Union[Subscribe, Unsubscribe, Disconnect]


# --- Payloads -------------------------------------------------------------
@dataclass
class DepthLevel:
    price: float
    quantity: int


@dataclass
class LtpData:
    exchange: Optional[str] = None
    symbol: Optional[str] = None
    ltp: Optional[float] = None
    timestamp: Optional[int] = None


@dataclass
class QuoteData:
    exchange: Optional[str] = None
    symbol: Optional[str] = None
    ltp: Optional[float] = None
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    volume: Optional[int] = None
    timestamp: Optional[int] = None


@dataclass
class DepthData:
    """Quote fields plus the bid/ask ladder, kept in wire order."""

    exchange: Optional[str] = None
    symbol: Optional[str] = None
    ltp: Optional[float] = None
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    volume: Optional[int] = None
    bids: Optional[List[DepthLevel]] = None
    asks: Optional[List[DepthLevel]] = None
    timestamp: Optional[int] = None


# --- Events (reader -> caller) --------------------------------------------
@dataclass(frozen=True)
class Connected:
    """Local setup finished; not a server acknowledgement."""


@dataclass(frozen=True)
class Disconnected:
    """The socket closed; nothing else follows on this connection."""


@dataclass(frozen=True)
class ErrorEvent:
    message: str


@dataclass(frozen=True)
class LtpEvent:
    data: LtpData = field(default_factory=LtpData)


@dataclass(frozen=True)
class QuoteEvent:
    data: QuoteData = field(default_factory=QuoteData)


@dataclass(frozen=True)
class DepthEvent:
    data: DepthData = field(default_factory=DepthData)


Event = Union[Connected, Disconnected, ErrorEvent, LtpEvent, QuoteEvent, DepthEvent]


__all__ = [
    "Instrument",
    "SubscriptionMode",
    "Subscribe",
    "Unsubscribe",
    "Disconnect",
    "SubscriptionCommand",
    "Command",
    "DepthLevel",
    "LtpData",
    "QuoteData",
    "DepthData",
    "Connected",
    "Disconnected",
    "ErrorEvent",
    "LtpEvent",
    "QuoteEvent",
    "DepthEvent",
    "Event",
]
