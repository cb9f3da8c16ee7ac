"""Data access layer: REST market data and accounts, plus real-time streaming."""

from .account import AccountAPI, MarginPosition
from .channels import CommandSender, EventReceiver, Receiver, Sender, channel
from .clients import OpenAlgoClient
from .codec import decode
from .market_data import DataAPI
from .subscriber import WsSubscriber
from .types import (
    Connected,
    DepthData,
    DepthEvent,
    DepthLevel,
    Disconnect,
    Disconnected,
    ErrorEvent,
    Event,
    Instrument,
    LtpData,
    LtpEvent,
    QuoteData,
    QuoteEvent,
    Subscribe,
    SubscriptionMode,
    Unsubscribe,
)
from .utilities import UtilitiesAPI
from .websocket import OpenAlgoWebSocket

__all__ = [
    "AccountAPI",
    "MarginPosition",
    "CommandSender",
    "EventReceiver",
    "Receiver",
    "Sender",
    "channel",
    "OpenAlgoClient",
    "decode",
    "DataAPI",
    "WsSubscriber",
    "Connected",
    "DepthData",
    "DepthEvent",
    "DepthLevel",
    "Disconnect",
    "Disconnected",
    "ErrorEvent",
    "Event",
    "Instrument",
    "LtpData",
    "LtpEvent",
    "QuoteData",
    "QuoteEvent",
    "Subscribe",
    "SubscriptionMode",
    "Unsubscribe",
    "UtilitiesAPI",
    "OpenAlgoWebSocket",
]
