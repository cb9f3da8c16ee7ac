"""Python client for the OpenAlgo trading platform REST and WebSocket APIs."""

from .app import OpenAlgo
from .data import (
    Connected,
    DepthData,
    DepthEvent,
    DepthLevel,
    Disconnected,
    ErrorEvent,
    Instrument,
    LtpData,
    LtpEvent,
    OpenAlgoWebSocket,
    QuoteData,
    QuoteEvent,
    SubscriptionMode,
    WsSubscriber,
)
from .errors import (
    ApiError,
    ChannelError,
    ConfigError,
    InvalidUrlError,
    OpenAlgoError,
    RequestError,
    StreamConnectionError,
    TransportError,
)
from .execution import BasketOrderItem, OptionsLeg
from .infra import OpenAlgoConfig, load_config

__all__ = [
    "OpenAlgo",
    "OpenAlgoConfig",
    "load_config",
    "OpenAlgoWebSocket",
    "WsSubscriber",
    "Instrument",
    "SubscriptionMode",
    "Connected",
    "Disconnected",
    "ErrorEvent",
    "LtpEvent",
    "QuoteEvent",
    "DepthEvent",
    "LtpData",
    "QuoteData",
    "DepthData",
    "DepthLevel",
    "BasketOrderItem",
    "OptionsLeg",
    "OpenAlgoError",
    "ApiError",
    "ChannelError",
    "ConfigError",
    "InvalidUrlError",
    "RequestError",
    "StreamConnectionError",
    "TransportError",
]
