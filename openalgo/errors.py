"""Exception hierarchy shared by the REST helpers and the streaming client."""

from __future__ import annotations

from typing import Optional


class OpenAlgoError(Exception):
    """Base class for every error raised by the client."""


class ConfigError(OpenAlgoError):
    """Configuration could not be loaded or is incomplete."""


class StreamConnectionError(OpenAlgoError):
    """A WebSocket connection attempt failed."""


class InvalidUrlError(StreamConnectionError):
    """The WebSocket endpoint is not a valid ws:// or wss:// URL."""

    def __init__(self, url: str, detail: str) -> None:
        super().__init__(f"Invalid WebSocket URL {url!r}: {detail}")
        self.url = url
        self.detail = detail


class TransportError(StreamConnectionError):
    """The socket could not be opened or the auth frame could not be sent."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"WebSocket transport failure: {detail}")
        self.detail = detail


class ChannelError(OpenAlgoError):
    """A message was sent on a channel whose other end has gone away."""


class RequestError(OpenAlgoError):
    """The HTTP request did not complete."""


class ApiError(OpenAlgoError):
    """The server answered with a non-success status or an unreadable body."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


__all__ = [
    "OpenAlgoError",
    "ConfigError",
    "StreamConnectionError",
    "InvalidUrlError",
    "TransportError",
    "ChannelError",
    "RequestError",
    "ApiError",
]
