"""Streaming market-data client built on two socket tasks and two channels.

:meth:`OpenAlgoWebSocket.connect` opens the socket, sends the auth frame and
starts a reader task and a writer task. The reader only receives from the
socket and feeds decoded events into the event channel; the writer only sends
to (or closes) the socket, draining the command channel. Callers talk to the
connection exclusively through the returned ``(CommandSender, EventReceiver)``
pair, usually wrapping the sender in a :class:`~openalgo.data.subscriber.WsSubscriber`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Coroutine, Optional, Protocol, Set, Tuple, Union

import websockets
from websockets.exceptions import ConnectionClosedError, ConnectionClosedOK, InvalidURI, WebSocketException
from websockets.uri import parse_uri

from openalgo.errors import ChannelError, InvalidUrlError, TransportError
from openalgo.infra.config import OpenAlgoConfig

from .channels import CommandReceiver, CommandSender, EventReceiver, EventSender, channel
from .codec import decode
from .protocol import auth_message, render_command
from .types import Connected, Disconnect, Disconnected, ErrorEvent, SubscriptionCommand

DEFAULT_COMMAND_CAPACITY = 32
DEFAULT_EVENT_CAPACITY = 128


class WebSocketConnection(Protocol):
    """The subset of a ``websockets`` client connection used by the tasks."""

    async def send(self, message: str) -> None:
        ...

    async def recv(self) -> Union[str, bytes]:
        ...

    async def close(self) -> None:
        ...


Connector = Callable[[str], Awaitable[WebSocketConnection]]


class OpenAlgoWebSocket:
    """Connects to the streaming endpoint and hands back command/event channels."""

    def __init__(
        self,
        api_key: str,
        ws_url: str,
        command_capacity: int = DEFAULT_COMMAND_CAPACITY,
        event_capacity: int = DEFAULT_EVENT_CAPACITY,
        open_timeout: Optional[float] = 10.0,
        connector: Optional[Connector] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.api_key = api_key
        self.ws_url = ws_url
        self.command_capacity = command_capacity
        self.event_capacity = event_capacity
        self.open_timeout = open_timeout
        self.connector = connector or self._default_connector
        self.logger = logger or logging.getLogger(__name__)

        # asyncio keeps only weak references to tasks
        self._tasks: Set[asyncio.Task] = set()

    @classmethod
    def from_config(cls, config: OpenAlgoConfig, **kwargs: Any) -> "OpenAlgoWebSocket":
        return cls(
            config.api_key,
            config.ws_url,
            command_capacity=config.command_capacity,
            event_capacity=config.event_capacity,
            open_timeout=config.open_timeout_seconds,
            **kwargs,
        )

    async def connect(self) -> Tuple[CommandSender, EventReceiver]:
        """Open the socket, authenticate, and start the reader and writer tasks.

        Raises:
            InvalidUrlError: ``ws_url`` is not a ws:// or wss:// URL.
            TransportError: the socket could not be opened or the auth frame
                could not be written.
        """

        self._validate_url()

        try:
            ws = await self.connector(self.ws_url)
        except (OSError, asyncio.TimeoutError, WebSocketException) as exc:
            self.logger.warning(
                "WebSocket connect to %s failed: %s", self.ws_url, exc,
                extra={"event": "ws_connect_failed", "url": self.ws_url},
            )
            raise TransportError(str(exc)) from exc

        try:
            await ws.send(auth_message(self.api_key))
        except (OSError, WebSocketException) as exc:
            self.logger.warning(
                "Sending auth frame to %s failed: %s", self.ws_url, exc,
                extra={"event": "ws_auth_failed", "url": self.ws_url},
            )
            await self._close_quietly(ws)
            raise TransportError(str(exc)) from exc

        command_tx, command_rx = channel(self.command_capacity)
        event_tx, event_rx = channel(self.event_capacity)

        self._spawn(self._read_loop(ws, event_tx), "reader")
        self._spawn(self._write_loop(ws, command_rx), "writer")

        # Neither task has run yet, so Connected is always the first event.
        event_tx.send_nowait(Connected())
        self.logger.info(
            "Connected to %s", self.ws_url,
            extra={"event": "ws_connected", "url": self.ws_url},
        )
        return command_tx, event_rx

    async def wait_closed(self) -> None:
        """Wait until every reader/writer task started by this client has finished."""

        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # --- Tasks -----------------------------------------------------------
    async def _read_loop(self, ws: WebSocketConnection, events: EventSender) -> None:
        try:
            while True:
                try:
                    raw = await ws.recv()
                except ConnectionClosedOK:
                    self.logger.info("WebSocket closed", extra={"event": "ws_disconnected", "url": self.ws_url})
                    await events.send(Disconnected())
                    return
                except ConnectionClosedError as exc:
                    if exc.rcvd is None:
                        # no close frame: the connection dropped
                        await self._report_read_failure(events, exc)
                        return
                    self.logger.info(
                        "WebSocket closed by server: %s", exc,
                        extra={"event": "ws_disconnected", "url": self.ws_url, "close_code": exc.rcvd.code},
                    )
                    await events.send(Disconnected())
                    return
                except (OSError, WebSocketException) as exc:
                    await self._report_read_failure(events, exc)
                    return

                if isinstance(raw, bytes):
                    continue
                event = decode(raw)
                if event is None:
                    self.logger.debug("Dropping unparseable frame", extra={"event": "ws_frame_dropped"})
                    continue
                await events.send(event)
        except ChannelError:
            self.logger.debug("Event receiver closed; stopping reader", extra={"event": "ws_reader_orphaned"})
        finally:
            events.close()

    async def _report_read_failure(self, events: EventSender, exc: Exception) -> None:
        self.logger.warning(
            "WebSocket read failed: %s", exc,
            extra={"event": "ws_read_failed", "url": self.ws_url},
        )
        await events.send(ErrorEvent(str(exc)))

    async def _write_loop(self, ws: WebSocketConnection, commands: CommandReceiver) -> None:
        try:
            async for command in commands:
                if isinstance(command, Disconnect):
                    await self._close_quietly(ws)
                    self.logger.info("Disconnect requested", extra={"event": "ws_disconnect", "url": self.ws_url})
                    return
                await self._send_command(ws, command)
            self.logger.debug("Command channel closed; stopping writer", extra={"event": "ws_writer_stopped"})
        finally:
            commands.close()

    async def _send_command(self, ws: WebSocketConnection, command: SubscriptionCommand) -> None:
        frame = render_command(command)
        try:
            await ws.send(frame)
        except (OSError, WebSocketException) as exc:
            # Delivery is best effort; connection loss surfaces on the event channel.
            self.logger.debug(
                "Dropping %s %s command: %s", command.action, command.mode.value, exc,
                extra={"event": "ws_send_failed"},
            )
            return
        self.logger.debug(
            "Sent %s %s for %d instruments", command.action, command.mode.value, len(command.instruments),
            extra={"event": "subscription", "action": command.action, "mode": command.mode.value},
        )

    # --- Helpers ---------------------------------------------------------
    def _spawn(self, coro: Coroutine[Any, Any, None], role: str) -> None:
        task = asyncio.create_task(coro, name=f"openalgo-ws-{role}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _validate_url(self) -> None:
        try:
            parse_uri(self.ws_url)
        except InvalidURI as exc:
            raise InvalidUrlError(self.ws_url, str(exc)) from exc

    async def _default_connector(self, url: str) -> WebSocketConnection:
        return await websockets.connect(
            url,
            open_timeout=self.open_timeout,
            ping_interval=20,
            ping_timeout=20,
        )

    async def _close_quietly(self, ws: WebSocketConnection) -> None:
        try:
            await ws.close()
        except (OSError, WebSocketException) as exc:
            self.logger.debug("Error while closing WebSocket: %s", exc)


__all__ = ["OpenAlgoWebSocket", "WebSocketConnection", "Connector"]
