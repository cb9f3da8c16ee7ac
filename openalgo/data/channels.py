"""Bounded single-consumer channels linking caller code to the socket tasks.

``channel(capacity)`` returns a sender/receiver pair sharing one
``asyncio.Queue``. Sends wait while the queue is full; nothing is dropped to
relieve pressure. Either end can be closed:

* closing the sender lets the receiver drain what is queued, after which
  ``recv`` returns ``None`` and ``async for`` stops;
* closing the receiver makes every later ``send`` raise :class:`ChannelError`.
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Generic, Optional, Tuple, TypeVar

from openalgo.errors import ChannelError

from .types import Command, Event

T = TypeVar("T")

_CLOSED = object()


class _ChannelState:
    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("channel capacity must be at least 1")
        self.capacity = capacity
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=capacity)
        self.sender_closed = False
        self.receiver_closed = False

    def drain(self) -> None:
        while True:
            try:
                self.queue.get_nowait()
            except asyncio.QueueEmpty:
                return


class Sender(Generic[T]):
    """Producing end of a bounded channel."""

    def __init__(self, state: _ChannelState) -> None:
        self._state = state

    @property
    def closed(self) -> bool:
        return self._state.sender_closed or self._state.receiver_closed

    async def send(self, item: T) -> None:
        """Enqueue ``item``, waiting while the channel is full."""

        if self.closed:
            raise ChannelError("channel is closed")
        await self._state.queue.put(item)
        if self._state.receiver_closed:
            self._state.drain()
            raise ChannelError("receiver closed while sending")

    def send_nowait(self, item: T) -> None:
        if self.closed:
            raise ChannelError("channel is closed")
        try:
            self._state.queue.put_nowait(item)
        except asyncio.QueueFull as exc:
            raise ChannelError("channel is full") from exc

    def close(self) -> None:
        """Stop producing; the receiver sees end-of-stream once drained."""

        if self._state.sender_closed:
            return
        self._state.sender_closed = True
        # A full queue means the receiver is not blocked and will notice the flag.
        try:
            self._state.queue.put_nowait(_CLOSED)
        except asyncio.QueueFull:
            pass


class Receiver(Generic[T]):
    """Consuming end of a bounded channel."""

    def __init__(self, state: _ChannelState) -> None:
        self._state = state

    @property
    def closed(self) -> bool:
        return self._state.receiver_closed

    def qsize(self) -> int:
        return self._state.queue.qsize()

    async def recv(self) -> Optional[T]:
        """Return the next item, or ``None`` once the channel is finished."""

        state = self._state
        if state.receiver_closed:
            return None
        if state.sender_closed and state.queue.empty():
            return None
        item = await state.queue.get()
        if item is _CLOSED:
            return None
        return item

    def close(self) -> None:
        """Refuse further sends and discard whatever is still queued."""

        self._state.receiver_closed = True
        self._state.drain()

    def __aiter__(self) -> AsyncIterator[T]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[T]:
        while True:
            item = await self.recv()
            if item is None:
                return
            yield item


def channel(capacity: int) -> Tuple[Sender[T], Receiver[T]]:
    """Create a connected sender/receiver pair bounded at ``capacity``."""

    state = _ChannelState(capacity)
    return Sender(state), Receiver(state)


CommandSender = Sender[Command]
CommandReceiver = Receiver[Command]
EventSender = Sender[Event]
EventReceiver = Receiver[Event]


__all__ = [
    "Sender",
    "Receiver",
    "channel",
    "CommandSender",
    "CommandReceiver",
    "EventSender",
    "EventReceiver",
]
