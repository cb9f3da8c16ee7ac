"""WebSocket subscription helpers for streaming market data."""

from __future__ import annotations

from typing import Sequence

from .channels import CommandSender
from .types import Disconnect, Instrument, Subscribe, SubscriptionMode, Unsubscribe


class WsSubscriber:
    """Turns subscribe/unsubscribe calls into commands for the writer task.

    Instrument lists are forwarded exactly as given. Every method raises
    :class:`~openalgo.errors.ChannelError` once the writer has stopped.
    """

    def __init__(self, commands: CommandSender) -> None:
        self.commands = commands

    async def subscribe(self, mode: SubscriptionMode, instruments: Sequence[Instrument]) -> None:
        await self.commands.send(Subscribe(mode, instruments))

    async def unsubscribe(self, mode: SubscriptionMode, instruments: Sequence[Instrument]) -> None:
        await self.commands.send(Unsubscribe(mode, instruments))

    async def subscribe_ltp(self, instruments: Sequence[Instrument]) -> None:
        """Subscribe to last-traded-price updates."""

        await self.subscribe(SubscriptionMode.LTP, instruments)

    async def unsubscribe_ltp(self, instruments: Sequence[Instrument]) -> None:
        await self.unsubscribe(SubscriptionMode.LTP, instruments)

    async def subscribe_quote(self, instruments: Sequence[Instrument]) -> None:
        """Subscribe to OHLC + volume quote updates."""

        await self.subscribe(SubscriptionMode.QUOTE, instruments)

    async def unsubscribe_quote(self, instruments: Sequence[Instrument]) -> None:
        await self.unsubscribe(SubscriptionMode.QUOTE, instruments)

    async def subscribe_depth(self, instruments: Sequence[Instrument]) -> None:
        """Subscribe to order-book depth updates."""

        await self.subscribe(SubscriptionMode.DEPTH, instruments)

    async def unsubscribe_depth(self, instruments: Sequence[Instrument]) -> None:
        await self.unsubscribe(SubscriptionMode.DEPTH, instruments)

    async def disconnect(self) -> None:
        """Ask the writer to close the socket; queued commands after this are discarded."""

        await self.commands.send(Disconnect())


__all__ = ["WsSubscriber"]
