"""Command-line entry point that streams market data and logs each event."""

from __future__ import annotations

import argparse
import asyncio
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from openalgo.data.channels import EventReceiver
from openalgo.data.subscriber import WsSubscriber
from openalgo.data.types import (
    Connected,
    DepthEvent,
    Disconnected,
    ErrorEvent,
    Event,
    Instrument,
    LtpEvent,
    QuoteEvent,
    SubscriptionMode,
)
from openalgo.data.websocket import OpenAlgoWebSocket
from openalgo.errors import ChannelError, ConfigError, StreamConnectionError
from openalgo.infra.config import OpenAlgoConfig, config_from_env, load_config
from openalgo.infra.logging import configure_logging

logger = logging.getLogger("openalgo.stream")


def resolve_config(path: Optional[str]) -> OpenAlgoConfig:
    """Load the YAML file when given, then apply environment overrides."""

    base = load_config(Path(path)) if path else None
    return config_from_env(base)


def event_payload(event: Event) -> Dict[str, Any]:
    if isinstance(event, (LtpEvent, QuoteEvent, DepthEvent)):
        return {"event": "market_data", "kind": type(event).__name__, **asdict(event.data)}
    if isinstance(event, ErrorEvent):
        return {"event": "stream_error", "detail": event.message}
    return {"event": type(event).__name__.lower()}


async def consume(events: EventReceiver) -> int:
    """Log events until the stream ends; returns how many data events arrived."""

    received = 0
    async for event in events:
        if isinstance(event, Connected):
            logger.info("Stream connected", extra=event_payload(event))
        elif isinstance(event, Disconnected):
            logger.info("Stream disconnected", extra=event_payload(event))
            break
        elif isinstance(event, ErrorEvent):
            logger.warning("Stream error: %s", event.message, extra=event_payload(event))
        else:
            received += 1
            logger.info("Market data", extra=event_payload(event))
    return received


async def run_stream(
    config: OpenAlgoConfig,
    mode: SubscriptionMode,
    instruments: List[Instrument],
    duration: float,
) -> int:
    ws = OpenAlgoWebSocket.from_config(config)
    try:
        commands, events = await ws.connect()
    except StreamConnectionError as exc:
        logger.error("Could not connect: %s", exc, extra={"event": "connect_failed", "url": config.ws_url})
        return 1

    subscriber = WsSubscriber(commands)
    await subscriber.subscribe(mode, instruments)

    try:
        received = await asyncio.wait_for(consume(events), timeout=duration)
        logger.info("Stream ended early", extra={"event": "stream_ended", "received": received})
    except asyncio.TimeoutError:
        logger.info("Duration elapsed", extra={"event": "duration_elapsed", "seconds": duration})

    try:
        await subscriber.unsubscribe(mode, instruments)
        await subscriber.disconnect()
    except ChannelError:
        logger.debug("Writer already stopped")
    # unblocks a reader stuck on a full event channel
    events.close()
    await ws.wait_closed()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Stream real-time market data")
    parser.add_argument("symbols", nargs="+", help="Instruments as EXCHANGE:SYMBOL, e.g. NSE:RELIANCE")
    parser.add_argument("--config", default=None, help="YAML config file with an openalgo section")
    parser.add_argument("--mode", choices=[mode.value for mode in SubscriptionMode], default="ltp")
    parser.add_argument("--duration", type=float, default=10.0, help="Seconds to stream before disconnecting")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)

    try:
        instruments = [Instrument.parse(value) for value in args.symbols]
    except ValueError as exc:
        logger.error("%s", exc, extra={"event": "bad_symbol"})
        return 2

    try:
        config = resolve_config(args.config)
    except ConfigError as exc:
        logger.error("%s", exc, extra={"event": "config_error"})
        return 2

    return asyncio.run(run_stream(config, SubscriptionMode(args.mode), instruments, args.duration))


if __name__ == "__main__":
    raise SystemExit(main())
