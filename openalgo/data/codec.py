"""Decode inbound market-data frames into typed streaming events.

Frames arrive as ``{"type": str, "mode": int, "data": {...}}``. The envelope is
checked first: anything that is not a JSON object with correctly typed
``type`` / ``mode`` fields is dropped without an event. Once the envelope is
accepted every frame produces exactly one event, either a typed data event or
an :class:`ErrorEvent` describing why the payload was rejected.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .types import (
    DepthData,
    DepthEvent,
    DepthLevel,
    ErrorEvent,
    Event,
    LtpData,
    LtpEvent,
    QuoteData,
    QuoteEvent,
)

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class PayloadError(ValueError):
    """A payload field is present but has the wrong JSON type."""


def _optional_str(payload: Mapping[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None or isinstance(value, str):
        return value
    raise PayloadError(f"{key} must be a string")


def _is_json_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _optional_float(payload: Mapping[str, Any], key: str) -> Optional[float]:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, float):
        return value
    if _is_json_int(value):
        try:
            return float(value)
        except OverflowError as exc:
            raise PayloadError(f"{key} is out of range") from exc
    raise PayloadError(f"{key} must be a number")


def _optional_int(payload: Mapping[str, Any], key: str) -> Optional[int]:
    value = payload.get(key)
    if value is None:
        return None
    if _is_json_int(value):
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise PayloadError(f"{key} is out of range")
        return value
    raise PayloadError(f"{key} must be an integer")


def _parse_levels(payload: Mapping[str, Any], key: str) -> Optional[List[DepthLevel]]:
    side = payload.get(key)
    if side is None:
        return None
    if not isinstance(side, list):
        raise PayloadError(f"{key} must be a list")

    levels: List[DepthLevel] = []
    for level in side:
        if not isinstance(level, dict):
            raise PayloadError(f"{key} entries must be objects")
        price = _optional_float(level, "price")
        quantity = _optional_int(level, "quantity")
        if price is None or quantity is None:
            raise PayloadError(f"{key} entries need price and quantity")
        levels.append(DepthLevel(price=price, quantity=quantity))
    return levels


def parse_ltp(payload: Mapping[str, Any]) -> LtpData:
    return LtpData(
        exchange=_optional_str(payload, "exchange"),
        symbol=_optional_str(payload, "symbol"),
        ltp=_optional_float(payload, "ltp"),
        timestamp=_optional_int(payload, "timestamp"),
    )


def parse_quote(payload: Mapping[str, Any]) -> QuoteData:
    return QuoteData(
        exchange=_optional_str(payload, "exchange"),
        symbol=_optional_str(payload, "symbol"),
        ltp=_optional_float(payload, "ltp"),
        open=_optional_float(payload, "open"),
        high=_optional_float(payload, "high"),
        low=_optional_float(payload, "low"),
        close=_optional_float(payload, "close"),
        volume=_optional_int(payload, "volume"),
        timestamp=_optional_int(payload, "timestamp"),
    )


def parse_depth(payload: Mapping[str, Any]) -> DepthData:
    quote = parse_quote(payload)
    return DepthData(
        exchange=quote.exchange,
        symbol=quote.symbol,
        ltp=quote.ltp,
        open=quote.open,
        high=quote.high,
        low=quote.low,
        close=quote.close,
        volume=quote.volume,
        bids=_parse_levels(payload, "bids"),
        asks=_parse_levels(payload, "asks"),
        timestamp=quote.timestamp,
    )


def _parse_envelope(raw: Union[str, bytes]) -> Optional[Dict[str, Any]]:
    try:
        message = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if not isinstance(message, dict):
        return None

    msg_type = message.get("type")
    if msg_type is not None and not isinstance(msg_type, str):
        return None
    mode = message.get("mode")
    if mode is not None and not (_is_json_int(mode) and _INT32_MIN <= mode <= _INT32_MAX):
        return None
    return message


def _decode_payload(
    data: Any,
    label: str,
    parser: Callable[[Mapping[str, Any]], Any],
    event_type: Callable[[Any], Event],
) -> Event:
    if isinstance(data, dict):
        try:
            return event_type(parser(data))
        except (ArithmeticError, TypeError, ValueError):
            pass
    return ErrorEvent(f"Failed to parse {label} data")


def decode(raw: Union[str, bytes]) -> Optional[Event]:
    """Decode one text frame; ``None`` means the frame is dropped."""

    message = _parse_envelope(raw)
    if message is None:
        return None

    mode = message.get("mode")
    if mode is None:
        mode = 0
    data = message.get("data")

    if mode == 1:
        return _decode_payload(data, "LTP", parse_ltp, LtpEvent)
    if mode == 2:
        return _decode_payload(data, "Quote", parse_quote, QuoteEvent)
    if mode == 3:
        return _decode_payload(data, "Depth", parse_depth, DepthEvent)
    return ErrorEvent(f"Unknown mode: {mode}")


__all__ = ["decode", "parse_ltp", "parse_quote", "parse_depth", "PayloadError"]
