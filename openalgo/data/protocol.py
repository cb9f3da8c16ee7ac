"""Outbound WebSocket frames: the auth handshake and subscription commands."""

from __future__ import annotations

import json
from typing import Any, Dict

from .types import SubscriptionCommand


def auth_message(api_key: str) -> str:
    """Render the single authentication frame sent right after the socket opens."""

    return json.dumps({"action": "authenticate", "api_key": api_key})


def subscription_payload(command: SubscriptionCommand) -> Dict[str, Any]:
    return {
        "action": command.action,
        "mode": command.mode.value,
        "symbols": [instrument.to_dict() for instrument in command.instruments],
    }


def render_command(command: SubscriptionCommand) -> str:
    """Render a subscribe/unsubscribe command as one text frame."""

    return json.dumps(subscription_payload(command))


__all__ = ["auth_message", "render_command", "subscription_payload"]
