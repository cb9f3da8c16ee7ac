"""Market calendar and notification endpoints."""

from __future__ import annotations

from typing import Any, Dict

from .clients import OpenAlgoClient

DEFAULT_TELEGRAM_PRIORITY = 5


class UtilitiesAPI:
    def __init__(self, client: OpenAlgoClient) -> None:
        self.client = client

    def holidays(self, year: int) -> Dict[str, Any]:
        return self.client.post("market/holidays", {"year": year})

    def timings(self, date: str) -> Dict[str, Any]:
        """Exchange session timings for ``date`` (``YYYY-MM-DD``)."""

        return self.client.post("market/timings", {"date": date})

    def telegram(self, username: str, message: str, priority: int = DEFAULT_TELEGRAM_PRIORITY) -> Dict[str, Any]:
        return self.client.post(
            "telegram/notify",
            {"username": username, "message": message, "priority": priority},
        )


__all__ = ["UtilitiesAPI"]
