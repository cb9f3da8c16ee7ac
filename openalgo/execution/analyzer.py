"""Analyzer (paper-trading sandbox) mode controls."""

from typing import Any, Dict

from openalgo.data.clients import OpenAlgoClient


class AnalyzerAPI:
    """Query or flip analyzer mode, in which orders are simulated server-side."""

    def __init__(self, client: OpenAlgoClient):
        self.client = client

    def status(self) -> Dict[str, Any]:
        return self.client.post("analyzer")

    def toggle(self, mode: bool) -> Dict[str, Any]:
        """Enable (``True``) or disable (``False``) analyzer mode."""

        return self.client.post("analyzer/toggle", {"mode": mode})


__all__ = ["AnalyzerAPI"]
