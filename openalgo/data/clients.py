"""HTTP client shared by the REST sub-clients."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import requests

from openalgo.errors import ApiError, RequestError
from openalgo.infra.config import OpenAlgoConfig


class OpenAlgoClient:
    """Issues JSON requests against ``{host}/api/{version}/{endpoint}``.

    Every POST body carries the configured ``apikey``. Responses are returned
    as decoded JSON dictionaries; non-2xx answers raise :class:`ApiError` and
    transport failures raise :class:`RequestError`.
    """

    def __init__(
        self,
        config: OpenAlgoConfig,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.logger = logger or logging.getLogger(__name__)

    @property
    def api_key(self) -> str:
        return self.config.api_key

    def build_url(self, endpoint: str) -> str:
        return f"{self.config.host}/api/{self.config.version}/{endpoint}"

    def post(self, endpoint: str, payload: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """POST ``payload`` (with ``apikey`` added) and return the decoded body."""

        url = self.build_url(endpoint)
        body = {"apikey": self.api_key, **(payload or {})}
        try:
            response = self.session.post(url, headers=self._headers(), json=body, timeout=self.config.timeout_seconds)
        except requests.RequestException as exc:
            self.logger.warning("POST %s failed: %s", url, exc, extra={"event": "rest_failure", "endpoint": endpoint})
            raise RequestError(f"POST {url} failed: {exc}") from exc
        return self._decode(response, "POST", url)

    def get(self, endpoint: str, params: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        url = self.build_url(endpoint)
        try:
            response = self.session.get(url, headers=self._headers(), params=dict(params or {}), timeout=self.config.timeout_seconds)
        except requests.RequestException as exc:
            self.logger.warning("GET %s failed: %s", url, exc, extra={"event": "rest_failure", "endpoint": endpoint})
            raise RequestError(f"GET {url} failed: {exc}") from exc
        return self._decode(response, "GET", url)

    def _decode(self, response: requests.Response, method: str, url: str) -> Dict[str, Any]:
        if not response.ok:
            self.logger.warning(
                "%s %s returned HTTP %s", method, url, response.status_code,
                extra={"event": "rest_http_error", "status_code": response.status_code},
            )
            raise ApiError(
                f"HTTP {response.status_code} - {response.text}",
                status_code=response.status_code,
                body=response.text,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                f"{method} {url} returned a non-JSON body",
                status_code=response.status_code,
                body=response.text,
            ) from exc

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json"}


def compact(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop ``None`` values so optional request fields are omitted."""

    return {key: value for key, value in payload.items() if value is not None}


__all__ = ["OpenAlgoClient", "compact"]
