"""
HTTP client for the lead API.

Every response uses the envelope `{success, data?, error?}`. A non-2xx
status, `success: false`, a missing `data` field, a timeout or a network
failure all raise ApiError carrying the message to show the user.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

import httpx

from domain.lead import Lead

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS: float = 30.0


def _lead_path(lead_id: str) -> str:
    return f"/api/leads/{quote(lead_id, safe='')}"


class ApiError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class FunnelApiClient:
    """
    Thin synchronous client for `/api/leads`.

    Example:
        with FunnelApiClient("https://check.example.com") as client:
            lead = client.create_lead(payload)
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        admin_password: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        headers = {"Content-Type": "application/json"}
        if admin_password:
            headers["X-Admin-Password"] = admin_password
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(base_url=base_url, timeout=timeout)
        self._headers = headers

    def __enter__(self) -> "FunnelApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, headers=self._headers, **kwargs)
        except httpx.TimeoutException as exc:
            logger.error("API request timed out: %s %s", method, path)
            raise ApiError("Request timed out") from exc
        except httpx.HTTPError as exc:
            logger.error("API request failed: %s %s (%s)", method, path, exc)
            raise ApiError(f"Network error: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if not response.is_success or not body.get("success") or "data" not in body:
            message = body.get("error") or "Request failed"
            raise ApiError(str(message), status_code=response.status_code)
        return body["data"]

    def create_lead(self, payload: Mapping[str, Any]) -> Lead:
        return Lead.from_record(self._request("POST", "/api/leads", json=dict(payload)))

    def list_leads(self, limit: int = 10, cursor: Optional[str] = None, query: Optional[str] = None) -> Dict[str, Any]:
        """Return `{"items": [Lead, ...], "next": cursor or None}`."""

        params: Dict[str, Any] = {"limit": limit}
        if cursor:
            params["cursor"] = cursor
        if query:
            params["q"] = query
        data = self._request("GET", "/api/leads", params=params)
        return {
            "items": [Lead.from_record(item) for item in data.get("items", [])],
            "next": data.get("next"),
        }

    def set_processed(self, lead_id: str, processed: bool) -> Lead:
        data = self._request("PATCH", _lead_path(lead_id), json={"processed": processed})
        return Lead.from_record(data)

    def delete_lead(self, lead_id: str) -> bool:
        data = self._request("DELETE", _lead_path(lead_id))
        return bool(data.get("deleted"))


__all__ = ["ApiError", "DEFAULT_TIMEOUT_SECONDS", "FunnelApiClient"]
