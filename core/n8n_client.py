# =============================================================================
# core/n8n_client.py  -  HTTP Client Adapter for the n8n REST API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Binds one httpx.AsyncClient to the n8n public API (`{N8N_API_URL}/api/v1`)
#   with the API key header, and exposes a single `request()` coroutine.
#
# THE STATUS POLICY (the only real decision in this file):
#   - status < 500   -> returned as a normal N8nResponse.  A 404 or a 400
#                       carries useful JSON from n8n ("workflow not found",
#                       "request/body must have required property 'nodes'")
#                       and the dispatcher passes it through verbatim.
#   - status >= 500  -> raises N8nApiError.
#   - network errors -> raises N8nApiError.
#
# There is deliberately no retry and no timeout policy of our own; httpx's
# defaults apply unless a timeout is passed in.
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from core.errors import N8nApiError

logger = logging.getLogger(__name__)

API_SUFFIX = "/api/v1"


def normalize_base_url(api_url: str) -> str:
    """Append /api/v1 unless the configured URL already ends with it."""
    url = api_url.rstrip("/")
    return url if url.endswith(API_SUFFIX) else f"{url}{API_SUFFIX}"


@dataclass(frozen=True)
class N8nResponse:
    status_code: int
    data: Any       # parsed JSON, raw text for non-JSON bodies, "" when empty


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return ""
    try:
        return response.json()
    except ValueError:
        # An HTML login page from a reverse proxy lands here.
        return response.text


class N8nClient:
    """Async adapter around the n8n API.  One instance per process."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = normalize_base_url(api_url)
        client_kwargs: dict[str, Any] = {
            "base_url": self.base_url,
            "headers": {
                "X-N8N-API-KEY": api_key,
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            "transport": transport,
        }
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        self._client = httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> "N8nClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
    ) -> N8nResponse:
        """Send one request.  Raises N8nApiError for 5xx or transport failure."""
        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.TransportError as exc:
            raise N8nApiError(str(exc) or exc.__class__.__name__) from exc

        body = _decode_body(response)
        if response.status_code >= 500:
            raise N8nApiError(
                f"Request failed with status code {response.status_code}",
                status_code=response.status_code,
                body=body,
            )
        return N8nResponse(status_code=response.status_code, data=body)
