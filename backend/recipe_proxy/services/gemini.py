import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import httpx

from ..config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpstreamResponse:
    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class UpstreamClient(Protocol):
    async def generate(self, payload: Dict[str, Any]) -> UpstreamResponse:
        ...


class GeminiClient:
    """Thin async client for the Gemini ``generateContent`` endpoint.

    One request per call; a fresh ``httpx.AsyncClient`` is opened and closed
    around it. Transport errors (``httpx.HTTPError``) are not caught here.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._settings = settings
        self._transport = transport

    def endpoint_url(self) -> str:
        return f"{self._settings.gemini_api_base}/models/{self._settings.gemini_model}:generateContent"

    async def generate(self, payload: Dict[str, Any]) -> UpstreamResponse:
        url = self.endpoint_url()
        # Only the path is logged; the key travels in the query string
        logger.debug("POST %s", url)
        async with httpx.AsyncClient(timeout=self._settings.request_timeout, transport=self._transport) as client:
            response = await client.post(
                url,
                params={"key": self._settings.gemini_api_key or ""},
                json=payload,
                headers={"Content-Type": "application/json"},
            )
        return UpstreamResponse(status_code=response.status_code, text=response.text)
