"""Azure OpenAI chat-completions client returning merged records."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

import httpx

from azchat.config import AzureConfig, DecoderOptions
from azchat.decoder import decode
from azchat.types.merged import MergedResponse

logger = logging.getLogger(__name__)


class InvalidArgument(ValueError):
    """Raised for request bodies this client refuses to send."""


@dataclass
class AzureChatError(RuntimeError):
    status_code: int
    response_text: str
    request_id: str | None

    def __str__(self) -> str:
        return f"AzureChatError(status={self.status_code}, request_id={self.request_id})"


class AzureChatClient:
    def __init__(
        self,
        config: AzureConfig,
        *,
        options: DecoderOptions | None = None,
        timeout_s: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._options = options or DecoderOptions()
        self._client = httpx.AsyncClient(base_url=config.endpoint, timeout=timeout_s, transport=transport)

    async def create(self, request: dict[str, Any]) -> MergedResponse:
        """Send a non-streaming chat completion request and decode the reply."""
        if request.get("stream"):
            raise InvalidArgument("When stream is true, use a streaming chat completion endpoint.")

        response = await self._client.post(
            self._config.chat_completions_path,
            params={"api-version": self._config.api_version},
            json=request,
            headers={"api-key": self._config.api_key},
        )
        request_id = _extract_request_id(response.headers)
        if response.status_code < 200 or response.status_code >= 300:
            raise AzureChatError(
                status_code=response.status_code,
                response_text=response.text,
                request_id=request_id,
            )

        logger.debug("Received chat completion (request_id=%s, %d bytes)", request_id, len(response.content))
        return decode(response.content, self._options)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AzureChatClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


def _extract_request_id(headers: httpx.Headers) -> str | None:
    return headers.get("x-request-id") or headers.get("apim-request-id")
