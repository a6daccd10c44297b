"""Relays inbound chat messages to the workflow webhook.

The workflow answers with an optional ``respuesta`` field; when present it is
returned so the caller can post it back to the chat. Every failure mode
(non-2xx, malformed body, network error) is logged and reported as no reply.
"""

from __future__ import annotations

import json
import logging

import httpx

from src.webhook.models import WebhookPayload

logger = logging.getLogger(__name__)

REPLY_FIELD = "respuesta"


class WebhookForwarder:
    """POSTs webhook payloads and extracts the optional reply."""

    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        return self._url

    async def forward(self, payload: WebhookPayload) -> str | None:
        """Send the payload; return the reply text or None."""
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.post(
                    self._url,
                    json=payload.to_json(),
                    headers={"Content-Type": "application/json"},
                    timeout=self._timeout,
                )
        except httpx.HTTPError as exc:
            logger.error("Webhook request to %s failed: %s", self._url, exc)
            return None

        if not resp.is_success:
            logger.error("Webhook returned status %d", resp.status_code)
            return None

        try:
            data = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Webhook returned a non-JSON body, ignoring it")
            return None

        logger.info("Webhook response: %s", json.dumps(data)[:100])

        if not isinstance(data, dict):
            return None
        reply = data.get(REPLY_FIELD)
        if not isinstance(reply, str) or not reply:
            return None
        return reply
