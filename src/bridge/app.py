"""FastAPI application wiring the session client, webhook and HTTP routes."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.bridge.routes import create_bridge_router
from src.config import BridgeSettings
from src.session.adapter import SessionAdapter
from src.session.client import SessionClient
from src.session.state import SessionState
from src.webhook.forwarder import WebhookForwarder

logger = logging.getLogger(__name__)


def create_app_from_env() -> FastAPI:
    """Factory for uvicorn --factory: reads config from environment variables."""
    return build_app(BridgeSettings.from_env())


def build_app(settings: BridgeSettings, terminal_qr: bool = False) -> FastAPI:
    """Create the app backed by a real WhatsApp session."""
    from src.session.neonize_client import NeonizeSessionClient

    client = NeonizeSessionClient(settings.session_path)
    state = SessionState()
    forwarder = WebhookForwarder(settings.webhook_url, timeout=settings.webhook_timeout)
    adapter = SessionAdapter(
        state, client, forwarder,
        group_id=settings.group_id,
        terminal_qr=terminal_qr,
    )
    client.attach(adapter)
    return create_app(settings, state, client)


def create_app(
    settings: BridgeSettings,
    state: SessionState,
    client: SessionClient,
) -> FastAPI:
    """Create the bridge FastAPI app; the session client runs for the app's lifetime."""

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting WhatsApp bridge...")
        logger.info("n8n webhook: %s", settings.webhook_url)
        logger.info(
            "Configured group: %s",
            settings.group_id or "not configured - listening to all messages",
        )
        await client.start()
        logger.info("HTTP server listening on port %d", settings.port)
        logger.info("Visit /qr to scan the QR code")
        logger.info("Visit /status to see the connection state")
        logger.info("Visit /chats to list groups (after connecting)")
        try:
            yield
        finally:
            await client.stop()

    app = FastAPI(docs_url=None, redoc_url=None, lifespan=lifespan)
    app.include_router(create_bridge_router(settings, state, client))
    return app
