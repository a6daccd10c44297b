"""HTTP routes of the bridge.

- /qr: pairing page (HTML)
- /status, /health: service state
- /send: outbound message from the workflow
- /chats: group chats visible to the session
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse

from src.qr.renderer import connected_page, render_qr_data_uri, scan_page, waiting_page

if TYPE_CHECKING:
    from src.config import BridgeSettings
    from src.session.client import SessionClient
    from src.session.state import SessionState

logger = logging.getLogger(__name__)

NOT_CONNECTED = "WhatsApp no esta conectado"
ALL_CHATS = "todos"


def _not_connected() -> JSONResponse:
    return JSONResponse({"error": NOT_CONNECTED}, status_code=503)


async def _json_object(request: Request) -> dict[str, Any]:
    """Parse the request body; anything but a JSON object counts as empty."""
    body = await request.body()
    if not body:
        return {}
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def create_bridge_router(
    settings: BridgeSettings,
    state: SessionState,
    client: SessionClient,
) -> APIRouter:
    """Create the router serving the bridge endpoints."""
    router = APIRouter()

    @router.get("/qr", response_class=HTMLResponse)
    async def qr() -> HTMLResponse:
        if state.ready:
            return HTMLResponse(connected_page())
        code = state.pairing_code
        if code is None:
            return HTMLResponse(waiting_page())
        return HTMLResponse(scan_page(render_qr_data_uri(code)))

    @router.get("/status")
    async def status() -> dict[str, Any]:
        return {
            "status": "connected" if state.ready else "disconnected",
            "qrPending": state.qr_pending,
            "grupo": settings.group_id or ALL_CHATS,
            "webhook": settings.webhook_url,
        }

    @router.get("/health")
    async def health() -> dict[str, Any]:
        return {"ok": True, "timestamp": datetime.now(UTC).isoformat()}

    @router.post("/send")
    async def send(request: Request) -> JSONResponse:
        if not state.ready:
            return _not_connected()

        body = await _json_object(request)
        message = body.get("mensaje")
        if not message:
            return JSONResponse(
                {"error": 'Falta el campo "mensaje"'}, status_code=400,
            )
        if not isinstance(message, str):
            return JSONResponse(
                {"error": 'El campo "mensaje" debe ser texto'}, status_code=400,
            )

        chat_id = body.get("chatId")
        if chat_id is not None and not isinstance(chat_id, str):
            return JSONResponse(
                {"error": 'El campo "chatId" debe ser texto'}, status_code=400,
            )

        target = chat_id or settings.group_id
        if not target:
            return JSONResponse(
                {"error": "Falta chatId y no hay grupo por defecto"},
                status_code=400,
            )

        try:
            await client.send_message(target, message)
        except Exception as e:
            logger.exception("Error sending message to %s", target)
            return JSONResponse({"error": str(e)}, status_code=500)

        logger.info("Message sent to %s", target)
        return JSONResponse({"ok": True, "destino": target})

    @router.get("/chats")
    async def chats() -> JSONResponse:
        if not state.ready:
            return _not_connected()

        try:
            groups = await client.get_group_chats()
        except Exception as e:
            logger.exception("Error listing chats")
            return JSONResponse({"error": str(e)}, status_code=500)

        return JSONResponse({
            "grupos": [
                {"id": g.id, "nombre": g.name, "participantes": g.participants}
                for g in groups
            ],
        })

    return router
