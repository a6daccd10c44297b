"""The session client runs for the lifetime of the app."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from src.bridge.app import create_app
from src.session.state import SessionState
from tests.conftest import FakeSessionClient, make_settings


@pytest.mark.asyncio
async def test_client_started_and_stopped() -> None:
    fake = FakeSessionClient()
    app = create_app(make_settings(), SessionState(), fake)

    async with app.router.lifespan_context(app):
        assert fake.started is True
        assert fake.stopped is False

    assert fake.stopped is True


@pytest.mark.asyncio
async def test_docs_disabled() -> None:
    app = create_app(make_settings(), SessionState(), FakeSessionClient())
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        resp = await client.get("/docs")
    assert resp.status_code == 404
