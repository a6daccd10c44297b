"""Click CLI that runs the bridge server."""

from __future__ import annotations

import logging

import click
import uvicorn

from src.bridge.app import build_app
from src.config import BridgeSettings, ConfigError


@click.command()
@click.option("--host", default=None, help="Bind address (overrides HOST).")
@click.option("--port", type=int, default=None, help="Listen port (overrides PORT).")
@click.option("--log-level", default=None, help="Logging level (overrides LOG_LEVEL).")
@click.option("--terminal-qr", is_flag=True, help="Also print pairing QR codes to the log.")
def cli(host: str | None, port: int | None, log_level: str | None, terminal_qr: bool) -> None:
    """Relay WhatsApp messages to an n8n webhook and back."""
    try:
        settings = BridgeSettings.from_env()
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc

    overrides: dict[str, object] = {}
    if host is not None:
        overrides["host"] = host
    if port is not None:
        overrides["port"] = port
    if log_level is not None:
        overrides["log_level"] = log_level.upper()
    if overrides:
        settings = settings.model_copy(update=overrides)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = build_app(settings, terminal_qr=terminal_qr)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    cli()
