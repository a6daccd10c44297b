"""Environment-driven settings for the bridge."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_WEBHOOK_URL = "https://n8nbalde.app.n8n.cloud/webhook/ai-agent-mysql"
DEFAULT_PORT = 3000

_LEGACY_USER_SUFFIX = "@c.us"
_USER_SUFFIX = "@s.whatsapp.net"


class ConfigError(Exception):
    """Raised when an environment variable holds an unusable value."""


def normalize_chat_id(chat_id: str | None) -> str | None:
    """Rewrite legacy ``…@c.us`` user ids to the ``…@s.whatsapp.net`` form."""
    if chat_id and chat_id.endswith(_LEGACY_USER_SUFFIX):
        return chat_id[: -len(_LEGACY_USER_SUFFIX)] + _USER_SUFFIX
    return chat_id


class BridgeSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    group_id: str | None = None
    webhook_url: str = DEFAULT_WEBHOOK_URL
    host: str = "0.0.0.0"
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    session_path: str = "./session"
    webhook_timeout: float | None = None  # None disables the timeout
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BridgeSettings:
        """Build settings from environment variables.

        Empty values count as unset, so ``GRUPO_BUGS=`` listens to every chat.
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> str | None:
            value = env.get(name, "").strip()
            return value or None

        port_raw = _get("PORT")
        try:
            port = int(port_raw) if port_raw else DEFAULT_PORT
        except ValueError as exc:
            raise ConfigError(f"PORT must be an integer, got {port_raw!r}") from exc
        if not 1 <= port <= 65535:
            raise ConfigError(f"PORT out of range: {port}")

        timeout_raw = _get("WEBHOOK_TIMEOUT")
        try:
            timeout = float(timeout_raw) if timeout_raw else None
        except ValueError as exc:
            raise ConfigError(
                f"WEBHOOK_TIMEOUT must be a number of seconds, got {timeout_raw!r}",
            ) from exc

        return cls(
            group_id=normalize_chat_id(_get("GRUPO_BUGS")),
            webhook_url=_get("N8N_WEBHOOK_URL") or DEFAULT_WEBHOOK_URL,
            host=_get("HOST") or "0.0.0.0",
            port=port,
            session_path=_get("SESSION_PATH") or "./session",
            webhook_timeout=timeout,
            log_level=(_get("LOG_LEVEL") or "INFO").upper(),
        )
