"""Process-wide session state shared by the event adapter and the HTTP layer."""

from __future__ import annotations

from dataclasses import dataclass

from src.models import ConnectionStatus


@dataclass
class SessionState:
    """Pairing code and readiness of the chat session.

    A pending pairing code and the ready flag are never set together:
    each transition method assigns both fields.
    """

    pairing_code: str | None = None
    ready: bool = False

    def pairing_code_issued(self, code: str) -> None:
        self.pairing_code = code
        self.ready = False

    def session_ready(self) -> None:
        self.pairing_code = None
        self.ready = True

    def disconnected(self) -> None:
        self.pairing_code = None
        self.ready = False

    @property
    def qr_pending(self) -> bool:
        return self.pairing_code is not None

    @property
    def status(self) -> ConnectionStatus:
        if self.ready:
            return ConnectionStatus.READY
        if self.pairing_code is not None:
            return ConnectionStatus.AWAITING_SCAN
        return ConnectionStatus.DISCONNECTED
