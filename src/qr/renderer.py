"""QR rendering and the HTML pages served by /qr."""

from __future__ import annotations

import html
import io

import segno

_PAGE_STYLE = "font-family: sans-serif; text-align: center; padding: 50px;"


def render_qr_data_uri(code: str, scale: int = 6) -> str:
    """Render a pairing code as a ``data:image/png;base64,...`` URI."""
    qr = segno.make(code, micro=False)
    return qr.png_data_uri(scale=scale, border=2)


def render_terminal_qr(code: str) -> str:
    qr = segno.make(code, micro=False)
    out = io.StringIO()
    qr.terminal(out=out, compact=True)
    return out.getvalue()


def _page(body: str) -> str:
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        f'<body style="{_PAGE_STYLE}">\n'
        f"{body}\n"
        "</body>\n"
        "</html>\n"
    )


def _reload_script(millis: int) -> str:
    return f"<script>setTimeout(() => location.reload(), {millis})</script>"


def connected_page() -> str:
    return _page(
        "<h1>WhatsApp ya esta conectado</h1>\n"
        "<p>No necesitas escanear el QR</p>\n"
        '<a href="/status">Ver estado</a>'
    )


def waiting_page() -> str:
    return _page(
        "<h1>Esperando QR...</h1>\n"
        "<p>Recarga la pagina en unos segundos</p>\n"
        + _reload_script(3000)
    )


def scan_page(data_uri: str) -> str:
    return _page(
        "<h1>Escanea el QR con WhatsApp</h1>\n"
        f'<img src="{html.escape(data_uri, quote=True)}" style="max-width: 300px;" />\n'
        "<p>Abre WhatsApp &gt; Dispositivos vinculados &gt; Vincular dispositivo</p>\n"
        + _reload_script(5000)
    )
