from __future__ import annotations

import base64
import io

import qrcode

from ..core.constants import QR_BORDER, QR_BOX_SIZE


def render_qr_png(data: str) -> bytes:
    qr = qrcode.QRCode(version=None, box_size=QR_BOX_SIZE, border=QR_BORDER)
    qr.add_data(data)
    qr.make(fit=True)
    image = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    image.save(buf)
    return buf.getvalue()


def render_qr_data_url(data: str) -> str:
    """Embeddable PNG for an <img src=...> attribute."""
    encoded = base64.b64encode(render_qr_png(data)).decode("ascii")
    return f"data:image/png;base64,{encoded}"
