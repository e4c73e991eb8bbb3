from __future__ import annotations

import io
from typing import BinaryIO, Optional

import qrcode
from PIL import Image

from .model import Site


def render_site_qr_png(site: Site) -> io.BytesIO:
    """Render the site's QR token as a PNG buffer (rewound)."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(site.qr_code_value)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf


def decode_qr_image(stream: BinaryIO) -> Optional[str]:
    """Decode the first QR code found in an uploaded photo. None if there is none."""
    # pyzbar loads the native zbar library at import time
    from pyzbar.pyzbar import decode as pyzbar_decode

    img = Image.open(stream).convert("RGB")
    decoded = pyzbar_decode(img)
    if not decoded:
        return None
    return decoded[0].data.decode("utf-8").strip()
