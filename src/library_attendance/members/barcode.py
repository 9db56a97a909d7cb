from __future__ import annotations

import io

import qrcode


def render_member_qr(member_id: str) -> io.BytesIO:
    """PNG of a QR code holding the member id, ready for ``send_file``."""

    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(member_id)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf
