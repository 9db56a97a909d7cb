from __future__ import annotations

from typing import BinaryIO

from PIL import Image

from ..core.exceptions import ValidationError


def decode_member_code(stream: BinaryIO) -> str:
    """Decode the first barcode/QR symbol found in an uploaded image."""

    # pyzbar loads the zbar shared library on import.
    from pyzbar.pyzbar import decode as pyzbar_decode

    try:
        img = Image.open(stream).convert("RGB")
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError):
        # UnidentifiedImageError is an OSError; truncated files fail in convert().
        raise ValidationError("Uploaded file is not a readable image")

    decoded = pyzbar_decode(img)
    if not decoded:
        raise ValidationError("No barcode found in the image")

    try:
        code = decoded[0].data.decode("utf-8").strip()
    except UnicodeDecodeError:
        raise ValidationError("Barcode does not contain a text member code")
    if not code:
        raise ValidationError("Scanned code is empty")
    return code
