import qrcode
import io
import uuid
from typing import Optional
from PIL import Image

from eventdesk.core.config import settings


def encode_qr_png(
    payload: str,
    size: Optional[int] = None,
    border: Optional[int] = None
) -> bytes:
    """
    Render payload as a square black-on-white QR PNG of exactly size x size
    pixels. Same payload and parameters always give the same bytes.
    """
    size = size or settings.QR_IMAGE_SIZE
    border = settings.QR_BORDER if border is None else border

    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=border,
    )

    qr.add_data(payload)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white").get_image()
    img = img.convert("L").resize((size, size), Image.NEAREST)

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def new_instance_id() -> str:
    return str(uuid.uuid4())


def generate_ticket_code(ticket_type_id: str, instance_id: str, salt) -> str:
    # instance_id carries the uniqueness; salt only disambiguates for humans
    type_short = ticket_type_id[:8]
    return f"TKT-{type_short}-{instance_id}-{salt}"
