import base64
import io
import logging

import qrcode
from qrcode.constants import ERROR_CORRECT_H

logger: logging.Logger = logging.getLogger(__name__)


def generate_qr_code_data_url(text: str, box_size: int = 4, border: int = 2) -> str:
    """PNG QR code for `text` as a data URL, or "" if it cannot be generated."""
    try:
        qr = qrcode.QRCode(
            version=None,
            error_correction=ERROR_CORRECT_H,
            box_size=box_size,
            border=border,
        )
        qr.add_data(text)
        qr.make(fit=True)
        image = qr.make_image(fill_color="black", back_color="white")

        buffer = io.BytesIO()
        image.save(buffer)
        encoded: str = base64.b64encode(buffer.getvalue()).decode("ascii")
        return f"data:image/png;base64,{encoded}"
    except Exception as e:
        logger.error(f"Failed to generate QR code: {str(e)}", exc_info=True)
        return ""
