import base64
import json
from io import BytesIO

import qrcode


def token_text(signed):
    """The exact text embedded in the QR code and presented back by scanners"""
    return json.dumps(signed, separators=(",", ":"))


def render_qr_png(text):
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(text)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffered = BytesIO()
    img.save(buffered, format="PNG")
    return buffered.getvalue()


def qr_data_url(signed):
    """Render ``signed`` (a token dict or its exact text) as a PNG data URL"""
    text = signed if isinstance(signed, str) else token_text(signed)
    png = render_qr_png(text)
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")
