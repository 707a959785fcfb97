"""Image helpers for the web layer."""

from io import BytesIO

from PIL import Image


def encode_jpeg(img: Image.Image, quality: int = 85) -> bytes:
    """Encode a decoded image for an HTTP response."""
    if img.mode != "RGB":
        img = img.convert("RGB")
    buffer = BytesIO()
    img.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()
