import io
from PIL import Image as PILImage


MAX_FILE_SIZE = 10 * 1024 * 1024  # 10 MB


def to_jpeg(image_bytes, quality=90):
    """Validate image bytes and re-encode them as JPEG.

    - Checks file size
    - Verifies it's a real image via Pillow
    - Strips EXIF data by re-encoding

    Raises:
        ValueError on invalid input
    """
    if len(image_bytes) > MAX_FILE_SIZE:
        raise ValueError(f"Image too large: {len(image_bytes)} bytes (max {MAX_FILE_SIZE})")

    try:
        img = PILImage.open(io.BytesIO(image_bytes))
        img.verify()  # verify it's a real image
    except Exception:
        raise ValueError("Invalid image file")

    # Re-open (verify() closes the file) and re-encode to strip EXIF
    img = PILImage.open(io.BytesIO(image_bytes))
    if img.mode not in ("RGB", "L"):
        img = img.convert("RGB")

    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()
