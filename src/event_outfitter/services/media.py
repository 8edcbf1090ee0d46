"""Upload MIME type resolution."""

import mimetypes
from pathlib import PurePath

DEFAULT_MIME_TYPE = "application/octet-stream"

_EXTENSION_FALLBACKS = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
}


def resolve_mime_type(
    filename: str | None, declared: str | None, data: bytes
) -> str:
    """Pick the best MIME type for an uploaded image.

    Extension first, then a declared ``image/*`` content type, then file
    signatures, then a fixed extension table.
    """
    extension = PurePath(filename).suffix.lower() if filename else ""
    if extension:
        guessed, _ = mimetypes.guess_type(f"upload{extension}")
        if guessed:
            return guessed
    if declared and declared.lower().startswith("image/"):
        return declared.lower()
    sniffed = detect_image_mime_type(data)
    if sniffed:
        return sniffed
    return _EXTENSION_FALLBACKS.get(extension, DEFAULT_MIME_TYPE)


def detect_image_mime_type(data: bytes) -> str | None:
    """Infer an image MIME type from file signatures."""
    if data.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    if data[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    if data[4:8] == b"ftyp" and data[8:12] in {b"heic", b"heix", b"mif1"}:
        return "image/heic"
    return None
