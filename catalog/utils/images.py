# catalog/utils/images.py
import io
import base64
import mimetypes
from typing import Optional
from PIL import Image, UnidentifiedImageError

from catalog.models.form_draft import ImageInput

DEFAULT_MIME = "application/octet-stream"


def _detect_mime(data: bytes) -> Optional[str]:
    # PIL only reads the header here; the image is never decoded or re-encoded
    try:
        with Image.open(io.BytesIO(data)) as im:
            return Image.MIME.get(im.format) if im.format else None
    except (UnidentifiedImageError, OSError, ValueError):
        return None


def guess_image_mime(data: bytes, filename: Optional[str] = None, content_type: Optional[str] = None) -> str:
    """
    Pick the MIME type for an image payload: explicit content type first,
    then the bytes themselves, then the filename extension.
    """
    if content_type:
        return content_type
    detected = _detect_mime(data)
    if detected:
        return detected
    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed
    return DEFAULT_MIME


def encode_image_data_url(data: bytes, filename: Optional[str] = None, content_type: Optional[str] = None) -> str:
    """Return `data:<mime>;base64,<payload>` for the raw image bytes."""
    mime = guess_image_mime(data, filename, content_type)
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime};base64,{payload}"


def encode_image_input(image: ImageInput) -> str:
    return encode_image_data_url(image.data, image.filename, image.content_type)


async def read_image_upload(upload_file) -> Optional[ImageInput]:
    """
    Read a starlette UploadFile into an ImageInput. Returns None when the
    form carried no file (no filename and no bytes).
    """
    if upload_file is None:
        return None
    contents = await upload_file.read()
    if not contents and not upload_file.filename:
        return None
    return ImageInput(
        data=contents,
        filename=upload_file.filename or None,
        content_type=upload_file.content_type or None,
    )
