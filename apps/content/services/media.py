"""
Media library service - storing uploaded images, documents and videos.

Raster images are transcoded to WebP with Pillow; SVG, documents and videos
are stored byte for byte. Files go to the default storage under a
``<ms timestamp>-<random><ext>`` name and are served from ``MEDIA_URL``.
"""

import io
import logging
import os
import random
import time
from uuid import UUID

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.db.models import QuerySet
from PIL import Image, ImageOps, UnidentifiedImageError

from apps.content.models import Media
from .exceptions import MediaNotFoundError, MediaValidationError

logger = logging.getLogger(__name__)

SVG_MIMETYPE = 'image/svg+xml'
WEBP_MIMETYPE = 'image/webp'

IMAGE_MIMETYPES = (
    'image/jpeg',
    'image/png',
    'image/gif',
    'image/webp',
    'image/bmp',
    'image/tiff',
    'image/x-icon',
    'image/avif',
    SVG_MIMETYPE,
)

DOCUMENT_EXTENSIONS = {
    'application/pdf': '.pdf',
    'application/msword': '.doc',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document': '.docx',
}

VIDEO_MIMETYPES = (
    'video/mp4',
    'video/webm',
    'video/quicktime',
    'video/x-msvideo',
    'video/x-matroska',
)
VIDEO_EXTENSIONS = ('.mp4', '.mov', '.avi', '.mkv', '.webm', '.m4v')


def unique_filename(ext: str) -> str:
    return f"{int(time.time() * 1000)}-{random.randint(0, 10 ** 9)}{ext}"


def _check_upload(upload, *, allowed, max_bytes: int, kind: str) -> str:
    if upload is None:
        raise MediaValidationError("No file uploaded")

    mimetype = getattr(upload, 'content_type', '') or ''
    if mimetype not in allowed:
        raise MediaValidationError(f"Unsupported {kind} type: '{mimetype or 'unknown'}'")

    if upload.size > max_bytes:
        raise MediaValidationError(
            f"File too large: {upload.size} bytes (max {max_bytes // (1024 * 1024)} MB)"
        )
    return mimetype


def _save(content: bytes, ext: str, mimetype: str) -> Media:
    filename = default_storage.save(unique_filename(ext), ContentFile(content))
    media = Media.objects.create(
        filename=filename,
        url=default_storage.url(filename),
        mimetype=mimetype,
        size=len(content),
    )
    logger.info("Stored %s (%s, %d bytes)", media.filename, mimetype, media.size)
    return media


def transcode_to_webp(data: bytes, quality: int) -> bytes:
    """
    Re-encode raster image bytes as WebP.

    Raises:
        MediaValidationError: If Pillow cannot read the image
    """
    try:
        with Image.open(io.BytesIO(data)) as im:
            im = ImageOps.exif_transpose(im)
            if im.mode not in ('RGB', 'RGBA'):
                has_alpha = im.mode in ('LA', 'PA') or 'transparency' in im.info
                im = im.convert('RGBA' if has_alpha else 'RGB')
            output = io.BytesIO()
            im.save(output, 'WEBP', quality=quality)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise MediaValidationError(f"Cannot read image: {e}")
    return output.getvalue()


def store_image(*, upload) -> Media:
    """
    Store an uploaded image.

    Raster formats are converted to WebP at ``MEDIA_WEBP_QUALITY``; SVG is
    kept as is.

    Args:
        upload: Django ``UploadedFile``

    Returns:
        Created Media record; ``url`` is the public path

    Raises:
        MediaValidationError: If the file is missing, too large or not an image
    """
    mimetype = _check_upload(
        upload, allowed=IMAGE_MIMETYPES, max_bytes=settings.MEDIA_IMAGE_MAX_BYTES, kind='image'
    )
    data = upload.read()

    if mimetype == SVG_MIMETYPE:
        return _save(data, '.svg', SVG_MIMETYPE)

    return _save(transcode_to_webp(data, settings.MEDIA_WEBP_QUALITY), '.webp', WEBP_MIMETYPE)


def store_document(*, upload) -> Media:
    """
    Store a PDF, DOC or DOCX file unchanged.

    Raises:
        MediaValidationError: If the file is missing, too large or of another type
    """
    mimetype = _check_upload(
        upload, allowed=DOCUMENT_EXTENSIONS, max_bytes=settings.MEDIA_DOCUMENT_MAX_BYTES, kind='document'
    )
    return _save(upload.read(), DOCUMENT_EXTENSIONS[mimetype], mimetype)


def store_video(*, upload) -> Media:
    """
    Store a video file unchanged.

    The original extension is kept when it is a known video extension,
    otherwise ``.mp4`` is used.

    Raises:
        MediaValidationError: If the file is missing, too large or not a video
    """
    mimetype = _check_upload(
        upload, allowed=VIDEO_MIMETYPES, max_bytes=settings.MEDIA_VIDEO_MAX_BYTES, kind='video'
    )
    ext = os.path.splitext(upload.name or '')[1].lower()
    if ext not in VIDEO_EXTENSIONS:
        ext = '.mp4'
    return _save(upload.read(), ext, mimetype)


def list_media() -> QuerySet:
    """All media, newest first."""
    return Media.objects.order_by('-created_at')


def delete_media(*, media_id: UUID) -> None:
    """
    Delete a media record and its file.

    A file already missing from storage is not an error.

    Raises:
        MediaNotFoundError: If media doesn't exist
    """
    try:
        media = Media.objects.get(id=media_id)
    except Media.DoesNotExist:
        raise MediaNotFoundError("Media not found")

    if default_storage.exists(media.filename):
        default_storage.delete(media.filename)
    media.delete()
    logger.info("Deleted media %s", media.filename)
