"""
Image helpers: public URL resolution for backend image paths and WebP
thumbnails used as local upload previews.
"""
import io
import logging
from typing import Optional, Tuple
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE = "/placeholder.svg"

# Preview settings
PREVIEW_MAX_DIMENSION = 480  # Longest side of a preview thumbnail in pixels
PREVIEW_QUALITY = 80         # WebP quality (0-100)
PREVIEW_METHOD = 4           # Compression method (0-6, higher = better compression but slower)


def resolve_image_url(path: Optional[str], base_url: str) -> str:
    """
    Turn a backend image path into a URL the browser can load.

    Args:
        path: Relative storage path or absolute URL
        base_url: Asset host the relative paths live under

    Returns:
        str: Absolute URL, or the placeholder when no path is set
    """
    if not path:
        return PLACEHOLDER_IMAGE
    if path.startswith("http://") or path.startswith("https://"):
        return path
    clean_path = path[1:] if path.startswith("/") else path
    return f"{base_url.rstrip('/')}/{clean_path}"


def make_preview(
    image_bytes: bytes,
    content_type: str = "application/octet-stream",
    max_dimension: Optional[int] = PREVIEW_MAX_DIMENSION,
    quality: int = PREVIEW_QUALITY,
) -> Tuple[bytes, str]:
    """
    Build a small WebP thumbnail for a selected upload.

    Args:
        image_bytes: Original file bytes
        content_type: Content type of the original file
        max_dimension: Longest side after downscaling (None to keep the size)
        quality: WebP quality (0-100)

    Returns:
        Tuple[bytes, str]:
            - Thumbnail bytes (or the original bytes if the image cannot be decoded)
            - Content type of the returned bytes
    """
    try:
        image = Image.open(io.BytesIO(image_bytes))

        # WebP supports transparency, so keep alpha channels
        if image.mode == 'P':
            image = image.convert('RGBA')
        elif image.mode not in ('RGB', 'RGBA', 'LA'):
            image = image.convert('RGB')

        if max_dimension:
            image.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)

        buffer = io.BytesIO()
        image.save(buffer, format='WEBP', quality=quality, method=PREVIEW_METHOD)
        preview = buffer.getvalue()

        logger.debug(f"Built preview {image.size[0]}x{image.size[1]}: {len(image_bytes):,} -> {len(preview):,} bytes")
        return preview, "image/webp"

    except UnidentifiedImageError as e:
        logger.warning(f"Cannot identify image format for preview: {str(e)}")
        return image_bytes, content_type

    except Exception as e:
        logger.error(f"Error building image preview: {str(e)}", exc_info=True)
        return image_bytes, content_type
