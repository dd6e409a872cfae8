"""
Photo codec.

Photos are stored as baseline JPEG. New users get a placeholder photo, a
solid-colour image generated by :func:`generate_default_image` and serialised
with :func:`encode`. :func:`decode` parses stored bytes back into a Pillow
image; JPEG is lossy, so only the dimensions survive a round trip exactly.
"""

import io

from PIL import Image, UnidentifiedImageError

from errors import DecodeError, EncodeError

FORMAT = 'JPEG'
MODE = 'RGB'

DEFAULT_COLOR = (0, 0, 255)


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def generate_default_image(width: int, height: int) -> Image.Image:
    """
    Build a ``width`` x ``height`` image filled with :data:`DEFAULT_COLOR`.

    Raises
    ------
    ValueError
        If either dimension is not a positive integer.
    """
    if not _is_positive_int(width) or not _is_positive_int(height):
        raise ValueError(f'Invalid image size: {width!r}x{height!r}')
    return Image.new(MODE, (width, height), DEFAULT_COLOR)


def encode(image: Image.Image, quality: int) -> bytes:
    """Serialise ``image`` as JPEG at ``quality`` (0-100)."""
    if not isinstance(quality, int) or isinstance(quality, bool) or not 0 <= quality <= 100:
        raise EncodeError(f'Quality must be an integer in [0, 100], got {quality!r}')
    if not isinstance(image, Image.Image):
        raise EncodeError('Not an image')
    width, height = image.size
    if width <= 0 or height <= 0:
        raise EncodeError(f'Cannot encode a zero-area image ({width}x{height})')

    if image.mode != MODE:
        image = image.convert(MODE)

    buffer = io.BytesIO()
    try:
        image.save(buffer, format=FORMAT, quality=quality)
    except (OSError, ValueError) as e:
        raise EncodeError(f'JPEG encoding failed: {e}') from e
    return buffer.getvalue()


def decode(data: bytes) -> Image.Image:
    """Parse JPEG ``data`` into a fully loaded image."""
    if not data:
        raise DecodeError('No image data')
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(f'Invalid JPEG data: {e}') from e

    if image.format != FORMAT:
        raise DecodeError(f'Unsupported image format: {image.format}')
    return image
