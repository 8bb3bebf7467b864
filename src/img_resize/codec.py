"""Pillow codec adapter.

Thin wrapper that decodes byte streams into Pillow images, reads EXIF
metadata, rotates, and encodes back to bytes. All pixel-format work is
delegated to Pillow; only jpeg/png/gif are let through.
"""

from collections.abc import Mapping
from io import BytesIO
from typing import NamedTuple

from loguru import logger
from PIL import ExifTags, Image, UnidentifiedImageError

from .common.errors import InvalidImageError
from .common.mime import ImageMime

# Counter-clockwise degrees -> lossless transpose
_ROTATIONS: dict[int, Image.Transpose] = {
    90: Image.Transpose.ROTATE_90,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_270,
}

TRUECOLOR_MODES = ("RGB", "RGBA")


class ImageProbe(NamedTuple):
    pil_format: str | None
    mime: ImageMime | None
    size: tuple[int, int]


def probe(data: bytes) -> ImageProbe:
    """Identify format and size without decoding pixels."""
    try:
        with Image.open(BytesIO(data)) as img:
            return ImageProbe(img.format, ImageMime.from_pil_format(img.format), img.size)
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        logger.debug(f"Could not identify image stream: {exc}")
        return ImageProbe(None, None, (0, 0))


def decode(data: bytes) -> Image.Image:
    """Decode the first frame into a detached RGB, RGBA or palette image.

    Raises:
        InvalidImageError: If Pillow cannot produce a pixel buffer
    """
    try:
        with Image.open(BytesIO(data)) as img:
            img.load()
            decoded = img.copy()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        raise InvalidImageError(f"Image file not valid: {exc}") from exc

    if decoded.width <= 0 or decoded.height <= 0:
        raise InvalidImageError("Image file not valid: empty pixel buffer")

    return _normalize_mode(decoded)


def _normalize_mode(image: Image.Image) -> Image.Image:
    if image.mode in TRUECOLOR_MODES:
        return image

    # Palette images are kept only with a single transparent index (or none)
    if image.mode == "P" and isinstance(image.info.get("transparency", 0), int):
        return image

    has_alpha = "A" in image.getbands() or "transparency" in image.info
    converted = image.convert("RGBA" if has_alpha else "RGB")
    image.close()
    return converted


def read_exif(data: bytes) -> dict[str, object]:
    """Best-effort EXIF read. Any failure yields an empty mapping."""
    try:
        with Image.open(BytesIO(data)) as img:
            exif = img.getexif()
            return {ExifTags.TAGS.get(tag, str(tag)): value for tag, value in exif.items()}
    except Exception as exc:
        logger.warning(f"Ignoring unreadable EXIF metadata: {exc}")
        return {}


def orientation_from_exif(exif: Mapping[str, object]) -> int | None:
    value = exif.get("Orientation")
    if isinstance(value, int):
        return value
    return None


def read_orientation(data: bytes) -> int | None:
    return orientation_from_exif(read_exif(data))


def rotate(image: Image.Image, degrees: int) -> Image.Image:
    """Rotate counter-clockwise by a multiple of 90 degrees, returning a new image."""
    degrees %= 360
    if degrees == 0:
        return image.copy()
    if degrees not in _ROTATIONS:
        raise ValueError(f"Rotation must be a multiple of 90 degrees, got {degrees}")
    return image.transpose(_ROTATIONS[degrees])


def is_truecolor(image: Image.Image) -> bool:
    return image.mode in TRUECOLOR_MODES


def transparent_index(image: Image.Image) -> int | None:
    """Palette index registered as transparent, if any."""
    if image.mode != "P":
        return None
    index = image.info.get("transparency")
    return index if isinstance(index, int) else None


def encode(image: Image.Image, mime: ImageMime, quality: int = 75) -> bytes:
    """Encode to jpeg/png/gif bytes.

    Raises:
        OSError: If Pillow fails to write the image
    """
    save_kwargs: dict[str, object] = {}

    # JPEG does not support alpha channel
    if mime is ImageMime.JPEG:
        if image.mode != "RGB":
            image = image.convert("RGB")
        save_kwargs["quality"] = quality

    if mime is ImageMime.PNG:
        save_kwargs["optimize"] = True

    buffer = BytesIO()
    image.save(buffer, format=mime.pil_format, **save_kwargs)
    return buffer.getvalue()
