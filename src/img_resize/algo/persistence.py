"""Write a pixel buffer to disk, encoder chosen by mime type."""

from pathlib import Path

from loguru import logger
from PIL import Image

from .. import codec
from ..common.mime import ImageMime
from ..utils.profiling import timed


@timed
def save_image(
    image: Image.Image,
    output_path: str | Path,
    mime: ImageMime,
    jpeg_quality: int = 75,
) -> bool:
    """
    Encode ``image`` as ``mime`` and write it to ``output_path``.

    Any existing file at ``output_path`` is deleted first; the write is not atomic.

    Args:
        image: Pixel buffer to encode (not closed here)
        output_path: Destination file path
        mime: Encoder to use
        jpeg_quality: Quality used for JPEG output

    Returns:
        True if the file was written, False if encoding or writing failed
    """
    output_path = Path(output_path)

    try:
        output_path.unlink(missing_ok=True)
        data = codec.encode(image, mime, quality=jpeg_quality)
        _ = output_path.write_bytes(data)
    except (OSError, ValueError) as exc:
        logger.error(f"Saving {mime} to {output_path} failed: {exc}")
        return False

    logger.debug(f"Wrote {len(data)} bytes of {mime} to {output_path}")
    return True
