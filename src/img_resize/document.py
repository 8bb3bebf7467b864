"""ImageDocument: a decoded, orientation-corrected image with an owned pixel buffer."""

from collections.abc import Mapping
from pathlib import Path
from types import TracebackType
from typing import Self

from loguru import logger
from PIL import Image

from . import codec
from .algo.persistence import save_image
from .algo.resample import clone_image, composite_watermark, resize_to
from .common.config import ImgResizeConfig, load_config
from .common.errors import (
    ImageNotFoundError,
    ReleasedImageError,
    UnsupportedFormatError,
)
from .common.mime import ImageMime
from .common.schemas import TargetSpec

# EXIF Orientation -> counter-clockwise rotation that presents the image upright
ORIENTATION_ROTATIONS: dict[int, int] = {
    3: 180,
    6: 270,
    8: 90,
}


class ImageDocument:
    """A decoded JPEG/PNG/GIF image that exclusively owns its pixel buffer.

    The buffer is rotated once at construction according to the EXIF
    Orientation tag. Derived images (``get``, ``clone``) are new buffers owned
    by the caller. Release the document with ``destroy()`` or a ``with`` block.

    Example:
        >>> with ImageDocument("photo.jpg") as doc:
        ...     doc.save("thumb.png", width=200, height=200, extend=False, type="png")
    """

    def __init__(
        self,
        path: str | Path,
        allow_missing: bool = False,
        config: ImgResizeConfig | None = None,
    ) -> None:
        self._image: Image.Image | None = None
        self.path: Path = Path(path)
        self.config: ImgResizeConfig = config or load_config()

        if not self.path.is_file():
            if not allow_missing:
                raise ImageNotFoundError(f"Non existing image: {self.path}")
            raise UnsupportedFormatError(f"Image type not supported: {self.path} is missing")

        data = self.path.read_bytes()

        probed = codec.probe(data)
        if probed.mime is None:
            raise UnsupportedFormatError(
                f"Image type not supported: {probed.pil_format or 'unknown'} ({self.path})"
            )
        self._mime: ImageMime = probed.mime

        image = codec.decode(data)

        self.exif: dict[str, object] = codec.read_exif(data)
        self.orientation: int | None = codec.orientation_from_exif(self.exif)

        degrees = ORIENTATION_ROTATIONS.get(self.orientation or 0, 0)
        if degrees:
            rotated = codec.rotate(image, degrees)
            image.close()
            image = rotated

        self._image = image
        logger.debug(
            f"Loaded {self.path} as {self._mime} {image.mode} {image.size}"
            + (f", rotated {degrees} degrees" if degrees else "")
        )

    # ------------------------------------------------------------------
    # Buffer access & lifecycle
    # ------------------------------------------------------------------

    @property
    def image(self) -> Image.Image:
        if self._image is None:
            raise ReleasedImageError(f"Image buffer already released: {self.path}")
        return self._image

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    @property
    def mime(self) -> ImageMime:
        return self._mime

    def is_valid(self) -> bool:
        return (
            self._image is not None
            and self._image.mode in (*codec.TRUECOLOR_MODES, "P")
            and self._image.width > 0
            and self._image.height > 0
        )

    def destroy(self) -> None:
        """Release the pixel buffer. Safe to call more than once."""
        if self._image is not None:
            self._image.close()
            self._image = None

    close = destroy

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.destroy()

    def __del__(self) -> None:
        # __init__ may have failed before the buffer was assigned
        if getattr(self, "_image", None) is not None:
            self.destroy()

    def __repr__(self) -> str:
        if self._image is None:
            return f"<ImageDocument {self.path} released>"
        return f"<ImageDocument {self.path} {self._mime} {self.width}x{self.height}>"

    # ------------------------------------------------------------------
    # Derived images
    # ------------------------------------------------------------------

    def clone(self) -> Image.Image:
        """Unscaled copy of the buffer, owned by the caller."""
        return clone_image(self.image)

    def get(
        self,
        target: TargetSpec | Mapping[str, object] | None = None,
        **options: object,
    ) -> Image.Image:
        """Resized (or, without a size, cloned) canvas owned by the caller.

        Options are TargetSpec fields: ``width``/``w``, ``height``/``h``, ``extend``.
        """
        spec = TargetSpec.coerce(target, **options)
        return resize_to(self.image, spec, resample=self.config.resample_filter)

    def save(
        self,
        path: str | Path,
        target: TargetSpec | Mapping[str, object] | None = None,
        **options: object,
    ) -> bool:
        """Write a resized (or cloned) version of the image to ``path``.

        The encoder is ``type``/``output_mime`` if given, else the document's mime.
        Any existing file at ``path`` is overwritten.

        Returns:
            True if the encoder wrote the file

        Raises:
            UnsupportedFormatError: If the output mime is not jpeg/png/gif
        """
        spec = TargetSpec.coerce(target, **options)
        mime = spec.resolve_mime(self._mime)

        canvas = self.get(spec)
        try:
            return save_image(canvas, path, mime, jpeg_quality=self.config.jpeg_quality)
        finally:
            canvas.close()

    def apply_watermark(self, path: str | Path) -> bool:
        """Composite a PNG/GIF watermark onto the bottom-left corner, in place.

        Returns:
            False (and leaves the image untouched) if the watermark file is missing

        Raises:
            UnsupportedFormatError: If the watermark is not PNG or GIF
            InvalidImageError: If the watermark cannot be decoded; the image is left untouched
        """
        base = self.image
        painted, ok = composite_watermark(
            base,
            path,
            divisor=self.config.watermark_divisor,
            margin=self.config.watermark_margin,
            resample=self.config.resample_filter,
        )
        if painted is not base:
            base.close()
            self._image = painted
        return ok
