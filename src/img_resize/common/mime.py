from enum import StrEnum

from .errors import UnsupportedFormatError


class ImageMime(StrEnum):
    JPEG = "image/jpeg"
    PNG = "image/png"
    GIF = "image/gif"

    @classmethod
    def parse(cls, value: "str | ImageMime") -> "ImageMime":
        """Accept a mime type, a short name (jpg, png, ...) or a Pillow format name."""
        if isinstance(value, ImageMime):
            return value

        key = str(value).strip().lower()
        if key.startswith("image/"):
            key = key[len("image/") :]

        mime = _ALIASES.get(key)
        if mime is None:
            raise UnsupportedFormatError(
                f"Unsupported image type '{value}'. Supported types are: {[m.value for m in cls]}"
            )
        return mime

    @classmethod
    def from_pil_format(cls, pil_format: str | None) -> "ImageMime | None":
        if pil_format is None:
            return None
        return _ALIASES.get(pil_format.lower())

    @property
    def pil_format(self) -> str:
        return _PIL_FORMATS[self]

    @property
    def supports_transparency(self) -> bool:
        return self is not ImageMime.JPEG


_ALIASES: dict[str, ImageMime] = {
    "jpeg": ImageMime.JPEG,
    "jpg": ImageMime.JPEG,
    "pjpeg": ImageMime.JPEG,
    # Pillow identifies camera JPEGs carrying multi-picture data as MPO
    "mpo": ImageMime.JPEG,
    "png": ImageMime.PNG,
    "gif": ImageMime.GIF,
}

_PIL_FORMATS: dict[ImageMime, str] = {
    ImageMime.JPEG: "JPEG",
    ImageMime.PNG: "PNG",
    ImageMime.GIF: "GIF",
}
