from typing_extensions import override


class ImgResizeError(Exception):
    """
    Base class for every error raised by img_resize.
    All of them are deterministic content errors: the operation in progress
    cannot continue and retrying with the same input will fail again.
    """

    def __init__(self, message: str = "An unknown image error occurred."):
        self.message: str = message
        super().__init__(self.message)

    @override
    def __str__(self):
        return f"{type(self).__name__}: {self.message}"


class ImageNotFoundError(ImgResizeError, FileNotFoundError):
    """The input path does not exist and was not explicitly tolerated."""


class UnsupportedFormatError(ImgResizeError, ValueError):
    """The mime type is outside the supported jpeg/png/gif set."""


class InvalidImageError(ImgResizeError, ValueError):
    """Bytes are present but do not decode into a usable pixel buffer."""


class ReleasedImageError(ImgResizeError, RuntimeError):
    """The document's pixel buffer has already been released."""
