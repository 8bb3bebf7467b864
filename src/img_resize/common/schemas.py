"""Pydantic schemas for per-operation parameters."""

from collections.abc import Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PositiveInt

from .mime import ImageMime

# Short option keys accepted alongside the field names
_OPTION_ALIASES: dict[str, str] = {
    "w": "width",
    "h": "height",
    "type": "output_mime",
    "mime": "output_mime",
}


class TargetSpec(BaseModel):
    """Parameters for a resize/save operation.

    Attributes:
        width: Target width in pixels (None = derive from height)
        height: Target height in pixels (None = derive from width)
        extend: True letterboxes the image inside the target and pads with
                transparency, False covers the target and crops the overflow
        output_mime: Encoding override for save (None = keep document mime).
                     Checked against the supported set when saving.

    When both width and height are None the operation returns an unscaled clone.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    width: PositiveInt | None = Field(
        default=None,
        validation_alias=AliasChoices("width", "w"),
    )
    height: PositiveInt | None = Field(
        default=None,
        validation_alias=AliasChoices("height", "h"),
    )
    extend: bool = True
    output_mime: str | None = Field(
        default=None,
        validation_alias=AliasChoices("output_mime", "type", "mime"),
    )

    def resolve_mime(self, fallback: ImageMime) -> ImageMime:
        """Return the encoder mime: the override if set, else ``fallback``.

        Raises:
            UnsupportedFormatError: If the override is outside jpeg/png/gif
        """
        if self.output_mime is None:
            return fallback
        return ImageMime.parse(self.output_mime)

    @classmethod
    def coerce(
        cls,
        target: "TargetSpec | Mapping[str, object] | None" = None,
        **options: object,
    ) -> "TargetSpec":
        """Build a TargetSpec from an instance, a mapping, keyword options, or nothing."""
        if isinstance(target, TargetSpec) and not options:
            return target

        if isinstance(target, TargetSpec):
            values: dict[str, object] = target.model_dump(exclude_none=True)
        else:
            values = {_OPTION_ALIASES.get(k, k): v for k, v in (target or {}).items()}

        values.update({_OPTION_ALIASES.get(k, k): v for k, v in options.items()})
        return cls.model_validate(values)
