import dataclasses
import enum

from .formats import FORMATS, get_format


class BitNumbering(enum.Enum):
    LSB = "lsb"
    MSB = "msb"


# Keys the editor application persists its source code settings under.
SETTINGS_BIT_NUMBERING = "source_code_options/bit_numbering"
SETTINGS_INVERT_BITS = "source_code_options/invert_bits"
SETTINGS_INCLUDE_LINE_SPACING = "source_code_options/include_line_spacing"
SETTINGS_FORMAT = "source_code_options/format"


def _to_bool(value):
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


@dataclasses.dataclass(frozen=True)
class GenerationOptions:
    bit_numbering: BitNumbering = BitNumbering.LSB
    invert_bits: bool = False
    include_line_spacing: bool = False

    def replace(self, **changes):
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_settings(cls, settings):
        numbering = settings.get(SETTINGS_BIT_NUMBERING, BitNumbering.LSB)
        if not isinstance(numbering, BitNumbering):
            numbering = BitNumbering(str(numbering).lower())
        return cls(
            bit_numbering=numbering,
            invert_bits=_to_bool(settings.get(SETTINGS_INVERT_BITS, False)),
            include_line_spacing=_to_bool(settings.get(SETTINGS_INCLUDE_LINE_SPACING, False)),
        )

    def to_settings(self, output_format=None):
        settings = {
            SETTINGS_BIT_NUMBERING: self.bit_numbering.value,
            SETTINGS_INVERT_BITS: self.invert_bits,
            SETTINGS_INCLUDE_LINE_SPACING: self.include_line_spacing,
        }
        if output_format is not None:
            settings[SETTINGS_FORMAT] = get_format(output_format).identifier
        return settings


def output_format_from_settings(settings):
    """Saved format id, or the first known format when it is missing or unknown."""
    format_id = settings.get(SETTINGS_FORMAT)
    if format_id not in FORMATS:
        return next(iter(FORMATS))
    return format_id
