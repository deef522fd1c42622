"""
Font face to source code generator.

The generator only knows the idiom vocabulary; all syntax comes from the
format it is given. Each exported glyph becomes one block in the array:

    Character 0x41 (65: 'A')
    <ceil(width / 8) bytes per row> * <rows left after trimming margins>

Rows that are empty in every glyph of the face are trimmed from the top and
bottom of all glyphs alike.
"""

import datetime
import math

from . import idiom
from .font import Margins
from .formats import get_format
from .options import BitNumbering, GenerationOptions

FIRST_CODEPOINT = 32
BYTES_PER_CHAR = "bytes_per_char"
TIMESTAMP_FORMAT = "%d-%m-%Y %H:%M:%S"


def current_timestamp():
    return datetime.datetime.now().strftime(TIMESTAMP_FORMAT)


def comment_for_glyph(index):
    codepoint = index + FIRST_CODEPOINT
    text = f"Character 0x{codepoint:02x} ({codepoint}"
    if 0x20 <= codepoint < 0x7F:
        text += f": '{chr(codepoint)}'"
    return text + ")"


def lut_value_for_glyph(index):
    if index == 0:
        return "0"
    return f"{BYTES_PER_CHAR} * {index}"


def bytes_per_row(width):
    return math.ceil(width / 8)


def pack_row(pixels, bit_numbering=BitNumbering.LSB, invert=False):
    """
    Pack one row of pixels into bytes. With MSB numbering the leftmost pixel
    goes to bit 7 of the first byte, with LSB numbering to bit 0. Padding bits
    past the end of the row are always 0, inverted or not.
    """
    data = bytearray(bytes_per_row(len(pixels)))
    for x, pixel in enumerate(pixels):
        if bool(pixel) != bool(invert):
            bit = x % 8
            if bit_numbering is BitNumbering.MSB:
                bit = 7 - bit
            data[x // 8] |= 1 << bit
    return bytes(data)


def unpack_row(data, width, bit_numbering=BitNumbering.LSB, invert=False):
    pixels = []
    for x in range(width):
        bit = x % 8
        if bit_numbering is BitNumbering.MSB:
            bit = 7 - bit
        pixels.append(bool(data[x // 8] & (1 << bit)) != bool(invert))
    return pixels


class FontSourceCodeGenerator:
    def __init__(self, options=None):
        self.options = options or GenerationOptions()

    def trim_margins(self, face):
        margins = face.calculate_margins()
        if margins.top >= face.size.height:
            # nothing set anywhere in the face, keep the glyphs whole
            return Margins(0, 0)
        return margins

    def pack_glyph(self, glyph, margins):
        width = glyph.size.width
        # margins are in rows, the pixel list is flat
        start = margins.top * width
        stop = len(glyph.pixels) - margins.bottom * width
        pixels = glyph.pixels[start:stop]

        data = bytearray()
        for offset in range(0, len(pixels), width):
            data += pack_row(
                pixels[offset : offset + width],
                self.options.bit_numbering,
                self.options.invert_bits,
            )
        return bytes(data)

    def events(self, face, fmt, array_name, font_name="Font Data", timestamp=None):
        if timestamp is None:
            timestamp = current_timestamp()

        yield idiom.Begin(font_name, face.size, timestamp)

        margins = self.trim_margins(face)
        trimmed_height = face.size.height - margins.top - margins.bottom
        yield idiom.Constant(BYTES_PER_CHAR, bytes_per_row(face.size.width) * trimmed_height)

        exported = face.exported_glyph_ids

        yield idiom.BeginArray(array_name)
        for index in exported:
            yield idiom.Comment(comment_for_glyph(index))
            yield idiom.BeginArrayRow(fmt.indentation)
            for byte in self.pack_glyph(face.glyphs[index], margins):
                yield idiom.Value(byte)
            if self.options.include_line_spacing:
                yield idiom.ArrayLineBreak()
        yield idiom.EndArray()

        if fmt.supports_lut and len(exported) < face.num_glyphs:
            yield idiom.BeginArray(f"{array_name}_lut", lut=True)
            for position, index in enumerate(exported):
                yield idiom.Comment(comment_for_glyph(index))
                yield idiom.BeginArrayRow(fmt.indentation)
                yield idiom.Value(lut_value_for_glyph(position))
            yield idiom.EndArray()

        yield idiom.End()

    def generate(self, face, fmt, array_name="font", font_name="Font Data", timestamp=None):
        """Render face as one source document; fmt is a format instance or id."""
        if isinstance(fmt, str):
            fmt = get_format(fmt)
        return fmt.render(self.events(face, fmt, array_name, font_name, timestamp))
