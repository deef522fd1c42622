"""
Bitmap font data model.

A face is a list of glyphs that all share one size. Each glyph stores its
pixels row-major, so pixel (x, y) lives at index y * width + x.
"""

import copy
from collections import namedtuple
from typing import Protocol

from .errors import InvalidSize, SizeMismatch

Size = namedtuple("Size", ["width", "height"])
Point = namedtuple("Point", ["x", "y"])
Margins = namedtuple("Margins", ["top", "bottom"])


def checked_size(size):
    size = Size(*size)
    for value in size:
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidSize(f"glyph size must be two positive integers, got {tuple(size)}")
    return size


class FaceReader(Protocol):
    """Anything that can hand out raw pixels for a fixed-size font."""

    @property
    def font_size(self) -> Size: ...

    @property
    def num_glyphs(self) -> int: ...

    def is_pixel_set(self, glyph_index: int, point: Point) -> bool: ...


class Glyph:
    def __init__(self, size, pixels=None):
        self.size = checked_size(size)
        if pixels is None:
            self.pixels = [False] * (self.size.width * self.size.height)
            return

        self.pixels = [bool(p) for p in pixels]
        if len(self.pixels) != self.size.width * self.size.height:
            raise SizeMismatch(
                f"pixels size must equal glyph size (width * height): "
                f"got {len(self.pixels)}, expected {self.size.width * self.size.height}"
            )

    def _index(self, point):
        x, y = point
        if not (0 <= x < self.size.width and 0 <= y < self.size.height):
            raise IndexError(f"point ({x}, {y}) outside {self.size.width}x{self.size.height} glyph")
        return y * self.size.width + x

    def is_pixel_set(self, point):
        return self.pixels[self._index(point)]

    def set_pixel(self, point, value):
        self.pixels[self._index(point)] = bool(value)

    def clear(self):
        self.pixels = [False] * (self.size.width * self.size.height)

    def row(self, y):
        start = y * self.size.width
        return self.pixels[start : start + self.size.width]

    def top_margin(self):
        """Number of empty rows above the first set pixel (height if blank)."""
        try:
            first = self.pixels.index(True)
        except ValueError:
            return self.size.height
        return first // self.size.width

    def bottom_margin(self):
        """Number of empty rows below the last set pixel (height if blank)."""
        try:
            last = self.pixels[::-1].index(True)
        except ValueError:
            return self.size.height
        return last // self.size.width

    def __eq__(self, other):
        if not isinstance(other, Glyph):
            return NotImplemented
        return self.size == other.size and self.pixels == other.pixels

    def __repr__(self):
        return f"Glyph({self.size.width}x{self.size.height})"


class Face:
    def __init__(self, size, glyphs, exported_glyph_ids=()):
        self.size = checked_size(size)
        self.glyphs = list(glyphs)
        for glyph in self.glyphs:
            self._check_size(glyph)

        self._exported = set()
        for index in exported_glyph_ids:
            self._check_index(index)
            self._exported.add(index)

    @classmethod
    def from_reader(cls, reader):
        size = checked_size(reader.font_size)
        glyphs = []
        for i in range(reader.num_glyphs):
            pixels = []
            for y in range(size.height):
                for x in range(size.width):
                    pixels.append(reader.is_pixel_set(i, Point(x, y)))
            glyphs.append(Glyph(size, pixels))

        return cls(size, glyphs, range(len(glyphs)))

    @property
    def num_glyphs(self):
        return len(self.glyphs)

    @property
    def exported_glyph_ids(self):
        return tuple(sorted(self._exported))

    def _check_index(self, index):
        if not 0 <= index < len(self.glyphs):
            raise IndexError(f"glyph index {index} out of range [0, {len(self.glyphs)})")

    def _check_size(self, glyph):
        if glyph.size != self.size:
            raise SizeMismatch(
                f"glyph size {tuple(glyph.size)} differs from face size {tuple(self.size)}"
            )

    def glyph_at(self, index):
        self._check_index(index)
        return self.glyphs[index]

    def set_glyph(self, index, glyph):
        self._check_index(index)
        self._check_size(glyph)
        self.glyphs[index] = glyph

    def add_glyph(self, glyph):
        self._check_size(glyph)
        self.glyphs.append(glyph)
        self._exported.add(len(self.glyphs) - 1)

    def set_glyph_exported(self, index, exported):
        self._check_index(index)
        if exported:
            self._exported.add(index)
        else:
            self._exported.discard(index)

    def is_glyph_exported(self, index):
        return index in self._exported

    def calculate_margins(self):
        """
        Smallest top and bottom margins over every glyph. Trimming is applied
        to all glyphs alike, so one glyph using a row keeps it for the face.
        """
        top = bottom = self.size.height
        for glyph in self.glyphs:
            top = min(top, glyph.top_margin())
            bottom = min(bottom, glyph.bottom_margin())
        return Margins(top, bottom)

    def copy(self):
        return copy.deepcopy(self)

    def __repr__(self):
        return (
            f"Face({self.size.width}x{self.size.height}, {len(self.glyphs)} glyphs, "
            f"{len(self._exported)} exported)"
        )
