"""
Face readers for bitmap font sources.

Glyph index 0 always maps to the first code point of the requested range
(32, space, by default), matching the comments the generator writes.
"""

import os

import bdfparser
from PIL import Image

from .errors import ReaderError
from .font import Size

FIRST_CHAR = 32
LAST_CHAR = 126


class GlyphListReader:
    """In-memory reader. Each glyph is a list of rows of '#' (set) and '.' (clear)."""

    def __init__(self, glyphs):
        if not glyphs:
            raise ReaderError("no glyphs given")
        height = len(glyphs[0])
        width = len(glyphs[0][0]) if height else 0
        for rows in glyphs:
            if len(rows) != height or any(len(row) != width for row in rows):
                raise ReaderError(f"all glyphs must be {width}x{height}")
        self._size = Size(width, height)
        self._glyphs = glyphs

    @property
    def font_size(self):
        return self._size

    @property
    def num_glyphs(self):
        return len(self._glyphs)

    def is_pixel_set(self, glyph_index, point):
        return self._glyphs[glyph_index][point.y][point.x] == "#"


class BDFFaceReader:
    def __init__(self, font_filename, first=FIRST_CHAR, last=LAST_CHAR):
        if not os.path.isfile(font_filename):
            raise ReaderError(f"font file not found: {font_filename}")

        font = bdfparser.Font(font_filename)
        self.font_name = font.headers.get("fontname") or os.path.basename(font_filename)
        width = font.headers["fbbx"]
        height = font.headers["fbby"]
        self._size = Size(width, height)

        self._bitmaps = []
        for cp in range(first, last + 1):
            glyph = font.glyphbycp(cp)
            if glyph is None:
                self._bitmaps.append(None)
                continue

            # mode 1 draws every glyph inside the font bounding box
            rows = glyph.draw(1).todata(2)
            if len(rows) != height or any(len(row) != width for row in rows):
                raise ReaderError(
                    f"glyph 0x{cp:02x} does not fit the {width}x{height} bounding box"
                )
            self._bitmaps.append(rows)

    @property
    def font_size(self):
        return self._size

    @property
    def num_glyphs(self):
        return len(self._bitmaps)

    def is_pixel_set(self, glyph_index, point):
        rows = self._bitmaps[glyph_index]
        if rows is None:
            return False
        return rows[point.y][point.x] != 0


class ImageDirFaceReader:
    """
    Reads one PNG per character, named after its code point (32.png, 33.png,
    ...). Missing characters read as blank.

    In an image with any transparency the alpha channel is the ink, whatever
    the colour. A fully opaque image is read by luminance, dark pixels set.
    """

    def __init__(self, png_dir, first=FIRST_CHAR, last=LAST_CHAR, threshold=128):
        if not os.path.isdir(png_dir):
            raise ReaderError(f"not a directory: {png_dir}")

        self.font_name = os.path.basename(os.path.normpath(png_dir))
        self.threshold = threshold
        self._size = None
        self._images = []
        for c in range(first, last + 1):
            path = os.path.join(png_dir, f"{c}.png")
            if not os.path.exists(path):
                self._images.append(None)
                continue

            with Image.open(path) as img:
                img = img.convert("LA")
            if self._size is None:
                self._size = Size(*img.size)
            elif img.size != self._size:
                raise ReaderError(
                    f"{path} is {img.size[0]}x{img.size[1]}, "
                    f"expected {self._size.width}x{self._size.height}"
                )
            self._images.append(self._ink(img))

        if self._size is None:
            raise ReaderError(f"no glyph images found in {png_dir}")

    def _ink(self, img):
        luminance = img.getchannel("L").tobytes()
        alpha = img.getchannel("A").tobytes()
        if min(alpha) < 255:
            return [a >= self.threshold for a in alpha]
        return [v < self.threshold for v in luminance]

    @property
    def font_size(self):
        return self._size

    @property
    def num_glyphs(self):
        return len(self._images)

    def is_pixel_set(self, glyph_index, point):
        data = self._images[glyph_index]
        if data is None:
            return False
        return data[point.y * self._size.width + point.x]
