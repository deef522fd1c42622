"""Compile fixed-size bitmap fonts into C, Arduino and Python source code."""

from .errors import (
    DocumentError,
    Font2BytesError,
    InvalidSize,
    ReaderError,
    SizeMismatch,
    UnknownFormat,
)
from .font import Face, FaceReader, Glyph, Margins, Point, Size
from .formats import FORMATS, get_format
from .generator import FontSourceCodeGenerator, comment_for_glyph, lut_value_for_glyph
from .options import BitNumbering, GenerationOptions, output_format_from_settings
from .runner import SourceCodeResult, SourceCodeRunnable, SourceCodeRunner, Submission

__version__ = "0.1.0"
