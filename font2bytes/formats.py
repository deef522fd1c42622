"""
Source code formats.

Every format renders the full idiom vocabulary for one target language. A
format instance accumulates text for a single document, so the generator asks
for a fresh one per generation (see get_format).

Layout rules shared by all formats: the header comes first, every top level
block (constant, array) is preceded by a blank line, and an array row lasts
until the next structural event closes it.
"""

import io

from . import idiom
from .errors import UnknownFormat


class SourceCodeFormat:
    identifier = None
    name = None
    indentation = idiom.Tab()
    comment_prefix = "#"
    array_terminator = "]"
    supports_lut = True

    def __init__(self):
        self.out = io.StringIO()
        self.in_array = False
        self._row = None
        self._row_values = 0

    def render(self, events):
        handlers = {
            idiom.Begin: self.begin,
            idiom.Constant: self.constant,
            idiom.BeginArray: self.begin_array,
            idiom.BeginArrayRow: self.begin_array_row,
            idiom.Value: self.value,
            idiom.Comment: self.comment,
            idiom.ArrayLineBreak: self.array_line_break,
            idiom.EndArray: self.end_array,
            idiom.End: self.end,
        }
        for event in events:
            handlers[type(event)](event)
        return self.out.getvalue()

    def write(self, text):
        self.out.write(text)

    # rows

    def close_row(self):
        if self._row is not None:
            self.end_row(self._row, self._row_values)
            self._row = None
            self._row_values = 0

    def start_row(self, indentation):
        pass

    def end_row(self, indentation, num_values):
        if num_values:
            self.write("\n")

    def format_value(self, value, index):
        raise NotImplementedError

    # events

    def begin(self, event):
        width, height = event.font_size
        lines = [
            "",
            event.font_name,
            f"Font Size: {width}x{height}px",
            f"Created: {event.timestamp}",
            "",
        ]
        for line in lines:
            self.write(f"{self.comment_prefix} {line}".rstrip() + "\n")

    def constant(self, event):
        raise NotImplementedError

    def begin_array(self, event):
        self.in_array = True

    def begin_array_row(self, event):
        self.close_row()
        self._row = event.indentation
        self.start_row(event.indentation)

    def value(self, event):
        if self._row is None:
            self.begin_array_row(idiom.BeginArrayRow(self.indentation))
        self.write(self.format_value(event.value, self._row_values))
        self._row_values += 1

    def comment(self, event):
        self.close_row()
        indentation = self.indentation if self.in_array else ""
        self.write(f"{indentation}{self.comment_prefix} {event.text}\n")

    def array_line_break(self, event):
        self.close_row()
        self.write("\n")

    def end_array(self, event):
        self.close_row()
        self.in_array = False
        self.write(f"{self.array_terminator}\n")

    def end(self, event):
        self.close_row()


class CFormat(SourceCodeFormat):
    identifier = "c"
    name = "C/C++"
    comment_prefix = "//"
    array_terminator = "};"
    include = "#include <stdint.h>"
    array_qualifier = ""

    def begin(self, event):
        super().begin(event)
        self.write(f"\n{self.include}\n")

    def constant(self, event):
        self.write(f"\nconst uint16_t {event.name} = {event.value};\n")

    def begin_array(self, event):
        super().begin_array(event)
        element = "uint16_t" if event.lut else "uint8_t"
        self.write(f"\nconst {element} {event.array_name}[]{self.array_qualifier} = {{\n")

    def format_value(self, value, index):
        text = value if isinstance(value, str) else f"0x{value:02X}"
        if index == 0:
            return f"{self._row}{text},"
        return f" {text},"


class ArduinoFormat(CFormat):
    identifier = "arduino"
    name = "Arduino"
    include = "#include <Arduino.h>"
    array_qualifier = " PROGMEM"


class PythonListFormat(SourceCodeFormat):
    identifier = "python_list"
    name = "Python List"
    indentation = idiom.Space(4)

    def constant(self, event):
        self.write(f"\n{event.name} = {event.value}\n")

    def begin_array(self, event):
        super().begin_array(event)
        self.write(f"\n{event.array_name} = [\n")

    def format_value(self, value, index):
        text = value if isinstance(value, str) else f"0x{value:02x}"
        if index == 0:
            return f"{self._row}{text},"
        return f" {text},"


class PythonBytesFormat(SourceCodeFormat):
    """Adjacent bytes literals inside parentheses, one literal per row."""

    identifier = "python_bytes"
    name = "Python Bytes"
    indentation = idiom.Space(4)
    array_terminator = ")"
    supports_lut = False

    def constant(self, event):
        self.write(f"\n{event.name} = {event.value}\n")

    def begin_array(self, event):
        if event.lut:
            raise ValueError("bytes literals cannot hold look-up table expressions")
        super().begin_array(event)
        self.write(f"\n{event.array_name} = (\n")

    def start_row(self, indentation):
        self.write(f"{indentation}b'")

    def end_row(self, indentation, num_values):
        self.write("'\n")

    def format_value(self, value, index):
        if isinstance(value, str):
            raise ValueError(f"bytes literals cannot hold expression {value!r}")
        return f"\\x{value:02x}"

    def end_array(self, event):
        self.close_row()
        self.in_array = False
        # b'' keeps an array with no rows a bytes object rather than a tuple
        self.write(f"{self.indentation}b''\n)\n")


FORMATS = {
    f.identifier: f for f in (CFormat, ArduinoFormat, PythonListFormat, PythonBytesFormat)
}


def get_format(identifier):
    try:
        return FORMATS[identifier]()
    except KeyError:
        raise UnknownFormat(
            f"unknown output format {identifier!r}, expected one of: {', '.join(FORMATS)}"
        ) from None
