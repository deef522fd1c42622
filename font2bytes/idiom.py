"""
Building blocks of a generated source file.

The generator describes a document as a sequence of these events; a format
turns each of them into text for one target language.
"""

import dataclasses


class Tab:
    def __eq__(self, other):
        return isinstance(other, Tab)

    def __hash__(self):
        return hash("tab")

    def __str__(self):
        return "\t"

    def __repr__(self):
        return "Tab()"


class Space:
    def __init__(self, num_spaces):
        self.num_spaces = num_spaces

    def __eq__(self, other):
        return isinstance(other, Space) and self.num_spaces == other.num_spaces

    def __hash__(self):
        return hash(("space", self.num_spaces))

    def __str__(self):
        return " " * self.num_spaces

    def __repr__(self):
        return f"Space({self.num_spaces})"


@dataclasses.dataclass(frozen=True)
class Begin:
    font_name: str
    font_size: tuple
    timestamp: str


@dataclasses.dataclass(frozen=True)
class Constant:
    name: str
    value: int


@dataclasses.dataclass(frozen=True)
class BeginArray:
    array_name: str
    # look-up tables hold offset expressions instead of packed bytes
    lut: bool = False


@dataclasses.dataclass(frozen=True)
class BeginArrayRow:
    indentation: object


@dataclasses.dataclass(frozen=True)
class Value:
    # a packed byte, or an expression string for look-up tables
    value: object


@dataclasses.dataclass(frozen=True)
class Comment:
    text: str


@dataclasses.dataclass(frozen=True)
class ArrayLineBreak:
    pass


@dataclasses.dataclass(frozen=True)
class EndArray:
    pass


@dataclasses.dataclass(frozen=True)
class End:
    pass


EVENT_TYPES = (
    Begin,
    Constant,
    BeginArray,
    BeginArrayRow,
    Value,
    Comment,
    ArrayLineBreak,
    EndArray,
    End,
)
