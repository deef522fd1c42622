import pytest

from font2bytes.font import Face
from font2bytes.readers import GlyphListReader

GLYPHS = [
    [
        ".....",
        ".....",
        ".....",
        ".....",
    ],
    [
        ".....",
        "#...#",
        ".###.",
        ".....",
    ],
    [
        ".....",
        "#....",
        ".....",
        ".....",
    ],
]


@pytest.fixture
def reader():
    return GlyphListReader(GLYPHS)


@pytest.fixture
def face(reader):
    return Face.from_reader(reader)
