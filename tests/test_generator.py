import re

import pytest

from font2bytes import idiom
from font2bytes.font import Face, Glyph, Size
from font2bytes.formats import get_format
from font2bytes.generator import (
    FontSourceCodeGenerator,
    comment_for_glyph,
    current_timestamp,
    lut_value_for_glyph,
)
from font2bytes.options import BitNumbering, GenerationOptions

TIMESTAMP = "01-02-2024 10:20:30"


def generate(face, format_id="c", options=None, **kwargs):
    kwargs.setdefault("font_name", "Test")
    kwargs.setdefault("timestamp", TIMESTAMP)
    return FontSourceCodeGenerator(options).generate(face, format_id, "font", **kwargs)


def events(face, format_id="c", options=None):
    fmt = get_format(format_id)
    return list(FontSourceCodeGenerator(options).events(face, fmt, "font", timestamp=TIMESTAMP))


def test_lut_value_for_glyph():
    assert lut_value_for_glyph(0) == "0"
    assert lut_value_for_glyph(1) == "bytes_per_char * 1"
    assert lut_value_for_glyph(5) == "bytes_per_char * 5"


def test_comment_for_printable_glyph():
    assert comment_for_glyph(0) == "Character 0x20 (32: ' ')"
    assert comment_for_glyph(33) == "Character 0x41 (65: 'A')"
    assert comment_for_glyph(94) == "Character 0x7e (126: '~')"


def test_comment_for_non_printable_glyph():
    assert comment_for_glyph(95) == "Character 0x7f (127)"
    assert comment_for_glyph(200) == "Character 0xe8 (232)"


def test_current_timestamp_format():
    assert re.fullmatch(r"\d{2}-\d{2}-\d{4} \d{2}:\d{2}:\d{2}", current_timestamp())


def test_event_sequence(face):
    seq = events(face)
    assert seq[0] == idiom.Begin("Font Data", Size(5, 4), TIMESTAMP)
    assert seq[1] == idiom.Constant("bytes_per_char", 2)
    assert seq[2] == idiom.BeginArray("font")
    assert seq[3:7] == [
        idiom.Comment("Character 0x20 (32: ' ')"),
        idiom.BeginArrayRow(idiom.Tab()),
        idiom.Value(0x00),
        idiom.Value(0x00),
    ]
    assert seq[7:11] == [
        idiom.Comment("Character 0x21 (33: '!')"),
        idiom.BeginArrayRow(idiom.Tab()),
        idiom.Value(0x11),
        idiom.Value(0x0E),
    ]
    assert seq[-2:] == [idiom.EndArray(), idiom.End()]
    assert idiom.ArrayLineBreak() not in seq


def test_python_formats_indent_with_spaces(face):
    rows = [e for e in events(face, "python_list") if isinstance(e, idiom.BeginArrayRow)]
    assert rows == [idiom.BeginArrayRow(idiom.Space(4))] * 3


def test_line_spacing_adds_break_after_each_glyph(face):
    seq = events(face, options=GenerationOptions(include_line_spacing=True))
    assert seq.count(idiom.ArrayLineBreak()) == 3
    breaks = [i for i, e in enumerate(seq) if e == idiom.ArrayLineBreak()]
    for i in breaks:
        assert isinstance(seq[i - 1], idiom.Value)


def test_msb_and_invert(face):
    options = GenerationOptions(bit_numbering=BitNumbering.MSB, invert_bits=True)
    values = [e.value for e in events(face, options=options) if isinstance(e, idiom.Value)]
    assert values == [0xF8, 0xF8, 0x70, 0x88, 0x78, 0xF8]


def test_c_output(face):
    assert generate(face) == (
        "//\n"
        "// Test\n"
        "// Font Size: 5x4px\n"
        "// Created: 01-02-2024 10:20:30\n"
        "//\n"
        "\n"
        "#include <stdint.h>\n"
        "\n"
        "const uint16_t bytes_per_char = 2;\n"
        "\n"
        "const uint8_t font[] = {\n"
        "\t// Character 0x20 (32: ' ')\n"
        "\t0x00, 0x00,\n"
        "\t// Character 0x21 (33: '!')\n"
        "\t0x11, 0x0E,\n"
        '\t// Character 0x22 (34: \'"\')\n'
        "\t0x01, 0x00,\n"
        "};\n"
    )


def test_arduino_output(face):
    source = generate(face, "arduino")
    assert "#include <Arduino.h>\n" in source
    assert "const uint8_t font[] PROGMEM = {\n" in source
    assert "\t0x11, 0x0E,\n" in source


def test_line_spacing_output(face):
    source = generate(face, options=GenerationOptions(include_line_spacing=True))
    assert "\t0x00, 0x00,\n\n\t// Character 0x21 (33: '!')\n" in source
    assert source.endswith("\t0x01, 0x00,\n\n};\n")


def test_python_list_output_is_valid_python(face):
    source = generate(face, "python_list")
    assert source.startswith("#\n# Test\n")
    assert "    0x11, 0x0e,\n" in source
    namespace = {}
    exec(source, namespace)
    assert namespace["bytes_per_char"] == 2
    assert namespace["font"] == [0x00, 0x00, 0x11, 0x0E, 0x01, 0x00]


def test_python_bytes_output_is_valid_python(face):
    source = generate(face, "python_bytes")
    assert "    b'\\x11\\x0e'\n" in source
    namespace = {}
    exec(source, namespace)
    assert namespace["font"] == bytes([0x00, 0x00, 0x11, 0x0E, 0x01, 0x00])


def test_generation_is_deterministic(face):
    for format_id in ("c", "arduino", "python_list", "python_bytes"):
        assert generate(face, format_id) == generate(face, format_id)


def test_generation_does_not_modify_face(face):
    before = face.copy()
    generate(face, options=GenerationOptions(invert_bits=True))
    assert face.glyphs == before.glyphs
    assert face.exported_glyph_ids == before.exported_glyph_ids


def test_exported_subset(face):
    face.set_glyph_exported(1, False)
    seq = events(face)
    main_array = seq[: seq.index(idiom.EndArray()) + 1]
    comments = [e.text for e in main_array if isinstance(e, idiom.Comment)]
    assert comments == [comment_for_glyph(0), comment_for_glyph(2)]
    values = [e.value for e in main_array if isinstance(e, idiom.Value)]
    assert values == [0x00, 0x00, 0x01, 0x00]
    assert comment_for_glyph(1) not in [e.text for e in seq if isinstance(e, idiom.Comment)]


def test_exported_subset_adds_lut(face):
    face.set_glyph_exported(0, False)
    source = generate(face)
    assert "const uint16_t font_lut[] = {\n" in source
    assert "\t// Character 0x21 (33: '!')\n\t0,\n" in source
    assert '\t// Character 0x22 (34: \'"\')\n\tbytes_per_char * 1,\n' in source

    namespace = {}
    exec(generate(face, "python_list"), namespace)
    assert namespace["font_lut"] == [0, 2]


def test_full_export_has_no_lut(face):
    assert "_lut" not in generate(face)


def test_python_bytes_never_gets_lut(face):
    face.set_glyph_exported(0, False)
    source = generate(face, "python_bytes")
    assert "_lut" not in source
    namespace = {}
    exec(source, namespace)
    assert namespace["font"] == bytes([0x11, 0x0E, 0x01, 0x00])


def test_empty_export_set(face):
    for index in range(face.num_glyphs):
        face.set_glyph_exported(index, False)
    namespace = {}
    exec(generate(face, "python_bytes"), namespace)
    assert namespace["font"] == b""


def test_blank_face_is_not_trimmed():
    size = Size(9, 3)
    face = Face(size, [Glyph(size)], {0})
    seq = events(face)
    assert seq[1] == idiom.Constant("bytes_per_char", 6)
    assert [e.value for e in seq if isinstance(e, idiom.Value)] == [0] * 6


def test_bytes_per_char_uses_trimmed_height():
    size = Size(12, 10)
    glyph = Glyph(size)
    glyph.pixels[3 * 12] = True
    glyph.pixels[6 * 12 + 11] = True
    face = Face(size, [glyph], {0})
    seq = events(face, options=GenerationOptions(bit_numbering=BitNumbering.MSB))
    assert seq[1] == idiom.Constant("bytes_per_char", 2 * 4)
    values = [e.value for e in seq if isinstance(e, idiom.Value)]
    assert values == [0x80, 0x00, 0, 0, 0, 0, 0x00, 0x10]


def test_unknown_format(face):
    with pytest.raises(ValueError):
        generate(face, "rust")
