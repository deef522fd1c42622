#!/usr/bin/env python3

"""Bitmap font to source code compiler."""

import argparse
import os
import sys

from .document import load_face, save_face
from .errors import Font2BytesError
from .font import Face
from .formats import FORMATS
from .generator import FontSourceCodeGenerator
from .options import BitNumbering, GenerationOptions
from .readers import BDFFaceReader, ImageDirFaceReader


def parse_ranges(text):
    """'0-9,33' -> {0, 1, ..., 9, 33}"""
    ids = set()
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            start, end = part.split("-", 1)
            ids.update(range(int(start), int(end) + 1))
        else:
            ids.add(int(part))
    return ids


def get_options(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "input", help="BDF font, directory of <codepoint>.png files or saved document"
    )
    parser.add_argument(
        "--reader",
        "-r",
        choices=["bdf", "png-dir", "document"],
        help="Input kind (guessed from the input path by default)",
    )
    parser.add_argument("--format", "-f", choices=list(FORMATS), default="c", help="Output format")
    parser.add_argument("--array-name", "-n", default="font", help="Name of the generated array")
    parser.add_argument("--font-name", help="Font name written in the header comment")
    parser.add_argument(
        "--msb", action="store_true", help="Leftmost pixel in the most significant bit"
    )
    parser.add_argument("--invert", "-i", action="store_true", help="Invert every pixel")
    parser.add_argument(
        "--line-spacing", "-l", action="store_true", help="Blank line between characters"
    )
    parser.add_argument(
        "--export", "-e", type=parse_ranges, help="Glyph indices to export, e.g. 0-9,33"
    )
    parser.add_argument("--output", "-o", help="Output file (stdout by default)")
    parser.add_argument("--save-document", "-s", help="Also save the face as a document")
    return parser.parse_args(argv)


def guess_reader(path):
    if os.path.isdir(path):
        return "png-dir"
    if path.lower().endswith(".json"):
        return "document"
    return "bdf"


def read_face(opts):
    kind = opts.reader or guess_reader(opts.input)
    if kind == "document":
        return load_face(opts.input), os.path.splitext(os.path.basename(opts.input))[0]

    if kind == "png-dir":
        reader = ImageDirFaceReader(opts.input)
    else:
        reader = BDFFaceReader(opts.input)
    return Face.from_reader(reader), reader.font_name


def main(argv=None):
    opts = get_options(argv)

    try:
        face, font_name = read_face(opts)
        if opts.export is not None:
            for index in range(face.num_glyphs):
                face.set_glyph_exported(index, index in opts.export)
            unknown = sorted(i for i in opts.export if i >= face.num_glyphs)
            if unknown:
                print(
                    f"warning: ignoring glyph indices past {face.num_glyphs - 1}: {unknown}",
                    file=sys.stderr,
                )

        if opts.save_document:
            save_face(face, opts.save_document)

        options = GenerationOptions(
            bit_numbering=BitNumbering.MSB if opts.msb else BitNumbering.LSB,
            invert_bits=opts.invert,
            include_line_spacing=opts.line_spacing,
        )
        source_code = FontSourceCodeGenerator(options).generate(
            face, opts.format, opts.array_name, font_name=opts.font_name or font_name
        )

        if opts.output:
            with open(opts.output, "w") as f:
                f.write(source_code)
        else:
            sys.stdout.write(source_code)
    except (Font2BytesError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
