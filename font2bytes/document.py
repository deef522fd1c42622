"""
Saving and loading faces.

A document is JSON:

    {"version": 1, "size": [w, h], "glyphs": ["..##..", ...], "exported": [0, 1, ...]}

with each glyph stored as one row-major string of '#' and '.'.
"""

import json

from .errors import DocumentError, InvalidSize, SizeMismatch
from .font import Face, Glyph, Size

DOCUMENT_VERSION = 1


def face_to_dict(face):
    return {
        "version": DOCUMENT_VERSION,
        "size": list(face.size),
        "glyphs": ["".join("#" if p else "." for p in glyph.pixels) for glyph in face.glyphs],
        "exported": list(face.exported_glyph_ids),
    }


def face_from_dict(data):
    try:
        if data.get("version") != DOCUMENT_VERSION:
            raise DocumentError(f"unsupported document version {data.get('version')!r}")
        size = Size(*(int(v) for v in data["size"]))
        glyphs = [Glyph(size, [c == "#" for c in pixels]) for pixels in data["glyphs"]]
        return Face(size, glyphs, [int(i) for i in data["exported"]])
    except DocumentError:
        raise
    except InvalidSize as e:
        raise DocumentError(f"invalid glyph size: {e}") from e
    except SizeMismatch as e:
        raise DocumentError(f"corrupt glyph data: {e}") from e
    except (AttributeError, KeyError, TypeError, ValueError, IndexError) as e:
        raise DocumentError(f"malformed document: {e}") from e


def save_face(face, path):
    with open(path, "w") as f:
        json.dump(face_to_dict(face), f, indent=1)
        f.write("\n")


def load_face(path, fail_silently=False):
    try:
        with open(path) as f:
            try:
                data = json.load(f)
            except ValueError as e:
                raise DocumentError(f"{path}: not a font document: {e}") from e
        return face_from_dict(data)
    except (OSError, DocumentError):
        if fail_silently:
            return None
        raise
