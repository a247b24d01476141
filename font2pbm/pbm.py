from typing import BinaryIO, Final, Optional

from .base import InvalidPBM
from .raster import PackedBitmap

__all__ = ["DEFAULT_COMMENT", "MAGIC", "decode", "encode", "write"]

MAGIC: Final[bytes] = b"P4"
DEFAULT_COMMENT: Final[str] = "Commodore 64 font converted by font2pbm"

_WHITESPACE: Final[bytes] = b" \t\r\n\v\f"


def encode(bitmap: PackedBitmap, comment: Optional[str] = DEFAULT_COMMENT) -> bytes:
    header = MAGIC + b"\n"
    if comment is not None:
        if "\n" in comment or "\r" in comment:
            raise ValueError("PBM comment must be a single line")
        header += b"# " + comment.encode("ascii", "replace") + b"\n"
    header += f"{bitmap.width} {bitmap.height}\n".encode("ascii")
    return header + bitmap.data


def write(
    bitmap: PackedBitmap,
    stream: BinaryIO,
    comment: Optional[str] = DEFAULT_COMMENT,
) -> None:
    stream.write(encode(bitmap, comment))
    stream.flush()


def decode(raw: bytes) -> PackedBitmap:
    if raw[:2] != MAGIC:
        raise InvalidPBM("missing P4 magic")

    pos = 2
    values: list[int] = []
    while len(values) < 2:
        pos = _skip_space_and_comments(raw, pos)
        start = pos
        while pos < len(raw) and raw[pos : pos + 1].isdigit():
            pos += 1
        if start == pos:
            raise InvalidPBM("bad or missing dimensions")
        values.append(int(raw[start:pos]))

    # Exactly one whitespace byte separates the header from the raster.
    if pos >= len(raw) or raw[pos] not in _WHITESPACE:
        raise InvalidPBM("header not terminated")
    pos += 1

    width, height = values
    stride = (width + 7) // 8
    data = raw[pos : pos + stride * height]
    if len(data) != stride * height:
        raise InvalidPBM(f"expected {stride * height} bytes, got {len(data)}")

    return PackedBitmap(width, height, data)


def _skip_space_and_comments(raw: bytes, pos: int) -> int:
    while pos < len(raw):
        if raw[pos] in _WHITESPACE:
            pos += 1
        elif raw[pos : pos + 1] == b"#":
            eol = raw.find(b"\n", pos)
            pos = len(raw) if eol == -1 else eol + 1
        else:
            break
    return pos
