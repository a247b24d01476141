import warnings
from dataclasses import dataclass
from typing import Final

from .base import OutOfMemory, Size, TruncatedInput
from .loader import GLYPH_BYTES, expected_length

__all__ = [
    "CANVAS_WIDTH",
    "PackedBitmap",
    "canvas_height",
    "dropped_glyphs",
    "glyphs_per_row",
    "rasterize",
]

CANVAS_WIDTH: Final[int] = 256
ROW_BYTES: Final[int] = CANVAS_WIDTH // 8
TILE: Final[int] = 8


@dataclass(frozen=True)
class PackedBitmap:
    width: int
    height: int
    data: bytes

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"bad dimensions {self.width}x{self.height}")
        if len(self.data) != self.stride * self.height:
            raise ValueError(
                f"expected {self.stride * self.height} bytes of bitmap data, "
                f"got {len(self.data)}"
            )

    @property
    def stride(self) -> int:
        return (self.width + 7) // 8

    def pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        b = self.data[y * self.stride + x // 8]
        return bool((b >> (7 - x % 8)) & 0x01)


def glyphs_per_row(size: Size) -> int:
    return ROW_BYTES // size.x


def canvas_height(size: Size, count: int) -> int:
    return count // glyphs_per_row(size) * TILE * size.y


def dropped_glyphs(size: Size, count: int) -> int:
    return count % glyphs_per_row(size)


def rasterize(size: Size, data: bytes, count: int) -> PackedBitmap:
    """
    Tile `count` glyphs from `data` onto a 256 pixel wide canvas.

    Each glyph is made of size.x * size.y 8x8 sub-blocks.  The font stores
    sub-blocks plane by plane: sub-block (xchar, ychar) of every glyph comes
    before any glyph's next sub-block, so glyph i's block sits at
    ``(i + xchar*count + ychar*count*size.x) * 8``.

    Only whole rows of glyphs fit on the canvas; a trailing partial row is
    skipped with a warning.
    """
    if count < 0:
        raise ValueError("glyph count must be non-negative")
    needed = expected_length(size, count)
    if len(data) < needed:
        raise TruncatedInput("<buffer>", needed, len(data))

    per_row = glyphs_per_row(size)
    height = canvas_height(size, count)

    try:
        out = bytearray(ROW_BYTES * height)
    except (MemoryError, OverflowError) as exc:
        raise OutOfMemory() from exc

    dropped = dropped_glyphs(size, count)
    if dropped:
        warnings.warn(
            f"{dropped} glyph(s) in the last partial row of {per_row} "
            f"do not fit the {CANVAS_WIDTH}x{height} canvas and were skipped",
            stacklevel=2,
        )

    for i in range(count - dropped):
        xpos = (i % per_row) * TILE * size.x
        ypos = (i // per_row) * TILE * size.y

        for xchar in range(size.x):
            for ychar in range(size.y):
                fontofs = (i + xchar * count + ychar * count * size.x) * GLYPH_BYTES
                pbmofs = (ypos + TILE * ychar) * ROW_BYTES + (xpos + xchar * TILE) // 8
                for line in range(TILE):
                    out[pbmofs + line * ROW_BYTES] = data[fontofs + line]

    return PackedBitmap(CANVAS_WIDTH, height, bytes(out))
