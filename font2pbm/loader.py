import sys
from contextlib import contextmanager
from typing import BinaryIO, Final, Iterator, Optional

from .base import FileOpenFailure, OutOfMemory, Size, TruncatedInput

__all__ = [
    "LOAD_ADDRESS_LENGTH",
    "STDIN_NAME",
    "expected_length",
    "open_font",
    "read_font",
]

# Non-ROM dumps start with the machine's little-endian load address.
LOAD_ADDRESS_LENGTH: Final[int] = 2
GLYPH_BYTES: Final[int] = 8

STDIN_NAME: Final[str] = "-"


def expected_length(size: Size, count: int) -> int:
    return count * GLYPH_BYTES * size.x * size.y


@contextmanager
def open_font(filename: Optional[str]) -> Iterator[BinaryIO]:
    if filename is None or filename == STDIN_NAME:
        yield sys.stdin.buffer
        return

    try:
        f = open(filename, "rb")
    except OSError as exc:
        raise FileOpenFailure(filename, exc.strerror or str(exc)) from exc

    with f:
        yield f


def read_font(
    source: BinaryIO,
    expected: int,
    *,
    skip: int = 0,
    name: str = STDIN_NAME,
) -> bytes:
    """
    Read exactly `expected` bytes of glyph data from `source`, after
    discarding `skip` leading bytes.

    Raises TruncatedInput if the source ends early; no partial buffer is ever
    returned.  Raises OutOfMemory if the buffer cannot be allocated.  The
    source is consumed and not rewound.
    """
    if expected < 0 or skip < 0:
        raise ValueError("expected and skip must be non-negative")

    try:
        header = _read_exactly(source, skip)
        if len(header) != skip:
            raise TruncatedInput(name, expected, 0)

        data = _read_exactly(source, expected)
    except (MemoryError, OverflowError) as exc:
        # Sizes past ssize_t overflow before any allocation is attempted.
        raise OutOfMemory() from exc

    if len(data) != expected:
        raise TruncatedInput(name, expected, len(data))

    return data


def _read_exactly(source: BinaryIO, count: int) -> bytes:
    # Pipes may hand back short reads before EOF.
    buf = bytearray()
    while len(buf) < count:
        chunk = source.read(count - len(buf))
        if not chunk:
            break
        buf += chunk
    return bytes(buf)
