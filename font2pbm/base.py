import re
from typing import NamedTuple, Self

__all__ = [
    "Font2PBMError",
    "InvalidSize",
    "InvalidCount",
    "FileOpenFailure",
    "TruncatedInput",
    "OutOfMemory",
    "InvalidPBM",
    "Size",
    "parse_count",
]


class Font2PBMError(Exception):
    pass


class InvalidSize(Font2PBMError):
    def __init__(self, spec: str):
        super().__init__(f'Illegal size specification "{spec}"')
        self.spec = spec


class InvalidCount(Font2PBMError):
    def __init__(self, spec: str):
        super().__init__(f'Illegal number of chars "{spec}"')
        self.spec = spec


class FileOpenFailure(Font2PBMError):
    def __init__(self, filename: str, reason: str):
        super().__init__(f'Can\'t open "{filename}": {reason}')
        self.filename = filename
        self.reason = reason


class TruncatedInput(Font2PBMError):
    def __init__(self, source: str, expected: int, actual: int):
        super().__init__(f'Invalid input from "{source}"')
        self.source = source
        self.expected = expected
        self.actual = actual


class OutOfMemory(Font2PBMError):
    def __init__(self):
        super().__init__("Out of memory")


class InvalidPBM(Font2PBMError):
    def __init__(self, detail: str):
        super().__init__(f"Invalid PBM data: {detail}")
        self.detail = detail


# Both patterns match a prefix only, like sscanf("%dx%d") and sscanf("%d").
_SIZE_RE = re.compile(r"\s*([+-]?\d+)x\s*([+-]?\d+)")
_COUNT_RE = re.compile(r"\s*([+-]?\d+)")


class Size(NamedTuple):
    x: int
    y: int

    # Class attribute, not a field.
    VALID = (1, 2)

    @classmethod
    def parse(cls, spec: str) -> Self:
        m = _SIZE_RE.match(spec)
        if m is None:
            raise InvalidSize(spec)
        x, y = int(m[1]), int(m[2])
        if x not in cls.VALID or y not in cls.VALID:
            raise InvalidSize(spec)
        return cls(x, y)

    def __str__(self) -> str:
        return f"{self.x}x{self.y}"


def parse_count(spec: str) -> int:
    m = _COUNT_RE.match(spec)
    if m is None:
        raise InvalidCount(spec)
    count = int(m[1])
    if count < 0:
        raise InvalidCount(spec)
    return count
