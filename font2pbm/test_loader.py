import io
import os
import unittest
from tempfile import TemporaryDirectory
from unittest import mock

from .base import FileOpenFailure, OutOfMemory, Size, TruncatedInput
from .loader import expected_length, open_font, read_font


class TrickleStream(io.RawIOBase):
    """Hands back at most one byte per read, like a slow pipe."""

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        chunk = self.data[self.pos : self.pos + (1 if size else 0)]
        self.pos += len(chunk)
        return chunk


class TestReadFont(unittest.TestCase):
    def test_exact(self):
        src = io.BytesIO(bytes(range(16)))
        self.assertEqual(read_font(src, 16), bytes(range(16)))

    def test_skip(self):
        src = io.BytesIO(b"\x00\x30" + bytes(range(8)) + b"extra")
        self.assertEqual(read_font(src, 8, skip=2), bytes(range(8)))
        self.assertEqual(src.read(), b"extra")

    def test_truncated(self):
        src = io.BytesIO(b"\x00\x30" + bytes(7))
        with self.assertRaises(TruncatedInput) as cm:
            read_font(src, 8, skip=2, name="font.64c")
        self.assertEqual(cm.exception.expected, 8)
        self.assertEqual(cm.exception.actual, 7)
        self.assertEqual(str(cm.exception), 'Invalid input from "font.64c"')

    def test_truncated_in_header(self):
        with self.assertRaises(TruncatedInput):
            read_font(io.BytesIO(b"\x00"), 0, skip=2)

    def test_empty(self):
        self.assertEqual(read_font(io.BytesIO(b""), 0), b"")

    def test_short_reads(self):
        data = bytes(range(40))
        self.assertEqual(read_font(TrickleStream(data), 32, skip=2), data[2:34])

    def test_out_of_memory(self):
        src = mock.Mock(io.BufferedReader)
        src.read.side_effect = MemoryError
        with self.assertRaises(OutOfMemory):
            read_font(src, 64, skip=2)

    def test_size_overflow(self):
        src = io.BufferedReader(io.BytesIO(bytes(16)))
        with self.assertRaises(OutOfMemory):
            read_font(src, 2**64)

    def test_negative(self):
        with self.assertRaises(ValueError):
            read_font(io.BytesIO(b""), -1)


class TestExpectedLength(unittest.TestCase):
    def test_expected_length(self):
        self.assertEqual(expected_length(Size(1, 1), 256), 2048)
        self.assertEqual(expected_length(Size(2, 1), 64), 1024)
        self.assertEqual(expected_length(Size(2, 2), 64), 2048)


class TestOpenFont(unittest.TestCase):
    def test_file(self):
        with TemporaryDirectory() as tmp:
            name = os.path.join(tmp, "font.bin")
            with open(name, "wb") as f:
                f.write(b"\x01\x02\x03")

            with open_font(name) as f:
                self.assertEqual(f.read(), b"\x01\x02\x03")
            self.assertTrue(f.closed)

    def test_missing(self):
        with TemporaryDirectory() as tmp:
            name = os.path.join(tmp, "missing.bin")
            with self.assertRaises(FileOpenFailure) as cm:
                with open_font(name):
                    pass
            self.assertEqual(cm.exception.filename, name)
            self.assertTrue(str(cm.exception).startswith(f'Can\'t open "{name}": '))

    def test_stdin(self):
        stdin = io.TextIOWrapper(io.BytesIO(b"\xaa\x55"))
        with mock.patch("sys.stdin", stdin):
            for name in [None, "-"]:
                with self.subTest(name=name):
                    stdin.buffer.seek(0)
                    with open_font(name) as f:
                        self.assertEqual(f.read(), b"\xaa\x55")
                    self.assertFalse(stdin.buffer.closed)
