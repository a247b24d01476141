import argparse
import os
import sys
from argparse import ArgumentParser, Namespace
from tempfile import NamedTemporaryFile
from typing import Optional

from . import pbm
from .base import FileOpenFailure, Font2PBMError, Size, parse_count
from .loader import LOAD_ADDRESS_LENGTH, expected_length, open_font, read_font
from .raster import PackedBitmap, rasterize

__all__ = [
    "add_font_arguments",
    "add_main_arguments",
    "input_filename",
    "load_bitmap",
    "main",
    "wants_usage",
]


def add_font_arguments(parser: ArgumentParser):
    parser.add_argument(
        "-r",
        "--rom",
        action="store_true",
        help="ROM image (no load address)",
    )
    parser.add_argument(
        "size",
        nargs="?",
        help="glyph size in 8x8 blocks: 1x1, 1x2, 2x1 or 2x2",
    )
    parser.add_argument(
        "count",
        nargs="?",
        help="number of characters in font",
    )
    parser.add_argument(
        "filename",
        nargs="?",
        help="name of file to read (default: standard input)",
    )
    parser.add_argument("extra", nargs="*", help=argparse.SUPPRESS)


def add_main_arguments(parser: ArgumentParser):
    parser.set_defaults(func=main, parser=parser)
    add_font_arguments(parser)
    parser.add_argument(
        "-o",
        "--output",
        help="write the image to a file instead of standard output",
    )
    parser.add_argument(
        "-c",
        "--comment",
        default=pbm.DEFAULT_COMMENT,
        help="comment line to put in the PBM header",
    )


def load_bitmap(
    size_spec: str,
    count_spec: str,
    filename: Optional[str],
    *,
    rom: bool = False,
) -> PackedBitmap:
    size = Size.parse(size_spec)
    count = parse_count(count_spec)
    skip = 0 if rom else LOAD_ADDRESS_LENGTH

    with open_font(filename) as f:
        data = read_font(
            f,
            expected_length(size, count),
            skip=skip,
            name=filename or "-",
        )

    return rasterize(size, data, count)


def wants_usage(args: Namespace) -> bool:
    return args.size is None or args.count is None or len(args.extra) > 1


def input_filename(args: Namespace) -> Optional[str]:
    # With one trailing argument after the filename, input comes from stdin.
    if args.extra:
        return None
    return args.filename


def main(args: Namespace) -> int:
    if wants_usage(args):
        args.parser.print_help()
        return 0

    try:
        bitmap = load_bitmap(
            args.size, args.count, input_filename(args), rom=args.rom
        )
        _output(bitmap, args.output, args.comment)
    except Font2PBMError as exc:
        print(f"{args.parser.prog}: {exc}", file=sys.stderr)
        return 1

    return 0


def _output(bitmap: PackedBitmap, output: Optional[str], comment: str):
    encoded = pbm.encode(bitmap, comment)

    if output is None:
        sys.stdout.buffer.write(encoded)
        sys.stdout.buffer.flush()
        return

    # Renamed into place only once fully written.
    tmp = None
    try:
        with NamedTemporaryFile(
            "wb",
            dir=os.path.dirname(os.path.abspath(output)),
            prefix=".font2pbm-",
            delete=False,
        ) as f:
            tmp = f.name
            f.write(encoded)
        os.replace(tmp, output)
    except OSError as exc:
        if tmp is not None and os.path.exists(tmp):
            os.unlink(tmp)
        raise FileOpenFailure(output, exc.strerror or str(exc)) from exc
