import sys
from argparse import ArgumentParser, Namespace

from . import pbm
from .base import FileOpenFailure, Font2PBMError
from .convert import add_font_arguments, input_filename, load_bitmap, wants_usage
from .raster import PackedBitmap

__all__ = ["add_main_arguments", "main", "rgba_pixels"]

ON = [255, 255, 255, 255]
OFF = [0, 10, 100, 255]


def add_main_arguments(parser: ArgumentParser):
    parser.set_defaults(func=main, parser=parser)
    add_font_arguments(parser)
    parser.add_argument(
        "-p",
        "--pbm",
        metavar="FILE",
        help="show an existing PBM (P4) file instead of converting a font",
    )
    parser.add_argument(
        "-s",
        "--scale",
        type=int,
        default=3,
        help="pixel scale factor (default: 3)",
    )


def main(args: Namespace) -> int:
    if args.pbm is None and wants_usage(args):
        args.parser.print_help()
        return 0

    try:
        if args.pbm is not None:
            bitmap = _read_pbm(args.pbm)
        else:
            bitmap = load_bitmap(
                args.size, args.count, input_filename(args), rom=args.rom
            )
    except Font2PBMError as exc:
        print(f"{args.parser.prog}: {exc}", file=sys.stderr)
        return 1

    if bitmap.height == 0:
        print(f"{args.parser.prog}: nothing to show", file=sys.stderr)
        return 0

    from .display import run

    run(bitmap, scale=args.scale, caption=args.pbm or args.filename or "font2pbm")
    return 0


def rgba_pixels(bitmap: PackedBitmap) -> bytes:
    """
    Expand a packed bitmap to RGBA, bottom row first as pyglet expects.
    """
    on = bytes(ON)
    off = bytes(OFF)
    out = bytearray()
    for y in range(bitmap.height - 1, -1, -1):
        for x in range(bitmap.width):
            out += on if bitmap.pixel(x, y) else off
    return bytes(out)


def _read_pbm(filename: str) -> PackedBitmap:
    try:
        with open(filename, "rb") as f:
            raw = f.read()
    except OSError as exc:
        raise FileOpenFailure(filename, exc.strerror or str(exc)) from exc
    return pbm.decode(raw)
