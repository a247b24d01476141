import sys
import warnings
from argparse import ArgumentParser
from typing import Optional

from . import convert, test, view

__all__ = ["main"]


def main(argv: Optional[list[str]] = None) -> int:
    warnings.simplefilter("default")

    parser = ArgumentParser(prog="font2pbm")
    subparsers = parser.add_subparsers(required=True)

    convert.add_main_arguments(
        subparsers.add_parser(
            "convert",
            help="convert a font to a PBM (P4) image",
        )
    )
    view.add_main_arguments(
        subparsers.add_parser(
            "view",
            help="show a font or PBM image in a window",
        )
    )
    test.add_main_arguments(
        subparsers.add_parser(
            "test",
            help="run the unit tests",
        )
    )

    args, unknown = parser.parse_known_args(argv)
    if unknown:
        if not hasattr(args, "extra"):
            parser.error(f"unrecognized arguments: {' '.join(unknown)}")
        args.extra += unknown
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
