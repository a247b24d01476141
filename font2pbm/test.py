from argparse import ArgumentParser, Namespace
from pathlib import Path
from unittest import TestLoader, TextTestRunner

__all__ = ["add_main_arguments"]


def add_main_arguments(parser: ArgumentParser):
    parser.set_defaults(func=main)
    parser.add_argument(
        "module",
        nargs="?",
        help="run tests from a specific module, e.g. raster",
    )


def main(args: Namespace) -> int:
    pattern = f"test_{args.module}.py" if args.module else "test_*.py"
    suite = TestLoader().discover(
        "font2pbm",
        pattern=pattern,
        top_level_dir=Path(__file__).parent.parent,
    )
    result = TextTestRunner(verbosity=2).run(suite)
    return int(not result.wasSuccessful())
