"""Fir CLI — template checking and expression translation.

Entry point registered as ``fir`` in ``pyproject.toml``::

    [project.scripts]
    fir = "fir.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``fir`` command."""
    parser = argparse.ArgumentParser(
        prog="fir",
        description="Fir — event-bound templates for server-pushed DOM updates.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log compile details")
    subparsers = parser.add_subparsers(dest="command")

    # -- fir check --------------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Compile templates and print the event map")
    check_parser.add_argument("path", help="Template directory")
    check_parser.add_argument(
        "--ext",
        action="append",
        default=None,
        help="Template extension to include (repeatable, default .html and .tmpl)",
    )
    check_parser.add_argument(
        "--workers",
        type=int,
        default=0,
        help="Files compiled at once (0=auto-detect)",
    )

    # -- fir translate ----------------------------------------------------
    translate_parser = subparsers.add_parser(
        "translate", help="Print the @fir: attributes for an x-fir-live expression"
    )
    translate_parser.add_argument("expression", help='e.g. "create:ok->todo=>replace"')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "check":
        from fir.cli._check import run_check

        run_check(args)
    elif args.command == "translate":
        from fir.cli._translate import run_translate

        run_translate(args)
