"""``fir translate`` — show the canonical attributes for an expression."""

import argparse
import sys

from fir.errors import ExpressionSyntaxError
from fir.expression.translate import translate_render_expression


def run_translate(args: argparse.Namespace) -> None:
    try:
        print(translate_render_expression(args.expression))
    except ExpressionSyntaxError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
