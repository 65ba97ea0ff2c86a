from __future__ import annotations

import argparse
import re
import sys
from typing import List, Optional

from .errors import SimplexError
from .farm import FERTILIZERS, GRAINS, format_report, solve_farm

EXIT_ERROR = 84
U32_MAX = 2**32 - 1
TOTAL_ARGS = len(FERTILIZERS) + len(GRAINS)

HELP_MESSAGE = """USAGE
\tmultigrains n1 n2 n3 n4 po pw pc pb ps [--verbose] [--graph]

DESCRIPTION
\tn1\tnumber of tons of fertilizer F1
\tn2\tnumber of tons of fertilizer F2
\tn3\tnumber of tons of fertilizer F3
\tn4\tnumber of tons of fertilizer F4
\tpo\tprice of one unit of oat
\tpw\tprice of one unit of wheat
\tpc\tprice of one unit of corn
\tpb\tprice of one unit of barley
\tps\tprice of one unit of soy

OPTIONS
\t--verbose\tprint every simplex tableau
\t--graph\t\tplot the production plan"""


class _Parser(argparse.ArgumentParser):
    def print_help(self, file=None):
        print(HELP_MESSAGE, file=file or sys.stdout)

    def error(self, message):
        print(HELP_MESSAGE, file=sys.stderr)
        print(f"error: {message}", file=sys.stderr)
        sys.exit(EXIT_ERROR)


def u32(text: str) -> int:
    if not re.fullmatch(r"\+?[0-9]+", text):
        raise argparse.ArgumentTypeError(f"invalid unsigned integer: '{text}'")
    value = int(text)
    if value > U32_MAX:
        raise argparse.ArgumentTypeError(f"number too large to fit in 32 bits: '{text}'")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(prog="multigrains", description="Optimal grain production under fertilizer limits")
    p.add_argument("values", nargs="*", type=u32, help="n1 n2 n3 n4 po pw pc pb ps")
    p.add_argument("--verbose", action="store_true", help="Print every simplex tableau")
    p.add_argument("--graph", action="store_true", help="Plot the production plan")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    if len(args.values) != TOTAL_ARGS:
        p.error(f"Invalid arguments count {len(args.values)}, expected {TOTAL_ARGS}.")

    resources = args.values[:len(FERTILIZERS)]
    prices = args.values[len(FERTILIZERS):]
    try:
        plan = solve_farm(resources, prices, verbose=args.verbose)
    except SimplexError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.verbose:
        print()
    print(format_report(plan))

    if args.graph:
        import matplotlib.pyplot as plt
        from .chart import plot_plan

        plot_plan(plan)
        plt.show()
    return 0


if __name__ == "__main__":
    sys.exit(main())
