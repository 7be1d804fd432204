"""Command line front end: exact arithmetic, ranges and a self-check demo."""
from __future__ import annotations

import argparse
import itertools
import logging
import re
import sys
from typing import Callable, List, Optional, Sequence, Tuple, Union

from .config import Settings, load_settings
from .errors import RationalsError
from .integer_range import IntegerProgression, IntegerRange
from .progression import Progression
from .rational import Rational, div_by, to_rational
from .rational_range import RationalProgression, RationalRange

logger = logging.getLogger(__name__)

_NEGATIVE_FRACTION = re.compile(r"-[0-9]+/.*")

Number = Union[int, Rational]

OPERATIONS: dict[str, Callable[[Rational, Rational], object]] = {
    "+": Rational.add,
    "-": Rational.subtract,
    "*": Rational.multiply,
    "/": Rational.divide,
    "cmp": Rational.compare_to,
}


def demo_checks() -> List[Tuple[str, Callable[[], bool]]]:
    half = div_by(1, 2)
    third = div_by(1, 3)
    two_thirds = div_by(2, 3)
    return [
        ("1/2 + 1/3 == 5/6", lambda: half + third == div_by(5, 6)),
        ("1/2 - 1/3 == 1/6", lambda: half - third == div_by(1, 6)),
        ("1/2 * 1/3 == 1/6", lambda: half * third == div_by(1, 6)),
        ("1/2 / 1/3 == 3/2", lambda: half / third == div_by(3, 2)),
        ("-(1/2) == -1/2", lambda: -half == div_by(-1, 2)),
        ("str(2/1) == '2'", lambda: str(div_by(2, 1)) == "2"),
        ("str(-2/4) == '-1/2'", lambda: str(div_by(-2, 4)) == "-1/2"),
        ("'117/1098' parses to 13/122", lambda: str(to_rational("117/1098")) == "13/122"),
        ("1/2 < 2/3", lambda: half < two_thirds),
        ("1/2 in 1/3..2/3", lambda: half in third.range_to(two_thirds)),
        ("2000000000/4000000000 == 1/2", lambda: div_by(2000000000, 4000000000) == half),
        (
            "912016490186296920119201192141970416029/"
            "1824032980372593840238402384283940832058 == 1/2",
            lambda: div_by(
                912016490186296920119201192141970416029,
                1824032980372593840238402384283940832058,
            )
            == half,
        ),
    ]


def run_demo(settings: Settings) -> int:
    failures = 0
    for description, check in demo_checks():
        outcome = check()
        failures += not outcome
        print(f"{description}: {outcome}")
    return 1 if failures else 0


def parse_operand(text: str) -> Number:
    """Parse *text* as an ``int`` when it has no ``/``, else as a :class:`Rational`."""
    value = to_rational(text)
    if "/" not in text:
        return value.numerator
    return value


def build_progression(start: str, end: str, step: Optional[str]) -> Progression:
    operands = [parse_operand(text) for text in (start, end) + ((step,) if step else ())]
    integral = all(isinstance(value, int) for value in operands)
    if step is None:
        cls = IntegerRange if integral else RationalRange
        return cls(operands[0], operands[1])
    cls = IntegerProgression if integral else RationalProgression
    return cls.from_closed_range(*operands)


def format_terms(progression: Progression, settings: Settings) -> str:
    terms = list(itertools.islice(progression, settings.max_terms + 1))
    rendered = [str(term) for term in terms[: settings.max_terms]]
    if len(terms) > settings.max_terms:
        rendered.append("...")
    return settings.separator.join(rendered)


def run_calc(args: argparse.Namespace, settings: Settings) -> int:
    left = to_rational(args.left)
    right = to_rational(args.right)
    print(OPERATIONS[args.op](left, right))
    return 0


def run_range(args: argparse.Namespace, settings: Settings) -> int:
    progression = build_progression(args.start, args.end, args.step)
    logger.debug("iterating %r", progression)
    print(progression)
    print(format_terms(progression, settings))
    return 0


def run_contains(args: argparse.Namespace, settings: Settings) -> int:
    value = to_rational(args.value)
    print(value in RationalRange(to_rational(args.start), to_rational(args.end)))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rationals",
        description="Exact rational arithmetic and stepped ranges.",
    )
    parser.add_argument("--config", help="TOML file with a [rationals] settings table")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Log debug output to stderr",
    )
    parser.add_argument("--max-terms", type=int, help="Number of range terms to print")
    subparsers = parser.add_subparsers(dest="command", required=True)

    demo = subparsers.add_parser("demo", help="Check the reference arithmetic scenarios")
    demo.set_defaults(handler=lambda args, settings: run_demo(settings))

    calc = subparsers.add_parser("calc", help="Combine two rationals")
    calc.add_argument("left", help="Left operand, e.g. 1/2")
    calc.add_argument("op", choices=sorted(OPERATIONS), help="Operation")
    calc.add_argument("right", help="Right operand, e.g. -3/4")
    calc.set_defaults(handler=run_calc)

    range_cmd = subparsers.add_parser("range", help="List the terms of a range or progression")
    range_cmd.add_argument("start")
    range_cmd.add_argument("end")
    range_cmd.add_argument("--step", help="Explicit step; negative steps walk backwards")
    range_cmd.set_defaults(handler=run_range)

    contains = subparsers.add_parser("contains", help="Test membership in a closed range")
    contains.add_argument("value")
    contains.add_argument("start")
    contains.add_argument("end")
    contains.set_defaults(handler=run_contains)
    return parser


def protect_negative_literals(argv: Sequence[str]) -> List[str]:
    """Prefix ``-1/2`` style literals with a space so argparse keeps them as values.

    Plain negative integers such as ``-3`` are left alone: argparse already
    accepts them as values because no option here looks like a number.
    """
    return [
        " " + argument if _NEGATIVE_FRACTION.fullmatch(argument) else argument
        for argument in argv
    ]


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(protect_negative_literals(sys.argv[1:] if argv is None else argv))
    try:
        settings = load_settings(args.config).override(
            verbose=args.verbose, max_terms=args.max_terms
        )
        if settings.verbose:
            logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
        logger.debug("dispatching %s with %s", args.command, settings)
        return args.handler(args, settings)
    except (RationalsError, ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
