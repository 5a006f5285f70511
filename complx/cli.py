"""Command-line interface for complx."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from complx.errors import ComplxError, InvalidInputError
from complx.jumps import JumpOptimizer
from complx.menu import MenuOptimizer
from complx.parser import (
    PROBLEMS,
    create_problem_template,
    load_problem_yaml,
    parse_dish,
    parse_point,
    parse_row,
)
from complx.report import Report, render_report
from complx.score import ScoreOptimizer

logger = logging.getLogger(__name__)

# Above this many teams the assignment search becomes slow
MAX_PRACTICAL_TEAMS = 8


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="complx",
        description="Solve small combinatorial optimization problems by backtracking.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  complx menu-optimizer -t 1000 -d Chicken/300 Salad/200 Soup/150 Fish/400
  complx score-optimizer -p 10,8,6,4,2 2,4,6,8,10 4,6,2,10,8 8,10,4,6,2
  complx jumps-optimizer -f 10/10 -l 1/2 -s 0/0 -t 7/7
  complx template jumps jumps.yaml
""",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log search progress to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    menu = subparsers.add_parser(
        "menu-optimizer",
        help="Find the menu that reaches a calorie target with the least excess",
    )
    menu.add_argument(
        "-t",
        "--target-calories",
        type=int,
        help="Number of calories the menu has to reach",
    )
    menu.add_argument(
        "-d",
        "--dishes",
        nargs="+",
        type=parse_dish,
        help="Dishes of the base menu, as name/calories",
    )
    menu.add_argument("--input", type=Path, help="YAML problem file")

    score = subparsers.add_parser(
        "score-optimizer",
        help="Assign arbiters to matches maximizing the teams' preferences",
    )
    score.add_argument(
        "-p",
        "--preferences",
        nargs="+",
        type=parse_row,
        help="One comma separated row of arbiter ratings per team (x = refused)",
    )
    score.add_argument("--input", type=Path, help="YAML problem file")

    jumps = subparsers.add_parser(
        "jumps-optimizer",
        help="Find the minimum number of jumps between two points of a field",
    )
    jumps.add_argument("-f", "--field-size", type=parse_point, help="Field size, as width/height")
    jumps.add_argument("-l", "--jump-length", type=parse_point, help="Jump length, as p/q")
    jumps.add_argument("-s", "--start-point", type=parse_point, help="Starting point, as x/y")
    jumps.add_argument("-t", "--target-point", type=parse_point, help="Target point, as x/y")
    jumps.add_argument("--input", type=Path, help="YAML problem file")

    template = subparsers.add_parser(
        "template",
        help="Write a YAML problem template",
    )
    template.add_argument("problem", choices=PROBLEMS, help="Problem to write a template for")
    template.add_argument("output", type=Path, help="Path of the template to create")

    return parser


def _merge_inputs(args: argparse.Namespace, keys: dict[str, str]) -> dict[str, Any]:
    """Combine the --input file with command-line flags; flags win."""
    values: dict[str, Any] = {}
    if args.input is not None:
        if not args.input.exists():
            raise InvalidInputError(f"Problem file not found: {args.input}")
        values.update(load_problem_yaml(args.input))

    for attr, key in keys.items():
        flag_value = getattr(args, attr)
        if flag_value is not None:
            values[key] = flag_value

    missing = [key for key in keys.values() if values.get(key) is None]
    if missing:
        raise InvalidInputError(f"Missing required values: {', '.join(missing)}")
    return values


def _run_menu(args: argparse.Namespace) -> Report:
    values = _merge_inputs(args, {"target_calories": "target_calories", "dishes": "dishes"})
    if len(values["dishes"]) < 2:
        raise InvalidInputError("At least two dishes are required.")
    return MenuOptimizer().find_optimal_menu(values["target_calories"], values["dishes"])


def _run_score(args: argparse.Namespace) -> Report:
    values = _merge_inputs(args, {"preferences": "preferences"})
    preferences = values["preferences"]
    if len(preferences) > MAX_PRACTICAL_TEAMS:
        logger.warning(
            "%d teams given; the exhaustive search may take a very long time",
            len(preferences),
        )
    return ScoreOptimizer.build(preferences).find_optimal_assignment()


def _run_jumps(args: argparse.Namespace) -> Report:
    values = _merge_inputs(
        args,
        {
            "field_size": "field_size",
            "jump_length": "jump_length",
            "start_point": "start_point",
            "target_point": "target_point",
        },
    )
    optimizer = JumpOptimizer(values["field_size"], values["jump_length"])
    return optimizer.find_min_jumps(values["start_point"], values["target_point"])


def main(argv: list[str] | None = None) -> int:
    """Main entry point for complx CLI."""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.command == "template":
            create_problem_template(args.output, args.problem)
            print(f"Created {args.problem} problem template at: {args.output}")
            return 0

        runners = {
            "menu-optimizer": _run_menu,
            "score-optimizer": _run_score,
            "jumps-optimizer": _run_jumps,
        }
        result = runners[args.command](args)
    except ComplxError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except RecursionError:
        print("Error: the problem is too large for an exhaustive search", file=sys.stderr)
        return 1

    print(render_report(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
