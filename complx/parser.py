"""Command-line value parsing and YAML problem files for complx."""

import argparse
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from complx.errors import InvalidInputError
from complx.models import REFUSED, Dish

# Tokens accepted in a preference row for "this team refuses this arbiter"
REFUSAL_TOKENS = {"x", "X", "-"}

PROBLEMS = ("menu", "score", "jumps")


def parse_pair(
    s: str,
    first: Callable[[str], Any] = int,
    second: Callable[[str], Any] = int,
) -> tuple[Any, Any]:
    """Parse a ``key/value`` pair such as ``Chicken/300`` or ``10/10``."""
    pos = s.find("/")
    if pos < 0:
        raise argparse.ArgumentTypeError(f'invalid key/value pair, no "/" found in {s!r}')
    try:
        return first(s[:pos]), second(s[pos + 1 :])
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid key/value pair {s!r}: {e}") from e


def parse_point(s: str) -> tuple[int, int]:
    """Parse ``x/y`` into a pair of non-negative integers."""
    x, y = parse_pair(s)
    if x < 0 or y < 0:
        raise argparse.ArgumentTypeError(f"coordinates must be non-negative: {s!r}")
    return x, y


def parse_dish(s: str) -> Dish:
    """Parse ``name/calories`` into a Dish."""
    name, calories = parse_pair(s, str, int)
    if not name.strip():
        raise argparse.ArgumentTypeError(f"dish name is empty in {s!r}")
    if calories < 0:
        raise argparse.ArgumentTypeError(f"calories must be non-negative: {s!r}")
    return Dish(name=name.strip(), calories=calories)


def _parse_score(token: str) -> int:
    token = token.strip()
    if token in REFUSAL_TOKENS:
        return REFUSED
    score = int(token)
    # Typed scores must not collide with the refusal sentinel
    if score <= REFUSED:
        raise ValueError(f"score {score} is reserved for refusals or out of range")
    return score


def parse_row(s: str) -> list[int]:
    """Parse a comma separated preference row, e.g. ``10,8,x,4``."""
    try:
        return [_parse_score(v) for v in s.split(",")]
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid preference row {s!r}: {e}") from e


def _coerce(value: Any, parse: Callable[[str], Any], key: str) -> Any:
    # YAML gives lists/ints for structured values, strings for CLI-style ones
    try:
        if isinstance(value, str):
            return parse(value)
        if isinstance(value, (list, tuple)) and len(value) == 2:
            return parse(f"{value[0]}/{value[1]}")
    except argparse.ArgumentTypeError as e:
        raise InvalidInputError(f"Invalid value for {key!r}: {e}") from e
    raise InvalidInputError(f"Invalid value for {key!r}: {value!r}")


def _require_int(value: Any, key: str) -> int:
    # bool is an int subclass; floats would be truncated by int()
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InvalidInputError(f"Invalid value for {key!r}: {value!r} is not an integer")


def _require_list(data: dict[str, Any], key: str) -> list[Any]:
    value = data[key]
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidInputError(f"{key!r} must be a list")
    return value


def _coerce_dish(entry: Any) -> Dish:
    if isinstance(entry, dict):
        try:
            name = str(entry["name"])
            calories = _require_int(entry.get("calories", 0), "calories")
        except KeyError as e:
            raise InvalidInputError(f"Invalid dish entry {entry!r}: {e}") from e
        if calories < 0:
            raise InvalidInputError(f"Dish {name!r} has negative calories.")
        return Dish(name=name, calories=calories)
    return _coerce(entry, parse_dish, "dishes")


def _coerce_row(entry: Any) -> list[int]:
    if isinstance(entry, str):
        return _coerce(entry, parse_row, "preferences")
    if isinstance(entry, list):
        try:
            return [_parse_score(str(v)) for v in entry]
        except ValueError as e:
            raise InvalidInputError(f"Invalid preference row {entry!r}: {e}") from e
    raise InvalidInputError(f"Invalid preference row {entry!r}")


def load_problem_yaml(yaml_path: Path) -> dict[str, Any]:
    """
    Parse a YAML problem file.

    Returns a dict holding whichever of ``target_calories``, ``dishes``,
    ``preferences``, ``field_size``, ``jump_length``, ``start_point`` and
    ``target_point`` the file defines, already converted to their typed form.
    """
    with yaml_path.open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidInputError(f"Error parsing problem file {yaml_path}: {e}") from e

    if not data:
        return {}
    if not isinstance(data, dict):
        raise InvalidInputError(f"Problem file {yaml_path} must contain a mapping.")

    problem: dict[str, Any] = {}
    if "target_calories" in data:
        problem["target_calories"] = _require_int(data["target_calories"], "target_calories")
    if "dishes" in data:
        problem["dishes"] = [_coerce_dish(entry) for entry in _require_list(data, "dishes")]
    if "preferences" in data:
        problem["preferences"] = [
            _coerce_row(entry) for entry in _require_list(data, "preferences")
        ]
    for key in ("field_size", "jump_length", "start_point", "target_point"):
        if key in data:
            problem[key] = _coerce(data[key], parse_point, key)

    return problem


def create_problem_template(output_path: Path, problem: str):
    """Create a commented YAML template for one of the problems."""
    if problem == "menu":
        template: dict[str, Any] = {
            "target_calories": 1000,
            "dishes": [
                {"name": "Chicken", "calories": 300},
                {"name": "Salad", "calories": 200},
                {"name": "Fish", "calories": 400},
            ],
        }
        header = """\
# Menu problem for complx menu-optimizer
# Finds the dishes whose calories reach target_calories with the least excess.

"""
    elif problem == "score":
        template = {
            "preferences": [
                [10, 8, 6, 4, 2],
                [2, 4, 6, 8, 10],
                [4, 6, "x", 10, 8],
                [8, 10, 4, 6, 2],
            ],
        }
        header = """\
# Score problem for complx score-optimizer
# One row per team (an even number of them), one column per arbiter.
# Use "x" where a team refuses an arbiter.

"""
    elif problem == "jumps":
        template = {
            "field_size": [10, 10],
            "jump_length": [1, 2],
            "start_point": [0, 0],
            "target_point": [7, 7],
        }
        header = """\
# Jumps problem for complx jumps-optimizer
# Points are [x, y] with 0 <= x < width and 0 <= y < height.

"""
    else:
        raise InvalidInputError(f"Unknown problem {problem!r}; expected one of {PROBLEMS}.")

    with output_path.open("w", encoding="utf-8") as f:
        f.write(header)
        yaml.dump(template, f, default_flow_style=None, sort_keys=False)
