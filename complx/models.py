"""Data models for complx."""

from dataclasses import dataclass

import numpy as np

# Preference value meaning "this team refuses this arbiter"
REFUSED: int = int(np.iinfo(np.int64).min)

# Largest preference score that fits the int64 matrix
MAX_SCORE: int = int(np.iinfo(np.int64).max)

# (x, y) on a field, or (width, height) / (dx, dy) depending on context
Point = tuple[int, int]

# Rows are teams, columns are arbiters
PreferenceMatrix = list[list[int]]


@dataclass(frozen=True)
class Dish:
    """A dish from the base menu."""

    name: str
    calories: int = 0
