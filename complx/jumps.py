"""Minimum number of jumps between two cells of a bounded field."""

import logging
from dataclasses import dataclass

import numpy as np

from complx.errors import InvalidInputError, OutOfBoundsError
from complx.models import Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadyJumpOptimizer:
    """Outcome of a finished jump search."""

    field_size: Point
    jump_length: Point
    start: Point
    target: Point
    min_jumps: int | None

    def report(self) -> str:
        if self.min_jumps is None:
            return (
                f"> It was not possible to get from point {self.start} "
                f"to point {self.target}."
            )
        return (
            f"> The minimum number of jumps done to go from point {self.start} "
            f"to point {self.target} is {self.min_jumps}."
        )


class JumpOptimizer:
    """
    Pending jump search.

    From any cell, a jump of length ``(p, q)`` can land on the eight cells
    ``(±p, ±q)`` and ``(±q, ±p)`` away, as long as they are on the field and
    not already on the current path.
    """

    def __init__(self, field_size: Point, jump_length: Point) -> None:
        width, height = field_size
        if width < 0 or height < 0:
            raise InvalidInputError(
                "Field size must be non-negative.", {"field_size": field_size}
            )
        self._field_size = (width, height)
        self._jump_length = jump_length
        self._visited = np.zeros((width, height), dtype=bool)
        self._min_jumps: int | None = None
        self._nodes = 0

    @property
    def visited(self) -> np.ndarray:
        """Read-only view of the scratch grid."""
        view = self._visited.view()
        view.setflags(write=False)
        return view

    def find_min_jumps(self, start: Point, target: Point) -> ReadyJumpOptimizer:
        """Run the search and return the finished optimizer."""
        start, target = tuple(start), tuple(target)
        for name, point in (("target", target), ("start", start)):
            if not self._in_bounds(point):
                raise OutOfBoundsError(
                    f"The {name} point {point} lies outside the {self._field_size} field.",
                    {name: point, "field_size": self._field_size},
                )

        self._min_jumps = None
        self._nodes = 0
        logger.debug(
            "jump search: field=%s jump=%s start=%s target=%s",
            self._field_size,
            self._jump_length,
            start,
            target,
        )

        self._visited[start] = True
        try:
            self._backtrack(start, target, 0)
        finally:
            self._visited[start] = False

        logger.debug("jump search done: %d cells explored", self._nodes)
        return ReadyJumpOptimizer(
            field_size=self._field_size,
            jump_length=self._jump_length,
            start=start,
            target=target,
            min_jumps=self._min_jumps,
        )

    def _in_bounds(self, point: Point) -> bool:
        x, y = point
        width, height = self._field_size
        return 0 <= x < width and 0 <= y < height

    def _movements(self) -> list[Point]:
        p, q = self._jump_length
        # fmt: off
        return [
            (p, q), (p, -q), (-p, q), (-p, -q),
            (q, p), (q, -p), (-q, p), (-q, -p),
        ]
        # fmt: on

    def _backtrack(self, current: Point, target: Point, curr_jumps: int) -> None:
        self._nodes += 1

        if current == target:
            if self._min_jumps is None or curr_jumps < self._min_jumps:
                self._min_jumps = curr_jumps
                logger.debug("jump search: new best %d jumps", curr_jumps)
            return

        # Cannot beat a path we already have
        if self._min_jumps is not None and curr_jumps >= self._min_jumps:
            return

        for dx, dy in self._movements():
            nxt = (current[0] + dx, current[1] + dy)
            if not self._in_bounds(nxt) or self._visited[nxt]:
                continue

            self._visited[nxt] = True
            try:
                self._backtrack(nxt, target, curr_jumps + 1)
            finally:
                self._visited[nxt] = False
