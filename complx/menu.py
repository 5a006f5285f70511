"""Backtracking search for the menu closest to (but not under) a calorie target."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from complx.errors import InvalidInputError
from complx.models import Dish

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadyMenuOptimizer:
    """Outcome of a finished menu search."""

    target_calories: int
    best_menu: tuple[Dish, ...] | None
    best_overshoot: int | None

    @property
    def total_calories(self) -> int | None:
        if self.best_menu is None:
            return None
        return sum(dish.calories for dish in self.best_menu)

    def report(self) -> str:
        if self.best_menu is None:
            return (
                "> It was not possible to find an optimal menu for the "
                f"target of {self.target_calories} calories."
            )

        lines = ["> Optimal menu found:"]
        for i, dish in enumerate(self.best_menu, start=1):
            lines.append(f"  {i}: {dish.name} -> {dish.calories} calories")
        lines.append(f"#> Total calories: {self.total_calories}")
        lines.append(f"#> Overshoot: {self.best_overshoot}")
        return "\n".join(lines)


class MenuOptimizer:
    """
    Pending menu search.

    Examines every subset of the base menu and keeps the first one whose
    calories reach the target with the smallest overshoot.
    """

    def __init__(self) -> None:
        self._best_menu: list[Dish] | None = None
        self._best_overshoot: int | None = None
        self._nodes = 0

    def find_optimal_menu(
        self,
        target_calories: int,
        base_menu: Sequence[Dish],
    ) -> ReadyMenuOptimizer:
        """Run the search and return the finished optimizer."""
        if target_calories < 0:
            raise InvalidInputError(
                "Target calories must be non-negative.",
                {"target_calories": target_calories},
            )
        for dish in base_menu:
            if dish.calories < 0:
                raise InvalidInputError(
                    f"Dish {dish.name!r} has negative calories.",
                    {"dish": dish.name, "calories": dish.calories},
                )

        self._best_menu = None
        self._best_overshoot = None
        self._nodes = 0
        logger.debug(
            "menu search: target=%d, %d dishes", target_calories, len(base_menu)
        )

        curr_menu: list[Dish] = []
        self._backtrack(target_calories, base_menu, 0, 0, curr_menu)

        logger.debug("menu search done: %d subsets explored", self._nodes)
        return ReadyMenuOptimizer(
            target_calories=target_calories,
            best_menu=tuple(self._best_menu) if self._best_menu is not None else None,
            best_overshoot=self._best_overshoot,
        )

    def _backtrack(
        self,
        target_calories: int,
        base_menu: Sequence[Dish],
        entry: int,
        curr_cals: int,
        curr_menu: list[Dish],
    ) -> None:
        self._nodes += 1

        if curr_cals >= target_calories:
            overshoot = curr_cals - target_calories
            if self._best_overshoot is None or overshoot < self._best_overshoot:
                self._best_overshoot = overshoot
                self._best_menu = list(curr_menu)
                logger.debug("menu search: new best overshoot %d", overshoot)

        for i in range(entry, len(base_menu)):
            dish = base_menu[i]
            curr_menu.append(dish)
            self._backtrack(
                target_calories, base_menu, i + 1, curr_cals + dish.calories, curr_menu
            )
            curr_menu.pop()
