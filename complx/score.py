"""Backtracking search assigning arbiters to matches by team preference."""

import logging
from dataclasses import dataclass

import numpy as np

from complx.errors import InvalidInputError
from complx.models import MAX_SCORE, REFUSED, PreferenceMatrix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadyScoreOptimizer:
    """
    Outcome of a finished assignment search.

    ``best_assignment`` packs one ``(arbiter, team)`` pair per match side by
    side, so match ``i`` lives at positions ``2*i`` and ``2*i + 1``. It is all
    zeros when no assignment satisfies the constraints.
    """

    num_teams: int
    num_arbiters: int
    best_assignment: tuple[int, ...]
    best_score: int | None

    @property
    def found(self) -> bool:
        return self.best_score is not None

    @property
    def matches(self) -> list[tuple[int, int]]:
        """Return the (arbiter, team) pair of each match, in slot order."""
        if not self.found:
            return []
        pairs = self.best_assignment
        return [(pairs[i], pairs[i + 1]) for i in range(0, len(pairs), 2)]

    def report(self) -> str:
        if not self.found:
            return "> No assignment of arbiters to matches is possible."

        lines = ["> Score information:"]
        lines.append(f"# Maximum score: {self.best_score}")
        lines.append(
            "- Assigned arbiters: [ "
            + ", ".join(str(v) for v in self.best_assignment)
            + " ]"
        )
        for i, (arbiter, team) in enumerate(self.matches, start=1):
            lines.append(f"  match {i}: arbiter {arbiter} <-> team {team}")
        return "\n".join(lines)


class ScoreOptimizer:
    """
    Pending assignment search.

    Use :meth:`build` to validate a preference matrix (rows are teams,
    columns are arbiters). The search is exhaustive and only practical for a
    handful of teams and arbiters.
    """

    def __init__(self, preferences: np.ndarray) -> None:
        self._preferences = preferences
        self._num_teams, self._num_arbiters = preferences.shape
        self._num_matches = self._num_teams // 2
        self._best_assignment: list[int] = [0] * self._num_teams
        self._best_score: int | None = None
        self._nodes = 0

    @classmethod
    def build(cls, preferences: PreferenceMatrix) -> "ScoreOptimizer":
        """Validate ``preferences`` and return a pending optimizer."""
        num_teams = len(preferences)
        if num_teams == 0:
            raise InvalidInputError("At least two teams are required.")

        if num_teams % 2 != 0:
            raise InvalidInputError(
                "The number of teams must be even.", {"num_teams": num_teams}
            )

        num_arbiters = len(preferences[0])
        for team, row in enumerate(preferences):
            if len(row) != num_arbiters:
                raise InvalidInputError(
                    "Every team must rate the same number of arbiters.",
                    {"team": team, "expected": num_arbiters, "got": len(row)},
                )

        if num_teams // 2 > num_arbiters:
            raise InvalidInputError(
                "There must be at least as many arbiters as matches.",
                {"num_matches": num_teams // 2, "num_arbiters": num_arbiters},
            )

        for team, row in enumerate(preferences):
            for arbiter, value in enumerate(row):
                if (
                    not isinstance(value, (int, np.integer))
                    or isinstance(value, bool)
                    or not REFUSED <= value <= MAX_SCORE
                ):
                    raise InvalidInputError(
                        f"Preference {value!r} of team {team} for arbiter {arbiter} "
                        "is not an integer in the int64 range.",
                        {"team": team, "arbiter": arbiter, "value": value},
                    )

        matrix = np.array(preferences, dtype=np.int64)
        matrix.setflags(write=False)
        return cls(matrix)

    @property
    def preferences(self) -> np.ndarray:
        return self._preferences

    def find_optimal_assignment(self) -> ReadyScoreOptimizer:
        """Run the search and return the finished optimizer."""
        self._best_assignment = [0] * self._num_teams
        self._best_score = None
        self._nodes = 0
        logger.debug(
            "score search: %d teams, %d arbiters, %d matches",
            self._num_teams,
            self._num_arbiters,
            self._num_matches,
        )

        curr_assigned = [0] * self._num_teams
        used_arbiters = [False] * self._num_arbiters
        used_teams = [False] * self._num_teams
        self._backtrack(curr_assigned, used_arbiters, used_teams, 0, 0)

        logger.debug("score search done: %d nodes explored", self._nodes)
        return ReadyScoreOptimizer(
            num_teams=self._num_teams,
            num_arbiters=self._num_arbiters,
            best_assignment=tuple(self._best_assignment),
            best_score=self._best_score,
        )

    def _accepted_by_any(self, arbiter: int, used_teams: list[bool]) -> bool:
        for team in range(self._num_teams):
            if not used_teams[team] and self._preferences[team, arbiter] != REFUSED:
                return True
        return False

    def _backtrack(
        self,
        curr_assigned: list[int],
        used_arbiters: list[bool],
        used_teams: list[bool],
        curr_score: int,
        curr_match: int,
    ) -> None:
        self._nodes += 1

        if curr_match == self._num_matches:
            if self._best_score is None or curr_score > self._best_score:
                self._best_score = curr_score
                self._best_assignment = list(curr_assigned)
                logger.debug("score search: new best score %d", curr_score)
            return

        for arbiter in range(self._num_arbiters):
            if used_arbiters[arbiter] or not self._accepted_by_any(arbiter, used_teams):
                continue

            used_arbiters[arbiter] = True
            curr_assigned[curr_match * 2] = arbiter

            for team in range(self._num_teams):
                pref = int(self._preferences[team, arbiter])
                if used_teams[team] or pref == REFUSED:
                    continue

                used_teams[team] = True
                curr_assigned[curr_match * 2 + 1] = team
                self._backtrack(
                    curr_assigned,
                    used_arbiters,
                    used_teams,
                    curr_score + pref,
                    curr_match + 1,
                )
                used_teams[team] = False

            curr_assigned[curr_match * 2] = 0
            curr_assigned[curr_match * 2 + 1] = 0
            used_arbiters[arbiter] = False
