"""Bookkeeping of winning start tiles found by the player."""

from typing import List, Set, Tuple

from .engine import LightGame
from .solver import LightGameSolver


class SolutionTracker:
    """Tracks which of a layout's winning start tiles the player has found."""

    def __init__(self) -> None:
        self._winning: Set[Tuple[int, int]] = set()
        self._found: List[Tuple[int, int]] = []

    def recompute_from_game(self, game: LightGame) -> None:
        """Recompute the winning starts of the game's layout and forget found ones."""
        solver = LightGameSolver(game)
        solver.is_solvable(collect=True)
        self._winning = set(solver.winning_starts())
        self._found = []

    def report_solution(self, start: Tuple[int, int]) -> bool:
        """
        Record that the player won from `start`.

        Returns:
            True if `start` is a winning start that had not been reported yet.
        """
        key = (start[0], start[1])
        if key not in self._winning or key in self._found:
            return False
        self._found.append(key)
        return True

    def found_solutions(self) -> List[Tuple[int, int]]:
        """Found winning starts, in the order they were reported."""
        return list(self._found)

    def found_count(self) -> int:
        return len(self._found)

    def total_count(self) -> int:
        return len(self._winning)

    def is_complete(self) -> bool:
        return self.total_count() > 0 and self.found_count() == self.total_count()
