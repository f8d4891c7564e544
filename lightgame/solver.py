"""Exhaustive winnability solver for the light-up puzzle."""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .engine import DIRECTIONS, Direction, LightGame
from .grid import Buffer
from .utils import get_interior_cells

logger = logging.getLogger(__name__)


class SolverInvariantError(RuntimeError):
    """A recorded action path failed to replay against the unchanged layout."""


@dataclass(frozen=True)
class Solution:
    """A start tile plus the fast moves that light the whole board from it."""

    x: int
    y: int
    moves: Tuple[Direction, ...]

    @property
    def start(self) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass
class _Frame:
    # Direction.NONE marks the root frame.
    direction: Direction
    children: Direction
    next_index: int = 0


class LightGameSolver:
    """
    Depth-first search over the tree of fast-move alternatives.

    The search keeps an explicit stack of frames. A fast move lights a run of
    arbitrary length, so instead of undoing moves the solver rebuilds the board
    for each new node by resetting, restarting and replaying the fast moves
    recorded on the stack. Every search runs against a backup of the caller's
    board, which is restored (with the cursor) however the search exits.
    """

    def __init__(self, game: LightGame) -> None:
        """
        Initialize a solver bound to a specific game instance.

        Args:
            game: The game whose current layout is searched.
        """
        self.game = game

        # Solutions found by the last collecting run.
        self.solutions: List[Solution] = []

        # Metrics / counters (for analysis)
        self.nodes_visited: int = 0
        self.replays_count: int = 0

    # -------------------------------------------------------------------------
    # Public interface
    # -------------------------------------------------------------------------

    def is_solvable(self, collect: bool = False) -> bool:
        """
        Return whether the layout can be won from at least one start tile.

        Any game in progress is ignored; the board and cursor are unchanged
        afterwards.

        Args:
            collect: If False, stop at the first win found. If True, try every
                start tile, enumerate every winning fast-move sequence and
                store them in `self.solutions` (row-major start order, then
                search order).
        """
        self.solutions = []
        num_winning_starts = 0

        with self.game.scratch(Buffer.SOLVER):
            for x, y in get_interior_cells(self.game.width, self.game.height):
                if self._solve_one(x, y, collect):
                    if not collect:
                        return True
                    num_winning_starts += 1

        return num_winning_starts > 0

    def solve_from(self, x: int, y: int, collect: bool = False) -> bool:
        """
        Return whether the layout can be won starting from tile (x, y).

        Args:
            x: X-coordinate of the start tile.
            y: Y-coordinate of the start tile.
            collect: As for `is_solvable`, restricted to this start.
        """
        self.solutions = []
        with self.game.scratch(Buffer.SOLVER):
            return self._solve_one(x, y, collect)

    def winning_starts(self) -> List[Tuple[int, int]]:
        """Distinct start tiles of the collected solutions, in row-major order."""
        starts = {s.start for s in self.solutions}
        return sorted(starts, key=lambda p: (p[1], p[0]))

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def _solve_one(self, x: int, y: int, collect: bool) -> bool:
        game = self.game
        game.reset()
        if not game.start(x, y):
            return False

        stack: List[_Frame] = [_Frame(Direction.NONE, game.valid_dirs())]
        won = False

        while stack:
            frame = stack[-1]
            if frame.children == Direction.NONE:
                if game.have_won():
                    won = True
                    if not collect:
                        return True
                    moves = tuple(f.direction for f in stack[1:])
                    self.solutions.append(Solution(x, y, moves))
                stack.pop()
            elif frame.next_index == len(DIRECTIONS):
                stack.pop()
            else:
                direction = DIRECTIONS[frame.next_index]
                frame.next_index += 1
                if not direction & frame.children:
                    continue

                self._replay(x, y, stack)
                self._checked_move_fast(direction)
                stack.append(_Frame(direction, game.valid_dirs()))
                self.nodes_visited += 1

        return won

    def _replay(self, x: int, y: int, stack: Sequence[_Frame]) -> None:
        """Rebuild the board for the top of `stack` from the start tile."""
        self.replays_count += 1
        self.game.reset()
        if not self.game.start(x, y):
            logger.error("Bad start while replaying from (%d, %d)", x, y)
            raise SolverInvariantError(f"Bad start while replaying from ({x}, {y}).")
        for frame in stack[1:]:
            self._checked_move_fast(frame.direction)

    def _checked_move_fast(self, direction: Direction) -> None:
        if not self.game.move_fast(direction):
            logger.error("Bad replay of move %s", direction)
            raise SolverInvariantError(f"Bad replay of move {direction!r}.")


def flatten_solutions(solutions: Iterable[Solution]) -> List[int]:
    """
    Render solutions as one flat integer list.

    Each solution contributes "x, y, a_1, ..., a_N, 0", where the a_i are the
    direction bit values of its fast moves.
    """
    out: List[int] = []
    for solution in solutions:
        out.append(solution.x)
        out.append(solution.y)
        out.extend(int(d) for d in solution.moves)
        out.append(0)
    return out
