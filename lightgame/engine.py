"""Light-up puzzle game engine: layout editing, start, slide moves and reset."""

import logging
from contextlib import contextmanager
from enum import IntFlag
from typing import Iterator, Optional, Tuple

from .grid import Buffer, BufferGuard, Grid, TileState
from .utils import get_step_offsets

logger = logging.getLogger(__name__)


class Direction(IntFlag):
    """A cardinal direction, or a set of them (combine with `|`)."""

    NONE = 0
    UP = 1
    DOWN = 2
    LEFT = 4
    RIGHT = 8


# Canonical iteration order; the solver's tie-breaking depends on it.
DIRECTIONS: Tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)

DIRECTION_NAMES = {
    Direction.UP: "Up",
    Direction.DOWN: "Down",
    Direction.LEFT: "Left",
    Direction.RIGHT: "Right",
}


class LightGame:
    """
    Light-up puzzle on a height x width board.

    Each tile is OFF (the initial state), ON (the goal state) or BLOCKED (does
    not participate). The player starts on an OFF tile; each move slides in a
    direction whose neighbouring tile is OFF, switching on every traversed
    tile until an obstacle is hit. The game is won when no tile is OFF.

    The cursor (x, y) is (0, 0) while no game is in progress.
    """

    def __init__(self, height: int, width: int) -> None:
        """
        Initialize an empty layout.

        Args:
            height: Board height (number of rows), must be > 0.
            width: Board width (number of columns), must be > 0.

        Raises:
            ValueError: If dimensions are invalid.
        """
        self.grid: Grid = Grid(height, width)
        self._x: int = 0
        self._y: int = 0
        self.last_start: Optional[Tuple[int, int]] = None

    @property
    def height(self) -> int:
        """Number of playable rows."""
        return self.grid.height

    @property
    def width(self) -> int:
        """Number of playable columns."""
        return self.grid.width

    @property
    def x(self) -> int:
        """Cursor column, 0 when no game is in progress."""
        return self._x

    @property
    def y(self) -> int:
        """Cursor row, 0 when no game is in progress."""
        return self._y

    def at(self, x: int, y: int) -> TileState:
        """Return the live state of a tile; border coordinates read as BLOCKED."""
        return self.grid.get(x, y)

    def has_started(self) -> bool:
        """Whether a game is in progress."""
        return self._x != 0 and self._y != 0

    # -------------------------------------------------------------------------
    # Layout mode
    # -------------------------------------------------------------------------

    def set_blocked(self, x: int, y: int) -> bool:
        """
        Mark the tile (x, y) as BLOCKED.

        Returns:
            True on success; False if a game is in progress or (x, y) is not a
            playable tile, in which case nothing changes.
        """
        if self.has_started():
            logger.debug("set_blocked(%d, %d): game has already started", x, y)
            return False
        if not self.grid.is_interior(x, y):
            logger.debug("set_blocked(%d, %d): invalid board position", x, y)
            return False

        self.grid.set(x, y, TileState.BLOCKED)
        return True

    def start(self, x: int, y: int) -> bool:
        """
        Start a game on the tile (x, y).

        The current layout is saved so that `reset` can restore it.

        Returns:
            True if no game was in progress and (x, y) is an OFF tile; False
            otherwise, with nothing changed.
        """
        if self.has_started():
            logger.debug("start(%d, %d): game has already started", x, y)
            return False
        if not self.grid.is_interior(x, y) or self.at(x, y) is not TileState.OFF:
            logger.debug("start(%d, %d): not an unlit tile", x, y)
            return False

        self.grid.copy(Buffer.LIVE, Buffer.LAYOUT)
        self._x, self._y = x, y
        self.grid.set(x, y, TileState.ON)
        self.last_start = (x, y)
        return True

    def reset(self) -> None:
        """Abandon the game in progress (if any) and return to the saved layout."""
        if self.has_started():
            self._x = self._y = 0
            self.grid.copy(Buffer.LAYOUT, Buffer.LIVE)

    def restart(self) -> bool:
        """Reset and start again from the most recent start tile."""
        if self.last_start is None:
            return False
        self.reset()
        return self.start(*self.last_start)

    # -------------------------------------------------------------------------
    # Play mode
    # -------------------------------------------------------------------------

    def valid_dirs(self) -> Direction:
        """
        Return the directions whose adjacent tile is OFF.

        Returns Direction.NONE when no game is in progress. If a game is in
        progress and this returns Direction.NONE, the game is over; use
        `have_won` to tell a win from a loss.
        """
        dirs = Direction.NONE
        if not self.has_started():
            return dirs

        for d in DIRECTIONS:
            dx, dy = get_step_offsets(d)
            if self.at(self._x + dx, self._y + dy) is TileState.OFF:
                dirs |= d
        return dirs

    def _is_valid_move(self, direction: Direction) -> bool:
        if not self.has_started():
            logger.debug("move(%s): game has not started yet", direction)
            return False
        if direction not in DIRECTIONS or (direction & self.valid_dirs()) != direction:
            logger.debug("move(%s): invalid move", direction)
            return False
        return True

    def _slide(self, direction: Direction) -> None:
        dx, dy = get_step_offsets(direction)
        while self.at(self._x + dx, self._y + dy) is TileState.OFF:
            self._x += dx
            self._y += dy
            self.grid.set(self._x, self._y, TileState.ON)

    def move(self, direction: Direction) -> bool:
        """
        Slide in one direction, switching on every OFF tile until blocked.

        Returns:
            True if the move was made; False if no game is in progress or the
            direction is not a single valid direction, with nothing changed.
        """
        if not self._is_valid_move(direction):
            return False
        self._slide(direction)
        return True

    def move_fast(self, direction: Direction) -> bool:
        """
        Like `move`, but keep going while exactly one direction remains valid.

        Returns:
            Same as `move` for the initial direction.
        """
        if not self._is_valid_move(direction):
            return False

        while True:
            self._slide(direction)
            dirs = self.valid_dirs()
            if dirs not in DIRECTIONS:
                return True
            direction = dirs

    def have_won(self) -> bool:
        """Whether no tile of the whole bordered board is OFF."""
        return not self.grid.contains(TileState.OFF)

    # -------------------------------------------------------------------------
    # Scratch state for solver and generator
    # -------------------------------------------------------------------------

    @contextmanager
    def scratch(self, buffer: Buffer) -> Iterator[BufferGuard]:
        """
        Back up the live board into `buffer`, the cursor and the start tile.

        The cursor and `last_start` are always restored on exit; the live
        board is restored unless the yielded guard's `keep()` is called.
        """
        x, y, last_start = self._x, self._y, self.last_start
        try:
            with BufferGuard(self.grid, buffer) as guard:
                yield guard
        finally:
            self._x, self._y = x, y
            self.last_start = last_start

    def commit_layout(self) -> None:
        """Make the live board the layout that `reset` returns to."""
        self.grid.copy(Buffer.LIVE, Buffer.LAYOUT)

    # -------------------------------------------------------------------------
    # Display methods
    # -------------------------------------------------------------------------

    _ANSI_RESET = "\033[0m"
    _ANSI_CURSOR = "\033[93m"
    _ANSI_ON = "\033[92m"

    _TILE_CHARS = {
        TileState.OFF: "O",
        TileState.ON: "X",
        TileState.BLOCKED: "#",
    }

    def _tile_str(self, x: int, y: int, color: bool) -> str:
        if (x, y) == (self._x, self._y):
            return f"{self._ANSI_CURSOR}*{self._ANSI_RESET}" if color else "*"
        state = self.at(x, y)
        ch = self._TILE_CHARS[state]
        if color and state is TileState.ON:
            return f"{self._ANSI_ON}{ch}{self._ANSI_RESET}"
        return ch

    def format_board(self, color: bool = False) -> str:
        """
        Render the board as a framed multi-line string.

        Off tiles are 'O', lit tiles 'X', blocked tiles '#' and the cursor '*'.

        Args:
            color: If True, highlight the cursor and lit tiles with ANSI colors.
        """
        rule = "+" + "-+" * self.width
        out = []
        for y in range(1, self.height + 1):
            out.append(rule)
            row = "|".join(self._tile_str(x, y, color) for x in range(1, self.width + 1))
            out.append(f"|{row}|")
        out.append(rule)
        return "\n".join(out)

    def print_board(self) -> None:
        """Print the live board to stdout."""
        print(self.format_board())


def format_dirs(dirs: Direction) -> str:
    """Render a direction set as e.g. "[UpLeft]", or "[None!]" when empty."""
    if dirs == Direction.NONE:
        return "[None!]"
    return "[" + "".join(DIRECTION_NAMES[d] for d in DIRECTIONS if d & dirs) + "]"
