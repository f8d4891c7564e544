"""Bordered tile grid with parallel snapshot buffers."""

from enum import Enum
from typing import Dict, List, Tuple


class TileState(Enum):
    """State of a single tile."""

    OFF = 0
    ON = 1
    BLOCKED = 2


class Buffer(Enum):
    """
    The four parallel storages of a grid.

    - LIVE: the board of the active game.
    - LAYOUT: copy of the layout taken when a game starts, restored on reset.
    - SOLVER: backup of the live board while the solver runs.
    - AUGMENT: backup of the layout while random augmentation runs.
    """

    LIVE = 0
    LAYOUT = 1
    SOLVER = 2
    AUGMENT = 3


class Grid:
    """
    A height x width board stored with one ring of BLOCKED padding.

    Playable coordinates are x in [1, width] and y in [1, height]; the padding
    ring lives at x in {0, width + 1} and y in {0, height + 1} and never changes.
    """

    def __init__(self, height: int, width: int) -> None:
        """
        Create a grid with every interior tile OFF and the border BLOCKED.

        Args:
            height: Number of playable rows, must be > 0.
            width: Number of playable columns, must be > 0.

        Raises:
            ValueError: If either dimension is non-positive.
        """
        if height <= 0 or width <= 0:
            raise ValueError("Height and width must be positive.")

        self.height: int = height
        self.width: int = width
        self.stride: int = width + 2
        self.raw_size: int = (height + 2) * (width + 2)

        live: List[TileState] = [TileState.OFF] * self.raw_size
        for x in range(width + 2):
            live[self.index(x, 0)] = TileState.BLOCKED
            live[self.index(x, height + 1)] = TileState.BLOCKED
        for y in range(1, height + 1):
            live[self.index(0, y)] = TileState.BLOCKED
            live[self.index(width + 1, y)] = TileState.BLOCKED

        self._buffers: Dict[Buffer, List[TileState]] = {
            buffer: list(live) for buffer in Buffer
        }

    def index(self, x: int, y: int) -> int:
        """Flat index of (x, y) in the bordered storage."""
        return x + self.stride * y

    def in_bounds(self, x: int, y: int) -> bool:
        """Whether (x, y) is a stored coordinate, border included."""
        return 0 <= x <= self.width + 1 and 0 <= y <= self.height + 1

    def is_interior(self, x: int, y: int) -> bool:
        """Whether (x, y) is a playable coordinate."""
        return 1 <= x <= self.width and 1 <= y <= self.height

    def get(self, x: int, y: int, buffer: Buffer = Buffer.LIVE) -> TileState:
        """
        Read a tile, border coordinates included.

        Raises:
            IndexError: If (x, y) lies outside the bordered storage.
        """
        if not self.in_bounds(x, y):
            raise IndexError(f"Coordinates ({x}, {y}) are outside the grid.")
        return self._buffers[buffer][self.index(x, y)]

    def set(
        self, x: int, y: int, state: TileState, buffer: Buffer = Buffer.LIVE
    ) -> None:
        """
        Write a playable tile.

        Raises:
            ValueError: If (x, y) is a border coordinate or outside the grid.
        """
        if not self.is_interior(x, y):
            raise ValueError(f"Cannot write tile ({x}, {y}): not a playable tile.")
        self._buffers[buffer][self.index(x, y)] = state

    def cells(self, buffer: Buffer = Buffer.LIVE) -> Tuple[TileState, ...]:
        """Snapshot of the whole bordered storage of one buffer."""
        return tuple(self._buffers[buffer])

    def count(self, state: TileState, buffer: Buffer = Buffer.LIVE) -> int:
        """Number of stored tiles (border included) in the given state."""
        return self._buffers[buffer].count(state)

    def contains(self, state: TileState, buffer: Buffer = Buffer.LIVE) -> bool:
        """Whether any stored tile (border included) is in the given state."""
        return state in self._buffers[buffer]

    def copy(self, source: Buffer, target: Buffer) -> None:
        """Copy one whole buffer over another."""
        if source is target:
            return
        self._buffers[target][:] = self._buffers[source]


class BufferGuard:
    """
    Context manager that backs the live buffer up into a scratch buffer.

    On entry the live buffer is copied into `scratch`. On exit the live buffer
    is restored from `scratch`, unless `keep()` was called. Owners that carry
    extra state (e.g. the cursor) wrap it rather than subclass it.
    """

    def __init__(self, grid: Grid, scratch: Buffer) -> None:
        if scratch is Buffer.LIVE:
            raise ValueError("The scratch buffer must differ from the live buffer.")
        self.grid = grid
        self.scratch = scratch
        self._kept: bool = False

    def __enter__(self) -> "BufferGuard":
        self.grid.copy(Buffer.LIVE, self.scratch)
        return self

    def restore(self) -> None:
        """Overwrite the live buffer with the backup."""
        self.grid.copy(self.scratch, Buffer.LIVE)

    def keep(self) -> None:
        """Keep the live buffer as it is when the guard exits."""
        self._kept = True

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        if not self._kept:
            self.restore()
        return False
