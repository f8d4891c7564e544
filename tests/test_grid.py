import pytest

from lightgame import Buffer, Grid, TileState
from lightgame.grid import BufferGuard


@pytest.mark.parametrize("height,width", [(1, 1), (2, 3), (4, 1), (5, 7)])
def test_fresh_grid_border_blocked_interior_off(height, width):
    grid = Grid(height, width)
    for y in range(height + 2):
        for x in range(width + 2):
            expected = TileState.OFF if grid.is_interior(x, y) else TileState.BLOCKED
            assert grid.get(x, y) is expected
    for buffer in Buffer:
        assert grid.count(TileState.OFF, buffer) == height * width


@pytest.mark.parametrize("height,width", [(0, 3), (3, 0), (-1, 2)])
def test_non_positive_dimensions_rejected(height, width):
    with pytest.raises(ValueError):
        Grid(height, width)


def test_border_cannot_be_written():
    grid = Grid(2, 2)
    with pytest.raises(ValueError):
        grid.set(0, 1, TileState.OFF)
    with pytest.raises(ValueError):
        grid.set(3, 3, TileState.OFF)
    with pytest.raises(IndexError):
        grid.get(4, 0)


def test_copy_between_buffers():
    grid = Grid(2, 2)
    grid.set(1, 1, TileState.BLOCKED)
    assert grid.get(1, 1, Buffer.LAYOUT) is TileState.OFF

    grid.copy(Buffer.LIVE, Buffer.LAYOUT)
    assert grid.get(1, 1, Buffer.LAYOUT) is TileState.BLOCKED

    grid.set(2, 2, TileState.ON)
    grid.copy(Buffer.LAYOUT, Buffer.LIVE)
    assert grid.get(2, 2) is TileState.OFF
    assert grid.cells(Buffer.LIVE) == grid.cells(Buffer.LAYOUT)


def test_buffer_guard_restores_unless_kept():
    grid = Grid(1, 2)
    with BufferGuard(grid, Buffer.SOLVER):
        grid.set(1, 1, TileState.ON)
    assert grid.get(1, 1) is TileState.OFF

    with BufferGuard(grid, Buffer.AUGMENT) as guard:
        grid.set(2, 1, TileState.BLOCKED)
        guard.keep()
    assert grid.get(2, 1) is TileState.BLOCKED


def test_buffer_guard_restores_on_exception():
    grid = Grid(1, 1)
    with pytest.raises(RuntimeError):
        with BufferGuard(grid, Buffer.SOLVER):
            grid.set(1, 1, TileState.ON)
            raise RuntimeError("boom")
    assert grid.get(1, 1) is TileState.OFF


def test_buffer_guard_rejects_live_scratch():
    with pytest.raises(ValueError):
        BufferGuard(Grid(1, 1), Buffer.LIVE)
