import random

import pytest

from lightgame import LightGame, TileState


@pytest.fixture
def rng():
    return random.Random(1001)


@pytest.fixture
def open_2x3():
    """A 2x3 board with no blocked tiles."""
    return LightGame(2, 3)


@pytest.fixture
def corners_3x3():
    """A 3x3 board with all four corners blocked (unsolvable)."""
    game = LightGame(3, 3)
    for x, y in ((1, 1), (1, 3), (3, 1), (3, 3)):
        assert game.set_blocked(x, y)
    return game


@pytest.fixture
def layout_of():
    """Blocked flags of the playable tiles, row-major."""

    def _layout(game):
        return [
            game.at(x, y) is TileState.BLOCKED
            for y in range(1, game.height + 1)
            for x in range(1, game.width + 1)
        ]

    return _layout
