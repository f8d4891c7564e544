import pytest

from lightgame import Buffer, Direction, LightGame, TileState, format_dirs


def test_start_and_solve(open_2x3):
    # +--+--+--+
    # |St|  |  |
    # +--+--+--+
    # |  |  |  |
    # +--+--+--+
    game = open_2x3
    assert (game.height, game.width) == (2, 3)

    assert game.start(1, 1)
    assert game.has_started()
    assert (game.x, game.y) == (1, 1)

    assert game.move(Direction.RIGHT)
    assert (game.x, game.y) == (3, 1)
    assert game.move(Direction.DOWN)
    assert (game.x, game.y) == (3, 2)
    assert game.move(Direction.LEFT)
    assert (game.x, game.y) == (1, 2)

    assert game.valid_dirs() == Direction.NONE
    assert game.have_won()


def test_invalid_operations():
    game = LightGame(2, 3)
    assert not game.set_blocked(3, 3)  # out of bounds
    assert game.set_blocked(3, 2)
    assert not game.start(3, 3)  # out of bounds
    assert not game.start(3, 2)  # tile blocked
    assert game.start(3, 1)
    assert not game.start(3, 1)  # already started
    assert not game.set_blocked(3, 1)  # already started
    assert not game.set_blocked(1, 2)


@pytest.mark.parametrize("x,y", [(0, 0), (0, 1), (1, 0), (-1, 1), (4, 1)])
def test_start_outside_board_fails(open_2x3, x, y):
    assert not open_2x3.start(x, y)
    assert not open_2x3.has_started()


@pytest.mark.parametrize("height,width", [(1, 1), (1, 2), (2, 2), (3, 4)])
def test_have_won_right_after_start_only_on_single_tile(height, width):
    game = LightGame(height, width)
    assert game.start(1, 1)
    assert game.have_won() == (height * width == 1)


def test_valid_dirs_before_start_is_empty(open_2x3):
    assert open_2x3.valid_dirs() == Direction.NONE
    assert open_2x3.grid.cells() == LightGame(2, 3).grid.cells()


def test_valid_dirs_reports_off_neighbours(open_2x3):
    assert open_2x3.start(2, 1)
    assert open_2x3.valid_dirs() == Direction.DOWN | Direction.LEFT | Direction.RIGHT
    assert Direction.UP not in open_2x3.valid_dirs()


def test_move_before_start_fails(open_2x3):
    assert not open_2x3.move(Direction.RIGHT)
    assert not open_2x3.move_fast(Direction.RIGHT)


@pytest.mark.parametrize(
    "direction",
    [Direction.UP, Direction.NONE, Direction.LEFT | Direction.RIGHT],
)
def test_invalid_move_does_not_mutate(open_2x3, direction):
    game = open_2x3
    assert game.start(2, 1)
    before = game.grid.cells()

    assert not game.move(direction)
    assert not game.move_fast(direction)
    assert game.grid.cells() == before
    assert (game.x, game.y) == (2, 1)


def test_move_stops_before_blocked_tile():
    game = LightGame(1, 5)
    assert game.set_blocked(4, 1)
    assert game.start(1, 1)
    assert game.move(Direction.RIGHT)
    assert (game.x, game.y) == (3, 1)
    assert game.at(3, 1) is TileState.ON
    assert game.at(5, 1) is TileState.OFF
    assert not game.have_won()


def test_move_fast_follows_forced_directions(open_2x3):
    game = open_2x3
    assert game.start(1, 1)
    assert game.move_fast(Direction.RIGHT)
    assert (game.x, game.y) == (1, 2)
    assert game.have_won()


def test_move_fast_stops_at_a_choice():
    # Sliding up from the centre ends on the top edge with two choices.
    game = LightGame(3, 3)
    assert game.start(2, 2)
    assert game.move_fast(Direction.UP)
    assert (game.x, game.y) == (2, 1)
    assert game.valid_dirs() == Direction.LEFT | Direction.RIGHT


def test_live_differs_from_layout_only_by_lighting(rng):
    game = LightGame(4, 4)
    game.set_blocked(2, 2)
    assert game.start(1, 1)
    while game.valid_dirs() != Direction.NONE:
        options = [d for d in (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)
                   if d in game.valid_dirs()]
        assert game.move(rng.choice(options))

    layout = game.grid.cells(Buffer.LAYOUT)
    for before, after in zip(layout, game.grid.cells()):
        assert before == after or (before, after) == (TileState.OFF, TileState.ON)


def test_reset_restores_layout(open_2x3):
    game = open_2x3
    game.set_blocked(2, 2)
    layout = game.grid.cells()

    assert game.start(1, 1)
    assert game.move(Direction.RIGHT)
    game.reset()

    assert not game.has_started()
    assert (game.x, game.y) == (0, 0)
    assert game.grid.cells() == layout


def test_reset_without_game_is_noop(open_2x3):
    game = open_2x3
    game.set_blocked(1, 1)
    before = game.grid.cells()
    game.reset()
    assert game.grid.cells() == before


def test_restart_uses_last_start(open_2x3):
    game = open_2x3
    assert not game.restart()
    assert game.start(2, 2)
    assert game.move(Direction.LEFT)
    assert game.restart()
    assert (game.x, game.y) == (2, 2)
    assert game.at(1, 2) is TileState.OFF


def test_format_board():
    game = LightGame(1, 3)
    game.set_blocked(3, 1)
    assert game.format_board() == "+-+-+-+\n|O|O|#|\n+-+-+-+"

    assert game.start(1, 1)
    assert game.move(Direction.RIGHT)
    assert game.format_board() == "+-+-+-+\n|X|*|#|\n+-+-+-+"


def test_format_dirs():
    assert format_dirs(Direction.NONE) == "[None!]"
    assert format_dirs(Direction.RIGHT | Direction.UP) == "[UpRight]"
