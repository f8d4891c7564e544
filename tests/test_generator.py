import random

import pytest

from lightgame import (
    Buffer,
    LightGame,
    LightGameSolver,
    TileState,
    augment_randomly,
    generate_random_layout,
)


def _blocked_count(game):
    return game.grid.count(TileState.BLOCKED) - 2 * (game.height + game.width + 2)


@pytest.mark.parametrize("n", [0, -1, 35, 40])
def test_rejects_bad_counts_without_mutation(rng, n):
    game = LightGame(5, 7)
    before = game.grid.cells()
    assert not augment_randomly(game, n, rng)
    assert game.grid.cells() == before


def test_rejects_game_in_progress(rng, open_2x3):
    assert open_2x3.start(1, 1)
    before = open_2x3.grid.cells()
    assert not augment_randomly(open_2x3, 1, rng)
    assert open_2x3.grid.cells() == before
    assert open_2x3.has_started()


def test_successive_augmentations_stay_solvable(rng, layout_of):
    game = LightGame(4, 5)
    total = 0
    for n in (2, 3, 2):
        previous = layout_of(game)
        assert augment_randomly(game, n, rng)
        total += n

        assert _blocked_count(game) == total
        assert LightGameSolver(game).is_solvable()
        # Existing blocks are kept.
        assert all(b for a, b in zip(previous, layout_of(game)) if a)
        # The augmented layout is what a reset returns to.
        assert game.grid.cells(Buffer.LAYOUT) == game.grid.cells()
        assert not game.has_started()


def test_same_seed_same_layout(layout_of):
    a, b = LightGame(4, 4), LightGame(4, 4)
    assert augment_randomly(a, 4, random.Random(7))
    assert augment_randomly(b, 4, random.Random(7))
    assert layout_of(a) == layout_of(b)


def test_attempt_budget_restores_layout(rng, corners_3x3):
    # No single extra block makes the plus shape solvable.
    before = corners_3x3.grid.cells()
    assert not augment_randomly(corners_3x3, 1, rng, max_attempts=5)
    assert corners_3x3.grid.cells() == before


def test_cancellation_restores_layout(rng):
    game = LightGame(3, 3)
    before = game.grid.cells()
    assert not augment_randomly(game, 2, rng, should_stop=lambda: True)
    assert game.grid.cells() == before


def test_exception_restores_layout(open_2x3):
    class BrokenRandom(random.Random):
        def shuffle(self, x):
            x.reverse()
            raise RuntimeError("no entropy")

    before = open_2x3.grid.cells()
    with pytest.raises(RuntimeError):
        augment_randomly(open_2x3, 2, BrokenRandom())
    assert open_2x3.grid.cells() == before


def test_generate_random_layout_is_solvable(rng):
    game = generate_random_layout(4, 5, rng)
    assert game is not None
    assert not game.has_started()
    assert 0 < _blocked_count(game) <= 6
    assert LightGameSolver(game).is_solvable()


@pytest.mark.parametrize(
    "min_blocked,max_blocked",
    [(-1, 2), (4, 3), (3, 20)],
)
def test_generate_random_layout_rejects_bad_bounds(rng, min_blocked, max_blocked):
    with pytest.raises(ValueError):
        generate_random_layout(4, 5, rng, min_blocked=min_blocked, max_blocked=max_blocked)


def test_augmentation_keeps_start_tile(rng):
    game = LightGame(4, 5)
    assert augment_randomly(game, 3, rng)
    assert game.last_start is None
    assert not game.has_started()
