"""Randomized construction of solvable layouts."""

import logging
import random
from typing import Callable, List, Optional

from .codec import save_to_hex_string
from .engine import LightGame
from .grid import Buffer, TileState
from .solver import LightGameSolver
from .utils import get_interior_cells

logger = logging.getLogger(__name__)


def augment_randomly(
    game: LightGame,
    n: int,
    rng: random.Random,
    *,
    max_attempts: Optional[int] = None,
    should_stop: Optional[Callable[[], bool]] = None,
) -> bool:
    """
    Block exactly `n` more tiles of the layout so that it stays solvable.

    Shuffles n "block" and k - n "leave" markers over the k currently OFF
    tiles (row-major order) until the resulting layout is solvable. Without a
    budget this loop is unbounded: if no placement of `n` blocks is solvable,
    it never returns. Run it away from any latency-sensitive caller.

    Args:
        game: Game in layout mode whose layout is augmented.
        n: Number of tiles to block, 0 < n < number of OFF tiles.
        rng: Pseudorandom source providing `shuffle`.
        max_attempts: Optional budget of shuffle-and-test rounds.
        should_stop: Optional callable checked before every round; returning
            True cancels the augmentation.

    Returns:
        True if the layout was augmented (and becomes the reset layout);
        False if the request was rejected, the budget ran out or it was
        cancelled, in which case the layout is unchanged.
    """
    if game.has_started():
        logger.debug("augment_randomly(%d): game has already started", n)
        return False

    num_free = game.grid.count(TileState.OFF)
    if n <= 0:
        logger.debug("augment_randomly(%d): n must be positive", n)
        return False
    if num_free <= n:
        logger.debug(
            "augment_randomly(%d): not enough free tiles (have %d)", n, num_free
        )
        return False

    markers: List[TileState] = [TileState.BLOCKED] * n + [TileState.OFF] * (
        num_free - n
    )
    cells = get_interior_cells(game.width, game.height)
    solver = LightGameSolver(game)
    attempts = 0

    with game.scratch(Buffer.AUGMENT) as guard:
        free_cells = [(x, y) for x, y in cells if game.at(x, y) is TileState.OFF]

        while max_attempts is None or attempts < max_attempts:
            if should_stop is not None and should_stop():
                logger.warning("augment_randomly(%d): cancelled after %d attempts", n, attempts)
                return False

            attempts += 1
            rng.shuffle(markers)
            guard.restore()
            for (x, y), marker in zip(free_cells, markers):
                game.grid.set(x, y, marker)

            if solver.is_solvable():
                guard.keep()
                game.commit_layout()
                logger.info(
                    "Augmented layout by %d blocks after %d attempts: %s",
                    n,
                    attempts,
                    save_to_hex_string(game),
                )
                return True

        logger.warning(
            "augment_randomly(%d): no solvable layout within %d attempts", n, attempts
        )
        return False


def generate_random_layout(
    height: int,
    width: int,
    rng: random.Random,
    *,
    min_blocked: int = 3,
    max_blocked: int = 6,
    max_attempts: Optional[int] = None,
) -> Optional[LightGame]:
    """
    Build a fresh, solvable layout with a few randomly placed blocks.

    Each round draws a block count from [min_blocked, max_blocked] and places
    that many blocks at uniformly drawn tiles (repeats allowed, so fewer tiles
    may end up blocked). The first solvable layout is returned.

    Args:
        height: Board height, must be > 0.
        width: Board width, must be > 0.
        rng: Pseudorandom source providing `randint`.
        min_blocked: Lower bound of the block count draw.
        max_blocked: Upper bound of the block count draw.
        max_attempts: Optional budget of rounds.

    Returns:
        A solvable game in layout mode, or None if the budget ran out.

    Raises:
        ValueError: If the block bounds are invalid for the board size.
    """
    if min_blocked < 0 or min_blocked > max_blocked:
        raise ValueError("Need 0 <= min_blocked <= max_blocked.")
    if max_blocked >= height * width:
        raise ValueError(
            f"Too many blocked tiles requested; at most {height * width - 1} allowed."
        )

    attempts = 0
    while max_attempts is None or attempts < max_attempts:
        attempts += 1
        game = LightGame(height, width)
        for _ in range(rng.randint(min_blocked, max_blocked)):
            game.set_blocked(rng.randint(1, width), rng.randint(1, height))
        if LightGameSolver(game).is_solvable():
            logger.info("Generated random layout after %d attempts", attempts)
            return game

    logger.warning("generate_random_layout: no solvable layout within %d attempts", attempts)
    return None
