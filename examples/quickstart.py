"""
Quickstart example for the light-up puzzle engine.

This script demonstrates basic usage of the engine, solver, generator and codec.
"""

import random

from lightgame import (
    Direction,
    LightGame,
    LightGameSolver,
    augment_randomly,
    load_from_hex_string,
    run_solver_many_tests,
    save_to_hex_string,
)
from lightgame.analysis import format_solutions


def main():
    print("=" * 60)
    print("Light-up Puzzle - Quickstart Example")
    print("=" * 60)

    # Example 1: Play a small game by hand
    print("\n1. Playing a 2x3 game from (1, 1)...")
    print("-" * 60)

    game = LightGame(2, 3)
    game.start(1, 1)
    for d in (Direction.RIGHT, Direction.DOWN, Direction.LEFT):
        game.move(d)
    print(game.format_board())
    print(f"Won: {game.have_won()}")

    # Example 2: Generate a solvable layout
    print("\n2. Generating a 5x7 layout with 6 blocked tiles...")
    print("-" * 60)

    rng = random.Random(1001)
    game = LightGame(5, 7)
    augment_randomly(game, 6, rng)
    code = save_to_hex_string(game)
    print(game.format_board())
    print(f"Layout code: {code}")

    # Example 3: Enumerate its solutions
    print("\n3. Solutions of the generated layout:")
    print("-" * 60)

    solver = LightGameSolver(load_from_hex_string(code))
    solver.is_solvable(collect=True)
    print(format_solutions(solver.solutions))
    print(f"Winning starts: {solver.winning_starts()}")

    # Example 4: Solvability of random layouts
    print("\n4. Solvable rate of random 4x4 layouts (20 layouts each)...")
    print("-" * 60)

    for blocked in (0, 2, 4, 6):
        results = run_solver_many_tests(4, 4, blocked, runs=20, rng=rng)
        print(
            f"{blocked:2d} blocks: {results['solvable_rate']*100:5.1f}% solvable, "
            f"{results['avg_winning_starts']:.1f} winning starts on average"
        )

    print("\n" + "=" * 60)
    print("Done! See README.md for more detailed usage instructions.")
    print("=" * 60)


if __name__ == "__main__":
    main()
