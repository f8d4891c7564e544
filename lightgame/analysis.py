"""Analysis and benchmarking tools for the light-up solver and generator."""

import random
import time
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from .codec import save_to_hex_string
from .engine import LightGame, format_dirs
from .generator import augment_randomly
from .solver import LightGameSolver, Solution


def format_solutions(solutions: Iterable[Solution]) -> str:
    """
    Format solutions one per line, e.g. "(1, 1): [Right] [Down] [Left]".

    Returns:
        A multi-line string, empty if there are no solutions.
    """
    lines: List[str] = []
    for s in solutions:
        moves = " ".join(format_dirs(d) for d in s.moves)
        lines.append(f"({s.x}, {s.y}): {moves}".rstrip())
    return "\n".join(lines)


def random_layout(
    height: int, width: int, blocked: int, rng: random.Random
) -> LightGame:
    """Return a fresh layout with exactly `blocked` distinct random tiles blocked."""
    if not 0 <= blocked <= height * width:
        raise ValueError("blocked must lie in [0, height * width].")

    game = LightGame(height, width)
    cells = [(x, y) for y in range(1, height + 1) for x in range(1, width + 1)]
    for x, y in rng.sample(cells, blocked):
        game.set_blocked(x, y)
    return game


def run_solver_single_test(
    height: int,
    width: int,
    blocked: int,
    rng: random.Random,
    *,
    show_board: bool = False,
) -> Dict[str, object]:
    """
    Enumerate every solution of one random layout.

    Args:
        height: Board height.
        width: Board width.
        blocked: Number of distinct tiles to block.
        rng: Pseudorandom source for the layout.
        show_board: If True, print the layout, its code and its solutions.

    Returns:
        Dict with "code", "solvable", "winning_starts", "solutions_count",
        "avg_solution_length", "nodes_visited", "replays_count" and
        "elapsed_seconds".
    """
    game = random_layout(height, width, blocked, rng)
    solver = LightGameSolver(game)

    t0 = time.perf_counter()
    solvable = solver.is_solvable(collect=True)
    elapsed = time.perf_counter() - t0

    lengths = [len(s.moves) for s in solver.solutions]

    if show_board:
        print(game.format_board())
        print(save_to_hex_string(game))
        print(format_solutions(solver.solutions) or "No solutions.")

    return {
        "code": save_to_hex_string(game),
        "solvable": solvable,
        "winning_starts": len(solver.winning_starts()),
        "solutions_count": len(solver.solutions),
        "avg_solution_length": float(np.mean(lengths)) if lengths else 0.0,
        "nodes_visited": solver.nodes_visited,
        "replays_count": solver.replays_count,
        "elapsed_seconds": elapsed,
    }


def run_solver_many_tests(
    height: int,
    width: int,
    blocked: int,
    runs: int,
    rng: random.Random,
) -> Dict[str, float]:
    """
    Run many independent solver tests and return averaged metrics.

    Returns:
        Averages of the numeric metrics of `run_solver_single_test` (prefixed
        with "avg_"), plus "solvable_rate".
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    sums: Dict[str, float] = defaultdict(float)
    solvable_runs = 0

    for _ in range(runs):
        result = run_solver_single_test(height, width, blocked, rng)
        if result["solvable"]:
            solvable_runs += 1
        for k, v in result.items():
            if isinstance(v, (int, float)) and not isinstance(v, bool):
                sums[f"avg_{k}"] += float(v)

    out: Dict[str, float] = {k: total / runs for k, total in sums.items()}
    out["solvable_rate"] = solvable_runs / runs
    return out


def run_generator_benchmark(
    height: int,
    width: int,
    counts: Sequence[int] = (4, 5),
    runs: int = 5,
    seed: int = 1001,
) -> Dict[str, float]:
    """
    Time successive random augmentations of an empty layout.

    Each run starts from a blank board and a generator seeded with
    `seed + run`, then augments it by each of `counts` in turn.

    Returns:
        Dict with "avg_seconds", "min_seconds", "max_seconds" per run and
        "success_rate" (fraction of augmentation calls that succeeded).
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    timings: List[float] = []
    successes = 0
    for run in range(runs):
        game = LightGame(height, width)
        rng = random.Random(seed + run)
        t0 = time.perf_counter()
        for n in counts:
            if augment_randomly(game, n, rng):
                successes += 1
        timings.append(time.perf_counter() - t0)

    arr = np.asarray(timings)
    return {
        "avg_seconds": float(arr.mean()),
        "min_seconds": float(arr.min()),
        "max_seconds": float(arr.max()),
        "success_rate": successes / (runs * len(counts)) if counts else 0.0,
    }


def run_density_analysis(
    height: int,
    width: int,
    runs: int,
    seed: int = 0,
    *,
    max_blocked: Optional[int] = None,
    show_plot: bool = True,
) -> Dict[int, Dict[str, float]]:
    """
    Measure how solvability falls off with the number of blocked tiles.

    Args:
        height: Board height.
        width: Board width.
        runs: Random layouts per block count.
        seed: Seed of the pseudorandom source.
        max_blocked: Largest block count to try (default: half the board).
        show_plot: If True, plot solvable rate and winning starts per count.

    Returns:
        Mapping from block count to the statistics of `run_solver_many_tests`.
    """
    rng = random.Random(seed)
    if max_blocked is None:
        max_blocked = (height * width) // 2

    results: Dict[int, Dict[str, float]] = {}
    for blocked in range(max_blocked + 1):
        results[blocked] = run_solver_many_tests(height, width, blocked, runs, rng)

    if show_plot:
        x = np.arange(max_blocked + 1)
        solvable_rate = [results[b]["solvable_rate"] for b in range(max_blocked + 1)]
        winning_starts = [results[b]["avg_winning_starts"] for b in range(max_blocked + 1)]

        plt.figure()  # type: ignore[misc]
        plt.plot(x, solvable_rate, marker="o")  # type: ignore[misc]
        plt.xlabel("Blocked tiles")  # type: ignore[misc]
        plt.ylabel("Solvable rate")  # type: ignore[misc]
        plt.ylim(0.0, 1.05)  # type: ignore[misc]
        plt.title(f"Solvable layouts on a {height}x{width} board")  # type: ignore[misc]
        plt.tight_layout()
        plt.show()  # type: ignore[misc]

        plt.figure()  # type: ignore[misc]
        plt.bar(x, winning_starts)  # type: ignore[misc]
        plt.xlabel("Blocked tiles")  # type: ignore[misc]
        plt.ylabel("Average winning starts")  # type: ignore[misc]
        plt.title("Winning start tiles per layout")  # type: ignore[misc]
        plt.tight_layout()
        plt.show()  # type: ignore[misc]

    return results
