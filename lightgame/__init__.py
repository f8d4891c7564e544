"""
Light-up Puzzle Engine

A single-player grid puzzle: pick a start tile, then slide in straight lines
until blocked, lighting every traversed tile; light every non-blocked tile to
win. Components:
- Engine: layout editing, start, slide and fast moves, reset
- Solver: exhaustive replay-based depth-first search for winning starts
- Generator: randomized construction of solvable layouts
- Codec: compact hex encoding of layouts
"""

from .engine import DIRECTIONS, Direction, LightGame, format_dirs
from .grid import Buffer, Grid, TileState
from .solver import LightGameSolver, Solution, SolverInvariantError, flatten_solutions
from .generator import augment_randomly, generate_random_layout
from .codec import (
    LAYOUT_TOO_LARGE,
    MAX_HEX_DIMENSION,
    layout_digit_count,
    layout_to_digits,
    load_from_hex_string,
    load_layout_from_digits,
    save_to_hex_string,
)
from .tracker import SolutionTracker
from .cli import play_cli
from .analysis import (
    format_solutions,
    run_density_analysis,
    run_generator_benchmark,
    run_solver_many_tests,
    run_solver_single_test,
)

__version__ = "1.0.0"

__all__ = [
    # Core classes
    "LightGame",
    "LightGameSolver",
    "Grid",
    "TileState",
    "Buffer",
    "Direction",
    "DIRECTIONS",
    "Solution",
    "SolverInvariantError",
    "SolutionTracker",
    # Generation
    "augment_randomly",
    "generate_random_layout",
    # Codec
    "save_to_hex_string",
    "load_from_hex_string",
    "layout_to_digits",
    "load_layout_from_digits",
    "layout_digit_count",
    "LAYOUT_TOO_LARGE",
    "MAX_HEX_DIMENSION",
    # Helpers
    "flatten_solutions",
    "format_dirs",
    # CLI
    "play_cli",
    # Analysis functions
    "format_solutions",
    "run_solver_single_test",
    "run_solver_many_tests",
    "run_generator_benchmark",
    "run_density_analysis",
]
