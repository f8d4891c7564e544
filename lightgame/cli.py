"""Line-oriented terminal front end for the light-up puzzle."""

import random
import re
from typing import List, Optional, Tuple

from .codec import load_from_hex_string, save_to_hex_string
from .engine import DIRECTIONS, Direction, LightGame, format_dirs
from .generator import augment_randomly, generate_random_layout
from .grid import TileState
from .solver import LightGameSolver

HELP_TEXT = """Commands:
  n <h> <w>   new, blank layout of dimensions h x w
  g <h> <w>   randomly generated, solvable layout
  b <x> <y>   mark tile x, y as blocked
  s <x> <y>   start a game at tile x, y
  r           reset a game in progress, back to layout mode
  a <N>       move: N = 1 (up), 2 (down), 3 (left), 4 (right)
  f <N>       fast move, keeps going while the direction is forced
  m <n>       randomly block n more tiles, keeping the layout solvable
  c           print the layout code
  l <code>    load a layout code
  h           list the solutions of the current layout
  q           quit"""

_INT_RE = re.compile(r"-?\d+")

# Cap on shuffle-and-test rounds for `g` and `m` so a hopeless request returns.
ATTEMPT_BUDGET = 2000

# Argument count per command letter.
_ARITY = {"n": 2, "g": 2, "b": 2, "s": 2, "r": 0, "a": 1, "f": 1, "m": 1,
          "c": 0, "h": 0, "q": 0, "?": 0}


def parse_command(line: str) -> Optional[Tuple[str, List[str]]]:
    """
    Split an input line into a lower-case command letter and its arguments.

    Returns:
        (command, args), or None if the command is unknown or has the wrong
        number of arguments. All arguments except the layout code are integers.
    """
    parts = line.replace(",", " ").split()
    if not parts:
        return None
    cmd, args = parts[0].lower(), parts[1:]

    if cmd == "l":
        return (cmd, args) if len(args) == 1 else None
    if cmd not in _ARITY or len(args) != _ARITY[cmd]:
        return None
    if not all(_INT_RE.fullmatch(a) for a in args):
        return None
    return cmd, args


def _direction_for(n: int) -> Direction:
    return DIRECTIONS[n - 1] if 1 <= n <= 4 else Direction.NONE


def _report_position(game: LightGame) -> None:
    print(game.format_board())
    dirs = game.valid_dirs()
    if dirs != Direction.NONE:
        print(f"Valid directions: {format_dirs(dirs)}")
    elif game.have_won():
        print("You won!!")
    else:
        print("Game over, you lose.")


def play_cli(
    game: Optional[LightGame] = None, rng: Optional[random.Random] = None
) -> None:
    """
    Run a simple terminal UI for playing and editing layouts.

    Args:
        game: Optional game to begin with; otherwise create one with `n`, `g`
            or `l`.
        rng: Pseudorandom source for `g` and `m`; a fresh one if omitted.
    """
    rng = rng if rng is not None else random.Random()
    print("Light-up puzzle CLI. Coordinates are 1-based. Type '?' for help.\n")
    if game is not None:
        print(game.format_board())

    while True:
        try:
            line = input("\n> ")
        except EOFError:
            break

        parsed = parse_command(line)
        if parsed is None:
            print(f"Unrecognized command '{line.strip()}'.")
            continue
        cmd, args = parsed

        if cmd == "q":
            break
        if cmd == "?":
            print(HELP_TEXT)
            continue
        if cmd == "l":
            loaded = load_from_hex_string(args[0])
            if loaded is None:
                print(f"Error during loading of '{args[0]}'.")
            else:
                game = loaded
                print(game.format_board())
            continue

        nums = [int(a) for a in args]

        if cmd == "n":
            if nums[0] <= 0 or nums[1] <= 0:
                print("Height and width must be positive.")
                continue
            print(f"New game: {nums[0]} x {nums[1]}.")
            game = LightGame(nums[0], nums[1])
            print(game.format_board())
            continue
        if cmd == "g":
            if nums[0] <= 0 or nums[1] <= 0:
                print("Height and width must be positive.")
                continue
            max_blocked = min(6, nums[0] * nums[1] - 1)
            try:
                generated = generate_random_layout(
                    nums[0], nums[1], rng,
                    min_blocked=min(3, max_blocked), max_blocked=max_blocked,
                    max_attempts=ATTEMPT_BUDGET,
                )
            except ValueError as e:
                print(f"Cannot generate layout: {e}")
                continue
            if generated is None:
                print("No solvable layout found; try again.")
                continue
            game = generated
            print(game.format_board())
            continue

        if game is None:
            print("No game in progress!")
            continue

        if cmd == "b":
            if not game.set_blocked(nums[0], nums[1]):
                print("Error setting blocked field.")
            else:
                print(game.format_board())
        elif cmd == "s":
            if not game.start(nums[0], nums[1]):
                print(f"Invalid start position ({nums[0]}, {nums[1]})!")
            else:
                _report_position(game)
        elif cmd == "r":
            game.reset()
            print(game.format_board())
        elif cmd in ("a", "f"):
            direction = _direction_for(nums[0])
            mover = game.move_fast if cmd == "f" else game.move
            if direction == Direction.NONE or not mover(direction):
                print("Invalid move!")
            else:
                _report_position(game)
        elif cmd == "m":
            free = game.grid.count(TileState.OFF)
            if game.has_started() or not 0 < nums[0] < free:
                print("Cannot augment: reset the game and pick 0 < n < number of free tiles.")
                continue
            print("Augmenting layout; this may take a while...")
            if not augment_randomly(game, nums[0], rng, max_attempts=ATTEMPT_BUDGET):
                print("No solvable layout found; try fewer blocks.")
            else:
                print(game.format_board())
        elif cmd == "c":
            print(save_to_hex_string(game))
        elif cmd == "h":
            solver = LightGameSolver(game)
            if not solver.is_solvable(collect=True):
                print("This layout is not solvable.")
            else:
                print("Solutions:")
                for s in solver.solutions:
                    moves = " ".join(format_dirs(d) for d in s.moves)
                    print(f"- from ({s.x}, {s.y}) move [ {moves} ]")

    print("Goodbye!")
