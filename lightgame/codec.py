"""Compact text encoding of board layouts."""

from typing import List, Optional, Sequence

from .engine import LightGame
from .grid import TileState
from .utils import get_interior_cells

HEX_DIGITS = "0123456789ABCDEF"
MAX_HEX_DIMENSION = 15
LAYOUT_TOO_LARGE = "[layout too large]"


def _check_bits(bits_per_digit: int) -> None:
    if not 1 <= bits_per_digit <= 8:
        raise ValueError("bits_per_digit must lie in [1, 8].")


def layout_digit_count(height: int, width: int, bits_per_digit: int) -> int:
    """Number of digits needed to hold one bit per tile of a height x width board."""
    _check_bits(bits_per_digit)
    return (height * width + bits_per_digit - 1) // bits_per_digit


def layout_to_digits(game: LightGame, bits_per_digit: int = 4) -> List[int]:
    """
    Pack the layout into digits of `bits_per_digit` bits each.

    One bit per tile in row-major order, set iff the tile is BLOCKED. Within a
    digit the first tile takes the most significant bit; the last digit is
    padded with zero bits. Each digit lies in [0, 2**bits_per_digit).

    Raises:
        ValueError: If bits_per_digit is outside [1, 8].
    """
    digits = [0] * layout_digit_count(game.height, game.width, bits_per_digit)
    for i, (x, y) in enumerate(get_interior_cells(game.width, game.height)):
        if game.at(x, y) is TileState.BLOCKED:
            q, r = divmod(i, bits_per_digit)
            digits[q] |= 1 << (bits_per_digit - 1 - r)
    return digits


def load_layout_from_digits(
    game: LightGame, digits: Sequence[int], bits_per_digit: int = 4
) -> None:
    """
    Mark tiles BLOCKED according to packed digits (see `layout_to_digits`).

    Raises:
        ValueError: If bits_per_digit is invalid or there are too few digits.
    """
    if len(digits) < layout_digit_count(game.height, game.width, bits_per_digit):
        raise ValueError("Not enough digits for the board size.")
    for i, (x, y) in enumerate(get_interior_cells(game.width, game.height)):
        q, r = divmod(i, bits_per_digit)
        if digits[q] >> (bits_per_digit - 1 - r) & 1:
            game.set_blocked(x, y)


def save_to_hex_string(game: LightGame) -> str:
    """
    Encode the layout as "<height><width><packed tiles>" in hex digits.

    Lit tiles and the cursor are not encoded. Boards with a dimension above 15
    yield LAYOUT_TOO_LARGE instead.
    """
    if game.height > MAX_HEX_DIMENSION or game.width > MAX_HEX_DIMENSION:
        return LAYOUT_TOO_LARGE

    digits = [game.height, game.width] + layout_to_digits(game, 4)
    return "".join(HEX_DIGITS[d] for d in digits)


def _parse_hex(c: str) -> int:
    return HEX_DIGITS.find(c.upper()) if len(c) == 1 else -1


def load_from_hex_string(code: str) -> Optional[LightGame]:
    """
    Decode a layout produced by `save_to_hex_string`.

    Returns:
        A fresh game in layout mode, or None if the code has a non-hex
        character, a zero dimension or the wrong length for its size.
    """
    if len(code) < 2:
        return None

    values = [_parse_hex(c) for c in code]
    if any(v < 0 for v in values):
        return None

    height, width = values[0], values[1]
    if height == 0 or width == 0:
        return None
    if len(values) != 2 + layout_digit_count(height, width, 4):
        return None

    game = LightGame(height, width)
    load_layout_from_digits(game, values[2:], 4)
    return game
