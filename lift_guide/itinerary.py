"""Command parsing into itineraries, bounds checking, and label-guess parsing.

Classic mode:
  Every direction symbol moves one floor. Maximal runs of the same direction
  become one leg: "+++--" → (up, 3), (down, 2). Non-direction characters are
  dropped before grouping, so "+x+" is a single (up, 2) leg.

Numeric mode:
  A direction symbol immediately followed by digits is one leg of that many
  floors: "↓10↑2" → (down, 10), (up, 2). A symbol without digits, digits
  without a symbol, and zero magnitudes are ignored.

Direction symbols: up = "+" or "↑", down = "-" or "↓".

Nothing here raises for unrecognised commands; an empty itinerary means the
command is dropped. Bounds violations raise OutOfRange.
"""

import logging
from collections.abc import Iterator, Sequence
from itertools import groupby
from typing import Literal

from .models import Direction, InputMode, Leg

logger = logging.getLogger(__name__)

Bound = Literal["high", "low"]

DIGITS = "0123456789"

# Longer digit runs saturate at MAX_MAGNITUDE, which is past any configurable level span.
MAX_MAGNITUDE_DIGITS = 6
MAX_MAGNITUDE = 10 ** MAX_MAGNITUDE_DIGITS


class OutOfRange(Exception):
    """Raised when an itinerary would take the lift past a level limit."""

    def __init__(self, bound: Bound, level: int) -> None:
        super().__init__(f"Itinerary goes too {bound} (level {level})")
        self.bound = bound
        self.level = level


class InvalidLabelInput(ValueError):
    """Raised when a label guess cannot be read as a floor number."""


# ── Tokenizer ──────────────────────────────────────────────


def _magnitude(digits: str) -> int:
    digits = digits.lstrip("0") or "0"
    if len(digits) > MAX_MAGNITUDE_DIGITS:
        return MAX_MAGNITUDE
    return int(digits)


def _classic_tokens(command: str) -> Iterator[tuple[Direction, int]]:
    directions = [d for d in map(Direction.from_symbol, command) if d is not None]
    for direction, run in groupby(directions):
        yield direction, sum(1 for _ in run)


def _numeric_tokens(command: str) -> Iterator[tuple[Direction, int]]:
    i = 0
    while i < len(command):
        direction = Direction.from_symbol(command[i])
        i += 1
        if direction is None:
            continue
        start = i
        while i < len(command) and command[i] in DIGITS:
            i += 1
        if i > start:
            yield direction, _magnitude(command[start:i])


def parse_itinerary(command: str, mode: InputMode) -> list[Leg]:
    """Convert a raw command string into an ordered list of legs."""
    tokens = _numeric_tokens(command) if mode is InputMode.NUMERIC else _classic_tokens(command)
    legs = [Leg(direction=d, magnitude=n) for d, n in tokens if n > 0]
    logger.debug("parsed %r (%s) into %d legs", command, mode.value, len(legs))
    return legs


# ── Bounds ─────────────────────────────────────────────────


def validate_itinerary(level: int, legs: Sequence[Leg], min_level: int, max_level: int) -> int:
    """Simulate the itinerary from `level` and return the final level.

    Raises OutOfRange on the first leg that ends outside [min_level, max_level].
    Legs are single-direction, so checking leg ends covers every floor visited.
    """
    running = level
    for leg in legs:
        running += leg.delta
        if running > max_level:
            raise OutOfRange("high", running)
        if running < min_level:
            raise OutOfRange("low", running)
    return running


# ── Label guesses ──────────────────────────────────────────


def parse_label_guess(text: str) -> int:
    """Read a floor-number guess.

    Accepts "3", "-2", "+4", "↑3", "↓2" and symbol-only forms like "↑↑↑" (3)
    or "↓↓" (-2). When digits are present they win over the symbol count and
    the sign comes from the last direction symbol before them.
    """
    text = "".join(text.split())
    if not text:
        raise InvalidLabelInput("Empty guess")

    sign = 1
    net = 0
    digits = ""
    for char in text:
        if char in DIGITS:
            digits += char
            continue
        direction = Direction.from_symbol(char)
        if direction is None:
            raise InvalidLabelInput(f"Unexpected character {char!r} in {text!r}")
        if digits:
            raise InvalidLabelInput(f"Direction after number in {text!r}")
        sign = direction.sign
        net += direction.sign

    if digits:
        if len(digits.lstrip("0")) > MAX_MAGNITUDE_DIGITS:
            raise InvalidLabelInput(f"Number too large in guess ({len(digits)} digits)")
        return sign * int(digits)
    return net
