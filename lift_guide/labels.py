"""Floor labeling: the discovery mission.

When labeling starts the true floor names are captured once, a fixed set of
already-visited floors stays visible, and every other floor shows a
placeholder until the player stands on it and guesses its number.

Labeled floors only ever grow. The ground floor is labeled from the start.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from .floors import floor_name, level_prefix
from .itinerary import InvalidLabelInput, parse_label_guess
from .renderer import Renderer

if TYPE_CHECKING:
    from .session import LiftSession

logger = logging.getLogger(__name__)

PLACEHOLDER = "???"
INITIAL_REVEALED = (0, 2, -5, 6)


def format_label(level: int, name: str) -> str:
    return f"{level_prefix(level)} {name}"


class LabelBoard:
    def __init__(self, renderer: Renderer, min_level: int, max_level: int) -> None:
        self._renderer = renderer
        self.levels = range(min_level, max_level + 1)
        self.original: dict[int, str] = {}
        self.labeled: set[int] = {0}
        self.active = False
        self.awaiting_guess = False

    def start(self, initial: Iterable[int] = INITIAL_REVEALED) -> None:
        """Capture the true names, reveal the initial floors and mask the rest."""
        if self.active:
            return
        self.original = {level: floor_name(level) for level in self.levels}
        self.active = True
        self.labeled.update(level for level in initial if level in self.levels)
        for level in self.levels:
            self._renderer.show_floor_label(level, self.text(level))
        logger.info("labeling started with %d of %d floors known", len(self.labeled), len(self.levels))

    def reveal(self, level: int) -> None:
        self.labeled.add(level)
        self._renderer.show_floor_label(level, self.text(level))
        logger.info("floor %d labeled", level)

    def reveal_all(self) -> None:
        for level in self.levels:
            if level not in self.labeled:
                self.reveal(level)

    def text(self, level: int) -> str:
        """What a floor currently displays."""
        if not self.active:
            return floor_name(level)
        if level not in self.labeled:
            return PLACEHOLDER
        return format_label(level, self.original[level])

    def is_labeled(self, level: int) -> bool:
        return level in self.labeled

    @property
    def remaining(self) -> int:
        return len(self.levels) - len(self.labeled)

    @property
    def complete(self) -> bool:
        return len(self.labeled) == len(self.levels)


# ── Guess submission ───────────────────────────────────────

CORRECT_TEXT = "Correct! ✔"
WRONG_TEXT = "Not this floor! ✘"
RETRY_TEXT = "Guess this floor's number"
INVALID_TEXT = "Please type a floor number, like ↑3, ↓2 or 0."


def submit_guess(session: LiftSession) -> bool:
    """Check the command buffer as a guess for the current floor.

    Returns True for a correct guess. The buffer is cleared whatever happens.
    """
    board = session.labels
    if not session.controls_enabled or not board.awaiting_guess:
        logger.debug("label guess ignored: no guess expected")
        return False

    renderer = session.renderer
    try:
        guess = parse_label_guess(session.buffer.text)
    except InvalidLabelInput as e:
        logger.info("invalid label guess: %s", e)
        renderer.alert(INVALID_TEXT)
        session.buffer.clear()
        return False

    settings = session.settings
    if guess != session.level:
        renderer.show_status(WRONG_TEXT, "error")
        session.buffer.clear()
        session.scheduler.call_later(
            settings.label_retry_ms, lambda: renderer.show_status(RETRY_TEXT, "normal")
        )
        return False

    renderer.show_status(CORRECT_TEXT, "success")
    session.set_label_prompt(False)
    board.reveal(session.level)
    renderer.report(session.level)
    session.missions.check_and_advance()
    session.buffer.clear()
    session.scheduler.call_later(settings.label_success_ms, session.show_level_status)
    return True
