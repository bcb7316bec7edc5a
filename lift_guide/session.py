"""One lift session: the lift, its keypad, the floor labels and the guide.

Everything that changes during play lives on a LiftSession: current level,
input mode, command buffer, labeled floors, mission state. Components get the
session passed in rather than reaching for module globals.
"""

from __future__ import annotations

import logging

from . import labels, motion
from .command_buffer import CommandBuffer
from .config import LiftSettings
from .floors import status_text
from .labels import LabelBoard
from .missions import MissionRunner
from .models import InputMode, SessionSnapshot
from .renderer import Renderer
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


class LiftSession:
    def __init__(
        self,
        renderer: Renderer,
        settings: LiftSettings | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.settings = settings or LiftSettings()
        self.renderer = renderer
        self.scheduler = scheduler or Scheduler(self.settings.time_scale)
        self.level = 0
        self.input_mode = InputMode.CLASSIC
        self.controls_enabled = True
        self.target: int | None = None
        self.buffer = CommandBuffer(renderer)
        self.labels = LabelBoard(renderer, self.settings.min_level, self.settings.max_level)
        self.missions = MissionRunner(self)

    def start(self, mission_state: str | None = None) -> None:
        """Draw the initial state and start (or resume) the guide."""
        self.renderer.report(self.level)
        self.show_level_status()
        self.buffer.clear()
        for level in self.labels.levels:
            self.renderer.show_floor_label(level, self.labels.text(level))
        self.missions.bootstrap(mission_state)

    # ── Player input ─────────────────────────────────────

    def press(self, token: str) -> None:
        if not self.controls_enabled:
            logger.debug("input %r ignored: lift is busy", token)
            return
        self.buffer.append(token)

    def clear_input(self) -> None:
        if self.controls_enabled:
            self.buffer.clear()

    async def go(self) -> bool:
        return await motion.start_journey(self)

    def submit_label(self) -> bool:
        return labels.submit_guess(self)

    # ── State changes ────────────────────────────────────

    def teleport(self, level: int, upgrade_input: bool = False) -> None:
        """Put the lift on `level` directly, switching to numeric input in the same step if asked.

        Numeric input never reverts to classic.
        """
        self.level = level
        if upgrade_input and self.input_mode is not InputMode.NUMERIC:
            self.input_mode = InputMode.NUMERIC
            logger.info("input mode upgraded to numeric")
        self.renderer.report(level)
        self.show_level_status()

    def show_level_status(self) -> None:
        self.renderer.show_status(status_text(self.level), "normal")

    def set_controls(self, enabled: bool) -> None:
        self.controls_enabled = enabled
        self.renderer.set_controls_enabled(enabled)

    def set_target(self, level: int | None) -> None:
        self.target = level
        self.renderer.set_target_highlight(level)

    def set_label_prompt(self, enabled: bool) -> None:
        if self.labels.awaiting_guess == enabled:
            return
        self.labels.awaiting_guess = enabled
        self.renderer.set_label_prompt(enabled)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            level=self.level,
            min_level=self.settings.min_level,
            max_level=self.settings.max_level,
            input_mode=self.input_mode,
            command=self.buffer.text,
            mission_state=self.missions.state,
            target=self.target,
            controls_enabled=self.controls_enabled,
            awaiting_guess=self.labels.awaiting_guess,
            labeled=sorted(self.labels.labeled),
            floors={level: self.labels.text(level) for level in self.labels.levels},
        )
