"""Guide missions: the scripted state machine that reacts to the lift.

Script (one state active at a time, strictly in this order):

  INTRO                narrative   how the keypad works
  MOVING_TO_ART        objective   reach level 2
  MOVING_TO_DINOSAURS  objective   reach level -5
  NUMBERS_INTRO        narrative   lift jumps to level 0 and numeric input unlocks
  MOVING_TO_SPACE      objective   reach level 6 with numeric input
  LABELING_INTRO       narrative   floor signs fall off (labeling starts)
  LABELING_TASK        objective   every floor labeled again
  COMPLETED            terminal

Objective states are checked by check_and_advance(), which the session calls
once after every finished journey and every correct label guess. A met goal
shows the success message, clears the highlight, and after the step's hold
delay enters the next state. Narrative states show their message and move on
by themselves after their own hold delay. A missed goal shows the retry
message (or the step's own miss handler) and changes nothing.

Resume: bootstrap("MOVING_TO_SPACE") jumps straight into a state after
putting the lift, input mode and floor labels where that state expects them.
Names match case-insensitively and ignore "_" and "-".
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .guide import build_context, render_message
from .models import MissionState

if TYPE_CHECKING:
    from .session import LiftSession

logger = logging.getLogger(__name__)

Action = Callable[["LiftSession"], None]
Goal = Callable[["LiftSession"], bool]


class UnknownMissionState(KeyError):
    """Raised for a mission state name that is not in the script."""


@dataclass(frozen=True)
class MissionStep:
    """One row of the mission transition table."""
    state: MissionState
    message: str
    target: int | None = None
    goal: Goal | None = None          # None = narrative state, advances by itself
    success: str = ""
    retry: str = ""
    on_miss: Action | None = None     # replaces the retry message when set
    on_enter: Action | None = None
    hold_ms: int = 0                  # delay before the next state
    resume_level: int = 0             # where the lift is when resuming here


def _at_target(level: int) -> Goal:
    return lambda session: session.level == level


def _unlock_numbers(session: LiftSession) -> None:
    session.teleport(0, upgrade_input=True)


def _start_labeling(session: LiftSession) -> None:
    session.labels.start()


def _labeling_miss(session: LiftSession) -> None:
    if session.labels.is_labeled(session.level):
        session.missions.say(
            "The <b>{{floor}}</b> already has its sign.<br>"
            "{{remaining}} floors left to find!"
        )
        return
    session.missions.say(
        "Which floor is this? 🤔<br><br>"
        "Type its number (like <b>{{up}}3</b> or <b>{{down}}2</b>) and press <b>LABEL</b>."
    )
    session.set_label_prompt(True)


SCRIPT: tuple[MissionStep, ...] = (
    MissionStep(
        state=MissionState.INTRO,
        message=(
            "Hello! I am your Guide. 👋<br><br>"
            "To go UP use <b>+</b>.<br>To go DOWN use <b>-</b>.<br>"
            "Then press <b>GO</b>."
        ),
        hold_ms=5000,
    ),
    MissionStep(
        state=MissionState.MOVING_TO_ART,
        message=(
            "Now, a task for you!<br><br>"
            "Please take the lift to the <b>{{target.name}} (Level {{target.signed}})</b>."
        ),
        target=2,
        goal=_at_target(2),
        success="🌟 Excellent work!<br>You reached the {{target.name}}!",
        retry=(
            "Not quite there yet.<br>"
            "I need you to go to <b>Level {{target.signed}}</b> ({{target.name}})."
        ),
        hold_ms=3000,
    ),
    MissionStep(
        state=MissionState.MOVING_TO_DINOSAURS,
        message=(
            "Let's go deep underground!<br><br>"
            "Take the lift down to the <b>{{target.name}} (Level {{target.signed}})</b>."
        ),
        target=-5,
        goal=_at_target(-5),
        success="🦕 Roar! You found the {{target.name}}!",
        retry=(
            "Keep going! The {{target.name}} is at <b>Level {{target.signed}}</b>.<br>"
            "You are on Level {{level}}."
        ),
        hold_ms=3000,
        resume_level=2,
    ),
    MissionStep(
        state=MissionState.NUMBERS_INTRO,
        message=(
            "Phew, that was a lot of button presses! 😅<br><br>"
            "I've brought you back to the <b>{{floor}}</b>.<br>"
            "From now on type an arrow and a number: <b>{{up}}6</b> goes up six floors, "
            "<b>{{down}}3</b> goes down three."
        ),
        on_enter=_unlock_numbers,
        hold_ms=6000,
        resume_level=-5,
    ),
    MissionStep(
        state=MissionState.MOVING_TO_SPACE,
        message=(
            "Blast off! 🚀<br><br>"
            "Use a number to reach the <b>{{target.name}} (Level {{target.signed}})</b> in one go."
        ),
        target=6,
        goal=_at_target(6),
        success="🚀 Touchdown!<br>Welcome to the {{target.name}}.",
        retry=(
            "Not quite.<br>The {{target.name}} is at <b>Level {{target.signed}}</b>. "
            "Try <b>{{up}}</b> and a number."
        ),
        hold_ms=3000,
    ),
    MissionStep(
        state=MissionState.LABELING_INTRO,
        message=(
            "Oh no! 😱 The floor signs have fallen off!<br><br>"
            "Visit every mystery floor <b>???</b>, type its number and press "
            "<b>LABEL</b> to put its sign back."
        ),
        on_enter=_start_labeling,
        hold_ms=5000,
        resume_level=6,
    ),
    MissionStep(
        state=MissionState.LABELING_TASK,
        message="{{remaining}} floors still need their signs. Off you go!",
        goal=lambda session: session.labels.complete,
        success="🏷️ Every floor has its sign back!",
        on_miss=_labeling_miss,
        hold_ms=3000,
        resume_level=6,
    ),
    MissionStep(
        state=MissionState.COMPLETED,
        message=(
            "🎉 Mission complete!<br><br>"
            "You are now a lift expert. Thanks for riding with me!"
        ),
    ),
)

STEPS: dict[MissionState, MissionStep] = {step.state: step for step in SCRIPT}
_ORDER: list[MissionState] = [step.state for step in SCRIPT]

# Every level the script targets or teleports to; configured bounds must include them.
SCRIPT_LEVELS: frozenset[int] = frozenset(
    {step.target for step in SCRIPT if step.target is not None}
    | {step.resume_level for step in SCRIPT}
    | {0}
)


def next_state(state: MissionState) -> MissionState | None:
    i = _ORDER.index(state)
    return _ORDER[i + 1] if i + 1 < len(_ORDER) else None


def parse_mission_state(name: str) -> MissionState:
    """Look up a state by name, ignoring case, "_" and "-"."""
    wanted = name.replace("_", "").replace("-", "").lower()
    for state in MissionState:
        if state.value.replace("_", "").lower() == wanted:
            return state
    raise UnknownMissionState(name)


class MissionRunner:
    def __init__(self, session: LiftSession) -> None:
        self._session = session
        self.state: MissionState | None = None
        self._advancing = False
        self._missed_check = False

    @property
    def step(self) -> MissionStep | None:
        return STEPS[self.state] if self.state is not None else None

    @property
    def target(self) -> int | None:
        return self.step.target if self.step is not None else None

    # ── Messages ─────────────────────────────────────────

    def say(self, template: str) -> None:
        session = self._session
        remaining = session.labels.remaining if session.labels.active else None
        ctx = build_context(session.level, target=self.target, remaining=remaining)
        session.renderer.show_guide_message(render_message(template, ctx))

    # ── Transitions ──────────────────────────────────────

    def check_and_advance(self) -> bool:
        """Evaluate the current goal. Returns True if a transition started.

        A check that arrives with no objective active (narrative state or a
        pending transition) is remembered and replayed when the next objective
        state is entered.
        """
        step = self.step
        if step is None or step.goal is None or self._advancing:
            if self.state is not MissionState.COMPLETED:
                self._missed_check = True
            return False

        if not step.goal(self._session):
            if step.on_miss is not None:
                step.on_miss(self._session)
            else:
                self.say(step.retry)
            return False

        logger.info("mission %s complete at level %d", step.state.value, self._session.level)
        self.say(step.success)
        if step.target is not None:
            self._session.set_target(None)
        self._advancing = True
        self._session.scheduler.spawn(self._advance_from(step))
        return True

    async def enter(self, state: MissionState) -> None:
        """Enter `state` and walk on through any narrative states after it."""
        step = self._activate(state)
        while step.goal is None:
            following = next_state(step.state)
            if following is None:
                self._missed_check = False
                return
            await self._session.scheduler.sleep(step.hold_ms)
            step = self._activate(following)
        if self._missed_check:
            self._missed_check = False
            self._catch_up(step)

    def _catch_up(self, step: MissionStep) -> None:
        # a plain miss stays silent so the new objective's message remains shown
        logger.debug("replaying goal check for %s at level %d", step.state.value, self._session.level)
        if step.goal(self._session):
            self.check_and_advance()
        elif step.on_miss is not None:
            step.on_miss(self._session)

    async def _advance_from(self, step: MissionStep) -> None:
        following = next_state(step.state)
        try:
            if following is not None:
                await self._session.scheduler.sleep(step.hold_ms)
        finally:
            self._advancing = False
        if following is not None:
            await self.enter(following)

    def _activate(self, state: MissionState) -> MissionStep:
        step = STEPS[state]
        if step.on_enter is not None:
            step.on_enter(self._session)
        self.state = state
        logger.info("mission state -> %s", state.value)
        self.say(step.message)
        self._session.set_target(step.target)
        return step

    # ── Bootstrap ────────────────────────────────────────

    def bootstrap(self, requested: str | None = None) -> None:
        """Start the script, or resume directly at a named state."""
        if requested:
            try:
                state = parse_mission_state(requested)
            except UnknownMissionState:
                logger.warning("Unknown missionState %r, starting from the beginning", requested)
            else:
                self.resume(state)
                return
        self._session.scheduler.call_later(
            self._session.settings.bootstrap_delay_ms,
            lambda: self.enter(MissionState.INTRO),
        )

    def resume(self, state: MissionState) -> None:
        """Enter `state` directly with its prerequisites in place."""
        session = self._session
        i = _ORDER.index(state)
        upgrade = i > _ORDER.index(MissionState.NUMBERS_INTRO)
        session.teleport(STEPS[state].resume_level, upgrade_input=upgrade)
        if i > _ORDER.index(MissionState.LABELING_INTRO):
            session.labels.start()
        if state is MissionState.COMPLETED:
            session.labels.reveal_all()

        logger.info("resuming mission at %s", state.value)
        step = self._activate(state)
        if step.goal is None and next_state(state) is not None:
            self._advancing = True
            session.scheduler.spawn(self._advance_from(step))
