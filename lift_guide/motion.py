"""Journeys: turn the pending command into floor-by-floor lift motion.

Journey flow:
  1. Parse the command buffer into legs. No legs → nothing happens.
  2. Check the whole itinerary against the level limits. Any breach → flash
     "Error: Too High!" / "Error: Too Low!", revert the status after a fixed
     delay, and leave the lift where it is.
  3. Disable controls and clear the buffer.
  4. Move one floor per step, reporting every floor and its level status,
     with a fixed delay per step and a shorter "Holding..." pause between legs.
  5. "Ding!", wait, restore the normal status, re-enable controls and let the
     mission script react exactly once.

There is no cancellation; once motion starts it runs to the end.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .itinerary import OutOfRange, parse_itinerary, validate_itinerary
from .models import Direction, Leg

if TYPE_CHECKING:
    from .session import LiftSession

logger = logging.getLogger(__name__)

MOVING_TEXT = {
    Direction.UP: "Going Up... ▲",
    Direction.DOWN: "Going Down... ▼",
}
HOLDING_TEXT = "Holding..."
ARRIVED_TEXT = "Ding! 🔔"
TOO_HIGH_TEXT = "Error: Too High!"
TOO_LOW_TEXT = "Error: Too Low!"


async def start_journey(session: LiftSession) -> bool:
    """Run the command in the buffer. Returns True if the lift moved."""
    if not session.controls_enabled:
        logger.debug("journey ignored: lift is busy")
        return False

    command = session.buffer.text
    legs = parse_itinerary(command, session.input_mode)
    if not legs:
        return False

    settings = session.settings
    try:
        validate_itinerary(session.level, legs, settings.min_level, settings.max_level)
    except OutOfRange as e:
        logger.warning("rejected %r from level %d: %s", command, session.level, e)
        session.renderer.show_status(TOO_HIGH_TEXT if e.bound == "high" else TOO_LOW_TEXT, "error")
        session.scheduler.call_later(settings.error_flash_ms, session.show_level_status)
        return False

    session.set_controls(False)
    session.buffer.clear()
    session.set_label_prompt(False)
    await run_itinerary(session, legs)
    return True


async def run_itinerary(session: LiftSession, legs: Sequence[Leg]) -> None:
    """Move through validated legs one floor at a time."""
    renderer = session.renderer
    settings = session.settings
    scheduler = session.scheduler
    logger.debug("journey from %d: %s", session.level, [(leg.direction.value, leg.magnitude) for leg in legs])

    for i, leg in enumerate(legs):
        step = leg.direction.sign
        for _ in range(leg.magnitude):
            renderer.show_status(MOVING_TEXT[leg.direction], "moving")
            session.level += step
            renderer.report(session.level)
            session.show_level_status()
            await scheduler.sleep(settings.step_delay_ms)

        if i < len(legs) - 1:
            renderer.show_status(HOLDING_TEXT, "holding")
            await scheduler.sleep(settings.leg_hold_ms)

    renderer.show_status(ARRIVED_TEXT, "arrived")
    await scheduler.sleep(settings.arrival_hold_ms)
    renderer.report(session.level)
    session.show_level_status()
    session.set_controls(True)
    logger.debug("journey ended at %d", session.level)

    session.missions.check_and_advance()
