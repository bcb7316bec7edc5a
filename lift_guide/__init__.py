"""Lift Guide: a teaching lift with a scripted guide.

Play loop for one session:
  1. Keypad tokens collect in the command buffer ("+", "-", "↑", "↓", digits).
  2. GO parses the buffer into legs (classic: one symbol per floor; numeric:
     symbol + number), checks the whole itinerary against the level limits,
     then moves the lift one floor per step.
  3. After the lift stops the guide checks the current mission goal and
     either moves the script on or asks the player to try again.
  4. In the labeling mission, LABEL submits the buffer as a guess for the
     current floor's number; correct guesses put that floor's sign back.

The core never draws anything itself. It reports through a Renderer
(see renderer.py) and times everything through one Scheduler.
"""

from .config import LiftSettings, load_settings  # noqa: F401
from .itinerary import (  # noqa: F401
    InvalidLabelInput,
    OutOfRange,
    parse_itinerary,
    parse_label_guess,
    validate_itinerary,
)
from .missions import UnknownMissionState, parse_mission_state  # noqa: F401
from .models import Direction, InputMode, Leg, MissionState  # noqa: F401
from .renderer import EventLogRenderer, LogRenderer, Renderer  # noqa: F401
from .scheduler import Scheduler  # noqa: F401
from .session import LiftSession  # noqa: F401
