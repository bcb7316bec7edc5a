"""Renderer: the boundary between the lift core and whatever draws it.

The session reports everything visible through an injected object matching
the Renderer protocol. Implementations decide how (or whether) to draw.

Two implementations are provided:

    EventLogRenderer: records every call as a RenderEvent. The HTTP API
                       serves this log to browser clients.
    LogRenderer:      writes every call to the logger. Used by the console
                       play mode in main.py.

Tests use StubRenderer (defined in conftest.py) instead.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from .models import RenderEvent, StatusStyle

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocol: every renderer must provide these calls
# ---------------------------------------------------------------------------

class Renderer(Protocol):
    def report(self, level: int) -> None: ...

    def show_status(self, text: str, style: StatusStyle = "normal") -> None: ...

    def set_target_highlight(self, level: int | None) -> None: ...

    def set_controls_enabled(self, enabled: bool) -> None: ...

    def show_guide_message(self, html: str) -> None: ...

    def show_command(self, text: str) -> None: ...

    def show_floor_label(self, level: int, text: str) -> None: ...

    def set_label_prompt(self, enabled: bool) -> None: ...

    def alert(self, text: str) -> None: ...


# ---------------------------------------------------------------------------
# EventLogRenderer: append-only event stream for API clients
# ---------------------------------------------------------------------------

class EventLogRenderer:
    """Keeps every renderer call as a numbered RenderEvent.

    Sequence numbers start at 1 and never repeat, so clients can poll with
    the last seq they saw.
    """

    def __init__(self) -> None:
        self.events: list[RenderEvent] = []

    def _record(self, kind: str, **data: Any) -> None:
        self.events.append(RenderEvent(seq=len(self.events) + 1, kind=kind, data=data))

    def since(self, seq: int) -> list[RenderEvent]:
        return self.events[max(seq, 0):]

    def report(self, level: int) -> None:
        self._record("report", level=level)

    def show_status(self, text: str, style: StatusStyle = "normal") -> None:
        self._record("status", text=text, style=style)

    def set_target_highlight(self, level: int | None) -> None:
        self._record("target", level=level)

    def set_controls_enabled(self, enabled: bool) -> None:
        self._record("controls", enabled=enabled)

    def show_guide_message(self, html: str) -> None:
        self._record("guide", html=html)

    def show_command(self, text: str) -> None:
        self._record("command", text=text)

    def show_floor_label(self, level: int, text: str) -> None:
        self._record("floor_label", level=level, text=text)

    def set_label_prompt(self, enabled: bool) -> None:
        self._record("label_prompt", enabled=enabled)

    def alert(self, text: str) -> None:
        self._record("alert", text=text)


# ---------------------------------------------------------------------------
# LogRenderer: console output through logging
# ---------------------------------------------------------------------------

class LogRenderer:
    """Logs each call at INFO. Floor moves and status churn go to DEBUG."""

    def report(self, level: int) -> None:
        logger.debug("lift at level %d", level)

    def show_status(self, text: str, style: StatusStyle = "normal") -> None:
        logger.info("[%s] %s", style, text)

    def set_target_highlight(self, level: int | None) -> None:
        if level is None:
            logger.info("target cleared")
        else:
            logger.info("target: level %d", level)

    def set_controls_enabled(self, enabled: bool) -> None:
        logger.debug("controls %s", "enabled" if enabled else "disabled")

    def show_guide_message(self, html: str) -> None:
        logger.info("Guide: %s", html.replace("<br>", " "))

    def show_command(self, text: str) -> None:
        logger.debug("command: %s", text)

    def show_floor_label(self, level: int, text: str) -> None:
        logger.debug("floor %d shows %r", level, text)

    def set_label_prompt(self, enabled: bool) -> None:
        if enabled:
            logger.info("type this floor's number and enter 'label'")

    def alert(self, text: str) -> None:
        logger.warning("ALERT: %s", text)
