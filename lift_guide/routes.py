"""FastAPI endpoints under /api.

One in-memory lift session per app. POST /session starts (or restarts) it;
the optional missionState query parameter resumes the guide at that state.
Everything the lift draws is recorded as numbered render events, which
clients poll from GET /session/events?since=<last seq>.
"""

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel

from .models import RenderEvent, SessionSnapshot
from .renderer import EventLogRenderer
from .session import LiftSession

router = APIRouter()


class InputBody(BaseModel):
    token: str


class JourneyResult(BaseModel):
    moved: bool
    session: SessionSnapshot


class GuessResult(BaseModel):
    correct: bool
    session: SessionSnapshot


def _session(request: Request) -> LiftSession:
    lift: LiftSession | None = request.app.state.lift
    if lift is None:
        raise HTTPException(404, "No lift session. POST /api/session first")
    return lift


def _events(request: Request) -> EventLogRenderer:
    _session(request)
    return request.app.state.events


@router.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


@router.post("/session")
async def start_session(
    request: Request,
    mission_state: str | None = Query(None, alias="missionState"),
) -> SessionSnapshot:
    """Start a fresh session, optionally resuming the guide at a mission state."""
    event_log = EventLogRenderer()
    lift = LiftSession(event_log, settings=request.app.state.settings)
    request.app.state.events = event_log
    request.app.state.lift = lift
    lift.start(mission_state)
    return lift.snapshot()


@router.get("/session")
async def get_session(request: Request) -> SessionSnapshot:
    """Current session state."""
    return _session(request).snapshot()


@router.post("/session/input")
async def press(request: Request, body: InputBody) -> SessionSnapshot:
    """Append a keypad token to the command buffer."""
    lift = _session(request)
    if not lift.controls_enabled:
        raise HTTPException(409, "Lift is moving")
    lift.press(body.token)
    return lift.snapshot()


@router.post("/session/clear")
async def clear(request: Request) -> SessionSnapshot:
    """Clear the command buffer."""
    lift = _session(request)
    if not lift.controls_enabled:
        raise HTTPException(409, "Lift is moving")
    lift.clear_input()
    return lift.snapshot()


@router.post("/session/go")
async def go(request: Request) -> JourneyResult:
    """Run the buffered command. Returns once the lift has stopped."""
    lift = _session(request)
    if not lift.controls_enabled:
        raise HTTPException(409, "Lift is moving")
    moved = await lift.go()
    return JourneyResult(moved=moved, session=lift.snapshot())


@router.post("/session/label")
async def label(request: Request) -> GuessResult:
    """Submit the buffered command as a guess for the current floor."""
    lift = _session(request)
    if not lift.controls_enabled:
        raise HTTPException(409, "Lift is moving")
    correct = lift.submit_label()
    return GuessResult(correct=correct, session=lift.snapshot())


@router.get("/session/events")
async def events(request: Request, since: int = 0) -> list[RenderEvent]:
    """Render events with seq greater than `since`."""
    return _events(request).since(since)
