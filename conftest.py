import pytest

from lift_guide.config import LiftSettings
from lift_guide.scheduler import Scheduler
from lift_guide.session import LiftSession


class StubRenderer:
    """Records every renderer call so tests can assert on what was drawn."""

    def __init__(self) -> None:
        self.reports: list[int] = []
        self.statuses: list[tuple[str, str]] = []
        self.targets: list[int | None] = []
        self.controls: list[bool] = []
        self.guide: list[str] = []
        self.commands: list[str] = []
        self.floor_labels: dict[int, str] = {}
        self.label_prompts: list[bool] = []
        self.alerts: list[str] = []

    def report(self, level: int) -> None:
        self.reports.append(level)

    def show_status(self, text: str, style: str = "normal") -> None:
        self.statuses.append((text, style))

    def set_target_highlight(self, level: int | None) -> None:
        self.targets.append(level)

    def set_controls_enabled(self, enabled: bool) -> None:
        self.controls.append(enabled)

    def show_guide_message(self, html: str) -> None:
        self.guide.append(html)

    def show_command(self, text: str) -> None:
        self.commands.append(text)

    def show_floor_label(self, level: int, text: str) -> None:
        self.floor_labels[level] = text

    def set_label_prompt(self, enabled: bool) -> None:
        self.label_prompts.append(enabled)

    def alert(self, text: str) -> None:
        self.alerts.append(text)

    @property
    def status(self) -> str:
        return self.statuses[-1][0] if self.statuses else ""


class RecordingScheduler(Scheduler):
    """Instant scheduler that remembers every delay it was asked for."""

    def __init__(self) -> None:
        super().__init__(time_scale=0)
        self.waits: list[int] = []

    async def sleep(self, ms: int) -> None:
        self.waits.append(ms)
        await super().sleep(ms)


@pytest.fixture
def renderer() -> StubRenderer:
    return StubRenderer()


@pytest.fixture
def scheduler() -> RecordingScheduler:
    return RecordingScheduler()


@pytest.fixture
def settings() -> LiftSettings:
    return LiftSettings()


@pytest.fixture
def lift(renderer, scheduler, settings) -> LiftSession:
    """A session with no guide running yet; tests call lift.start() or set state."""
    return LiftSession(renderer, settings=settings, scheduler=scheduler)
