"""Tests for the floor labeling mission: the label board and guess submission."""

import pytest

from lift_guide.labels import (
    CORRECT_TEXT,
    INVALID_TEXT,
    PLACEHOLDER,
    RETRY_TEXT,
    WRONG_TEXT,
    LabelBoard,
    format_label,
)
from lift_guide.models import MissionState


# ── LabelBoard ─────────────────────────────────────────────


@pytest.fixture
def board(renderer) -> LabelBoard:
    return LabelBoard(renderer, -5, 6)


def test_ground_floor_labeled_from_the_start(board):
    assert board.labeled == {0}
    assert not board.active


def test_names_visible_before_labeling(board):
    assert board.text(3) == "Cinema"


def test_start_masks_unvisited_floors(board, renderer):
    board.start()
    assert board.labeled == {0, 2, -5, 6}
    assert board.text(3) == PLACEHOLDER
    assert renderer.floor_labels[3] == PLACEHOLDER
    assert renderer.floor_labels[2] == "↑2 Art Centre"
    assert renderer.floor_labels[-5] == "↓5 Dinosaur Museum"
    assert renderer.floor_labels[0] == "0 Ground Floor"


@pytest.mark.parametrize("level, prefix, name", [
    (3, "↑3", "Cinema"),
    (-2, "↓2", "Aquarium"),
    (1, "↑1", "Toy Shop"),
])
def test_reveal_shows_prefix_and_original_name(board, renderer, level, prefix, name):
    board.start()
    assert board.text(level) == PLACEHOLDER
    board.reveal(level)
    assert board.text(level) == f"{prefix} {name}"
    assert renderer.floor_labels[level] == f"{prefix} {name}"


def test_original_names_captured_once(board):
    board.start()
    snapshot = dict(board.original)
    board.start()
    assert board.original == snapshot
    assert len(board.original) == 12


def test_complete_when_every_floor_labeled(board):
    board.start()
    assert board.remaining == 8
    board.reveal_all()
    assert board.remaining == 0
    assert board.complete


def test_format_label_ground():
    assert format_label(0, "Ground Floor") == "0 Ground Floor"


# ── Guess submission ───────────────────────────────────────


async def _ride(lift, command: str) -> None:
    lift.press(command)
    await lift.go()


@pytest.mark.asyncio
async def test_unlabeled_floor_prompts_for_guess(lift, renderer):
    lift.start("LABELING_TASK")
    await _ride(lift, "↓3")

    assert lift.level == 3
    assert lift.labels.awaiting_guess
    assert renderer.label_prompts[-1] is True
    assert "Which floor is this?" in renderer.guide[-1]


@pytest.mark.asyncio
async def test_labeled_floor_asks_to_keep_exploring(lift, renderer):
    lift.start("LABELING_TASK")
    await _ride(lift, "↓4")

    assert lift.level == 2
    assert not lift.labels.awaiting_guess
    assert "already has its sign" in renderer.guide[-1]
    assert "8 floors left" in renderer.guide[-1]


@pytest.mark.asyncio
async def test_correct_guess_reveals_floor(lift, renderer, scheduler):
    lift.start("LABELING_TASK")
    await _ride(lift, "↓3")
    lift.press("3")

    assert lift.submit_label() is True
    assert (CORRECT_TEXT, "success") in renderer.statuses
    assert lift.labels.is_labeled(3)
    assert renderer.floor_labels[3] == "↑3 Cinema"
    assert renderer.reports[-1] == 3
    assert lift.buffer.text == ""
    assert not lift.labels.awaiting_guess
    assert renderer.label_prompts[-1] is False

    await scheduler.drain()
    assert 2000 in scheduler.waits
    assert renderer.status == "Level: +3"


@pytest.mark.asyncio
async def test_arrow_guess_accepted(lift):
    lift.start("LABELING_TASK")
    await _ride(lift, "↓8")
    lift.press("↓2")
    assert lift.submit_label() is True
    assert lift.labels.is_labeled(-2)


@pytest.mark.asyncio
async def test_wrong_guess_keeps_floor_hidden(lift, renderer, scheduler):
    lift.start("LABELING_TASK")
    await _ride(lift, "↓3")
    lift.press("4")

    assert lift.submit_label() is False
    assert renderer.statuses[-1] == (WRONG_TEXT, "error")
    assert not lift.labels.is_labeled(3)
    assert lift.buffer.text == ""
    assert lift.labels.awaiting_guess

    await scheduler.drain()
    assert 1000 in scheduler.waits
    assert renderer.statuses[-1] == (RETRY_TEXT, "normal")


@pytest.mark.asyncio
async def test_invalid_guess_alerts_without_side_effects(lift, renderer):
    lift.start("LABELING_TASK")
    await _ride(lift, "↓3")
    labeled_before = set(lift.labels.labeled)
    lift.press("abc")

    assert lift.submit_label() is False
    assert renderer.alerts == [INVALID_TEXT]
    assert lift.buffer.text == ""
    assert lift.labels.labeled == labeled_before
    assert lift.labels.awaiting_guess


@pytest.mark.asyncio
async def test_guess_ignored_when_none_expected(lift, renderer):
    lift.start("LABELING_TASK")
    lift.press("6")
    assert lift.submit_label() is False
    assert lift.buffer.text == "6"
    assert renderer.alerts == []


@pytest.mark.asyncio
async def test_moving_away_withdraws_prompt(lift):
    lift.start("LABELING_TASK")
    await _ride(lift, "↓3")
    assert lift.labels.awaiting_guess
    await _ride(lift, "↓1")
    assert lift.level == 2
    assert not lift.labels.awaiting_guess


@pytest.mark.asyncio
async def test_labeling_every_floor_completes_the_mission(lift, renderer, scheduler):
    lift.start("LABELING_TASK")
    for level in range(-5, 7):
        if lift.labels.is_labeled(level):
            continue
        diff = level - lift.level
        await _ride(lift, f"↑{diff}" if diff > 0 else f"↓{-diff}")
        lift.press(str(level))
        assert lift.submit_label() is True

    assert lift.labels.complete
    assert "Every floor has its sign back" in renderer.guide[-1]

    await scheduler.drain()
    assert lift.missions.state is MissionState.COMPLETED
    assert "Mission complete" in renderer.guide[-1]


@pytest.mark.asyncio
async def test_huge_number_guess_alerts(lift, renderer):
    lift.start("LABELING_TASK")
    await _ride(lift, "↓3")
    lift.press("9" * 5000)

    assert lift.submit_label() is False
    assert renderer.alerts == [INVALID_TEXT]
    assert lift.buffer.text == ""
    assert lift.labels.awaiting_guess
