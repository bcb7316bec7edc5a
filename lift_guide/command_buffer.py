"""Pending command string typed on the lift keypad."""

from .renderer import Renderer

EMPTY_DISPLAY = "_"


class CommandBuffer:
    def __init__(self, renderer: Renderer) -> None:
        self._renderer = renderer
        self._text = ""

    @property
    def text(self) -> str:
        return self._text

    def append(self, token: str) -> None:
        self._text += token
        self._refresh()

    def clear(self) -> None:
        self._text = ""
        self._refresh()

    def _refresh(self) -> None:
        self._renderer.show_command(self._text or EMPTY_DISPLAY)
