"""Handlebars rendering for guide messages.

Templates carry their own markup (<b>, <br>); context values are escaped.
"""

from collections.abc import Callable
from typing import Any

import pybars

from .floors import floor_name, signed_level
from .models import DOWN_SYMBOLS, UP_SYMBOLS

_compiler = pybars.Compiler()
_cache: dict[str, Callable] = {}


class GuideTemplateError(Exception):
    """Raised when a guide template fails to compile or render."""


def render_message(template_str: str, context: dict[str, Any]) -> str:
    """Compile and render a guide template with the given context.

    Templates are cached by source string to avoid recompilation.
    """
    try:
        compiled = _cache.get(template_str)
        if compiled is None:
            compiled = _compiler.compile(template_str)
            _cache[template_str] = compiled
        return str(compiled(context))
    except Exception as e:
        raise GuideTemplateError(f"Template error: {e}") from e


def build_context(
    level: int,
    target: int | None = None,
    remaining: int | None = None,
) -> dict[str, Any]:
    """Assemble template variables from session state."""
    ctx: dict[str, Any] = {
        "level": signed_level(level),
        "floor": floor_name(level),
        "up": UP_SYMBOLS[-1],
        "down": DOWN_SYMBOLS[-1],
    }
    if target is not None:
        ctx["target"] = {
            "level": target,
            "signed": signed_level(target),
            "name": floor_name(target),
        }
    if remaining is not None:
        ctx["remaining"] = remaining
    return ctx
