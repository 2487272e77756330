"""Handlebars rendering for persona framing.

The framing is the system instruction sent with every remote dialogue
request. Templates are plain Handlebars so they can be overridden per
persona without touching code.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import pybars

if TYPE_CHECKING:
    from pausepaws.personas import Persona

_compiler = pybars.Compiler()
_cache: dict[str, Callable] = {}

DEFAULT_FRAMING_TEMPLATE = (
    "You are {{name}}. Reduce stress/burnout. 2-5 word sentences. "
    "{{name}} the {{species}}: {{tone}} "
    "Use {{#join emojis}}{{/join}}. "
    "NEVER mention API/tech."
)


class PromptError(Exception):
    """Raised when a Handlebars template fails to compile or render."""


def _helper_join(this, options, items, sep=", "):
    """{{#join list}}{{/join}} — items joined with ", " (or a custom separator)."""
    return [str(sep).join(str(i) for i in items)]


_HELPERS: dict[str, Callable] = {
    "join": _helper_join,
}


def render_prompt(template_str: str, context: dict[str, Any]) -> str:
    """Compile and render a Handlebars template with the given context.

    Templates are cached by source string to avoid recompilation.
    """
    try:
        compiled = _cache.get(template_str)
        if compiled is None:
            compiled = _compiler.compile(template_str)
            _cache[template_str] = compiled
        return str(compiled(context, helpers=_HELPERS))
    except Exception as e:
        raise PromptError(f"Template error: {e}") from e


def build_framing(persona: Persona) -> str:
    """Render the persona's system framing for the dialogue service."""
    template = persona.framing_template or DEFAULT_FRAMING_TEMPLATE
    return render_prompt(template, {
        "name": persona.name,
        "species": persona.species,
        "tone": persona.tone,
        "emojis": list(persona.emojis),
    })
