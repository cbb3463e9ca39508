"""Caption renderer registry: one entry per container format.

WHY: The engine and CLI select output formats by a short tag taken from
configuration ("srt", "vtt", "ass"). A central dict keeps the set of
formats closed and makes adding one a one-line change.

HOW: RENDERERS maps tags to renderer *classes* (not instances).
render_cues() instantiates the class for a tag and runs it.

RULES:
- Keys match presets.FORMAT_TAGS, which the config schema validates.
- Every renderer listed here must be importable without side effects.
- Unknown tags raise InvalidConfigurationError.
"""

from typing import Dict, List, Optional, Type

from narration_captions.config import HighlightConfig, StyleConfig
from narration_captions.errors import InvalidConfigurationError
from narration_captions.models import Cue
from narration_captions.renderers.ass import ASSRenderer
from narration_captions.renderers.base import BaseRenderer
from narration_captions.renderers.srt import SRTRenderer
from narration_captions.renderers.webvtt import WebVTTRenderer

RENDERERS: Dict[str, Type[BaseRenderer]] = {
    "srt": SRTRenderer,
    "vtt": WebVTTRenderer,
    "ass": ASSRenderer,
}


def get_renderer(fmt: str) -> BaseRenderer:
    """Return a renderer instance for a format tag."""
    try:
        return RENDERERS[fmt.lower()]()
    except KeyError:
        raise InvalidConfigurationError(
            "Unknown caption format '{}'. Available: {}".format(
                fmt, ", ".join(RENDERERS.keys())
            )
        ) from None


def render_cues(
    cues: List[Cue],
    fmt: str,
    style: Optional[StyleConfig] = None,
    highlight: Optional[HighlightConfig] = None,
) -> str:
    """Render cues in the format named by fmt."""
    return get_renderer(fmt).render(cues, style=style, highlight=highlight)


__all__ = [
    "RENDERERS",
    "BaseRenderer",
    "SRTRenderer",
    "WebVTTRenderer",
    "ASSRenderer",
    "get_renderer",
    "render_cues",
]
