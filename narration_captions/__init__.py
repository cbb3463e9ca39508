"""Caption synthesis engine for narrated video.

WHY: An automated video pipeline has a narration script but no
transcript timing. This package turns the script into time-coded
caption cues and renders them as SRT, WebVTT, or styled ASS, without
touching audio, files, or external tools.

HOW: The public entry points are synthesize(text, config) for the full
run and build_cues(text, config) for the cue list alone. Configuration
is a partial mapping merged over a named preset by resolve_config().

RULES:
- Preset names: "broadcast" (default), "social", "some" (alias).
- Format tags: "srt", "vtt", "ass".
- Fatal errors are EmptyInputError and InvalidConfigurationError, both
  subclasses of CaptionEngineError.
- Python 3.9 compatible (no match/case, no X | Y unions).
"""

from .config import (
    EngineConfig,
    HighlightConfig,
    LayoutConfig,
    StyleConfig,
    TimingConfig,
    load_config_file,
    resolve_config,
)
from .engine import build_cues, synthesize
from .errors import CaptionEngineError, EmptyInputError, InvalidConfigurationError
from .models import CaptionTrack, Cue
from .presets import PRESETS
from .renderers import RENDERERS, render_cues

__version__ = "0.1.0"

__all__ = [
    "synthesize",
    "build_cues",
    "render_cues",
    "resolve_config",
    "load_config_file",
    "EngineConfig",
    "LayoutConfig",
    "TimingConfig",
    "StyleConfig",
    "HighlightConfig",
    "Cue",
    "CaptionTrack",
    "PRESETS",
    "RENDERERS",
    "CaptionEngineError",
    "EmptyInputError",
    "InvalidConfigurationError",
]
