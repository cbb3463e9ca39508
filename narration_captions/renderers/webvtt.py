"""WebVTT renderer: the web-caption format.

WHY: Browser players (HTML5 <track>) read WebVTT, not SRT. The two are
close, but WebVTT needs its header line, uses a dot before the
milliseconds and carries no cue numbers here.

HOW: A "WEBVTT" header and blank line, then one
"<start> --> <end>\\n<text>\\n" block per cue, blocks separated by a
blank line.

RULES:
- Timestamps are HH:MM:SS.mmm.
- Cue text is flattened to one line: line breaks become single spaces.
- No index numbers.
"""

from typing import List, Optional

from narration_captions.config import HighlightConfig, StyleConfig
from narration_captions.models import Cue
from narration_captions.renderers.base import BaseRenderer
from narration_captions.timecode import format_vtt_time

WEBVTT_HEADER = "WEBVTT"


class WebVTTRenderer(BaseRenderer):
    """Renderer for .vtt files."""

    @property
    def name(self) -> str:
        return "WebVTT"

    @property
    def suffix(self) -> str:
        return ".vtt"

    @property
    def media_type(self) -> str:
        return "text/vtt"

    def render(
        self,
        cues: List[Cue],
        style: Optional[StyleConfig] = None,
        highlight: Optional[HighlightConfig] = None,
    ) -> str:
        blocks = [
            "{} --> {}\n{}\n".format(
                format_vtt_time(cue.start),
                format_vtt_time(cue.end),
                " ".join(cue.text.split("\n")),
            )
            for cue in cues
        ]
        return WEBVTT_HEADER + "\n\n" + "\n".join(blocks)
