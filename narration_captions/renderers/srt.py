"""SubRip (SRT) renderer: the plain caption format.

Each cue becomes "<index>\\n<start> --> <end>\\n<text>\\n" with
HH:MM:SS,mmm timestamps; blocks are separated by one blank line.
Line breaks inside a cue are kept as-is.
"""

from typing import List, Optional

from narration_captions.config import HighlightConfig, StyleConfig
from narration_captions.models import Cue
from narration_captions.renderers.base import BaseRenderer
from narration_captions.timecode import format_srt_time


class SRTRenderer(BaseRenderer):
    """Renderer for .srt files."""

    @property
    def name(self) -> str:
        return "SubRip"

    @property
    def suffix(self) -> str:
        return ".srt"

    @property
    def media_type(self) -> str:
        return "application/x-subrip"

    def render(
        self,
        cues: List[Cue],
        style: Optional[StyleConfig] = None,
        highlight: Optional[HighlightConfig] = None,
    ) -> str:
        blocks = [
            "{}\n{} --> {}\n{}\n".format(
                cue.index,
                format_srt_time(cue.start),
                format_srt_time(cue.end),
                cue.text,
            )
            for cue in cues
        ]
        return "\n".join(blocks)

