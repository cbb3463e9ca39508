"""Data models for the caption engine.

WHY: Every stage after packing works on the same unit, a timed caption
cue. Renderers only ever see finished Cue lists, so the model is the
stable contract between timing and output formatting.

HOW: Two dataclasses:
  Cue          : one displayable caption with index, wrapped text, timing
  CaptionTrack : the result of one engine run: cues plus renderings

RULES:
- Cue.text uses "\\n" as the internal line-break marker; renderers
  translate it into their own syntax.
- Times are float seconds from the start of the narration, never
  pre-formatted strings. Formatting happens only at render time.
- Cue.index is 1-based and sequential with no gaps.
"""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class Cue:
    """One timed caption unit.

    Attributes:
        index: 1-based ordinal within the track.
        text: Wrapped display text, lines separated by "\\n".
        start: Start offset in seconds.
        end: End offset in seconds (always greater than start).
    """
    index: int
    text: str
    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start

    @property
    def lines(self) -> List[str]:
        return self.text.split("\n")


@dataclass
class CaptionTrack:
    """The complete output of one engine invocation.

    Attributes:
        cues: Timed cues in display order.
        renderings: Rendered container strings keyed by format tag
            ("srt", "vtt", "ass").
        total_duration: End of the last cue in seconds, millisecond precise.
        generated_at: ISO-8601 UTC timestamp of the run.
    """
    cues: List[Cue]
    renderings: Dict[str, str] = field(default_factory=dict)
    total_duration: float = 0.0
    generated_at: str = ""
