"""Cue timing from a reading-speed model.

WHY: The narration audio is synthesized separately, so cue timing has
to be estimated from the text alone: a cue stays on screen for as long
as it takes to read (or speak) its characters, within readable bounds.

HOW: One left-to-right pass with a running clock starting at 0. Each
cue's duration is its character count divided by the reading speed,
clamped to [min_cue_duration, max_cue_duration]. The cue starts where
the previous one ended.

RULES:
- Line-break markers do not count as characters.
- Cues are back-to-back: end(n) == start(n+1) exactly, since each start
  is the previous end value, not a recomputed sum.
- No randomness and no wall-clock dependency.
- fit_to_duration() rescales an estimated timeline onto a known audio
  length; the clamp bounds no longer apply to the scaled cues.
"""

from typing import Iterable, List

from .config import TimingConfig
from .errors import InvalidConfigurationError
from .models import Cue


def estimate_duration(text: str, timing: TimingConfig) -> float:
    """Return the clamped display duration for one cue text."""
    char_count = len(text.replace("\n", ""))
    raw = char_count / timing.reading_chars_per_second
    return min(timing.max_cue_duration, max(timing.min_cue_duration, raw))


def assign_timeline(texts: Iterable[str], timing: TimingConfig) -> List[Cue]:
    """Turn wrapped cue texts into indexed, timed cues.

    Args:
        texts: Wrapped cue texts in display order.
        timing: Reading speed and duration bounds.

    Returns:
        Cues with 1-based indices and back-to-back timing from 0.
    """
    cues = []  # type: List[Cue]
    clock = 0.0
    for index, text in enumerate(texts, 1):
        start = clock
        end = start + estimate_duration(text, timing)
        cues.append(Cue(index=index, text=text, start=start, end=end))
        clock = end
    return cues


def fit_to_duration(cues: List[Cue], audio_duration: float) -> List[Cue]:
    """Scale a timeline so the last cue ends at audio_duration.

    Returns new Cue objects; the input list is not modified.

    Raises:
        InvalidConfigurationError: If audio_duration is not positive.
    """
    if audio_duration <= 0:
        raise InvalidConfigurationError(
            "audio_duration must be positive, got {}".format(audio_duration)
        )
    if not cues:
        return []

    factor = audio_duration / cues[-1].end
    scaled = []  # type: List[Cue]
    clock = 0.0
    for cue in cues:
        start = clock
        end = cue.end * factor
        scaled.append(Cue(index=cue.index, text=cue.text, start=start, end=end))
        clock = end
    # Pin the final end exactly; scaling may leave float residue.
    scaled[-1].end = audio_duration
    return scaled
