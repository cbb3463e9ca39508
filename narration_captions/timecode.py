"""Timestamp codec for the three caption container formats.

WHY: Cue timing is kept as float seconds internally. Each container
wants its own timestamp shape, and the plain format needs to be parsed
back so the total narration length can be recomputed from what was
actually written.

HOW: Seconds are rounded once to an integer count of the smallest unit
(milliseconds or centiseconds) and then split with divmod, which avoids
the float drift of computing `seconds % 1`.

RULES:
- SRT:  HH:MM:SS,mmm   (comma, milliseconds)
- VTT:  HH:MM:SS.mmm   (dot, milliseconds)
- ASS:  H:MM:SS.CC     (one-digit hours, centiseconds; precision loss
  below 10 ms is expected for this format)
- Negative input is clamped to zero.
"""

import re
from typing import Tuple

SRT_TIME_RE = re.compile(r"^\s*(\d+):([0-5]\d):([0-5]\d),(\d{3})\s*$")


def _split_units(seconds: float, units_per_second: int) -> Tuple[int, int, int, int]:
    """Return (hours, minutes, seconds, fraction) for a rounded timestamp."""
    total = int(round(max(0.0, seconds) * units_per_second))
    whole, fraction = divmod(total, units_per_second)
    hours, rest = divmod(whole, 3600)
    minutes, secs = divmod(rest, 60)
    return hours, minutes, secs, fraction


def format_srt_time(seconds: float) -> str:
    """Convert seconds to SRT timestamp format: HH:MM:SS,mmm"""
    h, m, s, ms = _split_units(seconds, 1000)
    return "{:02d}:{:02d}:{:02d},{:03d}".format(h, m, s, ms)


def format_vtt_time(seconds: float) -> str:
    """Convert seconds to WebVTT timestamp format: HH:MM:SS.mmm"""
    h, m, s, ms = _split_units(seconds, 1000)
    return "{:02d}:{:02d}:{:02d}.{:03d}".format(h, m, s, ms)


def format_ass_time(seconds: float) -> str:
    """Convert seconds to ASS timestamp format: H:MM:SS.CC"""
    h, m, s, cs = _split_units(seconds, 100)
    return "{:d}:{:02d}:{:02d}.{:02d}".format(h, m, s, cs)


def parse_srt_time(timestamp: str) -> float:
    """Parse an SRT timestamp (HH:MM:SS,mmm) back into seconds.

    Raises:
        ValueError: If the string is not a plain-format timestamp.
    """
    match = SRT_TIME_RE.match(timestamp)
    if not match:
        raise ValueError("Not an SRT timestamp: {!r}".format(timestamp))
    hours, minutes, secs, millis = (int(g) for g in match.groups())
    return (hours * 3600 + minutes * 60 + secs) + millis / 1000.0
