"""Line wrapping for caption cues.

WHY: A cue must fit the screen: at most max_lines lines of at most
max_chars_per_line characters. Narration scripts mix Japanese (no
spaces) and Latin text, so wrapping cannot rely on word boundaries
alone.

HOW: Lines are cut one at a time. For each line the wrapper looks for
the latest admissible break point that keeps the line within the limit
and at least half full:
  - whitespace (the whitespace itself is dropped), or
  - comma-class or sentence-ending punctuation (kept on the line).
If there is none, the line is hard-cut at exactly max_chars_per_line.
Separators left at the start of the next line are discarded so no line
begins with a stray space or comma.

RULES:
- Text no longer than max_chars_per_line is returned unchanged.
- "." "," and ":" between two digits are not break points, so "3.14"
  and "1,000" stay on one line.
- wrap_text() and wrap_text_chunks() fall back to hard cuts when break
  points would need more than max_lines lines for text that fits
  max_lines * max_chars_per_line.
- wrap_text() keeps the first max_lines lines and drops the rest; the
  loss is logged at WARNING level.
- wrap_text_chunks() never drops text; it groups all lines into chunks
  of max_lines, one chunk per cue.
- Lengths are counted in characters (code points).
"""

import logging
from typing import List, Optional

from .segmenter import normalize_space

logger = logging.getLogger(__name__)

COMMA_MARKS = "、，,;；:："
SENTENCE_MARKS = "。！？．.!?"
BREAK_MARKS = COMMA_MARKS + SENTENCE_MARKS

# Not break points between two digits: 3.14, 1,000, 12:30.
DIGIT_SEPARATORS = ".,:．，："

# Stripped from the start of a continuation line.
_LEADING_SEPARATORS = " \t\r\n　、，,"


def _inside_number(text: str, i: int) -> bool:
    return (
        text[i] in DIGIT_SEPARATORS
        and i > 0
        and i + 1 < len(text)
        and text[i - 1].isdigit()
        and text[i + 1].isdigit()
    )


def _find_break(text: str, max_chars: int) -> Optional[int]:
    """Return the cut offset for the first line of text, or None.

    text must be longer than max_chars.
    """
    min_fill = max(1, (max_chars + 1) // 2)
    for cut in range(max_chars, min_fill - 1, -1):
        if text[cut].isspace():
            return cut
        if text[cut - 1] in BREAK_MARKS and not _inside_number(text, cut - 1):
            return cut
    return None


def wrap_lines(text: str, max_chars: int, soft: bool = True) -> List[str]:
    """Break text into lines of at most max_chars characters.

    With soft=False every line is hard-cut at max_chars, which yields the
    fewest possible lines.
    """
    text = text.strip()
    if not text:
        return []
    if len(text) <= max_chars:
        return [text]

    rest = normalize_space(text)
    lines = []  # type: List[str]
    while rest:
        if len(rest) <= max_chars:
            lines.append(rest)
            break
        cut = _find_break(rest, max_chars) if soft else None
        if cut is None:
            cut = max_chars
        line = rest[:cut].rstrip()
        rest = rest[cut:].lstrip(_LEADING_SEPARATORS)
        if line:
            lines.append(line)
    return lines


def _fit_lines(text: str, max_chars: int, max_lines: int) -> List[str]:
    lines = wrap_lines(text, max_chars)
    if len(lines) > max_lines and len(normalize_space(text)) <= max_chars * max_lines:
        # Break points cost too much width; hard cuts still fit.
        lines = wrap_lines(text, max_chars, soft=False)
    return lines


def wrap_text(text: str, max_chars: int, max_lines: int) -> str:
    """Wrap text into at most max_lines lines joined by "\\n".

    Lines beyond max_lines are truncated. Use wrap_text_chunks() to keep
    the overflow.
    """
    lines = _fit_lines(text, max_chars, max_lines)
    if len(lines) > max_lines:
        dropped = sum(len(line) for line in lines[max_lines:])
        logger.warning(
            "Truncated %d characters from an over-long cue starting %r",
            dropped, lines[0][:20],
        )
        lines = lines[:max_lines]
    return "\n".join(lines)


def wrap_text_chunks(text: str, max_chars: int, max_lines: int) -> List[str]:
    """Wrap text into as many cue texts as needed, each with <= max_lines lines."""
    lines = _fit_lines(text, max_chars, max_lines)
    return [
        "\n".join(lines[i:i + max_lines])
        for i in range(0, len(lines), max_lines)
    ]
