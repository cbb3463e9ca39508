"""Greedy packing of sentence fragments into caption cues.

WHY: Viewers read whole sentences more easily than sentence pieces, so
cues are built from whole fragments wherever the layout budget allows.
The budget is max_chars_per_line * max_lines characters per cue.

HOW: Fragments are appended to a growing buffer. When the next fragment
would push the buffer over the budget, the buffer is closed as a cue
and the fragment starts a new one. Closed buffers are handed to the
line wrapper.

RULES:
- The final non-empty buffer is always closed; no fragment is lost at
  the boundary.
- A fragment longer than the budget sits alone in its own cue and is
  left to the wrapper; the packer never splits a fragment.
- Fragments are joined without a separator when either side of the
  boundary is a full-width (CJK) character, otherwise with one space.
- overflow="truncate": one cue per buffer, over-long text is cut.
  overflow="split": an over-long buffer becomes several cues.
"""

import unicodedata
from typing import Iterable, List

from .config import LayoutConfig
from .wrapper import wrap_text, wrap_text_chunks


def _is_wide(ch: str) -> bool:
    return unicodedata.east_asian_width(ch) in ("W", "F")


def join_fragments(left: str, right: str) -> str:
    """Join two fragments with the separator appropriate to the script."""
    if not left:
        return right
    if _is_wide(left[-1]) or _is_wide(right[0]):
        return left + right
    return left + " " + right


def group_fragments(fragments: Iterable[str], budget: int) -> List[List[str]]:
    """Group fragments greedily so each group's joined text fits budget.

    Args:
        fragments: Ordered sentence fragments.
        budget: Maximum characters per cue.

    Returns:
        List of fragment groups, one per cue, in order.
    """
    groups = []  # type: List[List[str]]
    current = []  # type: List[str]
    buffer = ""

    for fragment in fragments:
        candidate = join_fragments(buffer, fragment)
        if current and len(candidate) > budget:
            groups.append(current)
            current = [fragment]
            buffer = fragment
        else:
            current.append(fragment)
            buffer = candidate

    if current:
        groups.append(current)
    return groups


def pack_cues(fragments: Iterable[str], layout: LayoutConfig) -> List[str]:
    """Pack fragments into wrapped cue texts.

    Returns:
        Cue texts in order, lines separated by "\\n".
    """
    texts = []  # type: List[str]
    for group in group_fragments(fragments, layout.budget):
        raw = ""
        for fragment in group:
            raw = join_fragments(raw, fragment)

        if layout.overflow == "split":
            texts.extend(wrap_text_chunks(raw, layout.max_chars_per_line, layout.max_lines))
        else:
            texts.append(wrap_text(raw, layout.max_chars_per_line, layout.max_lines))
    return texts
