"""Sentence segmentation for narration scripts.

WHY: Captions read best when cue boundaries fall on sentence ends. The
packer therefore works on sentence-like fragments rather than raw
characters, and needs them in reading order.

HOW: A single regex finds terminal spans (runs of sentence-ending marks
plus any closing quotes/brackets, or a newline). Text between the
previous boundary and the end of each terminal span becomes one
fragment, with inner whitespace collapsed.

RULES:
- Japanese marks 。！？． always end a sentence.
- Latin . ! ? end a sentence only when followed by whitespace, another
  terminal mark, a closing quote/bracket, or end of text, so "3.14"
  and "v1.2" stay intact.
- "!?" and "。」" attach to the preceding fragment; they are never split.
- Empty fragments (whitespace between two newlines) are dropped.
- Empty input raises EmptyInputError immediately, not on first next().
"""

import re
from typing import Iterator

from .errors import EmptyInputError

CJK_TERMINALS = "。！？．"
LATIN_TERMINALS = ".!?"
CLOSERS = "」』）)\"'”’"

_TERMINAL_RE = re.compile(
    r"(?:[{cjk}]|[{latin}](?=[\s{cjk}{latin}{closers}]|$))+[{closers}]*|\n".format(
        cjk=re.escape(CJK_TERMINALS),
        latin=re.escape(LATIN_TERMINALS),
        closers=re.escape(CLOSERS),
    )
)


def normalize_space(s: str) -> str:
    """Collapse runs of whitespace to one space and strip the ends."""
    return " ".join(s.split())


def split_sentences(text: str) -> Iterator[str]:
    """Split narration text into ordered, trimmed sentence fragments.

    Args:
        text: The full narration script.

    Returns:
        A one-shot iterator of non-empty fragments.

    Raises:
        EmptyInputError: If text is empty or whitespace-only.
    """
    if not text or not text.strip():
        raise EmptyInputError("Narration text is empty")
    return _iter_fragments(text)


def _iter_fragments(text: str) -> Iterator[str]:
    pos = 0
    for match in _TERMINAL_RE.finditer(text):
        fragment = normalize_space(text[pos:match.end()])
        pos = match.end()
        if fragment:
            yield fragment

    tail = normalize_space(text[pos:])
    if tail:
        yield tail
