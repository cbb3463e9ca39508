"""Shared test fixtures for the narration_captions test suite.

WHY: Several test modules need the same small cue lists and scripts.
Centralizing them keeps expected renderings in one place.

HOW: Pytest fixtures provide a two-cue timed track (Japanese two-line
cue plus a Latin cue with an acronym and a year), a mixed-language
narration script, and the default resolved configuration.

RULES:
- Cue timings are chosen to be exact in both milliseconds and
  centiseconds so every format's timestamps are predictable.
- Fixtures return fresh objects on every call.
"""

from typing import List

import pytest

from narration_captions.config import EngineConfig, resolve_config
from narration_captions.models import Cue

MIXED_SCRIPT = (
    "こんにちは。今日は晴れです。\n"
    "2024年に始まったこのプロジェクトは、AIを使って動画を自動で作ります！？\n"
    "The pipeline reads a script, synthesizes narration, and renders captions. "
    "Each caption stays on screen long enough to read. Really?! Yes.\n"
    "最後に、字幕の長さは一行あたり四十二文字、最大二行までに制限されています。"
)


@pytest.fixture
def sample_cues() -> List[Cue]:
    """Two back-to-back cues: a wrapped Japanese cue and a Latin one."""
    return [
        Cue(index=1, text="こんにちは。\n今日は晴れです。", start=0.0, end=2.5),
        Cue(index=2, text="Hello WORLD 2024年", start=2.5, end=4.75),
    ]


@pytest.fixture
def mixed_script() -> str:
    return MIXED_SCRIPT


@pytest.fixture
def default_config() -> EngineConfig:
    return resolve_config()
