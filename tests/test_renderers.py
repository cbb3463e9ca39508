"""Unit tests for the caption renderers.

WHY: Renderers produce the files video players and the compositor
read. SRT and WebVTT must match the container syntax byte for byte;
the ASS renderer must escape, highlight, and fade in a fixed order
without corrupting its own \\N line-break escapes.

HOW: Exact expected output for SRT and WebVTT from the shared two-cue
fixture; structural and per-line checks for ASS; registry lookups.

RULES:
- All tests use the sample_cues fixture from conftest.py unless the
  test needs specific cue text.
"""

import copy
import re

import pytest

from narration_captions.config import HighlightConfig, StyleConfig
from narration_captions.errors import InvalidConfigurationError
from narration_captions.models import Cue
from narration_captions.presets import FORMAT_TAGS
from narration_captions.renderers import RENDERERS, get_renderer, render_cues
from narration_captions.renderers.ass import ASSRenderer, build_event_text
from narration_captions.renderers.srt import SRTRenderer
from narration_captions.renderers.webvtt import WebVTTRenderer

HIGHLIGHT_ON = HighlightConfig(enabled=True)


def _dialogue_lines(ass):
    return [line for line in ass.split("\n") if line.startswith("Dialogue: ")]


class TestSRTRenderer:

    def test_exact_output(self, sample_cues):
        assert SRTRenderer().render(sample_cues) == (
            "1\n"
            "00:00:00,000 --> 00:00:02,500\n"
            "こんにちは。\n今日は晴れです。\n"
            "\n"
            "2\n"
            "00:00:02,500 --> 00:00:04,750\n"
            "Hello WORLD 2024年\n"
        )

    def test_empty_cue_list(self):
        assert SRTRenderer().render([]) == ""


class TestWebVTTRenderer:

    def test_exact_output(self, sample_cues):
        assert WebVTTRenderer().render(sample_cues) == (
            "WEBVTT\n"
            "\n"
            "00:00:00.000 --> 00:00:02.500\n"
            "こんにちは。 今日は晴れです。\n"
            "\n"
            "00:00:02.500 --> 00:00:04.750\n"
            "Hello WORLD 2024年\n"
        )

    def test_no_index_numbers(self, sample_cues):
        lines = WebVTTRenderer().render(sample_cues).split("\n")
        assert "1" not in lines
        assert "2" not in lines


class TestASSHeader:

    def test_sections_present(self, sample_cues):
        ass = ASSRenderer().render(sample_cues, StyleConfig())
        for section in ("[Script Info]", "[V4+ Styles]", "[Events]"):
            assert section in ass
        assert "ScriptType: v4.00+" in ass

    def test_exactly_one_style(self, sample_cues):
        ass = ASSRenderer().render(sample_cues, StyleConfig())
        styles = [line for line in ass.split("\n") if line.startswith("Style: ")]
        assert styles == [
            "Style: Default,Noto Sans CJK JP,48,&H00FFFFFF,&H000000FF,&H00000000,"
            "&H80000000,-1,0,0,0,100,100,0,0,1,3,1,2,40,40,60,1"
        ]

    def test_play_resolution(self):
        ass = ASSRenderer().render([], StyleConfig(play_res_x=1080, play_res_y=1920))
        assert "PlayResX: 1080" in ass
        assert "PlayResY: 1920" in ass


class TestASSEvents:

    def test_one_dialogue_per_cue(self, sample_cues):
        ass = ASSRenderer().render(sample_cues, StyleConfig())
        assert len(_dialogue_lines(ass)) == 2

    def test_dialogue_line(self, sample_cues):
        first = _dialogue_lines(ASSRenderer().render(sample_cues, StyleConfig()))[0]
        assert first == (
            "Dialogue: 0,0:00:00.00,0:00:02.50,Default,,40,40,60,,"
            "{\\fad(200,200)}こんにちは。\\N今日は晴れです。"
        )

    def test_escapes_backslash_and_braces(self):
        event = build_event_text("a{b}\\c", StyleConfig(), None)
        assert event == "{\\fad(200,200)}a\\{b\\}\\\\c"

    def test_line_break_escape_not_reescaped(self):
        event = build_event_text("上\n下", StyleConfig(), None)
        assert event.endswith("上\\N下")
        assert "\\\\N" not in event

    def test_margins_rounded_and_clamped(self):
        style = StyleConfig(margin_l=10.5, margin_r=-3, margin_v=59.4)
        ass = ASSRenderer().render([Cue(1, "x", 0.0, 1.0)], style)
        assert ",Default,,11,0,59,," in _dialogue_lines(ass)[0]
        assert re.search(r",11,0,59,1$", ass.split("\n")[10])

    def test_fade_durations_rounded(self):
        event = build_event_text("x", StyleConfig(fade_in=150.4, fade_out=0), None)
        assert event == "{\\fad(150,0)}x"

    def test_default_style_when_none(self, sample_cues):
        assert ASSRenderer().render(sample_cues) == ASSRenderer().render(sample_cues, StyleConfig())


class TestASSHighlight:

    def test_year_highlighted(self):
        event = build_event_text("2024年に開始", StyleConfig(), HIGHLIGHT_ON)
        assert event == "{\\fad(200,200)}{\\c&H00FFFF&}2024年{\\c&HFFFFFF&}に開始"

    def test_acronyms_highlighted_single_capital_not(self):
        event = build_event_text("NASA and AI, not A", StyleConfig(), HIGHLIGHT_ON)
        assert "{\\c&H00FFFF&}NASA{\\c&HFFFFFF&}" in event
        assert "{\\c&H00FFFF&}AI{\\c&HFFFFFF&}" in event
        assert event.endswith("not A")

    def test_full_width_digits(self):
        event = build_event_text("第３回", StyleConfig(), HIGHLIGHT_ON)
        assert "{\\c&H00FFFF&}３回{\\c&HFFFFFF&}" in event

    def test_no_match_is_noop(self):
        assert build_event_text("no match here", StyleConfig(), HIGHLIGHT_ON) == (
            "{\\fad(200,200)}no match here"
        )

    def test_disabled(self):
        event = build_event_text("2024年", StyleConfig(), HighlightConfig(enabled=False))
        assert "\\c" not in event

    def test_match_never_spans_line_break(self):
        event = build_event_text("ABC\nDEF", StyleConfig(), HIGHLIGHT_ON)
        assert event == (
            "{\\fad(200,200)}"
            "{\\c&H00FFFF&}ABC{\\c&HFFFFFF&}"
            "\\N"
            "{\\c&H00FFFF&}DEF{\\c&HFFFFFF&}"
        )

    def test_custom_pattern_and_color(self):
        highlight = HighlightConfig(enabled=True, pattern=re.compile("晴れ"), color="&H000000FF")
        event = build_event_text("今日は晴れです", StyleConfig(), highlight)
        assert "{\\c&H0000FF&}晴れ{\\c&HFFFFFF&}" in event


class TestRendererContract:

    @pytest.mark.parametrize("fmt", FORMAT_TAGS)
    def test_idempotent(self, sample_cues, fmt):
        first = render_cues(sample_cues, fmt, StyleConfig(), HIGHLIGHT_ON)
        second = render_cues(sample_cues, fmt, StyleConfig(), HIGHLIGHT_ON)
        assert first == second

    @pytest.mark.parametrize("fmt", FORMAT_TAGS)
    def test_does_not_mutate_cues(self, sample_cues, fmt):
        before = copy.deepcopy(sample_cues)
        render_cues(sample_cues, fmt, StyleConfig(), HIGHLIGHT_ON)
        assert sample_cues == before

    def test_registry_matches_format_tags(self):
        assert set(RENDERERS) == set(FORMAT_TAGS)

    def test_lookup_is_case_insensitive(self, sample_cues):
        assert render_cues(sample_cues, "SRT") == SRTRenderer().render(sample_cues)

    def test_unknown_format_raises(self):
        with pytest.raises(InvalidConfigurationError, match="Unknown caption format"):
            get_renderer("txt")

    @pytest.mark.parametrize("fmt,suffix", [("srt", ".srt"), ("vtt", ".vtt"), ("ass", ".ass")])
    def test_suffixes(self, fmt, suffix):
        assert get_renderer(fmt).suffix == suffix
