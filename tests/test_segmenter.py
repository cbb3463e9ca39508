"""Unit tests for sentence segmentation.

WHY: Fragment boundaries decide where cues can break. Splitting inside
a number or detaching "!?" from its sentence shows up directly on screen.

HOW: Japanese, Latin, and mixed inputs with known fragment lists, plus
the text-conservation property over a longer script.

RULES:
- Empty input must raise at call time, before iteration.
"""

import pytest

from narration_captions.errors import EmptyInputError
from narration_captions.segmenter import split_sentences


class TestJapanese:

    def test_two_sentences(self):
        assert list(split_sentences("こんにちは。今日は晴れです。")) == [
            "こんにちは。",
            "今日は晴れです。",
        ]

    def test_consecutive_marks_attach(self):
        assert list(split_sentences("本当に！？すごい。")) == ["本当に！？", "すごい。"]

    def test_closing_bracket_attaches(self):
        assert list(split_sentences("彼は「はい。」と言った。")) == [
            "彼は「はい。」",
            "と言った。",
        ]


class TestLatin:

    def test_two_sentences(self):
        assert list(split_sentences("Hello world. How are you?")) == [
            "Hello world.",
            "How are you?",
        ]

    def test_interrobang_not_split(self):
        assert list(split_sentences("Really?! Yes.")) == ["Really?!", "Yes."]

    def test_decimal_not_split(self):
        assert list(split_sentences("Pi is 3.14 today.")) == ["Pi is 3.14 today."]

    def test_ellipsis_stays_together(self):
        assert list(split_sentences("Wait... what?")) == ["Wait...", "what?"]

    def test_trailing_text_without_terminal(self):
        assert list(split_sentences("First. No ending here")) == ["First.", "No ending here"]


class TestWhitespaceAndNewlines:

    def test_newline_terminates(self):
        assert list(split_sentences("line one\nline two")) == ["line one", "line two"]

    def test_blank_lines_discarded(self):
        assert list(split_sentences("\n\n  \nこんにちは。\n\n")) == ["こんにちは。"]

    def test_inner_whitespace_collapsed(self):
        assert list(split_sentences("Hello    big\tworld.")) == ["Hello big world."]

    def test_fragments_are_trimmed(self):
        for fragment in split_sentences("  A.   B!  \n  C?  "):
            assert fragment == fragment.strip()
            assert fragment


class TestEmptyInput:

    @pytest.mark.parametrize("text", ["", "   ", "\n\t  \n"])
    def test_raises_at_call_time(self, text):
        with pytest.raises(EmptyInputError):
            split_sentences(text)


class TestSequenceProperties:

    def test_one_shot_iterator(self):
        it = split_sentences("A. B.")
        assert list(it) == ["A.", "B."]
        assert list(it) == []

    def test_text_conservation(self, mixed_script):
        fragments = list(split_sentences(mixed_script))
        assert "".join(fragments).replace(" ", "") == "".join(mixed_script.split())
