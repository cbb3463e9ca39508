"""Unit tests for greedy cue packing.

WHY: Packing decides how many sentences share a cue. Losing the last
buffer, splitting a fragment, or exceeding the budget would all be
visible in the final captions.

HOW: group_fragments() is checked directly for fragment counts per cue;
pack_cues() is checked for joined, wrapped text in both overflow modes.

RULES:
- Budget = max_chars_per_line * max_lines.
"""

from narration_captions.config import LayoutConfig
from narration_captions.packer import group_fragments, join_fragments, pack_cues
from narration_captions.segmenter import split_sentences


class TestJoinFragments:

    def test_latin_joined_with_space(self):
        assert join_fragments("Hello.", "World.") == "Hello. World."

    def test_cjk_joined_without_space(self):
        assert join_fragments("こんにちは。", "今日は") == "こんにちは。今日は"

    def test_empty_left(self):
        assert join_fragments("", "x") == "x"


class TestGroupFragments:

    def test_hundred_five_char_sentences(self):
        fragments = list(split_sentences("あいうえ。" * 100))
        groups = group_fragments(fragments, 84)
        assert [len(g) for g in groups] == [16] * 6 + [4]

    def test_final_buffer_always_closed(self):
        groups = group_fragments(["一。", "二。", "三。"], 4)
        assert groups == [["一。", "二。"], ["三。"]]

    def test_overlong_fragment_sits_alone(self):
        long = "あ" * 100
        groups = group_fragments(["短い。", long, "次。"], 20)
        assert groups == [["短い。"], [long], ["次。"]]

    def test_overlong_first_fragment(self):
        long = "あ" * 30
        assert group_fragments([long, "次。"], 20) == [[long], ["次。"]]

    def test_no_fragments(self):
        assert group_fragments([], 84) == []


class TestPackCues:

    def test_latin_sentences_share_a_cue(self):
        texts = pack_cues(["Hello there.", "How are you?"], LayoutConfig(42, 2))
        assert texts == ["Hello there. How are you?"]

    def test_truncate_mode_one_cue_per_buffer(self):
        texts = pack_cues(["あ" * 50], LayoutConfig(10, 2, "truncate"))
        assert texts == ["あ" * 10 + "\n" + "あ" * 10]

    def test_split_mode_emits_overflow_cues(self):
        texts = pack_cues(["あ" * 50], LayoutConfig(10, 2, "split"))
        assert len(texts) == 3
        assert "".join(t.replace("\n", "") for t in texts) == "あ" * 50

    def test_every_cue_within_layout(self, mixed_script):
        layout = LayoutConfig(16, 2)
        for text in pack_cues(split_sentences(mixed_script), layout):
            lines = text.split("\n")
            assert len(lines) <= layout.max_lines
            assert all(len(line) <= layout.max_chars_per_line for line in lines)
