"""Advanced SubStation Alpha (ASS) renderer: the styled caption format.

WHY: Burned-in narration captions need control that SRT/WebVTT cannot
express: font, outline, shadow, margins, fades, and coloured emphasis
of numbers and acronyms. ASS carries all of that, and the video
composition step hands it straight to the ass filter.

HOW: A header with script metadata and exactly one "Default" style
built from StyleConfig, then one Dialogue event per cue. Per-cue text
goes through a fixed sequence:
  1. split on the internal "\\n" marker (rejoined as \\N at the end),
  2. escape backslash and braces with a backslash,
  3. wrap highlight matches in colour toggles, when enabled,
  4. prefix a {\\fad(in,out)} directive.
Steps 2 and 3 run per line so the \\N escapes are never re-escaped and
a highlight never spans a line break.

RULES:
- Timestamps are H:MM:SS.CC (centiseconds).
- Margins are rounded half-up and clamped to >= 0.
- Style colours are &HAABBGGRR; inline colour toggles use &HBBGGRR&.
- WrapStyle is 2: lines are already wrapped, the player must not rewrap.
"""

import math
from typing import List, Optional

from narration_captions.config import HighlightConfig, StyleConfig
from narration_captions.models import Cue
from narration_captions.renderers.base import BaseRenderer
from narration_captions.timecode import format_ass_time

STYLE_FORMAT = (
    "Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, "
    "OutlineColour, BackColour, Bold, Italic, Underline, StrikeOut, "
    "ScaleX, ScaleY, Spacing, Angle, BorderStyle, Outline, Shadow, "
    "Alignment, MarginL, MarginR, MarginV, Encoding"
)
EVENT_FORMAT = "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def margin(value: float) -> int:
    """Round a margin to the nearest pixel, never below zero."""
    return max(0, round_half_up(value))


def _num(value: float) -> str:
    """Render a number without a trailing .0 when it is integral."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _inline_color(color: str) -> str:
    """&HAABBGGRR → &HBBGGRR& for an inline \\c override."""
    return "&H{}&".format(color[-6:])


def escape_text(line: str) -> str:
    """Escape characters that are syntax in ASS event text."""
    return line.replace("\\", "\\\\").replace("{", "\\{").replace("}", "\\}")


def highlight_text(line: str, highlight: HighlightConfig, base_color: str) -> str:
    """Wrap every highlight match in colour-toggle overrides."""
    on = "{\\c" + _inline_color(highlight.color) + "}"
    off = "{\\c" + _inline_color(base_color) + "}"

    def _wrap(match):
        text = match.group(0)
        if not text:
            return text
        return on + text + off

    return highlight.pattern.sub(_wrap, line)


def fade_directive(style: StyleConfig) -> str:
    return "{{\\fad({},{})}}".format(
        round_half_up(style.fade_in), round_half_up(style.fade_out)
    )


def build_event_text(
    text: str, style: StyleConfig, highlight: Optional[HighlightConfig]
) -> str:
    """Turn a cue's wrapped text into ASS event text."""
    lines = []
    for line in text.split("\n"):
        line = escape_text(line)
        if highlight is not None and highlight.enabled:
            line = highlight_text(line, highlight, style.primary_color)
        lines.append(line)
    return fade_directive(style) + "\\N".join(lines)


def build_header(style: StyleConfig) -> List[str]:
    style_line = "Style: Default,{font},{size},{primary},{secondary},{outline_c},{back},{bold},0,0,0,100,100,0,0,1,{outline},{shadow},{align},{ml},{mr},{mv},1".format(
        font=style.font_name,
        size=_num(style.font_size),
        primary=style.primary_color,
        secondary=style.secondary_color,
        outline_c=style.outline_color,
        back=style.back_color,
        bold=-1 if style.bold else 0,
        outline=_num(style.outline),
        shadow=_num(style.shadow),
        align=style.alignment,
        ml=margin(style.margin_l),
        mr=margin(style.margin_r),
        mv=margin(style.margin_v),
    )
    return [
        "[Script Info]",
        "; Generated by narration_captions",
        "ScriptType: v4.00+",
        "PlayResX: {}".format(style.play_res_x),
        "PlayResY: {}".format(style.play_res_y),
        "WrapStyle: 2",
        "ScaledBorderAndShadow: yes",
        "",
        "[V4+ Styles]",
        STYLE_FORMAT,
        style_line,
        "",
        "[Events]",
        EVENT_FORMAT,
    ]


class ASSRenderer(BaseRenderer):
    """Renderer for .ass files with styling and highlight markup."""

    @property
    def name(self) -> str:
        return "Advanced SubStation Alpha"

    @property
    def suffix(self) -> str:
        return ".ass"

    @property
    def media_type(self) -> str:
        return "text/x-ssa"

    def render(
        self,
        cues: List[Cue],
        style: Optional[StyleConfig] = None,
        highlight: Optional[HighlightConfig] = None,
    ) -> str:
        if style is None:
            style = StyleConfig()

        lines = build_header(style)
        ml, mr, mv = margin(style.margin_l), margin(style.margin_r), margin(style.margin_v)
        for cue in cues:
            lines.append(
                "Dialogue: 0,{},{},Default,,{},{},{},,{}".format(
                    format_ass_time(cue.start),
                    format_ass_time(cue.end),
                    ml, mr, mv,
                    build_event_text(cue.text, style, highlight),
                )
            )
        return "\n".join(lines) + "\n"
