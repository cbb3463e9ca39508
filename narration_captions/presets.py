"""Configuration presets and constants for caption synthesis.

WHY: Different delivery targets (landscape video, vertical social video)
need different layout budgets and styling. Centralizing the full default
record here means the algorithm modules never carry default literals of
their own: config.resolve_config() merges caller overrides over one of
these records before anything runs.

HOW: Each preset is a plain dict with the same shape as a user config
file: layout and timing keys at the top level, plus nested "highlight"
and "style" dicts. PRESETS maps preset names to their dicts.

RULES:
- Presets are frozen constants; never mutate them at runtime.
  resolve_config() deep-copies before merging.
- Durations are seconds; fades are milliseconds (the styled format's
  native unit).
- Colors use the styled format's &HAABBGGRR notation (alpha 00 = opaque).
- The "some" key is an alias for "social".
"""

from typing import Dict, Tuple

FORMAT_TAGS: Tuple[str, ...] = ("srt", "vtt", "ass")

OVERFLOW_MODES: Tuple[str, ...] = ("truncate", "split")

# Numbers with optional decimals and trailing units, or all-caps runs
# such as "AI" or "NASA".
DEFAULT_HIGHLIGHT_PATTERN = (
    r"[0-9０-９]+(?:[.,．，][0-9０-９]+)*"
    r"(?:%|％|年|ヶ月|か月|月|日|時間|時|分|秒|円|ドル|万|億|兆|件|人|個|回|倍|歳|位|度)*"
    r"|[A-Z]{2,}"
)

DEFAULT_HIGHLIGHT_COLOR = "&H0000FFFF"  # yellow

# Landscape 16:9 video, two lines of up to 42 characters
PRESET_BROADCAST: Dict = {
    "format": ["srt"],
    "max_chars_per_line": 42,
    "max_lines": 2,
    "overflow": "truncate",
    "reading_chars_per_second": 5.8,
    "min_cue_duration": 2.0,
    "max_cue_duration": 7.0,
    "highlight": {
        "enabled": False,
        "pattern": DEFAULT_HIGHLIGHT_PATTERN,
        "color": DEFAULT_HIGHLIGHT_COLOR,
    },
    "style": {
        "font_name": "Noto Sans CJK JP",
        "font_size": 48,
        "primary_color": "&H00FFFFFF",
        "secondary_color": "&H000000FF",
        "outline_color": "&H00000000",
        "back_color": "&H80000000",
        "outline": 3,
        "shadow": 1,
        "bold": True,
        "alignment": 2,
        "margin_l": 40,
        "margin_r": 40,
        "margin_v": 60,
        "fade_in": 200,
        "fade_out": 200,
        "play_res_x": 1920,
        "play_res_y": 1080,
    },
}

# Vertical 9:16 video (Shorts/Reels), short lines and larger type
PRESET_SOCIAL: Dict = {
    "format": ["ass"],
    "max_chars_per_line": 16,
    "max_lines": 2,
    "overflow": "truncate",
    "reading_chars_per_second": 5.8,
    "min_cue_duration": 1.5,
    "max_cue_duration": 5.0,
    "highlight": {
        "enabled": True,
        "pattern": DEFAULT_HIGHLIGHT_PATTERN,
        "color": DEFAULT_HIGHLIGHT_COLOR,
    },
    "style": {
        "font_name": "Noto Sans CJK JP",
        "font_size": 72,
        "primary_color": "&H00FFFFFF",
        "secondary_color": "&H000000FF",
        "outline_color": "&H00000000",
        "back_color": "&H80000000",
        "outline": 4,
        "shadow": 2,
        "bold": True,
        "alignment": 2,
        "margin_l": 60,
        "margin_r": 60,
        "margin_v": 320,
        "fade_in": 150,
        "fade_out": 150,
        "play_res_x": 1080,
        "play_res_y": 1920,
    },
}

# Preset lookup by name
PRESETS: Dict[str, Dict] = {
    "broadcast": PRESET_BROADCAST,
    "social": PRESET_SOCIAL,
    "some": PRESET_SOCIAL,  # Alias
}

# Keys used by the original node configs. Accepted in config files and
# mapped onto the snake_case names above.
CAMEL_CASE_ALIASES: Dict[str, str] = {
    "maxCharsPerLine": "max_chars_per_line",
    "maxLines": "max_lines",
    "readingSpeed": "reading_chars_per_second",
    "readingCharsPerSecond": "reading_chars_per_second",
    "minDuration": "min_cue_duration",
    "maxDuration": "max_cue_duration",
    "minCueDuration": "min_cue_duration",
    "maxCueDuration": "max_cue_duration",
    "fontName": "font_name",
    "fontSize": "font_size",
    "primaryColor": "primary_color",
    "secondaryColor": "secondary_color",
    "outlineColor": "outline_color",
    "backColor": "back_color",
    "marginL": "margin_l",
    "marginR": "margin_r",
    "marginV": "margin_v",
    "fadeIn": "fade_in",
    "fadeOut": "fade_out",
    "playResX": "play_res_x",
    "playResY": "play_res_y",
}

# Pipeline-level node settings that may appear in the same config file
# but mean nothing to the engine.
IGNORED_NODE_KEYS = frozenset({"enabled", "timeout", "retryCount", "retryDelay"})
