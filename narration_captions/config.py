"""Configuration resolution, validation, and .env loading.

WHY: The engine takes one immutable configuration record per call.
Callers hand in partial, loosely-typed mappings (a JSON config file, CLI
flags, the original tool's camelCase node config). Every default and
every validation rule lives here so the algorithm modules can trust
what they receive.

HOW: python-dotenv loads the .env file on import, which only affects the
environment-level defaults below. resolve_config() then:
  1. picks a preset dict from presets.PRESETS and deep-copies it,
  2. normalizes caller keys (camelCase aliases, dropped node keys),
  3. deep-merges the overrides over the preset,
  4. validates the merged dict with jsonschema against CONFIG_SCHEMA,
  5. builds frozen dataclasses (EngineConfig and its parts), whose
     __post_init__ checks repeat the range rules and add the cross-field
     ones jsonschema cannot express (min_cue_duration <= max_cue_duration).

RULES:
- All failures surface as InvalidConfigurationError before any cue is
  built; jsonschema errors are chained, never swallowed.
- Preset constants are never mutated.
- Config records built directly (not through resolve_config) are checked
  on construction too, so ensure_config() can pass them through.
- Integral floats such as 42.0 pass the schema as integers and are
  converted to int before the records are built.
- Colors are normalized to &HAABBGGRR; both &H... and #RRGGBB(AA)
  notations are accepted.
- Margins are not range-checked; the styled renderer rounds and clamps.
"""

import copy
import json
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Pattern, Tuple, Union

import jsonschema
from dotenv import load_dotenv

from .errors import InvalidConfigurationError
from .presets import (
    CAMEL_CASE_ALIASES,
    DEFAULT_HIGHLIGHT_PATTERN,
    FORMAT_TAGS,
    IGNORED_NODE_KEYS,
    OVERFLOW_MODES,
    PRESETS,
)

logger = logging.getLogger(__name__)

load_dotenv()

# ---------------------------------------------------------------------------
# Environment-level defaults
# ---------------------------------------------------------------------------

DEFAULT_PRESET = os.getenv("CAPTIONS_DEFAULT_PRESET", "broadcast")
DEFAULT_FORMATS = os.getenv("CAPTIONS_DEFAULT_FORMATS", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_COLOR_SCHEMA = {
    "type": "string",
    "pattern": r"^(&[Hh]([0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})&?|#([0-9A-Fa-f]{6}|[0-9A-Fa-f]{8}))$",
}
_NON_NEGATIVE = {"type": "number", "minimum": 0}

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "preset": {"type": "string"},
        "format": {
            "oneOf": [
                {"type": "string", "enum": list(FORMAT_TAGS)},
                {
                    "type": "array",
                    "items": {"type": "string", "enum": list(FORMAT_TAGS)},
                    "minItems": 1,
                },
            ]
        },
        "max_chars_per_line": {"type": "integer", "minimum": 1},
        "max_lines": {"type": "integer", "minimum": 1},
        "overflow": {"type": "string", "enum": list(OVERFLOW_MODES)},
        "reading_chars_per_second": {"type": "number", "exclusiveMinimum": 0},
        "min_cue_duration": {"type": "number", "exclusiveMinimum": 0},
        "max_cue_duration": {"type": "number", "exclusiveMinimum": 0},
        "highlight": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "enabled": {"type": "boolean"},
                "pattern": {"type": ["string", "null"]},
                "color": _COLOR_SCHEMA,
            },
        },
        "style": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "font_name": {"type": "string", "minLength": 1},
                "font_size": {"type": "number", "exclusiveMinimum": 0},
                "primary_color": _COLOR_SCHEMA,
                "secondary_color": _COLOR_SCHEMA,
                "outline_color": _COLOR_SCHEMA,
                "back_color": _COLOR_SCHEMA,
                "outline": _NON_NEGATIVE,
                "shadow": _NON_NEGATIVE,
                "bold": {"type": ["boolean", "integer"]},
                "alignment": {"type": "integer", "minimum": 1, "maximum": 9},
                "margin_l": {"type": "number"},
                "margin_r": {"type": "number"},
                "margin_v": {"type": "number"},
                "fade_in": _NON_NEGATIVE,
                "fade_out": _NON_NEGATIVE,
                "play_res_x": {"type": "integer", "minimum": 1},
                "play_res_y": {"type": "integer", "minimum": 1},
            },
        },
    },
}

# ---------------------------------------------------------------------------
# Configuration records
# ---------------------------------------------------------------------------


def _check_positive_int(name: str, value: Any) -> None:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidConfigurationError(
            "{} must be a positive integer, got {!r}".format(name, value)
        )


@dataclass(frozen=True)
class LayoutConfig:
    max_chars_per_line: int = 42
    max_lines: int = 2
    overflow: str = "truncate"

    def __post_init__(self) -> None:
        for name in ("max_chars_per_line", "max_lines"):
            _check_positive_int(name, getattr(self, name))
        if self.overflow not in OVERFLOW_MODES:
            raise InvalidConfigurationError(
                "overflow must be one of {}, got {!r}".format(
                    ", ".join(OVERFLOW_MODES), self.overflow
                )
            )

    @property
    def budget(self) -> int:
        """Characters one cue may hold before the packer closes it."""
        return self.max_chars_per_line * self.max_lines


@dataclass(frozen=True)
class TimingConfig:
    reading_chars_per_second: float = 5.8
    min_cue_duration: float = 2.0
    max_cue_duration: float = 7.0

    def __post_init__(self) -> None:
        for name in ("reading_chars_per_second", "min_cue_duration", "max_cue_duration"):
            if not getattr(self, name) > 0:
                raise InvalidConfigurationError(
                    "{} must be positive, got {}".format(name, getattr(self, name))
                )
        if self.min_cue_duration > self.max_cue_duration:
            raise InvalidConfigurationError(
                "min_cue_duration ({}) exceeds max_cue_duration ({})".format(
                    self.min_cue_duration, self.max_cue_duration
                )
            )


@dataclass(frozen=True)
class StyleConfig:
    """Styled-format (ASS) appearance. Colors are &HAABBGGRR strings."""
    font_name: str = "Noto Sans CJK JP"
    font_size: float = 48
    primary_color: str = "&H00FFFFFF"
    secondary_color: str = "&H000000FF"
    outline_color: str = "&H00000000"
    back_color: str = "&H80000000"
    outline: float = 3
    shadow: float = 1
    bold: bool = True
    alignment: int = 2
    margin_l: float = 40
    margin_r: float = 40
    margin_v: float = 60
    fade_in: float = 200
    fade_out: float = 200
    play_res_x: int = 1920
    play_res_y: int = 1080

    def __post_init__(self) -> None:
        if not self.font_size > 0:
            raise InvalidConfigurationError(
                "font_size must be positive, got {}".format(self.font_size)
            )
        for name in ("outline", "shadow", "fade_in", "fade_out"):
            if getattr(self, name) < 0:
                raise InvalidConfigurationError(
                    "{} must not be negative, got {}".format(name, getattr(self, name))
                )
        if self.alignment not in range(1, 10):
            raise InvalidConfigurationError(
                "alignment must be a numpad position 1-9, got {!r}".format(self.alignment)
            )
        for name in ("play_res_x", "play_res_y"):
            _check_positive_int(name, getattr(self, name))


@dataclass(frozen=True)
class HighlightConfig:
    enabled: bool = False
    pattern: Pattern = field(default_factory=lambda: re.compile(DEFAULT_HIGHLIGHT_PATTERN))
    color: str = "&H0000FFFF"


@dataclass(frozen=True)
class EngineConfig:
    """Fully resolved, validated configuration for one engine run."""
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    style: StyleConfig = field(default_factory=StyleConfig)
    highlight: HighlightConfig = field(default_factory=HighlightConfig)
    formats: Tuple[str, ...] = ("srt",)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def normalize_color(value: str) -> str:
    """Normalize a color code to the styled format's &HAABBGGRR notation.

    "&HBBGGRR" gains an opaque alpha. "#RRGGBB" is reordered to BGR;
    "#RRGGBBAA" also inverts alpha, since web alpha FF is opaque while
    the styled format uses 00 for opaque.

    Raises:
        InvalidConfigurationError: If value is not a recognized color code.
    """
    raw = value.strip()
    if raw[:2].upper() == "&H":
        digits = raw[2:].rstrip("&")
        if len(digits) == 6:
            digits = "00" + digits
        if len(digits) == 8 and _is_hex(digits):
            return "&H" + digits.upper()
    elif raw.startswith("#"):
        digits = raw[1:]
        if len(digits) in (6, 8) and _is_hex(digits):
            rr, gg, bb = digits[0:2], digits[2:4], digits[4:6]
            alpha = 0
            if len(digits) == 8:
                alpha = 255 - int(digits[6:8], 16)
            return "&H{:02X}{}{}{}".format(alpha, bb, gg, rr).upper()
    raise InvalidConfigurationError("Unrecognized color code: {!r}".format(value))


def _is_hex(s: str) -> bool:
    try:
        int(s, 16)
    except ValueError:
        return False
    return True


def _normalize_keys(data: Mapping[str, Any], top_level: bool = True) -> Dict[str, Any]:
    """Map camelCase aliases to snake_case and drop pipeline node keys."""
    out = {}  # type: Dict[str, Any]
    for key, value in data.items():
        if top_level and key in IGNORED_NODE_KEYS:
            logger.debug("Ignoring pipeline node setting %r", key)
            continue
        key = CAMEL_CASE_ALIASES.get(key, key)
        if isinstance(value, Mapping):
            value = _normalize_keys(value, top_level=False)
        out[key] = value
    return out


def _deep_merge(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = copy.deepcopy(value)
    return base


def _compile_pattern(pattern: Optional[str]) -> Pattern:
    try:
        return re.compile(pattern or DEFAULT_HIGHLIGHT_PATTERN)
    except re.error as e:
        raise InvalidConfigurationError(
            "Malformed highlight pattern {!r}: {}".format(pattern, e)
        ) from e


def _build_style(style: Mapping[str, Any]) -> StyleConfig:
    values = dict(style)
    for key in ("primary_color", "secondary_color", "outline_color", "back_color"):
        if key in values:
            values[key] = normalize_color(values[key])
    for key in ("alignment", "play_res_x", "play_res_y"):
        if key in values:
            values[key] = int(values[key])
    if "bold" in values:
        values["bold"] = bool(values["bold"])
    return StyleConfig(**values)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def resolve_config(
    overrides: Optional[Mapping[str, Any]] = None,
    preset: Optional[str] = None,
) -> EngineConfig:
    """Merge caller overrides over a preset and build an EngineConfig.

    Args:
        overrides: Partial configuration (snake_case or the original
            camelCase keys). May name its own "preset".
        preset: Preset name. Takes precedence over overrides["preset"];
            falls back to CAPTIONS_DEFAULT_PRESET, then "broadcast".

    Returns:
        A frozen, validated EngineConfig.

    Raises:
        InvalidConfigurationError: On any schema or consistency violation.
    """
    normalized = _normalize_keys(overrides or {})
    preset_name = (preset or normalized.pop("preset", None) or DEFAULT_PRESET).lower()
    normalized.pop("preset", None)
    if preset_name not in PRESETS:
        raise InvalidConfigurationError(
            "Unknown preset '{}'. Available: {}".format(
                preset_name, ", ".join(PRESETS.keys())
            )
        )

    merged = _deep_merge(copy.deepcopy(PRESETS[preset_name]), normalized)

    try:
        jsonschema.validate(instance=merged, schema=CONFIG_SCHEMA)
    except jsonschema.ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise InvalidConfigurationError(
            "Invalid configuration at {}: {}".format(location, e.message)
        ) from e

    formats = merged["format"]
    if isinstance(formats, str):
        formats = [formats]

    highlight = merged["highlight"]
    config = EngineConfig(
        layout=LayoutConfig(
            max_chars_per_line=int(merged["max_chars_per_line"]),
            max_lines=int(merged["max_lines"]),
            overflow=merged["overflow"],
        ),
        timing=TimingConfig(
            reading_chars_per_second=float(merged["reading_chars_per_second"]),
            min_cue_duration=float(merged["min_cue_duration"]),
            max_cue_duration=float(merged["max_cue_duration"]),
        ),
        style=_build_style(merged["style"]),
        highlight=HighlightConfig(
            enabled=highlight["enabled"],
            pattern=_compile_pattern(highlight.get("pattern")),
            color=normalize_color(highlight["color"]),
        ),
        formats=tuple(dict.fromkeys(formats)),
    )
    logger.debug("Resolved configuration (preset=%s): %s", preset_name, config)
    return config


def ensure_config(config: Union[EngineConfig, Mapping[str, Any], None]) -> EngineConfig:
    """Accept an EngineConfig as-is, or resolve a mapping/None."""
    if isinstance(config, EngineConfig):
        return config
    return resolve_config(config)


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a JSON configuration file into a plain dict.

    Raises:
        InvalidConfigurationError: If the file is not a JSON object.
        OSError: If the file cannot be read.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = f.read()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidConfigurationError(
            "Config file {} is not valid JSON: {}".format(path, e)
        ) from e
    if not isinstance(data, dict):
        raise InvalidConfigurationError(
            "Config file {} must contain a JSON object".format(path)
        )
    return data
