"""Exception taxonomy for the caption engine.

WHY: Callers (the CLI, a pipeline orchestrator) need to tell "the script
was empty" apart from "the configuration is wrong" without parsing
messages. Both are fatal: the engine either returns a fully valid cue
list or raises one of these.

HOW: A single base class so callers can catch everything the engine
raises with one clause, plus one subclass per fatal condition.

RULES:
- Everything else (over-long fragments, highlight patterns that match
  nothing, fractional margins) is handled locally and never raises.
- The engine never retries; the outcome is deterministic.
"""


class CaptionEngineError(Exception):
    """Base class for all errors raised by narration_captions."""


class EmptyInputError(CaptionEngineError):
    """The narration text is empty or whitespace-only."""


class InvalidConfigurationError(CaptionEngineError):
    """The configuration record is malformed or internally inconsistent.

    Raised before any cue is constructed, e.g. for min_cue_duration >
    max_cue_duration, a non-positive reading speed, a highlight pattern
    that does not compile, or an unknown output format.
    """
