"""Caption synthesis pipeline: text in, timed cues and renderings out.

WHY: Callers want one call that turns a narration script into finished
caption files. This module wires the stages together in their fixed
order and nothing else; each stage lives in its own module.

HOW: segment → pack (+ wrap) → assign timeline → [fit to audio] → render.
The configuration is resolved and every requested format is looked up
before the first cue is built, so configuration errors surface first.

RULES:
- No I/O and no module state; concurrent calls are independent.
- The result either holds a valid, non-empty cue list or an exception
  is raised (EmptyInputError / InvalidConfigurationError).
- total_duration is recomputed from the last cue's plain-format end
  timestamp, so it is exact to the millisecond.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional, Union

from .config import EngineConfig, ensure_config
from .errors import InvalidConfigurationError
from .models import CaptionTrack, Cue
from .packer import pack_cues
from .renderers import get_renderer
from .segmenter import split_sentences
from .timecode import format_srt_time, parse_srt_time
from .timeline import assign_timeline, fit_to_duration

logger = logging.getLogger(__name__)

ConfigLike = Union[EngineConfig, Mapping[str, Any], None]


def build_cues(text: str, config: ConfigLike = None) -> List[Cue]:
    """Segment, pack, wrap, and time narration text.

    Args:
        text: The narration script.
        config: EngineConfig, a partial config mapping, or None for defaults.

    Returns:
        Timed cues in display order.

    Raises:
        EmptyInputError: If text is empty or whitespace-only.
        InvalidConfigurationError: If config is invalid.
    """
    cfg = ensure_config(config)
    fragments = split_sentences(text)
    texts = pack_cues(fragments, cfg.layout)
    cues = assign_timeline(texts, cfg.timing)
    logger.info(
        "Created %d caption cues, %.3fs total", len(cues), cues[-1].end if cues else 0.0
    )
    return cues


def synthesize(
    text: str,
    config: ConfigLike = None,
    formats: Union[str, Iterable[str], None] = None,
    audio_duration: Optional[float] = None,
) -> CaptionTrack:
    """Run the full engine and render every requested format.

    Args:
        text: The narration script.
        config: EngineConfig, a partial config mapping, or None for defaults.
        formats: Format tag or tags to render; defaults to the config's formats.
        audio_duration: True narration length in seconds. When given, the
            estimated timeline is scaled to end exactly there.

    Returns:
        CaptionTrack with cues, renderings keyed by tag, and metadata.
    """
    cfg = ensure_config(config)
    if isinstance(formats, str):
        formats = [formats]
    tags = list(dict.fromkeys(f.lower() for f in (formats or cfg.formats)))
    renderers = {tag: get_renderer(tag) for tag in tags}
    if audio_duration is not None and audio_duration <= 0:
        raise InvalidConfigurationError(
            "audio_duration must be positive, got {}".format(audio_duration)
        )

    cues = build_cues(text, cfg)
    if audio_duration is not None:
        logger.info(
            "Scaling timeline from %.3fs to audio duration %.3fs",
            cues[-1].end, audio_duration,
        )
        cues = fit_to_duration(cues, audio_duration)

    renderings = {
        tag: renderer.render(cues, style=cfg.style, highlight=cfg.highlight)
        for tag, renderer in renderers.items()
    }

    return CaptionTrack(
        cues=cues,
        renderings=renderings,
        total_duration=parse_srt_time(format_srt_time(cues[-1].end)),
        generated_at=datetime.now(timezone.utc).isoformat(),
    )
