"""Command-line interface for the caption synthesis engine.

WHY: Pipelines and people need to turn a narration script file into
caption files without writing Python. The CLI is the only place in the
package that touches the filesystem; the engine itself stays pure.

HOW: argparse collects the script path, an optional JSON config file,
preset and format selection, output directory, and an optional known
audio duration. The config file is merged over the preset, the engine
runs once, and each rendering is saved as subtitles<suffix>. Status
messages go to stderr.

RULES:
- Positional argument: script path, or "-" for stdin.
- --format: comma-separated tags; falls back to CAPTIONS_DEFAULT_FORMATS,
  then to the config's own "format".
- --stdout prints the rendering instead of saving; requires one format.
- Output files: <output-dir>/<name><suffix>, overwritten if present.
  output-dir defaults to the script's directory (CWD for stdin).
- Exit codes: 0 = success, 1 = error.
- Python 3.9 compatible: no match/case, no X | Y unions.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from narration_captions.config import (
    DEFAULT_FORMATS,
    DEFAULT_PRESET,
    LOG_LEVEL,
    load_config_file,
    resolve_config,
)
from narration_captions.engine import synthesize
from narration_captions.errors import CaptionEngineError
from narration_captions.presets import PRESETS
from narration_captions.renderers import RENDERERS, get_renderer

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _parse_formats(value: str) -> List[str]:
    return [f.strip().lower() for f in value.split(",") if f.strip()]


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="narration_captions",
        description="Generate time-coded captions (SRT, WebVTT, ASS) from a narration script.",
    )

    parser.add_argument(
        "script",
        help="Path to the narration script (UTF-8 text), or '-' for stdin.",
    )

    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to a JSON config file merged over the preset.",
    )

    parser.add_argument(
        "--preset",
        default=None,
        choices=sorted(PRESETS.keys()),
        help="Configuration preset (default: {}).".format(DEFAULT_PRESET),
    )

    parser.add_argument(
        "--format", "-f",
        dest="formats",
        default=None,
        help="Comma-separated output formats. Available: {}.".format(
            ", ".join(RENDERERS.keys())
        ),
    )

    parser.add_argument(
        "--output-dir", "-o",
        default=None,
        help="Directory to save caption files (default: same as the script).",
    )

    parser.add_argument(
        "--name",
        default="subtitles",
        help="Output file stem (default: %(default)s).",
    )

    parser.add_argument(
        "--audio-duration",
        type=float,
        default=None,
        help="Known narration length in seconds; the timeline is scaled to it.",
    )

    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the rendering to stdout instead of saving files.",
    )

    return parser


def _read_script(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def run(args: argparse.Namespace) -> int:
    """Execute one CLI invocation. Returns the process exit code."""
    overrides = {}  # type: Dict[str, Any]
    if args.config:
        overrides = load_config_file(args.config)

    config = resolve_config(overrides, preset=args.preset)
    if args.config:
        _status("Loaded configuration from {}".format(args.config))

    if args.formats:
        formats = _parse_formats(args.formats)
    elif DEFAULT_FORMATS:
        formats = _parse_formats(DEFAULT_FORMATS)
    else:
        formats = list(config.formats)

    if args.stdout and len(formats) != 1:
        print("Error: --stdout needs exactly one format, got {}".format(
            ", ".join(formats)), file=sys.stderr)
        return 1

    script = _read_script(args.script)
    _status("Loaded script: {} characters".format(len(script)))

    track = synthesize(script, config, formats=formats, audio_duration=args.audio_duration)

    if args.stdout:
        sys.stdout.write(track.renderings[formats[0]])
        return 0

    if args.output_dir:
        output_dir = Path(args.output_dir).resolve()
    elif args.script == "-":
        output_dir = Path.cwd()
    else:
        output_dir = Path(args.script).resolve().parent
    output_dir.mkdir(parents=True, exist_ok=True)

    for tag in formats:
        out_path = output_dir / (args.name + get_renderer(tag).suffix)
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(track.renderings[tag])
        _status("  Saved: {}".format(out_path))

    _status("Done! {} cues, {:.1f}s total".format(len(track.cues), track.total_duration))
    for cue in track.cues[:3]:
        _status("  [{}] {:.3f} --> {:.3f}".format(cue.index, cue.start, cue.end))
        _status("      " + cue.text.replace("\n", "\n      "))
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m narration_captions`` and the console script.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        code = run(args)
    except (CaptionEngineError, OSError) as e:
        print("Error: {}".format(e), file=sys.stderr)
        logger.debug("CLI failure", exc_info=True)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
