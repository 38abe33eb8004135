# src/main.py — v1
"""CLI entry point: draw, voice, minify commands.

Usage:
    cnchar-data draw   [-i ./draw]  [-o ./draw_data.json]
    cnchar-data voice  [-i ./voice] [-o ./voice_data.json]
    cnchar-data minify [-i ./voice_data.json] [-o ./voice_data.min.json]

Defaults come from Settings (.env / CNCHAR_* environment variables);
command-line flags override them.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from cnchar_data.config.settings import ConfigurationError, Settings, load_settings
from cnchar_data.core.errors import DataPrepError
from cnchar_data.core.models import RunReport
from cnchar_data.logging.logger import setup_logging
from cnchar_data.version import __version__

logger = logging.getLogger(__name__)

# subcommand -> (input setting, output setting)
_PATH_FIELDS: dict[str, tuple[str, str]] = {
    "draw": ("draw_input_dir", "draw_output_file"),
    "voice": ("voice_input_dir", "voice_output_file"),
    "minify": ("minify_input_file", "minify_output_file"),
}


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = load_settings(**_overrides(args))
    except (ConfigurationError, ValidationError) as exc:
        setup_logging(level="INFO", log_format=args.log_format or "text")
        logger.error("Invalid configuration: %s", exc)
        return 1

    setup_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )

    try:
        report = args.func(settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except DataPrepError as exc:
        logger.error("Run failed: %s", exc)
        return 1
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1

    _print_report(report)
    return 0


def run() -> None:
    """Console-script wrapper."""
    sys.exit(main())


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="cnchar-data",
        description=f"cnchar-data v{__version__}: build stroke and voice data files",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-format", choices=["json", "text"], default=None,
        help="Log output format (default: from settings, text)",
    )

    subparsers = parser.add_subparsers(dest="command")

    p_draw = subparsers.add_parser(
        "draw", help="Merge per-character stroke JSON files",
    )
    _add_path_args(p_draw, "Directory of .json stroke files", "Merged JSON output file")
    p_draw.set_defaults(func=_cmd_draw)

    p_voice = subparsers.add_parser(
        "voice", help="Encode mp3 clips into a base64 JSON document",
    )
    _add_path_args(p_voice, "Directory of .mp3 files", "Voice JSON output file")
    p_voice.set_defaults(func=_cmd_voice)

    p_minify = subparsers.add_parser(
        "minify", help="Write a whitespace-free copy of a JSON document",
    )
    _add_path_args(p_minify, "JSON document to minify", "Minified output file")
    p_minify.set_defaults(func=_cmd_minify)

    return parser


def _add_path_args(
    parser: argparse.ArgumentParser, input_help: str, output_help: str,
) -> None:
    parser.add_argument("-i", "--input", type=Path, default=None, help=input_help)
    parser.add_argument("-o", "--output", type=Path, default=None, help=output_help)


def _overrides(args: argparse.Namespace) -> dict[str, object]:
    """Translate CLI flags into Settings field overrides."""
    overrides: dict[str, object] = {}
    input_field, output_field = _PATH_FIELDS[args.command]
    if args.input is not None:
        overrides[input_field] = args.input
    if args.output is not None:
        overrides[output_field] = args.output
    if args.log_format is not None:
        overrides["log_format"] = args.log_format
    return overrides


def _cmd_draw(settings: Settings) -> RunReport:
    from cnchar_data.pipeline.runner import run_draw

    return run_draw(settings)


def _cmd_voice(settings: Settings) -> RunReport:
    from cnchar_data.pipeline.runner import run_voice

    return run_voice(settings)


def _cmd_minify(settings: Settings) -> RunReport:
    from cnchar_data.pipeline.runner import run_minify

    return run_minify(settings)


def _print_report(report: RunReport) -> None:
    """Print a human-readable summary of a RunReport."""
    print(f"\n{report.command} complete:")
    print(f"  Input:    {report.input_path}")
    print(f"  Output:   {report.output_path}")
    print(f"  Records:  {report.record_count}")
    if report.skipped:
        print(f"  Skipped:  {len(report.skipped)}")
        for skipped in report.skipped:
            print(f"    - {skipped.filename}: {skipped.reason}")
    print(f"  Size:     {report.output_size_bytes} bytes")
    print(f"  Duration: {report.duration_seconds:.2f}s")
    for line in report.preview:
        print(line)


if __name__ == "__main__":
    sys.exit(main())
