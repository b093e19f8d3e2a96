"""Command line interface for voiceprep."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Sequence

from .audio.channels import downmix_to_mono
from .audio.decode import AudioDecoder
from .config import PipelineConfig, apply_overrides, load_config, validate_config
from .errors import VoicePrepError
from .logging import configure_logging, get_logger
from .pipeline import VoicePrepPipeline
from .quality import analyze_quality

LOGGER = get_logger("cli")

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="voiceprep", description="Voice-cloning sample preparation")
    parser.add_argument("--version", action="version", version="voiceprep 0.1.0")
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    common.add_argument("-v", "--verbose", action="store_true")
    common.add_argument("-q", "--quiet", action="store_true")

    convert = subparsers.add_parser("convert", parents=[common], help="Convert a recording to a WAV sample")
    convert.add_argument("input", type=Path, help="Recorded audio file")
    convert.add_argument("output", type=Path, help="Destination WAV file")
    convert.add_argument("--sample-rate", type=int, dest="sample_rate")
    convert.add_argument("--cutoff", type=float, help="High-pass cutoff in Hz")
    convert.add_argument("--target-rms", type=float, dest="target_rms", help="Target RMS in dBFS")
    convert.add_argument("--peak-ceiling", type=float, dest="peak_ceiling", help="Peak ceiling in dBFS")
    convert.add_argument("--no-highpass", action="store_true")
    convert.add_argument("--no-trim", action="store_true")
    convert.add_argument("--validate", action="store_true", help="Validate the encoded sample")
    _add_policy_arguments(convert)

    validate = subparsers.add_parser("validate", parents=[common], help="Check a sample against a policy")
    validate.add_argument("input", type=Path)
    _add_policy_arguments(validate)

    analyze = subparsers.add_parser("analyze", parents=[common], help="Print a quality report")
    analyze.add_argument("input", type=Path)
    return parser


def _add_policy_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--policy", help="Named validation policy preset")
    parser.add_argument("--min-duration", type=float, dest="min_duration")
    parser.add_argument("--max-duration", type=float, dest="max_duration")
    parser.add_argument("--min-bytes", type=int, dest="min_bytes")


def _apply_cli_overrides(config: PipelineConfig, args: argparse.Namespace) -> PipelineConfig:
    overrides: dict = {}
    if getattr(args, "sample_rate", None) is not None:
        overrides.setdefault("decode", {})["sample_rate"] = int(args.sample_rate)
    if getattr(args, "cutoff", None) is not None:
        overrides.setdefault("highpass", {})["cutoff_hz"] = float(args.cutoff)
    if getattr(args, "no_highpass", False):
        overrides.setdefault("highpass", {})["enabled"] = False
    if getattr(args, "no_trim", False):
        overrides.setdefault("trim", {})["enabled"] = False
    if getattr(args, "target_rms", None) is not None:
        overrides.setdefault("loudness", {})["target_rms_db"] = float(args.target_rms)
    if getattr(args, "peak_ceiling", None) is not None:
        overrides.setdefault("loudness", {})["peak_ceiling_db"] = float(args.peak_ceiling)
    if getattr(args, "policy", None):
        overrides.setdefault("validation", {})["policy"] = args.policy
    for key in ("min_duration", "max_duration", "min_bytes"):
        value = getattr(args, key, None)
        if value is not None:
            overrides.setdefault("validation", {})[key] = value
            # Explicit thresholds win over a preset from the config file.
            if not getattr(args, "policy", None):
                overrides["validation"]["policy"] = None
    if overrides:
        config = apply_overrides(config, overrides)
    return config


async def _convert(pipeline: VoicePrepPipeline, args: argparse.Namespace) -> int:
    blob = args.input.read_bytes()
    if args.validate:
        result = await pipeline.process_and_validate(blob)
    else:
        result = await pipeline.process(blob)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(result.wav)
    LOGGER.info("Wrote %s (%d bytes)", args.output, len(result.wav))
    if result.validation is not None and not result.validation.valid:
        print(result.validation.message)
        return EXIT_INVALID
    return EXIT_OK


async def _validate(pipeline: VoicePrepPipeline, args: argparse.Namespace) -> int:
    result = await pipeline.validate(args.input.read_bytes())
    if result.valid:
        print(f"OK ({result.duration:.1f}s)")
        return EXIT_OK
    print(result.message)
    return EXIT_INVALID


async def _analyze(config: PipelineConfig, args: argparse.Namespace) -> int:
    decoder = AudioDecoder(config.decode)
    raw = await decoder.decode(args.input.read_bytes())
    report = analyze_quality(downmix_to_mono(raw))
    metrics = report.metrics
    print(f"Score: {report.score}/100 ({report.duration:.1f}s)")
    print(
        f"RMS {metrics.rms_db:.1f} dB | peak {metrics.peak_db:.1f} dB | "
        f"clipping {metrics.clipping_percent:.2f}% | silence {metrics.silence_percent:.0f}%"
    )
    for issue in report.issues:
        print(f"ISSUE: {issue}")
    for warning in report.warnings:
        print(f"WARNING: {warning}")
    return EXIT_OK if report.valid else EXIT_INVALID


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=getattr(args, "verbose", False), quiet=getattr(args, "quiet", False))

    config = PipelineConfig()
    if args.config is not None:
        if not args.config.exists():
            raise FileNotFoundError(f"Configuration file not found: {args.config}")
        config = load_config(args.config)
    config = _apply_cli_overrides(config, args)
    validate_config(config)

    try:
        if args.command == "convert":
            return asyncio.run(_convert(VoicePrepPipeline(config), args))
        if args.command == "validate":
            return asyncio.run(_validate(VoicePrepPipeline(config), args))
        if args.command == "analyze":
            return asyncio.run(_analyze(config, args))
    except VoicePrepError as exc:
        LOGGER.error("%s", exc)
        return EXIT_ERROR

    parser.print_help()
    return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
