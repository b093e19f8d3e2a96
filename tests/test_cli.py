"""Tests for the command line entry point."""

from __future__ import annotations

from pathlib import Path

import pytest

from voiceprep import cli
from voiceprep.wav.header import parse_wav_header


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)


def test_convert_writes_sample(tmp_path: Path, make_wav) -> None:
    source = tmp_path / "take.wav"
    source.write_bytes(make_wav(2.0, rate=16000))
    target = tmp_path / "out" / "sample.wav"

    code = cli.main(["convert", str(source), str(target), "--sample-rate", "16000"])

    assert code == cli.EXIT_OK
    header = parse_wav_header(target.read_bytes())
    assert header.sample_rate == 16000
    assert header.num_channels == 1


def test_convert_with_validation_reports_short_take(tmp_path: Path, make_wav, capsys) -> None:
    source = tmp_path / "take.wav"
    source.write_bytes(make_wav(3.0, rate=16000))
    target = tmp_path / "sample.wav"

    code = cli.main(
        ["convert", str(source), str(target), "--sample-rate", "16000", "--validate", "--min-duration", "60"]
    )

    assert code == cli.EXIT_INVALID
    assert target.exists()
    assert "too short (3.0s)" in capsys.readouterr().out


def test_validate_accepts_policy_window(tmp_path: Path, make_wav, capsys) -> None:
    source = tmp_path / "take.wav"
    source.write_bytes(make_wav(90.0, rate=8000))

    code = cli.main(["validate", str(source), "--min-duration", "60", "--max-duration", "120"])

    assert code == cli.EXIT_OK
    assert "OK (90.0s)" in capsys.readouterr().out


def test_decode_errors_map_to_exit_code(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = tmp_path / "take.webm"
    source.write_bytes(b"not audio")

    async def failing_probe(*args, **kwargs):
        raise cli.VoicePrepError("No audio stream found in input.bin")

    monkeypatch.setattr("voiceprep.utils.ffmpeg.probe_audio_stream", failing_probe)

    code = cli.main(["convert", str(source), str(tmp_path / "out.wav")])
    assert code == cli.EXIT_ERROR


def test_analyze_prints_score(tmp_path: Path, make_wav, capsys) -> None:
    source = tmp_path / "take.wav"
    source.write_bytes(make_wav(5.0, rate=8000))

    code = cli.main(["analyze", str(source)])

    out = capsys.readouterr().out
    assert code == cli.EXIT_INVALID
    assert "Score:" in out
    assert "ISSUE: Recording too short" in out


def test_cli_overrides_reach_config(tmp_path: Path) -> None:
    args = cli.build_parser().parse_args(
        ["convert", "in.webm", "out.wav", "--cutoff", "100", "--peak-ceiling", "-1", "--no-trim", "--policy", "short-form"]
    )
    config = cli._apply_cli_overrides(cli.PipelineConfig(), args)
    assert config.highpass.cutoff_hz == 100.0
    assert config.loudness.peak_ceiling_db == -1.0
    assert config.trim.enabled is False
    assert config.validation.resolve().max_duration == 60.0
