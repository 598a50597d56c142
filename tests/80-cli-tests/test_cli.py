# tests/80-cli-tests/test_cli.py
"""Tests for wasm_inliner.cli."""

import json
from pathlib import Path

import pytest

import wasm_inliner.cli as mod_cli
import wasm_inliner.meta as mod_meta
from tests.utils import write_inputs

# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


def test_main_no_config_no_glue(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Should report and return exit code 1 when there is nothing to do."""
    # --- patch and execute ---
    monkeypatch.chdir(tmp_path)
    code = mod_cli.main([])

    # --- verify ---
    assert code == 1
    captured = capsys.readouterr()
    assert "no glue path provided" in captured.out + captured.err


def test_main_positional_glue(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    sample_glue: str,
) -> None:
    """GLUE alone is enough: wasm and output are derived from it."""
    # --- setup ---
    write_inputs(tmp_path, sample_glue)
    monkeypatch.chdir(tmp_path)

    # --- execute ---
    code = mod_cli.main(["demo_bg.js"])

    # --- verify ---
    assert code == 0
    text = (tmp_path / "bindings.ts").read_text(encoding="utf-8")
    assert "'./demo_bg.js': {" in text
    assert text.rstrip().endswith("export { getStringFromWasm0, run }")


def test_main_explicit_paths(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    sample_glue: str,
) -> None:
    # --- setup ---
    write_inputs(tmp_path, sample_glue, glue="g.js", wasm="payload.bin")
    monkeypatch.chdir(tmp_path)

    # --- execute ---
    code = mod_cli.main(
        ["--glue", "g.js", "--wasm", "payload.bin", "-o", "out/api.ts", "-q"]
    )

    # --- verify ---
    assert code == 0
    assert (tmp_path / "out" / "api.ts").exists()


def test_main_with_config(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    sample_glue: str,
) -> None:
    """Should detect config, run its job, and exit cleanly."""
    # --- setup ---
    (tmp_path / "lib").mkdir()
    write_inputs(tmp_path / "lib", sample_glue)
    config = tmp_path / f".{mod_meta.PROGRAM_SCRIPT}.json"
    config.write_text(
        json.dumps({"glue": "lib/demo_bg.js", "out": "src/bindings.ts"}),
        encoding="utf-8",
    )

    # --- patch and execute ---
    monkeypatch.chdir(tmp_path)
    code = mod_cli.main([])

    # --- verify ---
    out = capsys.readouterr().out
    assert code == 0
    assert "Using config" in out
    assert "All jobs complete" in out
    assert (tmp_path / "src" / "bindings.ts").exists()


def test_main_invalid_config_fails(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- setup ---
    config = tmp_path / f".{mod_meta.PROGRAM_SCRIPT}.json"
    config.write_text(json.dumps({"jobs": [{"glu": "x.js"}]}), encoding="utf-8")

    # --- patch and execute ---
    monkeypatch.chdir(tmp_path)
    code = mod_cli.main([])

    # --- verify ---
    assert code == 1
    err = capsys.readouterr().err
    assert "did you mean `glue`" in err


def test_main_missing_payload_reports_source(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- setup ---
    (tmp_path / "demo_bg.js").write_text("export function a() {}\n")
    monkeypatch.chdir(tmp_path)

    # --- execute ---
    code = mod_cli.main(["demo_bg.js"])

    # --- verify ---
    assert code == 1
    err = capsys.readouterr().err
    assert "Cannot read wasm payload" in err
    assert "demo_bg.wasm" in err
    assert not (tmp_path / "bindings.ts").exists()


def test_main_dry_run(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    sample_glue: str,
) -> None:
    # --- setup ---
    write_inputs(tmp_path, sample_glue)
    monkeypatch.chdir(tmp_path)

    # --- execute ---
    code = mod_cli.main(["demo_bg.js", "--dry-run"])

    # --- verify ---
    assert code == 0
    assert "Dry-run mode" in capsys.readouterr().out
    assert not (tmp_path / "bindings.ts").exists()


def test_main_mixing_positional_and_flag_is_usage_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as e:
        mod_cli.main(["a_bg.js", "--glue", "b_bg.js"])
    assert e.value.code == 2


def test_help_flag(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Should print usage information and exit cleanly when --help is passed."""
    # --- execute ---
    with pytest.raises(SystemExit) as e:
        mod_cli.main(["--help"])

    # --- verify ---
    assert e.value.code == 0
    out = capsys.readouterr().out
    assert "usage:" in out.lower()
    assert mod_meta.PROGRAM_SCRIPT in out
    assert "--module-key" in out


def test_unknown_flag_hint(
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- execute ---
    with pytest.raises(SystemExit) as e:
        mod_cli.main(["--modul-key", "x"])

    # --- verify ---
    assert e.value.code == 2
    assert "did you mean --module-key" in capsys.readouterr().err


def test_version_flag(
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- execute ---
    code = mod_cli.main(["--version"])

    # --- verify ---
    assert code == 0
    assert mod_meta.PROGRAM_DISPLAY in capsys.readouterr().out


def test_quiet_suppresses_info(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    sample_glue: str,
) -> None:
    # --- setup ---
    write_inputs(tmp_path, sample_glue)
    monkeypatch.chdir(tmp_path)

    # --- execute ---
    code = mod_cli.main(["demo_bg.js", "--quiet"])

    # --- verify ---
    assert code == 0
    assert capsys.readouterr().out == ""
