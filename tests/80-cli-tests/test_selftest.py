# tests/80-cli-tests/test_selftest.py

import pytest

import wasm_inliner.actions as mod_actions
import wasm_inliner.cli as mod_cli


def test_run_selftest_passes(capsys: pytest.CaptureFixture[str]) -> None:
    # --- execute ---
    ok = mod_actions.run_selftest()

    # --- verify ---
    assert ok
    assert "Self-test passed" in capsys.readouterr().out


def test_selftest_flag_exit_code() -> None:
    assert mod_cli.main(["--selftest"]) == 0


def test_get_metadata_has_version() -> None:
    meta = mod_actions.get_metadata()
    assert meta.version
    assert meta.commit
