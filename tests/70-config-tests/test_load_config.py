# tests/70-config-tests/test_load_config.py

import argparse
from pathlib import Path

import pytest

import wasm_inliner.config as mod_config
from wasm_inliner.meta import PROGRAM_SCRIPT


def test_load_config_jsonc_with_comments(tmp_path: Path) -> None:
    # --- setup ---
    config_file = tmp_path / f".{PROGRAM_SCRIPT}.jsonc"
    config_file.write_text(
        "{\n"
        "  // where wasm-pack put things\n"
        '  "glue": "lib/rumina_bg.js",\n'
        '  "module_key": "./rumina_bg.js", /* import-table key */\n'
        "}\n",
        encoding="utf-8",
    )

    # --- execute ---
    result = mod_config.load_config(config_file)

    # --- verify ---
    assert result == {"glue": "lib/rumina_bg.js", "module_key": "./rumina_bg.js"}


def test_load_config_comment_only_is_none(tmp_path: Path) -> None:
    config_file = tmp_path / f".{PROGRAM_SCRIPT}.jsonc"
    config_file.write_text("// nothing configured yet\n", encoding="utf-8")
    assert mod_config.load_config(config_file) is None


def test_load_config_bad_json_message_drops_path(tmp_path: Path) -> None:
    # --- setup ---
    config_file = tmp_path / f".{PROGRAM_SCRIPT}.json"
    config_file.write_text("{ not json }", encoding="utf-8")

    # --- execute ---
    with pytest.raises(ValueError) as exc:
        mod_config.load_config(config_file)

    # --- verify ---
    msg = str(exc.value)
    assert msg.startswith(f"Error while loading configuration file '{config_file.name}'")
    assert str(tmp_path) not in msg


# ---------------------------------------------------------------------------
# find_config()
# ---------------------------------------------------------------------------


def test_find_config_explicit_missing_raises(tmp_path: Path) -> None:
    args = argparse.Namespace(config=str(tmp_path / "nope.jsonc"))
    with pytest.raises(FileNotFoundError):
        mod_config.find_config(args, tmp_path)


def test_find_config_prefers_jsonc_and_warns_on_multiple(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    # --- setup ---
    (tmp_path / f".{PROGRAM_SCRIPT}.json").write_text("{}")
    (tmp_path / f".{PROGRAM_SCRIPT}.jsonc").write_text("{}")

    # --- execute ---
    found = mod_config.find_config(argparse.Namespace(), tmp_path)

    # --- verify ---
    assert found == tmp_path / f".{PROGRAM_SCRIPT}.jsonc"
    assert f"using .{PROGRAM_SCRIPT}.jsonc" in capsys.readouterr().err


def test_find_config_none_found(tmp_path: Path) -> None:
    found = mod_config.find_config(
        argparse.Namespace(), tmp_path, missing_level="debug"
    )
    assert found is None
