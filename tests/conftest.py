# tests/conftest.py
"""
Shared test setup for project.

Every test starts from the same runtime state (info level, no color) so that
log assertions don't depend on the invoking shell's environment.
"""

import pytest

import wasm_inliner.runtime as mod_runtime
from wasm_inliner.meta import PROGRAM_ENV


@pytest.fixture(autouse=True)
def _reset_runtime(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin log level and color for each test; monkeypatch restores them after."""
    monkeypatch.delenv(f"{PROGRAM_ENV}_LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setitem(mod_runtime.current_runtime, "log_level", "info")
    monkeypatch.setitem(mod_runtime.current_runtime, "use_color", False)


@pytest.fixture
def sample_glue() -> str:
    """A trimmed-down wasm-bindgen `_bg.js` module."""
    return (
        "import * as wasm from './demo_bg.wasm';\n"
        "import { TextDecoder } from 'util'\n"
        "\n"
        "let wasm;\n"
        "export function __wbg_set_wasm(val) {\n"
        "    wasm = val;\n"
        "}\n"
        "\n"
        "const cachedTextDecoder = new TextDecoder('utf-8');\n"
        "\n"
        "function getStringFromWasm0(ptr, len) {\n"
        "    return cachedTextDecoder.decode(wasm.memory.buffer.slice(ptr, ptr + len));\n"
        "}\n"
        "\n"
        "export function run(source) {\n"
        "    return wasm.run(source);\n"
        "}\n"
        "\n"
        "export const Mode = Object.freeze({ Fast: 0, Safe: 1 });\n"
        "\n"
        "export function __wbg_log_a1b2(arg0, arg1) {\n"
        "    console.log(getStringFromWasm0(arg0, arg1));\n"
        "}\n"
        "\n"
        "export function __wbindgen_throw(arg0, arg1) {\n"
        "    throw new Error(getStringFromWasm0(arg0, arg1));\n"
        "}\n"
    )
