# src/wasm_inliner/constants.py
"""
Central constants used across the project.
"""

# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"

# --- config defaults ---
DEFAULT_STRICT_CONFIG: bool = True
DEFAULT_LOG_LEVEL: str = "info"
DEFAULT_OUT_FILE: str = "bindings.ts"
DEFAULT_WASM_SUFFIX: str = ".wasm"
DEFAULT_HINT_CUTOFF: float = 0.6

# --- generated code ---
PAYLOAD_IDENTIFIER: str = "wasmBase64"
WASM_SLOT: str = "wasm"
START_HOOK: str = "__wbindgen_start"

# host-call bindings (__wbg_, __wb_) and low-level intrinsics (__wbindgen_)
HOST_BINDING_PATTERN: str = r"__wbg?_\w+|__wbindgen_\w+"
