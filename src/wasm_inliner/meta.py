# src/wasm_inliner/meta.py

"""Centralized program identity constants for Wasm Inliner."""

from typing import NamedTuple

_BASE = "wasm-inliner"

# CLI script name (the executable or `python -m` entrypoint)
PROGRAM_SCRIPT = _BASE

# Human-readable name for banners, help text, etc.
PROGRAM_DISPLAY = _BASE.replace("-", " ").title()

# Python package / import name
PROGRAM_PACKAGE = _BASE.replace("-", "_")

# Environment variable prefix (used for WASM_INLINER_LOG_LEVEL, etc.)
PROGRAM_ENV = _BASE.replace("-", "_").upper()

# Short tagline or description for help screens and metadata
DESCRIPTION = "Inline a wasm-bindgen payload into its glue module."


class Metadata(NamedTuple):
    version: str
    commit: str
