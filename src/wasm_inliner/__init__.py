# src/wasm_inliner/__init__.py

"""Wasm Inliner — inline a wasm-bindgen payload into its glue module.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use or build-script integration.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - main()               → CLI entrypoint
    - generate_artifact()  → Pure (glue text, wasm bytes) → module text
    - run_job()            → Load, generate and write one resolved job
    - resolve_config()     → Merge CLI args with config files
"""

from .actions import get_metadata, run_selftest
from .cli import main
from .config import (
    find_config,
    load_and_validate_config,
    load_config,
    parse_config,
)
from .config_resolve import resolve_config, resolve_job_config
from .config_validate import ValidationSummary, validate_config
from .constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUT_FILE,
    DEFAULT_STRICT_CONFIG,
    PAYLOAD_IDENTIFIER,
    START_HOOK,
    WASM_SLOT,
)
from .encoder import encode_payload
from .errors import EmitFailure, InlinerError, SourceUnavailable
from .meta import (
    PROGRAM_DISPLAY,
    PROGRAM_ENV,
    PROGRAM_PACKAGE,
    PROGRAM_SCRIPT,
    Metadata,
)
from .pipeline import (
    GenerationResult,
    default_module_key,
    generate_artifact,
    run_all_jobs,
    run_job,
)
from .rewriter import (
    RewriteResult,
    demote_exports,
    rewrite_glue,
    scan_functions,
    scan_host_bindings,
    strip_imports,
)
from .runtime import Runtime, current_runtime
from .sources import emit_artifact, load_glue, load_payload
from .synthesizer import (
    ArtifactParts,
    render_exports,
    render_header,
    render_import_members,
    render_init_block,
    synthesize,
)
from .types import (
    JobConfig,
    JobConfigInput,
    OriginType,
    PathResolved,
    RootConfig,
    RootConfigInput,
)
from .utils import load_jsonc, should_use_color
from .utils_logs import LEVEL_ORDER, colorize, get_logger, set_log_level


__all__ = [  # noqa: RUF022
    # --- CLI / Actions ---
    "get_metadata",
    "main",
    "run_selftest",
    #
    # --- Pipeline ---
    "demote_exports",
    "emit_artifact",
    "encode_payload",
    "generate_artifact",
    "load_glue",
    "load_payload",
    "render_exports",
    "render_header",
    "render_import_members",
    "render_init_block",
    "rewrite_glue",
    "run_all_jobs",
    "run_job",
    "scan_functions",
    "scan_host_bindings",
    "strip_imports",
    "synthesize",
    #
    # --- Config Handling ---
    "default_module_key",
    "find_config",
    "load_and_validate_config",
    "load_config",
    "parse_config",
    "resolve_config",
    "resolve_job_config",
    "validate_config",
    #
    # --- Constants / Metadata / Runtime ---
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_OUT_FILE",
    "DEFAULT_STRICT_CONFIG",
    "Metadata",
    "PAYLOAD_IDENTIFIER",
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    "PROGRAM_SCRIPT",
    "START_HOOK",
    "WASM_SLOT",
    "current_runtime",
    #
    # --- utils ---
    "LEVEL_ORDER",
    "colorize",
    "get_logger",
    "load_jsonc",
    "set_log_level",
    "should_use_color",
    #
    # --- Errors ---
    "EmitFailure",
    "InlinerError",
    "SourceUnavailable",
    #
    # --- Types ---
    "ArtifactParts",
    "GenerationResult",
    "JobConfig",
    "JobConfigInput",
    "OriginType",
    "PathResolved",
    "RewriteResult",
    "RootConfig",
    "RootConfigInput",
    "Runtime",
    "ValidationSummary",
]
