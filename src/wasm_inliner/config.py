# src/wasm_inliner/config.py
"""Finding, loading and shaping the optional `.wasm-inliner.jsonc` file."""

import argparse
import os
from pathlib import Path
from typing import Any

from .config_validate import ValidationSummary, validate_config
from .constants import DEFAULT_ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL
from .meta import PROGRAM_ENV, PROGRAM_SCRIPT
from .types import JobConfigInput, RootConfigInput
from .utils import load_jsonc, plural
from .utils_logs import get_logger, log_dynamic, set_log_level
from .utils_types import cast_hint, schema_from_typeddict

CONFIG_NAMES = (f".{PROGRAM_SCRIPT}.jsonc", f".{PROGRAM_SCRIPT}.json")


def can_run_configless(args: argparse.Namespace) -> bool:
    """A glue path on the command line is enough to run without a config."""
    return bool(
        getattr(args, "glue", None) or getattr(args, "positional_glue", None),
    )


def determine_log_level(
    args: argparse.Namespace,
    root_log_level: str | None = None,
    job_log_level: str | None = None,
) -> str:
    """Resolve log level from CLI → env → job config → root config → default."""
    candidates = (
        getattr(args, "log_level", None),
        os.getenv(f"{PROGRAM_ENV}_LOG_LEVEL"),
        os.getenv(DEFAULT_ENV_LOG_LEVEL),
        job_log_level,
        root_log_level,
    )
    return next((c for c in candidates if c), DEFAULT_LOG_LEVEL)


def find_config(
    args: argparse.Namespace,
    cwd: Path,
    *,
    missing_level: str = "error",
) -> Path | None:
    """Return `--config` if given, else the first of CONFIG_NAMES found in cwd.

    An explicit path that does not exist is an error; a missing default
    config is logged at `missing_level` and yields None.
    """
    if getattr(args, "config", None):
        config = Path(args.config).expanduser().resolve()
        if not config.exists():
            xmsg = f"Specified config file not found: {config}"
            raise FileNotFoundError(xmsg)
        if config.is_dir():
            xmsg = f"Specified config path is a directory, not a file: {config}"
            raise ValueError(xmsg)
        return config

    found = [cwd / name for name in CONFIG_NAMES if (cwd / name).is_file()]
    if not found:
        log_dynamic(missing_level, f"No config file found in {cwd}")
        return None
    if len(found) > 1:
        get_logger().warning(
            "Both %s and %s exist; using %s.",
            found[0].name,
            found[1].name,
            found[0].name,
        )
    return found[0]


def load_config(config_path: Path) -> dict[str, Any] | list[Any] | None:
    """Read a JSON/JSONC config; None for an empty (or comment-only) file."""
    try:
        return load_jsonc(config_path)
    except ValueError as e:
        xmsg = f"Error while loading configuration file '{config_path.name}': {e}"
        raise ValueError(xmsg) from e


def parse_config(
    raw_config: dict[str, Any] | list[Any] | None,
) -> dict[str, Any] | None:
    """Normalize user config into the `{"jobs": [...]}` root shape.

    Accepted forms:
      - [] / {} / None        → None (no config)
      - [{...}, {...}]        → one job per object
      - {"jobs": ..., ...}    → kept as is (validation checks `jobs`)
      - {...}                 → one flat job

    In a flat job, keys that are also root keys (`log_level`,
    `strict_config`) move to the root. Unknown keys are kept for validation.
    """
    if not raw_config:
        return None

    if isinstance(raw_config, list):
        if not all(isinstance(x, dict) for x in raw_config):
            xmsg = "Invalid list: every job must be an object with named keys."
            raise TypeError(xmsg)
        return {"jobs": [dict(j) for j in raw_config]}

    if not isinstance(raw_config, dict):  # pyright: ignore[reportUnnecessaryIsInstance]
        xmsg = (
            f"Invalid top-level value: {type(raw_config).__name__} "
            "(expected object or list of objects)"
        )
        raise TypeError(xmsg)

    if "jobs" in raw_config:
        return dict(raw_config)

    job = dict(raw_config)
    shared = set(schema_from_typeddict(RootConfigInput)) & set(
        schema_from_typeddict(JobConfigInput)
    )
    root: dict[str, Any] = {k: job.pop(k) for k in sorted(shared) if k in job}
    root["jobs"] = [job]
    return root


def _report_validation(summary: ValidationSummary, config_path: Path) -> None:
    logger = get_logger()
    mode = "strict" if summary.strict else "lenient"

    if summary.valid and not summary.warnings:
        logger.debug("Validated %s (%s mode).", config_path.name, mode)
        return

    problems = summary.errors + summary.strict_warnings
    if problems:
        logger.error(
            "%s is invalid (%s mode), %d problem%s:\n  • %s",
            config_path.name,
            mode,
            len(problems),
            plural(problems),
            "\n  • ".join(problems),
        )
    if summary.warnings:
        logger.warning(
            "%s has %d warning%s:\n  • %s",
            config_path.name,
            len(summary.warnings),
            plural(summary.warnings),
            "\n  • ".join(summary.warnings),
        )


def load_and_validate_config(
    args: argparse.Namespace,
) -> tuple[Path, RootConfigInput] | None:
    """Find, load, parse and validate the config file.

    The root `log_level` is applied as soon as it is read so the rest of the
    config handling logs at the requested level.

    Returns (config_path, root_cfg), or None when there is no config.
    """
    set_log_level(determine_log_level(args))

    cwd = Path.cwd().resolve()
    missing_level = "debug" if can_run_configless(args) else "error"
    config_path = find_config(args, cwd, missing_level=missing_level)
    if config_path is None:
        return None

    raw_config = load_config(config_path)
    if isinstance(raw_config, dict) and isinstance(raw_config.get("log_level"), str):
        set_log_level(determine_log_level(args, raw_config["log_level"]))

    try:
        parsed_cfg = parse_config(raw_config)
    except TypeError as e:
        xmsg = f"Could not parse config {config_path.name}: {e}"
        raise TypeError(xmsg) from e
    if parsed_cfg is None:
        return None

    summary = validate_config(parsed_cfg)
    _report_validation(summary, config_path)
    if not summary.valid:
        # already reported above
        xmsg = f"Configuration file {config_path.name} contains validation errors."
        exception = ValueError(xmsg)
        exception.silent = True  # type: ignore[attr-defined]
        raise exception

    return config_path, cast_hint(RootConfigInput, parsed_cfg)
