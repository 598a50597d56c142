# src/wasm_inliner/config_resolve.py


import argparse
from pathlib import Path
from typing import Any

from .config import determine_log_level
from .constants import DEFAULT_OUT_FILE, DEFAULT_WASM_SUFFIX
from .pipeline import default_module_key, resolve_path
from .types import (
    JobConfig,
    JobConfigInput,
    MetaJobConfig,
    OriginType,
    PathResolved,
    RootConfig,
    RootConfigInput,
)
from .utils_logs import get_logger, set_log_level
from .utils_types import make_pathresolved

# --------------------------------------------------------------------------- #
# helpers
# --------------------------------------------------------------------------- #


def _path_entry(raw: Path | str, context_base: Path, origin: OriginType) -> PathResolved:
    """Wrap a user-provided path; absolute paths become their own base."""
    logger = get_logger()
    raw_path = Path(raw).expanduser()
    if raw_path.is_absolute():
        entry = make_pathresolved(raw_path.name, raw_path.parent, origin)
    else:
        entry = make_pathresolved(str(raw), context_base.resolve(), origin)
    logger.trace("Normalized: raw=%r → base=%s, path=%s", raw, entry["base"], entry["path"])
    return entry


def _pick_path(
    cli_value: str | None,
    cfg_value: Any,
    *,
    cwd: Path,
    config_dir: Path,
) -> PathResolved | None:
    """CLI wins (relative to cwd), then config (relative to the config dir)."""
    if cli_value:
        return _path_entry(cli_value, cwd, "cli")
    if isinstance(cfg_value, str) and cfg_value:
        return _path_entry(cfg_value, config_dir, "config")
    return None


# --------------------------------------------------------------------------- #
# main per-job resolver
# --------------------------------------------------------------------------- #


def resolve_job_config(
    job_cfg: JobConfigInput,
    args: argparse.Namespace,
    config_dir: Path,
    cwd: Path,
    root_cfg: RootConfigInput | None = None,
    *,
    index: int = 1,
) -> JobConfig:
    """Resolve a single JobConfigInput into a JobConfig.

    Applies CLI overrides, normalizes paths, fills derived defaults
    and attaches provenance metadata.
    """
    logger = get_logger()
    meta: MetaJobConfig = {"cli_base": cwd, "config_base": config_dir}

    # ------------------------------
    # Glue (required)
    # ------------------------------
    glue = _pick_path(
        getattr(args, "glue", None),
        job_cfg.get("glue"),
        cwd=cwd,
        config_dir=config_dir,
    )
    if glue is None:
        xmsg = f"Job #{index} has no glue code path (set `glue` or pass --glue)."
        raise ValueError(xmsg)
    glue_path = resolve_path(glue)

    # ------------------------------
    # Wasm payload: defaults to the glue file with a .wasm suffix
    # ------------------------------
    wasm = _pick_path(
        getattr(args, "wasm", None),
        job_cfg.get("wasm"),
        cwd=cwd,
        config_dir=config_dir,
    )
    if wasm is None:
        wasm = make_pathresolved(
            glue_path.with_suffix(DEFAULT_WASM_SUFFIX).name,
            glue_path.parent,
            "default",
        )

    # ------------------------------
    # Output: defaults to bindings.ts beside the glue file
    # ------------------------------
    out = _pick_path(
        getattr(args, "out", None),
        job_cfg.get("out"),
        cwd=cwd,
        config_dir=config_dir,
    )
    if out is None:
        out = make_pathresolved(DEFAULT_OUT_FILE, glue_path.parent, "default")

    if resolve_path(out) in (glue_path, resolve_path(wasm)):
        xmsg = f"Job #{index}: output path would overwrite an input: {resolve_path(out)}"
        raise ValueError(xmsg)

    # ------------------------------
    # Module key
    # ------------------------------
    module_key = (
        getattr(args, "module_key", None)
        or job_cfg.get("module_key")
        or default_module_key(glue_path)
    )

    # ------------------------------
    # Log level
    # ------------------------------
    root_log = (root_cfg or {}).get("log_level")
    log_level = determine_log_level(args, root_log, job_cfg.get("log_level"))

    resolved: JobConfig = {
        "glue": glue,
        "wasm": wasm,
        "out": out,
        "module_key": module_key,
        "log_level": log_level,
        "__meta__": meta,
    }
    logger.trace("[RESOLVE] job #%d → %s", index, resolved)
    return resolved


# --------------------------------------------------------------------------- #
# root-level resolver
# --------------------------------------------------------------------------- #


def resolve_config(
    root_input: RootConfigInput,
    args: argparse.Namespace,
    config_dir: Path,
    cwd: Path,
) -> RootConfig:
    """Fully resolve a loaded RootConfigInput into a ready-to-run RootConfig."""
    root_cfg = RootConfigInput(**root_input)
    jobs_input = root_cfg.get("jobs", [])

    cli_paths = [
        flag
        for flag in ("glue", "wasm", "out")
        if getattr(args, flag, None) is not None
    ]
    if cli_paths and len(jobs_input) > 1:
        flags = ", ".join(f"--{f}" for f in cli_paths)
        xmsg = f"Cannot apply {flags} to a config with {len(jobs_input)} jobs."
        raise ValueError(xmsg)

    #  log_level: arg -> env -> root -> default
    log_level = determine_log_level(args, root_cfg.get("log_level"), None)
    set_log_level(log_level)

    resolved_jobs = [
        resolve_job_config(job, args, config_dir, cwd, root_cfg, index=i)
        for i, job in enumerate(jobs_input, 1)
    ]

    return {
        "jobs": resolved_jobs,
        "strict_config": root_cfg.get("strict_config", False),
        "log_level": log_level,
    }
