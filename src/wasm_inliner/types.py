# src/wasm_inliner/types.py
from __future__ import annotations

from pathlib import Path
from typing import Literal, TypedDict

from typing_extensions import NotRequired

OriginType = Literal["cli", "config", "default", "code", "test"]


class PathResolved(TypedDict):
    path: Path | str  # absolute or relative to `base`
    base: Path  # canonical origin directory for resolution

    # meta only
    origin: OriginType  # provenance


class MetaJobConfig(TypedDict):
    # sources of parameters
    cli_base: Path
    config_base: Path


class JobConfigInput(TypedDict, total=False):
    glue: str
    wasm: str
    out: str
    module_key: str

    # optional per-job override
    strict_config: bool
    log_level: str


class RootConfigInput(TypedDict, total=False):
    jobs: list[JobConfigInput]

    # Defaults that cascade into each job
    log_level: str

    # runtime behavior
    strict_config: bool


class JobConfig(TypedDict):
    glue: PathResolved
    wasm: PathResolved
    out: PathResolved
    module_key: str
    log_level: str

    # runtime flag (CLI only, not persisted in normal configs)
    dry_run: NotRequired[bool]

    # global provenance (optional, for audit/debug)
    __meta__: MetaJobConfig


class RootConfig(TypedDict):
    jobs: list[JobConfig]

    # runtime behavior
    log_level: str
    strict_config: bool
