# tests/utils/__init__.py

from .jobconfig import make_job_cfg, make_meta, make_resolved, write_inputs
from .config_validate import make_summary

__all__ = [
    "make_job_cfg",
    "make_meta",
    "make_resolved",
    "make_summary",
    "write_inputs",
]
