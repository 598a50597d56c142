# src/wasm_inliner/config_validate.py

from dataclasses import dataclass
from difflib import get_close_matches
from typing import Any, get_args, get_origin

from .constants import DEFAULT_HINT_CUTOFF, DEFAULT_STRICT_CONFIG
from .types import JobConfigInput, RootConfigInput
from .utils_types import cast_hint, safe_isinstance, schema_from_typeddict

# --- constants ------------------------------------------------------

DRYRUN_KEYS = {"dry-run", "dry_run", "dryrun", "no-op", "no_op", "noop"}
DRYRUN_MSG = (
    "Ignored config key(s) {keys} {ctx}: this tool has no config option for it. "
    "Use the CLI flag '--dry-run' instead."
)


# --- dataclasses ------------------------------------------------------


@dataclass
class ValidationSummary:
    valid: bool
    errors: list[str]
    strict_warnings: list[str]
    warnings: list[str]
    strict: bool  # strictness somewhere in our config?


# --- helpers --------------------------------------------------------


def collect_msg(
    strict: bool,
    msg: str,
    summary: ValidationSummary,  # modified in function, not returned
    *,
    is_error: bool = False,
) -> None:
    """
    Route a message to the appropriate bucket.
    Errors are always fatal.
    Warnings may escalate to strict_warnings in strict mode.
    """
    if is_error:
        summary.errors.append(msg)
    elif strict:
        summary.strict_warnings.append(msg)
    else:
        summary.warnings.append(msg)


def _type_label(expected_type: Any) -> str:
    origin = get_origin(expected_type)
    args = get_args(expected_type)
    if origin is list and args:
        return f"list[{getattr(args[0], '__name__', repr(args[0]))}]"
    return getattr(expected_type, "__name__", str(expected_type))


def _check_value(
    context: str,
    key: str,
    val: Any,
    expected_type: Any,
    summary: ValidationSummary,
) -> bool:
    # lists of TypedDicts are validated by the caller; only the container here
    check_type = get_origin(expected_type) or expected_type
    if safe_isinstance(val, check_type):
        return True
    collect_msg(
        True,
        f"{context}: key `{key}` expected {_type_label(expected_type)},"
        f" got {type(val).__name__}",
        summary,
        is_error=True,
    )
    return False


def check_schema_conformance(
    strict: bool,
    cfg: dict[str, Any],
    schema: dict[str, Any],
    context: str,
    *,
    summary: ValidationSummary,  # modified in function, not returned
    ignore_keys: set[str] | None = None,
    prewarn: set[str] | None = None,
) -> bool:
    """Check key names and value types of one config object against a schema.

    Unknown keys are warnings (strict warnings in strict mode), with a
    "did you mean" hint when a known key is close enough.
    """
    ok = True
    ignore = (ignore_keys or set()) | (prewarn or set())
    for key, val in cfg.items():
        if key in ignore:
            continue
        if key not in schema:
            hint = ""
            close = get_close_matches(key, schema.keys(), n=1, cutoff=DEFAULT_HINT_CUTOFF)
            if close:
                hint = f" (did you mean `{close[0]}`?)"
            collect_msg(strict, f"Unknown key `{key}` {context}{hint}", summary)
            continue
        if not _check_value(context, key, val, schema[key], summary):
            ok = False
    return ok


def warn_keys_once(
    strict: bool,
    bad_keys: set[str],
    cfg: dict[str, Any],
    context: str,
    msg: str,
    summary: ValidationSummary,  # modified in function, not returned
) -> set[str]:
    """Warn once about any of `bad_keys` present in cfg; return the keys found."""
    found = {k for k in cfg if k.lower() in bad_keys}
    if found:
        keys = ", ".join(f"`{k}`" for k in sorted(found))
        collect_msg(strict, msg.format(keys=keys, ctx=context), summary)
    return found


# ---------------------------------------------------------------------------
# main validator
# ---------------------------------------------------------------------------


def validate_config(
    parsed_cfg: dict[str, Any], *, strict: bool | None = None
) -> ValidationSummary:
    """Validate normalized config.

    strict=True  →  warnings become fatal, but still listed separately
    strict=False →  warnings remain non-fatal

    The `strict_config` key in the root config (and optionally in each job)
    controls strictness when `strict` is not given.
    """
    summary = ValidationSummary(
        valid=True,
        errors=[],
        strict_warnings=[],
        warnings=[],
        strict=DEFAULT_STRICT_CONFIG if strict is None else strict,
    )

    def set_valid_and_return() -> ValidationSummary:
        summary.valid = not summary.errors and not summary.strict_warnings
        return summary

    # --- Determine strictness from root config ---
    root_strict = summary.strict
    strict_from_root: Any = parsed_cfg.get("strict_config")
    if strict is None and isinstance(strict_from_root, bool):
        root_strict = strict_from_root
    summary.strict = root_strict

    # --- Validate root-level keys ---
    prewarn_root = warn_keys_once(
        root_strict,
        DRYRUN_KEYS,
        parsed_cfg,
        "in top-level configuration",
        DRYRUN_MSG,
        summary,
    )
    check_schema_conformance(
        root_strict,
        parsed_cfg,
        schema_from_typeddict(RootConfigInput),
        "in top-level configuration",
        summary=summary,
        prewarn=prewarn_root,
        ignore_keys={"jobs"},
    )

    # --- Validate jobs structure ---
    jobs_raw: Any = parsed_cfg.get("jobs", [])
    if not isinstance(jobs_raw, list):
        collect_msg(True, "`jobs` must be a list of jobs.", summary, is_error=True)
        return set_valid_and_return()

    if not jobs_raw:
        collect_msg(True, "No `jobs` defined.", summary, is_error=True)
        return set_valid_and_return()

    job_schema = schema_from_typeddict(JobConfigInput)
    for i, job in enumerate(cast_hint(list[Any], jobs_raw)):
        context = f"in job #{i + 1}"
        if not isinstance(job, dict):
            collect_msg(
                True,
                f"Job #{i + 1} must be an object with named keys"
                " (not a list or value)",
                summary,
                is_error=True,
            )
            continue
        job = cast_hint(dict[str, Any], job)

        # inherit root strictness unless overridden below
        job_strict = root_strict
        strict_from_job: Any = job.get("strict_config")
        if strict is None and isinstance(strict_from_job, bool):
            job_strict = strict_from_job
        summary.strict = summary.strict or job_strict

        prewarn_job = warn_keys_once(
            job_strict, DRYRUN_KEYS, job, context, DRYRUN_MSG, summary
        )
        check_schema_conformance(
            job_strict,
            job,
            job_schema,
            context,
            summary=summary,
            prewarn=prewarn_job,
        )

    return set_valid_and_return()
