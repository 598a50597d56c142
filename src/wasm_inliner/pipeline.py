# src/wasm_inliner/pipeline.py

from dataclasses import dataclass
from pathlib import Path

from .encoder import encode_payload
from .rewriter import RewriteResult, rewrite_glue
from .runtime import current_runtime
from .sources import emit_artifact, load_glue, load_payload
from .synthesizer import ArtifactParts, synthesize
from .types import JobConfig, PathResolved
from .utils import plural
from .utils_logs import get_logger, set_log_level


@dataclass
class GenerationResult:
    artifact: str
    rewrite: RewriteResult
    payload_size: int

    @property
    def public_functions(self) -> list[str]:
        return self.rewrite.public_functions

    @property
    def host_bindings(self) -> list[str]:
        return self.rewrite.host_bindings


def resolve_path(entry: PathResolved) -> Path:
    """Join a PathResolved entry onto its base (absolute paths win)."""
    return (Path(entry["base"]) / entry["path"]).resolve()


def default_module_key(glue_path: Path | str) -> str:
    """Import-table key wasm-bindgen uses for a glue file: './<file name>'."""
    return f"./{Path(glue_path).name}"


def generate_artifact(
    glue_source: str,
    payload: bytes,
    *,
    module_key: str,
    glue_name: str = "glue code",
    payload_name: str = "wasm payload",
) -> GenerationResult:
    """Pure transformation: (glue text, wasm bytes) → self-contained module text."""
    rewrite = rewrite_glue(glue_source)
    parts = ArtifactParts(
        payload=encode_payload(payload),
        rewrite=rewrite,
        module_key=module_key,
        glue_name=glue_name,
        payload_name=payload_name,
    )
    return GenerationResult(
        artifact=synthesize(parts),
        rewrite=rewrite,
        payload_size=len(payload),
    )


def run_job(job_cfg: JobConfig) -> GenerationResult:
    """Load, transform and write one glue/payload pair using a resolved config."""
    logger = get_logger()
    dry_run = job_cfg.get("dry_run", False)
    glue_path = resolve_path(job_cfg["glue"])
    wasm_path = resolve_path(job_cfg["wasm"])
    out_path = resolve_path(job_cfg["out"])

    logger.trace("[RUN_JOB] glue=%s wasm=%s out=%s", glue_path, wasm_path, out_path)

    # both inputs are read before anything is generated or written
    glue_source = load_glue(glue_path)
    payload = load_payload(wasm_path)
    if not payload:
        logger.warning("wasm payload %s is empty.", wasm_path.name)

    result = generate_artifact(
        glue_source,
        payload,
        module_key=job_cfg["module_key"],
        glue_name=glue_path.name,
        payload_name=wasm_path.name,
    )

    if dry_run:
        logger.info(
            "🧪 (dry-run) Would write %d chars → %s", len(result.artifact), out_path
        )
    else:
        emit_artifact(out_path, result.artifact)
        logger.info("✅ Generated %s", out_path)

    exported = ", ".join(result.public_functions) or "(none)"
    logger.info("   Exported function%s: %s", plural(result.public_functions), exported)
    logger.info("   Host binding count: %d", len(result.host_bindings))
    logger.debug("   Payload: %d bytes inlined", result.payload_size)
    return result


def run_all_jobs(
    resolved_jobs: list[JobConfig],
    *,
    dry_run: bool,
) -> list[GenerationResult]:
    logger = get_logger()
    logger.trace("[run_all_jobs] Resolved jobs: %s", resolved_jobs)

    results: list[GenerationResult] = []
    for i, job_cfg in enumerate(resolved_jobs, 1):
        job_log_level = job_cfg.get("log_level")
        prev_level = current_runtime["log_level"]

        job_cfg["dry_run"] = dry_run
        if job_log_level:
            set_log_level(job_log_level)
            logger.debug("Overriding log level → %s", job_log_level)

        try:
            logger.info("▶️  Job %d/%d", i, len(resolved_jobs))
            results.append(run_job(job_cfg))
        finally:
            if job_log_level:
                set_log_level(prev_level)

    logger.info("🎉 All jobs complete.")
    return results
