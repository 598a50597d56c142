# src/wasm_inliner/actions.py
import base64
import re
import shutil
import subprocess
import tempfile
from contextlib import suppress
from pathlib import Path

from .meta import PROGRAM_DISPLAY, PROGRAM_SCRIPT, Metadata
from .pipeline import run_job
from .types import JobConfig
from .utils_logs import get_logger
from .utils_types import make_pathresolved

# Smallest valid wasm module: magic + version, no sections
_SELFTEST_WASM = b"\x00asm\x01\x00\x00\x00"

_SELFTEST_GLUE = """\
import { helper } from './snippets/helper.js';

let wasm;
export function __wbg_set_wasm(val) {
    wasm = val;
}

export function greet(name) {
    return wasm.greet(name);
}

export function __wbg_log_1234(ptr, len) {
    console.log(ptr, len);
}

export const Flags = Object.freeze({ On: 1, Off: 0 });
"""


def get_metadata() -> Metadata:
    """Return (version, commit) for this tool.

    Version comes from pyproject.toml next to the sources, commit from git;
    either falls back to "unknown".
    """
    logger = get_logger()
    version = "unknown"
    commit = "unknown"

    root = Path(__file__).resolve().parents[2]
    pyproject = root / "pyproject.toml"
    if pyproject.exists():
        logger.trace("trying to read metadata from %s", pyproject)
        text = pyproject.read_text(encoding="utf-8")
        match = re.search(r'(?m)^\s*version\s*=\s*["\']([^"\']+)["\']', text)
        if match:
            version = match.group(1)

    with suppress(Exception):
        logger.trace("trying to get commit from git")
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],  # noqa: S607
            cwd=root,
            capture_output=True,
            text=True,
            check=True,
        )
        commit = result.stdout.strip()

    logger.trace("got package version %s with commit %s", version, commit)
    return Metadata(version, commit)


def _check_selftest_output(text: str) -> list[str]:
    """Return a list of problems found in the self-test artifact."""
    problems: list[str] = []
    expected_b64 = base64.b64encode(_SELFTEST_WASM).decode("ascii")
    if f"const wasmBase64 = '{expected_b64}'" not in text:
        problems.append("payload was not inlined")
    if re.search(r"^import ", text, re.MULTILINE):
        problems.append("import statement left in output")
    if re.search(r"^export (function|const) ", text, re.MULTILINE):
        problems.append("export qualifier left on a declaration")
    if "'./glue_bg.js': {\n    __wbg_set_wasm,\n    __wbg_log_1234\n  }" not in text:
        problems.append("import table does not list the host bindings")
    if not text.rstrip().endswith("export { greet }"):
        problems.append("re-export statement missing or wrong")
    return problems


def run_selftest() -> bool:
    """Run a lightweight functional test of the tool itself."""
    logger = get_logger()
    logger.info("🧪 Running self-test...")

    tmp_dir: Path | None = None
    try:
        tmp_dir = Path(tempfile.mkdtemp(prefix=f"{PROGRAM_SCRIPT}-selftest-"))
        (tmp_dir / "glue_bg.js").write_text(_SELFTEST_GLUE, encoding="utf-8")
        (tmp_dir / "glue_bg.wasm").write_bytes(_SELFTEST_WASM)
        out = tmp_dir / "out" / "bindings.ts"

        job_cfg: JobConfig = {
            "glue": make_pathresolved("glue_bg.js", tmp_dir, "code"),
            "wasm": make_pathresolved("glue_bg.wasm", tmp_dir, "code"),
            "out": make_pathresolved(out, tmp_dir, "code"),
            "module_key": "./glue_bg.js",
            "log_level": "info",
            "dry_run": False,
            "__meta__": {"cli_base": tmp_dir, "config_base": tmp_dir},
        }

        logger.debug("[SELFTEST] using temp dir: %s", tmp_dir)

        # dry run first: must not write anything
        job_cfg["dry_run"] = True
        run_job(job_cfg)
        if out.exists():
            logger.error("Self-test failed: dry run wrote %s.", out)
            return False

        job_cfg["dry_run"] = False
        run_job(job_cfg)
        if not out.exists():
            logger.error("Self-test failed: output file not found.")
            return False

        problems = _check_selftest_output(out.read_text(encoding="utf-8"))
        if problems:
            logger.error("Self-test failed: %s.", "; ".join(problems))
            return False

        logger.info("✅ Self-test passed — %s is working correctly.", PROGRAM_DISPLAY)
        return True

    except PermissionError:
        logger.error("Self-test failed: insufficient permissions.")  # noqa: TRY400
        return False
    except FileNotFoundError:
        logger.error("Self-test failed: missing file or directory.")  # noqa: TRY400
        return False
    except Exception:
        # Unexpected bug: show traceback and ask for a bug report
        logger.exception(
            "Unexpected self-test failure. "
            "Please report this issue with the following traceback:"
        )
        return False

    finally:
        if tmp_dir and tmp_dir.exists():
            shutil.rmtree(tmp_dir, ignore_errors=True)
