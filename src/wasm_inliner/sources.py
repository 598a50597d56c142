# src/wasm_inliner/sources.py
"""Reading the two inputs and writing the one output."""

import os
import stat
import tempfile
from contextlib import suppress
from pathlib import Path

from .errors import EmitFailure, SourceUnavailable
from .utils_logs import get_logger


def load_glue(path: Path | str) -> str:
    """Read the glue module as UTF-8 text, line endings untouched."""
    path = Path(path)
    try:
        return path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailable("glue code", path, e) from e


def load_payload(path: Path | str) -> bytes:
    """Read the wasm payload as raw bytes."""
    path = Path(path)
    try:
        return path.read_bytes()
    except OSError as e:
        raise SourceUnavailable("wasm payload", path, e) from e


def _output_mode(path: Path) -> int:
    """Permission bits for the artifact: keep an existing file's, else follow the umask."""
    with suppress(OSError):
        return stat.S_IMODE(path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def emit_artifact(path: Path | str, text: str) -> None:
    """Write `text` to `path` atomically.

    The text goes to a sibling temp file first and is moved into place only
    once fully written, so a failed write never leaves a truncated artifact.
    """
    logger = get_logger()
    path = Path(path)
    tmp_name: str | None = None

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as fh:
            tmp_name = fh.name
            fh.write(text)
        os.chmod(tmp_name, _output_mode(path))
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise EmitFailure(path, e) from e
    finally:
        if tmp_name is not None:
            with suppress(OSError):
                os.unlink(tmp_name)

    logger.trace("[EMIT] wrote %d chars → %s", len(text), path)
