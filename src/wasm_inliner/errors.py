# src/wasm_inliner/errors.py
"""Failures surfaced to the caller when a generation run cannot complete."""

from pathlib import Path


def _reason(cause: Exception) -> str:
    # OSError carries strerror; decode errors only have their message
    return getattr(cause, "strerror", None) or str(cause) or type(cause).__name__


class InlinerError(RuntimeError):
    """Base class for controlled generation failures."""


class SourceUnavailable(InlinerError):  # noqa: N818
    """An input (glue text or wasm payload) could not be read."""

    def __init__(self, role: str, path: Path, cause: Exception) -> None:
        self.role = role
        self.path = path
        super().__init__(f"Cannot read {role} from {path}: {_reason(cause)}")


class EmitFailure(InlinerError):  # noqa: N818
    """The generated artifact could not be written."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        super().__init__(f"Cannot write output {path}: {_reason(cause)}")
