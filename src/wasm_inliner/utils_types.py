# src/wasm_inliner/utils_types.py

from pathlib import Path
from typing import Any, TypeVar, cast

from typing_extensions import get_type_hints

from .types import OriginType, PathResolved

T = TypeVar("T")


def cast_hint(typ: type[T] | Any, value: Any) -> T:
    """Narrow `value` to `typ` for the type checker; no runtime conversion."""
    return cast("T", value)


def schema_from_typeddict(td: type[Any]) -> dict[str, Any]:
    """Return a {key: annotation} mapping for a TypedDict, resolving forward refs."""
    try:
        hints = get_type_hints(td, include_extras=False)
    except (NameError, TypeError):
        hints = dict(getattr(td, "__annotations__", {}))
    return hints


def safe_isinstance(value: Any, expected: Any) -> bool:
    """isinstance() that tolerates typing constructs like `str | None`."""
    if expected is Any:
        return True
    # bool is an int subclass; don't accept it where a number is expected
    if isinstance(value, bool) and expected in (int, float):
        return False
    if expected is float and isinstance(value, int):
        return True
    try:
        return isinstance(value, expected)
    except TypeError:
        return False


def make_pathresolved(
    path: Path | str,
    base: Path | str,
    origin: OriginType,
) -> PathResolved:
    """Quick helper to build a PathResolved entry."""
    return {"path": path, "base": Path(base), "origin": origin}
