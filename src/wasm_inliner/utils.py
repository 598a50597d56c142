# src/wasm_inliner/utils.py


import json
import os
import re
import sys
from contextlib import suppress
from pathlib import Path
from typing import Any, TextIO, cast

# "//" line comments, unless the slashes follow ':' (URLs) or sit in a path
_LINE_COMMENT_RE = re.compile(r'(?<!["\'])\s*(?<![:"\'.\w])//.*|(?<!["\'])\s*#.*')
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_TRAILING_COMMA_RE = re.compile(r",(?=\s*[}\]])")


def should_use_color() -> bool:
    """NO_COLOR wins, then FORCE_COLOR, then whether stdout is a TTY."""
    if "NO_COLOR" in os.environ:
        return False
    if os.getenv("FORCE_COLOR", "").lower() in {"1", "true", "yes"}:
        return True
    return sys.stdout.isatty()


def load_jsonc(path: Path) -> dict[str, Any] | list[Any] | None:
    """Load JSONC (JSON with comments and trailing commas).

    Returns None when nothing but comments and whitespace is left.
    Syntax errors are raised as ValueError without the path, so callers
    can name the file the way they prefer.
    """
    if not path.exists():
        xmsg = f"JSONC file not found: {path}"
        raise FileNotFoundError(xmsg)
    if not path.is_file():
        xmsg = f"Expected a file: {path}"
        raise ValueError(xmsg)

    text = path.read_text(encoding="utf-8")
    for pattern in (_LINE_COMMENT_RE, _BLOCK_COMMENT_RE, _TRAILING_COMMA_RE):
        text = pattern.sub("", text)
    text = text.strip()
    if not text:
        return None

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        xmsg = f"Invalid JSONC syntax: {e.msg} (line {e.lineno}, column {e.colno})"
        raise ValueError(xmsg) from e

    if not isinstance(data, (dict, list)):
        xmsg = f"Invalid JSONC root type: {type(data).__name__}"
        raise ValueError(xmsg)  # noqa: TRY004
    return cast("dict[str, Any] | list[Any]", data)


def plural(obj: Any) -> str:
    """'s' unless obj (a number or a sized object) counts exactly one."""
    try:
        count = len(obj)
    except TypeError:
        count = obj if isinstance(obj, (int, float)) else 0
    return "" if count == 1 else "s"


def safe_log(msg: str) -> None:
    """Emergency logger that never fails."""
    stream = cast("TextIO", sys.__stderr__)
    try:
        print(msg, file=stream)
    except Exception:  # noqa: BLE001
        # Never crash during crash reporting
        with suppress(Exception):
            stream.write(f"[INTERNAL] {msg}\n")
