# src/wasm_inliner/rewriter.py
"""Line-anchored rewriting of wasm-bindgen glue code.

Every rule here works on column-0 text only:

  - import statements must fit on one line (multi-line imports are left as is)
  - only top-level, unindented `function` declarations are discovered
  - `export` is demoted only when it starts the line

These are the known limits of the scan, not things to paper over: widening
them would change which names are captured and in what order.
"""

import re
from dataclasses import dataclass, field

from .constants import HOST_BINDING_PATTERN
from .utils_logs import get_logger

IMPORT_LINE_RE = re.compile(r"^import .* from .*?;?[^\S\n]*(?:\n|\Z)", re.MULTILINE)
EXPORT_DECL_RE = re.compile(r"^export (function|const) ", re.MULTILINE)
FUNCTION_DECL_RE = re.compile(r"^function (\w+)\s*\(", re.MULTILINE | re.ASCII)
HOST_BINDING_DECL_RE = re.compile(
    rf"^(?:export )?function ({HOST_BINDING_PATTERN})\s*\(",
    re.MULTILINE | re.ASCII,
)


@dataclass
class RewriteResult:
    """Rewritten glue text plus the function names scanned out of it."""

    glue: str
    public_functions: list[str] = field(default_factory=list)
    host_bindings: list[str] = field(default_factory=list)


def strip_imports(text: str) -> str:
    """Drop every single-line `import ... from ...` statement, line ending included."""
    # lines end at "\n" only, as for the other line-anchored rules
    return IMPORT_LINE_RE.sub("", text)


def demote_exports(text: str) -> str:
    """Turn line-initial `export function` / `export const` into local declarations."""
    return EXPORT_DECL_RE.sub(r"\1 ", text)


def scan_functions(text: str) -> list[str]:
    """Names of unqualified top-level function declarations, in source order."""
    return FUNCTION_DECL_RE.findall(text)


def scan_host_bindings(text: str) -> list[str]:
    """Names of top-level host-binding declarations, exported or not, in source order."""
    return HOST_BINDING_DECL_RE.findall(text)


def rewrite_glue(source: str) -> RewriteResult:
    """Rewrite glue source and extract its public and host-binding function names.

    The public scan runs on the rewritten text, the host-binding scan on the
    untouched source; host bindings are then left out of the public set
    since only the wasm instance calls them.
    """
    logger = get_logger()

    glue = demote_exports(strip_imports(source))

    # two snapshots, two scans
    host_bindings = scan_host_bindings(source)
    binding_names = set(host_bindings)
    public_functions = [
        name for name in scan_functions(glue) if name not in binding_names
    ]

    logger.trace(
        "[REWRITE] %d public function(s), %d host binding(s)",
        len(public_functions),
        len(host_bindings),
    )
    if not public_functions and not host_bindings:
        logger.warning(
            "No top-level function declarations found in glue code; "
            "the generated module will export nothing."
        )

    return RewriteResult(
        glue=glue,
        public_functions=public_functions,
        host_bindings=host_bindings,
    )
