# src/wasm_inliner/synthesizer.py
"""Assemble the self-contained module from its templated parts.

The artifact is, in order: an advisory header carrying the base64 payload,
the rewritten glue verbatim, an init block that instantiates the payload
against the glue's host bindings, and a trailing `export { ... }`.
"""

import re
from dataclasses import dataclass
from string import Template

from .constants import PAYLOAD_IDENTIFIER, START_HOOK, WASM_SLOT
from .rewriter import RewriteResult

HEADER_TEMPLATE = Template(
    """\
// @ts-nocheck
// Auto-generated from ${glue_name} and ${payload_name}
// Do not edit manually

// Inlined WASM binary (base64 encoded)
const ${payload_ident} = '${payload}'

"""
)

SLOT_DECL_TEMPLATE = Template(
    """\
// Filled in once by the initialization block below
let ${slot}

"""
)

INIT_TEMPLATE = Template(
    """
// Decode and instantiate WASM module
const wasmBytes = Uint8Array.from(atob(${payload_ident}), c => c.charCodeAt(0))
const wasmModule = new WebAssembly.Module(wasmBytes)

// Build imports object
const imports = {
  '${module_key}': ${import_members}
}

const wasmInstance = new WebAssembly.Instance(wasmModule, imports)
${slot} = wasmInstance.exports

// Start WASM
if (${slot}.${start_hook}) {
  ${slot}.${start_hook}()
}
"""
)

EXPORT_TEMPLATE = Template("\nexport { ${names} }\n")


@dataclass
class ArtifactParts:
    """Everything the templates need; one instance per generated module."""

    payload: str
    rewrite: RewriteResult
    module_key: str
    glue_name: str = "glue code"
    payload_name: str = "wasm payload"


def render_header(parts: ArtifactParts) -> str:
    return HEADER_TEMPLATE.substitute(
        glue_name=parts.glue_name,
        payload_name=parts.payload_name,
        payload_ident=PAYLOAD_IDENTIFIER,
        payload=parts.payload,
    )


def declares_slot(glue: str, slot: str = WASM_SLOT) -> bool:
    """True if the glue already declares `slot` with a top-level let/var/const."""
    pattern = rf"^(?:export )?(?:let|var|const) {re.escape(slot)}\b"
    return re.search(pattern, glue, re.MULTILINE) is not None


def render_slot_declaration(glue: str) -> str:
    """Declare the `wasm` slot unless the glue already does.

    A `const wasm` in the glue also counts; redeclaring it would be a syntax
    error, and the glue is then responsible for filling it.
    """
    if declares_slot(glue):
        return ""
    return SLOT_DECL_TEMPLATE.substitute(slot=WASM_SLOT)


def render_import_members(host_bindings: list[str]) -> str:
    """Body of the import-table namespace: one shorthand property per binding."""
    if not host_bindings:
        return "{}"
    members = ",\n".join(f"    {name}" for name in host_bindings)
    return "{\n" + members + "\n  }"


def render_init_block(parts: ArtifactParts) -> str:
    return INIT_TEMPLATE.substitute(
        payload_ident=PAYLOAD_IDENTIFIER,
        module_key=_quote_single(parts.module_key),
        import_members=render_import_members(parts.rewrite.host_bindings),
        slot=WASM_SLOT,
        start_hook=START_HOOK,
    )


def render_exports(public_functions: list[str]) -> str:
    """Re-export statement, or nothing at all when there is nothing to export."""
    if not public_functions:
        return ""
    return EXPORT_TEMPLATE.substitute(names=", ".join(public_functions))


def synthesize(parts: ArtifactParts) -> str:
    """Concatenate header, glue, init block and exports into the final text."""
    glue = parts.rewrite.glue
    return (
        render_header(parts)
        + render_slot_declaration(glue)
        + glue
        + render_init_block(parts)
        + render_exports(parts.rewrite.public_functions)
    )


def _quote_single(text: str) -> str:
    return text.replace("\\", "\\\\").replace("'", "\\'")
