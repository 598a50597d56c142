# src/wasm_inliner/cli.py

import argparse
import platform
import sys
from difflib import get_close_matches
from pathlib import Path

from .actions import get_metadata, run_selftest
from .config import can_run_configless, determine_log_level, load_and_validate_config
from .config_resolve import resolve_config
from .constants import DEFAULT_HINT_CUTOFF, DEFAULT_OUT_FILE
from .meta import DESCRIPTION, PROGRAM_DISPLAY, PROGRAM_SCRIPT
from .pipeline import run_all_jobs
from .runtime import current_runtime
from .types import RootConfigInput
from .utils import safe_log
from .utils_logs import LEVEL_ORDER, get_log_level, get_logger, set_log_level
from .utils_types import cast_hint

# --------------------------------------------------------------------------- #
# CLI setup and helpers
# --------------------------------------------------------------------------- #


class HintingArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that suggests the closest known flag for a typo."""

    def _hints(self, message: str) -> list[str]:
        _, sep, rest = message.partition("unrecognized arguments:")
        if not sep:
            return []
        known = [opt for action in self._actions for opt in action.option_strings]
        hints: list[str] = []
        for token in rest.split():
            if not token.startswith("-"):
                continue
            close = get_close_matches(token, known, n=1, cutoff=DEFAULT_HINT_CUTOFF)
            if close:
                hints.append(f"Hint: did you mean {close[0]}?")
        return hints

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        lines = [f"{self.prog}: error: {message}", *self._hints(message)]
        self.exit(2, "\n".join(lines) + "\n")


def _setup_parser() -> argparse.ArgumentParser:
    """Define and return the CLI argument parser."""
    parser = HintingArgumentParser(prog=PROGRAM_SCRIPT, description=DESCRIPTION)

    # --- Positional shorthand arguments ---
    parser.add_argument(
        "positional_glue",
        nargs="?",
        metavar="GLUE",
        help="Glue code module, e.g. lib/foo_bg.js (shorthand for --glue).",
    )
    parser.add_argument(
        "positional_wasm",
        nargs="?",
        metavar="WASM",
        help="Wasm payload (shorthand for --wasm; default: GLUE with .wasm suffix).",
    )

    # --- Standard flags ---
    parser.add_argument("--glue", help="Override the glue code path.")
    parser.add_argument("--wasm", help="Override the wasm payload path.")
    parser.add_argument(
        "-o",
        "--out",
        help=f"Output module path (default: {DEFAULT_OUT_FILE} beside the glue).",
    )
    parser.add_argument(
        "--module-key",
        help="Import-table key for the host bindings (default: ./<glue file name>).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Generate in memory and report, without writing the output.",
    )
    parser.add_argument("-c", "--config", help="Path to config file.")

    # --- Color ---
    color = parser.add_mutually_exclusive_group()
    for flag, enabled, text in (
        ("--no-color", False, "Disable ANSI color output."),
        ("--color", True, "Force-enable ANSI color output (overrides auto-detect)."),
    ):
        color.add_argument(
            flag, dest="use_color", action="store_const", const=enabled, help=text
        )
    color.set_defaults(use_color=None)

    # --- Version and verbosity ---
    parser.add_argument("--version", action="store_true", help="Show version info.")

    log_level = parser.add_mutually_exclusive_group()
    for short, long, level in (("-q", "--quiet", "warning"), ("-v", "--verbose", "debug")):
        log_level.add_argument(
            short,
            long,
            action="store_const",
            const=level,
            dest="log_level",
            help=f"Shorthand for --log-level {level}.",
        )
    log_level.add_argument(
        "--log-level",
        choices=LEVEL_ORDER,
        default=None,
        dest="log_level",
        help="Set log verbosity level.",
    )
    parser.add_argument(
        "--selftest",
        action="store_true",
        help="Run a built-in sanity test to verify tool correctness.",
    )
    return parser


def _normalize_positional_args(
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
) -> None:
    """Fold positional GLUE/WASM into --glue/--wasm."""
    glue_pos: str | None = getattr(args, "positional_glue", None)
    wasm_pos: str | None = getattr(args, "positional_wasm", None)

    if glue_pos and getattr(args, "glue", None):
        parser.error("Cannot mix a positional GLUE argument with --glue.")
    if wasm_pos and getattr(args, "wasm", None):
        parser.error("Cannot mix a positional WASM argument with --wasm.")

    if glue_pos:
        args.glue = glue_pos
    if wasm_pos:
        args.wasm = wasm_pos


# --------------------------------------------------------------------------- #
# Main entry
# --------------------------------------------------------------------------- #


def main(argv: list[str] | None = None) -> int:  # noqa: C901, PLR0911
    logger = get_logger()  # init (use env + defaults)

    try:
        parser = _setup_parser()
        args = parser.parse_args(argv)

        # --- Early runtime init (use CLI + env + defaults) ---
        set_log_level(determine_log_level(args))
        if args.use_color is not None:
            current_runtime["use_color"] = args.use_color
        logger.trace("[BOOT] log-level initialized: %s", get_log_level())

        logger.debug(
            "Runtime: Python %s (%s)\n    %s",
            platform.python_version(),
            platform.python_implementation(),
            sys.version.replace("\n", " "),
        )

        # --- Version flag ---
        if args.version:
            meta = get_metadata()
            logger.info("%s %s (%s)", PROGRAM_DISPLAY, meta.version, meta.commit)
            return 0

        # --- Self-test mode ---
        if args.selftest:
            return 0 if run_selftest() else 1

        # --- Normalize shorthand arguments ---
        _normalize_positional_args(args, parser)

        # --- Load configuration ---
        config_path: Path | None = None
        root_cfg: RootConfigInput | None = None
        config_result = load_and_validate_config(args)
        if config_result is not None:
            config_path, root_cfg = config_result

        logger.trace(
            "[CONFIG] log-level re-resolved from config: %s", get_log_level()
        )

        cwd = Path.cwd().resolve()
        config_dir = config_path.parent if config_path else cwd

        # --- Configless early bailout ---
        if root_cfg is None and not can_run_configless(args):
            logger.error(
                "No config found (.%s.jsonc) and no glue path provided.",
                PROGRAM_SCRIPT,
            )
            return 1

        # --- CLI-only mode fallback ---
        if root_cfg is None:
            logger.debug("No config file; running from CLI arguments only.")
            root_cfg = cast_hint(RootConfigInput, {"jobs": [{}]})

        # --- Resolve config with args and defaults ---
        resolved_root = resolve_config(root_cfg, args, config_dir, cwd)
        resolved_jobs = resolved_root["jobs"]

        if args.dry_run:
            logger.info("🧪 Dry-run mode: no files will be written.\n")

        if config_path:
            logger.info("🔧 Using config: %s", config_path.name)
        logger.debug("📁 Config root: %s", config_dir)
        logger.debug("📂 Invoked from: %s", cwd)

        run_all_jobs(resolved_jobs, dry_run=args.dry_run)

    except (FileNotFoundError, ValueError, TypeError, RuntimeError) as e:
        # controlled termination (includes SourceUnavailable / EmitFailure)
        if not getattr(e, "silent", False):
            try:
                logger.error_if_not_debug(str(e))
            except Exception:  # noqa: BLE001
                safe_log(f"[FATAL] Logging failed while reporting: {e}")
        return 1

    except Exception as e:  # noqa: BLE001
        # unexpected internal error
        try:
            logger.critical_if_not_debug("Unexpected internal error: %s", e)
        except Exception:  # noqa: BLE001
            safe_log(f"[FATAL] Logging failed while reporting: {e}")
        return 1

    else:
        return 0
