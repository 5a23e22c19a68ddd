"""Command-line interface router for nexus-spec."""

from __future__ import annotations

import argparse
import importlib
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from types import ModuleType
from typing import Final

from nexus_spec.config import ConfigLoadError, SpecSettings, load_settings, use_settings
from nexus_spec.errors import UsageError
from nexus_spec.observability import configure_logging
from nexus_spec.targets import FnIdentifier
from nexus_spec.ui.render import CLIRenderer, create_renderer, render_json, render_yaml
from nexus_spec.verification_plane import abbrev_result, check, checkable_fns, summarize_results

OUTPUT_FORMATS: Final[tuple[str, ...]] = ("text", "json", "yaml")


@dataclass(frozen=True, slots=True)
class CLIError(RuntimeError):
    """Typed CLI failure with an explicit process exit code."""

    message: str
    exit_code: int = 1

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse command router."""

    parser = argparse.ArgumentParser(
        prog="nexus-spec",
        description=(
            "nexus-spec — data specifications and contract checking.\n\n"
            "Common workflows:\n"
            "  nexus-spec check mypkg.module          Check every contract in a module\n"
            "  nexus-spec check mypkg.module:fn       Check one contracted function\n"
            "  nexus-spec list mypkg.module           List checkable functions\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to a settings TOML file (default: ./nexus_spec.toml or [tool.nexus_spec]).",
    )
    common.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Output format (default: text).",
    )
    common.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Show detailed output and debug logs.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # check ---------------------------------------------------------------
    check_parser = subparsers.add_parser(
        "check",
        parents=[common],
        help="Run contract checks for the given targets.",
        description="Import each target module and check its registered function contracts.",
    )
    check_parser.add_argument("targets", nargs="+", metavar="TARGET", help="module or module:fn")
    check_parser.add_argument("--num-tests", type=int, default=None, help="Trials per contract.")
    check_parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs.")
    check_parser.add_argument(
        "--workers", type=int, default=None, help="Contracts checked concurrently."
    )
    check_parser.set_defaults(handler=_cmd_check)

    # list ----------------------------------------------------------------
    list_parser = subparsers.add_parser(
        "list",
        parents=[common],
        help="List checkable contracted functions.",
    )
    list_parser.add_argument("targets", nargs="+", metavar="TARGET", help="module or module:fn")
    list_parser.set_defaults(handler=_cmd_list)

    return parser


# ---------------------------------------------------------------------------
# Entrypoints
# ---------------------------------------------------------------------------


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse argv, route to a command handler, and return process exit code."""

    parser = build_parser()
    namespace = parser.parse_args(list(argv) if argv is not None else None)
    handler = getattr(namespace, "handler", None)
    if not callable(handler):
        parser.print_help(sys.stderr)
        return 2

    try:
        result = handler(namespace)
    except CLIError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code
    return int(result)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_check(args: argparse.Namespace) -> int:
    overrides: dict[str, object] = {}
    if args.num_tests is not None:
        overrides["check_num_tests"] = args.num_tests
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.workers is not None:
        overrides["max_workers"] = args.workers
    settings = _load_settings(args, overrides)
    _configure_logging(args, settings)

    targets = _resolve_targets(args.targets)
    if not targets:
        raise CLIError("no checkable functions found for the given targets", exit_code=2)
    with use_settings(settings):
        results = check(targets)

    abbreviated = [abbrev_result(result) for result in results]
    summary = summarize_results(results)
    payload: dict[str, object] = {"command": "check", "results": abbreviated, "summary": summary}
    _emit(args, payload, text=lambda renderer: _render_check(renderer, abbreviated, summary))
    return 0 if all(result.passed for result in results) else 1


def _cmd_list(args: argparse.Namespace) -> int:
    settings = _load_settings(args, {})
    _configure_logging(args, settings)

    names = [str(target) for target in _resolve_targets(args.targets)]
    payload: dict[str, object] = {"command": "list", "targets": names}
    _emit(args, payload, text=lambda renderer: renderer.items(names))
    return 0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_settings(args: argparse.Namespace, overrides: dict[str, object]) -> SpecSettings:
    try:
        return load_settings(args.config_path, overrides=overrides)
    except ConfigLoadError as exc:
        raise CLIError(str(exc), exit_code=2) from exc


def _configure_logging(args: argparse.Namespace, settings: SpecSettings) -> None:
    level = "DEBUG" if _flag(args, "verbose") else settings.log_level
    configure_logging(level, json_output=settings.log_json)


def _resolve_targets(raw_targets: Sequence[str]) -> list[FnIdentifier]:
    resolved: list[FnIdentifier] = []
    for raw in raw_targets:
        module_name, sep, _ = raw.partition(":")
        module = _import_target_module(module_name)
        if sep:
            try:
                target = FnIdentifier.parse(raw)
            except (AttributeError, UsageError) as exc:
                raise CLIError(f"cannot resolve target {raw!r}: {exc}", exit_code=2) from exc
            if target in checkable_fns():
                resolved.append(target)
            continue
        resolved.extend(
            target for target in checkable_fns() if _owned_by(target, module)
        )
    return list(dict.fromkeys(resolved))


def _import_target_module(module_name: str) -> ModuleType:
    try:
        return importlib.import_module(module_name)
    except ImportError as exc:
        raise CLIError(f"cannot import {module_name!r}: {exc}", exit_code=2) from exc


def _owned_by(target: FnIdentifier, module: ModuleType) -> bool:
    if target.owner is module:
        return True
    return isinstance(target.owner, type) and target.owner.__module__ == module.__name__


def _render_check(
    renderer: CLIRenderer, results: list[dict[str, object]], summary: dict[str, int]
) -> None:
    renderer.heading("Contract checks:")
    renderer.check_results(results)
    renderer.summary(summary)


def _emit(
    args: argparse.Namespace,
    payload: dict[str, object],
    *,
    text: Callable[[CLIRenderer], None],
) -> None:
    output_format = getattr(args, "output_format", "text")
    if output_format == "json":
        print(render_json(payload))
        return
    if output_format == "yaml":
        sys.stdout.write(render_yaml(payload))
        return
    renderer = create_renderer(verbose=_flag(args, "verbose"))
    text(renderer)


def _flag(args: argparse.Namespace, name: str) -> bool:
    value = getattr(args, name, False)
    return bool(value)


__all__ = ["CLIError", "build_parser", "run_cli"]
