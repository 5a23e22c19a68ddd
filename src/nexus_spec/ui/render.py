"""Output rendering for the nexus-spec CLI.

File: src/nexus_spec/ui/render.py
Last updated: 2026-10-19

Purpose
- Render check results and summaries as plain text, JSON or YAML.

Functional requirements
- Plain-text rendering must always work without external dependencies.
- JSON output is canonical (sorted keys, compact separators); YAML output
  keeps payload key order.
"""

from __future__ import annotations

import json
from typing import IO, TYPE_CHECKING

import yaml

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


class CLIRenderer:
    """Thin plain-text renderer writing to one stream."""

    def __init__(self, *, stream: IO[str] | None = None, verbose: bool = False) -> None:
        self.verbose = verbose
        self._stream = stream

    def _write(self, line: str) -> None:
        print(line, file=self._stream)

    def heading(self, text: str) -> None:
        self._write(text)

    def kv(self, key: str, value: object) -> None:
        self._write(f"{key}: {value}")

    def text(self, line: str) -> None:
        self._write(line)

    def section(self, title: str) -> None:
        self._write(f"\n{title}")

    def items(self, entries: Sequence[str], *, prefix: str = "- ") -> None:
        for entry in entries:
            self._write(f"  {prefix}{entry}")

    def ok(self, label: str) -> None:
        self._write(f"  PASS  {label}")

    def fail(self, label: str) -> None:
        self._write(f"  FAIL  {label}")

    def check_results(self, results: Sequence[Mapping[str, object]]) -> None:
        """One line per abbreviated check result; details only when verbose."""

        for result in results:
            target = result.get("target") or result.get("spec")
            result_type = result.get("result_type")
            if result_type == "check_passed":
                self.ok(f"{target} ({result.get('num_tests', 0)} tests)")
                continue
            self.fail(f"{target} [{result_type}]")
            failure = result.get("failure")
            if isinstance(failure, dict):
                self._write(f"        {failure.get('type')}: {failure.get('message')}")
            if "smallest" in result:
                self._write(f"        smallest input: {result['smallest']}")
            if self.verbose:
                problems = result.get("problems")
                if isinstance(problems, list):
                    for problem in problems:
                        self._write(f"        - {_describe_problem(problem)}")

    def summary(self, summary: Mapping[str, int]) -> None:
        self.section("Summary:")
        for key, value in summary.items():
            self._write(f"  {key}: {value}")


def _describe_problem(problem: object) -> str:
    if not isinstance(problem, dict):
        return str(problem)
    parts = [f"val: {problem.get('val')}", f"fails predicate: {problem.get('pred')}"]
    if problem.get("path"):
        parts.append(f"at: {problem.get('path')}")
    if problem.get("in"):
        parts.append(f"in: {problem.get('in')}")
    if problem.get("reason"):
        parts.append(f"reason: {problem.get('reason')}")
    return " ".join(parts)


def render_json(payload: Mapping[str, object]) -> str:
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def render_yaml(payload: Mapping[str, object]) -> str:
    rendered = yaml.safe_dump(
        dict(payload),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=False,
        width=120,
    )
    if not rendered.endswith("\n"):
        rendered = rendered + "\n"
    return rendered


def create_renderer(*, stream: IO[str] | None = None, verbose: bool = False) -> CLIRenderer:
    return CLIRenderer(stream=stream, verbose=verbose)


__all__ = ["CLIRenderer", "create_renderer", "render_json", "render_yaml"]
