"""
nexus-spec — error taxonomy.

File: src/nexus_spec/errors.py
Last updated: 2026-10-19

Purpose
- Typed failures raised by specs, generators, the verification loop and checks.

Functional requirements
- ``UsageError`` is fatal to the current call and aborts any verification run.
- ``NoGeneratorError`` is fatal to the generate call only.
- ``CheckFailure`` is returned as data by checks and raised by instrumentation.
- ``INVALID`` is never raised; see ``nexus_spec.specs.base``.
"""

from __future__ import annotations

from collections.abc import Mapping


class SpecError(Exception):
    """Base class for nexus-spec errors carrying an optional data payload."""

    def __init__(self, message: str, data: Mapping[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.data: dict[str, object] = dict(data or {})

    def __str__(self) -> str:
        return self.message


class UsageError(SpecError):
    """A specification was misconfigured or used outside its contract."""


class UnknownSpecError(UsageError, KeyError):
    """A spec name could not be resolved through the registry."""

    def __str__(self) -> str:
        return self.message


class StubArgumentError(UsageError):
    """A generated contract stub was invoked with non-conforming input."""


class NoGeneratorError(SpecError):
    """No generator could be derived for a spec and none was supplied."""


class CheckFailure(SpecError):
    """Terminal report of a failed specification check.

    ``data["failure"]`` holds a ``FailureKind`` value; the remaining keys
    depend on the failure (explain problems, the offending value, arguments).
    """

    @property
    def failure(self) -> str | None:
        kind = self.data.get("failure")
        return str(kind) if kind is not None else None


__all__ = [
    "CheckFailure",
    "NoGeneratorError",
    "SpecError",
    "StubArgumentError",
    "UnknownSpecError",
    "UsageError",
]
