"""Dataclass domain models for explain data, trial outcomes and verification runs."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from nexus_spec.targets import FnIdentifier
    from nexus_spec.specs.base import Spec

T = TypeVar("T")

PathKey = Hashable
Path = tuple[PathKey, ...]


class RunStatus(StrEnum):
    """Terminal states of a verification run."""

    PASSED = "passed"
    FAILED = "failed"
    SHRUNK = "shrunk"


class FailureKind(StrEnum):
    """Failure kinds attached to ``CheckFailure.data["failure"]``."""

    CHECK_FAILED = "check_failed"
    NO_ARGS_SPEC = "no_args_spec"
    NO_FSPEC = "no_fspec"
    NO_GEN = "no_gen"
    INSTRUMENT = "instrument"


class ResultType(StrEnum):
    """Summary classification of one check result."""

    CHECK_PASSED = "check_passed"
    CHECK_FAILED = "check_failed"
    CHECK_RAISED = "check_raised"
    NO_ARGS_SPEC = "no_args_spec"
    NO_FSPEC = "no_fspec"
    NO_GEN = "no_gen"
    INSTRUMENT = "instrument"


@dataclass(frozen=True, slots=True)
class ExplainEntry:
    """One problem reported by ``Spec.explain``.

    ``path`` locates the failing sub-spec from the spec root, ``in_`` locates
    ``val`` within the original top-level input, ``via`` lists the named specs
    traversed and ``pred`` pairs the failing test with the arguments it was
    applied to. ``reason`` is set only when the failure came from a fault.
    """

    path: Path
    val: object
    via: Path
    in_: Path
    pred: tuple[object, tuple[object, ...]]
    reason: str | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "path": list(self.path),
            "val": self.val,
            "via": list(self.via),
            "in": list(self.in_),
            "pred": self.pred,
        }
        if self.reason is not None:
            payload["reason"] = self.reason
        return payload

    def describe_pred(self) -> str:
        test, args = self.pred
        return f"{describe_test(test)}({', '.join(repr(arg) for arg in args)})"


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A trial whose check function returned normally."""

    value: T

    @property
    def result(self) -> object:
        return self.value

    @property
    def passed(self) -> bool:
        return self.value is True


@dataclass(frozen=True, slots=True)
class Fault:
    """A trial whose check function raised."""

    error: BaseException

    @property
    def result(self) -> object:
        return self.error

    @property
    def passed(self) -> bool:
        return False


TrialOutcome = Ok[object] | Fault


@dataclass(frozen=True, slots=True)
class VerificationRun:
    """Outcome record of one bounded randomized verification run."""

    budget: int
    iterations_run: int
    status: RunStatus
    failing_input: object = None
    failing_result: TrialOutcome | None = None
    minimal_input: object = None
    minimal_result: TrialOutcome | None = None

    @property
    def passed(self) -> bool:
        return self.status is RunStatus.PASSED

    @property
    def smallest_input(self) -> object:
        """Shrunk failing input when available, else the raw failing input."""

        if self.status is RunStatus.SHRUNK:
            return self.minimal_input
        return self.failing_input

    @property
    def smallest_result(self) -> TrialOutcome | None:
        if self.status is RunStatus.SHRUNK:
            return self.minimal_result
        return self.failing_result

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "budget": self.budget,
            "iterations_run": self.iterations_run,
            "status": self.status.value,
        }
        if self.failing_result is not None:
            payload["fail"] = {
                "input": self.failing_input,
                "result": self.failing_result.result,
            }
        if self.status is RunStatus.SHRUNK and self.minimal_result is not None:
            payload["shrunk"] = {
                "smallest": self.minimal_input,
                "result": self.minimal_result.result,
            }
        return payload


@dataclass(slots=True)
class CheckResult:
    """Result of checking one callable against its contract spec."""

    spec: Spec | None
    target: FnIdentifier | None = None
    run: VerificationRun | None = None
    failure: BaseException | None = None
    metadata: dict[str, object] = field(default_factory=dict)

    @property
    def num_tests(self) -> int | None:
        return self.run.iterations_run if self.run is not None else None

    @property
    def passed(self) -> bool:
        return self.failure is None and self.run is not None and self.run.passed


def describe_test(test: object) -> str:
    """Short human-readable label for a predicate-like test object."""

    name = getattr(test, "name", None)
    if isinstance(name, str) and name:
        return name
    if isinstance(test, type):
        return test.__qualname__
    pattern = getattr(test, "pattern", None)
    if isinstance(pattern, str):
        return f"re({pattern!r})"
    qualname = getattr(test, "__qualname__", None)
    if isinstance(qualname, str):
        return qualname
    return repr(test)


__all__ = [
    "CheckResult",
    "ExplainEntry",
    "FailureKind",
    "Fault",
    "Ok",
    "Path",
    "PathKey",
    "ResultType",
    "RunStatus",
    "TrialOutcome",
    "VerificationRun",
    "describe_test",
]
