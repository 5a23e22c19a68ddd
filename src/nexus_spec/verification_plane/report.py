"""Summaries of check results for humans and machines."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from nexus_spec.domain.models import CheckResult, FailureKind, Fault, ResultType, describe_test
from nexus_spec.errors import CheckFailure, NoGeneratorError, SpecError

_FAILURE_RESULT_TYPES: dict[str, ResultType] = {
    FailureKind.CHECK_FAILED.value: ResultType.CHECK_FAILED,
    FailureKind.NO_ARGS_SPEC.value: ResultType.NO_ARGS_SPEC,
    FailureKind.NO_FSPEC.value: ResultType.NO_FSPEC,
    FailureKind.NO_GEN.value: ResultType.NO_GEN,
    FailureKind.INSTRUMENT.value: ResultType.INSTRUMENT,
}


def result_type(result: CheckResult) -> ResultType:
    failure = result.failure
    if failure is None:
        return ResultType.CHECK_PASSED
    if isinstance(failure, NoGeneratorError):
        return ResultType.NO_GEN
    if isinstance(failure, CheckFailure):
        kind = failure.failure
        if kind is not None and str(kind) in _FAILURE_RESULT_TYPES:
            return _FAILURE_RESULT_TYPES[str(kind)]
        return ResultType.CHECK_FAILED
    return ResultType.CHECK_RAISED


def abbrev_result(result: CheckResult) -> dict[str, object]:
    """Compact, printable view of one check result."""

    payload: dict[str, object] = {
        "target": str(result.target) if result.target is not None else None,
        "spec": repr(result.spec) if result.spec is not None else None,
        "result_type": result_type(result).value,
    }
    if result.num_tests is not None:
        payload["num_tests"] = result.num_tests

    failure = result.failure
    if failure is None:
        return payload

    payload["failure"] = {"type": type(failure).__name__, "message": str(failure)}
    if isinstance(failure, SpecError):
        problems = failure.data.get("problems")
        if isinstance(problems, tuple):
            payload["problems"] = [_abbrev_entry(entry.to_dict()) for entry in problems]
    run = result.run
    if run is not None and not run.passed:
        smallest = run.smallest_input
        payload["status"] = run.status.value
        payload["smallest"] = _printable(smallest)
        if isinstance(run.smallest_result, Fault):
            payload["raised"] = True
    return payload


def summarize_results(results: Iterable[CheckResult]) -> dict[str, int]:
    """``{"total": n, <result_type>: count, ...}`` with keys in a stable order."""

    counts: Counter[str] = Counter()
    total = 0
    for result in results:
        total += 1
        counts[result_type(result).value] += 1
    summary: dict[str, int] = {"total": total}
    for key in sorted(counts):
        summary[key] = counts[key]
    return summary


def _abbrev_entry(entry: dict[str, object]) -> dict[str, object]:
    test, args = entry["pred"]  # type: ignore[misc]
    abbreviated = {key: _printable(value) for key, value in entry.items() if key != "pred"}
    abbreviated["pred"] = describe_test(test)
    abbreviated["pred_args"] = [_printable(arg) for arg in args]
    return abbreviated


def _printable(value: object) -> object:
    """JSON-friendly rendering: containers are kept, other leaves become ``repr`` strings."""

    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, dict):
        return {str(key): _printable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_printable(item) for item in value]
    return repr(value)


__all__ = ["abbrev_result", "result_type", "summarize_results"]
