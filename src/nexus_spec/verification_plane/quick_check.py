"""
nexus-spec — bounded randomized verification loop.

File: src/nexus_spec/verification_plane/quick_check.py
Last updated: 2026-10-19

Purpose
- Draw trials from a generator, evaluate a check on each and, on the first
  failure, minimize the counterexample.

Functional requirements
- At most ``budget`` trials; stop at the first result that is not ``True``.
- Any ``Exception`` raised by the check becomes ``Fault`` data, except
  ``UsageError``, which aborts the run and propagates.
- Shrinking is delegated to the hypothesis engine, which orders candidates by
  fewer choices first, then lexicographically smaller choices.
- The last failing evaluation the engine performs is its final replay of the
  minimal example, so it is recorded as the minimal trial.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from hypothesis import HealthCheck, Phase, Verbosity, given, settings
from hypothesis import seed as hypothesis_seed
from hypothesis.errors import Flaky, Unsatisfiable

from nexus_spec.domain.models import Fault, Ok, RunStatus, TrialOutcome, VerificationRun
from nexus_spec.errors import NoGeneratorError, UsageError
from nexus_spec.generation.generator import Generator
from nexus_spec.observability.logging import get_logger

_logger = get_logger(__name__)


class _AbortRun(BaseException):
    """Carries a ``UsageError`` out of the engine without being treated as a failing trial."""

    def __init__(self, error: UsageError) -> None:
        super().__init__(str(error))
        self.error = error


class _TrialFailed(Exception):
    """Marks a failing trial for the engine."""


@dataclass(slots=True)
class _RunState:
    iterations: int = 0
    failing: tuple[object, TrialOutcome] | None = None
    minimal: tuple[object, TrialOutcome] | None = None


def evaluate(check: Callable[[Any], object], trial: object) -> TrialOutcome:
    """Invoke ``check`` on one trial, capturing faults as data."""

    try:
        return Ok(check(trial))
    except UsageError:
        raise
    except Exception as exc:
        return Fault(exc)


def _engine_settings(budget: int, shrinkable: bool) -> settings:
    phases = (Phase.generate, Phase.shrink) if shrinkable else (Phase.generate,)
    return settings(
        max_examples=budget,
        phases=phases,
        database=None,
        deadline=None,
        derandomize=False,
        report_multiple_bugs=False,
        suppress_health_check=list(HealthCheck),
        verbosity=Verbosity.quiet,
    )


def run_quick_check(
    generator: Generator[Any],
    budget: int,
    check: Callable[[Any], object],
    *,
    seed: int | None = None,
) -> VerificationRun:
    """Run at most ``budget`` trials of ``check`` over values drawn from ``generator``."""

    if budget < 0:
        raise ValueError("budget must be >= 0")
    if budget == 0:
        return VerificationRun(budget=0, iterations_run=0, status=RunStatus.PASSED)

    state = _RunState()

    def trial_body(trial: object) -> None:
        try:
            outcome = evaluate(check, trial)
        except UsageError as exc:
            raise _AbortRun(exc) from exc
        if state.failing is None:
            state.iterations += 1
        if outcome.passed:
            return
        if state.failing is None:
            state.failing = (trial, outcome)
        state.minimal = (trial, outcome)
        raise _TrialFailed

    test = settings(_engine_settings(budget, generator.shrinkable))(
        given(generator.strategy)(trial_body)
    )
    if seed is not None:
        test = hypothesis_seed(seed)(test)

    _logger.debug(
        "quick_check_started", budget=budget, shrinkable=generator.shrinkable, seed=seed
    )
    try:
        test()
    except _AbortRun as abort:
        raise abort.error from None
    except (_TrialFailed, Flaky):
        pass
    except Unsatisfiable as exc:
        raise NoGeneratorError(
            "generator could not produce a single trial value", {"budget": budget}
        ) from exc

    if state.failing is None:
        _logger.debug("quick_check_passed", budget=budget, iterations=state.iterations)
        return VerificationRun(
            budget=budget, iterations_run=state.iterations, status=RunStatus.PASSED
        )

    failing_input, failing_result = state.failing
    if not generator.shrinkable or state.minimal is None:
        run = VerificationRun(
            budget=budget,
            iterations_run=state.iterations,
            status=RunStatus.FAILED,
            failing_input=failing_input,
            failing_result=failing_result,
        )
    else:
        minimal_input, minimal_result = state.minimal
        run = VerificationRun(
            budget=budget,
            iterations_run=state.iterations,
            status=RunStatus.SHRUNK,
            failing_input=failing_input,
            failing_result=failing_result,
            minimal_input=minimal_input,
            minimal_result=minimal_result,
        )
    _logger.info(
        "quick_check_failed",
        budget=budget,
        iterations=state.iterations,
        status=run.status.value,
        fault=isinstance(failing_result, Fault),
    )
    return run


__all__ = ["evaluate", "run_quick_check"]
