"""
nexus-spec — unit tests for the bounded randomized verification loop

File: tests/unit/verification_plane/test_quick_check.py
Last updated: 2026-10-19

Purpose
- Validate pass/fail/shrink outcomes, fault capture and run aborts of ``run_quick_check``.

What this test file should cover
- Budget handling, including zero and negative budgets.
- Faults become data; usage errors abort the run.
- Shrinking to minimal counterexamples; non-shrinkable generators report the raw failure.
- Seeded runs are reproducible.
"""

from __future__ import annotations

import pytest
from hypothesis import strategies as st

from nexus_spec.domain.models import Fault, Ok, RunStatus
from nexus_spec.errors import NoGeneratorError, UsageError
from nexus_spec.generation import Generator
from nexus_spec.verification_plane import evaluate, run_quick_check

INTEGERS = Generator(st.integers())


def at_most_ten(value: int) -> bool:
    if value > 10:
        raise ValueError(f"{value} is too large")
    return True


def test_passing_check_runs_within_budget() -> None:
    seen: list[int] = []

    def record(value: int) -> bool:
        seen.append(value)
        return True

    run = run_quick_check(INTEGERS, 50, record)

    assert run.status is RunStatus.PASSED
    assert run.passed
    assert 0 < run.iterations_run <= 50
    assert run.iterations_run == len(seen)
    assert run.smallest_input is None


def test_exhausted_value_space_ends_the_run_early() -> None:
    run = run_quick_check(Generator(st.booleans()), 100, lambda value: True)

    assert run.passed
    assert run.iterations_run < 100


def test_zero_budget_passes_without_running_trials() -> None:
    def never(value: object) -> bool:
        raise AssertionError("must not run")

    run = run_quick_check(INTEGERS, 0, never)

    assert run.status is RunStatus.PASSED
    assert run.iterations_run == 0


def test_negative_budget_is_rejected() -> None:
    with pytest.raises(ValueError):
        run_quick_check(INTEGERS, -1, lambda value: True)


def test_fault_is_captured_and_shrunk() -> None:
    run = run_quick_check(INTEGERS, 500, at_most_ten, seed=7)

    assert run.status is RunStatus.SHRUNK
    assert isinstance(run.failing_input, int)
    assert run.failing_input > 10
    assert isinstance(run.failing_result, Fault)
    assert run.minimal_input == 11
    assert isinstance(run.minimal_result, Fault)
    assert isinstance(run.minimal_result.error, ValueError)
    assert run.smallest_input == 11


def test_non_true_result_fails_the_trial() -> None:
    run = run_quick_check(INTEGERS, 500, lambda value: True if value < 5 else "too big", seed=7)

    assert run.status is RunStatus.SHRUNK
    assert run.smallest_input == 5
    assert run.smallest_result == Ok("too big")


def test_non_shrinkable_generator_reports_the_raw_failure() -> None:
    run = run_quick_check(INTEGERS.without_shrinking(), 500, at_most_ten, seed=7)

    assert run.status is RunStatus.FAILED
    assert run.minimal_input is None
    assert run.smallest_input == run.failing_input
    assert run.smallest_result is run.failing_result


def test_usage_error_aborts_the_run() -> None:
    def misconfigured(value: int) -> bool:
        raise UsageError("spec is broken")

    with pytest.raises(UsageError, match="spec is broken"):
        run_quick_check(INTEGERS, 50, misconfigured)


def test_unsatisfiable_generator_raises_no_generator_error() -> None:
    impossible = Generator(st.integers().filter(lambda value: False))

    with pytest.raises(NoGeneratorError):
        run_quick_check(impossible, 10, lambda value: True)


def test_seeded_runs_are_reproducible() -> None:
    first = run_quick_check(INTEGERS, 500, at_most_ten, seed=99)
    second = run_quick_check(INTEGERS, 500, at_most_ten, seed=99)

    assert first.failing_input == second.failing_input
    assert first.iterations_run == second.iterations_run


def test_evaluate_wraps_faults_but_not_usage_errors() -> None:
    def misuse(value: object) -> bool:
        raise UsageError("bad")

    assert evaluate(lambda value: 1 // value, 1) == Ok(1)
    outcome = evaluate(lambda value: 1 // value, 0)

    assert isinstance(outcome, Fault)
    assert isinstance(outcome.error, ZeroDivisionError)
    assert not outcome.passed
    with pytest.raises(UsageError):
        evaluate(misuse, 0)


def test_run_to_dict_exports_failure_and_shrink_sections() -> None:
    run = run_quick_check(INTEGERS, 500, at_most_ten, seed=7)

    payload = run.to_dict()

    assert payload["status"] == "shrunk"
    assert payload["budget"] == 500
    assert payload["shrunk"]["smallest"] == 11  # type: ignore[index]
    assert "fail" in payload
