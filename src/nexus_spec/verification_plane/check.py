"""
nexus-spec — checking callables against their registered contracts.

File: src/nexus_spec/verification_plane/check.py
Last updated: 2026-10-19

Purpose
- Run the verification loop over a callable and package the outcome as a
  ``CheckResult``.

Functional requirements
- A contract without an ``args`` spec is reported, not run.
- Generator derivation failures are reported, not raised.
- A failing trial yields the smallest failure found: a ``CheckFailure`` with
  explain problems, or the exception the callable raised.
- Instrumented targets are checked against their raw originals and
  re-instrumented afterwards.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Hashable, Mapping
from typing import Any

from nexus_spec.config.settings import get_settings
from nexus_spec.domain.models import CheckResult, FailureKind, Fault, Ok
from nexus_spec.errors import CheckFailure, NoGeneratorError
from nexus_spec.generation.generator import GenSource
from nexus_spec.instrumentation import TargetsArg, normalize_targets, uninstrumented
from nexus_spec.observability.logging import get_logger
from nexus_spec.registry import SpecRegistry, default_registry
from nexus_spec.specs.base import Spec, specize
from nexus_spec.specs.contract import ContractSpec
from nexus_spec.targets import FnIdentifier
from nexus_spec.utils.concurrency import run_blocking

_logger = get_logger(__name__)


def check_fn(
    fn: Callable[..., Any],
    spec: object,
    *,
    num_tests: int | None = None,
    gen: Mapping[Hashable, GenSource] | None = None,
    seed: int | None = None,
    target: FnIdentifier | None = None,
) -> CheckResult:
    """Check ``fn`` against a contract spec over generated calls."""

    resolved: Spec | None = None if spec is None else specize(spec)
    if not isinstance(resolved, ContractSpec):
        return CheckResult(
            spec=resolved,
            target=target,
            failure=CheckFailure(
                f"no function contract for {target or fn!r}", {"failure": FailureKind.NO_FSPEC}
            ),
        )
    if resolved.parts.args is None:
        return CheckResult(
            spec=resolved,
            target=target,
            failure=CheckFailure("no args spec", {"failure": FailureKind.NO_ARGS_SPEC}),
        )

    active = get_settings()
    budget = active.check_num_tests if num_tests is None else num_tests
    run_seed = active.seed if seed is None else seed
    try:
        run = resolved.verify(fn, budget, overrides=gen, seed=run_seed)
    except NoGeneratorError as exc:
        return CheckResult(spec=resolved, target=target, failure=exc)

    failure: BaseException | None = None
    if not run.passed:
        smallest = run.smallest_result
        if isinstance(smallest, Fault):
            failure = smallest.error
        elif isinstance(smallest, Ok) and isinstance(smallest.value, BaseException):
            failure = smallest.value
        else:
            failure = CheckFailure(
                "Specification-based check failed",
                {"failure": FailureKind.CHECK_FAILED, "result": getattr(smallest, "result", None)},
            )

    result = CheckResult(spec=resolved, target=target, run=run, failure=failure)
    _logger.info(
        "contract_check_finished",
        target=str(target) if target is not None else getattr(fn, "__qualname__", repr(fn)),
        passed=result.passed,
        num_tests=run.iterations_run,
        status=run.status.value,
    )
    return result


def checkable_fns(registry: SpecRegistry | None = None) -> list[FnIdentifier]:
    reg = registry if registry is not None else default_registry()
    return reg.contract_identifiers()


def _check_target(
    target: FnIdentifier,
    *,
    registry: SpecRegistry,
    num_tests: int | None,
    gen: Mapping[Hashable, GenSource] | None,
    seed: int | None,
) -> CheckResult:
    spec = registry.get(target)
    with uninstrumented(target) as raw:
        return check_fn(raw, spec, num_tests=num_tests, gen=gen, seed=seed, target=target)


def check(
    targets: TargetsArg = None,
    *,
    registry: SpecRegistry | None = None,
    num_tests: int | None = None,
    gen: Mapping[Hashable, GenSource] | None = None,
    max_workers: int | None = None,
    seed: int | None = None,
) -> list[CheckResult]:
    """Check every requested target that has a registered contract.

    Targets default to every checkable target in the registry; requested
    targets without a contract are skipped. Results keep target order.
    """

    reg = registry if registry is not None else default_registry()
    checkable = reg.contract_identifiers()
    requested = normalize_targets(targets)
    if requested is None:
        selected = checkable
    else:
        known = set(checkable)
        selected = [target for target in requested if target in known]

    calls = [
        functools.partial(
            _check_target, target, registry=reg, num_tests=num_tests, gen=gen, seed=seed
        )
        for target in selected
    ]
    workers = get_settings().max_workers if max_workers is None else max_workers
    return run_blocking(calls, max_concurrency=workers)


__all__ = ["check", "check_fn", "checkable_fns"]
