"""
nexus-spec — runtime instrumentation of contracted callables.

File: src/nexus_spec/instrumentation.py
Last updated: 2026-10-19

Purpose
- Swap a target callable for a wrapper that conforms each call's inputs
  against the target's contract before delegating.

Functional requirements
- The wrapper delegates to a ``replace`` callable, a generated stub, or the
  raw original, in that order of preference.
- Non-conforming calls raise ``CheckFailure`` with ``failure=instrument``.
- Instrumenting an instrumented target wraps the raw original again.
- ``unstrument`` restores a raw original only if the wrapper is still in place.
- ``instrument_disabled()`` lets calls pass straight through for the current
  context; input conformance itself runs with instrumentation disabled.
"""

from __future__ import annotations

import functools
import threading
from collections.abc import Callable, Hashable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

from nexus_spec.domain.models import FailureKind
from nexus_spec.errors import CheckFailure, UsageError
from nexus_spec.generation.generator import GenSource
from nexus_spec.observability.logging import get_logger
from nexus_spec.registry import SpecRegistry, default_registry
from nexus_spec.specs.base import specize
from nexus_spec.specs.contract import ContractSpec
from nexus_spec.targets import FnIdentifier

_logger = get_logger(__name__)

_ENABLED: ContextVar[bool] = ContextVar("nexus_spec_instrument_enabled", default=True)

TargetsArg = FnIdentifier | Callable[..., Any] | Iterable[FnIdentifier | Callable[..., Any]] | None


@dataclass(frozen=True, slots=True)
class _Instrumented:
    target: FnIdentifier
    raw: Callable[..., Any]
    wrapped: Callable[..., Any]


_TABLE_LOCK = threading.RLock()
_INSTRUMENTED: dict[FnIdentifier, _Instrumented] = {}


@contextmanager
def instrument_disabled() -> Iterator[None]:
    token = _ENABLED.set(False)
    try:
        yield
    finally:
        _ENABLED.reset(token)


def instrument_enabled() -> bool:
    return _ENABLED.get()


def normalize_targets(targets: TargetsArg) -> list[FnIdentifier] | None:
    if targets is None:
        return None
    if isinstance(targets, FnIdentifier):
        return [targets]
    if callable(targets):
        return [FnIdentifier.of(targets)]
    return [
        target if isinstance(target, FnIdentifier) else FnIdentifier.of(target)
        for target in targets
    ]


def instrumentable_fns(
    *,
    registry: SpecRegistry | None = None,
    spec: Mapping[FnIdentifier, object] | None = None,
    stub: Iterable[FnIdentifier] = (),
    replace: Mapping[FnIdentifier, Callable[..., Any]] | None = None,
) -> list[FnIdentifier]:
    reg = registry if registry is not None else default_registry()
    found = set(reg.contract_identifiers())
    found.update(spec or {})
    found.update(stub)
    found.update(replace or {})
    return sorted(found, key=str)


def _checking_fn(
    target: FnIdentifier,
    raw: Callable[..., Any],
    delegate: Callable[..., Any],
    contract: ContractSpec,
) -> Callable[..., Any]:
    @functools.wraps(raw)
    def checked(*args: object, **kwargs: object) -> object:
        if _ENABLED.get():
            with instrument_disabled():
                problems = contract.explain_call_input(args, kwargs)
            if problems:
                raise CheckFailure(
                    f"call to {target} did not conform to its contract",
                    {
                        "problems": tuple(problems),
                        "args": args,
                        "supplementary": kwargs,
                        "target": target,
                        "failure": FailureKind.INSTRUMENT,
                    },
                )
        return delegate(*args, **kwargs)

    return checked


def _contract_for(
    target: FnIdentifier,
    registry: SpecRegistry,
    spec: Mapping[FnIdentifier, object] | None,
) -> ContractSpec | None:
    override = (spec or {}).get(target)
    found = specize(override, registry) if override is not None else registry.get(target)
    if found is None:
        return None
    if not isinstance(found, ContractSpec):
        raise UsageError(f"spec for {target} is not a function contract", {"target": target})
    return found


def _instrument1(
    target: FnIdentifier,
    *,
    registry: SpecRegistry,
    spec: Mapping[FnIdentifier, object] | None,
    stub: frozenset[FnIdentifier],
    gen: Mapping[Hashable, GenSource] | None,
    replace: Mapping[FnIdentifier, Callable[..., Any]] | None,
) -> FnIdentifier | None:
    contract = _contract_for(target, registry, spec)
    if contract is None:
        return None
    with _TABLE_LOCK:
        existing = _INSTRUMENTED.get(target)
        current = target.get()
        raw = existing.raw if existing is not None and current is existing.wrapped else current

        replacement = (replace or {}).get(target)
        if replacement is not None:
            delegate = replacement
        elif target in stub:
            delegate = contract.generate(gen).produce_one()
        else:
            delegate = raw

        wrapped = _checking_fn(target, raw, delegate, contract)
        target.redefine(wrapped)
        _INSTRUMENTED[target] = _Instrumented(target=target, raw=raw, wrapped=wrapped)
    _logger.debug(
        "fn_instrumented",
        target=str(target),
        stubbed=target in stub,
        replaced=replacement is not None,
    )
    return target


def instrument(
    targets: TargetsArg = None,
    *,
    registry: SpecRegistry | None = None,
    spec: Mapping[FnIdentifier, object] | None = None,
    stub: Iterable[FnIdentifier] = (),
    gen: Mapping[Hashable, GenSource] | None = None,
    replace: Mapping[FnIdentifier, Callable[..., Any]] | None = None,
) -> list[FnIdentifier]:
    """Instrument ``targets`` (default: every instrumentable target).

    ``spec`` overrides the registered contract per target, ``stub`` lists
    targets to replace with generated stubs (using ``gen`` overrides) and
    ``replace`` maps targets to replacement callables.
    """

    reg = registry if registry is not None else default_registry()
    stub_set = frozenset(stub)
    requested = normalize_targets(targets)
    if requested is None:
        requested = instrumentable_fns(registry=reg, spec=spec, stub=stub_set, replace=replace)
    instrumented: list[FnIdentifier] = []
    for target in requested:
        done = _instrument1(
            target, registry=reg, spec=spec, stub=stub_set, gen=gen, replace=replace
        )
        if done is not None:
            instrumented.append(done)
    return instrumented


def _unstrument1(target: FnIdentifier) -> _Instrumented | None:
    with _TABLE_LOCK:
        entry = _INSTRUMENTED.pop(target, None)
        if entry is None:
            return None
        if target.get() is entry.wrapped:
            target.redefine(entry.raw)
    _logger.debug("fn_unstrumented", target=str(target))
    return entry


def unstrument(targets: TargetsArg = None) -> list[FnIdentifier]:
    """Undo instrumentation of ``targets`` (default: everything instrumented)."""

    requested = normalize_targets(targets)
    if requested is None:
        with _TABLE_LOCK:
            requested = sorted(_INSTRUMENTED, key=str)
    return [target for target in requested if _unstrument1(target) is not None]


def instrumented_fns() -> list[FnIdentifier]:
    with _TABLE_LOCK:
        return sorted(_INSTRUMENTED, key=str)


@contextmanager
def uninstrumented(target: FnIdentifier) -> Iterator[Callable[..., Any]]:
    """Temporarily restore ``target``'s raw original, re-installing its wrapper afterwards."""

    entry = _unstrument1(target)
    try:
        yield target.get()
    finally:
        if entry is not None:
            with _TABLE_LOCK:
                target.redefine(entry.wrapped)
                _INSTRUMENTED[target] = entry


__all__ = [
    "instrument",
    "instrument_disabled",
    "instrument_enabled",
    "instrumentable_fns",
    "instrumented_fns",
    "normalize_targets",
    "uninstrumented",
    "unstrument",
]
