"""
nexus-spec — spec registry.

File: src/nexus_spec/registry.py
Last updated: 2026-10-19

Purpose
- Map spec names (strings or ``FnIdentifier`` targets) to specifications.

Functional requirements
- ``define`` stores the spec under its name, tagging it with that name so
  explain output can report it in ``via``.
- A name may be registered as an alias of another name; ``resolve`` follows
  aliases and rejects cycles.
- All operations are safe to call from multiple threads.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable
from typing import Any

from nexus_spec.errors import UnknownSpecError, UsageError
from nexus_spec.specs.base import Spec, is_spec_name, specize
from nexus_spec.specs.contract import ContractSpec
from nexus_spec.targets import FnIdentifier


class SpecRegistry:
    """Thread-safe name -> spec mapping."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._entries: dict[Hashable, Spec | Hashable] = {}

    def define(self, name: Hashable, spec: object | None) -> Hashable:
        """Register ``spec`` under ``name``; ``None`` removes the entry."""

        if not is_spec_name(name):
            raise UsageError(f"spec names must be str or FnIdentifier, got {name!r}")
        if spec is None:
            self.remove(name)
            return name
        entry: Spec | Hashable
        if is_spec_name(spec):
            entry = spec  # type: ignore[assignment]
        else:
            entry = specize(spec, self).with_name(name)
        with self._lock:
            self._entries[name] = entry
        return name

    def get(self, name: Hashable) -> Spec | None:
        try:
            return self.resolve(name)
        except UnknownSpecError:
            return None

    def resolve(self, name: Hashable) -> Spec:
        seen: list[Hashable] = []
        current = name
        with self._lock:
            while True:
                if current in seen:
                    chain = " -> ".join(str(item) for item in (*seen, current))
                    raise UsageError(f"alias cycle in spec registry: {chain}")
                seen.append(current)
                try:
                    entry = self._entries[current]
                except KeyError:
                    raise UnknownSpecError(
                        f"unable to resolve spec: {current}", {"name": current}
                    ) from None
                if isinstance(entry, Spec):
                    return entry
                current = entry

    def remove(self, name: Hashable) -> None:
        with self._lock:
            self._entries.pop(name, None)

    def names(self) -> list[Hashable]:
        with self._lock:
            return sorted(self._entries, key=str)

    def contract_identifiers(self) -> list[FnIdentifier]:
        """Targets whose registered spec is a function contract."""

        with self._lock:
            identifiers = [name for name in self._entries if isinstance(name, FnIdentifier)]
        return sorted(
            (ident for ident in identifiers if isinstance(self.get(ident), ContractSpec)),
            key=str,
        )

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


_DEFAULT_REGISTRY = SpecRegistry()


def default_registry() -> SpecRegistry:
    return _DEFAULT_REGISTRY


def _active(registry: SpecRegistry | None) -> SpecRegistry:
    # An empty registry is falsy; only None selects the default.
    return registry if registry is not None else _DEFAULT_REGISTRY


def def_spec(
    name: Hashable, spec: object | None, *, registry: SpecRegistry | None = None
) -> Hashable:
    return _active(registry).define(name, spec)


def get_spec(name: Hashable, *, registry: SpecRegistry | None = None) -> Spec | None:
    return _active(registry).get(name)


def fdef(
    fn: Callable[..., Any] | FnIdentifier,
    *,
    args: object | None = None,
    ret: object | None = None,
    relation: object | None = None,
    supplementary: object | None = None,
    registry: SpecRegistry | None = None,
) -> FnIdentifier:
    """Register a function contract for ``fn`` and return its identifier."""

    target = fn if isinstance(fn, FnIdentifier) else FnIdentifier.of(fn)
    reg = _active(registry)
    reg.define(
        target,
        ContractSpec(args, ret, relation, supplementary=supplementary, registry=reg),
    )
    return target


def contracted(
    *,
    args: object | None = None,
    ret: object | None = None,
    relation: object | None = None,
    supplementary: object | None = None,
    registry: SpecRegistry | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator form of ``fdef``; returns the function unchanged."""

    def decorate(fn: Callable[..., Any]) -> Callable[..., Any]:
        fdef(
            fn,
            args=args,
            ret=ret,
            relation=relation,
            supplementary=supplementary,
            registry=registry,
        )
        return fn

    return decorate


__all__ = [
    "SpecRegistry",
    "contracted",
    "def_spec",
    "default_registry",
    "fdef",
    "get_spec",
]
