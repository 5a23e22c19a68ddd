"""Instrumentable targets: ``(owner, attribute)`` handles on live callables."""

from __future__ import annotations

import importlib
import sys
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from types import ModuleType
from typing import Any

from nexus_spec.errors import UsageError


@dataclass(frozen=True, slots=True)
class FnIdentifier:
    """Names a callable by the object that owns it and the attribute holding it.

    ``owner`` is a module or a class. Looking the callable up through its owner
    on every call is what lets instrumentation swap it in place.
    """

    owner: object
    name: str

    @classmethod
    def of(cls, fn: Callable[..., Any], owner: object | None = None) -> FnIdentifier:
        """Derive the identifier of a module-level function or class attribute."""

        name = getattr(fn, "__name__", None)
        if not isinstance(name, str):
            raise UsageError(f"cannot derive an identifier for {fn!r}")
        if owner is not None:
            return cls(owner, name)

        module = sys.modules.get(getattr(fn, "__module__", "") or "")
        if module is None:
            raise UsageError(f"module of {fn!r} is not loaded")
        qualname: str = getattr(fn, "__qualname__", name)
        parts = qualname.split(".")
        if "<locals>" in parts:
            raise UsageError(f"{qualname} is a local function and cannot be targeted")
        resolved: object = module
        for part in parts[:-1]:
            resolved = getattr(resolved, part)
        return cls(resolved, parts[-1])

    @classmethod
    def parse(cls, target: str) -> FnIdentifier:
        """Parse ``package.module:function`` or ``package.module:Class.method``."""

        module_name, sep, attr_path = target.partition(":")
        if not sep or not module_name or not attr_path:
            raise UsageError(f"target must look like 'module:function', got {target!r}")
        owner: object = importlib.import_module(module_name)
        parts = attr_path.split(".")
        for part in parts[:-1]:
            owner = getattr(owner, part)
        return cls(owner, parts[-1])

    @property
    def owner_name(self) -> str:
        if isinstance(self.owner, ModuleType):
            return self.owner.__name__
        if isinstance(self.owner, type):
            return f"{self.owner.__module__}.{self.owner.__qualname__}"
        return repr(self.owner)

    def get(self) -> Callable[..., Any]:
        try:
            return getattr(self.owner, self.name)
        except AttributeError as exc:
            raise UsageError(f"{self} does not exist") from exc

    def redefine(self, fn: Callable[..., Any]) -> None:
        setattr(self.owner, self.name, fn)

    def invoke(
        self, args: Sequence[object], supplementary: Mapping[str, object] | None = None
    ) -> object:
        return invoke(self.get(), args, supplementary)

    def __str__(self) -> str:
        return f"{self.owner_name}.{self.name}"


def invoke(
    fn: Callable[..., Any],
    args: Sequence[object],
    supplementary: Mapping[str, object] | None = None,
) -> object:
    """Call ``fn`` with positional ``args`` and keyword ``supplementary`` input."""

    return fn(*args, **dict(supplementary or {}))


__all__ = ["FnIdentifier", "invoke"]
