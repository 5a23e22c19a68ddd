"""
nexus-spec — effective settings record and the active-settings slot.

File: src/nexus_spec/config/settings.py
Last updated: 2026-10-19

Purpose
- Hold the knobs the verification loop, contracts and checks read at call time.

Functional requirements
- ``get_settings()`` returns the settings bound to the current context, else the
  process default installed by ``configure()``, else built-in defaults.
- ``use_settings()`` swaps settings for the duration of a ``with`` block only.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass
from typing import Final

from nexus_spec.constants import (
    DEFAULT_CHECK_NUM_TESTS,
    DEFAULT_EXPLAIN_ITERATIONS,
    DEFAULT_FSPEC_ITERATIONS,
    DEFAULT_MAX_WORKERS,
)

LOG_LEVELS: Final[frozenset[str]] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True, slots=True)
class SpecSettings:
    """Effective runtime settings."""

    fspec_iterations: int = DEFAULT_FSPEC_ITERATIONS
    explain_iterations: int = DEFAULT_EXPLAIN_ITERATIONS
    check_num_tests: int = DEFAULT_CHECK_NUM_TESTS
    max_workers: int = DEFAULT_MAX_WORKERS
    seed: int | None = None
    log_level: str = "WARNING"
    log_json: bool = False

    def __post_init__(self) -> None:
        for field_name in ("fspec_iterations", "explain_iterations", "check_num_tests"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{field_name} must be a non-negative integer")
        if (
            isinstance(self.max_workers, bool)
            or not isinstance(self.max_workers, int)
            or self.max_workers <= 0
        ):
            raise ValueError("max_workers must be a positive integer")
        seed = self.seed
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            raise ValueError("seed must be an integer")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}")
        object.__setattr__(self, "log_level", self.log_level.upper())

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


_ACTIVE: ContextVar[SpecSettings | None] = ContextVar("nexus_spec_settings", default=None)
_DEFAULT_LOCK = threading.Lock()
_default = SpecSettings()


def get_settings() -> SpecSettings:
    active = _ACTIVE.get()
    if active is not None:
        return active
    return _default


def configure(settings: SpecSettings) -> None:
    """Install ``settings`` as the process-wide default."""

    global _default
    with _DEFAULT_LOCK:
        _default = settings


@contextmanager
def use_settings(settings: SpecSettings) -> Iterator[SpecSettings]:
    token = _ACTIVE.set(settings)
    try:
        yield settings
    finally:
        _ACTIVE.reset(token)


__all__ = ["LOG_LEVELS", "SpecSettings", "configure", "get_settings", "use_settings"]
