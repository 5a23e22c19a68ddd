"""Stable constants shared across nexus-spec planes."""

from __future__ import annotations

from typing import Final

# Verification budgets.
DEFAULT_FSPEC_ITERATIONS: Final[int] = 21
DEFAULT_EXPLAIN_ITERATIONS: Final[int] = 100
DEFAULT_CHECK_NUM_TESTS: Final[int] = 1000
DEFAULT_MAX_WORKERS: Final[int] = 1

# Contract relation map keys.
ARGS_KEY: Final[str] = "args"
RET_KEY: Final[str] = "ret"
SUPPLEMENTARY_KEY: Final[str] = "supplementary"
RELATION_KEY: Final[str] = "relation"

# Upper bound on return values pre-drawn for a generated contract stub.
STUB_POOL_MAX_SIZE: Final[int] = 16

# Config discovery.
DEFAULT_CONFIG_FILE: Final[str] = "nexus_spec.toml"
PYPROJECT_FILE: Final[str] = "pyproject.toml"
PYPROJECT_TABLE: Final[tuple[str, ...]] = ("tool", "nexus_spec")
ENV_PREFIX: Final[str] = "NEXUS_SPEC_"

__all__ = [
    "ARGS_KEY",
    "DEFAULT_CHECK_NUM_TESTS",
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_EXPLAIN_ITERATIONS",
    "DEFAULT_FSPEC_ITERATIONS",
    "DEFAULT_MAX_WORKERS",
    "ENV_PREFIX",
    "PYPROJECT_FILE",
    "PYPROJECT_TABLE",
    "RELATION_KEY",
    "RET_KEY",
    "STUB_POOL_MAX_SIZE",
    "SUPPLEMENTARY_KEY",
]
