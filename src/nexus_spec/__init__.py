"""
nexus-spec — data specifications, generators and contract checking.

File: src/nexus_spec/__init__.py
Last updated: 2026-10-19

Purpose
- Package root. Re-exports the public API: spec constructors, the
  conform/explain/generate helpers, the registry, checks and instrumentation.

Functional requirements
- Must not have side effects at import time (no config loading, no logging
  handlers attached).
"""

from nexus_spec.errors import (
    CheckFailure,
    NoGeneratorError,
    SpecError,
    StubArgumentError,
    UnknownSpecError,
    UsageError,
)
from nexus_spec.generation import Generator
from nexus_spec.instrumentation import (
    instrument,
    instrument_disabled,
    instrumentable_fns,
    instrumented_fns,
    unstrument,
)
from nexus_spec.registry import (
    SpecRegistry,
    contracted,
    def_spec,
    default_registry,
    fdef,
    get_spec,
)
from nexus_spec.specs import (
    ANY,
    INVALID,
    Spec,
    all_of,
    coll_of,
    conform,
    conformer,
    contract,
    exercise,
    explain_data,
    explain_str,
    generate,
    is_invalid,
    keys,
    merge,
    spec,
    tuple_of,
    unform,
    valid,
)
from nexus_spec.targets import FnIdentifier
from nexus_spec.verification_plane import (
    abbrev_result,
    check,
    check_fn,
    checkable_fns,
    run_quick_check,
    summarize_results,
)

__version__ = "0.1.0"

__all__ = [
    "ANY",
    "INVALID",
    "CheckFailure",
    "FnIdentifier",
    "Generator",
    "NoGeneratorError",
    "Spec",
    "SpecError",
    "SpecRegistry",
    "StubArgumentError",
    "UnknownSpecError",
    "UsageError",
    "__version__",
    "abbrev_result",
    "all_of",
    "check",
    "check_fn",
    "checkable_fns",
    "coll_of",
    "conform",
    "conformer",
    "contract",
    "contracted",
    "def_spec",
    "default_registry",
    "exercise",
    "explain_data",
    "explain_str",
    "fdef",
    "generate",
    "get_spec",
    "instrument",
    "instrument_disabled",
    "instrumentable_fns",
    "instrumented_fns",
    "is_invalid",
    "keys",
    "merge",
    "run_quick_check",
    "spec",
    "summarize_results",
    "tuple_of",
    "unform",
    "unstrument",
    "valid",
]
