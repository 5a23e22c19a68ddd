"""
nexus-spec — specification variants.

File: src/nexus_spec/specs/__init__.py
Last updated: 2026-10-19

Purpose
- Export the ``Spec`` protocol, its variants and the conform/explain/generate
  helpers.
"""

from nexus_spec.specs.base import (
    INVALID,
    Invalid,
    Spec,
    conform,
    exercise,
    explain1,
    explain_data,
    explain_str,
    generate,
    gensub,
    is_invalid,
    specize,
    unform,
    valid,
)
from nexus_spec.specs.conjunction import ConjunctionSpec, all_of
from nexus_spec.specs.contract import ContractSpec, ContractStub, contract
from nexus_spec.specs.keys import KeysSpec, keys
from nexus_spec.specs.matcher import ANY, Matcher, MatcherKind, conformer, spec
from nexus_spec.specs.merge import MergeSpec, merge
from nexus_spec.specs.sequences import CollOfSpec, TupleSpec, coll_of, tuple_of

__all__ = [
    "ANY",
    "INVALID",
    "CollOfSpec",
    "ConjunctionSpec",
    "ContractSpec",
    "ContractStub",
    "Invalid",
    "KeysSpec",
    "Matcher",
    "MatcherKind",
    "MergeSpec",
    "Spec",
    "TupleSpec",
    "all_of",
    "coll_of",
    "conform",
    "conformer",
    "contract",
    "exercise",
    "explain1",
    "explain_data",
    "explain_str",
    "generate",
    "gensub",
    "is_invalid",
    "keys",
    "merge",
    "spec",
    "specize",
    "tuple_of",
    "unform",
    "valid",
]
