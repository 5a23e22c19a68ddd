"""
nexus-spec — verification plane public API.

File: src/nexus_spec/verification_plane/__init__.py
Last updated: 2026-10-19

Purpose
- Export the bounded randomized verification loop, contract checks and
  result summaries.

Non-functional requirements
- Keep import-time behavior deterministic and lightweight.
"""

from nexus_spec.verification_plane.check import check, check_fn, checkable_fns
from nexus_spec.verification_plane.quick_check import evaluate, run_quick_check
from nexus_spec.verification_plane.report import abbrev_result, result_type, summarize_results

__all__ = [
    "abbrev_result",
    "check",
    "check_fn",
    "checkable_fns",
    "evaluate",
    "result_type",
    "run_quick_check",
    "summarize_results",
]
