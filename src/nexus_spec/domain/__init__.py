"""
nexus-spec — domain records.

File: src/nexus_spec/domain/__init__.py
Last updated: 2026-10-19

Purpose
- Result records shared by specs, the verification loop and checks.

Functional requirements
- Records are immutable where callers may share them and carry ``to_dict`` exports.
"""

from nexus_spec.domain.models import (
    CheckResult,
    ExplainEntry,
    FailureKind,
    Fault,
    Ok,
    ResultType,
    RunStatus,
    TrialOutcome,
    VerificationRun,
    describe_test,
)

__all__ = [
    "CheckResult",
    "ExplainEntry",
    "FailureKind",
    "Fault",
    "Ok",
    "ResultType",
    "RunStatus",
    "TrialOutcome",
    "VerificationRun",
    "describe_test",
]
