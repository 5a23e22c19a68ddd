"""Utility exports for concurrency helpers."""

from nexus_spec.utils.concurrency import LazyCell, run_blocking

__all__ = ["LazyCell", "run_blocking"]
