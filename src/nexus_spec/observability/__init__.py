"""Public observability primitives: structured event logging."""

from nexus_spec.observability.logging import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
