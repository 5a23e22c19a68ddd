"""Generator collaborator and canonical generators."""

from nexus_spec.generation.canonical import (
    any_value_strategy,
    generator_for_pattern,
    generator_for_set,
    generator_for_type,
)
from nexus_spec.generation.generator import GenSource, Generator, as_generator

__all__ = [
    "GenSource",
    "Generator",
    "any_value_strategy",
    "as_generator",
    "generator_for_pattern",
    "generator_for_set",
    "generator_for_type",
]
