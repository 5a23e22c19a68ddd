"""Canonical generators for recognized test shapes."""

from __future__ import annotations

import enum
import re
from collections.abc import Callable, Iterable
from typing import Any, Final

from hypothesis import strategies as st
from hypothesis.errors import InvalidArgument, ResolutionFailed
from hypothesis.strategies import SearchStrategy

from nexus_spec.errors import NoGeneratorError
from nexus_spec.generation.generator import Generator


def _finite_floats() -> SearchStrategy[float]:
    return st.floats(allow_nan=False, allow_infinity=False)


_TYPE_STRATEGIES: Final[dict[type, Callable[[], SearchStrategy[Any]]]] = {
    bool: st.booleans,
    int: st.integers,
    float: _finite_floats,
    str: st.text,
    bytes: st.binary,
    type(None): st.none,
}


def any_value_strategy() -> SearchStrategy[object]:
    """Scalars of every canonical shape; backs the ``ANY`` spec."""

    return st.one_of(st.none(), st.booleans(), st.integers(), _finite_floats(), st.text())


def generator_for_type(tag: type) -> Generator[Any]:
    factory = _TYPE_STRATEGIES.get(tag)
    if factory is not None:
        return Generator(factory())
    if issubclass(tag, enum.Enum):
        members = list(tag)
        if not members:
            raise NoGeneratorError(f"enum {tag.__qualname__} has no members to generate")
        return Generator(st.sampled_from(members))

    strategy = st.from_type(tag)
    try:
        strategy.validate()
    except (ResolutionFailed, InvalidArgument) as exc:
        raise NoGeneratorError(
            f"no canonical generator for type {tag.__qualname__}",
            {"type": tag.__qualname__},
        ) from exc
    return Generator(strategy)


def generator_for_set(members: Iterable[object]) -> Generator[Any]:
    ordered = sorted(members, key=repr)
    if not ordered:
        raise NoGeneratorError("cannot generate members of an empty set")
    return Generator(st.sampled_from(ordered))


def generator_for_pattern(pattern: re.Pattern[str]) -> Generator[str]:
    # Unanchored, matching conform's re.search.
    return Generator(st.from_regex(pattern))


__all__ = [
    "any_value_strategy",
    "generator_for_pattern",
    "generator_for_set",
    "generator_for_type",
]
