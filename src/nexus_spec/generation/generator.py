"""Generator collaborator backed by ``hypothesis`` search strategies.

A ``Generator`` is a thin, immutable handle over a hypothesis strategy. The
strategy carries the shrink machinery: every drawn value is recorded as a
choice sequence that the verification loop's shrinker walks towards shorter,
lexicographically smaller sequences. ``shrinkable`` lets a generator opt out
of that search so a failing run reports the raw counterexample only.
"""

from __future__ import annotations

import warnings
from collections.abc import Callable, Hashable, Iterator, Mapping
from typing import Any, Generic, TypeVar

from hypothesis import strategies as st
from hypothesis.control import currently_in_test_context
from hypothesis.errors import NonInteractiveExampleWarning
from hypothesis.strategies import SearchStrategy

from nexus_spec.errors import UsageError

T = TypeVar("T")
U = TypeVar("U")


class Generator(Generic[T]):
    """Lazy, possibly infinite source of domain values."""

    __slots__ = ("_shrinkable", "_strategy")

    def __init__(self, strategy: SearchStrategy[T], *, shrinkable: bool = True) -> None:
        if not isinstance(strategy, SearchStrategy):
            raise TypeError(f"expected a hypothesis SearchStrategy, got {type(strategy).__name__}")
        self._strategy = strategy
        self._shrinkable = shrinkable

    @property
    def strategy(self) -> SearchStrategy[T]:
        return self._strategy

    @property
    def shrinkable(self) -> bool:
        return self._shrinkable

    def map(self, fn: Callable[[T], U]) -> Generator[U]:
        return Generator(self._strategy.map(fn), shrinkable=self._shrinkable)

    def bind(self, fn: Callable[[T], Generator[U]]) -> Generator[U]:
        def _next_strategy(value: T) -> SearchStrategy[U]:
            return fn(value).strategy

        return Generator(self._strategy.flatmap(_next_strategy), shrinkable=self._shrinkable)

    def filter(self, predicate: Callable[[T], object]) -> Generator[T]:
        return Generator(self._strategy.filter(predicate), shrinkable=self._shrinkable)

    def without_shrinking(self) -> Generator[T]:
        return Generator(self._strategy, shrinkable=False)

    @classmethod
    def constant(cls, value: U) -> Generator[U]:
        return Generator(st.just(value))

    @staticmethod
    def tuple(*generators: Generator[Any]) -> Generator[tuple[Any, ...]]:
        return Generator(
            st.tuples(*(gen.strategy for gen in generators)),
            shrinkable=all(gen.shrinkable for gen in generators),
        )

    @staticmethod
    def fixed_dict(
        required: Mapping[Hashable, Generator[Any]],
        optional: Mapping[Hashable, Generator[Any]] | None = None,
    ) -> Generator[dict[Hashable, Any]]:
        optional = optional or {}
        strategy = st.fixed_dictionaries(
            {key: gen.strategy for key, gen in required.items()},
            optional={key: gen.strategy for key, gen in optional.items()},
        )
        shrinkable = all(gen.shrinkable for gen in (*required.values(), *optional.values()))
        return Generator(strategy, shrinkable=shrinkable)

    def produce_one(self) -> T:
        """Draw a single value outside of any verification trial."""

        if currently_in_test_context():
            raise UsageError("produce_one() cannot be called while a verification trial is running")
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", NonInteractiveExampleWarning)
            return self._strategy.example()

    def samples(self) -> Iterator[T]:
        while True:
            yield self.produce_one()

    def sample(self, count: int = 10) -> list[T]:
        if count < 0:
            raise ValueError("count must be >= 0")
        return [self.produce_one() for _ in range(count)]

    def __repr__(self) -> str:
        return f"Generator({self._strategy!r}, shrinkable={self._shrinkable})"


GenSource = Generator[Any] | SearchStrategy[Any] | Callable[[], Any]


def as_generator(source: GenSource) -> Generator[Any]:
    """Coerce a generator override (generator, strategy, or factory) to a ``Generator``."""

    if isinstance(source, Generator):
        return source
    if isinstance(source, SearchStrategy):
        return Generator(source)
    if callable(source):
        produced = source()
        if isinstance(produced, Generator):
            return produced
        if isinstance(produced, SearchStrategy):
            return Generator(produced)
        raise UsageError(
            f"generator factory {source!r} returned {type(produced).__name__}, "
            "expected a Generator or SearchStrategy"
        )
    raise UsageError(f"cannot use {source!r} as a generator")


__all__ = ["GenSource", "Generator", "as_generator"]
