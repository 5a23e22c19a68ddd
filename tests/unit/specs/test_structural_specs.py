"""
nexus-spec — unit tests for structural specs

File: tests/unit/specs/test_structural_specs.py
Last updated: 2026-10-19

Purpose
- Validate ``KeysSpec``, ``TupleSpec`` and ``CollOfSpec`` conform, explain paths and generation.
"""

from __future__ import annotations

import pytest

from nexus_spec.errors import UsageError
from nexus_spec.registry import SpecRegistry
from nexus_spec.specs import INVALID, KeysSpec, coll_of, conformer, explain_data, keys, tuple_of
from nexus_spec.specs.keys import has_key, is_mapping
from nexus_spec.specs.sequences import count_between, has_length, is_distinct, is_sequence


def _problems(spec: object, value: object) -> tuple[object, ...]:
    data = explain_data(spec, value)
    assert data is not None
    return data["problems"]  # type: ignore[return-value]


# ---------------------------------------------------------------------------
# KeysSpec
# ---------------------------------------------------------------------------


def test_keys_conform_keeps_unlisted_keys_and_conforms_listed_ones() -> None:
    spec = keys({"n": conformer(lambda value: value * 10)}, {"label": str})

    assert spec.conform({"n": 2, "extra": True}) == {"n": 20, "extra": True}
    assert spec.conform({"n": 2, "label": 5}) is INVALID
    assert spec.conform([("n", 2)]) is INVALID


def test_keys_explain_locates_value_problems_by_key() -> None:
    spec = keys({"n": int}, {"label": str})

    problems = _problems(spec, {"n": "x", "label": 3})

    assert [entry.path for entry in problems] == [("n",), ("label",)]  # type: ignore[attr-defined]
    assert [entry.in_ for entry in problems] == [("n",), ("label",)]  # type: ignore[attr-defined]


def test_keys_explain_reports_missing_required_keys_and_non_mappings() -> None:
    spec = keys({"n": int})

    (missing,) = _problems(spec, {})
    (shape,) = _problems(spec, 3)

    assert missing.pred == (has_key, ({}, "n"))  # type: ignore[attr-defined]
    assert shape.pred == (is_mapping, (3,))  # type: ignore[attr-defined]


def test_bare_keys_name_registered_specs() -> None:
    registry = SpecRegistry()
    registry.define("user/id", int)
    spec = KeysSpec(["user/id"], registry=registry)

    assert spec.conform({"user/id": 3}) == {"user/id": 3}
    (entry,) = _problems(spec, {"user/id": "x"})

    assert entry.via == ("user/id",)  # type: ignore[attr-defined]
    assert entry.path == ("user/id",)  # type: ignore[attr-defined]


def test_keys_generation_includes_required_keys() -> None:
    spec = keys({"n": int}, {"label": str})

    for value in spec.generate().sample(20):
        assert "n" in value
        assert set(value) <= {"n", "label"}
        assert spec.is_valid(value)


# ---------------------------------------------------------------------------
# TupleSpec
# ---------------------------------------------------------------------------


def test_tuple_conforms_positionally_to_a_tuple() -> None:
    spec = tuple_of(int, str)

    assert spec.conform([1, "a"]) == (1, "a")
    assert spec.conform((1,)) is INVALID
    assert spec.conform("ab") is INVALID


def test_tuple_explain_locates_element_by_index() -> None:
    spec = tuple_of(int, str)

    (entry,) = _problems(spec, (1, 2))
    (length,) = _problems(spec, (1,))
    (shape,) = _problems(spec, "ab")

    assert entry.path == (1,)  # type: ignore[attr-defined]
    assert entry.in_ == (1,)  # type: ignore[attr-defined]
    assert entry.pred == (str, (2,))  # type: ignore[attr-defined]
    assert length.pred == (has_length, ((1,), 2))  # type: ignore[attr-defined]
    assert shape.pred == (is_sequence, ("ab",))  # type: ignore[attr-defined]


def test_tuple_generation_conforms() -> None:
    spec = tuple_of(int, bool)

    for value in spec.generate().sample(20):
        assert isinstance(value, tuple)
        assert spec.is_valid(value)


# ---------------------------------------------------------------------------
# CollOfSpec
# ---------------------------------------------------------------------------


def test_coll_of_conforms_every_element_and_keeps_the_container_type() -> None:
    spec = coll_of(conformer(lambda value: value + 1))

    assert spec.conform([1, 2]) == [2, 3]
    assert spec.conform((1, 2)) == (2, 3)
    assert spec.conform("12") is INVALID


def test_coll_of_explain_locates_bad_elements_by_index_only_in_value() -> None:
    spec = coll_of(int)

    (entry,) = _problems(spec, [1, "x", 3])

    assert entry.path == ()  # type: ignore[attr-defined]
    assert entry.in_ == (1,)  # type: ignore[attr-defined]
    assert entry.val == "x"  # type: ignore[attr-defined]


def test_coll_of_shape_constraints() -> None:
    counted = coll_of(int, count=2)
    distinct = coll_of(int, distinct=True)
    as_tuple = coll_of(int, kind=tuple)

    assert counted.conform([1]) is INVALID
    (entry,) = _problems(counted, [1])
    assert entry.pred == (count_between, ([1], 2, 2))  # type: ignore[attr-defined]
    assert distinct.conform([1, 1]) is INVALID
    assert _problems(distinct, [1, 1])[0].pred[0] is is_distinct  # type: ignore[attr-defined]
    assert as_tuple.conform([1]) is INVALID
    assert as_tuple.conform((1,)) == (1,)


def test_coll_of_into_rebuilds_the_conformed_collection() -> None:
    assert coll_of(int, into=frozenset).conform([1, 2, 2]) == frozenset({1, 2})


def test_coll_of_rejects_contradictory_counts() -> None:
    with pytest.raises(UsageError):
        coll_of(int, count=2, min_count=1)
    with pytest.raises(UsageError):
        coll_of(int, min_count=3, max_count=1)


def test_coll_of_generation_honours_bounds_and_distinctness() -> None:
    spec = coll_of(int, min_count=1, max_count=3, distinct=True, kind=tuple)

    for value in spec.generate().sample(20):
        assert isinstance(value, tuple)
        assert 1 <= len(value) <= 3
        assert spec.is_valid(value)
