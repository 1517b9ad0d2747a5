"""Tests for the default Python type ranker."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated, Any, Literal, NewType, Optional, Protocol, TypeVar, Union

import pytest

from overwire.compatibility import Compatibility, CompatibilityLevel, TypeCompatibilityRanker


class Animal:
    pass


class Dog(Animal):
    pass


class Puppy(Dog):
    pass


class Greeter(Protocol):
    def greet(self) -> str: ...


AnimalT = TypeVar("AnimalT", bound=Animal)
TextT = TypeVar("TextT", str, bytes)
AnyT = TypeVar("AnyT")
UserId = NewType("UserId", int)


class TestClassParameters:
    def test_identical_type_is_exact(self, ranker: TypeCompatibilityRanker) -> None:
        assert ranker.rank(int, int) == Compatibility(CompatibilityLevel.EXACT)

    def test_subclass_closeness_follows_mro(self, ranker: TypeCompatibilityRanker) -> None:
        assert ranker.rank(Puppy, Dog) == Compatibility(CompatibilityLevel.SUBTYPE, -1)
        assert ranker.rank(Puppy, Animal) == Compatibility(CompatibilityLevel.SUBTYPE, -2)
        assert ranker.rank(Puppy, Dog) > ranker.rank(Puppy, Animal)

    def test_bool_is_an_int_subtype(self, ranker: TypeCompatibilityRanker) -> None:
        assert ranker.rank(bool, int) == Compatibility(CompatibilityLevel.SUBTYPE, -1)

    def test_numeric_widening(self, ranker: TypeCompatibilityRanker) -> None:
        assert ranker.rank(int, float) == Compatibility(CompatibilityLevel.WIDENING, -1)
        assert ranker.rank(int, complex) == Compatibility(CompatibilityLevel.WIDENING, -2)
        assert ranker.rank(int, float) > ranker.rank(int, complex)

    def test_narrowing_is_rejected(self, ranker: TypeCompatibilityRanker) -> None:
        assert ranker.rank(float, int) is None

    def test_unrelated_type_is_rejected(self, ranker: TypeCompatibilityRanker) -> None:
        assert ranker.rank(str, int) is None

    def test_virtual_subclass_ranks_above_object(self, ranker: TypeCompatibilityRanker) -> None:
        sequence = ranker.rank(list, Sequence)
        assert sequence is not None
        assert sequence.level is CompatibilityLevel.SUBTYPE
        assert sequence > ranker.rank(list, object)

    def test_non_runtime_protocol_is_rejected(self, ranker: TypeCompatibilityRanker) -> None:
        assert ranker.rank(Dog, Greeter) is None


class TestSpecialForms:
    @pytest.mark.parametrize("param_type", [Any, object])
    def test_catch_all_parameters(self, ranker: TypeCompatibilityRanker, param_type: Any) -> None:
        assert ranker.rank(Dog, param_type) == Compatibility(CompatibilityLevel.ANY)

    @pytest.mark.parametrize("param_type", [Optional[int], Union[int, None], int | None])  # noqa: UP007
    def test_optional_accepts_none(self, ranker: TypeCompatibilityRanker, param_type: Any) -> None:
        assert ranker.rank(type(None), param_type) == Compatibility(CompatibilityLevel.EXACT)
        assert ranker.rank(int, param_type) == Compatibility(CompatibilityLevel.EXACT)
        assert ranker.rank(str, param_type) is None

    def test_union_takes_best_member(self, ranker: TypeCompatibilityRanker) -> None:
        assert ranker.rank(Puppy, Animal | Dog) == Compatibility(CompatibilityLevel.SUBTYPE, -1)

    def test_annotated_is_unwrapped(self, ranker: TypeCompatibilityRanker) -> None:
        assert ranker.rank(int, Annotated[int, "meta"]) == Compatibility(CompatibilityLevel.EXACT)

    def test_new_type_ranks_as_supertype(self, ranker: TypeCompatibilityRanker) -> None:
        assert ranker.rank(int, UserId) == Compatibility(CompatibilityLevel.EXACT)
        assert ranker.rank(bool, UserId) == Compatibility(CompatibilityLevel.SUBTYPE, -1)
        assert ranker.rank(str, UserId) is None

    def test_parametrized_generic_checks_origin(self, ranker: TypeCompatibilityRanker) -> None:
        assert ranker.rank(list, list[int]) == Compatibility(CompatibilityLevel.EXACT)
        assert ranker.rank(tuple, list[int]) is None

    def test_literal_is_rejected(self, ranker: TypeCompatibilityRanker) -> None:
        assert ranker.rank(int, Literal[1]) is None

    def test_none_annotation_means_none_type(self, ranker: TypeCompatibilityRanker) -> None:
        assert ranker.rank(type(None), None) == Compatibility(CompatibilityLevel.EXACT)


class TestTypeVars:
    def test_bound_typevar(self, ranker: TypeCompatibilityRanker) -> None:
        assert ranker.rank(Dog, AnimalT) == Compatibility(CompatibilityLevel.SUBTYPE, -1)
        assert ranker.rank(int, AnimalT) is None

    def test_constrained_typevar(self, ranker: TypeCompatibilityRanker) -> None:
        assert ranker.rank(bytes, TextT) == Compatibility(CompatibilityLevel.EXACT)
        assert ranker.rank(int, TextT) is None

    def test_unconstrained_typevar_accepts_anything(self, ranker: TypeCompatibilityRanker) -> None:
        assert ranker.rank(int, AnyT) == Compatibility(CompatibilityLevel.ANY)
