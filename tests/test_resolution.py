"""Tests for overload resolution."""

from __future__ import annotations

import itertools
from typing import Any

import pytest

from overwire.candidates import invoke_fixed, invoke_var_args
from overwire.compatibility import Compatibility, CompatibilityLevel
from overwire.descriptors import ArgumentProfile, CallableDescriptor
from overwire.exceptions import OverwireInvalidDescriptorError
from overwire.resolution import Ambiguous, Found, NoMatch, OverloadResolver


class Base:
    pass


class Derived(Base):
    pass


def fixed(name: str, *param_types: Any) -> CallableDescriptor:
    return CallableDescriptor(
        name=name,
        param_types=param_types,
        is_var_args=False,
        invoke=invoke_fixed,
    )


def var_args(name: str, *param_types: Any) -> CallableDescriptor:
    return CallableDescriptor(
        name=name,
        param_types=param_types,
        is_var_args=True,
        invoke=invoke_var_args,
    )


def profile(*args: Any) -> ArgumentProfile:
    return ArgumentProfile.of(args)


class TestFixedArityPass:
    def test_single_applicable_overload_is_found_in_any_order(
        self,
        resolver: OverloadResolver,
    ) -> None:
        applicable = fixed("f", int, str)
        candidates = [applicable, fixed("f", int), fixed("f", str, str), fixed("f", int, int)]

        for ordering in itertools.permutations(candidates):
            assert resolver.resolve(ordering, profile(1, "a")) == Found(applicable)

    def test_identical_signatures_are_ambiguous(self, resolver: OverloadResolver) -> None:
        first = fixed("first", int)
        second = fixed("second", int)

        outcome = resolver.resolve([first, second], profile(1))

        assert isinstance(outcome, Ambiguous)
        assert set(outcome.candidates) == {first, second}

    def test_crossed_specificity_is_ambiguous(self, resolver: OverloadResolver) -> None:
        left = fixed("left", int, object)
        right = fixed("right", object, int)

        outcome = resolver.resolve([left, right], profile(1, 2))

        assert outcome == Ambiguous((left, right))

    def test_exact_match_beats_widening(self, resolver: OverloadResolver) -> None:
        as_int = fixed("f", int)
        as_float = fixed("f", float)

        assert resolver.resolve([as_float, as_int], profile(1)) == Found(as_int)
        assert resolver.resolve([as_float, as_int], profile(1.5)) == Found(as_float)

    def test_closest_base_class_wins(self, resolver: OverloadResolver) -> None:
        takes_base = fixed("f", Base)
        takes_object = fixed("f", object)

        assert resolver.resolve([takes_object, takes_base], profile(Derived())) == Found(takes_base)

    def test_exact_subclass_beats_base(self, resolver: OverloadResolver) -> None:
        takes_base = fixed("f", Base)
        takes_derived = fixed("f", Derived)

        assert resolver.resolve([takes_base, takes_derived], profile(Derived())) == Found(
            takes_derived,
        )
        assert resolver.resolve([takes_base, takes_derived], profile(Base())) == Found(takes_base)

    def test_zero_arguments_select_nullary_overload(self, resolver: OverloadResolver) -> None:
        nullary = fixed("f")

        assert resolver.resolve([fixed("f", int), nullary], profile()) == Found(nullary)

    def test_none_argument_matches_optional(self, resolver: OverloadResolver) -> None:
        optional = fixed("f", int | None)

        assert resolver.resolve([fixed("f", int), optional], profile(None)) == Found(optional)


class TestVariableArityPass:
    def test_fixed_overload_preferred_when_arity_matches(self, resolver: OverloadResolver) -> None:
        single = fixed("f", int)
        variadic = var_args("f", int, int)

        assert resolver.resolve([variadic, single], profile(1)) == Found(single)

    def test_variadic_overload_used_when_no_fixed_overload_applies(
        self,
        resolver: OverloadResolver,
    ) -> None:
        single = fixed("f", int)
        variadic = var_args("f", int, int)

        assert resolver.resolve([single, variadic], profile(1, 2, 3)) == Found(variadic)

    def test_zero_trailing_arguments_are_accepted(self, resolver: OverloadResolver) -> None:
        variadic = var_args("f", str, int)

        assert resolver.resolve([variadic], profile("a")) == Found(variadic)

    def test_missing_leading_arguments_are_rejected(self, resolver: OverloadResolver) -> None:
        variadic = var_args("f", str, str, int)

        assert resolver.resolve([variadic], profile("a")) == NoMatch()

    def test_incompatible_trailing_argument_rejects(self, resolver: OverloadResolver) -> None:
        variadic = var_args("f", str, int)

        assert resolver.resolve([variadic], profile("a", 1, "b")) == NoMatch()

    def test_more_specific_component_type_wins(self, resolver: OverloadResolver) -> None:
        ints = var_args("f", int)
        objects = var_args("f", object)

        assert resolver.resolve([objects, ints], profile(1, 2)) == Found(ints)

    def test_ambiguous_fixed_pass_does_not_fall_back_to_variadic(
        self,
        resolver: OverloadResolver,
    ) -> None:
        first = fixed("first", int)
        second = fixed("second", int)

        outcome = resolver.resolve([first, second, var_args("f", int)], profile(1))

        assert isinstance(outcome, Ambiguous)
        assert set(outcome.candidates) == {first, second}


class TestNoMatch:
    def test_arity_mismatch(self, resolver: OverloadResolver) -> None:
        assert resolver.resolve([fixed("f", int)], profile(1, 2)) == NoMatch()

    def test_type_mismatch(self, resolver: OverloadResolver) -> None:
        assert resolver.resolve([fixed("f", int)], profile("a")) == NoMatch()

    def test_empty_candidates(self, resolver: OverloadResolver) -> None:
        assert resolver.resolve([], profile()) == NoMatch()


class TestCustomRanker:
    def test_supplied_ranker_drives_applicability(self) -> None:
        class ExactOnlyRanker:
            def rank(self, arg_type: type[Any], param_type: Any) -> Compatibility | None:
                if arg_type is param_type:
                    return Compatibility(CompatibilityLevel.EXACT)
                return None

        resolver = OverloadResolver(ExactOnlyRanker())
        takes_float = fixed("f", float)

        assert resolver.resolve([takes_float], profile(1)) == NoMatch()
        assert resolver.resolve([takes_float], profile(1.0)) == Found(takes_float)


class TestDescriptors:
    def test_variadic_descriptor_without_parameters_is_rejected(self) -> None:
        with pytest.raises(OverwireInvalidDescriptorError):
            var_args("broken")

    def test_descriptor_string_marks_variadic_slot(self) -> None:
        assert str(var_args("Path", str, str)) == "Path(str, *str)"
        assert str(fixed("Point", int, int)) == "Point(int, int)"

    def test_profile_of_none_is_empty(self) -> None:
        assert len(ArgumentProfile.of(None)) == 0
        assert ArgumentProfile.of([1, "a", None]).arg_types == (int, str, type(None))
