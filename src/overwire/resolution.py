from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TypeAlias

from overwire.compatibility import Compatibility, CompatibilityRanker, TypeCompatibilityRanker
from overwire.descriptors import ArgumentProfile, CallableDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Found:
    """The single most specific applicable candidate."""

    descriptor: CallableDescriptor


@dataclass(frozen=True, slots=True)
class NoMatch:
    """No candidate accepts the argument count and types."""


@dataclass(frozen=True, slots=True)
class Ambiguous:
    """Several applicable candidates tie at the top specificity."""

    candidates: tuple[CallableDescriptor, ...]


ResolutionOutcome: TypeAlias = Found | NoMatch | Ambiguous
"""Result of ``OverloadResolver.resolve``."""

_Score: TypeAlias = tuple[Compatibility, ...]


@dataclass(frozen=True, slots=True)
class _Applicable:
    descriptor: CallableDescriptor
    score: _Score


class OverloadResolver:
    """Select the most specific overload for a runtime argument profile.

    Resolution runs in two passes. The fixed-arity pass considers candidates
    whose parameter count equals the argument count. Only when it finds no
    applicable candidate at all does the variable-arity pass run, where
    trailing arguments must be accepted by the component type of the last
    parameter.

    Within a pass every applicable candidate is scored with one
    ``Compatibility`` per argument. A candidate beats another when it is at
    least as compatible at every position and strictly more compatible at one.
    The winner must beat every other applicable candidate; otherwise the pass
    is ``Ambiguous``. The resolver holds no mutable state and never raises for
    data reasons.
    """

    def __init__(self, ranker: CompatibilityRanker | None = None) -> None:
        self._ranker: CompatibilityRanker = ranker or TypeCompatibilityRanker()

    def resolve(
        self,
        candidates: Iterable[CallableDescriptor],
        arguments: ArgumentProfile,
    ) -> ResolutionOutcome:
        """Pick the best candidate for ``arguments``.

        Args:
            candidates: Candidate signatures of one overloaded callable.
            arguments: Runtime types of the actual call arguments.

        Returns:
            ``Found`` with the winner, ``NoMatch`` when neither pass has an
            applicable candidate, or ``Ambiguous`` with the tied candidates.

        """
        fixed: list[CallableDescriptor] = []
        var_args: list[CallableDescriptor] = []
        for candidate in candidates:
            (var_args if candidate.is_var_args else fixed).append(candidate)

        outcome = self._most_specific(fixed, arguments)
        if isinstance(outcome, NoMatch):
            outcome = self._most_specific(var_args, arguments)

        if isinstance(outcome, Ambiguous):
            logger.debug(
                "Ambiguous overloads for %s: %s",
                arguments.arg_types,
                ", ".join(str(candidate) for candidate in outcome.candidates),
            )
        return outcome

    def _most_specific(
        self,
        candidates: Sequence[CallableDescriptor],
        arguments: ArgumentProfile,
    ) -> ResolutionOutcome:
        applicable: list[_Applicable] = []
        for candidate in candidates:
            score = self._score(candidate, arguments)
            if score is not None:
                applicable.append(_Applicable(descriptor=candidate, score=score))

        if not applicable:
            return NoMatch()
        if len(applicable) == 1:
            return Found(applicable[0].descriptor)

        for contender in applicable:
            if all(
                _beats(contender.score, other.score)
                for other in applicable
                if other is not contender
            ):
                return Found(contender.descriptor)

        undominated = tuple(
            contender.descriptor
            for contender in applicable
            if not any(
                _beats(other.score, contender.score)
                for other in applicable
                if other is not contender
            )
        )
        return Ambiguous(undominated)

    def _score(
        self,
        candidate: CallableDescriptor,
        arguments: ArgumentProfile,
    ) -> _Score | None:
        param_types = candidate.param_types
        arg_types = arguments.arg_types
        fixed_count = candidate.fixed_param_count

        if candidate.is_var_args:
            if len(arg_types) < fixed_count:
                return None
        elif len(arg_types) != fixed_count:
            return None

        score: list[Compatibility] = []
        for position, arg_type in enumerate(arg_types):
            param_type = param_types[min(position, len(param_types) - 1)]
            compatibility = self._ranker.rank(arg_type, param_type)
            if compatibility is None:
                return None
            score.append(compatibility)
        return tuple(score)


def _beats(score: _Score, other: _Score) -> bool:
    strictly_better = False
    for mine, theirs in zip(score, other, strict=True):
        if mine < theirs:
            return False
        if mine > theirs:
            strictly_better = True
    return strictly_better


__all__ = ["Ambiguous", "Found", "NoMatch", "OverloadResolver", "ResolutionOutcome"]
