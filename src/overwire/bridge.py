from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from overwire.candidates import CandidateSource, SignatureCandidateSource
from overwire.compatibility import CompatibilityRanker
from overwire.descriptors import ArgumentProfile, CallableDescriptor
from overwire.exceptions import (
    OverwireAmbiguousOverloadError,
    OverwireNoApplicableOverloadError,
)
from overwire.invoker import Invoker
from overwire.resolution import Ambiguous, Found, OverloadResolver

T = TypeVar("T")


class OverloadBridge:
    """Construct objects and call methods through their best-matching overload.

    The bridge enumerates candidates with a ``CandidateSource``, selects one
    with an ``OverloadResolver`` and calls it through an ``Invoker``. It holds
    no per-call state, so one bridge can serve many threads.

    Examples:
        .. code-block:: python

            bridge = OverloadBridge()
            point = bridge.construct(Point, [1, 2])
            moved = bridge.call_method(point, "shift", [1.5])

    """

    def __init__(
        self,
        *,
        ranker: CompatibilityRanker | None = None,
        candidate_source: CandidateSource | None = None,
    ) -> None:
        """Initialize a bridge.

        Args:
            ranker: Argument compatibility ranking; defaults to
                ``TypeCompatibilityRanker``.
            candidate_source: Candidate enumeration; defaults to
                ``SignatureCandidateSource``.

        """
        self._resolver = OverloadResolver(ranker)
        self._candidate_source: CandidateSource = candidate_source or SignatureCandidateSource()
        self._invoker = Invoker()

    def construct(self, cls: type[T], args: Sequence[Any] | None = None) -> T:
        """Create an instance of ``cls`` with the constructor overload matching ``args``.

        Args:
            cls: Class to instantiate.
            args: Positional constructor arguments; ``None`` means no arguments.

        Raises:
            OverwireInvalidTargetError: If ``cls`` is not a class.
            OverwireNoApplicableOverloadError: If no overload accepts ``args``.
            OverwireAmbiguousOverloadError: If several overloads tie.
            OverwireInvocationError: If the constructor itself raised.

        """
        descriptor = self.resolve_constructor(cls, args)
        return self._invoker.invoke(descriptor, cls, args)

    def call_method(self, obj: Any, name: str, args: Sequence[Any] | None = None) -> Any:
        """Call method ``name`` of ``obj`` with the overload matching ``args``.

        Raises:
            OverwireInvalidTargetError: If ``obj`` has no method ``name``.
            OverwireNoApplicableOverloadError: If no overload accepts ``args``.
            OverwireAmbiguousOverloadError: If several overloads tie.
            OverwireInvocationError: If the method itself raised.

        """
        candidates = self._candidate_source.methods_of(type(obj), name)
        descriptor = self._select(getattr(type(obj), name), candidates, args)
        return self._invoker.invoke(descriptor, getattr(obj, name), args)

    def resolve_constructor(
        self,
        cls: type[Any],
        args: Sequence[Any] | None = None,
    ) -> CallableDescriptor:
        """Return the constructor candidate of ``cls`` that ``construct`` would call."""
        candidates = self._candidate_source.constructors_of(cls)
        return self._select(cls, candidates, args)

    def _select(
        self,
        target: Any,
        candidates: Sequence[CallableDescriptor],
        args: Sequence[Any] | None,
    ) -> CallableDescriptor:
        arguments = ArgumentProfile.of(args)
        outcome = self._resolver.resolve(candidates, arguments)
        if isinstance(outcome, Found):
            return outcome.descriptor
        if isinstance(outcome, Ambiguous):
            raise OverwireAmbiguousOverloadError(
                target=target,
                arg_types=arguments.arg_types,
                candidates=outcome.candidates,
            )
        raise OverwireNoApplicableOverloadError(target=target, arg_types=arguments.arg_types)


__all__ = ["OverloadBridge"]
