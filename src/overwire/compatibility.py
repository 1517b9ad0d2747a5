from __future__ import annotations

import inspect
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Protocol, TypeVar, get_origin

from overwire._internal.type_checks import (
    is_runtime_class,
    mro_distance,
    strip_annotated,
    strip_new_type,
    union_members,
)

_NONE_TYPE = type(None)

# (argument type, parameter type) -> widening steps, following the PEP 484 numeric tower.
_NUMERIC_WIDENING: dict[tuple[type[Any], type[Any]], int] = {
    (int, float): 1,
    (int, complex): 2,
    (float, complex): 1,
    (bool, float): 2,
    (bool, complex): 3,
}


class CompatibilityLevel(IntEnum):
    """Order how closely an argument type matches a parameter type.

    Higher values are more exact. Levels only need to be comparable to each
    other; the numbers carry no other meaning.
    """

    ANY = 1
    """The parameter accepts anything (``Any``, ``object`` or no annotation)."""

    WIDENING = 2
    """A numeric widening conversion, for example ``int`` into ``float``."""

    SUBTYPE = 3
    """The argument type is a subclass of the parameter type."""

    EXACT = 4
    """The argument type is the parameter type."""


@dataclass(frozen=True, order=True, slots=True)
class Compatibility:
    """Represent how well one argument fits one parameter.

    Values compare by ``level`` first and then by ``closeness``, so a subclass
    one step below the parameter type beats a subclass three steps below.
    """

    level: CompatibilityLevel
    closeness: int = 0


class CompatibilityRanker(Protocol):
    """Rank argument types against parameter types for overload resolution.

    Implementations are supplied by the value layer that pairs with the
    resolver. ``rank`` returns ``None`` to reject the argument, otherwise an
    orderable ``Compatibility`` where greater means more specific.
    """

    def rank(self, arg_type: type[Any], param_type: Any) -> Compatibility | None: ...


class TypeCompatibilityRanker:
    """Rank runtime types against Python type annotations.

    Understands plain classes, ``Annotated``, unions and ``Optional``,
    ``NewType`` aliases (ranked as their supertype), ``TypeVar`` bounds and
    constraints, parametrized generics (checked by their origin class) and the
    ``int``/``float``/``complex`` numeric tower. ``Any``, ``object`` and missing
    annotations accept every argument at the lowest level. Everything else,
    ``Literal`` included, rejects.
    """

    def rank(self, arg_type: type[Any], param_type: Any) -> Compatibility | None:
        param_type = strip_new_type(strip_annotated(param_type))

        if param_type is Any or param_type is inspect.Parameter.empty:
            return Compatibility(CompatibilityLevel.ANY)
        if param_type is None:
            param_type = _NONE_TYPE

        members = union_members(param_type)
        if members is not None:
            return self._rank_union(arg_type, members)

        if isinstance(param_type, TypeVar):
            return self._rank_typevar(arg_type, param_type)

        origin = get_origin(param_type)
        if origin is not None:
            if not is_runtime_class(origin):
                return None
            param_type = origin

        if not is_runtime_class(param_type):
            return None
        return self._rank_class(arg_type, param_type)

    def _rank_class(self, arg_type: type[Any], param_type: type[Any]) -> Compatibility | None:
        if arg_type is param_type:
            return Compatibility(CompatibilityLevel.EXACT)
        if param_type is object:
            return Compatibility(CompatibilityLevel.ANY)

        widening_steps = _NUMERIC_WIDENING.get((arg_type, param_type))
        if widening_steps is not None:
            return Compatibility(CompatibilityLevel.WIDENING, -widening_steps)

        try:
            is_subtype = issubclass(arg_type, param_type)
        except TypeError:
            # Protocols without @runtime_checkable refuse issubclass().
            return None
        if not is_subtype:
            return None

        distance = mro_distance(arg_type, param_type)
        if distance is None:
            # Virtual subclass: rank it just above ``object``.
            distance = len(arg_type.__mro__) - 1
        return Compatibility(CompatibilityLevel.SUBTYPE, -distance)

    def _rank_union(
        self,
        arg_type: type[Any],
        members: tuple[Any, ...],
    ) -> Compatibility | None:
        accepted = [
            compatibility
            for compatibility in (self.rank(arg_type, member) for member in members)
            if compatibility is not None
        ]
        return max(accepted) if accepted else None

    def _rank_typevar(self, arg_type: type[Any], typevar: TypeVar) -> Compatibility | None:
        if typevar.__constraints__:
            return self._rank_union(arg_type, typevar.__constraints__)
        if typevar.__bound__ is not None:
            return self.rank(arg_type, typevar.__bound__)
        return Compatibility(CompatibilityLevel.ANY)


__all__ = [
    "Compatibility",
    "CompatibilityLevel",
    "CompatibilityRanker",
    "TypeCompatibilityRanker",
]
