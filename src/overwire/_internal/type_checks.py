from __future__ import annotations

import types
from typing import Annotated, Any, NewType, TypeGuard, Union, get_args, get_origin


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def strip_annotated(annotation: Any) -> Any:
    """Return the inner type of ``Annotated[T, ...]``, or the annotation unchanged."""
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def strip_new_type(annotation: Any) -> Any:
    """Return the runtime supertype behind ``NewType`` aliases, or the annotation unchanged."""
    while isinstance(annotation, NewType):
        annotation = annotation.__supertype__
    return annotation


def union_members(annotation: Any) -> tuple[Any, ...] | None:
    """Return the members of ``Union[...]``/``X | Y``, or ``None`` for other annotations."""
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return get_args(annotation)
    return None


def mro_distance(child: type[Any], parent: type[Any]) -> int | None:
    """Return how many steps ``parent`` sits above ``child`` in its MRO.

    ``None`` means ``parent`` is not a nominal base, even though ``issubclass``
    may still accept it through ``__subclasshook__`` or ABC registration.
    """
    try:
        return child.__mro__.index(parent)
    except ValueError:
        return None


__all__ = [
    "is_runtime_class",
    "mro_distance",
    "strip_annotated",
    "strip_new_type",
    "union_members",
]
