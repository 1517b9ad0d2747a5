from enum import Enum


class DefaultedParametersPolicy(str, Enum):
    """Policy for positional parameters that declare a default value."""

    EXPAND = "expand"
    """Emit one fixed-arity candidate per number of supplied defaulted parameters."""

    REQUIRE_ALL = "require_all"
    """Emit only the candidate that takes every positional parameter."""
