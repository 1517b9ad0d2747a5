from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, TypeAlias

from overwire.exceptions import OverwireInvalidDescriptorError

DescriptorInvoke: TypeAlias = Callable[[Any, Sequence[Any]], Any]
"""Perform the native call: ``invoke(target, packed_args) -> result``."""


@dataclass(frozen=True, slots=True)
class CallableDescriptor:
    """Describe one candidate signature of an overloaded constructor or method.

    ``param_types`` lists one type per positional slot. For a variable-arity
    descriptor the last entry is the component type of the trailing slot, so
    ``f(a: int, *rest: str)`` is described as ``(int, str)`` with
    ``is_var_args=True``.

    ``invoke`` receives the call target (a class for constructors, a bound
    method for methods) and the packed positional arguments produced by
    ``overwire.invoker.pack_arguments``.
    """

    name: str
    param_types: tuple[Any, ...]
    is_var_args: bool
    invoke: DescriptorInvoke

    def __post_init__(self) -> None:
        if self.is_var_args and not self.param_types:
            msg = f"Variable-arity candidate '{self.name}' must declare at least one parameter."
            raise OverwireInvalidDescriptorError(msg)

    @property
    def fixed_param_count(self) -> int:
        """Return the number of parameters that bind exactly one argument each."""
        if self.is_var_args:
            return len(self.param_types) - 1
        return len(self.param_types)

    def __str__(self) -> str:
        formatted = [_type_name(param_type) for param_type in self.param_types]
        if self.is_var_args:
            formatted[-1] = f"*{formatted[-1]}"
        return f"{self.name}({', '.join(formatted)})"


@dataclass(frozen=True, slots=True)
class ArgumentProfile:
    """Snapshot of the runtime types of the actual call arguments."""

    arg_types: tuple[type[Any], ...]

    @classmethod
    def of(cls, args: Sequence[Any] | None) -> ArgumentProfile:
        """Build a profile from call arguments; ``None`` means no arguments."""
        if args is None:
            return cls(arg_types=())
        return cls(arg_types=tuple(type(arg) for arg in args))

    def __len__(self) -> int:
        return len(self.arg_types)

    def __iter__(self) -> Iterator[type[Any]]:
        return iter(self.arg_types)


def _type_name(param_type: Any) -> str:
    if isinstance(param_type, type):
        return param_type.__qualname__
    return repr(param_type).removeprefix("typing.")


__all__ = ["ArgumentProfile", "CallableDescriptor", "DescriptorInvoke"]
