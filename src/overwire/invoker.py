from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from overwire.descriptors import CallableDescriptor
from overwire.exceptions import OverwireInvocationError


def pack_arguments(descriptor: CallableDescriptor, args: Sequence[Any] | None) -> tuple[Any, ...]:
    """Adapt call arguments to the positional layout of ``descriptor``.

    Fixed-arity descriptors get the arguments unchanged. For a variable-arity
    descriptor with ``k`` parameters the first ``k - 1`` arguments stay
    positional and the rest are packed, in order, into a new list passed as the
    final argument. The list is empty when there are no trailing arguments.

    Args:
        descriptor: Candidate selected by the resolver.
        args: Raw call arguments; ``None`` means no arguments.

    """
    arguments = tuple(args) if args is not None else ()
    if not descriptor.is_var_args:
        return arguments

    fixed_count = descriptor.fixed_param_count
    return (*arguments[:fixed_count], list(arguments[fixed_count:]))


class Invoker:
    """Pack arguments for a selected descriptor and perform the call."""

    def invoke(
        self,
        descriptor: CallableDescriptor,
        target: Any,
        args: Sequence[Any] | None,
    ) -> Any:
        """Call ``descriptor`` on ``target`` with ``args``.

        Raises:
            OverwireInvocationError: If the underlying call raised. The original
                exception is chained and available as ``cause``.

        """
        packed = pack_arguments(descriptor, args)
        try:
            return descriptor.invoke(target, packed)
        except Exception as error:
            raise OverwireInvocationError(descriptor, error) from error


__all__ = ["Invoker", "pack_arguments"]
