from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from overwire.descriptors import CallableDescriptor


class OverwireError(Exception):
    """Represent a base class for all overwire-specific failures.

    Catch this type when you want to handle any overwire error path without
    matching each concrete exception class individually.
    """


class OverwireInvalidDescriptorError(OverwireError):
    """Signal a malformed call candidate.

    Raised while building a ``CallableDescriptor``, for example a
    variable-arity descriptor without parameters, or a signature whose
    annotations cannot be resolved.

    This is a programming error in the candidate source, not a runtime
    resolution failure.
    """


class OverwireInvalidTargetError(OverwireError):
    """Signal a construction or call target that cannot carry overloads.

    Raised by ``OverloadBridge.construct`` when the target is not a class, and
    by ``OverloadBridge.call_method`` when the named method does not exist.
    """


class OverwireResolutionError(OverwireError):
    """Represent overload selection failures.

    Resolution errors are returned to the immediate caller and never retried
    internally: they point at a mismatch between the call site and the
    overload set.
    """

    def __init__(self, message: str, *, target: Any, arg_types: Sequence[type[Any]]) -> None:
        super().__init__(message)
        self.target = target
        self.arg_types = tuple(arg_types)


class OverwireNoApplicableOverloadError(OverwireResolutionError):
    """Signal that no candidate accepts the argument count and types.

    Both the fixed-arity and the variable-arity passes were exhausted.

    Typical fixes include passing arguments of the annotated types or adding an
    overload that accepts them.
    """

    def __init__(self, *, target: Any, arg_types: Sequence[type[Any]]) -> None:
        message = (
            f"There's no public {_target_name(target)} overload with a parameter list "
            f"compatible with ({_type_list(arg_types)})."
        )
        super().__init__(message, target=target, arg_types=arg_types)


class OverwireAmbiguousOverloadError(OverwireResolutionError):
    """Signal that two or more candidates tie at the top specificity.

    Ties are never broken silently. Typical fixes include passing arguments of
    more precise types or removing overlapping overloads.
    """

    def __init__(
        self,
        *,
        target: Any,
        arg_types: Sequence[type[Any]],
        candidates: Sequence[CallableDescriptor],
    ) -> None:
        formatted_candidates = ", ".join(str(candidate) for candidate in candidates)
        message = (
            f"There are multiple public {_target_name(target)} overloads that match "
            f"({_type_list(arg_types)}) with the same preferability: {formatted_candidates}."
        )
        super().__init__(message, target=target, arg_types=arg_types)
        self.candidates = tuple(candidates)


class OverwireInvocationError(OverwireError):
    """Signal that the selected constructor or method itself failed.

    The original exception is kept on ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, descriptor: CallableDescriptor, cause: Exception) -> None:
        super().__init__(f"Calling {descriptor} failed: {type(cause).__name__}: {cause}")
        self.descriptor = descriptor
        self.cause = cause


class OverwireConstructionContractViolationError(OverwireError):
    """Signal that a singleton factory returned an unusable instance.

    Raised by ``ScopedSingletonCache.get_or_create`` when the instance is not
    write-protected or does not support weak references. This is a bug in the
    factory and is not retried.
    """


class OverwireInvalidSettingsError(OverwireError):
    """Signal a settings value that cannot key the singleton cache.

    Settings must be hashable with structural equality. Typical fixes include
    using a frozen dataclass, a frozen pydantic model, or implementing
    ``__eq__`` and ``__hash__`` over the settings fields.
    """


def _target_name(target: Any) -> str:
    return getattr(target, "__qualname__", None) or repr(target)


def _type_list(arg_types: Sequence[type[Any]]) -> str:
    return ", ".join(getattr(arg_type, "__qualname__", repr(arg_type)) for arg_type in arg_types)
