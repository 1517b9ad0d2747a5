from __future__ import annotations

import inspect
import logging
import threading
import weakref
from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager, nullcontext
from inspect import Parameter
from typing import Any, Protocol, get_type_hints

from typing_extensions import get_overloads

from overwire._internal.policies import DefaultedParametersPolicy
from overwire._internal.type_checks import is_runtime_class
from overwire.descriptors import CallableDescriptor
from overwire.exceptions import OverwireInvalidDescriptorError, OverwireInvalidTargetError
from overwire.lock_mode import LockMode

logger = logging.getLogger(__name__)

_MISSING_ANNOTATION: Any = object()
_POSITIONAL_KINDS = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)
_CONSTRUCTOR_MEMBERS = ("__init__", "__new__")


class CandidateSource(Protocol):
    """Enumerate the overload candidates of classes and their methods."""

    def constructors_of(self, cls: type[Any]) -> Sequence[CallableDescriptor]: ...

    def methods_of(self, cls: type[Any], name: str) -> Sequence[CallableDescriptor]: ...


def invoke_fixed(target: Any, packed_args: Sequence[Any]) -> Any:
    """Call ``target`` with the packed arguments as plain positionals."""
    return target(*packed_args)


def invoke_var_args(target: Any, packed_args: Sequence[Any]) -> Any:
    """Call ``target`` spreading the trailing packed sequence into ``*args``."""
    *leading, trailing = packed_args
    return target(*leading, *trailing)


class SignatureCandidateSource:
    """Build call candidates from Python signatures.

    Overloads declared with ``typing.overload`` (or ``typing_extensions.overload``
    on Python 3.10) are the candidates when present. Otherwise the runtime
    signature of the class or method is the only candidate. Results are cached
    per class for as long as the class is alive.
    """

    def __init__(
        self,
        *,
        defaulted_parameters: DefaultedParametersPolicy = DefaultedParametersPolicy.EXPAND,
        lock_mode: LockMode = LockMode.THREAD,
    ) -> None:
        """Initialize a candidate source.

        Args:
            defaulted_parameters: How positional parameters with defaults turn
                into candidates. ``EXPAND`` emits one fixed-arity candidate per
                number of supplied defaulted parameters.
            lock_mode: Locking strategy for the per-class candidate cache.

        """
        self._defaulted_parameters = defaulted_parameters
        # class -> member name (None for constructors) -> candidates
        self._cache: weakref.WeakKeyDictionary[
            type[Any],
            dict[str | None, tuple[CallableDescriptor, ...]],
        ] = weakref.WeakKeyDictionary()
        self._lock: AbstractContextManager[Any] = (
            threading.Lock() if lock_mode is LockMode.THREAD else nullcontext()
        )

    def constructors_of(self, cls: type[Any]) -> tuple[CallableDescriptor, ...]:
        """Return the constructor candidates of ``cls``.

        Args:
            cls: Class to construct.

        Raises:
            OverwireInvalidTargetError: If ``cls`` is not a class.

        """
        if not is_runtime_class(cls):
            msg = f"Construction target must be a class, got {cls!r}."
            raise OverwireInvalidTargetError(msg)
        return self._cached(cls, None, lambda: self._extract_constructors(cls))

    def methods_of(self, cls: type[Any], name: str) -> tuple[CallableDescriptor, ...]:
        """Return the candidates of method ``name`` declared on ``cls`` or its bases.

        Args:
            cls: Class that owns the method.
            name: Method name.

        Raises:
            OverwireInvalidTargetError: If ``cls`` has no callable attribute ``name``.

        """
        return self._cached(cls, name, lambda: self._extract_methods(cls, name))

    def _cached(
        self,
        cls: type[Any],
        member: str | None,
        extract: Callable[[], tuple[CallableDescriptor, ...]],
    ) -> tuple[CallableDescriptor, ...]:
        with self._lock:
            cached = self._cache.get(cls, {}).get(member)
        if cached is not None:
            return cached

        candidates = extract()
        with self._lock:
            self._cache.setdefault(cls, {})[member] = candidates
        return candidates

    def _extract_constructors(self, cls: type[Any]) -> tuple[CallableDescriptor, ...]:
        for member_name in _CONSTRUCTOR_MEMBERS:
            member = getattr(cls, member_name)
            if member is getattr(object, member_name) or not inspect.isfunction(member):
                continue
            overloads = get_overloads(member)
            if overloads:
                return self._describe_all(cls.__qualname__, overloads, skip_first_parameter=True)

        try:
            signature = inspect.signature(cls)
        except (TypeError, ValueError):
            logger.debug("No introspectable constructor signature for %r", cls)
            return ()
        annotations, annotation_error = self._class_type_hints(cls)
        return tuple(
            self._describe(
                name=cls.__qualname__,
                parameters=tuple(signature.parameters.values()),
                annotations=annotations,
                annotation_error=annotation_error,
            ),
        )

    def _extract_methods(self, cls: type[Any], name: str) -> tuple[CallableDescriptor, ...]:
        try:
            member = inspect.getattr_static(cls, name)
        except AttributeError:
            msg = f"'{cls.__qualname__}' has no method '{name}'."
            raise OverwireInvalidTargetError(msg) from None

        function = member.__func__ if isinstance(member, staticmethod | classmethod) else member
        if not callable(function):
            msg = f"'{cls.__qualname__}.{name}' is not callable."
            raise OverwireInvalidTargetError(msg)

        overloads = get_overloads(function) if inspect.isfunction(function) else []
        return self._describe_all(
            f"{cls.__qualname__}.{name}",
            overloads or [function],
            skip_first_parameter=not isinstance(member, staticmethod),
        )

    def _describe_all(
        self,
        name: str,
        functions: Sequence[Callable[..., Any]],
        *,
        skip_first_parameter: bool,
    ) -> tuple[CallableDescriptor, ...]:
        descriptors: list[CallableDescriptor] = []
        for function in functions:
            try:
                parameters = tuple(inspect.signature(function).parameters.values())
            except (TypeError, ValueError):
                logger.debug("No introspectable signature for %s", name)
                continue
            if skip_first_parameter and parameters and parameters[0].kind in _POSITIONAL_KINDS:
                parameters = parameters[1:]
            annotations, annotation_error = self._resolved_type_hints(function)
            descriptors.extend(
                self._describe(
                    name=name,
                    parameters=parameters,
                    annotations=annotations,
                    annotation_error=annotation_error,
                ),
            )
        # Overloads expanded by their defaults can repeat a signature.
        return tuple(dict.fromkeys(descriptors))

    def _describe(
        self,
        *,
        name: str,
        parameters: tuple[Parameter, ...],
        annotations: dict[str, Any],
        annotation_error: Exception | None,
    ) -> list[CallableDescriptor]:
        positional: list[Any] = []
        required_count = 0
        var_args_type: Any = _MISSING_ANNOTATION

        for parameter in parameters:
            if parameter.kind in _POSITIONAL_KINDS:
                positional.append(
                    self._parameter_type(parameter, annotations, annotation_error, name),
                )
                if parameter.default is Parameter.empty:
                    required_count += 1
            elif parameter.kind is Parameter.VAR_POSITIONAL:
                var_args_type = self._parameter_type(parameter, annotations, annotation_error, name)
            elif parameter.kind is Parameter.KEYWORD_ONLY and parameter.default is Parameter.empty:
                logger.debug(
                    "Skipping candidate %s: keyword-only parameter '%s' is required",
                    name,
                    parameter.name,
                )
                return []

        if self._defaulted_parameters is DefaultedParametersPolicy.EXPAND:
            arities: Sequence[int] = range(required_count, len(positional) + 1)
        else:
            arities = (len(positional),)

        descriptors = [
            CallableDescriptor(
                name=name,
                param_types=tuple(positional[:arity]),
                is_var_args=False,
                invoke=invoke_fixed,
            )
            for arity in arities
        ]
        if var_args_type is not _MISSING_ANNOTATION:
            descriptors.append(
                CallableDescriptor(
                    name=name,
                    param_types=(*positional, var_args_type),
                    is_var_args=True,
                    invoke=invoke_var_args,
                ),
            )
        return descriptors

    def _parameter_type(
        self,
        parameter: Parameter,
        annotations: dict[str, Any],
        annotation_error: Exception | None,
        name: str,
    ) -> Any:
        annotation = annotations.get(parameter.name, _MISSING_ANNOTATION)
        if annotation is not _MISSING_ANNOTATION:
            return annotation

        raw_annotation = parameter.annotation
        if raw_annotation is Parameter.empty:
            return Any
        if not isinstance(raw_annotation, str):
            return raw_annotation

        error_message = (
            f"Unable to resolve annotation {raw_annotation!r} of parameter '{parameter.name}' "
            f"in '{name}'."
        )
        if annotation_error is None:
            raise OverwireInvalidDescriptorError(error_message)
        msg = f"{error_message} Original annotation error: {annotation_error}"
        raise OverwireInvalidDescriptorError(msg) from annotation_error

    def _resolved_type_hints(
        self,
        function: Callable[..., Any],
    ) -> tuple[dict[str, Any], Exception | None]:
        try:
            return get_type_hints(function, include_extras=True), None
        except (AttributeError, NameError, TypeError) as error:
            return {}, error

    def _class_type_hints(self, cls: type[Any]) -> tuple[dict[str, Any], Exception | None]:
        merged_annotations: dict[str, Any] = {}
        merged_error: Exception | None = None

        for member_name in _CONSTRUCTOR_MEMBERS:
            member = getattr(cls, member_name)
            if not inspect.isfunction(member):
                continue
            member_annotations, error = self._resolved_type_hints(member)
            if error is not None and merged_error is None:
                merged_error = error
            for parameter_name, parameter_annotation in member_annotations.items():
                merged_annotations.setdefault(parameter_name, parameter_annotation)

        return merged_annotations, merged_error


__all__ = [
    "CandidateSource",
    "SignatureCandidateSource",
    "invoke_fixed",
    "invoke_var_args",
]
