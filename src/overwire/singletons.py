from __future__ import annotations

import copy
import dataclasses
import logging
import queue
import threading
import weakref
from collections.abc import Callable, Hashable
from contextlib import AbstractContextManager, nullcontext
from typing import Any, Generic, Protocol, TypeVar

from typing_extensions import Self

from overwire._internal.integrations.pydantic import (
    copy_pydantic_model,
    is_frozen_pydantic_model,
    is_pydantic_v1_model,
    is_pydantic_v2_model,
)
from overwire.exceptions import (
    OverwireConstructionContractViolationError,
    OverwireInvalidSettingsError,
)
from overwire.lock_mode import LockMode

logger = logging.getLogger(__name__)

SettingsT = TypeVar("SettingsT", bound=Hashable)
InstanceT = TypeVar("InstanceT")


class DuplicableSettings(Protocol):
    """Settings that know how to produce an independent deep copy of themselves."""

    def __eq__(self, other: object) -> bool: ...

    def __hash__(self) -> int: ...

    def duplicate(self) -> Self: ...


class WriteProtected(Protocol):
    """Instances that report whether they can still be modified."""

    def is_write_protected(self) -> bool: ...


class ScopedSingletonCache(Generic[SettingsT, InstanceT]):
    """Share write-protected instances per isolation scope and settings value.

    The cache maps ``scope -> settings -> weak reference``. Instances are never
    shared across scopes, and an instance is dropped from the cache once the
    last strong reference outside the cache goes away.

    Construction runs outside the lock. Two callers racing on a new key may
    both construct; the first to install wins, the other instance is discarded
    and every caller observes the winner.

    Examples:
        .. code-block:: python

            cache: ScopedSingletonCache[WrapperSettings, Wrapper] = ScopedSingletonCache()
            wrapper = cache.get_or_create(__name__, WrapperSettings(strict=True), Wrapper)

    """

    def __init__(
        self,
        *,
        lock_mode: LockMode = LockMode.THREAD,
        require_write_protected: bool = True,
    ) -> None:
        """Initialize an empty cache.

        Args:
            lock_mode: ``THREAD`` guards the cache with ``threading.Lock``;
                ``NONE`` disables locking for single-threaded use.
            require_write_protected: Reject factory results that are not
                write-protected with ``OverwireConstructionContractViolationError``.

        """
        self._instances: dict[Hashable, dict[SettingsT, weakref.KeyedRef]] = {}
        self._reclaimed: queue.SimpleQueue[weakref.KeyedRef] = queue.SimpleQueue()
        self._lock: AbstractContextManager[Any] = (
            threading.Lock() if lock_mode is LockMode.THREAD else nullcontext()
        )
        self._require_write_protected = require_write_protected

    def get_or_create(
        self,
        scope: Hashable,
        settings: SettingsT,
        factory: Callable[[SettingsT], InstanceT],
    ) -> InstanceT:
        """Return the shared instance for ``(scope, settings)``, creating it on a miss.

        On a miss the settings are duplicated before ``factory`` sees them, so
        later changes to the caller's settings object never affect the cached
        key. Factory failures propagate unchanged and leave no entry behind.

        Args:
            scope: Isolation scope, for example a module name or a plugin handle.
            settings: Hashable settings value with structural equality.
            factory: Builds a new write-protected instance from settings.

        Raises:
            OverwireInvalidSettingsError: If ``settings`` is not hashable.
            OverwireConstructionContractViolationError: If the factory result is
                not write-protected or does not support weak references.

        """
        _ensure_hashable(settings)

        with self._lock:
            scoped_instances = self._instances.get(scope)
            instance_ref = scoped_instances.get(settings) if scoped_instances is not None else None

        instance = instance_ref() if instance_ref is not None else None
        if instance is not None:
            return instance

        settings = duplicate_settings(settings)
        instance = factory(settings)
        new_ref = self._reference(instance, scope=scope, settings=settings)
        logger.debug("Created %r for scope %r", type(instance).__qualname__, scope)

        with self._lock:
            # Only an install creates the scope map, so a failed factory leaves nothing behind.
            scoped_instances = self._instances.setdefault(scope, {})
            instance_ref = scoped_instances.get(settings)
            concurrent_instance = instance_ref() if instance_ref is not None else None
            if concurrent_instance is None:
                scoped_instances[settings] = new_ref
            else:
                instance = concurrent_instance

        if concurrent_instance is not None:
            logger.debug("Discarded a concurrently created instance for scope %r", scope)

        self._remove_reclaimed_references()
        return instance

    def purge(self) -> int:
        """Remove entries whose instances have been reclaimed.

        Returns:
            The number of removed entries.

        """
        return self._remove_reclaimed_references()

    def clear(self) -> None:
        """Drop every entry. Instances stay alive while referenced elsewhere."""
        with self._lock:
            self._instances.clear()

    def __len__(self) -> int:
        with self._lock:
            return sum(
                1
                for scoped_instances in self._instances.values()
                for instance_ref in scoped_instances.values()
                if instance_ref() is not None
            )

    def _reference(
        self,
        instance: InstanceT,
        *,
        scope: Hashable,
        settings: SettingsT,
    ) -> weakref.KeyedRef:
        if self._require_write_protected and not is_write_protected(instance):
            msg = (
                f"Singleton factory returned a {type(instance).__qualname__!r} instance that is "
                f"not write-protected."
            )
            raise OverwireConstructionContractViolationError(msg)
        try:
            return weakref.KeyedRef(instance, self._reclaimed.put, (scope, settings))
        except TypeError as error:
            msg = (
                f"Singleton factory returned a {type(instance).__qualname__!r} instance that "
                f"does not support weak references."
            )
            raise OverwireConstructionContractViolationError(msg) from error

    def _remove_reclaimed_references(self) -> int:
        removed = 0
        # Only drain what is queued now; references reclaimed meanwhile wait for the next call.
        for _ in range(self._reclaimed.qsize()):
            try:
                reclaimed_ref = self._reclaimed.get_nowait()
            except queue.Empty:
                break
            scope, settings = reclaimed_ref.key
            with self._lock:
                scoped_instances = self._instances.get(scope)
                if scoped_instances is None or scoped_instances.get(settings) is not reclaimed_ref:
                    continue
                del scoped_instances[settings]
                if not scoped_instances:
                    del self._instances[scope]
            removed += 1

        if removed:
            logger.debug("Removed %d reclaimed singleton entries", removed)
        return removed


def duplicate_settings(settings: SettingsT) -> SettingsT:
    """Return an independent deep copy of ``settings``.

    Uses ``settings.duplicate()`` when available, ``model_copy(deep=True)`` for
    pydantic models and ``copy.deepcopy`` otherwise.
    """
    duplicate = getattr(settings, "duplicate", None)
    if callable(duplicate):
        return duplicate()
    if is_pydantic_v2_model(settings) or is_pydantic_v1_model(settings):
        return copy_pydantic_model(settings)
    return copy.deepcopy(settings)


def is_write_protected(instance: object) -> bool:
    """Return whether ``instance`` can no longer be modified.

    ``is_write_protected()`` wins when the instance defines it. Frozen
    dataclass instances and frozen pydantic models count as write-protected.
    """
    check = getattr(instance, "is_write_protected", None)
    if callable(check):
        return bool(check())
    if dataclasses.is_dataclass(instance) and not isinstance(instance, type):
        return bool(type(instance).__dataclass_params__.frozen)
    return is_frozen_pydantic_model(instance)


def _ensure_hashable(settings: object) -> None:
    try:
        hash(settings)
    except TypeError as error:
        msg = (
            f"Settings of type {type(settings).__qualname__!r} are not hashable and cannot key "
            f"the singleton cache."
        )
        raise OverwireInvalidSettingsError(msg) from error


__all__ = [
    "DuplicableSettings",
    "ScopedSingletonCache",
    "WriteProtected",
    "duplicate_settings",
    "is_write_protected",
]
