from __future__ import annotations

import importlib
import warnings
from typing import Any

_PYDANTIC_V1_WARNING_PATTERN = (
    r"Core Pydantic V1 functionality isn't compatible with Python 3\.14 or greater\."
)


def _load_pydantic_base_model() -> type[Any] | None:
    base_model = _load_base_model("pydantic")
    if base_model is not None and hasattr(base_model, "model_copy"):
        return base_model
    return None


def _load_pydantic_v1_base_model() -> type[Any] | None:
    with warnings.catch_warnings():
        warnings.filterwarnings(
            "ignore",
            message=_PYDANTIC_V1_WARNING_PATTERN,
            category=UserWarning,
        )
        pydantic_v1_base_model = _load_base_model("pydantic.v1")
        if pydantic_v1_base_model is not None:
            return pydantic_v1_base_model
        return _load_base_model("pydantic")


def _load_base_model(module_name: str) -> type[Any] | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    base_model = getattr(module, "BaseModel", None)
    if isinstance(base_model, type):
        return base_model
    return None


PYDANTIC_BASE_MODEL: type[Any] | None = _load_pydantic_base_model()
PYDANTIC_V1_BASE_MODEL: type[Any] | None = _load_pydantic_v1_base_model()


def is_pydantic_v2_model(value: object) -> bool:
    """Return whether ``value`` is a pydantic v2 model instance.

    ``pydantic_settings.BaseSettings`` instances count as well, since settings
    classes subclass ``pydantic.BaseModel``.
    """
    return PYDANTIC_BASE_MODEL is not None and isinstance(value, PYDANTIC_BASE_MODEL)


def is_pydantic_v1_model(value: object) -> bool:
    """Return whether ``value`` is a legacy ``pydantic.v1`` model instance."""
    return PYDANTIC_V1_BASE_MODEL is not None and isinstance(value, PYDANTIC_V1_BASE_MODEL)


def copy_pydantic_model(value: Any) -> Any:
    """Return a deep, independent copy of a pydantic model instance."""
    if is_pydantic_v2_model(value):
        return value.model_copy(deep=True)
    return value.copy(deep=True)


def is_frozen_pydantic_model(value: object) -> bool:
    """Return whether ``value`` is a pydantic model configured as immutable.

    Args:
        value: Instance produced by a singleton factory.

    """
    if is_pydantic_v2_model(value):
        return bool(type(value).model_config.get("frozen", False))
    if is_pydantic_v1_model(value):
        config = type(value).__config__
        return bool(getattr(config, "frozen", False) or not getattr(config, "allow_mutation", True))
    return False


__all__ = [
    "PYDANTIC_BASE_MODEL",
    "PYDANTIC_V1_BASE_MODEL",
    "copy_pydantic_model",
    "is_frozen_pydantic_model",
    "is_pydantic_v1_model",
    "is_pydantic_v2_model",
]
