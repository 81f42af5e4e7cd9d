from __future__ import annotations

from typing import Any, Optional, Tuple

from .builtin import register_builtins
from .registry import Converter, ConverterRegistry

__all__ = [
    "Converter",
    "ConverterRegistry",
    "REGISTRY",
    "register_converter",
    "get_converter",
    "convert",
    "list_converters",
    "reset_converters",
]

REGISTRY = ConverterRegistry()
register_builtins(REGISTRY)


def register_converter(value_type: type, func: Converter, *, override: bool = False) -> None:
    REGISTRY.register(value_type, func, override=override)


def get_converter(value_type: type) -> Optional[Converter]:
    return REGISTRY.find(value_type)


def convert(value: str, value_type: type, key: Optional[str] = None) -> Any:
    return REGISTRY.convert(value, value_type, key)


def list_converters() -> Tuple[type, ...]:
    return REGISTRY.all_types()


def reset_converters() -> None:
    """Drop custom converters and restore the built-in set."""
    REGISTRY.clear()
    register_builtins(REGISTRY)
