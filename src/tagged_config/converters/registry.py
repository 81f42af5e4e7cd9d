from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from tagged_config.exceptions import ConverterDuplicateError, TypeConversionError
from tagged_config.utils import _is_secret_key

logger = logging.getLogger("tagged_config.converters")
logger.addHandler(logging.NullHandler())

Converter = Callable[[str], Any]


class ConverterRegistry:
    def __init__(self) -> None:
        self._converters: Dict[type, Converter] = {}
        logger.debug("ConverterRegistry initialized id=%s", hex(id(self)))

    def register(self, value_type: type, func: Converter, override: bool = False) -> None:
        if not isinstance(value_type, type):
            raise TypeError("value_type must be a type")
        if not callable(func):
            raise TypeError("Converter must be callable")
        if not override and value_type in self._converters:
            logger.error("Register failed: converter for %r already registered", value_type)
            raise ConverterDuplicateError(f"Converter for {value_type.__name__} already registered")
        self._converters[value_type] = func
        logger.debug("Converter registered for %r override=%s", value_type, override)

    def has(self, value_type: type) -> bool:
        return self.find(value_type) is not None

    def find(self, value_type: type) -> Optional[Converter]:
        """Exact type first, then the nearest registered base class."""
        func = self._converters.get(value_type)
        if func is not None:
            return func
        for base in getattr(value_type, "__mro__", ())[1:]:
            func = self._converters.get(base)
            if func is not None:
                logger.debug("Using converter of base %r for %r", base, value_type)
                return func
        return None

    def convert(self, value: str, value_type: type, key: Optional[str] = None) -> Any:
        func = self.find(value_type)
        if func is None:
            logger.error("No converter registered for %r (key=%r)", value_type, key)
            raise TypeConversionError(key, value, value_type, "no converter registered")
        try:
            return func(value)
        except TypeConversionError:
            raise
        except (ValueError, TypeError, ArithmeticError) as exc:
            # converter messages usually quote the input
            reason = type(exc).__name__ if _is_secret_key(key) else str(exc)
            logger.error("Conversion of key=%r to %r failed: %s", key, value_type, reason)
            raise TypeConversionError(key, value, value_type, reason) from exc

    def all_types(self) -> Tuple[type, ...]:
        return tuple(self._converters)

    def unregister(self, value_type: type) -> None:
        self._converters.pop(value_type, None)

    def clear(self) -> None:
        logger.debug("Clearing converter registry: %d converters", len(self._converters))
        self._converters.clear()
