"""
tagged_config: layered, tag-aware configuration lookup.

- Stores are built from ordered sources; later sources override earlier ones.
- Store chains let later stores (e.g. system properties) override earlier ones.
- Current tags select environment-specific values, falling back to the default scope.
- Values may reference other keys with ``${key}``; cycles are reported, not followed.
- Values are converted on demand through a pluggable converter registry.
"""

from __future__ import annotations

from tagged_config.builder import ConfigBuilder, StoreBuilder
from tagged_config.config import Configuration
from tagged_config.converters import (
    ConverterRegistry,
    get_converter,
    list_converters,
    register_converter,
)
from tagged_config.exceptions import (
    CircularReferenceError,
    ConfigError,
    ConfigLockedError,
    ConverterDuplicateError,
    KeyNotFoundError,
    PropertiesFormatError,
    TypeConversionError,
    UnresolvedReferenceError,
)
from tagged_config.interpolation import Interpolator
from tagged_config.resolver import precedence, resolve
from tagged_config.store import (
    ConfigStore,
    Entry,
    MappingSource,
    PropertiesSource,
    SourceProtocol,
    SystemPropertiesSource,
)

__all__ = [
    "ConfigBuilder",
    "StoreBuilder",
    "Configuration",
    "ConfigStore",
    "Entry",
    "SourceProtocol",
    "MappingSource",
    "PropertiesSource",
    "SystemPropertiesSource",
    "Interpolator",
    "resolve",
    "precedence",
    "ConverterRegistry",
    "register_converter",
    "get_converter",
    "list_converters",
    "ConfigError",
    "KeyNotFoundError",
    "TypeConversionError",
    "CircularReferenceError",
    "UnresolvedReferenceError",
    "ConfigLockedError",
    "ConverterDuplicateError",
    "PropertiesFormatError",
]
