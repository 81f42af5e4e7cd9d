from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

from tagged_config.utils import _is_secret_key, _redact_for_log


class ConfigError(Exception):
    """Base config exception."""


class KeyNotFoundError(ConfigError):
    """Raised when a key has no value in any current tag or the default scope."""

    def __init__(self, key: str, tags: Sequence[str] = ()) -> None:
        self.key = key
        self.tags: Tuple[str, ...] = tuple(tags)
        msg = f"Key {key!r} not found"
        if self.tags:
            msg += f" (current tags: {', '.join(self.tags)})"
        super().__init__(msg)


class TypeConversionError(ConfigError):
    """Raised when a resolved value cannot be converted to the requested type."""

    def __init__(
        self,
        key: Optional[str],
        value: Any,
        value_type: Any,
        reason: str | None = None,
    ) -> None:
        self.key = key
        self.value = value
        self.value_type = value_type
        self.reason = reason
        type_name = getattr(value_type, "__name__", repr(value_type))
        # raw value stays on .value only; secret keys are redacted in the message
        msg = f"Cannot convert {_redact_for_log(key, value)} to {type_name}"
        if key is not None:
            msg += f" (key: {key})"
        if reason and not _is_secret_key(key):
            msg += f": {reason}"
        super().__init__(msg)


class CircularReferenceError(ConfigError):
    """Raised when interpolation revisits a key already on the expansion path."""

    def __init__(self, key: str, path: Sequence[str]) -> None:
        self.key = key
        self.path: Tuple[str, ...] = tuple(path)
        super().__init__(f"Circular reference to {key!r}: {' -> '.join(self.path)}")


class UnresolvedReferenceError(ConfigError):
    """Raised when a placeholder refers to a key that cannot be found."""

    def __init__(self, key: str, referenced_by: Optional[str] = None) -> None:
        self.key = key
        self.referenced_by = referenced_by
        msg = f"Unresolved reference to {key!r}"
        if referenced_by is not None:
            msg += f" in value of {referenced_by!r}"
        super().__init__(msg)


class ConfigLockedError(ConfigError):
    """Raised when attempting mutation after a store or builder was finalized."""


class ConverterDuplicateError(ConfigError):
    """Raised when attempting to register a duplicate converter."""


class PropertiesFormatError(ConfigError):
    """Raised when a properties source contains a malformed escape."""

    def __init__(self, message: str, source: str | None = None, line: int | None = None) -> None:
        self.source = source
        self.line = line
        where = ""
        if source is not None:
            where = f"{source}"
            if line is not None:
                where += f":{line}"
            where += ": "
        super().__init__(f"{where}{message}")
