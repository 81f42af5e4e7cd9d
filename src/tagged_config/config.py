from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Type, TypeVar

from tagged_config.exceptions import ConfigLockedError, KeyNotFoundError

from .converters import REGISTRY, ConverterRegistry
from .interpolation import Interpolator
from .resolver import StoreChain, resolve, visible_keys
from .store.manager import ConfigStore
from .utils import _dedupe_tags, _redact_for_log

logger = logging.getLogger("tagged_config.config")
logger.addHandler(logging.NullHandler())

T = TypeVar("T")


class Configuration:
    """
    Read-only view over a chain of finalized stores and a set of current tags.

    Lookups consult the current tags in order, then the default scope. Values
    are expanded (``${other.key}``) and converted on every call; nothing is
    cached, so one instance may be shared freely between threads.
    """

    def __init__(
        self,
        stores: Iterable[ConfigStore],
        tags: Sequence[str] = (),
        *,
        converters: Optional[ConverterRegistry] = None,
    ) -> None:
        chain: StoreChain = tuple(stores)
        for store in chain:
            if not store.is_finalized():
                logger.error("Store %r passed to Configuration before done()", store.name)
                raise ValueError(f"Store {store.name!r} must be finalized with done() first")
        self.__stores = chain
        self.__tags: Tuple[str, ...] = _dedupe_tags(tags)
        self.__converters = converters if converters is not None else REGISTRY
        self.__interpolator = Interpolator()
        self.__frozen = True
        logger.debug(
            "Configuration created stores=%r tags=%r",
            [s.name for s in chain],
            self.__tags,
        )

    # forbid attribute mutation
    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_Configuration__frozen", False):
            raise ConfigLockedError("Configuration is read-only")
        super().__setattr__(name, value)

    @property
    def tags(self) -> Tuple[str, ...]:
        """Current tags, highest priority first."""
        return self.__tags

    @property
    def stores(self) -> StoreChain:
        return self.__stores

    # lookups
    def _raw(self, key: str) -> Optional[str]:
        entry = resolve(key, self.__stores, self.__tags)
        return None if entry is None else entry.value

    def _lookup(self, key: str) -> Optional[str]:
        """Resolved and interpolated value, or None when the key is missing."""
        raw = self._raw(key)
        if raw is None:
            return None
        return self.__interpolator.expand(raw, self._raw, (key,))

    def _require(self, key: str) -> str:
        value = self._lookup(key)
        if value is None:
            logger.error("Key %r not found (tags=%r)", key, self.__tags)
            raise KeyNotFoundError(key, self.__tags)
        return value

    def has_value(self, key: str) -> bool:
        return resolve(key, self.__stores, self.__tags) is not None

    def evaluate_to_string(self, key: str) -> str:
        """
        Return the value of ``key`` with references expanded.

        Raises KeyNotFoundError when no current tag or the default scope
        defines the key.
        """
        value = self._require(key)
        logger.debug("evaluate_to_string key=%r -> %s", key, _redact_for_log(key, value))
        return value

    def evaluate_to(self, key: str, default: T) -> T:
        """
        Return ``key`` converted to the type of ``default``, or ``default``
        itself when the key is missing. A None default yields a string.
        """
        value = self._lookup(key)
        if value is None:
            logger.debug("Key %r not found; using caller default", key)
            return default
        if default is None:
            return value  # type: ignore[return-value]
        return self.__converters.convert(value, type(default), key)

    def evaluate_as(self, value_type: Type[T], key: str) -> T:
        """
        Return ``key`` converted to ``value_type``.
        """
        return self.__converters.convert(self._require(key), value_type, key)

    def evaluate_to_list(self, key: str) -> List[str]:
        return self.evaluate_as(list, key)

    def evaluate_to_map(self, key: str) -> Dict[str, str]:
        return self.evaluate_as(dict, key)

    def as_dict(self) -> Dict[str, str]:
        """Every visible key evaluated to a string.

        Fails as a whole if any value fails to expand. A system-properties
        store built from the full environment can bring in values such as
        ``PS1=${debian_chroot}`` that do; build it with a ``prefix``.
        """
        return {key: self.evaluate_to_string(key) for key in self}

    def __getitem__(self, key: str) -> str:
        return self.evaluate_to_string(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has_value(key)

    def __iter__(self) -> Iterator[str]:
        return iter(visible_keys(self.__stores, self.__tags))

    def __len__(self) -> int:
        return len(visible_keys(self.__stores, self.__tags))

    def __repr__(self) -> str:
        return f"<Configuration stores={[s.name for s in self.__stores]} tags={list(self.__tags)}>"
