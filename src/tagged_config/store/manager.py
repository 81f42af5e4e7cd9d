from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterator, List, Mapping, Optional, Tuple

from tagged_config.locks import LockGuard
from tagged_config.store.adaptors import SourceProtocol
from tagged_config.store.entry import Entry
from tagged_config.utils import _frozen_mapping, _redact_for_log

logger = logging.getLogger("tagged_config.store")
logger.addHandler(logging.NullHandler())

Scope = Tuple[str, Optional[str]]


class ConfigStore:
    """
    Ordered collection of entries built from sources added in call order.

    For the same ``(key, tag)`` pair the most recently added source wins.
    Call ``done()`` to freeze the store; lookups before that see nothing.
    """

    def __init__(self, name: str = "store") -> None:
        self.name = name
        self._sources: List[SourceProtocol] = []
        self._entries: Mapping[Scope, Entry] = _frozen_mapping({})
        self._lock_guard = LockGuard(f"store {name!r}")
        logger.debug("ConfigStore init name=%r", name)

    def add_source(self, source: SourceProtocol) -> "ConfigStore":
        self._lock_guard.ensure_unlocked("add a source to")
        if not isinstance(source, SourceProtocol):
            logger.error("Rejecting source %r: not a SourceProtocol", source)
            raise TypeError("source must provide a name and an entries() method")
        self._sources.append(source)
        logger.debug("Store %r added source %r (position %d)", self.name, source.name, len(self._sources))
        return self

    def done(self) -> "ConfigStore":
        """Apply sources in order and freeze the result."""
        self._lock_guard.ensure_unlocked("finalize")
        merged: Dict[Scope, Entry] = {}
        for source in self._sources:
            for entry in source.entries():
                previous = merged.get(entry.scope)
                if previous is not None:
                    logger.debug(
                        "Store %r: %s overrides key=%r tag=%r old=%s new=%s",
                        self.name,
                        source.name,
                        entry.key,
                        entry.tag,
                        _redact_for_log(entry.key, previous.value),
                        _redact_for_log(entry.key, entry.value),
                    )
                merged[entry.scope] = entry
        self._entries = _frozen_mapping(merged)
        self._lock_guard.lock()
        logger.info(
            "Store %r finalized: sources=%d entries=%d", self.name, len(self._sources), len(merged)
        )
        return self

    def is_finalized(self) -> bool:
        return self._lock_guard.is_locked()

    def get(self, key: str, tag: Optional[str] = None) -> Optional[Entry]:
        return self._entries.get((key, tag))

    def keys(self, tag: Optional[str] = None) -> FrozenSet[str]:
        return frozenset(k for (k, t) in self._entries if t == tag)

    def tags(self) -> FrozenSet[str]:
        return frozenset(t for (_, t) in self._entries if t is not None)

    @property
    def source_names(self) -> Tuple[str, ...]:
        return tuple(s.name for s in self._sources)

    def __iter__(self) -> Iterator[Entry]:
        return iter(tuple(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<ConfigStore name={self.name!r} finalized={self.is_finalized()} entries={len(self)}>"
