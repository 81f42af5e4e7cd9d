from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, Tuple

from tagged_config.store.entry import Entry
from tagged_config.store.manager import ConfigStore

logger = logging.getLogger("tagged_config.resolver")
logger.addHandler(logging.NullHandler())

StoreChain = Tuple[ConfigStore, ...]

__all__ = ["StoreChain", "precedence", "resolve", "visible_keys"]


def precedence(tags: Sequence[str]) -> Tuple[Optional[str], ...]:
    """Scopes in the order they are consulted: current tags first, default scope last."""
    return (*tags, None)


def resolve(key: str, chain: Iterable[ConfigStore], tags: Sequence[str] = ()) -> Optional[Entry]:
    """
    Return the winning entry for ``key``, or None when no scope defines it.

    Tag priority outranks store order: a match for an earlier scope wins even
    if a later store defines the key for a lower-priority scope. Within one
    scope the last store in the chain wins.
    """
    stores = tuple(chain)
    for scope in precedence(tags):
        for store in reversed(stores):
            entry = store.get(key, scope)
            if entry is not None:
                logger.debug("Resolved key=%r scope=%r store=%r", key, scope, store.name)
                return entry
    logger.debug("Key %r not found (tags=%r stores=%d)", key, tuple(tags), len(stores))
    return None


def visible_keys(chain: Iterable[ConfigStore], tags: Sequence[str] = ()) -> Tuple[str, ...]:
    """Sorted keys that resolve to a value under ``tags``."""
    keys = set()
    stores = tuple(chain)
    for scope in precedence(tags):
        for store in stores:
            keys.update(store.keys(scope))
    return tuple(sorted(keys))
