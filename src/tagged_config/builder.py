from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from .config import Configuration
from .converters import ConverterRegistry
from .locks import LockGuard
from .store.adaptors import SourceProtocol
from .store.manager import ConfigStore
from .store.sources import MappingSource, PathLike, PropertiesSource, SystemPropertiesSource
from .utils import TAGS_ENV_VAR, _dedupe_tags, _tags_from_env

logger = logging.getLogger("tagged_config.builder")
logger.addHandler(logging.NullHandler())


class StoreBuilder:
    """Adds sources to one store; ``done()`` freezes it and returns to the parent builder."""

    def __init__(self, parent: "ConfigBuilder", store: ConfigStore) -> None:
        self._parent = parent
        self._store = store

    @property
    def store(self) -> ConfigStore:
        return self._store

    def add_source(self, source: SourceProtocol) -> "StoreBuilder":
        self._parent._ensure_open()
        self._store.add_source(source)
        return self

    def add_resource(self, path: PathLike, encoding: str = "utf-8") -> "StoreBuilder":
        """Read a properties file; files added later override earlier ones."""
        return self.add_source(PropertiesSource(path, encoding=encoding))

    def add_text(self, text: str, name: Optional[str] = None) -> "StoreBuilder":
        return self.add_source(PropertiesSource(text=text, name=name))

    def add_mapping(self, mapping: Mapping[str, object], tag: Optional[str] = None) -> "StoreBuilder":
        return self.add_source(MappingSource(mapping, tag=tag))

    def done(self) -> "ConfigBuilder":
        self._parent._ensure_open()
        if not self._store.is_finalized():
            self._store.done()
        return self._parent


class ConfigBuilder:
    """
    Fluent assembly of a Configuration.

    Stores are consulted in the order they are created, later stores
    overriding earlier ones. Current tags are consulted in the order they are
    added, earlier tags overriding later ones. The builder is single use:
    after get_configuration() every mutating call raises ConfigLockedError.
    """

    def __init__(self, *, converters: Optional[ConverterRegistry] = None) -> None:
        self._stores: List[ConfigStore] = []
        self._tags: List[str] = []
        self._converters = converters
        self._lock_guard = LockGuard("builder")

    def _ensure_open(self) -> None:
        self._lock_guard.ensure_unlocked("modify")

    def _new_store(self, name: str) -> ConfigStore:
        self._ensure_open()
        store = ConfigStore(name)
        self._stores.append(store)
        logger.debug("Builder created store %r at position %d", name, len(self._stores))
        return store

    def create_properties_store(self, name: Optional[str] = None) -> StoreBuilder:
        store = self._new_store(name or f"properties-{len(self._stores) + 1}")
        return StoreBuilder(self, store)

    def create_system_properties_store(
        self, properties: Optional[Mapping[str, str]] = None, prefix: Optional[str] = None
    ) -> "ConfigBuilder":
        """Add a finalized store snapshotting ``properties`` (``os.environ`` by default).

        ``prefix`` keeps only keys starting with it.
        """
        store = self._new_store("system-properties")
        store.add_source(SystemPropertiesSource(properties, prefix=prefix)).done()
        return self

    def create_mapping_store(
        self, mapping: Mapping[str, object], tag: Optional[str] = None, name: Optional[str] = None
    ) -> "ConfigBuilder":
        store = self._new_store(name or f"mapping-{len(self._stores) + 1}")
        store.add_source(MappingSource(mapping, tag=tag)).done()
        return self

    def add_current_tag(self, tag: str) -> "ConfigBuilder":
        self._ensure_open()
        if not isinstance(tag, str) or not tag.strip():
            logger.error("Rejecting current tag %r", tag)
            raise ValueError("tag must be a non-empty string")
        tag = tag.strip()
        if tag in self._tags:
            logger.debug("Tag %r already current; keeping first position", tag)
        else:
            self._tags.append(tag)
        return self

    def add_current_tags(self, *tags: str) -> "ConfigBuilder":
        for tag in tags:
            self.add_current_tag(tag)
        return self

    def add_current_tags_from_env(self, var: str = TAGS_ENV_VAR) -> "ConfigBuilder":
        """Append the comma-separated tags found in environment variable ``var``."""
        tags = _tags_from_env(var)
        logger.debug("Tags from %s: %r", var, tags)
        return self.add_current_tags(*tags)

    def get_configuration(self) -> Configuration:
        self._ensure_open()
        for store in self._stores:
            if not store.is_finalized():
                logger.debug("Finalizing open store %r", store.name)
                store.done()
        self._lock_guard.lock()
        config = Configuration(self._stores, _dedupe_tags(self._tags), converters=self._converters)
        logger.info(
            "Configuration built: stores=%d tags=%r", len(self._stores), tuple(self._tags)
        )
        return config
