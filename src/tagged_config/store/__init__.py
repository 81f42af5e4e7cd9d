from tagged_config.store.adaptors import SourceProtocol
from tagged_config.store.entry import Entry, split_tagged_key
from tagged_config.store.manager import ConfigStore
from tagged_config.store.properties import parse_properties
from tagged_config.store.sources import MappingSource, PropertiesSource, SystemPropertiesSource

__all__ = [
    "ConfigStore",
    "Entry",
    "MappingSource",
    "PropertiesSource",
    "SourceProtocol",
    "SystemPropertiesSource",
    "parse_properties",
    "split_tagged_key",
]
