from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, Mapping, Optional, Tuple, Union

from .entry import Entry, split_tagged_key
from .properties import parse_properties

logger = logging.getLogger("tagged_config.store.sources")
logger.addHandler(logging.NullHandler())

PathLike = Union[str, "os.PathLike[str]"]


class MappingSource:
    """Entries taken from a plain mapping, all in the same scope."""

    def __init__(
        self,
        mapping: Mapping[str, object],
        tag: Optional[str] = None,
        name: Optional[str] = None,
    ) -> None:
        self._items: Tuple[Tuple[str, str], ...] = tuple(
            (str(k), str(v)) for k, v in mapping.items()
        )
        self._tag = tag
        self.name = name or ("mapping" if tag is None else f"mapping[{tag}]")

    def entries(self) -> Iterator[Entry]:
        for key, value in self._items:
            yield Entry(key=key, value=value, tag=self._tag)

    def __repr__(self) -> str:
        return f"<MappingSource name={self.name!r} keys={len(self._items)}>"


class PropertiesSource:
    """Entries parsed from properties text; ``@tag.key`` lines are tagged."""

    def __init__(
        self,
        path: Optional[PathLike] = None,
        *,
        text: Optional[str] = None,
        encoding: str = "utf-8",
        name: Optional[str] = None,
    ) -> None:
        if (path is None) == (text is None):
            logger.error("PropertiesSource needs exactly one of path or text (got path=%r)", path)
            raise ValueError("PropertiesSource needs exactly one of path or text")
        if path is not None:
            p = Path(path)
            logger.debug("Reading properties resource %s", p)
            text = p.read_text(encoding=encoding)
            self.name = name or str(p)
        else:
            self.name = name or "<text>"
        assert text is not None
        self._pairs: Tuple[Tuple[str, str], ...] = tuple(parse_properties(text, self.name))
        logger.debug("Properties source %s parsed %d entries", self.name, len(self._pairs))

    def entries(self) -> Iterator[Entry]:
        for raw_key, value in self._pairs:
            yield Entry.from_raw_key(raw_key, value)

    def __repr__(self) -> str:
        return f"<PropertiesSource name={self.name!r} entries={len(self._pairs)}>"


class SystemPropertiesSource:
    """Snapshot of process-level properties, ``os.environ`` by default.

    The snapshot is taken at construction; later changes to the process
    environment are not seen. With ``prefix`` only keys starting with it are
    kept (checked after any ``@tag.`` prefix); keys are not renamed. Use it to
    keep unrelated environment variables, whose values may contain ``${...}``,
    out of the configuration.
    """

    def __init__(
        self, properties: Optional[Mapping[str, str]] = None, prefix: Optional[str] = None
    ) -> None:
        source = os.environ if properties is None else properties
        self._snapshot: Tuple[Tuple[str, str], ...] = tuple(
            (str(k), str(v))
            for k, v in source.items()
            if prefix is None or split_tagged_key(str(k))[0].startswith(prefix)
        )
        self.name = "system-properties"
        logger.debug(
            "System properties snapshot taken: %d keys (prefix=%r)", len(self._snapshot), prefix
        )

    def entries(self) -> Iterator[Entry]:
        for key, value in self._snapshot:
            yield Entry.from_raw_key(key, value)

    def __repr__(self) -> str:
        return f"<SystemPropertiesSource keys={len(self._snapshot)}>"
