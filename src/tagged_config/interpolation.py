from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional, Sequence

from tagged_config.exceptions import CircularReferenceError, UnresolvedReferenceError

logger = logging.getLogger("tagged_config.interpolation")
logger.addHandler(logging.NullHandler())

Lookup = Callable[[str], Optional[str]]

# ``$${name}`` is an escaped placeholder; ``${name}`` is a reference.
_PLACEHOLDER = re.compile(r"\$(\$?)\{([^{}]*)\}")


class Interpolator:
    """
    Expands ``${key}`` references inside configuration values.

    ``lookup`` returns the raw (unexpanded) value for a key or None when the
    key is not found. The keys currently being expanded are passed down as
    ``path``; meeting one of them again is a cycle.
    """

    def expand(self, value: str, lookup: Lookup, path: Sequence[str] = ()) -> str:
        if "${" not in value:
            return value

        parts: List[str] = []
        pos = 0
        for match in _PLACEHOLDER.finditer(value):
            parts.append(value[pos : match.start()])
            pos = match.end()
            escaped, name = match.group(1), match.group(2).strip()
            if escaped:
                parts.append("${" + match.group(2) + "}")
                continue
            parts.append(self._expand_reference(name, lookup, tuple(path)))
        parts.append(value[pos:])
        return "".join(parts)

    def _expand_reference(self, name: str, lookup: Lookup, path: tuple) -> str:
        if name in path:
            cycle = path[path.index(name) :] + (name,)
            logger.error("Circular reference detected: %s", " -> ".join(cycle))
            raise CircularReferenceError(name, cycle)
        raw = lookup(name)
        referenced_by = path[-1] if path else None
        if raw is None:
            logger.error("Unresolved reference %r in value of %r", name, referenced_by)
            raise UnresolvedReferenceError(name, referenced_by)
        logger.debug("Expanding reference %r (depth=%d)", name, len(path) + 1)
        return self.expand(raw, lookup, path + (name,))
