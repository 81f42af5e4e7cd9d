from __future__ import annotations

import os
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

__all__ = [
    "_frozen_mapping",
    "_dedupe_tags",
    "_tags_from_env",
    "_is_secret_key",
    "_redact_for_log",
]

TAGS_ENV_VAR = "TAGGED_CONFIG_TAGS"

_SECRET_MARKERS = ("secret", "password", "token", "passwd", "api_key")


def _frozen_mapping(values: Mapping[Any, Any]) -> Mapping[Any, Any]:
    """Return a read-only copy of ``values``; later changes to the input are not seen."""
    return MappingProxyType(dict(values))


def _dedupe_tags(tags: Iterable[str]) -> Tuple[str, ...]:
    seen: Dict[str, None] = {}
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in seen:
            seen[tag] = None
    return tuple(seen)


def _tags_from_env(var: str = TAGS_ENV_VAR) -> Tuple[str, ...]:
    return _dedupe_tags(os.getenv(var, "").split(","))


def _is_secret_key(name: Optional[str]) -> bool:
    if not name:
        return False
    lowered = name.lower()
    return any(s in lowered for s in _SECRET_MARKERS)


def _redact_for_log(name: Optional[str], value: Any) -> str:
    """
    Redact likely secrets in logs.
    """
    if _is_secret_key(name):
        return "***"
    try:
        return repr(value)
    except Exception:
        return "<unreprable>"
