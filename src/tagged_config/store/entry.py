from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

TAG_PREFIX = "@"


@dataclass(frozen=True)
class Entry:
    key: str
    value: str
    tag: Optional[str] = None

    @property
    def scope(self) -> Tuple[str, Optional[str]]:
        return (self.key, self.tag)

    @classmethod
    def from_raw_key(cls, raw_key: str, value: str) -> "Entry":
        """Build an entry from a key that may carry a ``@tag.`` prefix."""
        key, tag = split_tagged_key(raw_key)
        return cls(key=key, value=value, tag=tag)

    def __str__(self) -> str:
        if self.tag is None:
            return f"{self.key}={self.value}"
        return f"{TAG_PREFIX}{self.tag}.{self.key}={self.value}"


def split_tagged_key(raw_key: str) -> Tuple[str, Optional[str]]:
    """Split ``@production.db.url`` into ``("db.url", "production")``.

    Keys without the prefix, or with an empty tag or key part, are returned
    unchanged and untagged.
    """
    if not raw_key.startswith(TAG_PREFIX):
        return raw_key, None
    tag, sep, key = raw_key[len(TAG_PREFIX) :].partition(".")
    if not sep or not tag or not key:
        return raw_key, None
    return key, tag
