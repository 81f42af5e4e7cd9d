from typing import Iterable, Protocol

from typing_extensions import runtime_checkable

from .entry import Entry


@runtime_checkable
class SourceProtocol(Protocol):
    name: str

    def entries(self) -> Iterable[Entry]: ...
