"""Frontend / CST-to-SourceNode conversion."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .tree import SourceNode


class Frontend(ABC):
    @abstractmethod
    def lower(self, tree, source: bytes) -> SourceNode:
        ...


def get_frontend(language: str) -> Frontend:
    """Return the frontend for *language*; raises ``ValueError`` if unsupported."""
    from .frontends import get_deterministic_frontend

    return get_deterministic_frontend(language)
