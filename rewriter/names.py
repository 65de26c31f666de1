"""Name Allocator — turns literal labels into unique identifiers per scope."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from . import constants
from .diagnostics import DiagnosticKind, DiagnosticSink
from .tree import NO_SOURCE_LOCATION, SourceLocation

logger = logging.getLogger(__name__)

_NON_IDENTIFIER_RE = re.compile(r"[^a-z0-9_]+")


def normalize_label(label: str) -> str:
    """Lower-case *label* and squeeze it into identifier characters.

    Returns ``""`` when nothing usable is left (e.g. ``"!!!"``).
    """
    ident = _NON_IDENTIFIER_RE.sub("_", label.lower()).strip("_")
    if ident and ident[0].isdigit():
        ident = f"_{ident}"
    return ident


@dataclass
class _ScopeNames:
    taken: set[str] = field(default_factory=set)
    # base identifier -> next suffix to try
    next_suffix: dict[str, int] = field(default_factory=dict)


class NameAllocator:
    """Per-invocation allocator; every scope id owns an independent namespace."""

    def __init__(self, sink: DiagnosticSink | None = None):
        self._scopes: dict[int, _ScopeNames] = {}
        self._next_scope_id = 0
        self._sink = sink

    def open_scope(self) -> int:
        scope_id = self._next_scope_id
        self._next_scope_id += 1
        self._scopes[scope_id] = _ScopeNames()
        return scope_id

    def _names(self, scope_id: int) -> _ScopeNames:
        return self._scopes.setdefault(scope_id, _ScopeNames())

    def reserve(self, name: str, scope_id: int) -> None:
        """Claim a name the user already defined in this scope."""
        self._names(scope_id).taken.add(name)

    def is_taken(self, name: str, scope_id: int) -> bool:
        return name in self._names(scope_id).taken

    def allocate(
        self,
        base_label: str,
        scope_id: int,
        prefix: str = "",
        position: int = 0,
        location: SourceLocation = NO_SOURCE_LOCATION,
    ) -> str:
        ident = normalize_label(base_label)
        if not ident:
            ident = f"{constants.ANONYMOUS_NAME_PREFIX}{position}"
        return self.claim(f"{prefix}{ident}", scope_id, location)

    def claim(
        self,
        base: str,
        scope_id: int,
        location: SourceLocation = NO_SOURCE_LOCATION,
    ) -> str:
        """Claim *base* verbatim, or the first free ``base_N`` after it."""
        names = self._names(scope_id)
        if base not in names.taken:
            names.taken.add(base)
            return base

        suffix = names.next_suffix.get(base, constants.COLLISION_SUFFIX_START)
        candidate = f"{base}_{suffix}"
        while candidate in names.taken:
            suffix += 1
            candidate = f"{base}_{suffix}"
        names.next_suffix[base] = suffix + 1
        names.taken.add(candidate)

        logger.debug("Name %s taken in scope %d, using %s", base, scope_id, candidate)
        if self._sink is not None:
            self._sink.emit(
                DiagnosticKind.NAME_COLLISION_RESOLVED,
                f"'{base}' already defined in this body, renamed to '{candidate}'",
                location,
            )
        return candidate
