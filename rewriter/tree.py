"""Source tree — immutable syntax nodes consumed and produced by the rewrite pass."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class NodeKind(str, Enum):
    # Containers (open a scope frame)
    PROGRAM = "PROGRAM"
    MODULE_DEF = "MODULE_DEF"
    CLASS_DEF = "CLASS_DEF"
    SINGLETON_CLASS = "SINGLETON_CLASS"
    # Definitions
    METHOD_DEF = "METHOD_DEF"
    # Expressions
    CALL = "CALL"
    BLOCK = "BLOCK"
    # Literals
    STRING = "STRING"
    SYMBOL = "SYMBOL"
    INTERPOLATED_STRING = "INTERPOLATED_STRING"
    # References
    CONSTANT = "CONSTANT"
    IDENTIFIER = "IDENTIFIER"
    SELF = "SELF"
    # Anything the frontend does not model, kept as source text
    RAW = "RAW"


STATIC_LABEL_KINDS: frozenset[NodeKind] = frozenset({NodeKind.STRING, NodeKind.SYMBOL})


class SourceLocation(BaseModel):
    """Structured source span from tree-sitter CST nodes."""

    model_config = ConfigDict(frozen=True)

    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def is_unknown(self) -> bool:
        return (
            self.start_line == 0
            and self.start_col == 0
            and self.end_line == 0
            and self.end_col == 0
        )

    def __str__(self) -> str:
        if self.is_unknown():
            return "<unknown>"
        return f"{self.start_line}:{self.start_col}-{self.end_line}:{self.end_col}"


NO_SOURCE_LOCATION = SourceLocation(start_line=0, start_col=0, end_line=0, end_col=0)


class SourceNode(BaseModel):
    """A node of the source tree.

    Which fields are meaningful depends on ``kind``:

    - ``PROGRAM`` / ``MODULE_DEF`` / ``CLASS_DEF`` / ``SINGLETON_CLASS`` /
      ``METHOD_DEF`` / ``BLOCK``: ``children`` hold the body statements.
    - ``MODULE_DEF`` / ``CLASS_DEF`` / ``METHOD_DEF``: ``name``; class defs
      may carry ``superclass``; method defs and blocks carry ``params``.
    - ``SINGLETON_CLASS``: ``name`` is the target expression text (``self``).
    - ``CALL``: ``name`` is the method, optional ``receiver``, ``args`` and
      ``block``.
    - ``STRING`` / ``SYMBOL``: ``value`` is the static literal content.
    - ``CONSTANT`` / ``IDENTIFIER``: ``name``.
    - ``INTERPOLATED_STRING`` / ``RAW``: ``value`` is the verbatim source text.

    Nodes are frozen; rewriting builds new nodes and reuses untouched ones.
    """

    model_config = ConfigDict(frozen=True)

    kind: NodeKind
    name: Optional[str] = None
    value: Optional[str] = None
    superclass: Optional[str] = None
    params: tuple[str, ...] = ()
    receiver: Optional[SourceNode] = None
    args: tuple[SourceNode, ...] = ()
    block: Optional[SourceNode] = None
    children: tuple[SourceNode, ...] = ()
    location: SourceLocation = NO_SOURCE_LOCATION
    synthetic: bool = False

    def with_children(self, children: tuple[SourceNode, ...]) -> SourceNode:
        """Return ``self`` if *children* are the same objects, else a copy."""
        if len(children) == len(self.children) and all(
            new is old for new, old in zip(children, self.children)
        ):
            return self
        return self.model_copy(update={"children": tuple(children)})


SourceNode.model_rebuild()
