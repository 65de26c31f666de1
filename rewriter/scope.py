"""Scope Tracker — the stack of lexical frames enclosing the traversal position."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from .tree import NodeKind, SourceNode


class FrameKind(Enum):
    TOP_LEVEL = "TopLevel"
    MODULE = "Module"
    CLASS = "Class"
    SINGLETON = "Singleton"


@dataclass(frozen=True)
class ScopeFrame:
    kind: FrameKind
    name: str = ""

    @classmethod
    def top_level(cls) -> ScopeFrame:
        return cls(FrameKind.TOP_LEVEL)

    @classmethod
    def module(cls, name: str) -> ScopeFrame:
        return cls(FrameKind.MODULE, name)

    @classmethod
    def klass(cls, name: str) -> ScopeFrame:
        return cls(FrameKind.CLASS, name)

    @classmethod
    def singleton(cls) -> ScopeFrame:
        return cls(FrameKind.SINGLETON)

    def __str__(self) -> str:
        if self.name:
            return f"{self.kind.value}({self.name})"
        return self.kind.value


_FRAME_FOR_KIND = {
    NodeKind.PROGRAM: lambda node: ScopeFrame.top_level(),
    NodeKind.MODULE_DEF: lambda node: ScopeFrame.module(node.name or ""),
    NodeKind.CLASS_DEF: lambda node: ScopeFrame.klass(node.name or ""),
    NodeKind.SINGLETON_CLASS: lambda node: ScopeFrame.singleton(),
}


def frame_for(node: SourceNode) -> ScopeFrame | None:
    """The frame a container node opens, or ``None`` for non-containers."""
    factory = _FRAME_FOR_KIND.get(node.kind)
    return factory(node) if factory else None


class ScopeStack:
    """Frames from outermost to innermost; always rooted at ``TopLevel``.

    Only the innermost frame decides how a candidate is synthesized, so
    ``innermost_class_or_none`` deliberately does not search outward.
    """

    def __init__(self, frames: tuple[ScopeFrame, ...] = ()):
        self._frames: list[ScopeFrame] = list(frames) or [ScopeFrame.top_level()]

    def enter(self, frame: ScopeFrame) -> None:
        self._frames.append(frame)

    def exit(self) -> ScopeFrame:
        if len(self._frames) == 1:
            raise IndexError("cannot exit the top-level frame")
        return self._frames.pop()

    @contextmanager
    def frame(self, frame: ScopeFrame) -> Iterator[ScopeStack]:
        self.enter(frame)
        try:
            yield self
        finally:
            self.exit()

    def current(self) -> ScopeFrame:
        return self._frames[-1]

    def innermost_class_or_none(self) -> str | None:
        innermost = self.current()
        if innermost.kind == FrameKind.CLASS:
            return innermost.name
        return None

    def snapshot(self) -> tuple[ScopeFrame, ...]:
        return tuple(self._frames)

    def pushed(self, frame: ScopeFrame) -> ScopeStack:
        """A new stack with *frame* on top; this stack is left untouched."""
        return ScopeStack(self.snapshot() + (frame,))

    @property
    def depth(self) -> int:
        return len(self._frames)

    def __str__(self) -> str:
        return " > ".join(str(f) for f in self._frames)
