"""Synthesis Engine — builds class/method declarations from spec-block candidates."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Union

from .config import DEFAULT_CONFIG, RewriteConfig
from .diagnostics import DiagnosticSink
from .matcher import Candidate, CandidateKind, PatternMatcher
from .names import NameAllocator
from .scope import ScopeFrame, ScopeStack
from .tree import NO_SOURCE_LOCATION, NodeKind, SourceLocation, SourceNode

logger = logging.getLogger(__name__)

# (statement, scope) -> statement, applied to copied statements so that
# containers inside a describe body are rewritten too.
Descender = Callable[[SourceNode, ScopeStack], SourceNode]


@dataclass(frozen=True)
class SynthesizedMethod:
    name: str
    body: tuple[SourceNode, ...]
    label: str = ""
    location: SourceLocation = NO_SOURCE_LOCATION


@dataclass(frozen=True)
class SynthesizedClass:
    """A class generated from a ``describe`` block.

    ``superclass`` is set only when the innermost enclosing frame was a class,
    and then names that class.
    """

    name: str
    superclass: str | None
    body: tuple[BodyItem, ...]
    label: str = ""
    location: SourceLocation = NO_SOURCE_LOCATION

    def methods(self) -> list[SynthesizedMethod]:
        return [item for item in self.body if isinstance(item, SynthesizedMethod)]

    def nested_classes(self) -> list[SynthesizedClass]:
        return [item for item in self.body if isinstance(item, SynthesizedClass)]


BodyItem = Union[SynthesizedMethod, SynthesizedClass, SourceNode]


def _identity(node: SourceNode, scope: ScopeStack) -> SourceNode:
    return node


def defined_names(statements: tuple[SourceNode, ...]) -> list[str]:
    return [
        stmt.name
        for stmt in statements
        if stmt.name
        and stmt.kind in (NodeKind.METHOD_DEF, NodeKind.CLASS_DEF, NodeKind.MODULE_DEF)
    ]


class SynthesisEngine:
    """Turns candidates into ``SynthesizedClass`` / ``SynthesizedMethod`` values."""

    def __init__(
        self,
        config: RewriteConfig = DEFAULT_CONFIG,
        allocator: NameAllocator | None = None,
        sink: DiagnosticSink | None = None,
        descend: Descender = _identity,
    ):
        self._config = config
        self._sink = sink if sink is not None else DiagnosticSink()
        self._allocator = (
            allocator if allocator is not None else NameAllocator(self._sink)
        )
        self._matcher = PatternMatcher(config)
        self._descend = descend
        self.classes_synthesized = 0
        self.methods_synthesized = 0

    def synthesize(
        self,
        candidate: Candidate,
        scope: ScopeStack | None = None,
        scope_id: int | None = None,
        position: int = 0,
    ) -> SynthesizedClass:
        """Build the class for a ``describe`` *candidate* found under *scope*.

        *scope* defaults to the snapshot taken when the candidate was matched.
        *scope_id* is the allocator namespace of the body the ``describe``
        sits in; a fresh one is opened when omitted.
        """
        if scope is None:
            scope = ScopeStack(candidate.scope)
        if scope_id is None:
            scope_id = self._allocator.open_scope()
        location = candidate.node.location
        superclass = scope.innermost_class_or_none()
        if superclass is not None:
            # A nested class named like its parent would shadow it.
            self._allocator.reserve(superclass, scope_id)
        name = self._allocator.allocate(
            candidate.label,
            scope_id,
            prefix=self._config.class_name_prefix,
            position=position,
            location=location,
        )
        logger.debug(
            "describe %r under %s -> class %s < %s",
            candidate.label,
            scope,
            name,
            superclass,
        )

        inner_scope = scope.pushed(ScopeFrame.klass(name))
        body_scope_id = self._allocator.open_scope()
        for defined in defined_names(candidate.body):
            self._allocator.reserve(defined, body_scope_id)

        body: list[BodyItem] = []
        for index, stmt in enumerate(candidate.body):
            inner = self._matcher.classify(stmt, inner_scope.snapshot())
            if inner.kind == CandidateKind.DESCRIBE:
                body.append(
                    self.synthesize(inner, scope_id=body_scope_id, position=index)
                )
            elif inner.is_candidate:
                body.append(self.synthesize_method(inner, body_scope_id, index))
            else:
                inner.report_to(self._sink)
                body.append(self._descend(stmt, inner_scope))

        self.classes_synthesized += 1
        return SynthesizedClass(
            name=name,
            superclass=superclass,
            body=tuple(body),
            label=candidate.label,
            location=location,
        )

    def synthesize_method(
        self, candidate: Candidate, scope_id: int, position: int = 0
    ) -> SynthesizedMethod:
        """Build the method for an ``it``, hook or ``let`` *candidate*."""
        location = candidate.node.location
        if candidate.kind == CandidateKind.HOOK:
            name = self._allocator.claim(candidate.method_name, scope_id, location)
        elif candidate.kind == CandidateKind.LET:
            name = self._allocator.allocate(
                candidate.label, scope_id, position=position, location=location
            )
        else:
            name = self._allocator.allocate(
                candidate.label,
                scope_id,
                prefix=self._config.method_name_prefix,
                position=position,
                location=location,
            )
        self.methods_synthesized += 1
        return SynthesizedMethod(
            name=name,
            body=candidate.body,
            label=candidate.label,
            location=location,
        )
