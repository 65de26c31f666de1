"""Rewrite Applier — the traversal that splices synthesized declarations into the tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .config import DEFAULT_CONFIG, RewriteConfig
from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink
from .matcher import CandidateKind, PatternMatcher
from .names import NameAllocator
from .scope import FrameKind, ScopeStack, frame_for
from .synthesis import (
    BodyItem,
    SynthesisEngine,
    SynthesizedClass,
    SynthesizedMethod,
    defined_names,
)
from .tree import NodeKind, SourceNode

logger = logging.getLogger(__name__)

_METHOD_CANDIDATES = frozenset(
    {CandidateKind.IT, CandidateKind.HOOK, CandidateKind.LET}
)


@dataclass
class RewriteStats:
    """Counters for one rewrite invocation."""

    classes_synthesized: int = 0
    methods_synthesized: int = 0
    candidates_skipped: int = 0
    collisions_resolved: int = 0


@dataclass(frozen=True)
class RewriteResult:
    tree: SourceNode
    diagnostics: list[Diagnostic] = field(default_factory=list)
    stats: RewriteStats = field(default_factory=RewriteStats)

    @property
    def changed(self) -> bool:
        return self.stats.classes_synthesized > 0 or self.stats.methods_synthesized > 0


def build_method_node(method: SynthesizedMethod) -> SourceNode:
    return SourceNode(
        kind=NodeKind.METHOD_DEF,
        name=method.name,
        children=method.body,
        location=method.location,
        synthetic=True,
    )


def build_class_node(synthesized: SynthesizedClass) -> SourceNode:
    """Materialize a ``SynthesizedClass`` as a class-def node.

    The node keeps the ``describe`` call's location so diagnostics against
    the rewritten tree still point at the user's source.
    """
    return SourceNode(
        kind=NodeKind.CLASS_DEF,
        name=synthesized.name,
        superclass=synthesized.superclass,
        children=tuple(_build_item(item) for item in synthesized.body),
        location=synthesized.location,
        synthetic=True,
    )


def _build_item(item: BodyItem) -> SourceNode:
    if isinstance(item, SynthesizedClass):
        return build_class_node(item)
    if isinstance(item, SynthesizedMethod):
        return build_method_node(item)
    return item


class RewritePass:
    """One pre-order traversal replacing spec blocks with declarations.

    Program, module, class and singleton-class bodies are traversed; method
    bodies are opaque. Untouched nodes are returned as the same objects.
    """

    def __init__(self, config: RewriteConfig = DEFAULT_CONFIG):
        self._config = config
        self._matcher = PatternMatcher(config)
        self._sink = DiagnosticSink()
        self._allocator = NameAllocator(self._sink)
        self._engine = self._new_engine()

    def _new_engine(self) -> SynthesisEngine:
        return SynthesisEngine(
            self._config, self._allocator, self._sink, descend=self._descend
        )

    def rewrite(self, root: SourceNode) -> RewriteResult:
        self._sink = DiagnosticSink()
        self._allocator = NameAllocator(self._sink)
        self._engine = self._new_engine()

        tree = self._descend(root, ScopeStack())

        skipped = [d for d in self._sink.diagnostics if d.is_skip()]
        stats = RewriteStats(
            classes_synthesized=self._engine.classes_synthesized,
            methods_synthesized=self._engine.methods_synthesized,
            candidates_skipped=len(skipped),
            collisions_resolved=len(
                self._sink.of_kind(DiagnosticKind.NAME_COLLISION_RESOLVED)
            ),
        )
        logger.debug(
            "Rewrite done: %d classes, %d methods, %d skipped",
            stats.classes_synthesized,
            stats.methods_synthesized,
            stats.candidates_skipped,
        )
        return RewriteResult(
            tree=tree, diagnostics=list(self._sink.diagnostics), stats=stats
        )

    # ── traversal ────────────────────────────────────────────────

    def _descend(self, node: SourceNode, scope: ScopeStack) -> SourceNode:
        """Rewrite inside *node* if it is a container, else return it as is."""
        if node.kind == NodeKind.PROGRAM:
            return self._rewrite_body(node, scope)
        frame = frame_for(node)
        if frame is None:
            return node
        with scope.frame(frame):
            return self._rewrite_body(node, scope)

    def _rewrite_body(self, node: SourceNode, scope: ScopeStack) -> SourceNode:
        scope_id = self._allocator.open_scope()
        for defined in defined_names(node.children):
            self._allocator.reserve(defined, scope_id)
        children = tuple(
            self._rewrite_statement(child, scope, scope_id, position)
            for position, child in enumerate(node.children)
        )
        return node.with_children(children)

    def _rewrite_statement(
        self, node: SourceNode, scope: ScopeStack, scope_id: int, position: int
    ) -> SourceNode:
        candidate = self._matcher.classify(node, scope.snapshot())
        if candidate.kind == CandidateKind.DESCRIBE:
            synthesized = self._engine.synthesize(
                candidate, scope_id=scope_id, position=position
            )
            return build_class_node(synthesized)
        if candidate.kind in _METHOD_CANDIDATES:
            # Bare spec methods only make sense directly inside a class body.
            if scope.current().kind == FrameKind.CLASS:
                method = self._engine.synthesize_method(candidate, scope_id, position)
                return build_method_node(method)
            return node
        candidate.report_to(self._sink)
        return self._descend(node, scope)


def rewrite_tree(
    root: SourceNode, config: RewriteConfig = DEFAULT_CONFIG
) -> RewriteResult:
    """Run a fresh ``RewritePass`` over *root*."""
    return RewritePass(config).rewrite(root)
