"""Pattern Matcher — classifies call nodes as rewrite candidates."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .config import DEFAULT_CONFIG, KeywordShape, RewriteConfig
from .diagnostics import DiagnosticKind, DiagnosticSink
from .scope import ScopeFrame
from .tree import STATIC_LABEL_KINDS, NodeKind, SourceNode


class CandidateKind(Enum):
    NOT_CANDIDATE = "NotCandidate"
    DESCRIBE = "DescribeCandidate"
    IT = "ItCandidate"
    HOOK = "HookCandidate"
    LET = "LetCandidate"


@dataclass(frozen=True)
class Candidate:
    """A classified node.

    For real candidates ``label`` is the static literal text and ``body`` the
    block's statements. ``reason`` is set only when a keyword call was
    rejected, so the caller can report why it passed through.
    """

    kind: CandidateKind
    node: SourceNode
    label: str = ""
    body: tuple[SourceNode, ...] = ()
    scope: tuple[ScopeFrame, ...] = ()
    method_name: str = ""
    reason: DiagnosticKind | None = None
    detail: str = ""

    @property
    def is_candidate(self) -> bool:
        return self.kind != CandidateKind.NOT_CANDIDATE

    def report_to(self, sink: DiagnosticSink) -> None:
        """Emit the skip notice for a rejected keyword call, if any."""
        if self.reason is not None:
            sink.emit(self.reason, self.detail, self.node.location)


def _not_candidate(
    node: SourceNode, reason: DiagnosticKind | None = None, detail: str = ""
) -> Candidate:
    return Candidate(
        kind=CandidateKind.NOT_CANDIDATE, node=node, reason=reason, detail=detail
    )


class PatternMatcher:
    """Recognizes ``keyword(<literal>) { ... }`` calls for the configured keywords."""

    def __init__(self, config: RewriteConfig = DEFAULT_CONFIG):
        self._config = config
        self._keywords = config.keywords()

    def classify(
        self, node: SourceNode, scope: tuple[ScopeFrame, ...] = ()
    ) -> Candidate:
        if node.kind != NodeKind.CALL or node.name not in self._keywords:
            return _not_candidate(node)
        if node.receiver is not None and node.receiver.kind != NodeKind.SELF:
            return _not_candidate(node)

        config = self._config
        hook = config.hook_for(node.name)
        if hook is not None:
            return self._classify_hook(node, hook.method_name, scope)
        if node.name == config.describe.keyword:
            return self._classify_labelled(
                node, config.describe, CandidateKind.DESCRIBE, scope
            )
        if node.name == config.it.keyword:
            return self._classify_labelled(node, config.it, CandidateKind.IT, scope)
        return self._classify_labelled(node, config.let, CandidateKind.LET, scope)

    def _classify_hook(
        self, node: SourceNode, method_name: str, scope: tuple[ScopeFrame, ...]
    ) -> Candidate:
        if node.args:
            return _not_candidate(
                node,
                DiagnosticKind.UNEXPECTED_ARGUMENTS,
                f"'{node.name}' takes no arguments, got {len(node.args)}",
            )
        if not self._has_block(node):
            return _not_candidate(
                node,
                DiagnosticKind.MALFORMED_BLOCK_ARGUMENT,
                f"'{node.name}' without a block",
            )
        return Candidate(
            kind=CandidateKind.HOOK,
            node=node,
            label=node.name or "",
            body=node.block.children,
            scope=scope,
            method_name=method_name,
        )

    def _classify_labelled(
        self,
        node: SourceNode,
        shape: KeywordShape,
        kind: CandidateKind,
        scope: tuple[ScopeFrame, ...],
    ) -> Candidate:
        if not node.args:
            return _not_candidate(
                node,
                DiagnosticKind.UNSUPPORTED_LABEL_EXPRESSION,
                f"'{node.name}' without a label",
            )
        if len(node.args) != shape.arity:
            return _not_candidate(
                node,
                DiagnosticKind.UNEXPECTED_ARGUMENTS,
                f"'{node.name}' expects {shape.arity} argument(s), "
                f"got {len(node.args)}",
            )
        label_node = node.args[0]
        if label_node.kind not in STATIC_LABEL_KINDS or label_node.value is None:
            return _not_candidate(
                node,
                DiagnosticKind.UNSUPPORTED_LABEL_EXPRESSION,
                f"'{node.name}' label is not a static literal "
                f"({label_node.kind.value})",
            )
        if not self._has_block(node):
            return _not_candidate(
                node,
                DiagnosticKind.MALFORMED_BLOCK_ARGUMENT,
                f"'{node.name} {label_node.value!r}' without a block",
            )
        return Candidate(
            kind=kind,
            node=node,
            label=label_node.value,
            body=node.block.children,
            scope=scope,
        )

    @staticmethod
    def _has_block(node: SourceNode) -> bool:
        return node.block is not None and node.block.kind == NodeKind.BLOCK
