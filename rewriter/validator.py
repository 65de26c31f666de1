"""Re-scan rewritten trees and check the invariants of the pass (test/debug aid)."""

from __future__ import annotations

from collections import Counter

from .config import DEFAULT_CONFIG, RewriteConfig
from .matcher import CandidateKind, PatternMatcher
from .scope import ScopeStack, frame_for
from .tree import NodeKind, SourceNode


class RewriteInvariantError(Exception):
    """Raised when a rewritten tree breaks an invariant of the pass."""

    def __init__(self, violations: list[str]):
        self.violations = violations
        super().__init__("; ".join(violations))


def validate(tree: SourceNode, config: RewriteConfig = DEFAULT_CONFIG) -> list[str]:
    """Return a description of every invariant violation in *tree*."""
    violations: list[str] = []
    _visit_body(tree, ScopeStack(), PatternMatcher(config), violations)
    return violations


def assert_valid(tree: SourceNode, config: RewriteConfig = DEFAULT_CONFIG) -> None:
    violations = validate(tree, config)
    if violations:
        raise RewriteInvariantError(violations)


def _visit_body(
    node: SourceNode,
    scope: ScopeStack,
    matcher: PatternMatcher,
    violations: list[str],
) -> None:
    if node.synthetic and node.kind == NodeKind.CLASS_DEF:
        _check_synthetic_class(node, violations)
    for child in node.children:
        if matcher.classify(child).kind == CandidateKind.DESCRIBE:
            violations.append(
                f"{child.location}: describe left unrewritten under {scope}"
            )
        _check_superclass(child, scope, violations)
        frame = frame_for(child)
        if frame is None:
            continue
        with scope.frame(frame):
            _visit_body(child, scope, matcher, violations)


def _check_superclass(
    node: SourceNode, scope: ScopeStack, violations: list[str]
) -> None:
    if not (node.synthetic and node.kind == NodeKind.CLASS_DEF):
        return
    if node.superclass is not None and node.superclass == node.name:
        violations.append(
            f"{node.location}: class {node.name} under {scope} names itself "
            f"as superclass"
        )
    expected = scope.innermost_class_or_none()
    if node.superclass != expected:
        violations.append(
            f"{node.location}: class {node.name} under {scope} has superclass "
            f"{node.superclass!r}, expected {expected!r}"
        )


def _check_synthetic_class(node: SourceNode, violations: list[str]) -> None:
    names = Counter(
        child.name for child in node.children if child.kind == NodeKind.METHOD_DEF
    )
    for name, count in names.items():
        if count > 1:
            violations.append(
                f"{node.location}: method {name} defined {count} times "
                f"in class {node.name}"
            )
