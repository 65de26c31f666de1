"""BaseFrontend — language-agnostic tree-sitter CST -> SourceNode conversion."""

from __future__ import annotations

import logging
from typing import Callable

from ..frontend import Frontend
from ..tree import NodeKind, SourceLocation, SourceNode

logger = logging.getLogger(__name__)


class BaseFrontend(Frontend):
    """Base class for tree-sitter frontends.

    Subclasses populate ``_STMT_DISPATCH`` and ``_EXPR_DISPATCH`` tables and
    override field-name constants where the grammar differs from the
    defaults. Anything without a handler becomes a ``RAW`` node carrying its
    source text, so conversion never fails.
    """

    # ── overridable constants ────────────────────────────────────

    NAME_FIELD: str = "name"
    BODY_FIELD: str = "body"
    PARAMS_FIELD: str = "parameters"

    # Wrapper nodes whose named children are the real statements
    BODY_WRAPPER_TYPES: frozenset[str] = frozenset()

    COMMENT_TYPES: frozenset[str] = frozenset({"comment"})
    NOISE_TYPES: frozenset[str] = frozenset({"newline", "\n"})

    # ── init ─────────────────────────────────────────────────────

    def __init__(self):
        self._source: bytes = b""
        self._STMT_DISPATCH: dict[str, Callable] = {}
        self._EXPR_DISPATCH: dict[str, Callable] = {}

    # ── helpers ──────────────────────────────────────────────────

    def _node_text(self, node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8")

    def _source_loc(self, node) -> SourceLocation:
        s, e = node.start_point, node.end_point
        return SourceLocation(
            start_line=s[0] + 1,
            start_col=s[1],
            end_line=e[0] + 1,
            end_col=e[1],
        )

    @staticmethod
    def _span(node) -> tuple[int, int, str]:
        return (node.start_byte, node.end_byte, node.type)

    def _field_text(self, node, field_name: str) -> str | None:
        child = node.child_by_field_name(field_name)
        return self._node_text(child) if child is not None else None

    def _is_skippable(self, node) -> bool:
        return (
            not node.is_named
            or node.type in self.COMMENT_TYPES
            or node.type in self.NOISE_TYPES
        )

    # ── entry point ──────────────────────────────────────────────

    def lower(self, tree, source: bytes) -> SourceNode:
        self._source = source
        root = tree.root_node
        return SourceNode(
            kind=NodeKind.PROGRAM,
            children=self._lower_statements(self._statement_nodes(root)),
            location=self._source_loc(root),
        )

    # ── bodies ───────────────────────────────────────────────────

    def _statement_nodes(self, node) -> list:
        """Named children of *node*, with body wrappers flattened away."""
        result = []
        for child in node.children:
            if self._is_skippable(child):
                continue
            if child.type in self.BODY_WRAPPER_TYPES:
                result.extend(self._statement_nodes(child))
            else:
                result.append(child)
        return result

    def _body_nodes(self, node, header_fields: tuple[str, ...] = ()) -> list:
        """Statements of a definition or block body.

        Uses the ``body`` field when the grammar provides one, otherwise every
        named child that is not one of *header_fields*.
        """
        body = node.child_by_field_name(self.BODY_FIELD)
        if body is not None:
            if body.type in self.BODY_WRAPPER_TYPES:
                return self._statement_nodes(body)
            return [body]
        header = set()
        for field_name in header_fields:
            child = node.child_by_field_name(field_name)
            if child is not None:
                header.add(self._span(child))
        return [
            child
            for child in self._statement_nodes(node)
            if self._span(child) not in header
        ]

    def _lower_statements(self, nodes: list) -> tuple[SourceNode, ...]:
        return tuple(self._lower_stmt(child) for child in nodes)

    def _lower_params(self, node) -> tuple[str, ...]:
        params_node = node.child_by_field_name(self.PARAMS_FIELD)
        if params_node is None:
            return ()
        return tuple(
            self._node_text(child)
            for child in params_node.children
            if not self._is_skippable(child)
        )

    # ── dispatchers ──────────────────────────────────────────────

    def _lower_stmt(self, node) -> SourceNode:
        handler = self._STMT_DISPATCH.get(node.type)
        if handler:
            return handler(node)
        # Fallback: try as expression
        return self._lower_expr(node)

    def _lower_expr(self, node) -> SourceNode:
        handler = self._EXPR_DISPATCH.get(node.type)
        if handler:
            return handler(node)
        return self._lower_raw(node)

    # ── common lowerers ──────────────────────────────────────────

    def _lower_raw(self, node) -> SourceNode:
        logger.debug("Keeping %s at %s as raw text", node.type, self._source_loc(node))
        return SourceNode(
            kind=NodeKind.RAW,
            value=self._node_text(node),
            location=self._source_loc(node),
        )

    def _lower_identifier(self, node) -> SourceNode:
        return SourceNode(
            kind=NodeKind.IDENTIFIER,
            name=self._node_text(node),
            location=self._source_loc(node),
        )

    def _lower_constant(self, node) -> SourceNode:
        return SourceNode(
            kind=NodeKind.CONSTANT,
            name=self._node_text(node),
            location=self._source_loc(node),
        )

    def _lower_self(self, node) -> SourceNode:
        return SourceNode(kind=NodeKind.SELF, location=self._source_loc(node))
