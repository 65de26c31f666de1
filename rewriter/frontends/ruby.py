"""RubyFrontend — tree-sitter Ruby CST -> SourceNode tree."""

from __future__ import annotations

import logging
from typing import Callable

from ._base import BaseFrontend
from ..tree import NodeKind, SourceLocation, SourceNode

logger = logging.getLogger(__name__)


class RubyFrontend(BaseFrontend):
    """Converts a Ruby tree-sitter CST into the tree the rewrite pass consumes.

    Only the shapes the pass looks at are modelled structurally: module,
    class and singleton-class bodies, method definitions, calls with their
    arguments and blocks, and static string/symbol literals. Everything else
    is kept as raw source text.
    """

    BODY_WRAPPER_TYPES = frozenset({"body_statement", "block_body"})
    NOISE_TYPES = frozenset({"then", "do", "end", "\n"})

    BLOCK_TYPES = frozenset({"do_block", "block"})
    ARGUMENT_LIST_TYPES = frozenset({"argument_list", "command_argument_list"})

    STRING_PART_TYPES = frozenset({"string_content", "escape_sequence"})
    INTERPOLATION_TYPE = "interpolation"

    HEREDOC_BEGINNING_TYPE = "heredoc_beginning"
    HEREDOC_BODY_TYPE = "heredoc_body"

    def __init__(self):
        super().__init__()
        self._EXPR_DISPATCH: dict[str, Callable] = {
            "identifier": self._lower_identifier,
            "constant": self._lower_constant,
            "scope_resolution": self._lower_constant,
            "self": self._lower_self,
            "string": self._lower_ruby_string,
            "simple_symbol": self._lower_simple_symbol,
            "delimited_symbol": self._lower_delimited_symbol,
            "call": self._lower_ruby_call,
            "method_call": self._lower_ruby_call,
        }
        self._STMT_DISPATCH: dict[str, Callable] = {
            "module": self._lower_ruby_module,
            "class": self._lower_ruby_class,
            "singleton_class": self._lower_ruby_singleton_class,
            "method": self._lower_ruby_method,
            "singleton_method": self._lower_ruby_singleton_method,
        }

    # -- Ruby: statement lists ------------------------------------------------

    def _lower_statements(self, nodes: list) -> tuple[SourceNode, ...]:
        """Lower *nodes*, keeping each heredoc together with the line that opens it.

        The grammar places a heredoc body after the statement holding its
        ``<<~TAG`` marker, so both are kept as one raw span.
        """
        lowered: list[SourceNode] = []
        index = 0
        while index < len(nodes):
            node = nodes[index]
            end = index + 1
            while end < len(nodes) and nodes[end].type == self.HEREDOC_BODY_TYPE:
                end += 1
            if end > index + 1 or self._opens_heredoc(node):
                lowered.append(self._lower_raw_span(node, nodes[end - 1]))
            else:
                lowered.append(self._lower_stmt(node))
            index = end
        return tuple(lowered)

    def _opens_heredoc(self, node) -> bool:
        if node.type == self.HEREDOC_BEGINNING_TYPE:
            return True
        if node.type in self._STMT_DISPATCH or node.type in self.BLOCK_TYPES:
            return False
        return any(self._opens_heredoc(child) for child in node.children)

    def _lower_raw_span(self, first, last) -> SourceNode:
        start, end = self._source_loc(first), self._source_loc(last)
        return SourceNode(
            kind=NodeKind.RAW,
            value=self._source[first.start_byte : last.end_byte].decode("utf-8"),
            location=SourceLocation(
                start_line=start.start_line,
                start_col=start.start_col,
                end_line=end.end_line,
                end_col=end.end_col,
            ),
        )

    # -- Ruby: containers ------------------------------------------------------

    def _lower_ruby_module(self, node) -> SourceNode:
        return SourceNode(
            kind=NodeKind.MODULE_DEF,
            name=self._field_text(node, self.NAME_FIELD) or "",
            children=self._lower_statements(self._body_nodes(node, ("name",))),
            location=self._source_loc(node),
        )

    def _lower_ruby_class(self, node) -> SourceNode:
        superclass_node = node.child_by_field_name("superclass")
        superclass = None
        if superclass_node is not None:
            named = [c for c in superclass_node.children if c.is_named]
            superclass = (
                self._node_text(named[0])
                if named
                else self._node_text(superclass_node).lstrip("<").strip()
            )
        return SourceNode(
            kind=NodeKind.CLASS_DEF,
            name=self._field_text(node, self.NAME_FIELD) or "",
            superclass=superclass,
            children=self._lower_statements(
                self._body_nodes(node, ("name", "superclass"))
            ),
            location=self._source_loc(node),
        )

    def _lower_ruby_singleton_class(self, node) -> SourceNode:
        return SourceNode(
            kind=NodeKind.SINGLETON_CLASS,
            name=self._field_text(node, "value") or "self",
            children=self._lower_statements(self._body_nodes(node, ("value",))),
            location=self._source_loc(node),
        )

    # -- Ruby: method definitions ----------------------------------------------

    def _lower_ruby_method(self, node) -> SourceNode:
        return SourceNode(
            kind=NodeKind.METHOD_DEF,
            name=self._field_text(node, self.NAME_FIELD) or "__anon",
            params=self._lower_params(node),
            children=self._lower_statements(
                self._body_nodes(node, ("name", "parameters"))
            ),
            location=self._source_loc(node),
        )

    def _lower_ruby_singleton_method(self, node) -> SourceNode:
        receiver = self._field_text(node, "object") or "self"
        name = self._field_text(node, self.NAME_FIELD) or "__anon"
        return SourceNode(
            kind=NodeKind.METHOD_DEF,
            name=f"{receiver}.{name}",
            params=self._lower_params(node),
            children=self._lower_statements(
                self._body_nodes(node, ("object", "name", "parameters"))
            ),
            location=self._source_loc(node),
        )

    # -- Ruby: calls and blocks ------------------------------------------------

    def _child_of_types(self, node, types: frozenset[str]):
        return next((c for c in node.children if c.type in types), None)

    def _lower_ruby_call(self, node) -> SourceNode:
        receiver_node = node.child_by_field_name("receiver")
        method_node = node.child_by_field_name("method")
        args_node = node.child_by_field_name("arguments")
        if args_node is None:
            args_node = self._child_of_types(node, self.ARGUMENT_LIST_TYPES)
        block_node = node.child_by_field_name("block")
        if block_node is None:
            block_node = self._child_of_types(node, self.BLOCK_TYPES)

        if method_node is None:
            return self._lower_raw(node)

        args: tuple[SourceNode, ...] = ()
        if args_node is not None:
            args = tuple(
                self._lower_expr(child)
                for child in args_node.children
                if not self._is_skippable(child)
            )
        return SourceNode(
            kind=NodeKind.CALL,
            name=self._node_text(method_node),
            receiver=(
                self._lower_expr(receiver_node) if receiver_node is not None else None
            ),
            args=args,
            block=(
                self._lower_ruby_block(block_node) if block_node is not None else None
            ),
            location=self._source_loc(node),
        )

    def _lower_ruby_block(self, node) -> SourceNode:
        return SourceNode(
            kind=NodeKind.BLOCK,
            params=self._lower_params(node),
            children=self._lower_statements(self._body_nodes(node, ("parameters",))),
            location=self._source_loc(node),
        )

    # -- Ruby: literals --------------------------------------------------------

    def _static_content(self, node) -> str | None:
        """Concatenated literal content, or ``None`` if *node* interpolates."""
        parts = []
        for child in node.children:
            if child.type == self.INTERPOLATION_TYPE:
                return None
            if child.type in self.STRING_PART_TYPES:
                parts.append(self._node_text(child))
        return "".join(parts)

    def _lower_literal(self, node, kind: NodeKind) -> SourceNode:
        content = self._static_content(node)
        if content is None:
            return SourceNode(
                kind=NodeKind.INTERPOLATED_STRING,
                value=self._node_text(node),
                location=self._source_loc(node),
            )
        return SourceNode(kind=kind, value=content, location=self._source_loc(node))

    def _lower_ruby_string(self, node) -> SourceNode:
        return self._lower_literal(node, NodeKind.STRING)

    def _lower_delimited_symbol(self, node) -> SourceNode:
        return self._lower_literal(node, NodeKind.SYMBOL)

    def _lower_simple_symbol(self, node) -> SourceNode:
        return SourceNode(
            kind=NodeKind.SYMBOL,
            value=self._node_text(node).lstrip(":"),
            location=self._source_loc(node),
        )
