"""Render SourceNode trees back to Ruby-like source text for inspection."""

from __future__ import annotations

import re
import textwrap

from . import constants
from .tree import NodeKind, SourceNode

_SIMPLE_SYMBOL_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*[?!=]?$")


def print_tree(node: SourceNode) -> str:
    """Return *node* rendered as source text, one statement per line."""
    lines: list[str] = []
    if node.kind == NodeKind.PROGRAM:
        for child in node.children:
            _print_stmt(child, 0, lines)
    else:
        _print_stmt(node, 0, lines)
    return "\n".join(lines) + "\n" if lines else ""


def _indent(depth: int) -> str:
    return constants.INDENT * depth


def _print_body(children: tuple[SourceNode, ...], depth: int, lines: list[str]) -> None:
    for child in children:
        _print_stmt(child, depth, lines)


def _print_stmt(node: SourceNode, depth: int, lines: list[str]) -> None:
    pad = _indent(depth)
    kind = node.kind
    if kind == NodeKind.MODULE_DEF:
        lines.append(f"{pad}module {node.name}")
        _print_body(node.children, depth + 1, lines)
        lines.append(f"{pad}end")
    elif kind == NodeKind.CLASS_DEF:
        header = f"{pad}class {node.name}"
        if node.superclass:
            header += f" < {node.superclass}"
        lines.append(header)
        _print_body(node.children, depth + 1, lines)
        lines.append(f"{pad}end")
    elif kind == NodeKind.SINGLETON_CLASS:
        lines.append(f"{pad}class << {node.name}")
        _print_body(node.children, depth + 1, lines)
        lines.append(f"{pad}end")
    elif kind == NodeKind.METHOD_DEF:
        params = f"({', '.join(node.params)})" if node.params else ""
        lines.append(f"{pad}def {node.name}{params}")
        _print_body(node.children, depth + 1, lines)
        lines.append(f"{pad}end")
    elif kind == NodeKind.CALL and node.block is not None:
        lines.append(f"{pad}{_call_head(node)} do{_block_params(node.block)}")
        _print_body(node.block.children, depth + 1, lines)
        lines.append(f"{pad}end")
    elif kind == NodeKind.RAW and "\n" in (node.value or ""):
        _print_raw_lines(node, depth, lines)
    else:
        lines.append(f"{pad}{print_expr(node)}")


def _print_raw_lines(node: SourceNode, depth: int, lines: list[str]) -> None:
    # Continuation lines keep their original indentation relative to the
    # node's start column.
    value = node.value or ""
    if value.startswith("\n"):
        # Begins at the end of the previous line.
        text = value[1:]
    else:
        text = " " * node.location.start_col + value
    for line in textwrap.dedent(text).splitlines():
        lines.append(f"{_indent(depth)}{line}" if line.strip() else "")


def _block_params(block: SourceNode) -> str:
    return f" |{', '.join(block.params)}|" if block.params else ""


def _call_head(node: SourceNode) -> str:
    head = node.name or ""
    if node.receiver is not None:
        head = f"{print_expr(node.receiver)}.{head}"
    if node.args:
        head += f"({', '.join(print_expr(arg) for arg in node.args)})"
    return head


def print_expr(node: SourceNode) -> str:
    """Render a single expression node inline."""
    kind = node.kind
    if kind == NodeKind.STRING:
        return '"' + (node.value or "").replace('"', '\\"') + '"'
    if kind == NodeKind.SYMBOL:
        value = node.value or ""
        if _SIMPLE_SYMBOL_RE.match(value):
            return f":{value}"
        return ':"' + value.replace('"', '\\"') + '"'
    if kind in (NodeKind.IDENTIFIER, NodeKind.CONSTANT):
        return node.name or ""
    if kind == NodeKind.SELF:
        return constants.SELF_RECEIVER
    if kind == NodeKind.CALL:
        head = _call_head(node)
        if node.block is None:
            return head
        body = "; ".join(print_expr(child) for child in node.block.children)
        inner = f" {body} " if body else " "
        return f"{head} {{{_block_params(node.block)}{inner}}}"
    if kind in (NodeKind.RAW, NodeKind.INTERPOLATED_STRING):
        return node.value or ""
    # Declarations used as expressions fall back to their multi-line form.
    lines: list[str] = []
    _print_stmt(node, 0, lines)
    return "; ".join(line.strip() for line in lines)
