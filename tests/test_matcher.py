"""Tests for the pattern matcher."""

from __future__ import annotations

from rewriter.config import RewriteConfig
from rewriter.diagnostics import DiagnosticKind, DiagnosticSink
from rewriter.matcher import CandidateKind, PatternMatcher
from rewriter.scope import ScopeFrame
from rewriter.tree import NodeKind, SourceNode


def _lit(value: str, kind: NodeKind = NodeKind.STRING) -> SourceNode:
    return SourceNode(kind=kind, value=value)


def _block(*stmts: SourceNode) -> SourceNode:
    return SourceNode(kind=NodeKind.BLOCK, children=stmts)


def _call(name, *args, block=None, receiver=None) -> SourceNode:
    return SourceNode(
        kind=NodeKind.CALL, name=name, args=args, block=block, receiver=receiver
    )


def _ident(name: str) -> SourceNode:
    return SourceNode(kind=NodeKind.IDENTIFIER, name=name)


class TestDescribeAndIt:
    def test_describe_with_string_label(self):
        body = _ident("foo")
        node = _call("describe", _lit("widget"), block=_block(body))
        candidate = PatternMatcher().classify(node)
        assert candidate.kind == CandidateKind.DESCRIBE
        assert candidate.label == "widget"
        assert candidate.body == (body,)
        assert candidate.reason is None

    def test_it_with_symbol_label(self):
        node = _call("it", _lit("works", NodeKind.SYMBOL), block=_block())
        candidate = PatternMatcher().classify(node)
        assert candidate.kind == CandidateKind.IT
        assert candidate.label == "works"

    def test_self_receiver_is_accepted(self):
        node = _call(
            "describe",
            _lit("x"),
            block=_block(),
            receiver=SourceNode(kind=NodeKind.SELF),
        )
        assert PatternMatcher().classify(node).kind == CandidateKind.DESCRIBE

    def test_scope_snapshot_is_carried(self):
        scope = (ScopeFrame.top_level(), ScopeFrame.klass("C"))
        node = _call("it", _lit("x"), block=_block())
        assert PatternMatcher().classify(node, scope).scope == scope


class TestRejections:
    def test_interpolated_label(self):
        label = SourceNode(kind=NodeKind.INTERPOLATED_STRING, value='"#{x}"')
        candidate = PatternMatcher().classify(_call("it", label, block=_block()))
        assert candidate.kind == CandidateKind.NOT_CANDIDATE
        assert candidate.reason == DiagnosticKind.UNSUPPORTED_LABEL_EXPRESSION

    def test_computed_label(self):
        candidate = PatternMatcher().classify(
            _call("describe", _ident("name"), block=_block())
        )
        assert candidate.kind == CandidateKind.NOT_CANDIDATE
        assert candidate.reason == DiagnosticKind.UNSUPPORTED_LABEL_EXPRESSION

    def test_missing_label(self):
        candidate = PatternMatcher().classify(_call("it", block=_block()))
        assert candidate.reason == DiagnosticKind.UNSUPPORTED_LABEL_EXPRESSION

    def test_extra_arguments(self):
        candidate = PatternMatcher().classify(
            _call("it", _lit("x"), _lit("y", NodeKind.SYMBOL), block=_block())
        )
        assert candidate.kind == CandidateKind.NOT_CANDIDATE
        assert candidate.reason == DiagnosticKind.UNEXPECTED_ARGUMENTS

    def test_missing_block(self):
        candidate = PatternMatcher().classify(_call("describe", _lit("x")))
        assert candidate.kind == CandidateKind.NOT_CANDIDATE
        assert candidate.reason == DiagnosticKind.MALFORMED_BLOCK_ARGUMENT

    def test_other_receiver_is_silent(self):
        node = _call("describe", _lit("x"), block=_block(), receiver=_ident("obj"))
        candidate = PatternMatcher().classify(node)
        assert candidate.kind == CandidateKind.NOT_CANDIDATE
        assert candidate.reason is None

    def test_unknown_call_is_silent(self):
        node = _call("context", _lit("x"), block=_block())
        candidate = PatternMatcher().classify(node)
        assert candidate.kind == CandidateKind.NOT_CANDIDATE
        assert candidate.reason is None

    def test_non_call(self):
        candidate = PatternMatcher().classify(_ident("describe"))
        assert candidate.kind == CandidateKind.NOT_CANDIDATE
        assert candidate.reason is None

    def test_report_to_emits_location(self):
        sink = DiagnosticSink()
        node = _call("describe", _lit("x"))
        PatternMatcher().classify(node).report_to(sink)
        assert [d.kind for d in sink.diagnostics] == [
            DiagnosticKind.MALFORMED_BLOCK_ARGUMENT
        ]


class TestMinitestVocabulary:
    def test_hooks_are_not_keywords_by_default(self):
        candidate = PatternMatcher().classify(_call("before", block=_block()))
        assert candidate.kind == CandidateKind.NOT_CANDIDATE
        assert candidate.reason is None

    def test_before_hook(self):
        matcher = PatternMatcher(RewriteConfig.minitest())
        candidate = matcher.classify(_call("before", block=_block(_ident("x"))))
        assert candidate.kind == CandidateKind.HOOK
        assert candidate.method_name == "setup"

    def test_hook_with_arguments(self):
        matcher = PatternMatcher(RewriteConfig.minitest())
        candidate = matcher.classify(
            _call("after", _lit("all", NodeKind.SYMBOL), block=_block())
        )
        assert candidate.reason == DiagnosticKind.UNEXPECTED_ARGUMENTS

    def test_let(self):
        matcher = PatternMatcher(RewriteConfig.minitest())
        candidate = matcher.classify(
            _call("let", _lit("user", NodeKind.SYMBOL), block=_block())
        )
        assert candidate.kind == CandidateKind.LET
        assert candidate.label == "user"
