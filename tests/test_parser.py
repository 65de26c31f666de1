"""Tests for the tree-sitter parsing layer."""

from __future__ import annotations

from rewriter.parser import Parser, ParserFactory, TreeSitterParserFactory


class _RecordingFactory(ParserFactory):
    def __init__(self):
        self.languages: list[str] = []

    def get_parser(self, language: str):
        self.languages.append(language)
        return TreeSitterParserFactory().get_parser(language)


class TestParser:
    def test_defaults_to_ruby(self):
        factory = _RecordingFactory()
        tree = Parser(factory).parse('describe "d" do\nend\n')
        assert factory.languages == ["ruby"]
        assert tree.root_node.type == "program"
        assert not tree.root_node.has_error

    def test_source_with_errors_still_parses(self):
        tree = Parser(TreeSitterParserFactory()).parse("class C\n  def\n")
        assert tree.root_node.has_error
