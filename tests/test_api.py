"""Tests for the composable API functions in rewriter.api."""

import pytest

from rewriter.api import dump_rewritten, parse_source, rewrite_source, rewrite_sources
from rewriter.applier import RewriteResult, rewrite_tree
from rewriter.config import RewriteConfig
from rewriter.diagnostics import DiagnosticKind
from rewriter.tree import NodeKind
from rewriter.validator import validate

FIXTURE = """\
# typed: true

module M

  # The class generated by describe shouldn't use `M` as a super-class, as
  # it's a module.
  describe "describe" do

    it "adds a method" do
    end

  end

end

class C

  def test_method
  end

  # The class extracted here will have `C` as a super-class, allowing
  # `test_method` to be used in `it` blocks.
  describe "describe" do

    it "adds a method" do
      test_method
    end

  end
end
"""


class TestRewriteSource:
    def test_module_context(self):
        result = rewrite_source(FIXTURE)
        module = result.tree.children[0]
        [synthesized] = module.children
        assert synthesized.kind == NodeKind.CLASS_DEF
        assert synthesized.superclass is None
        [method] = synthesized.children
        assert method.name == "test_adds_a_method"
        assert method.children == ()

    def test_class_context(self):
        result = rewrite_source(FIXTURE)
        klass = result.tree.children[1]
        user_method, synthesized = klass.children
        assert user_method.name == "test_method"
        assert synthesized.superclass == "C"
        [method] = synthesized.children
        [call] = method.children
        assert call.kind == NodeKind.IDENTIFIER
        assert call.name == "test_method"

    def test_synthesized_class_points_at_describe(self):
        result = rewrite_source(FIXTURE)
        synthesized = result.tree.children[1].children[1]
        assert synthesized.location.start_line == 23
        assert synthesized.children[0].location.start_line == 25

    def test_no_diagnostics_and_valid(self):
        result = rewrite_source(FIXTURE)
        assert isinstance(result, RewriteResult)
        assert result.diagnostics == []
        assert validate(result.tree) == []

    def test_idempotent(self):
        once = rewrite_source(FIXTURE)
        twice = rewrite_tree(once.tree)
        assert twice.tree == once.tree

    def test_dynamic_label_is_reported(self):
        source = 'class C\n  it "case #{n}" do\n  end\nend\n'
        result = rewrite_source(source)
        [notice] = result.diagnostics
        assert notice.kind == DiagnosticKind.UNSUPPORTED_LABEL_EXPRESSION
        assert notice.location.start_line == 2
        assert result.tree.children[0].children[0].kind == NodeKind.CALL

    def test_minitest_config(self):
        source = (
            "class WidgetTest\n"
            '  describe "widget" do\n'
            "    before do\n"
            "      setup_widget\n"
            "    end\n"
            "    let(:widget) { build }\n"
            '    it "works" do\n'
            "      widget\n"
            "    end\n"
            "  end\n"
            "end\n"
        )
        result = rewrite_source(source, config=RewriteConfig.minitest())
        synthesized = result.tree.children[0].children[0]
        assert synthesized.superclass == "WidgetTest"
        names = [m.name for m in synthesized.children]
        assert names == ["setup", "widget", "test_works"]


class TestParseSource:
    def test_returns_program(self):
        assert parse_source("foo\n").kind == NodeKind.PROGRAM

    def test_unsupported_language(self):
        with pytest.raises(ValueError):
            parse_source("x = 1", language="cobol")


class TestDumpRewritten:
    def test_fixture(self):
        assert dump_rewritten(FIXTURE) == (
            "module M\n"
            "  class Spec_describe\n"
            "    def test_adds_a_method\n"
            "    end\n"
            "  end\n"
            "end\n"
            "class C\n"
            "  def test_method\n"
            "  end\n"
            "  class Spec_describe < C\n"
            "    def test_adds_a_method\n"
            "      test_method\n"
            "    end\n"
            "  end\n"
            "end\n"
        )

    def test_heredoc_survives_round_trip(self):
        source = (
            'describe "d" do\n'
            '  it "x" do\n'
            "    puts <<~T\n"
            "      hi\n"
            "    T\n"
            "  end\n"
            "end\n"
        )
        once = dump_rewritten(source)
        assert "puts <<~T\n      hi\n    T\n" in once
        assert "\n\n" not in once
        assert dump_rewritten(once) == once


class TestRewriteSources:
    def test_results_keyed_by_input(self):
        sources = {
            "module.rb": 'module M\n  describe "d" do\n  end\nend\n',
            "class.rb": 'class C\n  describe "d" do\n  end\nend\n',
        }
        results = rewrite_sources(sources, max_workers=2)
        assert set(results) == {"module.rb", "class.rb"}
        assert results["module.rb"].tree.children[0].children[0].superclass is None
        assert results["class.rb"].tree.children[0].children[0].superclass == "C"

    def test_empty(self):
        assert rewrite_sources({}) == {}
