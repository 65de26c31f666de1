"""Tests for label normalization and the name allocator."""

from __future__ import annotations

from rewriter.diagnostics import DiagnosticKind, DiagnosticSink
from rewriter.names import NameAllocator, normalize_label
from rewriter.tree import SourceLocation


class TestNormalizeLabel:
    def test_spaces_become_underscores(self):
        assert normalize_label("adds a method") == "adds_a_method"

    def test_lower_cases_and_squeezes_punctuation(self):
        assert normalize_label("Adds A Method!!") == "adds_a_method"
        assert normalize_label("handles #to_s / #inspect") == "handles_to_s_inspect"

    def test_leading_digit_is_escaped(self):
        assert normalize_label("1st case") == "_1st_case"

    def test_nothing_usable(self):
        assert normalize_label("!!!") == ""
        assert normalize_label("") == ""


class TestAllocate:
    def test_prefix_is_applied(self):
        allocator = NameAllocator()
        scope = allocator.open_scope()
        assert allocator.allocate("adds a method", scope, prefix="test_") == (
            "test_adds_a_method"
        )

    def test_collisions_get_numeric_suffixes_in_order(self):
        allocator = NameAllocator()
        scope = allocator.open_scope()
        names = [allocator.allocate("works", scope, prefix="test_") for _ in range(3)]
        assert names == ["test_works", "test_works_2", "test_works_3"]

    def test_labels_normalizing_alike_collide(self):
        allocator = NameAllocator()
        scope = allocator.open_scope()
        assert allocator.allocate("does it", scope) == "does_it"
        assert allocator.allocate("Does it?", scope) == "does_it_2"

    def test_scopes_are_independent(self):
        allocator = NameAllocator()
        first = allocator.open_scope()
        second = allocator.open_scope()
        assert allocator.allocate("x", first) == "x"
        assert allocator.allocate("x", second) == "x"

    def test_reserved_names_are_skipped(self):
        allocator = NameAllocator()
        scope = allocator.open_scope()
        allocator.reserve("test_x", scope)
        allocator.reserve("test_x_2", scope)
        assert allocator.allocate("x", scope, prefix="test_") == "test_x_3"
        assert allocator.allocate("x", scope, prefix="test_") == "test_x_4"

    def test_empty_label_falls_back_to_position(self):
        allocator = NameAllocator()
        scope = allocator.open_scope()
        assert allocator.allocate("???", scope, prefix="Spec_", position=3) == (
            "Spec_anonymous_3"
        )

    def test_is_taken(self):
        allocator = NameAllocator()
        scope = allocator.open_scope()
        allocator.allocate("x", scope)
        assert allocator.is_taken("x", scope)
        assert not allocator.is_taken("y", scope)


class TestCollisionNotices:
    def test_one_notice_per_resolved_collision(self):
        sink = DiagnosticSink()
        allocator = NameAllocator(sink)
        scope = allocator.open_scope()
        loc = SourceLocation(start_line=4, start_col=2, end_line=5, end_col=5)
        allocator.allocate("x", scope)
        allocator.allocate("x", scope, location=loc)
        notices = sink.of_kind(DiagnosticKind.NAME_COLLISION_RESOLVED)
        assert len(notices) == 1
        assert notices[0].location == loc
        assert "x_2" in notices[0].message

    def test_no_notice_without_collision(self):
        sink = DiagnosticSink()
        allocator = NameAllocator(sink)
        scope = allocator.open_scope()
        allocator.allocate("x", scope)
        allocator.allocate("y", scope)
        assert sink.diagnostics == []
