"""Tests for source spans."""

from __future__ import annotations

from stackcalc.source import Span


class TestSpan:
    def test_between(self):
        assert Span.between(Span(2, 4), Span(7, 9)) == Span(2, 9)

    def test_len(self):
        span = Span(3, 7)
        assert len(span) == 4
        assert not span.is_empty

    def test_empty(self):
        assert Span(5, 5).is_empty
        assert len(Span(5, 5)) == 0

    def test_slice(self):
        assert Span(4, 8).slice("1 + 3.14;") == "3.14"

    def test_line_and_column_first_line(self):
        source = "1 + 2;"
        span = Span(4, 5)
        assert span.starting_line_number(source) == 1
        assert span.starting_column_number(source) == 5

    def test_line_and_column_later_line(self):
        source = "1;\n22;\n  333;"
        span = Span(source.index("333"), source.index("333") + 3)
        assert span.starting_line_number(source) == 3
        assert span.starting_column_number(source) == 3

    def test_span_at_line_start(self):
        source = "1;\n2;"
        span = Span(3, 4)
        assert span.starting_line_number(source) == 2
        assert span.starting_column_number(source) == 1

    def test_str(self):
        assert str(Span(1, 3)) == "1..3"
