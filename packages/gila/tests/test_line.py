"""Tests for gila.line.Line -- rune storage, tab expansion and edits."""

from __future__ import annotations

from gila.line import TAB_STOP, Line, expand_tabs


class TestTabExpansion:
    """Tabs become spaces up to the next multiple of the tab stop."""

    def test_tab_stop_is_four(self) -> None:
        assert TAB_STOP == 4

    def test_leading_tab(self) -> None:
        assert "".join(expand_tabs("\tx")) == "    x"

    def test_tab_after_text(self) -> None:
        assert "".join(expand_tabs("ab\tc")) == "ab  c"

    def test_tab_on_boundary_adds_full_stop(self) -> None:
        assert "".join(expand_tabs("abcd\te")) == "abcd    e"

    def test_consecutive_tabs(self) -> None:
        assert "".join(expand_tabs("\t\t")) == " " * 8

    def test_line_constructor_expands(self) -> None:
        line = Line("a\tb")
        assert line.text() == "a   b"
        assert len(line) == 5


class TestLineBasics:
    def test_empty_line(self) -> None:
        line = Line()
        assert len(line) == 0
        assert line.length() == 0
        assert line.text() == ""

    def test_length_counts_code_points(self) -> None:
        line = Line("héllo😀")
        assert len(line) == 6

    def test_runes_view_is_a_copy(self) -> None:
        line = Line("ab")
        runes = line.runes()
        assert runes == ("a", "b")
        line.insert_at("c", 2)
        assert runes == ("a", "b")

    def test_slice(self) -> None:
        line = Line("hello")
        assert line.slice(1, 3) == "el"
        assert line.slice(3, 100) == "lo"

    def test_equality(self) -> None:
        assert Line("abc") == Line("abc")
        assert Line("abc") != Line("abd")


class TestInsertAt:
    def test_insert_in_middle(self) -> None:
        line = Line("ac")
        line.insert_at("b", 1)
        assert line.text() == "abc"

    def test_insert_at_start(self) -> None:
        line = Line("bc")
        line.insert_at("a", 0)
        assert line.text() == "abc"

    def test_insert_at_length_appends(self) -> None:
        line = Line("ab")
        line.insert_at("c", 2)
        assert line.text() == "abc"

    def test_out_of_range_index_appends(self) -> None:
        line = Line("ab")
        line.insert_at("c", 99)
        line.insert_at("d", -1)
        assert line.text() == "abcd"


class TestDeleteAt:
    def test_delete_in_middle(self) -> None:
        line = Line("abc")
        line.delete_at(1)
        assert line.text() == "ac"

    def test_out_of_range_deletes_last(self) -> None:
        line = Line("abc")
        line.delete_at(3)
        assert line.text() == "ab"
        line.delete_at(-5)
        assert line.text() == "a"

    def test_delete_on_empty_line_is_noop(self) -> None:
        line = Line()
        line.delete_at(0)
        line.delete_last()
        assert line.text() == ""

    def test_delete_last(self) -> None:
        line = Line("abc")
        line.delete_last()
        assert line.text() == "ab"

    def test_clear(self) -> None:
        line = Line("abc")
        line.clear()
        assert len(line) == 0


class TestAppendAndSplit:
    def test_append_moves_runes(self) -> None:
        a = Line("foo")
        b = Line("bar")
        a.append(b)
        assert a.text() == "foobar"
        assert len(b) == 0

    def test_append_does_not_alias(self) -> None:
        a = Line("foo")
        b = Line("bar")
        a.append(b)
        b.insert_at("x", 0)
        assert a.text() == "foobar"

    def test_split_in_middle(self) -> None:
        line = Line("hello world")
        tail = line.split_at(5)
        assert line.text() == "hello"
        assert tail.text() == " world"

    def test_split_at_end_gives_empty_tail(self) -> None:
        line = Line("hello")
        tail = line.split_at(5)
        assert line.text() == "hello"
        assert tail.text() == ""

    def test_split_at_start_moves_everything(self) -> None:
        line = Line("hello")
        tail = line.split_at(0)
        assert line.text() == ""
        assert tail.text() == "hello"

    def test_split_clamps_index(self) -> None:
        line = Line("ab")
        tail = line.split_at(10)
        assert line.text() == "ab"
        assert tail.text() == ""
