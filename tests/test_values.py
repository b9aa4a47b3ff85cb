"""Tests for the value reader helpers."""

from __future__ import annotations

from dryparse import Value, propval
from dryparse.values import (
    Segment,
    ValueBuffer,
    normalize_value,
    scan_magic,
    split_magic,
    split_title,
)


class TestSplitMagic:
    """Tests for split_magic function."""

    def test_plain_text_is_one_segment(self) -> None:
        """Text without markers is a single plain segment."""
        assert split_magic("just text") == [Segment("just text", magic=False)]

    def test_separates_magic_from_plain_text(self) -> None:
        """Magic blocks are split out with their markers."""
        assert split_magic("a {! b !} c") == [
            Segment("a ", magic=False),
            Segment("{! b !}", magic=True),
            Segment(" c", magic=False),
        ]

    def test_marks_unclosed_block(self) -> None:
        """A block without a close marker is flagged as not closed."""
        segments = split_magic("a {! b")
        assert segments[-1] == Segment("{! b", magic=True, closed=False)

    def test_closes_at_first_close_marker(self) -> None:
        """Open markers inside magic do not nest."""
        segments = split_magic("{! {! x !} y !}")
        assert segments[0] == Segment("{! {! x !}", magic=True)


class TestScanMagic:
    """Tests for scan_magic function."""

    def test_closed_block(self) -> None:
        """Returns False when every block is closed."""
        assert not scan_magic("{! x !}")

    def test_open_block_across_lines(self) -> None:
        """Returns True when the text ends inside a block."""
        assert scan_magic("foo {!\nbar")

    def test_opens_from_closed_state(self) -> None:
        """An open marker switches the state to open."""
        assert scan_magic("foo {!")

    def test_closes_from_open_state(self) -> None:
        """A close marker ends a block opened on an earlier line."""
        assert not scan_magic("x; !}", in_magic=True)

    def test_stays_open_without_markers(self) -> None:
        """Lines without markers keep the current state."""
        assert scan_magic("return {a: 1};", in_magic=True)
        assert not scan_magic("plain", in_magic=False)

    def test_several_blocks_on_one_line(self) -> None:
        """Blocks opened and closed on one line are balanced."""
        assert not scan_magic("{! a !} {! b !}")
        assert scan_magic("{! a !} {! b")

    def test_overlapping_markers_do_not_close(self) -> None:
        """The close marker must start after the open marker ends."""
        assert scan_magic("{!}")


class TestNormalizeValue:
    """Tests for normalize_value function."""

    def test_strips_plain_text(self) -> None:
        """Plain text is stripped at both ends."""
        assert normalize_value("  foo bar  ") == "foo bar"

    def test_keeps_magic_verbatim(self) -> None:
        """Magic blocks keep their inner whitespace and newlines."""
        assert normalize_value(" {!\n  x;\n!} ") == "{!\n  x;\n!}"

    def test_empty(self) -> None:
        """Whitespace-only text normalizes to an empty string."""
        assert normalize_value("   ") == ""


class TestSplitTitle:
    """Tests for split_title function."""

    def test_splits_at_first_colon(self) -> None:
        """Only the first colon separates the title."""
        assert split_title("condition: title: more") == ("condition", " title: more")

    def test_ignores_colons_inside_magic(self) -> None:
        """Returns None for the title when colons only appear in magic."""
        text = "{! var a = {a:true}; return a.a; !}"
        assert split_title(text) == (text, None)

    def test_colon_after_magic(self) -> None:
        """A colon after a magic block starts the title."""
        assert split_title("{! a:b !}: Title") == ("{! a:b !}", " Title")


class TestValueBuffer:
    """Tests for ValueBuffer class."""

    def test_joins_continuations_with_single_space(self) -> None:
        """Continuation lines are stripped and joined with one space."""
        buffer = ValueBuffer(" foo", 3)
        buffer.extend("\t  bar  ")
        buffer.extend("  sun")

        assert buffer.to_value() == Value(text="foo bar sun", line=3)

    def test_keeps_newlines_while_magic_is_open(self) -> None:
        """Lines inside open magic are appended verbatim after a newline."""
        buffer = ValueBuffer(" {!", 1)
        assert buffer.in_magic

        buffer.extend("  x = 1;")
        buffer.extend("!}")

        assert not buffer.in_magic
        assert buffer.to_value().text == "{!\n  x = 1;\n!}"

    def test_continuation_opens_magic(self) -> None:
        """A continuation line can open a block that later lines close."""
        buffer = ValueBuffer("{! a !}", 1)
        buffer.extend("  {!")
        assert buffer.in_magic

        buffer.extend("b; !}")
        assert buffer.to_value().text == "{! a !} {!\nb; !}"

    def test_continuation_after_empty_start(self) -> None:
        """The first continuation of an empty value gets no leading space."""
        buffer = ValueBuffer("", 1)
        buffer.extend("  later")
        assert buffer.raw == "later"

    def test_reads_long_magic_block_in_linear_time(self) -> None:
        """A block of many thousand lines is read without rescanning."""
        buffer = ValueBuffer("{!", 1)
        for number in range(50_000):
            buffer.extend(f"x{number} = {{a: {number}}};")
            assert buffer.in_magic
        buffer.extend("!}")

        text = buffer.to_value().text
        assert text.startswith("{!\nx0 = {a: 0};\n")
        assert text.endswith("x49999 = {a: 49999};\n!}")


class TestPropval:
    """Tests for propval function."""

    def test_unwraps_value(self) -> None:
        """Returns the raw text of a Value."""
        assert propval(Value(text="foo", line=1)) == "foo"

    def test_passes_other_objects_through(self) -> None:
        """Returns non-Value objects unchanged."""
        assert propval("foo") == "foo"
        assert propval(None) is None

    def test_plain_accessor(self) -> None:
        """Value.plain and str() both give the raw text."""
        value = Value(text="foo", line=4)
        assert value.plain == "foo"
        assert str(value) == "foo"
