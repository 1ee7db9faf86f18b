"""Tests for lintgate.positions: line/column and offset mapping."""

from lintgate import positions

_ONE_LINE = 'var foo = "bar"'
_MULTI_LINE = "ab\ncde\n"


# ---------------------------------------------------------------------------
# from_line_column
# ---------------------------------------------------------------------------


class TestFromLineColumn:
    def test_converts_to_zero_based(self) -> None:
        assert positions.from_line_column(_ONE_LINE, 1, 2) == (0, 1)

    def test_second_line(self) -> None:
        assert positions.from_line_column(_MULTI_LINE, 2, 3) == (1, 2)

    def test_column_zero_clamps_to_start(self) -> None:
        assert positions.from_line_column(_ONE_LINE, 1, 0) == (0, 0)

    def test_line_zero_clamps_to_first_row(self) -> None:
        assert positions.from_line_column(_MULTI_LINE, 0, 2) == (0, 1)

    def test_line_past_end_clamps_to_last_row(self) -> None:
        # The trailing newline opens an empty third row.
        assert positions.from_line_column(_MULTI_LINE, 10, 5) == (2, 0)

    def test_column_past_end_clamps_to_line_length(self) -> None:
        assert positions.from_line_column(_ONE_LINE, 1, 100) == (0, 15)

    def test_empty_text(self) -> None:
        assert positions.from_line_column("", 3, 3) == (0, 0)


# ---------------------------------------------------------------------------
# from_offset
# ---------------------------------------------------------------------------


class TestFromOffset:
    def test_start_of_text(self) -> None:
        assert positions.from_offset(_MULTI_LINE, 0) == (0, 0)

    def test_end_of_first_line(self) -> None:
        assert positions.from_offset(_MULTI_LINE, 2) == (0, 2)

    def test_start_of_second_line(self) -> None:
        assert positions.from_offset(_MULTI_LINE, 3) == (1, 0)

    def test_inside_second_line(self) -> None:
        assert positions.from_offset(_MULTI_LINE, 5) == (1, 2)

    def test_end_of_text(self) -> None:
        assert positions.from_offset(_ONE_LINE, 15) == (0, 15)

    def test_offset_past_end_clamps(self) -> None:
        assert positions.from_offset("ab\ncde", 100) == (1, 3)

    def test_negative_offset_clamps(self) -> None:
        assert positions.from_offset(_MULTI_LINE, -4) == (0, 0)


class TestSpanFromOffsets:
    def test_span(self) -> None:
        assert positions.span_from_offsets(_MULTI_LINE, 1, 5) == ((0, 1), (1, 2))

    def test_empty_span(self) -> None:
        assert positions.span_from_offsets(_ONE_LINE, 15, 15) == ((0, 15), (0, 15))


class TestUtf16ToIndex:
    def test_ascii_is_unchanged(self) -> None:
        assert positions.utf16_to_index(_ONE_LINE, 7) == 7

    def test_astral_character_counts_twice(self) -> None:
        assert positions.utf16_to_index("\U0001F600ab", 3) == 2

    def test_offset_past_end_clamps(self) -> None:
        assert positions.utf16_to_index("ab", 10) == 2

    def test_negative_offset_clamps(self) -> None:
        assert positions.utf16_to_index("ab", -1) == 0
