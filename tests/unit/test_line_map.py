"""
Tests for the line-mapping index (mapper.py).
Block heads, coverage intervals and queries over a bytecode listing.
"""
import pytest
from bytebolt.parsing.mapper import DisassemblyBlock, LineMap, parse_blocks
from bytebolt.parsing.sentinels import SENTINELS


def _listing(heads, total):
    """Build a listing of `total` lines with block heads at {index: source_line}."""
    lines = []
    for i in range(total):
        if i in heads:
            lines.append(f"{heads[i]:>4} |      {i * 2:>5}  NOP")
        else:
            lines.append(f"     |      {i * 2:>5}  NOP")
    return "\n".join(lines)


# Heads at source lines [2, 2, 5, 9], display indices 0, 3, 6, 10, last index 14
PARTITION = _listing({0: 2, 3: 2, 6: 5, 10: 9}, 15)


class TestParseBlocks:

    def test_block_ends_before_next_head(self):
        blocks = parse_blocks(PARTITION)
        assert [b.span for b in blocks] == [(0, 2), (3, 5), (6, 9), (10, 14)]

    def test_source_lines(self):
        assert [b.source_line for b in parse_blocks(PARTITION)] == [2, 2, 5, 9]

    def test_sorted_by_source_line(self):
        text = _listing({0: 9, 3: 2}, 6)
        blocks = parse_blocks(text)
        assert blocks == [DisassemblyBlock(2, 3, 5), DisassemblyBlock(9, 0, 2)]

    def test_lines_before_first_head_belong_to_no_block(self):
        text = "Disassembly of <module>:\n   1 |  0  RESUME\n     |  2  NOP"
        assert [b.span for b in parse_blocks(text)] == [(1, 2)]

    def test_head_needs_trailing_whitespace(self):
        assert parse_blocks("12") == []
        assert parse_blocks("12abc\n") == []

    def test_leading_whitespace_optional(self):
        assert parse_blocks("7 LOAD") == [DisassemblyBlock(7, 0, 0)]

    def test_blank_text(self):
        assert parse_blocks("") == []
        assert parse_blocks("   \n  ") == []

    def test_trailing_newline_not_counted(self):
        blocks = parse_blocks("  1  LOAD 0\n  3  ADD\n")
        assert blocks[-1].end_index == 1


class TestCoverage:

    def test_partition_middle_line(self):
        m = LineMap(PARTITION)
        assert m.spans_for(6) == [(6, 9)]

    def test_duplicates_both_hit(self):
        m = LineMap(PARTITION)
        assert m.spans_for(2) == [(0, 2), (3, 5)]

    def test_last_block_unbounded(self):
        m = LineMap(PARTITION)
        assert m.spans_for(9, 11) == [(10, 14)]
        assert m.spans_for(1000) == [(10, 14)]

    def test_line_before_first_block_has_no_hits(self):
        assert LineMap(PARTITION).spans_for(1) == []

    def test_range_spanning_blocks(self):
        m = LineMap(PARTITION)
        assert m.spans_for(4, 5) == [(0, 2), (3, 5), (6, 9)]

    def test_reversed_range(self):
        m = LineMap(PARTITION)
        assert m.spans_for(5, 4) == m.spans_for(4, 5)

    def test_sort_before_coverage(self):
        m = LineMap(_listing({0: 9, 3: 2}, 6))
        assert m.coverage_of(0) == (2, 8)
        assert m.coverage_of(1) == (9, None)
        assert m.spans_for(8) == [(3, 5)]
        assert m.spans_for(9) == [(0, 2)]

    def test_duplicate_coverage_extends_to_next_distinct_line(self):
        m = LineMap(PARTITION)
        assert m.coverage_of(0) == (2, 4)
        assert m.coverage_of(1) == (2, 4)

    def test_idempotent_queries(self):
        m = LineMap(PARTITION)
        assert m.spans_for(6) == m.spans_for(6)


class TestEndToEnd:
    """Ten-line source, every listing line is a head."""

    TEXT = "  1  LOAD 0\n  1  LOAD 1\n  3  ADD\n  3  STORE x\n"

    def test_uncompiled_line_hits_preceding_block(self):
        m = LineMap(self.TEXT)
        spans = m.spans_for(2)
        assert spans == [(0, 0), (1, 1)]

    def test_line_three(self):
        assert LineMap(self.TEXT).spans_for(3) == [(2, 2), (3, 3)]


class TestSentinels:

    @pytest.mark.parametrize("sentinel", SENTINELS)
    def test_sentinel_has_no_blocks(self, sentinel):
        m = LineMap(sentinel)
        assert m.is_empty
        assert m.spans_for(1, 10_000) == []

    def test_no_python_prefix(self):
        assert LineMap("No Python interpreter\n  1  LOAD").is_empty


class TestSourceLineAt:

    def test_inside_block(self):
        m = LineMap(PARTITION)
        assert m.source_line_at(7) == 5
        assert m.source_line_at(14) == 9

    def test_outside_blocks(self):
        m = LineMap("header\n   3 | 0 NOP")
        assert m.source_line_at(0) is None
        assert m.source_line_at(1) == 3
        assert m.source_line_at(99) is None
