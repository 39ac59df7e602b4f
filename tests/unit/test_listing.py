"""
Unit tests for sorting, paging and grouping records.
"""

import pytest

from waymark.display.listing import group_by_file, paginate_records, sort_records
from waymark.models.config import DEFAULT_PAGE_SIZE, SortBy
from waymark.models.record import WaymarkRecord, WaymarkSignals


@pytest.fixture
def records():
    return [
        WaymarkRecord(file="src/b.ts", start_line=30, type="todo"),
        WaymarkRecord(file="src/a.ts", start_line=5, type="note", signals=WaymarkSignals(flagged=True)),
        WaymarkRecord(file="src/b.ts", start_line=2, type="fix", signals=WaymarkSignals(starred=True)),
        WaymarkRecord(file="src/a.ts", start_line=17, type="todo"),
    ]


def _keys(records):
    return [(r.file, r.start_line) for r in records]


class TestSortRecords:
    """Test cases for sort_records()."""

    def test_none_keeps_order(self, records):
        """Test that no sort field keeps the input order."""
        assert sort_records(records) == records

    def test_by_file_is_stable(self, records):
        """Test that file sorting keeps the order within each file."""
        assert _keys(sort_records(records, SortBy.FILE)) == [
            ("src/a.ts", 5), ("src/a.ts", 17), ("src/b.ts", 30), ("src/b.ts", 2)
        ]

    def test_by_line(self, records):
        """Test sorting by start line."""
        assert [r.start_line for r in sort_records(records, "line")] == [2, 5, 17, 30]

    def test_by_type(self, records):
        """Test sorting by type name."""
        assert [r.type for r in sort_records(records, SortBy.TYPE)] == ["fix", "note", "todo", "todo"]

    def test_by_signal(self, records):
        """Test that starred records come before flagged ones."""
        assert _keys(sort_records(records, SortBy.SIGNAL)) == [
            ("src/b.ts", 2), ("src/a.ts", 5), ("src/b.ts", 30), ("src/a.ts", 17)
        ]

    def test_reverse(self, records):
        """Test reversing the sorted order."""
        assert [r.start_line for r in sort_records(records, SortBy.LINE, reverse=True)] == [30, 17, 5, 2]

    def test_does_not_mutate_input(self, records):
        """Test that sorting returns a new list."""
        before = list(records)
        sort_records(records, SortBy.LINE)
        assert records == before

    def test_invalid_sort_field(self, records):
        """Test that an unknown sort field raises."""
        with pytest.raises(ValueError):
            sort_records(records, "relevance")


class TestPaginateRecords:
    """Test cases for paginate_records()."""

    def test_no_paging(self, records):
        """Test that no limit or page returns everything."""
        assert paginate_records(records) == records

    def test_limit_only(self, records):
        """Test that a limit alone returns the first page."""
        assert _keys(paginate_records(records, limit=2)) == [("src/b.ts", 30), ("src/a.ts", 5)]

    def test_second_page(self, records):
        """Test selecting a later page."""
        assert _keys(paginate_records(records, limit=3, page=2)) == [("src/a.ts", 17)]

    def test_page_past_end(self, records):
        """Test a page beyond the last record."""
        assert paginate_records(records, limit=2, page=5) == []

    def test_page_without_limit_uses_default_size(self):
        """Test the default page size."""
        many = [WaymarkRecord(file="a.py", start_line=i, type="todo") for i in range(1, 121)]

        page = paginate_records(many, page=2)

        assert len(page) == DEFAULT_PAGE_SIZE
        assert page[0].start_line == DEFAULT_PAGE_SIZE + 1


class TestGroupByFile:
    """Test cases for group_by_file()."""

    def test_first_seen_order(self, records):
        """Test that files keep the order they first appear in."""
        groups = group_by_file(records)

        assert list(groups) == ["src/b.ts", "src/a.ts"]
        assert [r.start_line for r in groups["src/b.ts"]] == [30, 2]
        assert [r.start_line for r in groups["src/a.ts"]] == [5, 17]

    def test_empty(self):
        """Test grouping nothing."""
        assert group_by_file([]) == {}
