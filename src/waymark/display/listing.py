"""
Ordering, paging and grouping of waymark records for display.
"""

from typing import Dict, Iterable, List, Optional, Union

from ..models.config import DEFAULT_PAGE_SIZE, SortBy
from ..models.record import WaymarkRecord


def sort_records(records: Iterable[WaymarkRecord], sort_by: Union[SortBy, str] = SortBy.NONE,
                 reverse: bool = False) -> List[WaymarkRecord]:
    """
    Sort records by the given field.

    Sorting is stable. Signal sorting puts starred before flagged before
    unsignalled records.

    Args:
        records: Records to sort
        sort_by: Field to sort by (SortBy or its string value)
        reverse: Reverse the resulting order

    Returns:
        New sorted list
    """
    sort_by = SortBy(sort_by) if isinstance(sort_by, str) else sort_by
    ordered = list(records)

    if sort_by == SortBy.FILE:
        ordered.sort(key=lambda r: r.file)
    elif sort_by == SortBy.LINE:
        ordered.sort(key=lambda r: r.start_line)
    elif sort_by == SortBy.TYPE:
        ordered.sort(key=lambda r: r.type)
    elif sort_by == SortBy.SIGNAL:
        ordered.sort(key=lambda r: r.signals.score(), reverse=True)

    if reverse:
        ordered.reverse()
    return ordered


def paginate_records(records: Iterable[WaymarkRecord], limit: Optional[int] = None,
                     page: Optional[int] = None) -> List[WaymarkRecord]:
    """
    Select one page of records.

    Args:
        records: Records to page
        limit: Page size (DEFAULT_PAGE_SIZE when only page is given)
        page: Page number, 1-based (first page when only limit is given)

    Returns:
        Records on the requested page; all records when neither is set
    """
    records = list(records)
    if not (limit or page):
        return records

    page_size = limit or DEFAULT_PAGE_SIZE
    start = ((page or 1) - 1) * page_size
    return records[start:start + page_size]


def group_by_file(records: Iterable[WaymarkRecord]) -> Dict[str, List[WaymarkRecord]]:
    """Group records by file, keeping files in first-seen order."""
    groups: Dict[str, List[WaymarkRecord]] = {}
    for record in records:
        groups.setdefault(record.file, []).append(record)
    return groups
