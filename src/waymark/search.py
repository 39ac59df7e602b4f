"""
End-to-end waymark search: query in, filtered records, rendered output out.
"""

import logging
from typing import Iterable, List, Optional, Union

from .display.alignment import format_records
from .display.listing import paginate_records, sort_records
from .display.styles import StylePolicy
from .models.config import WaymarkConfig
from .models.query import FilterSpec
from .models.record import WaymarkRecord
from .query.compiler import parse_query
from .query.matching import apply_filter


logger = logging.getLogger(__name__)


def search_records(records: Iterable[WaymarkRecord], query: Union[str, FilterSpec]) -> List[WaymarkRecord]:
    """
    Filter records with a free-form query or a compiled FilterSpec.

    Args:
        records: Parsed waymark records
        query: Query string (e.g. 'todo @agent !#wip') or compiled spec

    Returns:
        Matching records in their input order
    """
    spec = parse_query(query) if isinstance(query, str) else query
    return apply_filter(records, spec)


def format_search_results(records: Iterable[WaymarkRecord], query: Union[str, FilterSpec],
                          config: Optional[WaymarkConfig] = None,
                          style: Optional[StylePolicy] = None) -> str:
    """
    Filter, order, page and render records for display.

    Args:
        records: Parsed waymark records
        query: Query string or compiled spec
        config: Display and listing configuration (defaults when None)
        style: Style policy for the rendered output (plain when None)

    Returns:
        Rendered output, one display line per text line
    """
    config = config or WaymarkConfig()
    matched = search_records(records, query)

    listing = config.listing
    ordered = sort_records(matched, listing.sort_by, listing.reverse)
    if listing.is_paginated():
        ordered = paginate_records(ordered, listing.limit, listing.page)

    logger.debug(f"Displaying {len(ordered)} of {len(matched)} matching waymarks")
    return format_records(ordered, config.to_render_options(style))
