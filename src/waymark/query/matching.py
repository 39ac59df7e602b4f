"""
Record matching against compiled query filters.
"""

from typing import Iterable, List
import logging

from ..models.query import FilterSpec
from ..models.record import WaymarkRecord


logger = logging.getLogger(__name__)


def _shares_any(values: List[str], targets: List[str]) -> bool:
    return any(target in values for target in targets)


def _matches_properties(record: WaymarkRecord, spec: FilterSpec) -> bool:
    for key, expected in spec.properties.items():
        if key not in record.properties:
            return False
        if expected is not True and record.properties[key] != expected:
            return False
    return True


def is_excluded(record: WaymarkRecord, spec: FilterSpec) -> bool:
    """Check if a record carries any excluded type, mention or tag."""
    exclusions = spec.exclusions
    if record.type in exclusions.types:
        return True
    if _shares_any(record.mentions, exclusions.mentions):
        return True
    return _shares_any(record.tags, exclusions.tags)


def matches_filter(record: WaymarkRecord, spec: FilterSpec) -> bool:
    """
    Test a record against a compiled FilterSpec.

    Each non-empty include field must match (types, mentions and tags match
    when any value is shared; every property predicate and every text term
    must hold), and no exclusion may match.

    Args:
        record: Record to test
        spec: Compiled FilterSpec

    Returns:
        True if the record passes the filter
    """
    if spec.types and record.type not in [t.lower() for t in spec.types]:
        return False

    if spec.mentions and not _shares_any(record.mentions, spec.mentions):
        return False

    if spec.tags and not _shares_any(record.tags, spec.tags):
        return False

    if spec.properties and not _matches_properties(record, spec):
        return False

    if spec.text_terms:
        content = record.content_text.lower()
        if not all(term.lower() in content for term in spec.text_terms):
            return False

    return not is_excluded(record, spec)


def apply_filter(records: Iterable[WaymarkRecord], spec: FilterSpec) -> List[WaymarkRecord]:
    """
    Filter records with a compiled FilterSpec, preserving order.

    Args:
        records: Records to filter
        spec: Compiled FilterSpec

    Returns:
        Records that pass the filter
    """
    records = list(records)
    if spec.is_empty():
        return records

    matched = [record for record in records if matches_filter(record, spec)]
    logger.debug(f"Filter matched {len(matched)} of {len(records)} records")
    return matched
