"""
Blessed waymark markers and canonical type resolution.

This module holds the static marker table (canonical names and
categories), the grammar constants the renderer relies on, and the resolver
that maps a free-form word onto a canonical marker type.
"""

from typing import Dict, FrozenSet, List, Optional
from dataclasses import dataclass
from enum import Enum


SIGIL = ":::"


class MarkerCategory(Enum):
    """High-level category for a waymark marker."""
    WORK = "work"
    INFO = "info"
    CAUTION = "caution"
    WORKFLOW = "workflow"
    INQUIRY = "inquiry"


@dataclass(frozen=True)
class MarkerDefinition:
    """
    Definition of a single blessed marker.

    Attributes:
        name: Canonical marker name
        category: Marker category
        description: Short human description
    """
    name: str
    category: MarkerCategory
    description: str = ""


MARKER_DEFINITIONS: List[MarkerDefinition] = [
    # Work
    MarkerDefinition("todo", MarkerCategory.WORK, "Task to be completed"),
    MarkerDefinition("fix", MarkerCategory.WORK, "Bug or issue to resolve"),
    MarkerDefinition("wip", MarkerCategory.WORK, "Work currently in progress"),
    MarkerDefinition("done", MarkerCategory.WORK, "Completed task"),
    MarkerDefinition("review", MarkerCategory.WORK, "Code or design needing review"),
    MarkerDefinition("test", MarkerCategory.WORK, "Test needed or test-related marker"),
    MarkerDefinition("check", MarkerCategory.WORK, "Validation or verification needed"),

    # Information
    MarkerDefinition("note", MarkerCategory.INFO, "General annotation or context"),
    MarkerDefinition("context", MarkerCategory.INFO, "Explains reasoning or background"),
    MarkerDefinition("tldr", MarkerCategory.INFO, "File-level summary (one per file)"),
    MarkerDefinition("about", MarkerCategory.INFO, "Section/block summary"),
    MarkerDefinition("example", MarkerCategory.INFO, "Illustrative code or usage example"),
    MarkerDefinition("idea", MarkerCategory.INFO, "Suggestion or potential improvement"),
    MarkerDefinition("comment", MarkerCategory.INFO, "General comment or observation"),

    # Caution
    MarkerDefinition("warn", MarkerCategory.CAUTION, "Warning about potential issues"),
    MarkerDefinition("alert", MarkerCategory.CAUTION, "Important notice requiring attention"),
    MarkerDefinition("deprecated", MarkerCategory.CAUTION, "Outdated code pending removal"),
    MarkerDefinition("temp", MarkerCategory.CAUTION, "Temporary code not for production"),

    # Workflow
    MarkerDefinition("blocked", MarkerCategory.WORKFLOW, "Work blocked by dependency"),
    MarkerDefinition("needs", MarkerCategory.WORKFLOW, "Requirement or dependency"),

    # Inquiry
    MarkerDefinition("ask", MarkerCategory.INQUIRY, "Question needing answer"),
]

# Canonical name -> definition
MARKER_MAP: Dict[str, MarkerDefinition] = {
    definition.name: definition for definition in MARKER_DEFINITIONS
}

# Plural and hyphenated spellings people type in queries
TYPE_VARIATIONS: Dict[str, FrozenSet[str]] = {
    'todo': frozenset({'todos', 'to do', 'to-do'}),
    'fix': frozenset({'fix me'}),
    'note': frozenset({'notes'}),
    'tldr': frozenset({'tldrs'}),
}

_VARIATION_MAP: Dict[str, str] = {
    spelling: canonical
    for canonical, spellings in TYPE_VARIATIONS.items()
    for spelling in spellings
}

# Property keys that may stand in place of a marker on a continuation line
PROPERTY_KEYS = frozenset({
    'see', 'docs', 'from', 'replaces',
    'ref',
    'owner', 'since', 'fixes', 'affects', 'priority', 'status', 'sym',
})


def resolve_type(word: str) -> Optional[str]:
    """
    Resolve a free-form word to a canonical marker type.

    Args:
        word: Word to resolve (any case, surrounding whitespace ignored)

    Returns:
        Canonical marker name, or None when the word is not a marker
    """
    normalized = word.strip().lower()

    definition = MARKER_MAP.get(normalized)
    if definition is not None:
        return definition.name

    return _VARIATION_MAP.get(normalized)


def get_type_category(marker_type: str) -> Optional[MarkerCategory]:
    """Look up the category for a marker name."""
    definition = MARKER_MAP.get(marker_type.strip().lower())
    return definition.category if definition else None


def is_blessed_marker(marker_type: str) -> bool:
    """Check if a word is a blessed marker name."""
    return marker_type.strip().lower() in MARKER_MAP
