"""
Query data models for waymark search.

This module defines the token produced by the query lexer and the structured
FilterSpec produced by the query compiler.
"""

from typing import Dict, List, Union
from dataclasses import dataclass
from enum import Enum
from pydantic import BaseModel, Field


class QueryTokenKind(Enum):
    """Classification of a single query token."""
    TYPE = "type"
    MENTION = "mention"
    TAG = "tag"
    PROPERTY = "property"
    TEXT = "text"
    EXCLUSION = "exclusion"


@dataclass(frozen=True)
class QueryToken:
    """
    A classified token scanned from a query string.

    Attributes:
        kind: Token classification
        value: Token value (canonical type, sigil kept for mentions and tags,
            leading "!" removed for exclusions)
        raw: Token text exactly as it appeared in the query
    """
    kind: QueryTokenKind
    value: str
    raw: str


class ExclusionSet(BaseModel):
    """
    Values a record must not carry.

    Attributes:
        types: Canonical types to reject
        mentions: Mentions to reject (with "@")
        tags: Tags to reject (with "#")
    """

    types: List[str] = Field(default_factory=list, description="Canonical types to reject")
    mentions: List[str] = Field(default_factory=list, description="Mentions to reject")
    tags: List[str] = Field(default_factory=list, description="Tags to reject")

    def is_empty(self) -> bool:
        """Check if no exclusions are set."""
        return not (self.types or self.mentions or self.tags)


class FilterSpec(BaseModel):
    """
    Structured filter compiled from a free-form query.

    Every collection defaults to empty, so an empty query compiles to a
    spec that places no constraint on records.

    Attributes:
        types: Canonical types to include, in first-occurrence order
        mentions: Mentions to include
        tags: Tags to include
        properties: Property predicates; a string value must match exactly,
            True only requires the key to be present
        exclusions: Types, mentions and tags to reject
        text_terms: Free-text search terms
    """

    types: List[str] = Field(default_factory=list, description="Canonical types to include")
    mentions: List[str] = Field(default_factory=list, description="Mentions to include")
    tags: List[str] = Field(default_factory=list, description="Tags to include")
    properties: Dict[str, Union[bool, str]] = Field(default_factory=dict, description="Property predicates")
    exclusions: ExclusionSet = Field(default_factory=ExclusionSet, description="Values to reject")
    text_terms: List[str] = Field(default_factory=list, description="Free-text search terms")

    def is_empty(self) -> bool:
        """Check if this spec places no constraint on records."""
        return not (
            self.types or self.mentions or self.tags or self.properties
            or self.text_terms or not self.exclusions.is_empty()
        )

    def __str__(self) -> str:
        """String representation of the filter spec."""
        parts = []
        if self.types:
            parts.append(f"Types: {', '.join(self.types)}")
        if self.mentions:
            parts.append(f"Mentions: {', '.join(self.mentions)}")
        if self.tags:
            parts.append(f"Tags: {', '.join(self.tags)}")
        if self.properties:
            parts.append(f"Properties: {len(self.properties)}")
        if not self.exclusions.is_empty():
            excluded = self.exclusions.types + self.exclusions.mentions + self.exclusions.tags
            parts.append(f"Excluding: {', '.join(excluded)}")
        if self.text_terms:
            parts.append(f"Text: {' '.join(self.text_terms)}")

        return " | ".join(parts) if parts else "No filters"
