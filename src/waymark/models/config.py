"""
Configuration data models for waymark search.

This module defines the configuration for displaying search results:
wrapping and layout settings, and record listing (sort and pagination).
"""

from typing import Dict, List, Optional, Any
from enum import Enum
from pydantic import BaseModel, Field, field_validator

from .render import RenderOptions


DEFAULT_PAGE_SIZE = 50


class SortBy(Enum):
    """Supported record orderings."""
    FILE = "file"
    LINE = "line"
    TYPE = "type"
    SIGNAL = "signal"
    NONE = "none"


class DisplayConfig(BaseModel):
    """
    Configuration for rendering search results.

    Attributes:
        width: Explicit terminal width (detected when None)
        no_wrap: Disable content wrapping
        compact: One line per record, prefixed with path:line
        keep_comment_markers: Keep comment syntax when rendering raw lines
    """

    width: Optional[int] = Field(None, gt=0, description="Explicit terminal width")
    no_wrap: bool = Field(False, description="Disable content wrapping")
    compact: bool = Field(False, description="One line per record")
    keep_comment_markers: bool = Field(False, description="Keep comment syntax when rendering")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class ListingConfig(BaseModel):
    """
    Configuration for ordering and paging records.

    Attributes:
        sort_by: Field to sort records by
        reverse: Reverse the sort order
        limit: Page size (no paging when None and page is None)
        page: Page number, 1-based
    """

    sort_by: SortBy = Field(SortBy.NONE, description="Field to sort records by")
    reverse: bool = Field(False, description="Reverse the sort order")
    limit: Optional[int] = Field(None, gt=0, description="Page size")
    page: Optional[int] = Field(None, gt=0, description="Page number (1-based)")

    @field_validator('sort_by', mode='before')
    @classmethod
    def validate_sort_by(cls, v) -> SortBy:
        """Validate and convert sort field to enum."""
        if isinstance(v, str):
            try:
                return SortBy(v.lower())
            except ValueError:
                raise ValueError(f"Invalid sort field: {v}")
        return v

    def is_paginated(self) -> bool:
        """Check if records should be paged."""
        return self.limit is not None or self.page is not None

    def get_page_size(self) -> int:
        """Get the effective page size."""
        return self.limit or DEFAULT_PAGE_SIZE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data = self.model_dump()
        data['sort_by'] = self.sort_by.value
        return data


class WaymarkConfig(BaseModel):
    """
    Main configuration for waymark search output.

    Attributes:
        display: Rendering settings
        listing: Ordering and paging settings
    """

    display: DisplayConfig = Field(default_factory=DisplayConfig, description="Rendering settings")
    listing: ListingConfig = Field(default_factory=ListingConfig, description="Ordering and paging settings")

    def validate_configuration(self) -> List[str]:
        """Validate the complete configuration and return any warnings."""
        warnings = []

        if self.display.width is not None and self.display.width < 40:
            warnings.append(f"Very narrow display width ({self.display.width}) will wrap most content")

        if self.display.no_wrap and self.display.width is not None:
            warnings.append("Display width is ignored when no_wrap is enabled")

        if self.listing.page is not None and self.listing.limit is None:
            warnings.append(f"Page set without limit, using default page size of {DEFAULT_PAGE_SIZE}")

        if self.listing.reverse and self.listing.sort_by == SortBy.NONE:
            warnings.append("reverse has no effect without a sort field")

        return warnings

    def to_render_options(self, style: Optional[Any] = None) -> RenderOptions:
        """Build render options from the display settings."""
        return RenderOptions(
            compact=self.display.compact,
            no_wrap=self.display.no_wrap,
            width=self.display.width,
            keep_comment_markers=self.display.keep_comment_markers,
            style=style
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return {
            'display': self.display.to_dict(),
            'listing': self.listing.to_dict()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WaymarkConfig':
        """Create configuration from dictionary representation."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the configuration."""
        parts = [f"Width: {self.display.width or 'auto'}"]
        parts.append(f"Wrap: {not self.display.no_wrap}")
        parts.append(f"Compact: {self.display.compact}")
        parts.append(f"Sort: {self.listing.sort_by.value}")

        return " | ".join(parts)


KNOWN_SECTIONS = {
    'display': set(DisplayConfig.model_fields),
    'listing': set(ListingConfig.model_fields),
}


def validate_config_dict(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a configuration dictionary using Pydantic.

    Args:
        config_data: Dictionary containing configuration data

    Returns:
        Validated and normalized configuration dictionary

    Raises:
        ValueError: If configuration is invalid
    """
    for section, value in config_data.items():
        if section not in KNOWN_SECTIONS:
            raise ValueError(f"Unknown configuration section: {section}")
        if value is None:
            continue
        if not isinstance(value, dict):
            raise ValueError(f"Configuration section '{section}' must be a mapping, got {type(value).__name__}")
        for key in value:
            if key not in KNOWN_SECTIONS[section]:
                raise ValueError(f"Unknown key '{key}' in section '{section}'")

    cleaned = {section: value for section, value in config_data.items() if value is not None}

    try:
        config = WaymarkConfig.model_validate(cleaned)
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}") from e

    return config.to_dict()
