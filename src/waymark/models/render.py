"""
Rendering data models for waymark display.

This module defines the atomic render tokens produced by the content
tokenizer, the wrapping configuration, and the per-file alignment context.
"""

from typing import Any, Optional
from dataclasses import dataclass
from enum import Enum
from pydantic import BaseModel, Field


class RenderTokenKind(Enum):
    """Classification of a content token."""
    TEXT = "text"
    TAG = "tag"
    MENTION = "mention"
    PROPERTY = "property"
    SPACE = "space"
    COMMA = "comma"


@dataclass(frozen=True)
class RenderToken:
    """
    An atomic, non-splittable piece of waymark content.

    Attributes:
        kind: Token classification
        value: Exact source text covered by the token
        can_break_before: Whether a line may break right before this token
    """
    kind: RenderTokenKind
    value: str
    can_break_before: bool = False


class WrapConfig(BaseModel):
    """
    Configuration for content wrapping.

    Attributes:
        width: Terminal width; detected when None
        no_wrap: Disable wrapping entirely
        indent: Columns already used on the line before the content
    """

    width: Optional[int] = Field(None, gt=0, description="Terminal width (detected when unset)")
    no_wrap: bool = Field(False, description="Disable wrapping entirely")
    indent: int = Field(0, ge=0, description="Columns used before the content")


@dataclass
class AlignmentContext:
    """
    Shared column widths for the records of one file.

    Attributes:
        line_number_width: Width of the right-aligned line number column
        type_column_width: Width of the widest signal+type (or continuation key)
    """
    line_number_width: int
    type_column_width: int

    def padding_for(self, type_width: int) -> int:
        """Get the spaces between line number and a type of the given width."""
        return 2 + max(0, self.type_column_width - type_width)

    def sigil_column(self) -> int:
        """Get the zero-based column where every sigil starts."""
        return self.line_number_width + 2 + self.type_column_width + 1


@dataclass
class RenderOptions:
    """
    Display options for rendering waymark records.

    Attributes:
        compact: One line per record, prefixed with path:line
        no_wrap: Disable content wrapping
        width: Explicit terminal width
        keep_comment_markers: Render raw lines without stripping comment syntax
        style: Style policy applied to semantic categories (plain when None)
    """
    compact: bool = False
    no_wrap: bool = False
    width: Optional[int] = None
    keep_comment_markers: bool = False
    style: Optional[Any] = None

    def wrap_config(self, indent: int) -> WrapConfig:
        """Build the wrap configuration for content starting at indent."""
        return WrapConfig(width=self.width, no_wrap=self.no_wrap, indent=indent)
