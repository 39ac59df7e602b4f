"""
Waymark record data models.

A record is the structured form of one waymark comment as handed over by the
grammar parser: where it lives, its type and signals, and its content.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator


class WaymarkSignals(BaseModel):
    """
    Signal flags decorating a waymark type.

    Attributes:
        flagged: Actively in progress, rendered as "~"
        starred: Important or high priority, rendered as "*"
    """

    flagged: bool = Field(False, description="Actively in progress (~)")
    starred: bool = Field(False, description="Important, high priority (*)")

    def prefix(self) -> str:
        """Get the signal prefix rendered in front of the type."""
        return ("~" if self.flagged else "") + ("*" if self.starred else "")

    def score(self) -> int:
        """Get a sort score; starred outranks flagged."""
        return (2 if self.starred else 0) + (1 if self.flagged else 0)


class WaymarkRecord(BaseModel):
    """
    A single parsed waymark.

    Attributes:
        file: Path of the file containing the waymark
        start_line: First source line of the waymark (1-based)
        end_line: Last source line of the waymark (1-based)
        type: Canonical marker type (e.g. 'todo')
        signals: Signal flags
        content_text: Content after the sigil, continuation lines joined
        raw: Raw source text, one physical line per newline
        comment_leader: Comment syntax the waymark was written in (e.g. '//')
        properties: Parsed key/value properties
        mentions: Mentions found in the content
        tags: Tags found in the content
    """

    file: str = Field(..., min_length=1, description="Path of the containing file")
    start_line: int = Field(..., ge=1, description="First source line")
    end_line: Optional[int] = Field(None, ge=1, description="Last source line")
    type: str = Field(..., min_length=1, description="Canonical marker type")
    signals: WaymarkSignals = Field(default_factory=WaymarkSignals, description="Signal flags")
    content_text: str = Field("", description="Content after the sigil")
    raw: str = Field("", description="Raw source text")
    comment_leader: Optional[str] = Field(None, description="Comment syntax leader")
    properties: Dict[str, str] = Field(default_factory=dict, description="Parsed properties")
    mentions: List[str] = Field(default_factory=list, description="Mentions in the content")
    tags: List[str] = Field(default_factory=list, description="Tags in the content")

    @field_validator('type')
    @classmethod
    def validate_type(cls, v: str) -> str:
        """Normalize the marker type."""
        if not v.strip():
            raise ValueError("Waymark type cannot be empty")
        return v.strip().lower()

    @model_validator(mode='after')
    def validate_lines(self):
        """Default end_line to start_line and check ordering."""
        if self.end_line is None:
            self.end_line = self.start_line
        if self.end_line < self.start_line:
            raise ValueError("End line must be >= start line")
        return self

    def type_with_signals(self) -> str:
        """Get the type as rendered, with its signal prefix."""
        return self.signals.prefix() + self.type

    def raw_lines(self) -> List[str]:
        """Get the physical source lines of this waymark."""
        return self.raw.split('\n') if self.raw else []

    def is_multiline(self) -> bool:
        """Check if the waymark spans more than one physical line."""
        return len(self.raw_lines()) > 1

    def __str__(self) -> str:
        """String representation of the record."""
        return f"{self.file}:{self.start_line}: {self.type_with_signals()} ::: {self.content_text}"
