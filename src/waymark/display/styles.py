"""
Semantic styling hooks for waymark display.

The renderer never emits color codes. Instead, every piece of output it
produces is passed through a StylePolicy together with its semantic
category; callers subclass StylePolicy to map categories to colors or
other emphasis. The base policy returns text unchanged.
"""

import re
from typing import List, Optional
from enum import Enum

from ..models.render import RenderTokenKind
from ..query.markers import get_type_category
from .tokenizer import tokenize


CONTROL_CHAR_PATTERN = re.compile(r'[\x00-\x1f\x7f]')


class StyleCategory(Enum):
    """Semantic categories the renderer hands to a style policy."""
    TAG = "tag"
    MENTION = "mention"
    SCOPED_REFERENCE = "scopedReference"
    PROPERTY = "property"
    SEPARATOR_SIGIL = "separatorSigil"
    LINE_NUMBER = "lineNumber"
    FILE_PATH = "filePath"
    TYPE = "type"


class StylePolicy:
    """
    Maps semantic categories to display emphasis.

    Subclasses override apply(). For StyleCategory.TYPE the variant is the
    marker category ('work', 'info', 'caution', 'workflow', 'inquiry') or
    None for unknown types; the marker name itself is passed as marker_type so
    a policy can single out specific types.
    """

    def apply(self, category: StyleCategory, text: str,
              variant: Optional[str] = None, marker_type: Optional[str] = None) -> str:
        """Return text styled for the given category (unchanged by default)."""
        return text

    def is_plain(self) -> bool:
        """Check if this policy leaves all text unchanged."""
        return type(self).apply is StylePolicy.apply


PLAIN_STYLE = StylePolicy()


def sanitize_inline_text(value: str) -> str:
    """Remove control characters from text rendered on a single line."""
    return CONTROL_CHAR_PATTERN.sub('', value)


def style_type(record_type: str, signal_prefix: str, style: StylePolicy) -> str:
    """Style a marker type together with its signal prefix."""
    category = get_type_category(record_type)
    return style.apply(
        StyleCategory.TYPE,
        signal_prefix + record_type,
        variant=category.value if category else None,
        marker_type=record_type
    )


def style_content(content: str, style: StylePolicy) -> str:
    """
    Style the tags, mentions, scoped references and properties in content.

    A mention directly followed by a '/' run (e.g. '@scope/package') is styled
    as one scoped reference. All other text passes through unchanged.

    Args:
        content: Plain content line
        style: Style policy to apply

    Returns:
        Styled content
    """
    if style.is_plain():
        return content

    tokens = tokenize(content)
    pieces: List[str] = []
    index = 0

    while index < len(tokens):
        token = tokens[index]
        following = tokens[index + 1] if index + 1 < len(tokens) else None

        if token.kind is RenderTokenKind.MENTION:
            if (following is not None and following.kind is RenderTokenKind.TEXT
                    and following.value.startswith('/')):
                pieces.append(style.apply(StyleCategory.SCOPED_REFERENCE, token.value + following.value))
                index += 2
                continue
            pieces.append(style.apply(StyleCategory.MENTION, token.value))
        elif token.kind is RenderTokenKind.TAG:
            pieces.append(style.apply(StyleCategory.TAG, token.value))
        elif token.kind is RenderTokenKind.PROPERTY:
            pieces.append(style.apply(StyleCategory.PROPERTY, token.value))
        else:
            pieces.append(token.value)
        index += 1

    return ''.join(pieces)
