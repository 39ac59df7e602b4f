"""
Display rendering for waymark search results.

This package tokenizes waymark content, wraps it to the terminal width, and
lays records out in aligned columns.
"""

from .tokenizer import tokenize
from .terminal import get_terminal_width
from .wrapping import wrap_content, get_available_width
from .styles import StyleCategory, StylePolicy, PLAIN_STYLE, style_content, sanitize_inline_text
from .listing import sort_records, paginate_records, group_by_file
from .alignment import (
    AlignmentRenderer,
    compute_alignment,
    render_file_group,
    render_compact,
    render_records,
    format_records
)

__all__ = [
    'tokenize',
    'get_terminal_width',
    'wrap_content',
    'get_available_width',
    'StyleCategory',
    'StylePolicy',
    'PLAIN_STYLE',
    'style_content',
    'sanitize_inline_text',
    'sort_records',
    'paginate_records',
    'group_by_file',
    'AlignmentRenderer',
    'compute_alignment',
    'render_file_group',
    'render_compact',
    'render_records',
    'format_records'
]
