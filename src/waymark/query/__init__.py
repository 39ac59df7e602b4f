"""
Query parsing for waymark search.

This package turns free-form query strings into structured filters and
applies those filters to waymark records.
"""

from .markers import resolve_type, get_type_category, MarkerCategory, SIGIL
from .lexer import lex, classify, LexState
from .compiler import compile_query, parse_query
from .matching import matches_filter, apply_filter

__all__ = [
    'resolve_type',
    'get_type_category',
    'MarkerCategory',
    'SIGIL',
    'lex',
    'classify',
    'LexState',
    'compile_query',
    'parse_query',
    'matches_filter',
    'apply_filter'
]
