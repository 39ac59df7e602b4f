"""
Query lexer for waymark search.

Scans a free-form query such as ``todo @agent #perf:hotpath !fix "add cache"``
into a flat list of classified tokens. Quoted spans are kept together as text;
everything else is split on whitespace and classified by its leading sigil.
"""

from typing import List
from enum import Enum

from ..models.query import QueryToken, QueryTokenKind
from .markers import resolve_type


QUOTE = '"'
WHITESPACE = (' ', '\t')


class LexState(Enum):
    """Cursor state of the query scanner."""
    NORMAL = "normal"
    IN_QUOTES = "in_quotes"


def classify(raw: str) -> QueryToken:
    """
    Classify a single unquoted query word.

    Args:
        raw: Word exactly as it appeared in the query

    Returns:
        Classified QueryToken
    """
    if raw.startswith('!'):
        return QueryToken(QueryTokenKind.EXCLUSION, raw[1:], raw)

    if ':' in raw and not raw.startswith(('#', '@')):
        # key/value split happens in the compiler
        return QueryToken(QueryTokenKind.PROPERTY, raw, raw)

    if raw.startswith('@'):
        return QueryToken(QueryTokenKind.MENTION, raw, raw)

    if raw.startswith('#'):
        return QueryToken(QueryTokenKind.TAG, raw, raw)

    canonical = resolve_type(raw)
    if canonical is not None:
        return QueryToken(QueryTokenKind.TYPE, canonical, raw)

    return QueryToken(QueryTokenKind.TEXT, raw, raw)


def lex(query: str) -> List[QueryToken]:
    """
    Scan a query string into classified tokens.

    An unterminated quote does not fail: the text collected after it is
    still emitted as a text token.

    Args:
        query: Raw query string

    Returns:
        Tokens in query order
    """
    tokens: List[QueryToken] = []
    state = LexState.NORMAL
    current: List[str] = []

    for char in query:
        if char == QUOTE:
            pending = ''.join(current)
            current = []
            if state is LexState.IN_QUOTES:
                if pending:
                    tokens.append(QueryToken(QueryTokenKind.TEXT, pending, f'"{pending}"'))
                state = LexState.NORMAL
            else:
                if pending:
                    tokens.append(classify(pending))
                state = LexState.IN_QUOTES
            continue

        if state is LexState.IN_QUOTES:
            current.append(char)
            continue

        if char in WHITESPACE:
            if current:
                tokens.append(classify(''.join(current)))
                current = []
            continue

        current.append(char)

    if current:
        pending = ''.join(current)
        if state is LexState.IN_QUOTES:
            tokens.append(QueryToken(QueryTokenKind.TEXT, pending, f'"{pending}'))
        else:
            tokens.append(classify(pending))

    return tokens
