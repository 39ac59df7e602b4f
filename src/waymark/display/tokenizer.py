"""
Content tokenizer for waymark display.

Splits waymark content into atomic render tokens (tags, mentions, properties,
whitespace runs, commas and plain text) so the wrapper never breaks a line in
the middle of a structured token. Concatenating the values of the returned
tokens always reproduces the input exactly.
"""

import string
from typing import List, Optional

from ..models.render import RenderToken, RenderTokenKind


ALPHANUMERIC = frozenset(string.ascii_letters + string.digits)
TAG_CHARS = ALPHANUMERIC | frozenset('._/:%-')
MENTION_CHARS = ALPHANUMERIC | frozenset('._-')
KEY_CHARS = ALPHANUMERIC | frozenset('_-')
TEXT_STOP_CHARS = frozenset('#@,')


def _scan_run(content: str, start: int, allowed: frozenset) -> int:
    """Return the index just past a run of allowed characters."""
    end = start
    while end < len(content) and content[end] in allowed:
        end += 1
    return end


def _is_sigil_start(content: str, pos: int) -> bool:
    """Check for '#' or '@' immediately followed by an alphanumeric."""
    return (
        content[pos] in '#@'
        and pos + 1 < len(content)
        and content[pos + 1] in ALPHANUMERIC
    )


def _property_key_end(content: str, pos: int) -> Optional[int]:
    """
    Find the colon ending a property key starting at pos.

    Returns:
        Index of the ':' when content[pos:] starts with an alphanumeric-led
        key run immediately followed by a colon, otherwise None
    """
    if content[pos] not in ALPHANUMERIC:
        return None
    end = _scan_run(content, pos + 1, KEY_CHARS)
    if end < len(content) and content[end] == ':':
        return end
    return None


def _scan_quoted(content: str, pos: int) -> int:
    """Return the index just past a quoted value opening at pos."""
    end = pos + 1
    while end < len(content):
        char = content[end]
        if char == '\\' and end + 1 < len(content):
            end += 2
        elif char == '"':
            return end + 1
        else:
            end += 1
    # Unterminated quote runs to the end
    return end


def _scan_unquoted(content: str, pos: int) -> int:
    end = pos
    while end < len(content) and not content[end].isspace() and content[end] != ',':
        end += 1
    return end


def _scan_text(content: str, pos: int) -> int:
    """
    Return the end of a plain text run starting at pos.

    The run stops at whitespace, '#', '@', ',' or where a property key begins,
    even in the middle of a word.
    """
    end = pos + 1
    while end < len(content):
        char = content[end]
        if char.isspace() or char in TEXT_STOP_CHARS:
            break
        if _property_key_end(content, end) is not None:
            break
        end += 1
    return end


def tokenize(content: str) -> List[RenderToken]:
    """
    Tokenize waymark content into atomic render tokens.

    Args:
        content: Waymark content (without line number, type or sigil)

    Returns:
        Tokens whose values concatenate back to content
    """
    tokens: List[RenderToken] = []
    pos = 0

    while pos < len(content):
        char = content[pos]

        if char == '#' and _is_sigil_start(content, pos):
            end = _scan_run(content, pos + 1, TAG_CHARS)
            tokens.append(RenderToken(RenderTokenKind.TAG, content[pos:end], True))
            pos = end
            continue

        if char == '@' and _is_sigil_start(content, pos):
            end = _scan_run(content, pos + 1, MENTION_CHARS)
            tokens.append(RenderToken(RenderTokenKind.MENTION, content[pos:end], True))
            pos = end
            continue

        if char in ALPHANUMERIC:
            colon = _property_key_end(content, pos)
            if colon is not None:
                value_start = colon + 1
                if value_start < len(content) and content[value_start] == '"':
                    end = _scan_quoted(content, value_start)
                else:
                    end = _scan_unquoted(content, value_start)
                tokens.append(RenderToken(RenderTokenKind.PROPERTY, content[pos:end], True))
            else:
                end = _scan_run(content, pos + 1, KEY_CHARS)
                tokens.append(RenderToken(RenderTokenKind.TEXT, content[pos:end], False))
            pos = end
            continue

        if char.isspace():
            end = pos + 1
            while end < len(content) and content[end].isspace():
                end += 1
            tokens.append(RenderToken(RenderTokenKind.SPACE, content[pos:end], False))
            pos = end
            continue

        if char == ',':
            tokens.append(RenderToken(RenderTokenKind.COMMA, ',', False))
            pos += 1
            continue

        end = _scan_text(content, pos)
        tokens.append(RenderToken(RenderTokenKind.TEXT, content[pos:end], False))
        pos = end

    return tokens
