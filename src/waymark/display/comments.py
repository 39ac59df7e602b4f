"""
Comment syntax stripping for raw waymark lines.
"""

import re
from typing import Dict, List, Optional, Tuple


# leader -> (leading pattern, trailing pattern)
COMMENT_PATTERNS: Dict[str, Tuple[re.Pattern, Optional[re.Pattern]]] = {
    '//': (re.compile(r'^.*?//\s*'), None),
    '#': (re.compile(r'^.*?#\s*'), None),
    '<!--': (re.compile(r'^.*?<!--\s*'), re.compile(r'\s*-->.*$')),
    '/*': (re.compile(r'^.*?/\*\s*'), re.compile(r'\s*\*/.*$')),
    '--': (re.compile(r'^.*?--\s*'), None),
}


def strip_comment_markers(raw: str, comment_leader: Optional[str]) -> str:
    """
    Strip comment syntax from one raw waymark line.

    Args:
        raw: Raw source line, e.g. '  // todo ::: fix this'
        comment_leader: Comment leader the line was written with; the line is
            only trimmed when None or unknown

    Returns:
        The waymark text without comment syntax, e.g. 'todo ::: fix this'
    """
    patterns = COMMENT_PATTERNS.get(comment_leader) if comment_leader else None
    if patterns is None:
        return raw.strip()

    leading, trailing = patterns
    text = leading.sub('', raw, count=1)
    if trailing is not None:
        text = trailing.sub('', text, count=1)
    return text.strip()


def strip_comment_markers_multiline(lines: List[str], comment_leader: Optional[str]) -> List[str]:
    """Strip comment syntax from every line of a multi-line waymark."""
    return [strip_comment_markers(line, comment_leader) for line in lines]
