"""
Line wrapping for waymark content.

Greedily packs content tokens into lines no wider than the available width.
Tags, mentions and properties are never split; a single token wider than the
whole line is sliced into width-sized fragments.
"""

from typing import List, Optional

from ..models.render import RenderTokenKind, WrapConfig
from .terminal import get_terminal_width
from .tokenizer import tokenize


def get_available_width(config: WrapConfig) -> int:
    """Get the width left for content after the indent (at least 1)."""
    return max(1, get_terminal_width(config.width) - config.indent)


def wrap_content(content: str, config: Optional[WrapConfig] = None) -> List[str]:
    """
    Wrap content to the terminal width with token-aware breaking.

    Args:
        content: The waymark content to wrap (without line number, type or sigil)
        config: Wrapping configuration; width detected and no indent when None

    Returns:
        Wrapped lines, trimmed; [""] for empty or whitespace-only content
    """
    if config is None:
        config = WrapConfig()

    if config.no_wrap:
        return [content]

    if not content.strip():
        return [""]

    available = get_available_width(config)
    if len(content) <= available:
        return [content]

    tokens = tokenize(content)
    lines: List[str] = []
    current = ""

    for index, token in enumerate(tokens):
        previous = tokens[index - 1] if index > 0 else None
        following = tokens[index + 1] if index + 1 < len(tokens) else None

        # Text may also break right after whitespace
        can_break = token.can_break_before or (
            token.kind is RenderTokenKind.TEXT
            and previous is not None
            and previous.kind is RenderTokenKind.SPACE
        )

        # A line never starts with whitespace
        if not current and token.kind is RenderTokenKind.SPACE:
            continue

        if not current and len(token.value) > available:
            remaining = token.value
            while len(remaining) > available:
                lines.append(remaining[:available])
                remaining = remaining[available:]
            current = remaining
            continue

        candidate = current + token.value
        if current and len(candidate) > available:
            if can_break:
                lines.append(current.strip())
                current = token.value
            else:
                # Unbreakable run: overflow rather than corrupt it
                current = candidate
        else:
            current = candidate

        if (
            token.kind is RenderTokenKind.SPACE
            and following is not None
            and len(current) + len(following.value) > available
        ):
            if current.strip():
                lines.append(current.strip())
            current = ""

    if current.strip():
        lines.append(current.strip())

    return lines or [content.strip()]
