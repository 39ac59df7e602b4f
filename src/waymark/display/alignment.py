"""
Aligned rendering of waymark records.

This module lays out matched waymarks ripgrep-style: records are grouped by
file and every record of a file shares the same column model, so line
numbers are right-aligned and every ':::' sigil in the group lands on the
same column, including the sigils of multi-line continuations. Content is
wrapped to the terminal width. A compact mode emits one 'path:line' prefixed
line per record instead.
"""

import re
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from ..models.record import WaymarkRecord
from ..models.render import AlignmentContext, RenderOptions
from ..query.markers import PROPERTY_KEYS, SIGIL
from .comments import strip_comment_markers, strip_comment_markers_multiline
from .listing import group_by_file
from .styles import (
    PLAIN_STYLE,
    StyleCategory,
    StylePolicy,
    sanitize_inline_text,
    style_content,
    style_type
)
from .wrapping import wrap_content


logger = logging.getLogger(__name__)

MIN_LINE_NUMBER_WIDTH = 2
TYPE_GAP = 2
# Sigil plus the space after it; the space before it is counted separately
SEPARATOR_LENGTH = len(SIGIL) + 1

PROPERTY_MARKER_PATTERN = re.compile(r'^([A-Za-z0-9_-]+)\s*' + re.escape(SIGIL) + r'\s*(.*)$')
NEWLINE_PATTERN = re.compile(r'\s*\n\s*')


class LineKind:
    """Classification of a physical waymark line after the first."""
    CONTINUATION = "continuation"
    PROPERTY = "property"
    TEXT = "text"


def classify_continuation(text: str) -> Tuple[str, Optional[str], str]:
    """
    Classify a continuation line with its comment syntax already stripped.

    Args:
        text: Continuation line text, e.g. '::: more detail' or 'ref ::: #auth'

    Returns:
        Tuple of (line kind, property key or None, content)
    """
    stripped = text.strip()
    if stripped.startswith(SIGIL):
        return LineKind.CONTINUATION, None, stripped[len(SIGIL):].strip()

    match = PROPERTY_MARKER_PATTERN.match(stripped)
    if match and match.group(1).lower() in PROPERTY_KEYS:
        return LineKind.PROPERTY, match.group(1), match.group(2).strip()

    return LineKind.TEXT, None, stripped


def _content_after_sigil(text: str) -> str:
    _, found, content = text.partition(SIGIL)
    return content.strip() if found else text.strip()


def compute_alignment(records: Sequence[WaymarkRecord]) -> AlignmentContext:
    """
    Compute the shared column widths for the records of one file.

    The type column also covers keys of property-as-marker continuation
    lines so their sigils line up with the records' sigils.

    Args:
        records: Records belonging to the same file

    Returns:
        AlignmentContext for the group
    """
    if not records:
        return AlignmentContext(line_number_width=MIN_LINE_NUMBER_WIDTH, type_column_width=0)

    max_line = max(record.end_line for record in records)
    line_number_width = max(MIN_LINE_NUMBER_WIDTH, len(str(max_line)))

    type_widths = [len(record.type_with_signals()) for record in records]
    for record in records:
        for line in record.raw_lines()[1:]:
            kind, key, _ = classify_continuation(strip_comment_markers(line, record.comment_leader))
            if kind == LineKind.PROPERTY:
                type_widths.append(len(key))

    return AlignmentContext(
        line_number_width=line_number_width,
        type_column_width=max(type_widths)
    )


class AlignmentRenderer:
    """
    Renders waymark records as aligned, wrapped plain-text lines.

    Output passes through the configured StylePolicy; the default policy
    leaves text unchanged, so all width computations are done on plain text.
    """

    def __init__(self, options: Optional[RenderOptions] = None):
        """
        Initialize the renderer.

        Args:
            options: Display options; defaults apply when None
        """
        self.options = options or RenderOptions()
        self.style: StylePolicy = self.options.style or PLAIN_STYLE
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def render_records(self, records: Iterable[WaymarkRecord]) -> List[str]:
        """
        Render records of any number of files.

        In the default mode each file gets a header line followed by its
        aligned records, with a blank line between files. Compact mode emits
        one line per record and no headers.

        Args:
            records: Records to render, in display order

        Returns:
            Rendered lines
        """
        records = list(records)
        if self.options.compact:
            return self.render_compact(records)

        output: List[str] = []
        for file_path, file_records in group_by_file(records).items():
            if output:
                output.append("")
            output.append(self.style.apply(StyleCategory.FILE_PATH, file_path))
            output.extend(self.render_file_group(file_records))

        self.logger.debug(f"Rendered {len(records)} records into {len(output)} lines")
        return output

    def render_file_group(self, records: Sequence[WaymarkRecord]) -> List[str]:
        """
        Render the records of a single file with shared column alignment.

        Args:
            records: Records belonging to the same file, in display order

        Returns:
            Rendered lines (no file header)
        """
        if self.options.compact:
            return self.render_compact(records)

        context = compute_alignment(records)
        lines: List[str] = []
        for record in records:
            lines.extend(self._render_record(record, context))
        return lines

    def render_compact(self, records: Iterable[WaymarkRecord]) -> List[str]:
        """
        Render one 'path:line  type ::: content' line per record.

        Args:
            records: Records to render

        Returns:
            Rendered lines; wrapped content continues under the sigil
        """
        lines: List[str] = []
        for record in records:
            type_text = record.type_with_signals()
            sigil_offset = len(f"{record.file}:{record.start_line}  {type_text} ")
            prefix_width = sigil_offset + SEPARATOR_LENGTH
            content = sanitize_inline_text(NEWLINE_PATTERN.sub(' ', self._compact_content(record)))

            location = (
                self.style.apply(StyleCategory.FILE_PATH, record.file)
                + ":"
                + self.style.apply(StyleCategory.LINE_NUMBER, str(record.start_line))
            )
            head = f"{location}  {style_type(record.type, record.signals.prefix(), self.style)}"

            wrapped = wrap_content(content, self.options.wrap_config(prefix_width))
            lines.append(self._join_head(head, wrapped[0]))
            lines.extend(" " * sigil_offset + style_content(line, self.style) for line in wrapped[1:])
        return lines

    def _compact_content(self, record: WaymarkRecord) -> str:
        if record.content_text:
            return record.content_text
        raw_lines = strip_comment_markers_multiline(record.raw_lines(), record.comment_leader)
        if not raw_lines:
            return ""
        rest = [classify_continuation(line)[2] for line in raw_lines[1:]]
        return " ".join([_content_after_sigil(raw_lines[0])] + rest)

    def _join_head(self, head: str, content: str) -> str:
        """Join a styled prefix, the sigil and the first content line."""
        if not content:
            return f"{head} {self.style.apply(StyleCategory.SEPARATOR_SIGIL, SIGIL)}"
        return (
            f"{head} {self.style.apply(StyleCategory.SEPARATOR_SIGIL, SIGIL)} "
            f"{style_content(content, self.style)}"
        )

    def _line_number(self, number: int, context: AlignmentContext) -> str:
        return self.style.apply(StyleCategory.LINE_NUMBER, str(number).rjust(context.line_number_width))

    def _first_line_content(self, record: WaymarkRecord) -> str:
        if record.is_multiline() or not record.content_text:
            raw_lines = record.raw_lines()
            if not raw_lines:
                return ""
            return _content_after_sigil(strip_comment_markers(raw_lines[0], record.comment_leader))
        return NEWLINE_PATTERN.sub(' ', record.content_text)

    def _render_record(self, record: WaymarkRecord, context: AlignmentContext) -> List[str]:
        type_text = record.type_with_signals()
        styled_type = style_type(record.type, record.signals.prefix(), self.style)
        lines = self._render_marker_line(
            record.start_line, len(type_text), styled_type,
            sanitize_inline_text(self._first_line_content(record)), context
        )

        raw_lines = record.raw_lines()
        for offset, raw_line in enumerate(raw_lines[1:], start=1):
            line_number = record.start_line + offset
            stripped = strip_comment_markers(raw_line, record.comment_leader)
            kind, key, content = classify_continuation(stripped)
            content = sanitize_inline_text(content)

            if kind == LineKind.CONTINUATION:
                lines.extend(self._render_marker_line(line_number, 0, "", content, context))
            elif kind == LineKind.PROPERTY:
                styled_key = self.style.apply(StyleCategory.PROPERTY, key)
                lines.extend(self._render_marker_line(line_number, len(key), styled_key, content, context))
            else:
                if self.options.keep_comment_markers:
                    content = sanitize_inline_text(raw_line.strip())
                lines.extend(self._render_text_line(line_number, content, context))

        return lines

    def _render_marker_line(self, line_number: int, marker_width: int, styled_marker: str,
                            content: str, context: AlignmentContext) -> List[str]:
        """
        Render a line whose marker (type, property key, or nothing for a pure
        continuation) is right-aligned against the shared sigil column.
        """
        padding = context.padding_for(marker_width)
        indent = context.line_number_width + 1 + padding + marker_width + SEPARATOR_LENGTH
        head = self._line_number(line_number, context) + " " * padding + styled_marker

        wrapped = wrap_content(content, self.options.wrap_config(indent))
        lines = [self._join_head(head, wrapped[0])]
        lines.extend(self._overflow_lines(wrapped[1:], context))
        return lines

    def _render_text_line(self, line_number: int, content: str, context: AlignmentContext) -> List[str]:
        indent = context.sigil_column() + SEPARATOR_LENGTH
        head = self._line_number(line_number, context)
        pad = " " * (indent - context.line_number_width)

        wrapped = wrap_content(content, self.options.wrap_config(indent))
        if not wrapped[0]:
            return [head]
        lines = [head + pad + style_content(wrapped[0], self.style)]
        lines.extend(self._overflow_lines(wrapped[1:], context))
        return lines

    def _overflow_lines(self, wrapped: Sequence[str], context: AlignmentContext) -> List[str]:
        """Lay out wrapped lines after the first under the sigil column."""
        indent = " " * context.sigil_column()
        return [indent + style_content(line, self.style) for line in wrapped]


def render_file_group(records: Sequence[WaymarkRecord], options: Optional[RenderOptions] = None) -> List[str]:
    """
    Convenience function to render the records of one file.

    Args:
        records: Records belonging to the same file
        options: Display options

    Returns:
        Rendered lines
    """
    return AlignmentRenderer(options).render_file_group(records)


def render_compact(records: Iterable[WaymarkRecord], options: Optional[RenderOptions] = None) -> List[str]:
    """Convenience function to render records in compact mode."""
    return AlignmentRenderer(options).render_compact(records)


def render_records(records: Iterable[WaymarkRecord], options: Optional[RenderOptions] = None) -> List[str]:
    """
    Convenience function to render records of any number of files.

    Args:
        records: Records to render
        options: Display options

    Returns:
        Rendered lines
    """
    return AlignmentRenderer(options).render_records(records)


def format_records(records: Iterable[WaymarkRecord], options: Optional[RenderOptions] = None) -> str:
    """Render records and join the lines into a single string."""
    return "\n".join(render_records(records, options))
