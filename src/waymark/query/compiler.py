"""
Query compiler for waymark search.

Folds the lexer's token stream into a single FilterSpec.
"""

from typing import Iterable
import logging

from ..models.query import FilterSpec, QueryToken, QueryTokenKind
from .lexer import lex
from .markers import resolve_type


logger = logging.getLogger(__name__)


def _add_property(spec: FilterSpec, value: str) -> None:
    key, _, prop_value = value.partition(':')
    if key and prop_value:
        spec.properties[key] = prop_value
    elif key:
        spec.properties[key] = True


def _add_exclusion(spec: FilterSpec, value: str) -> None:
    if value.startswith('@'):
        spec.exclusions.mentions.append(value)
    elif value.startswith('#'):
        spec.exclusions.tags.append(value)
    else:
        canonical = resolve_type(value)
        if canonical is not None:
            spec.exclusions.types.append(canonical)
        else:
            # Unresolvable exclusions are dropped, not turned into text terms
            logger.debug(f"Dropping exclusion with unknown type: !{value}")


def compile_query(tokens: Iterable[QueryToken]) -> FilterSpec:
    """
    Compile query tokens into a FilterSpec.

    Args:
        tokens: Tokens produced by lex()

    Returns:
        FilterSpec with every field populated (empty collections by default)
    """
    spec = FilterSpec()

    for token in tokens:
        if token.kind is QueryTokenKind.EXCLUSION:
            _add_exclusion(spec, token.value)
        elif token.kind is QueryTokenKind.TYPE:
            spec.types.append(token.value)
        elif token.kind is QueryTokenKind.MENTION:
            spec.mentions.append(token.value)
        elif token.kind is QueryTokenKind.TAG:
            spec.tags.append(token.value)
        elif token.kind is QueryTokenKind.PROPERTY:
            _add_property(spec, token.value)
        elif token.kind is QueryTokenKind.TEXT:
            spec.text_terms.append(token.value)

    return spec


def parse_query(query: str) -> FilterSpec:
    """
    Parse a free-form query string into a FilterSpec.

    Examples:
        "todo @agent #perf" -> types [todo], mentions [@agent], tags [#perf]
        "fix !@alice"       -> types [fix], exclusions.mentions [@alice]
        "owner:@alice"      -> properties {owner: "@alice"}

    Args:
        query: Raw query string

    Returns:
        Compiled FilterSpec
    """
    spec = compile_query(lex(query))
    logger.debug(f"Compiled query {query!r}: {spec}")
    return spec
