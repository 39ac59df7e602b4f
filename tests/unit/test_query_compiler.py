"""
Unit tests for the query compiler.

Tests the folding of lexed query tokens into FilterSpec objects.
"""

import pytest

from waymark.models.query import FilterSpec, QueryToken, QueryTokenKind
from waymark.query.compiler import compile_query, parse_query
from waymark.query.lexer import lex


class TestCompileQuery:
    """Test cases for compiling lexed queries."""

    @pytest.mark.parametrize("query", ["", "   ", "\t"])
    def test_empty_query(self, query):
        """Test that empty queries compile to a spec with every field empty."""
        spec = compile_query(lex(query))

        assert spec.types == []
        assert spec.mentions == []
        assert spec.tags == []
        assert spec.properties == {}
        assert spec.text_terms == []
        assert spec.exclusions.types == []
        assert spec.exclusions.mentions == []
        assert spec.exclusions.tags == []
        assert spec.is_empty()

    def test_type_mention_and_namespaced_tag(self):
        """Test a type, a mention and a tag with a colon in it."""
        spec = compile_query(lex("todo @agent #perf:hotpath"))

        assert spec.types == ["todo"]
        assert spec.mentions == ["@agent"]
        assert spec.tags == ["#perf:hotpath"]
        assert spec.properties == {}

    def test_property_with_value(self):
        """Test a key:value property."""
        spec = compile_query(lex("owner:@alice"))
        assert spec.properties.get("owner") == "@alice"

    def test_property_presence(self):
        """Test that a bare key: becomes a presence predicate."""
        spec = compile_query(lex("from:"))
        assert spec.properties.get("from") is True

    def test_property_splits_on_first_colon(self):
        """Test that only the first colon separates key and value."""
        spec = parse_query("see:#auth/core:v2")
        assert spec.properties == {"see": "#auth/core:v2"}

    def test_property_last_write_wins(self):
        """Test that a repeated key keeps the last value."""
        spec = parse_query("status:open status:closed")
        assert spec.properties == {"status": "closed"}

    def test_multiple_properties(self):
        """Test several properties in one query."""
        spec = parse_query("see:#auth/core from:#payments")
        assert spec.properties == {"see": "#auth/core", "from": "#payments"}

    def test_leading_colon_property_is_ignored(self):
        """Test that a property with no key sets nothing."""
        spec = parse_query(":value")
        assert spec.properties == {}

    def test_mention_exclusion(self):
        """Test excluding a mention."""
        spec = compile_query(lex("fix !@alice"))

        assert spec.types == ["fix"]
        assert spec.exclusions.mentions == ["@alice"]

    def test_type_exclusions_are_canonical(self):
        """Test that excluded types are resolved to canonical names."""
        spec = parse_query("#perf !FIX !todos")

        assert spec.tags == ["#perf"]
        assert spec.exclusions.types == ["fix", "todo"]

    def test_tag_exclusion(self):
        """Test excluding a tag."""
        spec = parse_query("@agent !#wip")

        assert spec.mentions == ["@agent"]
        assert spec.exclusions.tags == ["#wip"]

    def test_unknown_exclusion_is_dropped(self):
        """Test that an exclusion that is not a type, mention or tag is dropped."""
        spec = parse_query("todo !cache")

        assert spec.types == ["todo"]
        assert spec.exclusions.is_empty()
        assert spec.text_terms == []

    def test_synonyms_outside_marker_table_are_text(self):
        """Test that words resembling markers stay text and cannot be excluded."""
        spec = parse_query("question fixme warning !warning")

        assert spec.types == []
        assert spec.text_terms == ["question", "fixme", "warning"]
        assert spec.exclusions.is_empty()

    @pytest.mark.parametrize("query", ["todos", "to-do", "TODO"])
    def test_fuzzy_type_resolution(self, query):
        """Test that type variations compile to the canonical type."""
        assert compile_query(lex(query)).types == ["todo"]

    def test_duplicates_and_order_preserved(self):
        """Test that repeated values are kept in first-occurrence order."""
        spec = parse_query("note todo note #b #a #b")

        assert spec.types == ["note", "todo", "note"]
        assert spec.tags == ["#b", "#a", "#b"]

    def test_text_terms(self):
        """Test unknown words and quoted spans become text terms."""
        spec = parse_query('cache "hot path" todo')

        assert spec.types == ["todo"]
        assert spec.text_terms == ["cache", "hot path"]

    def test_unclosed_quote_becomes_text(self):
        """Test that an unclosed quote still yields a text term."""
        spec = parse_query('todo "retry logic')

        assert spec.types == ["todo"]
        assert spec.text_terms == ["retry logic"]

    def test_compile_hand_built_tokens(self):
        """Test compiling tokens that did not come from the lexer."""
        tokens = [
            QueryToken(QueryTokenKind.TYPE, "warn", "warning"),
            QueryToken(QueryTokenKind.PROPERTY, "priority:high", "priority:high"),
            QueryToken(QueryTokenKind.EXCLUSION, "deprecated", "!deprecated"),
        ]
        spec = compile_query(tokens)

        assert spec.types == ["warn"]
        assert spec.properties == {"priority": "high"}
        assert spec.exclusions.types == ["deprecated"]


class TestFilterSpec:
    """Test cases for the FilterSpec model."""

    def test_defaults(self):
        """Test that a default spec is empty."""
        spec = FilterSpec()
        assert spec.is_empty()
        assert str(spec) == "No filters"

    def test_exclusions_make_spec_non_empty(self):
        """Test that exclusions alone count as a constraint."""
        spec = parse_query("!todo")
        assert not spec.is_empty()

    def test_str(self):
        """Test string representation."""
        spec = parse_query("todo @agent !fix cache")
        text = str(spec)

        assert "Types: todo" in text
        assert "Mentions: @agent" in text
        assert "Excluding: fix" in text
        assert "Text: cache" in text
