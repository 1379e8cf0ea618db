"""
Unit tests for the regex fragment algebra.

Tests verify:
1. Identity and annihilator rules of union, concat and star
2. Precedence-aware rendering
3. Parsing of labels and display syntax
4. Idempotent simplification
5. Exact membership testing
"""

import pytest

from nfa2regex.errors import RegexSyntaxError
from nfa2regex.regex import (CONCAT, EPSILON, STAR, UNION, Concat, Empty, Epsilon, Star, Symbol, Union,
                             concat, from_label, main_operator, matches, nullable, parse, render,
                             simplify, star, symbols, to_pattern, union)

FRAGMENTS = [
    "a", "ε", "∅", "a|b", "a·b", "(a|b)*", "a·(b|c)*·d", "ε|ε|a", "ε·a·ε", "∅|a",
    "a·∅", "(a*)*", "((a))", "(ε|a)*", "a|a*|ε", "(a|b)|(b|a)", "a+", "a?b", "∅*", "ε*",
]


class TestAlgebraIdentities:
    """Tests for the ε/∅ rules of the combinators."""

    def test_concat_epsilon_identity(self):
        """Concatenating with ε leaves the fragment unchanged."""
        assert concat("a", EPSILON) == Symbol("a")
        assert concat(EPSILON, "a") == Symbol("a")

    def test_concat_empty_annihilates(self):
        """Concatenating with ∅ gives ∅."""
        assert concat("a", "∅") == Empty()
        assert concat("∅", "a·b") == Empty()

    def test_union_empty_identity(self):
        """∅ is the identity of union."""
        assert union("a", "∅") == Symbol("a")
        assert union("∅", "a") == Symbol("a")

    def test_union_of_equal_fragments(self):
        """A fragment unioned with itself is returned unchanged."""
        assert union("a·b", "a·b") == parse("a·b")

    def test_union_drops_duplicate_alternatives(self):
        """Alternatives already present are not repeated."""
        assert render(union("a|b", "b|a")) == "a|b"

    def test_star_of_epsilon_and_empty(self):
        """ε* and ∅* are ε."""
        assert star(EPSILON) == Epsilon()
        assert star("∅") == Epsilon()

    def test_star_is_idempotent(self):
        """Starring a starred fragment does nothing."""
        assert star(star("a")) == Star(Symbol("a"))

    def test_star_drops_epsilon_alternative(self):
        """(ε|a)* is a*."""
        assert star("ε|a") == Star(Symbol("a"))

    def test_epsilon_kept_next_to_non_nullable(self):
        """ε|a keeps ε because a alone does not accept the empty string."""
        assert render(union(EPSILON, "a")) == "ε|a"

    def test_epsilon_absorbed_by_nullable(self):
        """ε|a* is a*."""
        assert union(EPSILON, "a*") == Star(Symbol("a"))


class TestRendering:
    """Tests for precedence-aware display."""

    def test_union_parenthesized_under_concat(self):
        assert render(concat("a|b", "c")) == "(a|b)·c"

    def test_concat_parenthesized_under_star(self):
        assert render(star(concat("a", "b"))) == "(a·b)*"

    def test_symbol_star_has_no_parentheses(self):
        assert render(star("a")) == "a*"

    def test_concat_not_parenthesized_under_union(self):
        assert render(union("a·b", "c")) == "a·b|c"

    def test_implicit_concatenation(self):
        assert render(parse("a·(b|c)*"), implicit_concat=True) == "a(b|c)*"

    def test_str_uses_render(self):
        assert str(parse("a·b*")) == "a·b*"


class TestMainOperator:
    """Tests for the top-level operator lookup."""

    def test_union_is_lowest(self):
        assert main_operator("a|b·c") == UNION

    def test_concat(self):
        assert main_operator("a·b*") == CONCAT

    def test_star(self):
        assert main_operator("(a|b)*") == STAR

    def test_atoms_have_none(self):
        assert main_operator("a") is None
        assert main_operator(EPSILON) is None


class TestParsing:
    """Tests for the display-syntax parser."""

    def test_label_with_comma(self):
        """A comma-joined label is the union of its symbols."""
        assert from_label("a,b") == Union(Symbol("a"), Symbol("b"))

    def test_implicit_and_explicit_concat_agree(self):
        assert parse("ab") == parse("a·b") == Concat(Symbol("a"), Symbol("b"))

    def test_plus_and_optional_are_desugared(self):
        assert render(parse("a+")) == "a·a*"
        assert render(parse("a?")) == "ε|a"

    def test_empty_text_is_epsilon(self):
        assert parse("") == Epsilon()
        assert parse("()") == Epsilon()

    def test_whitespace_ignored(self):
        assert parse(" a | b ") == parse("a|b")

    @pytest.mark.parametrize("text", ["a|", "(a", "*a", ")", "a·", "a,,b"])
    def test_syntax_errors(self, text):
        """Malformed fragments raise RegexSyntaxError, which is also a ValueError."""
        with pytest.raises(RegexSyntaxError):
            parse(text)
        with pytest.raises(ValueError):
            parse(text)

    def test_coerce_rejects_other_types(self):
        with pytest.raises(TypeError):
            union(1, "a")


class TestSimplify:
    """Tests for simplification."""

    def test_redundant_parentheses(self):
        assert simplify("((a))") == Symbol("a")

    def test_epsilon_concatenation(self):
        assert simplify("ε·a·ε") == Symbol("a")

    def test_empty_union(self):
        assert simplify("∅|a") == Symbol("a")

    def test_empty_result_is_epsilon(self):
        assert simplify("") == Epsilon()

    def test_nested_star(self):
        assert simplify(Star(Star(Symbol("a")))) == Star(Symbol("a"))

    def test_unsimplified_tree(self):
        """Trees built without the combinators are normalized."""
        tree = Concat(Epsilon(), Union(Empty(), Concat(Symbol("a"), Epsilon())))
        assert simplify(tree) == Symbol("a")

    @pytest.mark.parametrize("text", FRAGMENTS)
    def test_idempotent(self, text):
        """simplify(simplify(x)) == simplify(x)."""
        once = simplify(text)
        assert simplify(once) == once
        assert render(simplify(render(once))) == render(once)


class TestMembership:
    """Tests for exact membership and helpers."""

    def test_matches(self):
        assert matches("a·b*", "abbb")
        assert not matches("a·b*", "ba")

    def test_empty_and_epsilon(self):
        assert matches(EPSILON, "")
        assert not matches(EPSILON, "a")
        assert not matches("∅", "")

    def test_star_accepts_empty_string(self):
        assert matches("(a|b)*", "")

    def test_pattern_escapes_symbols(self):
        assert matches(Symbol("."), ".")
        assert not matches(Symbol("."), "x")
        assert to_pattern("a|b") == "(?:a|b)"

    def test_nullable(self):
        assert nullable("a*")
        assert nullable("ε|a")
        assert not nullable("a·b*")
        assert not nullable("∅")

    def test_symbols(self):
        assert symbols("a·(b|c)*") == {"a", "b", "c"}
        assert symbols("ε") == set()
