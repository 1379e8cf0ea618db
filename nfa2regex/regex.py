"""
Regular-expression fragments used as transition labels during state elimination.

Fragments are small immutable trees (Symbol, Union, Concat, Star, Epsilon,
Empty).  The combinators ``union``, ``concat`` and ``star`` apply the identity
rules for ε and ∅ while building, so every fragment they return is already in
normal form and ``simplify`` is idempotent.

Display syntax:
    - ``|`` union, ``·`` concatenation (or implicit), postfix ``*``
    - ``+`` and ``?`` are accepted on input and rewritten as ``x·x*`` and ``ε|x``
    - ``ε`` empty string, ``∅`` empty language
    - ``,`` separates the symbols of a transition label (``a,b`` == ``a|b``)
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from .errors import RegexSyntaxError

UNION = '|'
CONCAT = '·'
STAR = '*'
PLUS = '+'
OPTIONAL = '?'
EPSILON = 'ε'
EMPTY = '∅'
LABEL_SEPARATOR = ','

# Higher number binds tighter
PRECEDENCE = {UNION: 1, CONCAT: 2, STAR: 3, PLUS: 3, OPTIONAL: 3}
ATOM_PRECEDENCE = 4

_SPECIAL = {UNION, CONCAT, STAR, PLUS, OPTIONAL, LABEL_SEPARATOR, '(', ')'}


class Regex:
    """Base class of regular-expression fragments."""

    operator = None

    @property
    def precedence(self):
        return PRECEDENCE.get(self.operator, ATOM_PRECEDENCE)

    def render(self, implicit_concat=False):
        raise NotImplementedError

    def _wrapped(self, parent_op, implicit_concat):
        text = self.render(implicit_concat)
        if self.precedence < PRECEDENCE[parent_op]:
            return f"({text})"
        return text

    def __str__(self):
        return self.render()


@dataclass(frozen=True)
class Symbol(Regex):
    """A single alphabet symbol."""
    char: str

    def render(self, implicit_concat=False):
        return self.char


@dataclass(frozen=True)
class Epsilon(Regex):
    """The language containing only the empty string."""

    def render(self, implicit_concat=False):
        return EPSILON


@dataclass(frozen=True)
class Empty(Regex):
    """The language containing no strings."""

    def render(self, implicit_concat=False):
        return EMPTY


@dataclass(frozen=True)
class Union(Regex):
    left: Regex
    right: Regex
    operator = UNION

    def render(self, implicit_concat=False):
        return (f"{self.left._wrapped(UNION, implicit_concat)}"
                f"{UNION}{self.right._wrapped(UNION, implicit_concat)}")


@dataclass(frozen=True)
class Concat(Regex):
    left: Regex
    right: Regex
    operator = CONCAT

    def render(self, implicit_concat=False):
        separator = '' if implicit_concat else CONCAT
        return (f"{self.left._wrapped(CONCAT, implicit_concat)}"
                f"{separator}{self.right._wrapped(CONCAT, implicit_concat)}")


@dataclass(frozen=True)
class Star(Regex):
    inner: Regex
    operator = STAR

    def render(self, implicit_concat=False):
        return f"{self.inner._wrapped(STAR, implicit_concat)}{STAR}"


class _Parser:
    """Recursive-descent parser for the display syntax."""

    def __init__(self, text):
        self.text = text
        self.pos = 0

    def peek(self):
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1
        return self.text[self.pos] if self.pos < len(self.text) else None

    def consume(self):
        char = self.peek()
        if char is not None:
            self.pos += 1
        return char

    def error(self, message):
        return RegexSyntaxError(message, self.text, self.pos)

    def parse(self):
        if self.peek() is None:
            return Epsilon()
        result = self.parse_union()
        if self.peek() is not None:
            raise self.error(f"Unexpected character '{self.peek()}'")
        return result

    def parse_union(self):
        result = self.parse_concat()
        while self.peek() in (UNION, LABEL_SEPARATOR):
            self.consume()
            result = union(result, self.parse_concat())
        return result

    def parse_concat(self):
        if self.peek() in (None, UNION, LABEL_SEPARATOR, ')'):
            raise self.error("Missing operand")
        result = self.parse_postfix()
        while True:
            char = self.peek()
            if char == CONCAT:
                self.consume()
            elif char in (None, UNION, LABEL_SEPARATOR, ')'):
                return result
            result = concat(result, self.parse_postfix())

    def parse_postfix(self):
        result = self.parse_atom()
        while self.peek() in (STAR, PLUS, OPTIONAL):
            op = self.consume()
            if op == STAR:
                result = star(result)
            elif op == PLUS:
                result = concat(result, star(result))
            else:
                result = union(Epsilon(), result)
        return result

    def parse_atom(self):
        char = self.consume()
        if char == '(':
            if self.peek() == ')':
                self.consume()
                return Epsilon()
            inner = self.parse_union()
            if self.consume() != ')':
                raise self.error("Expected ')'")
            return inner
        if char == EPSILON:
            return Epsilon()
        if char == EMPTY:
            return Empty()
        if char is None or char in _SPECIAL:
            raise self.error(f"Unexpected '{char}'" if char else "Unexpected end of expression")
        return Symbol(char)


def parse(text):
    """Parse a fragment written in the display syntax."""
    return _Parser(text).parse()


def from_label(label):
    """Turn a comma-joined transition label such as ``a,b`` into a fragment."""
    return parse(label)


def coerce(expr):
    """Accept either a fragment or its textual form."""
    if isinstance(expr, Regex):
        return expr
    if isinstance(expr, str):
        return parse(expr)
    raise TypeError(f"Expected a Regex or str, got {type(expr).__name__}")


def _alternatives(expr):
    if isinstance(expr, Union):
        return _alternatives(expr.left) + _alternatives(expr.right)
    return [expr]


def _factors(expr):
    if isinstance(expr, Concat):
        return _factors(expr.left) + _factors(expr.right)
    return [expr]


def _fold(node_type, parts):
    result = parts[0]
    for part in parts[1:]:
        result = node_type(result, part)
    return result


def nullable(expr):
    """True when the fragment's language contains the empty string."""
    expr = coerce(expr)
    if isinstance(expr, (Epsilon, Star)):
        return True
    if isinstance(expr, Union):
        return nullable(expr.left) or nullable(expr.right)
    if isinstance(expr, Concat):
        return nullable(expr.left) and nullable(expr.right)
    return False


def union(x, y):
    """Union with ∅ as identity; duplicate alternatives are dropped."""
    x, y = coerce(x), coerce(y)
    if isinstance(x, Empty):
        return y
    if isinstance(y, Empty):
        return x
    if x == y:
        return x

    alternatives = []
    for term in _alternatives(x) + _alternatives(y):
        if not isinstance(term, Empty) and term not in alternatives:
            alternatives.append(term)
    # ε is redundant next to an alternative that already accepts the empty string
    if any(nullable(term) for term in alternatives if not isinstance(term, Epsilon)):
        alternatives = [term for term in alternatives if not isinstance(term, Epsilon)]
    return _fold(Union, alternatives)


def concat(x, y):
    """Concatenation with ε as identity and ∅ as annihilator."""
    x, y = coerce(x), coerce(y)
    if isinstance(x, Epsilon):
        return y
    if isinstance(y, Epsilon):
        return x
    if isinstance(x, Empty) or isinstance(y, Empty):
        return Empty()
    return _fold(Concat, _factors(x) + _factors(y))


def star(x):
    """Kleene closure; ε* and ∅* are ε, and x** is x*."""
    x = coerce(x)
    if isinstance(x, (Epsilon, Empty)):
        return Epsilon()
    if isinstance(x, Star):
        return x
    if isinstance(x, Union):
        alternatives = [term for term in _alternatives(x) if not isinstance(term, Epsilon)]
        if len(alternatives) < len(_alternatives(x)):
            return star(_fold(Union, alternatives))
    return Star(x)


def main_operator(expr):
    """Top-level operator of a fragment, or None for a symbol, ε or ∅."""
    return coerce(expr).operator


def simplify(expr):
    """Rebuild the fragment bottom-up through the combinators."""
    expr = coerce(expr)
    if isinstance(expr, Union):
        return union(simplify(expr.left), simplify(expr.right))
    if isinstance(expr, Concat):
        return concat(simplify(expr.left), simplify(expr.right))
    if isinstance(expr, Star):
        return star(simplify(expr.inner))
    return expr


def render(expr, implicit_concat=False):
    """Display string of a fragment."""
    return coerce(expr).render(implicit_concat)


def symbols(expr):
    """Alphabet symbols occurring in the fragment."""
    expr = coerce(expr)
    if isinstance(expr, Symbol):
        return {expr.char}
    if isinstance(expr, (Union, Concat)):
        return symbols(expr.left) | symbols(expr.right)
    if isinstance(expr, Star):
        return symbols(expr.inner)
    return set()


def to_pattern(expr):
    """Equivalent Python ``re`` pattern (without anchors)."""
    expr = coerce(expr)
    if isinstance(expr, Symbol):
        return re.escape(expr.char)
    if isinstance(expr, Epsilon):
        return '(?:)'
    if isinstance(expr, Empty):
        return '(?!)'
    if isinstance(expr, Union):
        return '(?:' + '|'.join(to_pattern(term) for term in _alternatives(expr)) + ')'
    if isinstance(expr, Concat):
        return ''.join(to_pattern(factor) for factor in _factors(expr))
    return '(?:' + to_pattern(expr.inner) + ')*'


@lru_cache(maxsize=512)
def _compiled(expr):
    return re.compile(to_pattern(expr))


def matches(expr, word):
    """Whether ``word`` belongs to the language of the fragment."""
    return _compiled(coerce(expr)).fullmatch(word) is not None
