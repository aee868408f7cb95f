"""Plural-Forms compiler and evaluator.

Catalog headers declare how a language selects plural forms, using a small
subset of C expression syntax:

    Plural-Forms: nplurals=3; plural=(n==1 ? 0 : n%10>=2 && n%10<=4 ? 1 : 2);

Catalog content is untrusted translator input, so the declaration is never
executed as code. It is tokenized against a fixed allow-list (the names
``nplurals``, ``plural`` and ``n``, non-negative integer literals, C operators
and parentheses), parsed by recursive descent into an expression tree, and
evaluated by a tree-walking interpreter. Anything outside the grammar,
including any bracket other than parentheses, is rejected.

Operator precedence (lowest to highest):
    ?:                  right-associative
    ||
    &&
    == !=
    < > <= >=
    + -
    * / %
    ! - (unary)

Evaluation follows C integer semantics: comparisons and logical operators
yield 0 or 1, division and remainder truncate toward zero.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeAlias

from gettextengine.constants import MAX_PLURAL_DEPTH
from gettextengine.errors import PluralRuleError

__all__ = [
    "PluralFunction",
    "PluralRule",
    "compile_plural_forms",
    "germanic_plural",
    "plural_rule_from_declaration",
    "plural_rule_from_header",
]

logger = logging.getLogger(__name__)

PluralFunction: TypeAlias = Callable[[int], int]
"""Maps a non-negative item count to a non-negative plural form index."""


def germanic_plural(num_items: int) -> int:
    """Default plural rule: singular for exactly one item, plural otherwise.

    Args:
        num_items: Number of items

    Returns:
        0 if num_items == 1 else 1
    """
    return 0 if num_items == 1 else 1


# ============================================================================
# TOKENIZER
# ============================================================================

# Whitespace removed before tokenizing. Newlines are not part of the set: a
# header value never contains one, so a newline indicates tampering.
_WHITESPACE = re.compile(r"[ \t\r\v\f]")

_TOKEN = re.compile(
    r"(?P<number>[0-9]+)"
    r"|(?P<name>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<op>==|!=|<=|>=|&&|\|\||[-+*/%<>!?:=;()])"
)

_NAMES = frozenset({"nplurals", "plural", "n"})
_TARGETS = frozenset({"nplurals", "plural"})


@dataclass(frozen=True, slots=True)
class _Token:
    kind: str  # "number", "name", "op" or "end"
    text: str


def _tokenize(declaration: str) -> list[_Token]:
    source = _WHITESPACE.sub("", declaration)
    source = source.removesuffix(";")

    tokens: list[_Token] = []
    pos = 0
    while pos < len(source):
        match = _TOKEN.match(source, pos)
        if match is None:
            msg = f"invalid character {source[pos]!r} in plural expression"
            raise PluralRuleError(msg, declaration)
        kind = match.lastgroup or "op"
        text = match.group()
        if kind == "name" and text not in _NAMES:
            msg = f"unknown identifier {text!r} in plural expression"
            raise PluralRuleError(msg, declaration)
        tokens.append(_Token(kind, text))
        pos = match.end()

    tokens.append(_Token("end", ""))
    return tokens


# ============================================================================
# EXPRESSION TREE
# ============================================================================


@dataclass(frozen=True, slots=True)
class Number:
    """Integer literal."""

    value: int
    depth: int = field(default=1, init=False, compare=False)


@dataclass(frozen=True, slots=True)
class Count:
    """The item count ``n``."""

    depth: int = field(default=1, init=False, compare=False)


@dataclass(frozen=True, slots=True)
class Unary:
    """Unary ``!`` or ``-``."""

    op: str
    operand: Node
    depth: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "depth", self.operand.depth + 1)


@dataclass(frozen=True, slots=True)
class Binary:
    """Arithmetic, comparison or logical operator."""

    op: str
    left: Node
    right: Node
    depth: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "depth", max(self.left.depth, self.right.depth) + 1)


@dataclass(frozen=True, slots=True)
class Conditional:
    """Ternary ``test ? then : otherwise``."""

    test: Node
    then: Node
    otherwise: Node
    depth: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "depth", max(self.test.depth, self.then.depth, self.otherwise.depth) + 1
        )


Node: TypeAlias = Number | Count | Unary | Binary | Conditional

# Binary precedence levels, loosest first. Each level is left-associative.
_BINARY_LEVELS: tuple[frozenset[str], ...] = (
    frozenset({"||"}),
    frozenset({"&&"}),
    frozenset({"==", "!="}),
    frozenset({"<", ">", "<=", ">="}),
    frozenset({"+", "-"}),
    frozenset({"*", "/", "%"}),
)


# ============================================================================
# PARSER
# ============================================================================


class _Parser:
    """Recursive-descent parser over a token list."""

    __slots__ = ("_declaration", "_depth", "_pos", "_tokens")

    def __init__(self, tokens: list[_Token], declaration: str) -> None:
        self._tokens = tokens
        self._declaration = declaration
        self._pos = 0
        self._depth = 0

    def _peek(self) -> _Token:
        return self._tokens[self._pos]

    def _advance(self) -> _Token:
        token = self._tokens[self._pos]
        if token.kind != "end":
            self._pos += 1
        return token

    def _fail(self, reason: str) -> PluralRuleError:
        return PluralRuleError(reason, self._declaration)

    def _expect(self, text: str) -> None:
        token = self._advance()
        if token.text != text or token.kind != "op":
            raise self._fail(f"expected {text!r}, got {token.text or 'end of input'!r}")

    def _checked(self, node: Node) -> Node:
        if node.depth > MAX_PLURAL_DEPTH:
            raise self._fail(f"plural expression nested deeper than {MAX_PLURAL_DEPTH}")
        return node

    def parse_program(self) -> dict[str, Node]:
        """Parse ``target=expr`` statements separated by semicolons."""
        assignments: dict[str, Node] = {}
        while True:
            target = self._advance()
            if target.kind != "name" or target.text not in _TARGETS:
                raise self._fail(f"expected assignment, got {target.text or 'end of input'!r}")
            self._expect("=")
            assignments[target.text] = self.parse_expression()

            token = self._advance()
            if token.kind == "end":
                return assignments
            if token.text != ";":
                raise self._fail(f"unexpected {token.text!r}")

    def parse_expression(self) -> Node:
        self._depth += 1
        if self._depth > MAX_PLURAL_DEPTH:
            raise self._fail(f"plural expression nested deeper than {MAX_PLURAL_DEPTH}")
        try:
            test = self._parse_binary(0)
            if self._peek().text != "?":
                return test
            self._advance()
            then = self.parse_expression()
            self._expect(":")
            otherwise = self.parse_expression()
            return self._checked(Conditional(test, then, otherwise))
        finally:
            self._depth -= 1

    def _parse_binary(self, level: int) -> Node:
        if level == len(_BINARY_LEVELS):
            return self._parse_unary()

        operators = _BINARY_LEVELS[level]
        left = self._parse_binary(level + 1)
        while self._peek().kind == "op" and self._peek().text in operators:
            op = self._advance().text
            right = self._parse_binary(level + 1)
            left = self._checked(Binary(op, left, right))
        return left

    def _parse_unary(self) -> Node:
        token = self._peek()
        if token.kind == "op" and token.text in ("!", "-"):
            self._advance()
            self._depth += 1
            if self._depth > MAX_PLURAL_DEPTH:
                raise self._fail(f"plural expression nested deeper than {MAX_PLURAL_DEPTH}")
            try:
                return self._checked(Unary(token.text, self._parse_unary()))
            finally:
                self._depth -= 1
        return self._parse_primary()

    def _parse_primary(self) -> Node:
        token = self._advance()
        match token.kind:
            case "number":
                try:
                    return Number(int(token.text))
                except ValueError:
                    # Beyond sys.get_int_max_str_digits()
                    raise self._fail("integer literal too long") from None
            case "name" if token.text == "n":
                return Count()
            case "op" if token.text == "(":
                node = self.parse_expression()
                self._expect(")")
                return node
            case _:
                raise self._fail(f"unexpected {token.text or 'end of input'!r}")


# ============================================================================
# EVALUATOR
# ============================================================================


def _truncating_divide(left: int, right: int) -> int:
    quotient = abs(left) // abs(right)
    return -quotient if (left < 0) != (right < 0) else quotient


def _truncating_remainder(left: int, right: int) -> int:
    remainder = abs(left) % abs(right)
    return -remainder if left < 0 else remainder


_ARITHMETIC: dict[str, Callable[[int, int], int]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _truncating_divide,
    "%": _truncating_remainder,
    "<": lambda a, b: int(a < b),
    ">": lambda a, b: int(a > b),
    "<=": lambda a, b: int(a <= b),
    ">=": lambda a, b: int(a >= b),
    "==": lambda a, b: int(a == b),
    "!=": lambda a, b: int(a != b),
}


def evaluate(node: Node, n: int) -> int:
    """Evaluate an expression tree for item count ``n``.

    Raises:
        ZeroDivisionError: If the expression divides by zero for this n
    """
    match node:
        case Number(value=value):
            return value
        case Count():
            return n
        case Unary(op="!", operand=operand):
            return int(not evaluate(operand, n))
        case Unary(operand=operand):
            return -evaluate(operand, n)
        case Binary(op="&&", left=left, right=right):
            return int(bool(evaluate(left, n)) and bool(evaluate(right, n)))
        case Binary(op="||", left=left, right=right):
            return int(bool(evaluate(left, n)) or bool(evaluate(right, n)))
        case Binary(op=op, left=left, right=right):
            return _ARITHMETIC[op](evaluate(left, n), evaluate(right, n))
        case Conditional(test=test, then=then, otherwise=otherwise):
            return evaluate(then, n) if evaluate(test, n) else evaluate(otherwise, n)
    msg = f"unknown plural expression node: {node!r}"  # pragma: no cover
    raise TypeError(msg)  # pragma: no cover


@dataclass(frozen=True, slots=True)
class PluralRule:
    """A compiled Plural-Forms declaration.

    Callable like any PluralFunction. Two rules compiled from the same
    declaration compare equal.

    Attributes:
        declaration: Source text the rule was compiled from
        expression: Tree for the ``plural`` assignment (literal 0 if absent)
        nplurals: Declared number of forms, if declared as a constant
    """

    declaration: str = field(compare=False)
    expression: Node
    nplurals: int | None = None

    def __call__(self, num_items: int) -> int:
        """Select the plural form index for num_items.

        Division by zero or a negative result selects the germanic
        index instead, so the rule never raises.
        """
        try:
            index = evaluate(self.expression, num_items)
        except ZeroDivisionError:
            return germanic_plural(num_items)
        if index < 0:
            return germanic_plural(num_items)
        return index


def compile_plural_forms(declaration: str) -> PluralRule:
    """Compile a Plural-Forms declaration.

    Equivalent to running ``nplurals=1; plural=0; <declaration>`` and
    returning ``plural``, but without executing any code.

    Args:
        declaration: Header value, e.g. "nplurals=2; plural=(n != 1);"

    Returns:
        Compiled PluralRule

    Raises:
        PluralRuleError: If the declaration uses anything outside the grammar

    Example:
        >>> rule = compile_plural_forms("nplurals=2; plural=(n != 1);")
        >>> rule(0), rule(1), rule(2)
        (1, 0, 1)
    """
    tokens = _tokenize(declaration)
    assignments = _Parser(tokens, declaration).parse_program()

    nplurals: int | None = None
    if "nplurals" in assignments:
        try:
            nplurals = evaluate(assignments["nplurals"], 0)
        except ZeroDivisionError:
            nplurals = None

    return PluralRule(
        declaration=declaration,
        expression=assignments.get("plural", Number(0)),
        nplurals=nplurals,
    )


def plural_rule_from_declaration(declaration: str | None) -> PluralFunction:
    """Compile a declaration, falling back to the germanic rule.

    Args:
        declaration: Header value, or None if the header is absent

    Returns:
        The compiled rule, or germanic_plural for absent, empty or
        rejected declarations
    """
    if not declaration or not declaration.strip():
        return germanic_plural
    try:
        return compile_plural_forms(declaration)
    except PluralRuleError as e:
        logger.warning("Rejected plural rule, using default: %s", e)
        return germanic_plural


def plural_rule_from_header(header: str | None) -> PluralFunction:
    """Extract and compile the Plural-Forms line of a catalog header.

    Header lines are ``Key: value``; keys compare case-insensitively.
    If several Plural-Forms lines are present the last one wins.

    Args:
        header: Translation of the empty msgid, or None

    Returns:
        PluralFunction for the catalog
    """
    if header is None:
        return germanic_plural

    declaration: str | None = None
    for line in header.split("\n"):
        key, colon, value = line.partition(":")
        if colon and key.strip().lower() == "plural-forms":
            declaration = value
    return plural_rule_from_declaration(declaration)
