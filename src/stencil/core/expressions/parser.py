"""
Recursive-descent parser for template expressions.

Grammar (lowest to highest precedence):
expression     → conditional
conditional    → nullish ("?" expression ":" expression)?
nullish        → or ("??" or)*
or             → and (("||" | "or") and)*
and            → equality (("&&" | "and") equality)*
equality       → relational (("==" | "!=" | "===" | "!==") relational)*
relational     → additive (("<" | "<=" | ">" | ">=") additive)*
additive       → multiplicative (("+" | "-") multiplicative)*
multiplicative → unary (("*" | "/" | "%") unary)*
unary          → ("!" | "not" | "-" | "+") unary | postfix
postfix        → primary ("." IDENTIFIER | "[" expression "]")*
primary        → NUMBER | STRING | true | false | null | undefined
               | IDENTIFIER | "(" expression ")" | "[" (expression ("," expression)*)? "]"

There is deliberately no call, assignment or declaration syntax.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List

from stencil.core.exceptions import ExpressionSyntaxError

from .lexer import ExpressionLexer, Token
from .model import (
    ArrayLiteral,
    Binary,
    Conditional,
    Identifier,
    Index,
    Literal,
    Logical,
    Member,
    Node,
    Unary,
)
from .values import MISSING

_KEYWORD_LITERALS = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": MISSING,
}


class ExpressionParser:
    """
    Recursive-descent parser producing an immutable AST.

    A parser instance is not thread-safe; use :func:`parse_expression`,
    which builds a fresh parser per call and caches the result.
    """

    def __init__(self) -> None:
        self.lexer = ExpressionLexer()
        self._text = ""
        self._tokens: List[Token] = []
        self._position = 0

    def parse(self, text: str) -> Node:
        """
        Parse expression text into an AST.

        Raises:
            ExpressionSyntaxError: On any lexing or parsing failure
        """
        self._text = text
        self._tokens = self.lexer.tokenize(text)
        self._position = 0

        if self._is_at_end():
            raise ExpressionSyntaxError(text, "Empty expression", 0)

        result = self._parse_expression()

        if not self._is_at_end():
            current = self._current_token()
            self._error(f"Unexpected token '{current.value}'", current)

        return result

    def _parse_expression(self) -> Node:
        return self._parse_conditional()

    def _parse_conditional(self) -> Node:
        test = self._parse_nullish()
        if self._match_operator("?"):
            consequent = self._parse_expression()
            if not self._match_operator(":"):
                self._error("Expected ':' in conditional expression", self._current_token())
            alternate = self._parse_expression()
            return Conditional(test=test, consequent=consequent, alternate=alternate)
        return test

    def _parse_nullish(self) -> Node:
        left = self._parse_or()
        while self._match_operator("??"):
            left = Logical(operator="??", left=left, right=self._parse_or())
        return left

    def _parse_or(self) -> Node:
        left = self._parse_and()
        while self._match_operator("||") or self._match_keyword("or"):
            left = Logical(operator="||", left=left, right=self._parse_and())
        return left

    def _parse_and(self) -> Node:
        left = self._parse_equality()
        while self._match_operator("&&") or self._match_keyword("and"):
            left = Logical(operator="&&", left=left, right=self._parse_equality())
        return left

    def _parse_equality(self) -> Node:
        left = self._parse_relational()
        while True:
            op = self._match_operator("===", "!==", "==", "!=")
            if op is None:
                return left
            left = Binary(operator=op, left=left, right=self._parse_relational())

    def _parse_relational(self) -> Node:
        left = self._parse_additive()
        while True:
            op = self._match_operator("<=", ">=", "<", ">")
            if op is None:
                return left
            left = Binary(operator=op, left=left, right=self._parse_additive())

    def _parse_additive(self) -> Node:
        left = self._parse_multiplicative()
        while True:
            op = self._match_operator("+", "-")
            if op is None:
                return left
            left = Binary(operator=op, left=left, right=self._parse_multiplicative())

    def _parse_multiplicative(self) -> Node:
        left = self._parse_unary()
        while True:
            op = self._match_operator("*", "/", "%")
            if op is None:
                return left
            left = Binary(operator=op, left=left, right=self._parse_unary())

    def _parse_unary(self) -> Node:
        if self._match_keyword("not"):
            return Unary(operator="!", operand=self._parse_unary())
        op = self._match_operator("!", "-", "+")
        if op is not None:
            return Unary(operator=op, operand=self._parse_unary())
        return self._parse_postfix()

    def _parse_postfix(self) -> Node:
        node = self._parse_primary()
        while True:
            if self._match_punct("."):
                name = self._current_token()
                # Keywords are valid property names: item.null, row.true
                if name.type not in ("IDENTIFIER", "KEYWORD"):
                    self._error("Expected property name after '.'", name)
                self._advance()
                node = Member(object=node, name=name.value)
            elif self._match_punct("["):
                index = self._parse_expression()
                self._expect_punct("]", "Expected ']' after index expression")
                node = Index(object=node, index=index)
            else:
                return node

    def _parse_primary(self) -> Node:
        token = self._current_token()

        if token.type == "NUMBER":
            self._advance()
            return Literal(value=_to_number(token.value))

        if token.type == "STRING":
            self._advance()
            return Literal(value=token.value)

        if token.type == "KEYWORD" and token.value in _KEYWORD_LITERALS:
            self._advance()
            return Literal(value=_KEYWORD_LITERALS[token.value])

        if token.type == "IDENTIFIER":
            self._advance()
            return Identifier(name=token.value)

        if self._match_punct("("):
            expr = self._parse_expression()
            self._expect_punct(")", "Expected ')' after grouped expression")
            return expr

        if self._match_punct("["):
            items: List[Node] = []
            if not self._match_punct("]"):
                items.append(self._parse_expression())
                while self._match_punct(","):
                    items.append(self._parse_expression())
                self._expect_punct("]", "Expected ']' after array items")
            return ArrayLiteral(items=tuple(items))

        if token.type == "EOF":
            self._error("Unexpected end of expression", token)
        self._error(f"Unexpected token '{token.value}'", token)

    # Token helpers

    def _current_token(self) -> Token:
        if self._position >= len(self._tokens):
            return Token(type="EOF", value="", position=len(self._text))
        return self._tokens[self._position]

    def _is_at_end(self) -> bool:
        return self._current_token().type == "EOF"

    def _advance(self) -> Token:
        token = self._current_token()
        if not self._is_at_end():
            self._position += 1
        return token

    def _match_operator(self, *operators: str) -> str | None:
        current = self._current_token()
        if current.type == "OPERATOR" and current.value in operators:
            self._advance()
            return current.value
        return None

    def _match_keyword(self, keyword: str) -> bool:
        current = self._current_token()
        if current.type == "KEYWORD" and current.value == keyword:
            self._advance()
            return True
        return False

    def _match_punct(self, symbol: str) -> bool:
        current = self._current_token()
        if current.type == "PUNCT" and current.value == symbol:
            self._advance()
            return True
        return False

    def _expect_punct(self, symbol: str, message: str) -> None:
        if not self._match_punct(symbol):
            self._error(message, self._current_token())

    def _error(self, message: str, token: Token):  # type: ignore[no-untyped-def]
        raise ExpressionSyntaxError(self._text, message, token.position)


def _to_number(text: str) -> int | float:
    if any(ch in text for ch in ".eE"):
        return float(text)
    return int(text)


@lru_cache(maxsize=2048)
def parse_expression(text: str) -> Node:
    """Parse ``text`` into an AST (cached per distinct text).

    Surrounding whitespace is skipped by the lexer; errors name ``text``
    exactly as given, with positions counted from its first character.
    """
    return ExpressionParser().parse(text)


__all__ = ["ExpressionParser", "parse_expression"]
