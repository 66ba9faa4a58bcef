"""
Lexer for template expressions.

Splits an expression such as ``user.age >= 18 && !user.banned`` into tokens:
- NUMBER, STRING literals
- IDENTIFIER (``$`` allowed, so ``$root`` and ``$index`` are identifiers)
- KEYWORD (true, false, null, undefined, and, or, not)
- OPERATOR (comparison, logical, arithmetic, ``?``/``:``)
- PUNCT (parentheses, brackets, dot, comma)
- EOF
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from stencil.core.exceptions import ExpressionSyntaxError


@dataclass(frozen=True)
class Token:
    """
    Expression token.

    Attributes:
        type: Token type (NUMBER, STRING, IDENTIFIER, KEYWORD, OPERATOR, PUNCT, EOF)
        value: Token text (decoded value for STRING)
        position: Offset in the source expression
    """
    type: str
    value: str
    position: int

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r}, pos={self.position})"


_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    "\\": "\\",
    "'": "'",
    '"': '"',
}


def _unescape(body: str) -> str:
    out: List[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != "\\" or i + 1 >= len(body):
            out.append(ch)
            i += 1
            continue
        nxt = body[i + 1]
        if nxt == "u" and re.fullmatch(r"[0-9a-fA-F]{4}", body[i + 2 : i + 6] or ""):
            out.append(chr(int(body[i + 2 : i + 6], 16)))
            i += 6
            continue
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


class ExpressionLexer:
    """
    Lexer turning expression text into a token list.

    Multi-character operators are listed before their prefixes so the
    longest operator always wins.
    """

    # (regex_pattern, token_type, ignore_flag)
    TOKEN_SPECS = [
        (r"\s+", "WHITESPACE", True),
        (r"\d+(?:\.\d+)?(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?", "NUMBER", False),
        (r'"(?:[^"\\]|\\.)*"' + r"|'(?:[^'\\]|\\.)*'", "STRING", False),
        (r"[A-Za-z_$][\w$]*", "IDENTIFIER", False),
        (r"===|!==|==|!=|<=|>=|&&|\|\||\?\?|[<>+\-*/%!?:]", "OPERATOR", False),
        (r"[()\[\].,]", "PUNCT", False),
        (r".", "UNKNOWN", False),
    ]

    KEYWORDS = {"true", "false", "null", "undefined", "and", "or", "not"}

    def __init__(self) -> None:
        self._compiled_patterns = [
            (re.compile(pattern, re.DOTALL), token_type, ignore)
            for pattern, token_type, ignore in self.TOKEN_SPECS
        ]

    def tokenize(self, text: str) -> List[Token]:
        """
        Split ``text`` into tokens, ending with an EOF token.

        Raises:
            ExpressionSyntaxError: On an unexpected character or an
                unterminated string literal
        """
        tokens: List[Token] = []
        position = 0

        while position < len(text):
            for pattern, token_type, ignore in self._compiled_patterns:
                match = pattern.match(text, position)
                if not match:
                    continue
                value = match.group(0)
                if token_type == "UNKNOWN":
                    if value in "\"'":
                        raise ExpressionSyntaxError(text, "Unterminated string literal", position)
                    raise ExpressionSyntaxError(text, f"Unexpected character '{value}'", position)
                if not ignore:
                    final_type = token_type
                    if token_type == "IDENTIFIER" and value in self.KEYWORDS:
                        final_type = "KEYWORD"
                    elif token_type == "STRING":
                        value = _unescape(value[1:-1])
                    tokens.append(Token(type=final_type, value=value, position=position))
                position = match.end()
                break

        tokens.append(Token(type="EOF", value="", position=position))
        return tokens


__all__ = ["Token", "ExpressionLexer"]
