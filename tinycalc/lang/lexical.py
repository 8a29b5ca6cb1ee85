"""Lexical analysis for the tinycalc language: converts a line of text into a flat list of Tokens.

Token grammar:

```
<number>     ::= [0-9]+          ; ASCII digits only, maximal run
<identifier> ::= [a-zA-Z]+       ; ASCII letters only, maximal run (a digit ends it: "ab1" is "ab" then "1")
<symbol>     ::= "+" | "-" | "*" | "(" | ")" | "="
```

Whitespace between tokens is skipped. Any other character is a LexError, and tokenizing is atomic: either the whole
line yields tokens or nothing is returned.
"""

import string
from dataclasses import dataclass, field
from enum import Enum

from tinycalc.lang.error import LexError


class TokenType(Enum):
    NUMBER = "Number"
    IDENTIFIER = "Identifier"
    PLUS = "Plus"
    MINUS = "Minus"
    TIMES = "Times"
    LPAREN = "LeftParen"
    RPAREN = "RightParen"
    ASSIGN = "Assign"

    def __repr__(self):
        return self.value


@dataclass(frozen=True)
class Token:
    """A classified lexical unit. pos is only used for error display, so two tokens with different positions are
    still equal.
    """
    kind: TokenType
    text: str
    pos: int = field(default=0, compare=False)

    def __repr__(self):
        if self.kind in (TokenType.NUMBER, TokenType.IDENTIFIER):
            return f"{self.kind.value}({self.text!r})"
        return self.kind.value


class Lexer:
    """Cursor over a single line of source text."""
    SYMBOLS = {
        "+": TokenType.PLUS,
        "-": TokenType.MINUS,
        "*": TokenType.TIMES,
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        "=": TokenType.ASSIGN,
    }

    def __init__(self, text):
        self.text = text
        self.pos = 0

    @property
    def current(self):
        return self.text[self.pos] if self.pos < len(self.text) else None

    def advance(self):
        self.pos += 1

    def run(self, chars, token_type):
        """Consumes a maximal run of characters in chars and returns it as a token."""
        start = self.pos
        while self.current is not None and self.current in chars:
            self.advance()
        return Token(token_type, self.text[start:self.pos], start)

    def generate_tokens(self):
        tokens = []
        while self.current is not None:
            char = self.current

            if char.isspace():
                self.advance()
            elif char in string.digits:
                tokens.append(self.run(string.digits, TokenType.NUMBER))
            elif char in string.ascii_letters:
                tokens.append(self.run(string.ascii_letters, TokenType.IDENTIFIER))
            elif char in Lexer.SYMBOLS:
                tokens.append(Token(Lexer.SYMBOLS[char], char, self.pos))
                self.advance()
            else:
                raise LexError(self.text, char, self.pos)

        return tokens


def tokenize(source):
    """Returns list of Tokens in source. Raises LexError on the first unrecognized character."""
    return Lexer(source).generate_tokens()
