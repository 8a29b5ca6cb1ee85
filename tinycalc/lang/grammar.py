"""Recursive-descent parser for the tinycalc language. Builds an expression tree (see tree.py) from a list of Tokens.

The grammar has a single level of binary operators: there is no precedence and no chaining, so `1 + 2 + 3` and
`2 * 3 + 4` are both errors. Assignment is the only right-associative form.

```
<term>       ::= <number>                      ; NumberLiteral
               | <identifier>                  ; VariableReference
               | "(" <expression> ")"
<expression> ::= <term>
               | <term> ("+" | "-" | "*") <term>  ; BinaryOp
               | <term> "=" <expression>          ; Assignment, target checked during evaluation
```
"""

from tinycalc.lang import numerical
from tinycalc.lang.error import ParseError
from tinycalc.lang.lexical import TokenType
from tinycalc.lang.tree import Assignment, BinaryOp, NumberLiteral, Operator, VariableReference


class Parser:
    """Cursor over a list of Tokens with one token of lookahead."""
    RECURSION_LIMIT = 100  # max number of nested expressions (parenthesized or assigned)
    OPERATORS = {
        TokenType.PLUS: Operator.ADD,
        TokenType.MINUS: Operator.SUBTRACT,
        TokenType.TIMES: Operator.MULTIPLY,
    }

    def __init__(self, tokens, source=None, max_depth=None):
        """source is the line tokens came from. It is only used for error messages: if it is None, errors are
        reported against the token texts and without diagnosis.
        """
        self.tokens = list(tokens)
        self.source = source
        self.max_depth = Parser.RECURSION_LIMIT if max_depth is None else max_depth
        self.n = 0

    def accept(self, token_type):
        """If the next token is of token_type, consumes it and returns True."""
        if self.n < len(self.tokens) and self.tokens[self.n].kind is token_type:
            self.n += 1
            return True
        return False

    def last(self):
        """Last consumed token."""
        return self.tokens[self.n - 1]

    def at_end(self):
        return self.n == len(self.tokens)

    def error(self, msg, snippets=(), start=None, end=None):
        """Returns a ParseError for msg. The first placeholder in msg is always the line, and start/end is the span of
        the offending text in the line (defaults to the end of the line).
        """
        if self.source is None:
            line = " ".join(token.text for token in self.tokens)
            return ParseError(msg, (line, *snippets), diagnosis=False)

        start = len(self.source) if start is None else start
        end = start + 1 if end is None else end
        return ParseError(msg, (self.source, *snippets), start=start, end=end)

    def token_error(self, msg, token, snippets=()):
        return self.error(msg, snippets, token.pos, token.pos + len(token.text))

    def parse(self):
        """Parses a single expression that must span all tokens."""
        expr = self.expression(0)
        if not self.at_end():
            trailing = self.tokens[self.n]
            end = len(self.source) if self.source is not None else None
            raise self.error("'{}' has unprocessed tokens after '{}'", [repr(self.last())], trailing.pos, end)
        return expr

    def term(self, depth):
        if self.accept(TokenType.NUMBER):
            token = self.last()
            try:
                return NumberLiteral(numerical.number(token.text))
            except ValueError:
                raise self.token_error("'{}' has out of range number '{}'", token, [token.text])

        elif self.accept(TokenType.IDENTIFIER):
            return VariableReference(self.last().text)

        elif self.accept(TokenType.LPAREN):
            lparen = self.last()
            expr = self.expression(depth + 1)
            if not self.accept(TokenType.RPAREN):
                raise self.token_error("'{}' has '(' not closed by ')': found '({}'", lparen, [expr.expr])
            return expr

        elif self.at_end():
            raise self.error("'{}' ended where a number, name, or '(' was expected")

        token = self.tokens[self.n]
        raise self.token_error("'{}' cannot process token '{}'", token, [token.text])

    def expression(self, depth):
        if depth >= self.max_depth:
            if self.at_end():
                raise self.error("'{}' exceeds maximum nesting depth of {}", [self.max_depth])
            raise self.token_error("'{}' exceeds maximum nesting depth of {}", self.tokens[self.n], [self.max_depth])

        left = self.term(depth)

        for token_type, operator in Parser.OPERATORS.items():
            if self.accept(token_type):
                return BinaryOp(operator, left, self.term(depth))

        if self.accept(TokenType.ASSIGN):
            return Assignment(left, self.expression(depth + 1))

        return left


def parse(tokens, source=None, max_depth=None):
    """Returns the expression tree for tokens. Raises ParseError if tokens are not a single valid expression."""
    return Parser(tokens, source, max_depth).parse()
