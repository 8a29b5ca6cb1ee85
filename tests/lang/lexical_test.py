import unittest

from tinycalc.lang.error import LexError
from tinycalc.lang.lexical import Token, TokenType, tokenize


class TokenizeTestCase(unittest.TestCase):

    def test_tokenize(self):
        cases = {
            "12 + foo": [Token(TokenType.NUMBER, "12"), Token(TokenType.PLUS, "+"), Token(TokenType.IDENTIFIER, "foo")],
            "x=5": [Token(TokenType.IDENTIFIER, "x"), Token(TokenType.ASSIGN, "="), Token(TokenType.NUMBER, "5")],
            "(a - b) * 3": [
                Token(TokenType.LPAREN, "("),
                Token(TokenType.IDENTIFIER, "a"),
                Token(TokenType.MINUS, "-"),
                Token(TokenType.IDENTIFIER, "b"),
                Token(TokenType.RPAREN, ")"),
                Token(TokenType.TIMES, "*"),
                Token(TokenType.NUMBER, "3"),
            ],
            "ab1": [Token(TokenType.IDENTIFIER, "ab"), Token(TokenType.NUMBER, "1")],
            "007": [Token(TokenType.NUMBER, "007")],
            "  \t ": [],
            "": [],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, tokenize(case), case)

    def test_positions(self):
        self.assertEqual([0, 3, 5, 9], [token.pos for token in tokenize("12 + foo =")])

    def test_unrecognized(self):
        should_raise = ["@", "1 @ 2", "a_b", "1 / 2", "x := 1", "café", "٣", "1.5"]
        for case in should_raise:
            self.assertRaises(LexError, tokenize, case)

    def test_error_location(self):
        with self.assertRaises(LexError) as context:
            tokenize("1 + 2 @ 3")
        self.assertEqual("@", context.exception.char)
        self.assertEqual(6, context.exception.pos)
        self.assertEqual("1 + 2 @ 3", context.exception.expr)

    def test_repr(self):
        self.assertEqual("[Number('12'), Plus, Identifier('foo')]", repr(tokenize("12 + foo")))


if __name__ == '__main__':
    unittest.main()
