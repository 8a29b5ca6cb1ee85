import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from tinycalc.lang.error import ErrorHandler, GenericException, LexError, ParseError, UnboundVariable
from tinycalc.lang.lexical import Token, TokenType
from tinycalc.lang.session import Session
from tinycalc.lang.tree import Assignment, NumberLiteral, VariableReference


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.error_handler = ErrorHandler()
        self.sess = Session(self.error_handler, Session.SH_FILE, cmd_line=True)

    def test_cmd_line_is_not_fatal(self):
        self.assertFalse(self.error_handler.fatal)
        self.assertRaises(GenericException, Session, ErrorHandler(), Session.SH_FILE, cmd_line=False)

    def test_run(self):
        result = self.sess.run("x = 5")
        self.assertEqual(
            [Token(TokenType.IDENTIFIER, "x"), Token(TokenType.ASSIGN, "="), Token(TokenType.NUMBER, "5")],
            result.tokens,
        )
        self.assertEqual(Assignment(VariableReference("x"), NumberLiteral(5)), result.tree)
        self.assertEqual(5, result.value)

        self.assertEqual(10, self.sess.run("x * 2").value)
        self.assertEqual(2, len(self.sess.results))
        self.assertEqual(10, self.sess.pop().value)
        self.assertEqual(2, self.sess.line_num)

    def test_errors(self):
        cases = {"1 @ 2": LexError, "1 + 2 + 3": ParseError, "y": UnboundVariable}
        for case, error in cases.items():
            self.assertRaises(error, self.sess.run, case)
            self.assertEqual((case, self.sess.line_num), self.error_handler.traceback[Session.SH_FILE])
        self.assertEqual([], self.sess.results)

    def test_bindings_survive_errors(self):
        self.sess.run("x = 3")
        self.assertRaises(GenericException, self.sess.run, "x @")
        self.assertRaises(GenericException, self.sess.run, "1 = x = 7")
        self.assertEqual(7, self.sess.run("x").value)
        self.assertEqual(7, self.sess.run("x").value)

    def test_sessions_are_independent(self):
        other = Session(ErrorHandler(), Session.SH_FILE, cmd_line=True)
        self.sess.run("x = 1")
        self.assertRaises(UnboundVariable, other.run, "x")

    def test_max_depth(self):
        sess = Session(ErrorHandler(), Session.SH_FILE, cmd_line=True, max_depth=2)
        self.assertEqual(1, sess.run("(1)").value)
        self.assertRaises(ParseError, sess.run, "((1))")

    def test_trace(self):
        sess = Session(ErrorHandler(trace=True), Session.SH_FILE, cmd_line=True)
        out = io.StringIO()
        with redirect_stdout(out):
            sess.run("x = 1 + 2")
        self.assertIn("1 + 2 -> 3", out.getvalue())
        self.assertIn("x = 1 + 2 -> 3", out.getvalue())


class ScriptTestCase(unittest.TestCase):

    def write_script(self, text):
        fd, path = tempfile.mkstemp(suffix=".calc")
        with os.fdopen(fd, "w", encoding="utf-8") as file:
            file.write(text)
        self.addCleanup(os.remove, path)
        return path

    def test_run_file(self):
        path = self.write_script("x = 4\n\n   \ny = x * x\ny - 1\n")
        out = io.StringIO()
        sess = Session(ErrorHandler(), path, cmd_line=False)
        with redirect_stdout(out):
            sess.run_file()
        self.assertEqual("4\n16\n15\n", out.getvalue())
        self.assertEqual([], sess.results)
        self.assertEqual(15, sess.env.lookup("y") - 1)

    def test_fatal_error(self):
        path = self.write_script("x = 1\nx + y\nx\n")
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as context:
            Session(ErrorHandler(), path, cmd_line=False).run_file()
        self.assertEqual(1, context.exception.code)
        self.assertIn(f"File '{path}', line 2:", out.getvalue())
        self.assertTrue(out.getvalue().startswith("1\n"))

    def test_non_fatal_error(self):
        path = self.write_script("x = 1\nx + y\nx\n")
        error_handler = ErrorHandler(fatal=False)
        out = io.StringIO()
        with redirect_stdout(out):
            Session(error_handler, path, cmd_line=False).run_file()
        self.assertEqual(1, error_handler.errors)
        self.assertTrue(out.getvalue().endswith("1\n"))

    def test_missing_file(self):
        sess = Session(ErrorHandler(), os.path.join(tempfile.gettempdir(), "does", "not", "exist.calc"), cmd_line=False)
        self.assertRaises(GenericException, sess.run_file)


if __name__ == '__main__':
    unittest.main()
