import unittest

from tinycalc.lang.environment import Environment
from tinycalc.lang.error import EvalError, UnboundVariable


class EnvironmentTestCase(unittest.TestCase):

    def test_assign(self):
        env = Environment()
        env.assign("x", 5)
        self.assertEqual(5, env.lookup("x"))

        env.assign("x", -2)
        self.assertEqual(-2, env.lookup("x"))
        self.assertEqual(1, len(env))

    def test_unbound(self):
        env = Environment()
        with self.assertRaises(UnboundVariable) as context:
            env.lookup("undefined")
        self.assertEqual("undefined", context.exception.name)
        self.assertIsInstance(context.exception, EvalError)
        self.assertNotIn("undefined", env)

    def test_items(self):
        env = Environment()
        for name, value in [("b", 2), ("a", 1), ("c", 3)]:
            env.assign(name, value)
        self.assertEqual([("a", 1), ("b", 2), ("c", 3)], env.items())
        self.assertIn("a", env)

    def test_independent(self):
        first, second = Environment(), Environment()
        first.assign("x", 1)
        self.assertRaises(UnboundVariable, second.lookup, "x")


if __name__ == '__main__':
    unittest.main()
