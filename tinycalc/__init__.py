"""Integer expression interpreter.

Basic program flow, one input line at a time:
    1. Lexer: splits the line into a flat list of tokens (see tinycalc/lang/lexical.py)
    2. Parser: builds an expression tree by recursive descent over the tokens
        - For the grammar rules, see tinycalc/lang/grammar.py
    3. Evaluator: walks the tree against the session's environment, which keeps variable bindings across lines

Any stage may raise a tinycalc error (see tinycalc/lang/error.py). It aborts the current line only.
"""

__version__ = "0.1.0"
