"""Handles interactive/command-line mode for the tinycalc interpreter. Uses cmd as backend.

Every line is an expression except lines starting with ':', which are shell commands (`:help`, `:vars`, `:exit`).
Commands need the prefix so that they never shadow a variable named e.g. `help`.
"""

import cmd

from termcolor import colored

from tinycalc.lang.error import GenericException


class Shell(cmd.Cmd):
    """tinycalc interpreter shell. An empty line or EOF exits."""
    intro = "tinycalc :: integer expression evaluator\nType ':help' for more information, or an empty line to exit."
    prompt = "calc > "
    COMMAND_PREFIX = ":"
    END_OF_INPUT = "\0EOF"  # cannot be lexed, so never confused with a line reading 'EOF'

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess

    def cmdloop(self, intro=None):
        """Same loop as cmd.Cmd.cmdloop, except that end of input is reported as END_OF_INPUT instead of 'EOF'."""
        if self.use_rawinput:
            try:
                import readline  # noqa: F401 -- line editing for input()
            except ImportError:
                pass

        self.preloop()
        if intro is not None:
            self.intro = intro
        if self.intro:
            self.stdout.write(str(self.intro) + "\n")

        stop = None
        while not stop:
            line = self.precmd(self.readline())
            stop = self.onecmd(line)
            stop = self.postcmd(stop, line)
        self.postloop()

    def readline(self):
        """Reads the next line without its newline, or END_OF_INPUT."""
        if self.cmdqueue:
            return self.cmdqueue.pop(0)

        if self.use_rawinput:
            try:
                return input(self.prompt)
            except EOFError:
                return Shell.END_OF_INPUT

        self.stdout.write(self.prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        return line.rstrip("\r\n") if line else Shell.END_OF_INPUT

    def onecmd(self, line):
        """Dispatches ':'-prefixed lines to do_* methods and everything else to default."""
        if line == Shell.END_OF_INPUT:
            return self.do_EOF("")

        stripped = line.strip()
        if not stripped:
            return self.emptyline()
        elif stripped.startswith(Shell.COMMAND_PREFIX):
            command, arg, __ = self.parseline(stripped[len(Shell.COMMAND_PREFIX):])
            func = getattr(self, f"do_{command}", None) if command else None
            if func is None:
                with self.sess.error_handler:
                    raise GenericException("unknown command '{}'", stripped, diagnosis=False)
                return False
            return func(arg)
        return self.default(line)

    def default(self, line):
        """Evaluates an arbitrary tinycalc expression and prints its tokens, tree, and value."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.sess.run(line)

            if self.sess.results:
                result = self.sess.pop()
                print(colored("tokens: ", attrs=["bold"]) + repr(result.tokens))
                print(colored("parsed: ", attrs=["bold"]) + repr(result.tree))
                print(result.value)
        return False

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to tinycalc!\n\n"
              "Expressions are made of integers, names, '+', '-', '*', '=' and parentheses. \n"
              "Each expression holds at most one operator outside of parentheses, so write \n"
              "'(1 + 2) + 3' rather than '1 + 2 + 3'.\n\n"
              "Try it out by typing 'x = 5'. This will bind 5 to the name 'x'. Next, try \n"
              "typing 'x * (x - 1)', giving 20 as the result.\n\n"
              "Commands: ':vars' lists bindings, ':exit' (or an empty line) quits.")

    def do_vars(self, arg):
        """Lists every variable binding in the session."""
        for name, value in self.sess.env.items():
            print(f"{colored(name, attrs=['bold'])} = {value}")

    def emptyline(self):
        """An empty line ends the session."""
        return True

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
