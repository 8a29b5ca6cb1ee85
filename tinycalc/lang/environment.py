from tinycalc.lang.error import UnboundVariable


class Environment:
    """Bindings of variable names to their last assigned values. Bindings are never removed."""

    def __init__(self):
        self._bindings = {}

    def assign(self, name, value):
        self._bindings[name] = value

    def lookup(self, name):
        try:
            return self._bindings[name]
        except KeyError:
            raise UnboundVariable(name) from None

    def items(self):
        """(name, value) pairs sorted by name."""
        return sorted(self._bindings.items())

    def __contains__(self, name):
        return name in self._bindings

    def __len__(self):
        return len(self._bindings)

    def __repr__(self):
        return f"Environment({dict(self.items())})"
