"""Scope frames. Each lexical scope gets one Environment, chained to the scope that was active when it started."""

from cinder.lang.error import EvalError


class Environment:
    """Lookup table of declared variables. The frame without an enclosing frame is the global scope, where both
    lookups and assignments stop searching.
    """

    def __init__(self, enclosing=None):
        self.values = {}             # name: value
        self.enclosing = enclosing   # parent scope, None for the global scope

    @property
    def is_global(self):
        return self.enclosing is None

    def define(self, name, value):
        """Binds name in this frame, replacing any earlier binding of the same name in this frame."""
        self.values[name] = value

    def resolve(self, name):
        """Returns the nearest frame (this one or an enclosing one) that binds name, or None."""
        env = self
        while env is not None:
            if name in env.values:
                return env
            env = env.enclosing
        return None

    def get(self, token):
        """Returns the value bound to token's name. Raises EvalError if it is not bound anywhere up to global."""
        env = self.resolve(token.lexeme)
        if env is None:
            raise EvalError(f"Undefined variable '{token.lexeme}'.")
        return env.values[token.lexeme]

    def assign(self, token, value):
        """Rebinds token's name in the frame where it was declared. Never creates a new binding."""
        env = self.resolve(token.lexeme)
        if env is None:
            raise EvalError(f"Undefined variable '{token.lexeme}'.")
        env.values[token.lexeme] = value

    def __contains__(self, name):
        return self.resolve(name) is not None

    def __repr__(self):
        return f"Environment({self.values!r}, global={self.is_global})"
