"""Error handling for the cinder language. There are two tiers of language errors:

1. Compile-time errors (scanning and parsing) are reported through ErrorHandler as they are found. Scanning and
   parsing keep going so that as many errors as possible are surfaced in one pass, but if any were reported the
   statements of that run are never executed.
2. Runtime errors are raised as EvalError, abort the rest of the current run and are written as their bare message.

Anything else that makes it all the way to ErrorHandler's context manager is either an I/O failure (reported and
fatal) or assumed to be an internal issue.
"""

import sys

from termcolor import colored


class LangError(Exception):
    """Base class for errors raised by the cinder language itself."""

    def __init__(self, msg):
        super().__init__(msg)
        self.msg = msg


class ParseError(LangError):
    """Raised inside the parser to unwind to the nearest statement boundary. Never escapes Parser.parse."""

    def __init__(self, token, msg):
        super().__init__(msg)
        self.token = token


class EvalError(LangError):
    """Runtime error: mismatched operand types, undefined variables, etc."""


class ErrorHandler:
    """Reports compile-time and runtime errors to an output sink. Instances are callable with (line, where, msg) so
    they can be handed to the scanner and parser as their error callback.

    Also a context manager that reports I/O failures and internal errors raised while running the interpreter.
    """
    ERROR = "red"
    INTERNAL_EXIT = 70

    def __init__(self, out=None, color=None):
        if out is None:
            out = sys.stdout
        if color is None:
            color = hasattr(out, "isatty") and out.isatty()

        self.out = out
        self.color = color

        self.had_error = False          # compile-time tier
        self.had_runtime_error = False  # runtime tier

    def reset(self):
        """Clears both error flags. Called at the start of every run."""
        self.had_error = False
        self.had_runtime_error = False

    def colored(self, text, color=None, attrs=None):
        """Wraps termcolor.colored so that nothing is colored when color is turned off."""
        if not self.color:
            return text
        return colored(text, color, attrs=attrs)

    @staticmethod
    def format(line, where, msg):
        """Returns "[line N] Error <where>: msg". where is "at end", "at '<lexeme>'" or empty."""
        return f"[line {line}] Error {where}: {msg}"

    def report(self, line, where, msg):
        """Writes a compile-time error and marks this run as failed."""
        self.had_error = True
        self.out.write(self.colored(ErrorHandler.format(line, where, msg), ErrorHandler.ERROR, attrs=["bold"]) + "\n")

    __call__ = report

    def throw(self, error):
        """Writes a runtime error as its bare message. error must be an EvalError."""
        self.had_runtime_error = True
        self.out.write(self.colored(error.msg, ErrorHandler.ERROR) + "\n")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or exc_type is SystemExit:
            return False

        if issubclass(exc_type, KeyboardInterrupt):
            self.out.write(self.colored("keyboard interrupt", ErrorHandler.ERROR) + "\n")
            return True

        if issubclass(exc_type, OSError):
            self.out.write(self.colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + f"{exc_val}\n")
            sys.exit(1)

        msg = f"unknown error: '{exc_type.__name__}: {exc_val}'"
        self.out.write(self.colored("[internal] error: ", ErrorHandler.ERROR, attrs=["bold"]) + msg + "\n")
        sys.exit(ErrorHandler.INTERNAL_EXIT)
