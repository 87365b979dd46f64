"""Session control for the cinder language. A session sequences scan -> parse -> execute for every unit of source it
is given (a whole file, or one REPL line) against a global environment that lives as long as the session does, so
variables declared by one run are visible to the next.
"""

import io
import logging
import sys

from cinder.lang.environment import Environment
from cinder.lang.error import ErrorHandler, EvalError
from cinder.lang.grammar import Parser
from cinder.lang.lexical import Scanner
from cinder.lang.nodes import execute

logger = logging.getLogger(__name__)


class Session:
    """Governs a cinder session: owns its scanner, parser, global scope and output sink."""

    def __init__(self, out=None, color=None):
        if out is None:
            out = sys.stdout

        self.out = out
        self.error_handler = ErrorHandler(out, color)
        self.scanner = Scanner(self.error_handler)
        self.parser = Parser(self.error_handler)
        self.environment = Environment()  # global scope, never reset

    @property
    def had_error(self):
        """Whether the last run reported a scan/parse error (and so executed nothing)."""
        return self.error_handler.had_error

    @property
    def had_runtime_error(self):
        return self.error_handler.had_runtime_error

    def run(self, source):
        """Runs one unit of source. source is a readable binary stream; bytes and str are accepted for convenience.

        Scan and parse errors are reported and nothing is executed. A runtime error is reported and stops the run,
        keeping the effects of the statements that already ran. OSErrors raised while reading source propagate.
        """
        if isinstance(source, str):
            source = source.encode("utf-8")
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(source)

        self.error_handler.reset()

        tokens = self.scanner.scan(source)
        logger.debug("scanned %d token(s)", len(tokens))
        if self.had_error:
            logger.debug("scan errors reported, skipping parse")
            return

        statements = self.parser.parse(tokens)
        logger.debug("parsed %d statement(s)", len(statements))
        if self.had_error:
            logger.debug("parse errors reported, skipping execution")
            return

        try:
            for stmt in statements:
                execute(stmt, self.out, self.environment)
        except EvalError as error:
            logger.debug("runtime error: %s", error.msg)
            self.error_handler.throw(error)

    def run_file(self, path):
        """Runs the whole file at path as one unit of source."""
        logger.debug("running file '%s'", path)
        with open(path, "rb") as file:
            self.run(file)
