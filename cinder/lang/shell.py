"""Handles interactive/command-line mode for the cinder interpreter. Uses cmd as backend."""

import cmd
import io

from cinder.lang.lexical import Scanner
from cinder.lang.tokens import TokenType


class Shell(cmd.Cmd):
    """cinder interpreter shell. Every complete line is one run of the same session, so variables persist."""
    intro = "cinder interpreter :: Python backend\nType 'help' for more information, 'exit' to quit."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    @staticmethod
    def is_open(source):
        """Whether source opens more '{' or '(' tokens than it closes, i.e. it continues on the next line. Braces in
        strings and comments don't count; lexical errors are left for the run to report.
        """
        tokens = Scanner(lambda line, where, msg: None).scan(io.BytesIO(source.encode("utf-8")))
        types = [token.type for token in tokens]

        if types.count(TokenType.LEFT_BRACE) > types.count(TokenType.RIGHT_BRACE):
            return True
        return types.count(TokenType.LEFT_PAREN) > types.count(TokenType.RIGHT_PAREN)

    def onecmd(self, line):
        """Only 'help', 'exit' and EOF are shell commands; any other line is cinder source. EOF always quits, even
        in the middle of an open block.
        """
        command = line.strip()
        if command == "EOF":
            self._tmp_line = ""
            self.prompt = self._tmp_prompt
            return self.do_EOF("")

        if not self._tmp_line and (command in ("help", "exit") or command.startswith("help ")):
            return super().onecmd(line)
        return self.default(line)

    def default(self, line):
        """Runs a line of cinder source, or buffers it while a block or group is still open."""
        source = self._tmp_line + line + "\n"

        if Shell.is_open(source):
            self._tmp_line = source
            self.prompt = self.secondary_prompt
            return False

        self._tmp_line = ""
        self.prompt = self._tmp_prompt

        if source.strip():
            with self.sess.error_handler:  # a keyboard interrupt only abandons this line
                self.sess.run(source)
        return False

    def do_help(self, arg):
        """Prints a short intro rather than the command docs."""
        print("Welcome to the cinder interpreter!\n\n"
              "cinder is a small C-style language with variables, blocks, if/else and print.\n"
              "Statements end with ';'. Try 'var x = 1 + 2;' and then 'print x * 2;'.\n"
              "Variables declared on one line are visible on the following lines.",
              file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return True

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
