"""Lexical analysis for the cinder language. The scanner groups the bytes of a readable binary source into tokens:

```
<number>     ::= <digit>+ ( "." <digit>* )?      ; no sign, no exponent, no leading "."
<string>     ::= '"' <any byte but '"'>* '"'     ; may span lines
<identifier> ::= <letter> ( <letter> | <digit> )*
<comment>    ::= "//" <any byte but newline>*
```

Lexical errors never stop the scan: they are reported through the error callback and scanning carries on with the
next byte. Only a failing read (anything but end of stream) escapes Scanner.scan.
"""

from cinder.lang.tokens import KEYWORDS, Token, TokenType


class Scanner:
    """Scans one unit of source into a list of tokens terminated by an EOF token. A single Scanner is reused for every
    run of a session, so all state is reset at the start of scan.
    """
    SINGLE = {
        b"(": TokenType.LEFT_PAREN,
        b")": TokenType.RIGHT_PAREN,
        b"{": TokenType.LEFT_BRACE,
        b"}": TokenType.RIGHT_BRACE,
        b",": TokenType.COMMA,
        b"-": TokenType.MINUS,
        b"+": TokenType.PLUS,
        b";": TokenType.SEMICOLON,
        b"*": TokenType.STAR,
    }
    DOUBLE = {  # char: (type alone, type when followed by "=")
        b"!": (TokenType.BANG, TokenType.BANG_EQUAL),
        b"=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
        b">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
        b"<": (TokenType.LESS, TokenType.LESS_EQUAL),
    }
    WHITESPACE = (b" ", b"\r", b"\t")

    def __init__(self, error_handler):
        self.error_handler = error_handler  # called with (line, where, msg)

        self.source = None
        self.tokens = []
        self.lexeme = bytearray()  # partial lexeme
        self.line = 1
        self.char = b""            # most recently consumed byte
        self._peeked = None        # one byte of lookahead, b"" at end of source

    def reset(self):
        self.tokens = []
        self.lexeme = bytearray()
        self.line = 1
        self.char = b""
        self._peeked = None

    def scan(self, source):
        """Returns the tokens of source, a binary stream. OSErrors raised while reading are not caught."""
        self.reset()
        self.source = source

        while True:
            self.lexeme = bytearray()
            if not self.advance():
                self.add_token(TokenType.EOF)
                return self.tokens

            self.scan_char()

    def peek(self):
        """Returns the next byte without consuming it (b"" at end of source)."""
        if self._peeked is None:
            self._peeked = self.source.read(1) or b""
        return self._peeked

    def advance(self):
        """Consumes the next byte into the current lexeme. Returns False at end of source."""
        char = self.peek()
        if not char:
            return False

        self._peeked = None
        self.char = char
        self.lexeme += char
        return True

    def match(self, expected):
        """Consumes the next byte only if it is expected."""
        if self.peek() == expected:
            self.advance()
            return True
        return False

    def text(self):
        """The current lexeme. Non-ASCII bytes only reach a token inside a string literal, which string() validates."""
        return self.lexeme.decode("utf-8")

    def add_token(self, token_type, literal=None):
        self.tokens.append(Token(token_type, self.text(), literal, self.line))

    def scan_char(self):
        """Dispatches on the byte that was just consumed."""
        char = self.char

        if char in Scanner.SINGLE:
            self.add_token(Scanner.SINGLE[char])

        elif char in Scanner.DOUBLE:
            alone, with_equal = Scanner.DOUBLE[char]
            self.add_token(with_equal if self.match(b"=") else alone)

        elif char == b"/":
            if self.match(b"/"):
                self.comment()
            else:
                self.add_token(TokenType.SLASH)

        elif char in Scanner.WHITESPACE:
            pass

        elif char == b"\n":
            self.line += 1

        elif char == b'"':
            self.string()

        elif char.isdigit():
            self.number()

        elif char.isalpha():
            self.identifier()

        else:
            self.error_handler(self.line, "", "Unexpected character.")

    def comment(self):
        """Consumes up to, but not including, the next newline."""
        while self.peek() not in (b"\n", b""):
            self.advance()

    def string(self):
        """Consumes a string literal including its closing quote. Newlines inside the literal still count lines."""
        while self.peek() != b'"':
            if not self.peek():
                self.error_handler(self.line, "", "Unterminated string.")
                return

            if self.peek() == b"\n":
                self.line += 1
            self.advance()

        self.advance()  # closing "
        try:
            literal = self.text()[1:-1]
        except UnicodeDecodeError:
            self.error_handler(self.line, "", "Invalid UTF-8 in string.")
            return
        self.add_token(TokenType.STRING, literal)

    def number(self):
        while self.peek().isdigit():
            self.advance()

        if self.match(b"."):
            while self.peek().isdigit():
                self.advance()

        self.add_token(TokenType.NUMBER, float(self.text()))

    def identifier(self):
        while self.peek().isalnum():
            self.advance()

        self.add_token(KEYWORDS.get(self.text(), TokenType.IDENTIFIER))
