"""Recursive-descent parser for the cinder language. Turns the scanner's tokens into statement nodes.

```
<program>     ::= <declaration>* EOF
<declaration> ::= <var_decl> | <statement>
<var_decl>    ::= "var" IDENTIFIER ( "=" <expression> )? ";"
<statement>   ::= <if_stmt> | <print_stmt> | <block> | <expr_stmt>
<if_stmt>     ::= "if" "(" <expression> ")" <statement> ( "else" <statement> )?
<print_stmt>  ::= "print" <expression> ";"
<block>       ::= "{" <declaration>* "}"
<expr_stmt>   ::= <expression> ";"

<expression>  ::= <assignment>
<assignment>  ::= <logic_or> ( "=" <assignment> )?   ; right-associative, target must be a variable
<logic_or>    ::= <logic_and> ( "or" <logic_and> )*
<logic_and>   ::= <equality> ( "and" <equality> )*
<equality>    ::= <comparison> ( ( "!=" | "==" ) <comparison> )*
<comparison>  ::= <term> ( ( ">" | ">=" | "<" | "<=" ) <term> )*
<term>        ::= <factor> ( ( "-" | "+" ) <factor> )*
<factor>      ::= <unary> ( ( "/" | "*" ) <unary> )*
<unary>       ::= ( "!" | "-" ) <unary> | <primary>
<primary>     ::= NUMBER | STRING | "true" | "false" | IDENTIFIER | "(" <expression> ")"
```

"for", "while", "fun" and "return" are keywords without a production: starting a statement with one is a syntax
error.
"""

from cinder.lang.error import ParseError
from cinder.lang.nodes import (Assign, Binary, BlockStmt, ExprStmt, Grouping, IfStmt, Literal, Logical, NoOpStmt,
                               PrintStmt, Unary, Variable, VarStmt)
from cinder.lang.tokens import RESERVED, STATEMENT_START, TokenType


class Parser:
    """Parses a list of tokens into statements. Syntax errors go to the error callback and the parser resynchronizes
    at the next statement boundary, so one pass can report many errors. Callers must check for reported errors before
    executing the result.
    """

    def __init__(self, error_handler):
        self.error_handler = error_handler  # called with (line, where, msg)
        self.tokens = []
        self.current = 0  # index of the next token to be parsed

    def parse(self, tokens):
        """Returns the statements parsed from tokens, which must end with an EOF token. Never raises ParseError."""
        self.tokens = tokens
        self.current = 0

        statements = []
        while not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    # -----------------------------------------------------------------------------------------------------------------
    # Token helpers

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]

    def is_at_end(self):
        return self.peek().type is TokenType.EOF

    def check(self, token_type):
        return not self.is_at_end() and self.peek().type is token_type

    def advance(self):
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def match(self, *token_types):
        """Consumes the next token if it is one of token_types."""
        for token_type in token_types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def consume(self, token_type, msg):
        if self.check(token_type):
            return self.advance()
        raise self.error(self.peek(), msg)

    # -----------------------------------------------------------------------------------------------------------------
    # Errors

    def error(self, token, msg):
        """Reports msg at token and returns a ParseError for the caller to raise if it cannot carry on."""
        where = "at end" if token.type is TokenType.EOF else f"at '{token.lexeme}'"
        self.error_handler(token.line, where, msg)
        return ParseError(token, msg)

    def synchronize(self):
        """Discards tokens until just after a ';' or right before a token that starts a statement."""
        self.advance()

        while not self.is_at_end():
            if self.previous().type is TokenType.SEMICOLON:
                return
            if self.peek().type in STATEMENT_START:
                return
            self.advance()

    # -----------------------------------------------------------------------------------------------------------------
    # Statements

    def declaration(self):
        """Returns the next declaration, or None if it was malformed (after resynchronizing)."""
        try:
            if self.match(TokenType.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError:
            self.synchronize()
            return None

    def var_declaration(self):
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")

        initializer = Literal(None)
        if self.match(TokenType.EQUAL):
            initializer = self.expression()

        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return VarStmt(name, initializer)

    def statement(self):
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.LEFT_BRACE):
            return BlockStmt(self.block())
        if self.peek().type in RESERVED:
            raise self.error(self.peek(), f"'{self.peek().lexeme}' is reserved but not supported.")
        return self.expression_statement()

    def if_statement(self):
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self.statement()
        else_branch = self.statement() if self.match(TokenType.ELSE) else NoOpStmt()
        return IfStmt(condition, then_branch, else_branch)

    def print_statement(self):
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return PrintStmt(value)

    def block(self):
        statements = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)

        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def expression_statement(self):
        expr = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return ExprStmt(expr)

    # -----------------------------------------------------------------------------------------------------------------
    # Expressions

    def expression(self):
        return self.assignment()

    def assignment(self):
        expr = self.logic_or()

        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()

            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            self.error(equals, "Invalid assignment target.")  # reported, but no need to resynchronize

        return expr

    def _left_assoc(self, node, operand, *token_types):
        """Folds operand (op operand)* into a left-leaning chain of node."""
        expr = operand()
        while self.match(*token_types):
            op = self.previous()
            expr = node(expr, op, operand())
        return expr

    def logic_or(self):
        return self._left_assoc(Logical, self.logic_and, TokenType.OR)

    def logic_and(self):
        return self._left_assoc(Logical, self.equality, TokenType.AND)

    def equality(self):
        return self._left_assoc(Binary, self.comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def comparison(self):
        return self._left_assoc(Binary, self.term, TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS,
                                TokenType.LESS_EQUAL)

    def term(self):
        return self._left_assoc(Binary, self.factor, TokenType.MINUS, TokenType.PLUS)

    def factor(self):
        return self._left_assoc(Binary, self.unary, TokenType.SLASH, TokenType.STAR)

    def unary(self):
        if self.match(TokenType.BANG, TokenType.MINUS):
            op = self.previous()
            return Unary(op, self.unary())
        return self.primary()

    def primary(self):
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())

        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        raise self.error(self.peek(), "Expect expression.")
