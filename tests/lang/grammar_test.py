import io
import unittest

from cinder.lang.grammar import Parser
from cinder.lang.lexical import Scanner
from cinder.lang.nodes import (Assign, Binary, BlockStmt, ExprStmt, Grouping, IfStmt, Literal, Logical, NoOpStmt,
                               PrintStmt, Unary, Variable, VarStmt)


class Recorder:

    def __init__(self):
        self.errors = []

    def __call__(self, line, where, msg):
        self.errors.append((line, where, msg))


def parse(source):
    errors = Recorder()
    tokens = Scanner(errors).scan(io.BytesIO(source.encode()))
    return Parser(errors).parse(tokens), errors.errors


def show(expr):
    """Parenthesized prefix form of an expression, for comparing tree shapes."""
    if isinstance(expr, Literal):
        return repr(expr.value)
    elif isinstance(expr, Variable):
        return expr.name.lexeme
    elif isinstance(expr, Grouping):
        return f"(group {show(expr.expression)})"
    elif isinstance(expr, Unary):
        return f"({expr.op.lexeme} {show(expr.right)})"
    elif isinstance(expr, (Binary, Logical)):
        return f"({expr.op.lexeme} {show(expr.left)} {show(expr.right)})"
    elif isinstance(expr, Assign):
        return f"(= {expr.name.lexeme} {show(expr.value)})"
    raise TypeError(expr)


def expression(source):
    statements, errors = parse(source + ";")
    assert not errors, errors
    return show(statements[0].expression)


class ExpressionTestCase(unittest.TestCase):

    def test_precedence(self):
        cases = {
            "1 + 2 * 3": "(+ 1.0 (* 2.0 3.0))",
            "(1 + 2) * 3": "(* (group (+ 1.0 2.0)) 3.0)",
            "-1 - -2": "(- (- 1.0) (- 2.0))",
            "!true == false": "(== (! True) False)",
            "1 < 2 == 3 >= 4": "(== (< 1.0 2.0) (>= 3.0 4.0))",
            "a or b and c": "(or a (and b c))",
            "a and b == c": "(and a (== b c))",
            "x = 1 + 2": "(= x (+ 1.0 2.0))",
            "x = y or z": "(= x (or y z))",
            '"a" + "b"': "(+ 'a' 'b')",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, expression(case), case)

    def test_left_associative(self):
        cases = {
            "1 - 2 - 3": "(- (- 1.0 2.0) 3.0)",
            "8 / 4 / 2": "(/ (/ 8.0 4.0) 2.0)",
            "a == b != c": "(!= (== a b) c)",
            "a or b or c": "(or (or a b) c)",
            "a and b and c": "(and (and a b) c)",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, expression(case), case)

    def test_right_associative(self):
        self.assertEqual("(= a (= b (= c 1.0)))", expression("a = b = c = 1"))
        self.assertEqual("(! (! x))", expression("!!x"))

    def test_invalid_assignment_target(self):
        should_fail = ["1 = 2;", "(a) = 2;", "a + b = c;", "-a = 1;"]
        for case in should_fail:
            statements, errors = parse(case)
            self.assertEqual(1, len(errors), case)
            self.assertEqual("Invalid assignment target.", errors[0][2], case)
            self.assertEqual("at '='", errors[0][1], case)
            self.assertEqual(1, len(statements), case)  # parsing carries on with the left-hand side

        statements, __ = parse("1 = 2;")
        self.assertEqual(ExprStmt, type(statements[0]))
        self.assertEqual(Literal(1.0), statements[0].expression)


class StatementTestCase(unittest.TestCase):

    def test_statements(self):
        statements, errors = parse("print 1; x; var y = 2; var z; { print y; } if (y) print 1;")
        self.assertEqual([], errors)
        self.assertEqual([PrintStmt, ExprStmt, VarStmt, VarStmt, BlockStmt, IfStmt], [type(s) for s in statements])

    def test_var_without_initializer(self):
        statements, __ = parse("var z;")
        self.assertEqual("z", statements[0].name.lexeme)
        self.assertEqual(Literal(None), statements[0].initializer)

    def test_if_else(self):
        statements, __ = parse("if (a) print 1; else print 2;")
        stmt = statements[0]
        self.assertEqual("a", show(stmt.condition))
        self.assertIsInstance(stmt.then_branch, PrintStmt)
        self.assertIsInstance(stmt.else_branch, PrintStmt)

        statements, __ = parse("if (a) print 1;")
        self.assertEqual(NoOpStmt(), statements[0].else_branch)

        # else binds to the nearest if
        statements, __ = parse("if (a) if (b) print 1; else print 2;")
        outer = statements[0]
        self.assertEqual(NoOpStmt(), outer.else_branch)
        self.assertIsInstance(outer.then_branch.else_branch, PrintStmt)

    def test_nested_blocks(self):
        statements, errors = parse("{ var a = 1; { var b = 2; } print a; }")
        self.assertEqual([], errors)

        block = statements[0]
        self.assertEqual([VarStmt, BlockStmt, PrintStmt], [type(s) for s in block.statements])
        self.assertEqual([VarStmt], [type(s) for s in block.statements[1].statements])

    def test_empty_program(self):
        should_pass = ["", "   ", "// comment only\n"]
        for case in should_pass:
            self.assertEqual(([], []), parse(case), case)


class ErrorRecoveryTestCase(unittest.TestCase):

    def test_messages(self):
        cases = {
            "print 1": (1, "at end", "Expect ';' after value."),
            "1 + 2": (1, "at end", "Expect ';' after expression."),
            "var = 1;": (1, "at '='", "Expect variable name."),
            "var x = 1": (1, "at end", "Expect ';' after variable declaration."),
            "if x) print 1;": (1, "at 'x'", "Expect '(' after 'if'."),
            "if (x print 1;": (1, "at 'print'", "Expect ')' after if condition."),
            "{ print 1;": (1, "at end", "Expect '}' after block."),
            "(1 + 2;": (1, "at ';'", "Expect ')' after expression."),
            "print ;": (1, "at ';'", "Expect expression."),
            "\n\nprint +;": (3, "at '+'", "Expect expression."),
        }
        for case, expected in cases.items():
            __, errors = parse(case)
            self.assertEqual([expected], errors, case)

    def test_reserved_keywords(self):
        for keyword in ["for", "while", "fun", "return"]:
            statements, errors = parse(f"{keyword} (x) print 1;")
            self.assertEqual((1, f"at '{keyword}'", f"'{keyword}' is reserved but not supported."), errors[0], keyword)

    def test_synchronize(self):
        statements, errors = parse("print ;\nvar x = 1;\n1 +;\nprint x;\nvar = 3;\nprint 2;")
        self.assertEqual([(1, "at ';'", "Expect expression."),
                          (3, "at ';'", "Expect expression."),
                          (5, "at '='", "Expect variable name.")], errors)
        self.assertEqual([VarStmt, PrintStmt, PrintStmt], [type(s) for s in statements])

    def test_synchronize_at_statement_keyword(self):
        statements, errors = parse("1 + + print 2;")
        self.assertEqual([(1, "at '+'", "Expect expression.")], errors)
        self.assertEqual([PrintStmt], [type(s) for s in statements])

    def test_parser_resets(self):
        errors = Recorder()
        scanner, parser = Scanner(errors), Parser(errors)

        parser.parse(scanner.scan(io.BytesIO(b"print 1; print 2;")))
        statements = parser.parse(scanner.scan(io.BytesIO(b"print 3;")))

        self.assertEqual(1, len(statements))
        self.assertEqual(Literal(3.0), statements[0].expression)


if __name__ == '__main__':
    unittest.main()
