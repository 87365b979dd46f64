"""Abstract syntax tree of the cinder language and the tree-walking evaluator over it.

Expressions and statements are closed families of frozen dataclasses. Nodes hold no behaviour: evaluate and execute
dispatch on the node's class, so adding a node means adding a branch to one of them.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from cinder.lang import values
from cinder.lang.environment import Environment
from cinder.lang.tokens import Token, TokenType


class Expr:
    """Superclass of every expression node."""


class Stmt:
    """Superclass of every statement node."""


Value = Optional[Union[float, str, bool]]


# ---------------------------------------------------------------------------------------------------------------------
# Expressions

@dataclass(frozen=True)
class Literal(Expr):
    value: Value


@dataclass(frozen=True)
class Unary(Expr):
    op: Token
    right: Expr


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    op: Token
    right: Expr


@dataclass(frozen=True)
class Logical(Expr):
    """'and'/'or'. Kept apart from Binary because the right operand is only evaluated when needed."""
    left: Expr
    op: Token
    right: Expr


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True)
class Variable(Expr):
    name: Token


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr


# ---------------------------------------------------------------------------------------------------------------------
# Statements

@dataclass(frozen=True)
class ExprStmt(Stmt):
    expression: Expr


@dataclass(frozen=True)
class PrintStmt(Stmt):
    expression: Expr


@dataclass(frozen=True)
class VarStmt(Stmt):
    name: Token
    initializer: Expr = field(default_factory=lambda: Literal(None))


@dataclass(frozen=True)
class AssignStmt(Stmt):
    """Statement form of assignment. The parser produces ExprStmt(Assign(...)) instead, but both behave the same."""
    name: Token
    value: Expr


@dataclass(frozen=True)
class BlockStmt(Stmt):
    statements: List[Stmt]


@dataclass(frozen=True)
class NoOpStmt(Stmt):
    """Stands in for a missing else branch."""


@dataclass(frozen=True)
class IfStmt(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Stmt = field(default_factory=NoOpStmt)


# ---------------------------------------------------------------------------------------------------------------------
# Evaluation

def evaluate(expr, env):
    """Returns the value of expr in env. Raises EvalError on runtime errors."""
    if isinstance(expr, Literal):
        return expr.value

    elif isinstance(expr, Grouping):
        return evaluate(expr.expression, env)

    elif isinstance(expr, Variable):
        return env.get(expr.name)

    elif isinstance(expr, Assign):
        value = evaluate(expr.value, env)
        env.assign(expr.name, value)
        return value

    elif isinstance(expr, Unary):
        right = evaluate(expr.right, env)
        if expr.op.type is TokenType.BANG:
            return not values.is_truthy(right)
        return values.negate(right)

    elif isinstance(expr, Logical):
        left = evaluate(expr.left, env)
        if expr.op.type is TokenType.OR:
            if values.is_truthy(left):
                return left
        elif not values.is_truthy(left):
            return left
        return evaluate(expr.right, env)

    elif isinstance(expr, Binary):
        return _binary(expr, evaluate(expr.left, env), evaluate(expr.right, env))

    raise TypeError(f"cannot evaluate {type(expr).__name__}")


def _binary(expr, left, right):
    op = expr.op.lexeme
    if expr.op.type is TokenType.EQUAL_EQUAL:
        return values.is_equal(left, right)
    elif expr.op.type is TokenType.BANG_EQUAL:
        return not values.is_equal(left, right)
    elif expr.op.type is TokenType.PLUS:
        return values.add(left, right)
    elif op in values.ARITHMETIC:
        return values.arithmetic(op, left, right)
    return values.compare(op, left, right)


def execute(stmt, out, env):
    """Executes stmt in env, writing any output to out. Raises EvalError on runtime errors."""
    if isinstance(stmt, ExprStmt):
        evaluate(stmt.expression, env)

    elif isinstance(stmt, PrintStmt):
        out.write(values.stringify(evaluate(stmt.expression, env)) + "\n")

    elif isinstance(stmt, VarStmt):
        env.define(stmt.name.lexeme, evaluate(stmt.initializer, env))

    elif isinstance(stmt, AssignStmt):
        env.assign(stmt.name, evaluate(stmt.value, env))

    elif isinstance(stmt, BlockStmt):
        execute_block(stmt.statements, out, Environment(enclosing=env))

    elif isinstance(stmt, IfStmt):
        if values.is_truthy(evaluate(stmt.condition, env)):
            execute(stmt.then_branch, out, env)
        else:
            execute(stmt.else_branch, out, env)

    elif not isinstance(stmt, NoOpStmt):
        raise TypeError(f"cannot execute {type(stmt).__name__}")


def execute_block(statements, out, env):
    """Executes statements in order, stopping at the first runtime error."""
    for stmt in statements:
        execute(stmt, out, env)
