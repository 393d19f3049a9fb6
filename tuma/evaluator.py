from typing import Callable, Dict, Optional, Type

import tuma.ast as ast
from tuma.parser import parse
from tuma.runtime import Environment, Int32Operators, NestingTooDeep, UnboundVariable, UndefinedName


class InterpreterError(Exception):
    """Indicates interpreter error."""


class Evaluator:
    """Evaluates syntax trees."""

    BINARY_OPERATORS: Dict[Type[ast.BinaryOperator], Callable] = {
        ast.Add: Int32Operators.add,
        ast.Sub: Int32Operators.sub,
        ast.Mul: Int32Operators.mul,
    }

    def eval_expr(self, node: ast.Expr, env: Environment) -> int:
        # Left operands of operator chains are unwound in a loop,
        # so long chains like 1+1+...+1 don't grow the stack
        chain = []
        while isinstance(node, ast.BinaryOperator):
            chain.append(node)
            node = node.left
        value = self.eval_operand(node, env)
        for operator in reversed(chain):
            right = self.eval_expr(operator.right, env)
            value = self.BINARY_OPERATORS[type(operator)](value, right, operator.pos)
        return value

    def eval_operand(self, node: ast.Expr, env: Environment) -> int:
        if isinstance(node, ast.Number):
            return node.value
        elif isinstance(node, ast.Parenthesized):
            return self.eval_expr(node.expr, env)
        elif isinstance(node, ast.Var):
            try:
                return env.lookup(node.name)
            except UndefinedName:
                raise UnboundVariable(node.name, node.pos)
        else:
            raise InterpreterError(f"Unsupported expression: {type(node)}")

    def eval_statement(self, node: ast.Statement, env: Environment) -> int:
        if isinstance(node, ast.ExprStatement):
            return self.eval_expr(node.expr, env)
        elif isinstance(node, ast.Assignment):
            value = self.eval_expr(node.rhs, env)
            env.bind(node.lhs.name, value)
            return value
        else:
            raise InterpreterError(f"Unsupported statement: {type(node)}")

    def eval_program(self, program: ast.Program, env: Optional[Environment] = None) -> Optional[int]:
        """Execute statements in order, return the value of the last one."""
        if env is None:
            env = Environment()
        last_value = None
        for statement in program.statements:
            try:
                last_value = self.eval_statement(statement, env)
            except RecursionError:
                raise NestingTooDeep(statement.pos)
        return last_value


def evaluate(text: str) -> Optional[int]:
    """Parse and evaluate the program text."""
    return Evaluator().eval_program(parse(text))
