import tuma.ast as ast
from tuma.runtime import INT32_MAX, INT32_MIN


class Printer:
    """Render syntax trees back to source text.

    Binary operators get parentheses only where the grouping of the tree
    differs from what precedence and left associativity would produce.
    Negative numbers have no literal form and are printed as differences.
    """

    PRIORITY = {
        ast.Add: 1,
        ast.Sub: 1,
        ast.Mul: 2,
    }

    # Priority of atoms: numbers, names and explicit groups
    ATOM_PRIORITY = 3

    def format(self, node: ast.Node) -> str:
        if isinstance(node, ast.Program):
            return "\n".join(self.format(statement) for statement in node.statements)
        elif isinstance(node, ast.Assignment):
            return f"let {node.lhs.name} = {self.format(node.rhs)};"
        elif isinstance(node, ast.ExprStatement):
            return self.format(node.expr)
        elif isinstance(node, ast.Number):
            return self._number(node.value)
        elif isinstance(node, ast.Var):
            return node.name
        elif isinstance(node, ast.Parenthesized):
            return f"({self.format(node.expr)})"
        elif isinstance(node, ast.BinaryOperator):
            return self._operator_chain(node)
        raise TypeError(f"Cannot format {type(node).__name__}")

    @staticmethod
    def _number(value: int) -> str:
        if value == INT32_MIN:
            return f"(0 - {INT32_MAX} - 1)"
        elif value < 0:
            return f"(0 - {-value})"
        return str(value)

    def _operator_chain(self, node: ast.BinaryOperator) -> str:
        # Left operands printed without parentheses are unwound in a loop
        chain = [node]
        while (isinstance(chain[-1].left, ast.BinaryOperator)
               and self._priority(chain[-1].left) >= self._priority(chain[-1])):
            chain.append(chain[-1].left)

        innermost = chain[-1]
        text = self._operand(innermost.left, parenthesize=self._priority(innermost.left) < self._priority(innermost))
        for operator in reversed(chain):
            right = self._operand(operator.right, parenthesize=self._priority(operator.right) <= self._priority(operator))
            text = f"{text} {operator.symbol} {right}"
        return text

    def _priority(self, node: ast.Node) -> int:
        return self.PRIORITY.get(type(node), self.ATOM_PRIORITY)

    def _operand(self, node: ast.Node, parenthesize: bool) -> str:
        text = self.format(node)
        if parenthesize:
            return f"({text})"
        return text
