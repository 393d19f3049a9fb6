from __future__ import annotations

from typing import Dict, Iterator, Optional

from tuma.lexer import Position

INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1


class UndefinedName(Exception):
    """Name is not bound in the environment."""

    def __init__(self, name: str):
        super().__init__(f"Name is not defined: {name}")
        self.name: str = name


class Environment:
    """Table of variables known to the running program."""

    def __init__(self, symbols: Optional[Dict[str, int]] = None):
        symbols = symbols or {}
        self._symbols: Dict[str, int] = {**symbols}

    def bind(self, name: str, value: int):
        """Bind the name or overwrite its previous value."""
        self._symbols[name] = value

    def lookup(self, name: str) -> int:
        if name in self._symbols:
            return self._symbols[name]
        raise UndefinedName(name)

    def names(self) -> Iterator[str]:
        return iter(self._symbols)

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __repr__(self):
        return f"Environment({self._symbols})"


class EvalError(Exception):
    """Parent class for evaluation errors."""

    def __init__(self, message: str, pos: Optional[Position] = None):
        super().__init__(message)
        self.pos: Optional[Position] = pos


class UnboundVariable(EvalError):
    """Variable is referenced before any assignment."""

    def __init__(self, name: str, pos: Optional[Position] = None):
        super().__init__(f"Unbound variable '{name}'", pos)
        self.name: str = name


class NestingTooDeep(EvalError):
    """Syntax tree is nested deeper than the interpreter stack allows."""

    def __init__(self, pos: Optional[Position] = None):
        super().__init__("Expression nesting too deep", pos)


class ArithmeticOverflow(EvalError):
    """Result doesn't fit into a signed 32-bit integer."""

    def __init__(self, operator: str, left: int, right: int, pos: Optional[Position] = None):
        super().__init__(f"Integer overflow in {left} {operator} {right}", pos)
        self.operator: str = operator
        self.left: int = left
        self.right: int = right


class Int32Operators:
    """Signed 32-bit arithmetic as static functions."""

    @staticmethod
    def _checked(result: int, operator: str, a: int, b: int, pos: Optional[Position]) -> int:
        if not INT32_MIN <= result <= INT32_MAX:
            raise ArithmeticOverflow(operator, a, b, pos)
        return result

    @staticmethod
    def add(a: int, b: int, pos: Optional[Position] = None) -> int:
        return Int32Operators._checked(a + b, "+", a, b, pos)

    @staticmethod
    def sub(a: int, b: int, pos: Optional[Position] = None) -> int:
        return Int32Operators._checked(a - b, "-", a, b, pos)

    @staticmethod
    def mul(a: int, b: int, pos: Optional[Position] = None) -> int:
        return Int32Operators._checked(a * b, "*", a, b, pos)
