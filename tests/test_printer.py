import pytest

from tuma.ast import Add, Assignment, ExprStatement, Ident, Mul, Number, Parenthesized, Program, Sub, Var
from tuma.evaluator import Evaluator, evaluate
from tuma.parser import parse
from tuma.printer import Printer

TREES = [
    Add(Add(Number(1), Number(2)), Number(3)),
    Add(Number(1), Add(Number(2), Number(3))),
    Sub(Number(1), Sub(Number(2), Number(3))),
    Sub(Sub(Number(10), Number(2)), Number(3)),
    Mul(Add(Number(1), Number(2)), Sub(Number(7), Number(3))),
    Mul(Number(2), Mul(Number(3), Number(4))),
    Sub(Number(9), Mul(Number(2), Parenthesized(Sub(Number(5), Number(1))))),
    Sub(Number(1), Number(-5)),
    Mul(Number(-3), Add(Number(-4), Number(2))),
    Mul(Number(-2 ** 31), Number(1)),
    Add(Number(-2 ** 31), Number(2 ** 31 - 1)),
]


class TestPrinter:
    @pytest.mark.parametrize("tree, text", [
        (Number(5), "5"),
        (Var(Ident("a")), "a"),
        (Add(Add(Number(1), Number(2)), Number(3)), "1 + 2 + 3"),
        (Add(Number(1), Add(Number(2), Number(3))), "1 + (2 + 3)"),
        (Sub(Number(1), Sub(Number(2), Number(3))), "1 - (2 - 3)"),
        (Mul(Add(Number(1), Number(2)), Number(3)), "(1 + 2) * 3"),
        (Add(Mul(Number(1), Number(2)), Number(3)), "1 * 2 + 3"),
        (Parenthesized(Number(4)), "(4)"),
        (Number(-5), "(0 - 5)"),
        (Sub(Number(1), Number(-5)), "1 - (0 - 5)"),
        (Mul(Number(-2 ** 31), Number(1)), "(0 - 2147483647 - 1) * 1"),
    ])
    def test_expression(self, tree, text):
        assert Printer().format(tree) == text

    def test_program(self):
        program = Program([
            Assignment(Ident("a"), Mul(Number(2), Parenthesized(Add(Number(8), Number(2))))),
            ExprStatement(Var(Ident("a"))),
        ])
        assert Printer().format(program) == "let a = 2 * (8 + 2);\na"

    def test_empty_program(self):
        assert Printer().format(Program(())) == ""

    def test_keeps_explicit_parentheses(self):
        assert Printer().format(parse("9* (3 +4) +8")) == "9 * (3 + 4) + 8"

    def test_reparse_is_identical_for_parsed_trees(self):
        program = parse("let a = 2*(8+2); let b = 3 + a + 5; b")
        assert parse(Printer().format(program)) == program

    @pytest.mark.parametrize("tree", TREES)
    def test_round_trip_preserves_value(self, tree):
        program = Program([ExprStatement(tree)])
        assert evaluate(Printer().format(program)) == Evaluator().eval_program(program)

    def test_unsupported_node(self):
        with pytest.raises(TypeError):
            Printer().format(Ident("a"))

    def test_long_chain(self):
        tree = Number(0)
        for _ in range(5000):
            tree = Sub(tree, Number(1))
        text = Printer().format(tree)
        assert text.startswith("0 - 1 - 1")
        assert evaluate(text) == -5000
