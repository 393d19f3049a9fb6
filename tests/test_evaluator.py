"""Tests for program evaluation."""

import pytest

from tuma.ast import Add, Assignment, ExprStatement, Ident, Mul, Number, Parenthesized, Program, Sub, Var
from tuma.evaluator import Evaluator, evaluate
from tuma.parser import parse
from tuma.runtime import ArithmeticOverflow, Environment, EvalError, NestingTooDeep, UnboundVariable


class TestArithmetic:
    @pytest.mark.parametrize("text, expected", [
        ("1+2+   3", 6),
        ("9* (3 +4) +8", 71),
        ("9*3-  8 - 5", 14),
        ("10 - 4 - 3", 3),
        ("2 * 3 * 4", 24),
        ("1 + 2 * 3", 7),
        ("(1 + 2) * 3", 9),
        ("2 - (3 - 4)", 3),
        ("((7))", 7),
        ("0 - 5", -5),
        ("0", 0),
    ])
    def test_expression(self, text, expected):
        assert evaluate(text) == expected

    def test_programmatic_tree(self):
        tree = Sub(Number(1), Parenthesized(Mul(Number(2), Number(3))))
        assert Evaluator().eval_expr(tree, Environment()) == -5


class TestOverflow:
    @pytest.mark.parametrize("text", [
        "2147483647 + 1",
        "0 - 2147483647 - 2",
        "65536 * 65536",
        "2147483647 * 2",
    ])
    def test_overflow_fails(self, text):
        with pytest.raises(ArithmeticOverflow):
            evaluate(text)

    def test_range_limits(self):
        assert evaluate("2147483646 + 1") == 2147483647
        assert evaluate("0 - 2147483647 - 1") == -2147483648
        assert evaluate("46340 * 46340") == 2147395600

    def test_intermediate_overflow_is_not_masked(self):
        with pytest.raises(ArithmeticOverflow) as error:
            evaluate("2147483647 + 1 - 1")
        assert error.value.operator == "+"
        assert error.value.left == 2147483647
        assert error.value.right == 1


class TestProgram:
    def test_variables_and_sequencing(self):
        assert evaluate("""
            let a = 2*(8+2);
            let b = 3 + a + 5;
            b
        """) == 28

    def test_empty_program(self):
        assert evaluate("") is None
        assert evaluate("  \n  ") is None

    def test_assignment_value_is_rhs(self):
        assert evaluate("let a = 5;") == 5
        assert evaluate("1 let a = 2 * 3;") == 6

    def test_last_statement_wins(self):
        assert evaluate("1 2 3") == 3

    def test_reassignment(self):
        assert evaluate("let a = 1; let a = a + 1; let a = a * 10; a") == 20

    def test_fresh_environment_per_program(self):
        evaluator = Evaluator()
        assert evaluator.eval_program(parse("let a = 1;")) == 1
        with pytest.raises(UnboundVariable):
            evaluator.eval_program(parse("a"))

    def test_shared_environment(self):
        evaluator = Evaluator()
        env = Environment()
        evaluator.eval_program(parse("let a = 4;"), env)
        assert evaluator.eval_program(parse("a * a"), env) == 16
        assert env.lookup("a") == 4

    def test_programmatic_program(self):
        program = Program([
            Assignment(Ident("x"), Number(3)),
            ExprStatement(Add(Var(Ident("x")), Var(Ident("x")))),
        ])
        assert Evaluator().eval_program(program) == 6


class TestUnboundVariable:
    def test_unbound(self):
        with pytest.raises(UnboundVariable) as error:
            evaluate("a")
        assert error.value.name == "a"
        assert isinstance(error.value, EvalError)

    def test_self_reference(self):
        with pytest.raises(UnboundVariable) as error:
            evaluate("let a = a + 1;")
        assert error.value.name == "a"

    def test_forward_reference(self):
        with pytest.raises(UnboundVariable) as error:
            evaluate("let a = b; let b = 1;")
        assert error.value.name == "b"

    def test_position(self):
        with pytest.raises(UnboundVariable) as error:
            evaluate("let a = 1;\n  a + zz")
        assert error.value.pos.line == 1
        assert error.value.pos.in_line == 6

    def test_evaluation_aborts(self):
        env = Environment()
        with pytest.raises(UnboundVariable):
            Evaluator().eval_program(parse("let a = 1; let b = c; let d = 2;"), env)
        assert "a" in env
        assert "b" not in env
        assert "d" not in env


class TestDeepPrograms:
    def test_long_sum(self):
        assert evaluate("+".join(["1"] * 5000)) == 5000

    def test_long_mixed_chain(self):
        assert evaluate(" - ".join(["2 * 3"] * 3000)) == 6 - 6 * 2999

    def test_left_deep_tree(self):
        tree = Number(0)
        for _ in range(5000):
            tree = Add(tree, Number(1))
        assert Evaluator().eval_expr(tree, Environment()) == 5000

    def test_right_deep_tree_fails_cleanly(self):
        tree = Number(1)
        for _ in range(5000):
            tree = Add(Number(1), tree)
        with pytest.raises(NestingTooDeep) as error:
            Evaluator().eval_program(Program([ExprStatement(tree)]))
        assert isinstance(error.value, EvalError)
