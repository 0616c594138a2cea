import io

import pytest

from ast_nodes import Assign, BinaryOp, IntLiteral, Print, Program, VarRef
from errors import EZLangRuntimeError
from interpreter import Interpreter
from lexer import tokenize
from parser import parse
from values import apply_operator, display, is_truthy, kind_of


def run_src(source, **kwargs):
    return Interpreter(**kwargs).run(parse(tokenize(source)))


def test_kind_of_distinguishes_bool_from_int():
    assert kind_of(True) == "Boolean"
    assert kind_of(1) == "Integer"
    assert kind_of("1") == "Text"


def test_display():
    assert display(42) == "42"
    assert display(-3) == "-3"
    assert display(True) == "True"
    assert display(False) == "False"
    assert display("hi") == "hi"


def test_truthiness():
    assert is_truthy(1) and is_truthy(-1)
    assert not is_truthy(0)
    assert is_truthy("x")
    assert not is_truthy("")
    assert is_truthy(True)
    assert not is_truthy(False)


def test_floor_division_rounds_down():
    assert apply_operator("/", -7, 2) == -4
    assert apply_operator("/", 7, -2) == -4
    assert apply_operator("/", 7, 2) == 3


def test_division_by_zero():
    with pytest.raises(EZLangRuntimeError, match="Division by zero"):
        apply_operator("/", 1, 0, line=3)


def test_text_concatenation():
    assert apply_operator("+", "ab", "cd") == "abcd"


def test_mixed_arithmetic_rejected():
    with pytest.raises(EZLangRuntimeError) as exc:
        apply_operator("+", "a", 1, line=1)
    assert str(exc.value) == "unsupported operand types for +: 'Text' and 'Integer' at line 1"


def test_text_only_supports_plus():
    with pytest.raises(EZLangRuntimeError):
        apply_operator("*", "a", 3)
    with pytest.raises(EZLangRuntimeError):
        apply_operator("-", "a", "b")


def test_booleans_do_not_act_as_integers():
    with pytest.raises(EZLangRuntimeError):
        apply_operator("+", True, 1)
    with pytest.raises(EZLangRuntimeError):
        apply_operator("<", True, False)


def test_cross_kind_equality_is_false():
    assert apply_operator("==", 1, "1") is False
    assert apply_operator("==", True, 1) is False


def test_cross_kind_ordering_rejected():
    with pytest.raises(EZLangRuntimeError, match="unsupported operand types for <"):
        apply_operator("<", 1, "1")


def test_text_ordering():
    assert apply_operator("<", "apple", "banana") is True
    assert apply_operator(">=", "b", "b") is True


def test_unbound_variable_reads_zero():
    assert run_src("print y") == "0"


def test_assignment_overwrites():
    assert run_src("x = 1\nx = x + 1\nprint x") == "2"


def test_if_shares_environment():
    assert run_src("if 1 { y = 2 }\nprint y") == "2"
    assert run_src("x = 1\nif x { x = x + 10 }\nprint x") == "11"


def test_if_false_runs_nothing():
    assert run_src('if 0 { print "no" }') == ""
    assert run_src('if "" { print "no" }') == ""


def test_if_on_comparison_result():
    assert run_src('b = 3 > 2\nif b { print "yes" }\nprint b') == "yes\nTrue"


def test_run_resets_state():
    interp = Interpreter()
    program = parse(tokenize("x = x + 1\nprint x"))
    assert interp.run(program) == "1"
    assert interp.run(program) == "1"


def test_ast_can_be_built_by_hand():
    program = Program((Assign("a", IntLiteral(5)), Print(VarRef("a"))))
    assert Interpreter().run(program) == "5"


def test_unknown_node_rejected():
    with pytest.raises(EZLangRuntimeError, match="Unknown statement node"):
        Interpreter().run(Program((IntLiteral(1),)))


def test_trace_goes_to_stream_not_output():
    stream = io.StringIO()
    out = run_src("x = 1\nif x {\n  print x\n}", trace=True, trace_stream=stream)
    assert out == "1"
    assert stream.getvalue().splitlines() == [
        "TRACE line=1 Assign",
        "TRACE line=2 If",
        "TRACE line=3 Print",
    ]


def test_run_incremental_keeps_env():
    interp = Interpreter()
    assert interp.run_incremental(parse(tokenize("x = 4"))) == []
    assert interp.run_incremental(parse(tokenize("print x * 2"))) == ["8"]


def test_run_incremental_discards_failed_output():
    interp = Interpreter()
    with pytest.raises(EZLangRuntimeError):
        interp.run_incremental(parse(tokenize("print 1\nprint 1 / 0")))
    assert interp.output == []


def test_integer_overflow_is_a_runtime_error():
    with pytest.raises(EZLangRuntimeError) as exc:
        apply_operator("+", 2 ** 63 - 1, 1, line=2)
    assert str(exc.value) == "Integer out of range for + at line 2"
    with pytest.raises(EZLangRuntimeError, match="Integer out of range for \\*"):
        apply_operator("*", 2 ** 62, 4)


def test_integer_range_edges():
    assert apply_operator("-", -(2 ** 63) + 1, 1) == -(2 ** 63)
    with pytest.raises(EZLangRuntimeError, match="Integer out of range"):
        apply_operator("-", -(2 ** 63), 1)
    with pytest.raises(EZLangRuntimeError, match="Integer out of range for /"):
        apply_operator("/", -(2 ** 63), -1)


def test_run_incremental_does_not_accumulate_output():
    interp = Interpreter()
    assert interp.run_incremental(parse(tokenize("print 1"))) == ["1"]
    assert interp.run_incremental(parse(tokenize("print 2"))) == ["2"]
    assert interp.output == []


def test_run_incremental_clears_output_after_unexpected_failure():
    deep = IntLiteral(0)
    for _ in range(20000):
        deep = BinaryOp("+", deep, IntLiteral(0))
    interp = Interpreter()
    with pytest.raises(RecursionError):
        interp.run_incremental(Program((Print(IntLiteral(1)), Print(deep))))
    assert interp.output == []
