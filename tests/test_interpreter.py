import pytest

from minirb.ast import Node, NumberLiteral, BinaryExpression
from minirb.environment import Environment
from minirb.errors import EvalError, EvalErrorKind
from minirb.interpreter import Interpreter, run_program, compile_module
from minirb.parser import parse_statement
from minirb.values import FunctionValue


@pytest.fixture
def interp():
    return Interpreter()


def eval_error(interp, source):
    with pytest.raises(EvalError) as info:
        interp.run_source(source)
    return info.value.kind


@pytest.mark.parametrize('text', ['0', '7', '42', '007', '1234567890'])
def test_number_literal_is_float(interp, text):
    value = interp.evaluate(NumberLiteral(text), interp.global_env)
    assert isinstance(value, float)
    assert value == float(text)


def test_invalid_number_literal_is_type_mismatch(interp):
    with pytest.raises(EvalError) as info:
        interp.evaluate(NumberLiteral('12abc'), interp.global_env)
    assert info.value.kind is EvalErrorKind.TYPE_MISMATCH


def test_flat_precedence(interp):
    assert interp.run_source("2 + 3 * 4") == 20.0


def test_arithmetic(interp):
    assert interp.run_source("7 / 2") == 3.5
    assert interp.run_source("(10 - 4) * 2") == 12.0


def test_assignment_copies_value(interp):
    interp.run_source("a = 1; b = a")
    assert interp.global_env.get('b') == 1.0
    interp.run_source("a = 5")
    assert interp.global_env.get('a') == 5.0
    assert interp.global_env.get('b') == 1.0


def test_assignment_returns_value(interp):
    assert interp.run_source("x = 3 * 3") == 9.0


def test_unbound_identifier_is_nil(interp):
    assert interp.run_source("nothing_here") is None


def test_def_returns_function_value(interp):
    value = interp.run_source("def f(x, y) x + y end")
    assert isinstance(value, FunctionValue)
    assert value.name == 'f'
    assert interp.global_env.get('f') is value


def test_call_user_function(interp):
    assert interp.run_source("def f(x, y) x + y end\nf(3, 4)") == 7.0


def test_missing_argument_leaves_parameter_unbound(interp):
    assert interp.run_source("def second(x, y) y end\nsecond(3)") is None
    # no arity error: the failure comes from adding nil
    assert eval_error(interp, "def f(x, y) x + y end\nf(3)") is EvalErrorKind.TYPE_MISMATCH


def test_extra_arguments_are_ignored(interp):
    assert interp.run_source("def first(x) x end\nfirst(1, 2, 3)") == 1.0


def test_empty_body_returns_nil(interp):
    assert interp.run_source("def noop() end\nnoop()") is None


def test_body_returns_last_statement(interp):
    assert interp.run_source("def f(a) a + 1; a * 10 end\nf(2)") == 20.0


def test_assignment_inside_function_shadows_outer(interp):
    assert interp.run_source("x = 1\ndef f() x = 2; x end\nf()") == 2.0
    assert interp.global_env.get('x') == 1.0


def test_call_environment_is_discarded(interp):
    interp.run_source("def f(p) local = p end\nf(9)")
    assert 'p' not in interp.global_env
    assert 'local' not in interp.global_env


def test_dynamic_scoping_by_default():
    interp = Interpreter()
    source = (
        "n = 1\n"
        "def show() n end\n"
        "def outer() n = 100; show() end\n"
        "outer()"
    )
    assert interp.run_source(source) == 100.0


def test_lexical_scoping_option():
    interp = Interpreter(lexical_scoping=True)
    source = (
        "n = 1\n"
        "def show() n end\n"
        "def outer() n = 100; show() end\n"
        "outer()"
    )
    assert interp.run_source(source) == 1.0


def test_definitions_persist_across_statements(interp):
    env = interp.global_env
    interp.evaluate(parse_statement("def f(x) x end"), env)
    assert interp.evaluate(parse_statement("f(5)"), env) == 5.0


def test_arguments_evaluated_left_to_right_before_call(interp):
    order = []

    def trace(args):
        order.append(args[0])
        return args[0]

    interp.register_builtin('trace', trace)
    interp.run_source("def pick(a, b) b end\npick(trace(1), trace(2))")
    assert order == [1.0, 2.0]


def test_puts_returns_nil(interp, capsys):
    assert interp.run_source("puts(1)") is None
    assert capsys.readouterr().out == '1\n'


def test_division_by_zero(interp):
    assert eval_error(interp, "1 / 0") is EvalErrorKind.DIVISION_BY_ZERO
    assert eval_error(interp, "1 / (2 - 2)") is EvalErrorKind.DIVISION_BY_ZERO


def test_string_operand_is_type_mismatch(interp):
    interp.register_builtin('letter', lambda args: 'a')
    assert eval_error(interp, "1 + letter()") is EvalErrorKind.TYPE_MISMATCH


def test_boolean_operand_is_type_mismatch(interp):
    interp.register_builtin('yes', lambda args: True)
    assert eval_error(interp, "yes() * 2") is EvalErrorKind.TYPE_MISMATCH


def test_nil_operand_is_type_mismatch(interp):
    assert eval_error(interp, "missing - 1") is EvalErrorKind.TYPE_MISMATCH


def test_operator_errors(interp):
    env = interp.global_env
    with pytest.raises(EvalError) as info:
        interp.evaluate(BinaryExpression('%', NumberLiteral('1'), NumberLiteral('2')), env)
    assert info.value.kind is EvalErrorKind.UNSUPPORTED_OPERATOR
    with pytest.raises(EvalError) as info:
        interp.evaluate(BinaryExpression('**', NumberLiteral('1'), NumberLiteral('2')), env)
    assert info.value.kind is EvalErrorKind.INVALID_OPERATOR


def test_function_not_found(interp):
    assert eval_error(interp, "nope(1)") is EvalErrorKind.FUNCTION_NOT_FOUND


def test_not_a_function(interp):
    assert eval_error(interp, "x = 1\nx()") is EvalErrorKind.NOT_A_FUNCTION
    # bound to nil is still bound
    assert eval_error(interp, "y = missing\ny()") is EvalErrorKind.NOT_A_FUNCTION


def test_function_not_found_is_raised_after_arguments(interp):
    interp.register_builtin('boom', lambda args: 1 / 0)
    assert eval_error(interp, "nope(boom())") is EvalErrorKind.FUNCTION_CALL_ERROR


def test_builtin_failure_becomes_function_call_error(interp):
    def fail(args):
        raise ValueError('bad input')

    interp.register_builtin('fail', fail)
    with pytest.raises(EvalError) as info:
        interp.run_source("fail()")
    assert info.value.kind is EvalErrorKind.FUNCTION_CALL_ERROR
    assert isinstance(info.value.__cause__, ValueError)


def test_builtin_arity_is_checked(interp):
    interp.register_builtin('one', lambda args: args[0], arity=1)
    assert interp.run_source("one(4)") == 4.0
    assert eval_error(interp, "one(1, 2)") is EvalErrorKind.FUNCTION_CALL_ERROR


def test_memory_error_is_not_remapped(interp):
    def exhaust(args):
        raise MemoryError()

    interp.register_builtin('exhaust', exhaust)
    with pytest.raises(MemoryError):
        interp.run_source("exhaust()")


def test_unbounded_recursion_keeps_global_state(interp):
    interp.run_source("n = 1\ndef loop(x) loop(x) end")
    with pytest.raises(RecursionError):
        interp.run_source("loop(n)")
    assert interp.run_source("n + 1") == 2.0


def test_fail_fast_keeps_earlier_assignments(interp):
    with pytest.raises(EvalError):
        interp.run_source("a = 1\nb = 1 / 0\nc = 3")
    assert interp.global_env.get('a') == 1.0
    assert 'b' not in interp.global_env
    assert 'c' not in interp.global_env


def test_unknown_node_type(interp):
    with pytest.raises(NotImplementedError):
        interp.evaluate(Node(), interp.global_env)


def test_evaluate_against_explicit_environment(interp):
    env = Environment(parent=interp.global_env)
    interp.evaluate(parse_statement("z = 4"), env)
    assert env.get('z') == 4.0
    assert 'z' not in interp.global_env


def test_debug_trace(tmp_path):
    trace_file = tmp_path / 'debug.txt'
    with Interpreter(debug_level=3, debug_file=str(trace_file)) as interp:
        interp.run_source("def f(x) y = x end\nf(2)")
    trace = trace_file.read_text(encoding='utf-8')
    assert 'define function f(x)' in trace
    assert 'call <function f> with (2)' in trace
    assert 'assign y = 2 (depth 1)' in trace
    assert 'return from <function f> => 2' in trace
    assert 'statement CallExpression => 2' in trace


def test_no_trace_file_without_debug(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Interpreter().close()
    assert not (tmp_path / 'debug.txt').exists()


def test_run_program(capsys):
    assert run_program("puts(6 * 7)") is None
    assert capsys.readouterr().out == '42\n'


def test_compile_module(tmp_path):
    path = tmp_path / 'lib.mrb'
    path.write_text("def twice(x) x * 2 end\nbase = twice(21)\n", encoding='utf-8')
    interp = compile_module(str(path))
    assert interp.global_env.get('base') == 42.0
    assert isinstance(interp.global_env.get('twice'), FunctionValue)
