import pytest
from src.hack_vm.parser import Parser, parse
from src.hack_vm.ast import (
    Instruction, ArithmeticLogical, PushPop, Label, Goto, IfGoto,
    Function, Call, Return,
)

@pytest.mark.parametrize("line, payload", [
    ("return", Return()),
    ("add", ArithmeticLogical("add")),
    ("not", ArithmeticLogical("not")),
    ("push local 2", PushPop("push", "local", 2)),
    ("pop static 0", PushPop("pop", "static", 0)),
    ("label LOOP", Label("LOOP")),
    ("goto LOOP", Goto("LOOP")),
    ("if-goto END", IfGoto("END")),
    ("function Main.fib 0", Function("Main.fib", 0)),
    ("call Main.fib 1", Call("Main.fib", 1)),
])
def test_recognized_shapes(line, payload):
    instrs, diags = parse(line)
    assert not diags
    assert len(instrs) == 1
    assert instrs[0].payload == payload
    assert instrs[0].kind == type(payload).__name__

def test_blank_and_comment_lines_do_not_advance_index():
    src = """
    // Main.vm
    push constant 2

    // otra
    push constant 3
    add
    """
    instrs, diags = parse(src, filename="Main.vm")
    assert not diags
    assert [i.index for i in instrs] == [0, 1, 2]
    assert [i.raw_text for i in instrs] == ["push constant 2", "push constant 3", "add"]
    # número de línea real para los diagnósticos
    assert [i.line for i in instrs] == [3, 6, 7]

def test_trailing_comment_and_tabs():
    instrs, diags = parse("\tpush\tconstant 7   // siete\n")
    assert not diags
    ins = instrs[0]
    assert ins.payload == PushPop("push", "constant", 7)
    assert ins.raw_text == "push\tconstant 7   // siete"

@pytest.mark.parametrize("line", [
    "push constant",
    "push constant x",
    "push constant -1",
    "call Foo",
    "frobnicate",
    "label",
    "goto A B",
    "add 1",
])
def test_malformed_lines_degrade(line):
    instrs, diags = parse(line, filename="Bad.vm")
    assert len(instrs) == 1
    assert instrs[0].payload is None
    assert instrs[0].kind is None
    assert instrs[0].raw_text == line
    assert len(diags) == 1
    assert diags[0].severity == "advertencia"
    assert diags[0].file == "Bad.vm" and diags[0].line == 1

def test_degraded_line_still_consumes_index():
    instrs, _ = parse("push constant 1\nbogus line here now\neq\n")
    assert [i.index for i in instrs] == [0, 1, 2]
    assert instrs[2].payload == ArithmeticLogical("eq")

def test_unknown_segment_keeps_payload_with_warning():
    instrs, diags = parse("push heap 3\npop constant 1\n")
    assert instrs[0].payload == PushPop("push", "heap", 3)
    assert instrs[1].payload == PushPop("pop", "constant", 1)
    assert any("heap" in d.message for d in diags)
    assert any("constant" in d.message for d in diags)

def test_parser_is_lazy():
    consumed = []

    def lines():
        for s in ["push constant 1", "push constant 2", "add"]:
            consumed.append(s)
            yield s

    p = Parser(lines())
    first = next(p)
    assert isinstance(first, Instruction)
    assert consumed == ["push constant 1"]
    assert [i.index for i in p] == [1, 2]
