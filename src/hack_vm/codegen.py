# src/hack_vm/codegen.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .ast import (
    Instruction, ArithmeticLogical, PushPop, Label, Goto, IfGoto,
    Function, Call, Return,
)
from .segments import (
    SP, LCL, ARG, THIS, THAT, SCRATCH_ADDR, SCRATCH_RET,
    STACK_BASE, TEMP_BASE, FRAME_SIZE, ENTRY_POINT,
    SEGMENT_POINTERS, BINARY_OPS, UNARY_OPS, COMPARE_JUMPS, pointer_cell,
)
from .templates import (
    PUSH_D, POP_D, STORE_VIA_SCRATCH, at, label,
    push_cell, push_constant, unary_op, binary_op, compare_op,
)

# ---------- Contexto de generación ----------

@dataclass
class GeneratorContext:
    """Estado mutable de una traducción de módulo.

    Se pasa explícitamente a generate(); cada módulo usa su propio contexto, así
    que dos módulos pueden traducirse en paralelo sin estado compartido.
    """
    module_name: str
    current_function: Optional[str] = None
    call_site_counter: int = -1

    def next_call_site(self) -> int:
        """Incrementa antes de usar: la primera llamada recibe 0."""
        self.call_site_counter += 1
        return self.call_site_counter

    def scoped(self, name: str) -> str:
        """Etiqueta local a la función abierta ('Func$name'); global si no hay."""
        if self.current_function is None:
            return name
        return f"{self.current_function}${name}"

    def static(self, offset: int) -> str:
        return f"{self.module_name}.{offset}"

    def return_label(self) -> str:
        scope = self.current_function if self.current_function is not None else self.module_name
        return f"{scope}.{self.next_call_site()}.retAddr"

# ---------- push / pop ----------

def _segment_address(pointer: str, offset: int) -> List[str]:
    """A = *pointer + offset (D queda con offset)."""
    return [at(offset), "D=A", at(pointer), "A=M", "A=D+A"]

def _temp_address(offset: int) -> List[str]:
    """A = 5 + offset, sin indirección."""
    return [at(TEMP_BASE), "D=A", at(offset), "A=D+A"]

def _stash_address() -> List[str]:
    """R13 = A; la dirección de destino se guarda antes de desapilar."""
    return ["D=A", at(SCRATCH_ADDR), "M=D"]

def _push(ctx: GeneratorContext, seg: str, offset: int) -> List[str]:
    if seg == "constant":
        return push_constant(offset)
    if seg in SEGMENT_POINTERS:
        return [*_segment_address(SEGMENT_POINTERS[seg], offset), "D=M", *PUSH_D]
    if seg == "temp":
        return [*_temp_address(offset), "D=M", *PUSH_D]
    if seg == "pointer":
        return push_cell(pointer_cell(offset))
    if seg == "static":
        return push_cell(ctx.static(offset))
    return []

def _pop(ctx: GeneratorContext, seg: str, offset: int) -> List[str]:
    if seg in SEGMENT_POINTERS:
        return [*_segment_address(SEGMENT_POINTERS[seg], offset), *_stash_address(),
                *POP_D, *STORE_VIA_SCRATCH]
    if seg == "temp":
        return [*_temp_address(offset), *_stash_address(), *POP_D, *STORE_VIA_SCRATCH]
    if seg == "pointer":
        return [*POP_D, at(pointer_cell(offset)), "M=D"]
    if seg == "static":
        return [*POP_D, at(ctx.static(offset)), "M=D"]
    # 'constant' no tiene destino
    return []

def _push_pop(ctx: GeneratorContext, ins: Instruction) -> List[str]:
    p: PushPop = ins.payload
    if p.direction == "push":
        return _push(ctx, p.segment, p.offset)
    return _pop(ctx, p.segment, p.offset)

# ---------- aritmética / lógica ----------

def _arithmetic(ctx: GeneratorContext, ins: Instruction) -> List[str]:
    op = ins.payload.op
    if op in BINARY_OPS:
        return binary_op(BINARY_OPS[op])
    if op in UNARY_OPS:
        return unary_op(UNARY_OPS[op])
    if op in COMPARE_JUMPS:
        return compare_op(op, ins.index)
    return []

# ---------- flujo de programa ----------

def _label(ctx: GeneratorContext, ins: Instruction) -> List[str]:
    return [label(ctx.scoped(ins.payload.name))]

def _goto(ctx: GeneratorContext, ins: Instruction) -> List[str]:
    return [at(ctx.scoped(ins.payload.label)), "0;JMP"]

def _if_goto(ctx: GeneratorContext, ins: Instruction) -> List[str]:
    # salta si la cima == -1 (verdadero)
    return [
        *POP_D,
        at(SCRATCH_ADDR),
        "M=-1",
        "D=D-M",
        at(ctx.scoped(ins.payload.label)),
        "D;JEQ",
    ]

# ---------- funciones ----------

def _function(ctx: GeneratorContext, ins: Instruction) -> List[str]:
    f: Function = ins.payload
    ctx.current_function = f.name

    loop = f"{f.name}.initLCL"
    loop_end = f"{loop}.end"
    return [
        label(f.name),
        at(f.n_locals),
        "D=A",
        at(SCRATCH_ADDR),
        "M=D",
        label(loop),
        at(SCRATCH_ADDR),
        "D=M",
        at(loop_end),
        "D;JEQ",
        at(SP),
        "A=M",
        "M=0",
        at(SP),
        "M=M+1",
        at(SCRATCH_ADDR),
        "M=M-1",
        at(loop),
        "0;JMP",
        label(loop_end),
    ]

def _call(ctx: GeneratorContext, ins: Instruction) -> List[str]:
    c: Call = ins.payload
    ret = ctx.return_label()
    return [
        *push_constant(ret),
        *push_cell(LCL),
        *push_cell(ARG),
        *push_cell(THIS),
        *push_cell(THAT),
        # ARG = SP - 5 - n_args
        at(SP),
        "D=M",
        at(FRAME_SIZE),
        "D=D-A",
        at(c.n_args),
        "D=D-A",
        at(ARG),
        "M=D",
        # LCL = SP
        at(SP),
        "D=M",
        at(LCL),
        "M=D",
        at(c.name),
        "0;JMP",
        label(ret),
    ]

def _restore(cell: str, back: int) -> List[str]:
    """cell = *(frame - back), con frame guardado en R13."""
    return [at(SCRATCH_ADDR), "D=M", at(back), "A=D-A", "D=M", at(cell), "M=D"]

def _return(ctx: GeneratorContext, ins: Instruction) -> List[str]:
    return [
        # R13 = frame = LCL; R14 = *(frame - 5)
        at(LCL),
        "D=M",
        at(SCRATCH_ADDR),
        "M=D",
        at(FRAME_SIZE),
        "A=D-A",
        "D=M",
        at(SCRATCH_RET),
        "M=D",
        # *ARG = pop()
        *POP_D,
        at(ARG),
        "A=M",
        "M=D",
        # SP = ARG + 1
        at(ARG),
        "A=M",
        "D=A+1",
        at(SP),
        "M=D",
        *_restore(THAT, 1),
        *_restore(THIS, 2),
        *_restore(ARG, 3),
        *_restore(LCL, 4),
        at(SCRATCH_RET),
        "A=M",
        "0;JMP",
    ]

# ---------- despacho ----------

_EMITTERS: Dict[type, Callable[[GeneratorContext, Instruction], List[str]]] = {
    ArithmeticLogical: _arithmetic,
    PushPop: _push_pop,
    Label: _label,
    Goto: _goto,
    IfGoto: _if_goto,
    Function: _function,
    Call: _call,
    Return: _return,
}

def generate(ctx: GeneratorContext, ins: Instruction) -> List[str]:
    """Traduce una instrucción a líneas de ensamblador Hack.

    Function y Call modifican ctx (función abierta y contador de llamadas).
    Una instrucción degradada (payload=None) o con segmento/operador
    desconocido produce una lista vacía.
    """
    if ins.payload is None:
        return []
    emit = _EMITTERS[type(ins.payload)]
    return emit(ctx, ins)

def bootstrap() -> List[str]:
    """SP=256, cuatro valores de marco de relleno y salto a Sys.init."""
    return [
        at(STACK_BASE),
        "D=A",
        at(SP),
        "M=D",
        *push_cell(LCL),
        *push_cell(ARG),
        *push_cell(THIS),
        *push_cell(THAT),
        at(ENTRY_POINT),
        "0;JMP",
    ]
