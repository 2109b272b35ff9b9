'''
bloques de ensamblador Hack compartidos por todas las instrucciones
'''

from __future__ import annotations
from typing import List

from .segments import SP, SCRATCH_ADDR, COMPARE_JUMPS

# *SP = D; SP++
PUSH_D: List[str] = [
    "@SP",
    "A=M",
    "M=D",
    "@SP",
    "M=M+1",
]

# SP--; D = *SP
POP_D: List[str] = [
    "@SP",
    "M=M-1",
    "A=M",
    "D=M",
]

# SP--; A = SP (M es la cima actual, sin cargarla en D)
_ADDRESS_TOP: List[str] = [
    "@SP",
    "M=M-1",
    "A=M",
]

# *A = D; SP++
_STORE_AND_ADVANCE: List[str] = [
    "M=D",
    "@SP",
    "M=M+1",
]

# *R13 = D
STORE_VIA_SCRATCH: List[str] = [
    f"@{SCRATCH_ADDR}",
    "A=M",
    "M=D",
]

def at(symbol: object) -> str:
    """Instrucción A: '@simbolo' o '@numero'."""
    return f"@{symbol}"

def label(name: str) -> str:
    """Definición de etiqueta: '(nombre)'."""
    return f"({name})"

def push_cell(symbol: str) -> List[str]:
    """Apila el contenido de una celda con nombre (p.ej. LCL o Foo.3)."""
    return [at(symbol), "D=M", *PUSH_D]

def push_constant(value: object) -> List[str]:
    """Apila un inmediato o la dirección de una etiqueta."""
    return [at(value), "D=A", *PUSH_D]

def unary_op(op: str) -> List[str]:
    """Opera sobre la cima en sitio: la desapila, aplica op y vuelve a apilar."""
    return [*_ADDRESS_TOP, op, *_STORE_AND_ADVANCE]

def binary_op(*ops: str) -> List[str]:
    """D = y (cima), A apunta a x; ops deja el resultado en D, que se apila.

    El orden de operandos importa: para 'sub' la operación es D=M-D (x - y).
    """
    return [*POP_D, *_ADDRESS_TOP, *ops, *_STORE_AND_ADVANCE]

def compare_op(op: str, index: int) -> List[str]:
    """Comparación eq/gt/lt con etiquetas únicas por índice de instrucción.

    Resultado: -1 (todos los bits a 1) si se cumple, 0 en otro caso. Los saltos
    pisan A, así que se vuelve a direccionar la cima antes de guardar.
    """
    prefix = f"{op}.{index}"
    true_lbl = f"{prefix}.TRUE"
    end_lbl = f"{prefix}.END"
    return binary_op(
        "D=M-D",
        at(true_lbl),
        f"D;{COMPARE_JUMPS[op]}",
        at(end_lbl),
        "D=0;JMP",
        label(true_lbl),
        "D=-1",
        label(end_lbl),
        at(SP),
        "A=M",
    )
