'''
tablas de segmentos VM → celdas Hack, celdas reservadas y constantes
'''

from __future__ import annotations
from typing import Dict

# Celdas reservadas de la máquina Hack
SP = "SP"
LCL = "LCL"
ARG = "ARG"
THIS = "THIS"
THAT = "THAT"
SCRATCH_ADDR = "R13"   # dirección calculada en pop, base del marco, contador de bucle
SCRATCH_RET = "R14"    # dirección de retorno durante 'return'

STACK_BASE = 256
TEMP_BASE = 5
FRAME_SIZE = 5         # dirección de retorno + LCL, ARG, THIS, THAT
ENTRY_POINT = "Sys.init"

# Segmentos direccionados a través de su puntero base
SEGMENT_POINTERS: Dict[str, str] = {
    "local": LCL,
    "argument": ARG,
    "this": THIS,
    "that": THAT,
}

SEGMENTS = frozenset(SEGMENT_POINTERS) | {"constant", "static", "temp", "pointer"}

# Saltos de las comparaciones
COMPARE_JUMPS: Dict[str, str] = {
    "eq": "JEQ",
    "gt": "JGT",
    "lt": "JLT",
}

# Operaciones de registro de los operadores directos
BINARY_OPS: Dict[str, str] = {
    "add": "D=D+M",
    "sub": "D=M-D",   # x - y: M es x (segundo operando), D es y
    "and": "D=D&M",
    "or": "D=D|M",
}

UNARY_OPS: Dict[str, str] = {
    "neg": "D=-M",
    "not": "D=!M",
}

OPERATORS = frozenset(BINARY_OPS) | frozenset(UNARY_OPS) | frozenset(COMPARE_JUMPS)

def is_segment(name: str) -> bool:
    """Indica si el nombre es uno de los ocho segmentos VM."""
    return name in SEGMENTS

def pointer_cell(offset: int) -> str:
    """Segmento 'pointer': 0 → THIS, cualquier otro → THAT."""
    return THIS if offset == 0 else THAT
