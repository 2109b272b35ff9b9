'''
dataclases de instrucciones VM (una por tipo) e Instruction
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union, Literal

# ---- Cargas útiles por tipo de instrucción ----

@dataclass(frozen=True)
class ArithmeticLogical:
    """Operador aritmético/lógico: add, sub, neg, eq, gt, lt, and, or, not."""
    op: str

@dataclass(frozen=True)
class PushPop:
    """push/pop sobre un segmento de memoria con desplazamiento >= 0."""
    direction: Literal["push", "pop"]
    segment: str
    offset: int

@dataclass(frozen=True)
class Label:
    """Definición de etiqueta (local a la función abierta)."""
    name: str

@dataclass(frozen=True)
class Goto:
    label: str

@dataclass(frozen=True)
class IfGoto:
    """Salto si la cima de la pila es verdadera (-1)."""
    label: str

@dataclass(frozen=True)
class Function:
    """Cabecera de función con su número de variables locales."""
    name: str
    n_locals: int

@dataclass(frozen=True)
class Call:
    name: str
    n_args: int

@dataclass(frozen=True)
class Return:
    pass

Payload = Union[ArithmeticLogical, PushPop, Label, Goto, IfGoto, Function, Call, Return]

# ---- Nodo a nivel de fuente ----

@dataclass(frozen=True)
class Instruction:
    """Una línea VM ya analizada.

    - raw_text: línea original sin espacios en los extremos (se repite como comentario)
    - index: posición 0-based entre las líneas no vacías y no comentario del módulo
    - payload: None cuando la línea no encaja en ninguna forma conocida
    - line: número de línea 1-based en el fuente (solo para diagnósticos)
    """
    raw_text: str
    index: int
    payload: Optional[Payload] = None
    line: Optional[int] = None

    @property
    def kind(self) -> Optional[str]:
        """Nombre del tipo de instrucción ('PushPop', 'Call', ...) o None si se degradó."""
        if self.payload is None:
            return None
        return type(self.payload).__name__
