# src/hack_vm/parser.py
from __future__ import annotations
import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from .lexer import is_comment, split_tokens, parse_uint
from .ast import (
    Instruction, Payload, ArithmeticLogical, PushPop, Label, Goto, IfGoto,
    Function, Call, Return,
)
from .segments import OPERATORS, is_segment
from .diagnostics import Diagnostic, warning

LOG = logging.getLogger("hack_vm.parser")

_JUMPS = {"label": Label, "goto": Goto, "if-goto": IfGoto}
_FRAMES = {"function": Function, "call": Call}

class Parser:
    """Recorre las líneas de un módulo y produce Instruction de forma perezosa.

    Reglas:
      - Líneas vacías y las que empiezan por '//' se saltan sin consumir índice.
      - Un comentario '//' al final de una instrucción se ignora.
      - Cada línea retenida se divide por espacios y se despacha por número de
        tokens y primer token.
      - Una línea que no encaja en ninguna forma produce una Instruction con
        payload=None y un diagnóstico de advertencia; nunca se aborta.
    """

    def __init__(self, lines: Iterable[str], *, filename: Optional[str] = None) -> None:
        self._lines = iter(lines)
        self.filename = filename
        self.diagnostics: List[Diagnostic] = []
        self._index = -1
        self._lineno = 0

    def __iter__(self) -> Iterator[Instruction]:
        return self

    def __next__(self) -> Instruction:
        for raw in self._lines:
            self._lineno += 1
            text = raw.strip()
            if not text or is_comment(text):
                continue
            self._index += 1
            return self.parse_line(text, self._index, line=self._lineno)
        raise StopIteration

    def _warn(self, message: str, line: Optional[int], hint: Optional[str] = None) -> None:
        d = warning(message, line=line, file=self.filename, hint=hint)
        LOG.debug("%s", d)
        self.diagnostics.append(d)

    def parse_line(self, text: str, index: int, *, line: Optional[int] = None) -> Instruction:
        """Analiza una línea ya recortada; index es su posición en el módulo."""
        seen = len(self.diagnostics)
        payload = self._payload(split_tokens(text), line)
        if payload is None and len(self.diagnostics) == seen:
            self._warn(f"Instrucción no reconocida: '{text}'", line,
                       hint="se emite solo el comentario")
        return Instruction(raw_text=text, index=index, payload=payload, line=line)

    def _payload(self, tokens: List[str], line: Optional[int]) -> Optional[Payload]:
        if len(tokens) == 1:
            op = tokens[0]
            if op == "return":
                return Return()
            if op in OPERATORS:
                return ArithmeticLogical(op)
            return None

        if len(tokens) == 2:
            kind = _JUMPS.get(tokens[0])
            return kind(tokens[1]) if kind else None

        if len(tokens) == 3:
            head, name, count_tok = tokens
            count = parse_uint(count_tok)
            if count is None:
                if head in _FRAMES or head in ("push", "pop"):
                    self._warn(f"Se esperaba un entero no negativo: '{count_tok}'", line)
                return None
            if head in _FRAMES:
                return _FRAMES[head](name, count)
            if head in ("push", "pop"):
                if not is_segment(name):
                    self._warn(f"Segmento desconocido: '{name}'", line,
                               hint="local, argument, this, that, constant, static, temp o pointer")
                elif head == "pop" and name == "constant":
                    self._warn("No se puede hacer pop sobre 'constant'", line)
                return PushPop(head, name, count)
        return None

def parse(text: str, *, filename: Optional[str] = None) -> Tuple[List[Instruction], List[Diagnostic]]:
    """Devuelve (instructions, diagnostics) para el texto completo de un módulo."""
    p = Parser(text.splitlines(), filename=filename)
    instructions = list(p)
    return instructions, p.diagnostics
