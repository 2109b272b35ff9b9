'''
simulador mínimo de la CPU Hack para ejecutar en tests el ensamblador generado
'''

from __future__ import annotations
from typing import Dict, List, Optional, Tuple

RAM_SIZE = 32768
VAR_BASE = 16

PREDEFINED: Dict[str, int] = {
    "SP": 0, "LCL": 1, "ARG": 2, "THIS": 3, "THAT": 4,
    "SCREEN": 16384, "KBD": 24576,
    **{f"R{i}": i for i in range(16)},
}

# X es A o M según la instrucción
_COMP = {
    "0": lambda d, x: 0,
    "1": lambda d, x: 1,
    "-1": lambda d, x: -1,
    "D": lambda d, x: d,
    "X": lambda d, x: x,
    "!D": lambda d, x: ~d,
    "!X": lambda d, x: ~x,
    "-D": lambda d, x: -d,
    "-X": lambda d, x: -x,
    "D+1": lambda d, x: d + 1,
    "X+1": lambda d, x: x + 1,
    "D-1": lambda d, x: d - 1,
    "X-1": lambda d, x: x - 1,
    "D+X": lambda d, x: d + x,
    "X+D": lambda d, x: d + x,
    "D-X": lambda d, x: d - x,
    "X-D": lambda d, x: x - d,
    "D&X": lambda d, x: d & x,
    "X&D": lambda d, x: d & x,
    "D|X": lambda d, x: d | x,
    "X|D": lambda d, x: d | x,
}

_JUMPS = {
    "JMP": lambda v: True,
    "JEQ": lambda v: v == 0,
    "JNE": lambda v: v != 0,
    "JGT": lambda v: v > 0,
    "JGE": lambda v: v >= 0,
    "JLT": lambda v: v < 0,
    "JLE": lambda v: v <= 0,
}

def s16(x: int) -> int:
    """Valor con signo de 16 bits (complemento a dos)."""
    x &= 0xFFFF
    return x - 0x10000 if x & 0x8000 else x

def assemble(asm: List[str]) -> Tuple[List[str], Dict[str, int]]:
    """Dos pasadas: etiquetas → dirección ROM, variables → RAM desde 16."""
    rom: List[str] = []
    symbols = dict(PREDEFINED)
    for raw in asm:
        line = raw.split("//", 1)[0].strip()
        if not line:
            continue
        if line.startswith("(") and line.endswith(")"):
            name = line[1:-1]
            if name in symbols:
                raise ValueError(f"etiqueta redefinida: {name}")
            symbols[name] = len(rom)
            continue
        rom.append(line)

    next_var = VAR_BASE
    for line in rom:
        if line.startswith("@"):
            sym = line[1:]
            if not sym.isdigit() and sym not in symbols:
                symbols[sym] = next_var
                next_var += 1
    return rom, symbols

class HackCPU:
    def __init__(self, asm: List[str], ram: Optional[Dict[int, int]] = None) -> None:
        self.rom, self.symbols = assemble(asm)
        self.ram = [0] * RAM_SIZE
        for addr, value in (ram or {}).items():
            self.ram[addr] = s16(value)
        self.a = 0
        self.d = 0
        self.pc = 0
        self.steps = 0

    def step(self) -> None:
        ins = self.rom[self.pc]
        if ins.startswith("@"):
            sym = ins[1:]
            self.a = int(sym) if sym.isdigit() else self.symbols[sym]
            self.pc += 1
            return

        dest, rest = ins.split("=", 1) if "=" in ins else ("", ins)
        comp, jump = rest.split(";", 1) if ";" in rest else (rest, "")
        x = self.ram[self.a] if "M" in comp else self.a
        value = s16(_COMP[comp.replace("M", "X").replace("A", "X")](self.d, x))

        old_a = self.a
        if "M" in dest:
            self.ram[old_a] = value
        if "A" in dest:
            self.a = value
        if "D" in dest:
            self.d = value

        if jump and _JUMPS[jump](value):
            self.pc = old_a
        else:
            self.pc += 1

    def run(self, *, stop_at: Optional[str] = None, max_steps: int = 200_000) -> "HackCPU":
        """Ejecuta hasta salir de la ROM o llegar a la etiqueta stop_at."""
        stop = self.symbols[stop_at] if stop_at else None
        while self.pc < len(self.rom) and self.pc != stop:
            if self.steps >= max_steps:
                raise RuntimeError(f"demasiados pasos (pc={self.pc})")
            self.step()
            self.steps += 1
        return self

    @property
    def sp(self) -> int:
        return self.ram[0]

    def stack(self, base: int = 256) -> List[int]:
        return self.ram[base:self.sp]

    def cell(self, symbol: str) -> int:
        return self.ram[self.symbols[symbol]]
