from __future__ import annotations
from pathlib import Path
from typing import Iterable, List, Union

def to_asm_lines(blocks: Iterable[List[str]]) -> List[str]:
    return [line for block in blocks for line in block]

def to_asm_text(blocks: Iterable[List[str]]) -> str:
    lines = to_asm_lines(blocks)
    return "".join(line + "\n" for line in lines)

def write_asm(blocks: Iterable[List[str]], path: Union[str, Path]) -> int:
    """Escribe los bloques en path; devuelve el número de líneas escritas."""
    lines = to_asm_lines(blocks)
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")
    return len(lines)
