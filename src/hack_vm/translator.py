from __future__ import annotations
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .parser import Parser
from .codegen import GeneratorContext, generate, bootstrap
from .diagnostics import Diagnostic
from .writers import to_asm_lines, write_asm

LOG = logging.getLogger("hack_vm.translator")

SOURCE_SUFFIX = ".vm"
OUTPUT_SUFFIX = ".asm"

Module = Tuple[str, Iterable[str]]

def translate_module(parser: Parser, ctx: GeneratorContext) -> Iterator[List[str]]:
    """Un bloque por instrucción: comentario con la línea original + ensamblador."""
    count = 0
    for ins in parser:
        count += 1
        yield [f"// {ins.raw_text}", *generate(ctx, ins)]
    LOG.debug("módulo %s: %d instrucciones", ctx.module_name, count)

def translate_text(text: str, module_name: str, *,
                   filename: Optional[str] = None) -> Tuple[List[str], List[Diagnostic]]:
    """Traduce el texto de un módulo. Devuelve (asm_lines, diagnostics)."""
    parser = Parser(text.splitlines(), filename=filename)
    lines = to_asm_lines(translate_module(parser, GeneratorContext(module_name)))
    return lines, parser.diagnostics

def translate_program(modules: Iterable[Module], *, bootstrap_code: bool = True,
                      diagnostics: Optional[List[Diagnostic]] = None) -> Iterator[List[str]]:
    """Traduce varios módulos en orden, con el arranque delante si se pide.

    Cada módulo tiene su propio GeneratorContext (espacio de static y contador
    de llamadas). Los diagnósticos de cada módulo se añaden a 'diagnostics'.
    """
    if bootstrap_code:
        yield ["// bootstrap", *bootstrap()]
    for name, lines in modules:
        parser = Parser(lines, filename=name)
        yield from translate_module(parser, GeneratorContext(name))
        if diagnostics is not None:
            diagnostics.extend(parser.diagnostics)

def module_name_from_path(path: Union[str, Path]) -> str:
    return Path(path).stem

def discover_sources(path: Union[str, Path]) -> Tuple[Path, List[Path], bool]:
    """Devuelve (salida, fuentes, usar_arranque).

    - archivo .vm → él mismo, salida '<stem>.asm' al lado, sin arranque
    - directorio → sus .vm (no recursivo, por nombre), salida '<dir>/<dir>.asm', con arranque
    """
    p = Path(path)
    if p.is_dir():
        sources = sorted(f for f in p.iterdir() if f.is_file() and f.suffix == SOURCE_SUFFIX)
        if not sources:
            raise ValueError(f"no hay archivos {SOURCE_SUFFIX} en {p}")
        out = p / (p.resolve().name + OUTPUT_SUFFIX)
        return out, sources, True
    if p.is_file():
        if p.suffix != SOURCE_SUFFIX:
            raise ValueError(f"se esperaba un archivo {SOURCE_SUFFIX}: {p}")
        return p.with_suffix(OUTPUT_SUFFIX), [p], False
    raise FileNotFoundError(f"no existe: {p}")

def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Hack VM → Hack assembly translator")
    ap.add_argument("source", help="archivo .vm o directorio con archivos .vm")
    ap.add_argument("-o", "--output", help="archivo .asm de salida (por defecto junto a la fuente)")
    boot = ap.add_mutually_exclusive_group()
    boot.add_argument("--bootstrap", dest="bootstrap", action="store_true", default=None,
                      help="emitir el código de arranque (SP=256; Sys.init)")
    boot.add_argument("--no-bootstrap", dest="bootstrap", action="store_false",
                      help="no emitir el código de arranque")
    ap.add_argument("--strict", action="store_true",
                    help="fallar si alguna línea no se reconoce")
    ap.add_argument("--log-level", default=os.environ.get("HACK_VM_LOG", "WARNING"),
                    help="nivel de logging (por defecto WARNING)")
    return ap

def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    _configure_logging(args.log_level)

    try:
        out, sources, use_bootstrap = discover_sources(args.source)
        modules = []
        for src in sources:
            LOG.info("%s seleccionado para traducir", src.name)
            text = src.read_text(encoding="utf-8")
            modules.append((module_name_from_path(src), text.splitlines()))
    except (OSError, ValueError) as ex:
        print(f"ERROR: no pude leer {args.source}: {ex}", file=sys.stderr)
        return 2

    if args.output:
        out = Path(args.output)
    if args.bootstrap is not None:
        use_bootstrap = args.bootstrap

    diags: List[Diagnostic] = []
    blocks = list(translate_program(modules, bootstrap_code=use_bootstrap, diagnostics=diags))

    for d in diags:
        print(d, file=sys.stderr)
    if args.strict and diags:
        return 1

    try:
        n = write_asm(blocks, out)
    except OSError as ex:
        print(f"ERROR al escribir {out}: {ex}", file=sys.stderr)
        return 3

    LOG.info("%d líneas escritas en %s", n, out)
    print(f"OK: {len(sources)} módulo(s) → {out}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
