import logging as lg
from typing import List

from accvm.common.instructions import Instruction
from accvm.sasm.fpp import FPP
import accvm.sasm.grammar as grammar


class CompilationItem:
    modulename: str = '<source>'
    contents: str


def parse_item(fpp: FPP, item: CompilationItem):
    lg.info(f'Processing {item.modulename}')
    fpp.modulename = item.modulename
    actions = grammar.program.parse_string(item.contents, parse_all=True)

    for (func, arg) in actions:  # type: ignore
        func(fpp, arg)


def compile_items(items: List[CompilationItem]) -> List[Instruction]:
    # Labels share one table, so all items go through a single pass
    fpp = FPP()

    for item in items:
        parse_item(fpp, item)

    return fpp.instructions


def assemble(contents: str, modulename: str = '<source>') -> List[Instruction]:
    item = CompilationItem()
    item.modulename = modulename
    item.contents = contents
    return compile_items([item])
