from pathlib import Path
import logging as lg
import sys
from typing import Tuple

import click

from accvm.common.errors import VMError
from accvm.sasm.asm import CompilationItem, compile_items
from accvm.runtime.program import Program


def collect_file(filepath: str | Path) -> CompilationItem:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Collecting file {filepath}')
    item = CompilationItem()
    item.contents = filepath.read_text()
    item.modulename = filepath.stem
    return item


def collect_files(filepaths: list[Path]) -> list[CompilationItem]:
    return [collect_file(path) for path in filepaths]


def load_program(filepaths: list[Path]) -> Program:
    return Program(compile_items(collect_files(filepaths)))


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--check', is_flag=True, help='Only validate, print nothing')
@click.argument('sources', nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
def listing(verbose: bool, check: bool, sources: Tuple[Path]):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("ACCVM ASM")

    try:
        program = load_program(list(sources))

    except VMError as e:
        lg.error(f'Assembly failed ({e.kind.value}): {e}')
        sys.exit(1)

    if check:
        lg.info(f'{len(program)} instructions, {len(program.labels)} labels')
        return

    # No pc marker in a static listing
    for line in program.listing(-1):
        click.echo(line)


if __name__ == "__main__":
    listing()
