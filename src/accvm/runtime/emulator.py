import sys
from pathlib import Path
import logging as lg
import traceback
from typing import TextIO, Tuple

import click

from accvm.common.config import MachineSettings, load_settings
from accvm.common.errors import VMError, AssemblyError, LabelNotFound, DuplicateLabel
from accvm.runtime.io import InputSource
from accvm.runtime.machine import Machine, log_trace
from accvm.runtime.registers import RegisterSet
import accvm.sasm.masm as masm


EXIT_HALT = 0
EXIT_PROGRAM_ERROR = 1
EXIT_FAULT = 4
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100


class ProgramError(Exception):
    ''' Program rejected before execution '''

    def __init__(self, cause: VMError):
        super().__init__(str(cause))
        self.cause = cause


def load_machine(
    settings: MachineSettings,
    input: InputSource | None = None,
    output: TextIO | None = None
) -> Machine:
    if settings.source is None:
        raise click.UsageError('No program source given')

    try:
        program = masm.load_program([settings.source])
        return Machine(
            RegisterSet(*settings.registers),
            program,
            input=input,
            output=output,
            trace=log_trace if settings.trace else None
        )

    except (AssemblyError, LabelNotFound, DuplicateLabel) as e:
        raise ProgramError(e) from e


def execute(
    settings: MachineSettings,
    input: InputSource | None = None,
    output: TextIO | None = None
) -> Machine:
    machine = load_machine(settings, input, output)
    steps = machine.run(settings.max_steps)
    lg.info(f'Halted at pc = {machine.registers.pc} after {steps} steps')
    return machine


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-c', '--config', type=click.Path(exists=True, path_type=Path),
              help='Machine settings (TOML)')
@click.option('-r', '--register', 'registers', type=int, multiple=True,
              help='Initial register value, repeat for r[0], r[1], ...')
@click.option('--trace', is_flag=True, help='Dump machine state after each step')
@click.option('--max-steps', type=click.IntRange(min=1), help='Fail if not halted after N steps')
@click.argument('source', required=False, type=click.Path(exists=True, path_type=Path))
def run(
    verbose: bool,
    config: Path | None,
    registers: Tuple[int],
    trace: bool,
    max_steps: int | None,
    source: Path | None
):
    settings = load_settings(config) if config is not None else MachineSettings()
    settings.update(
        registers=list(registers) if registers else None,
        source=source,
        trace=trace or None,
        max_steps=max_steps,
        verbose=verbose
    )

    lg.basicConfig(level=lg.DEBUG if settings.verbose or settings.trace else lg.INFO)
    lg.info("ACCVM")

    try:
        execute(settings)
        sys.exit(EXIT_HALT)

    except ProgramError as e:
        lg.error(f'Program rejected ({e.cause.kind.value}): {e}')
        sys.exit(EXIT_PROGRAM_ERROR)

    except VMError as e:
        lg.error(f'Execution halted on fault ({e.kind.value}): {e}')
        sys.exit(EXIT_FAULT)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except click.ClickException:
        raise

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
