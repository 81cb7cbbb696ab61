from pathlib import Path
import logging as lg
from typing import List
import tomllib

from accvm.common.hwconf import DEFAULT_REGISTER_COUNT


KNOWN_KEYS = {'registers', 'source', 'trace', 'max_steps'}


class MachineSettings:
    registers: List[int]
    source: Path | None
    trace: bool
    max_steps: int | None
    verbose: bool

    def __init__(self):
        self.registers = [0] * DEFAULT_REGISTER_COUNT
        self.source = None
        self.trace = False
        self.max_steps = None
        self.verbose = False

    def update(
        self,
        registers: List[int] | None = None,
        source: Path | None = None,
        trace: bool | None = None,
        max_steps: int | None = None,
        verbose: bool | None = None
    ):
        if registers is not None:
            self.registers = list(registers)

        if source is not None:
            self.source = source

        if trace is not None:
            self.trace = trace

        if max_steps is not None:
            self.max_steps = max_steps

        if verbose is not None:
            self.verbose = verbose

        return self


def parse_settings(text: str, base_dir: Path | None = None) -> MachineSettings:
    config = tomllib.loads(text)
    machine = config.get('machine', {})

    unknown = set(machine) - KNOWN_KEYS

    if unknown:
        raise ValueError(f'Unknown machine settings {sorted(unknown)}')

    registers = machine.get('registers')

    if registers is not None and (
        not isinstance(registers, list) or not all(isinstance(r, int) for r in registers)
    ):
        raise ValueError(f'Registers must be integers, got {registers}')

    source = machine.get('source')

    if source is not None:
        source = Path(source)

        if base_dir is not None and not source.is_absolute():
            source = base_dir / source

    return MachineSettings().update(
        registers=registers,
        source=source,
        trace=machine.get('trace'),
        max_steps=machine.get('max_steps')
    )


def load_settings(path: Path) -> MachineSettings:
    lg.debug(f'Loading settings {path}')
    return parse_settings(path.read_text(), path.parent)
