import logging as lg
from typing import Dict, Iterable, Iterator, Tuple

from accvm.common.hwconf import PC_MARKER, ADDRESS_WIDTH
from accvm.common.errors import LabelNotFound, DuplicateLabel
from accvm.common.instructions import Instruction, Label, jump_target


class Program:
    ''' Instruction sequence with its label table, resolved once at load '''
    instructions: Tuple[Instruction, ...]
    labels: Dict[str, int]

    def __init__(self, instructions: Iterable[Instruction]):
        self.instructions = tuple(instructions)
        self.labels = dict()

        for address, instr in enumerate(self.instructions):
            if not isinstance(instr, Label):
                continue

            if instr.name in self.labels:
                raise DuplicateLabel(instr.name, self.labels[instr.name], address)

            self.labels[instr.name] = address
            lg.debug(f'Label {instr.name} @ {address}')

        # Dangling jumps are rejected before anything runs
        for instr in self.instructions:
            target = jump_target(instr)

            if target is not None and target not in self.labels:
                raise LabelNotFound(target)

    def address(self, name: str) -> int:
        try:
            return self.labels[name]
        except KeyError:
            raise LabelNotFound(name) from None

    def listing(self, pc: int) -> Iterator[str]:
        for address, instr in enumerate(self.instructions):
            if address == pc:
                prefix = PC_MARKER
            else:
                prefix = f'{address:{ADDRESS_WIDTH}d}'

            yield f'{prefix} {instr}'

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, address: int) -> Instruction:
        return self.instructions[address]

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)
