import sys
import logging as lg
from typing import Callable, Iterable, TextIO, TypeAlias

from accvm.common.errors import ProgramCounterOutOfRange, StepLimitExceeded
from accvm.common.instructions import Instruction, RegisterInstruction, JumpInstruction
import accvm.common.instructions as ins
from accvm.runtime.registers import RegisterSet
from accvm.runtime.program import Program
from accvm.runtime.io import InputSource, read_int, stdin_reader


TraceSink: TypeAlias = Callable[[str], None]


def log_trace(snapshot: str):
    lg.debug(snapshot)


class Machine():
    registers: RegisterSet
    program: Program
    halted: bool
    steps: int

    def __init__(
        self,
        registers: RegisterSet,
        instructions: Program | Iterable[Instruction],
        input: InputSource | None = None,
        output: TextIO | None = None,
        trace: TraceSink | None = None
    ):
        if isinstance(instructions, Program):
            self.program = instructions
        else:
            self.program = Program(instructions)    # Fails on bad labels

        self.registers = registers               # Owned, mutated in place
        self.registers.pc = 0

        self.input = input if input is not None else stdin_reader()
        self.output = output if output is not None else sys.stdout
        self.trace = trace

        self.halted = False
        self.steps = 0

    # - Helpers - #

    @property
    def tracing(self) -> bool:
        return self.trace is not None

    def set_trace(self, trace: TraceSink | None):
        self.trace = trace

    def reg_index(self, instr: RegisterInstruction) -> int:
        return self.registers.check_index(instr.index)

    def jump(self, instr: JumpInstruction) -> int:
        return self.program.address(instr.label) - self.registers.pc

    # - Operations - #
    # Each returns the displacement to apply to pc

    def label(self, instr: ins.Label) -> int:
        return 1

    def add(self, instr: ins.Add) -> int:
        self.registers.acc += self.registers.r[self.reg_index(instr)]
        return 1

    def sub(self, instr: ins.Sub) -> int:
        self.registers.acc -= self.registers.r[self.reg_index(instr)]
        return 1

    def sta(self, instr: ins.Store) -> int:
        self.registers.r[self.reg_index(instr)] = self.registers.acc
        return 1

    def lda(self, instr: ins.Load) -> int:
        self.registers.acc = self.registers.r[self.reg_index(instr)]
        return 1

    def jmp(self, instr: ins.Jump) -> int:
        return self.jump(instr)

    def jz(self, instr: ins.JumpIfZero) -> int:
        if self.registers.acc == 0:
            return self.jump(instr)

        return 1

    def jge(self, instr: ins.JumpIfNonNegative) -> int:
        if self.registers.acc >= 0:
            return self.jump(instr)

        return 1

    def hlt(self, instr: ins.Halt) -> int:
        return 0

    def inp(self, instr: ins.In) -> int:
        self.output.write(instr.prompt)
        self.output.flush()
        self.registers.acc = read_int(self.input)
        return 1

    def out(self, instr: ins.Out) -> int:
        self.output.write(f'{instr.prompt}{self.registers.acc}\n')
        self.output.flush()
        return 1

    HANDLERS = {
        ins.Label: label,
        ins.Add: add,
        ins.Sub: sub,
        ins.Store: sta,
        ins.Load: lda,
        ins.Jump: jmp,
        ins.JumpIfZero: jz,
        ins.JumpIfNonNegative: jge,
        ins.Halt: hlt,
        ins.In: inp,
        ins.Out: out
    }

    # -- Implementation -- #

    def step(self) -> bool:
        ''' Executes one instruction, returns whether pc moved '''
        if self.halted:
            return False

        pc = self.registers.pc

        if not 0 <= pc < len(self.program):
            raise ProgramCounterOutOfRange(pc, len(self.program))

        instr = self.program[pc]
        handler = self.HANDLERS[type(instr)]
        self.registers.pc = pc + handler(self, instr)
        self.steps += 1

        # No progress is the only halt condition
        progressed = self.registers.pc != pc

        if not progressed:
            self.halted = True
            lg.debug(f'Halted at {pc} after {self.steps} steps')

        # State is fully committed before the sink sees it
        if self.trace is not None:
            self.trace(self.snapshot())

        return progressed

    def run(self, max_steps: int | None = None) -> int:
        ''' Steps until no progress, returns the number of steps taken '''
        start = self.steps

        while self.step():
            if max_steps is not None and self.steps - start >= max_steps:
                raise StepLimitExceeded(max_steps)

        return self.steps - start

    def snapshot(self) -> str:
        lines = [str(self.registers), 'COMMANDS:']
        lines.extend(self.program.listing(self.registers.pc))
        return '\n'.join(lines)

    def __str__(self) -> str:
        return self.snapshot()
