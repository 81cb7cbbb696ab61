import logging as lg
from typing import List, Any, Tuple, Type

from accvm.common.errors import AssemblyError
from accvm.common.instructions import Instruction
import accvm.common.instructions as ins

Tokens = List[Any]


class FPP:
    ''' First pass processor '''
    instructions: List[Instruction]

    def __init__(self):
        self.instructions = list()
        self.modulename = '<source>'

    @property
    def offset(self) -> int:
        return len(self.instructions)

    # Handlers
    def issue(self, instr: Instruction):
        lg.debug(f'Issuing {self.offset}: {str(instr).strip()}')
        self.instructions.append(instr)

    def on_label(self, tokens: Tokens):
        self.issue(ins.Label(str(tokens[0])))

    def on_reg(self, args: Tuple[Type[ins.RegisterInstruction], int]):
        (cls, index) = args
        self.issue(cls(index))

    def on_jump(self, args: Tuple[Type[ins.JumpInstruction], str]):
        (cls, labelname) = args
        self.issue(cls(labelname))

    def on_hlt(self, _: Tokens):
        self.issue(ins.Halt())

    def on_in(self, tokens: Tokens):
        if len(tokens) > 1:
            self.issue(ins.In(tokens[1]))
        else:
            self.issue(ins.In())

    def on_out(self, tokens: Tokens):
        if len(tokens) > 1:
            self.issue(ins.Out(tokens[1]))
        else:
            self.issue(ins.Out())

    def on_fail(self, args: Tuple[int, str]):
        (lineno, rest) = args
        raise AssemblyError(f'Unknown command {rest.strip()} in {self.modulename}', lineno)
