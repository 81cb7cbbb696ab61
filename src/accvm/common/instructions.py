''' Instruction set '''

from dataclasses import dataclass
from typing import TypeAlias

from accvm.common.hwconf import DEFAULT_IN_PROMPT


@dataclass(frozen=True)
class Label:
    name: str

    def __str__(self) -> str:
        return f'LABEL {self.name}:'


@dataclass(frozen=True)
class Add:
    index: int  # acc += r[index]

    def __str__(self) -> str:
        return f'    ADD acc += r[{self.index}]'


@dataclass(frozen=True)
class Sub:
    index: int  # acc -= r[index]

    def __str__(self) -> str:
        return f'    SUB acc -= r[{self.index}]'


@dataclass(frozen=True)
class Store:
    index: int  # r[index] = acc

    def __str__(self) -> str:
        return f'    STA r[{self.index}] = acc'


@dataclass(frozen=True)
class Load:
    index: int  # acc = r[index]

    def __str__(self) -> str:
        return f'    LDA acc = r[{self.index}]'


@dataclass(frozen=True)
class Jump:
    label: str

    def __str__(self) -> str:
        return f'    JMP {self.label}'


@dataclass(frozen=True)
class JumpIfZero:
    label: str  # if acc == 0

    def __str__(self) -> str:
        return f'    JZ {self.label}'


@dataclass(frozen=True)
class JumpIfNonNegative:
    label: str  # if acc >= 0

    def __str__(self) -> str:
        return f'    JGE {self.label}'


@dataclass(frozen=True)
class Halt:
    def __str__(self) -> str:
        return '    HLT'


@dataclass(frozen=True)
class In:
    prompt: str = DEFAULT_IN_PROMPT

    def __str__(self) -> str:
        return f'    IN acc = "{self.prompt}"'


@dataclass(frozen=True)
class Out:
    prompt: str = ''

    def __str__(self) -> str:
        return f'    OUT "{self.prompt}" <acc>'


Instruction: TypeAlias = Label | Add | Sub | Store | Load \
    | Jump | JumpIfZero | JumpIfNonNegative \
    | Halt | In | Out

RegisterInstruction: TypeAlias = Add | Sub | Store | Load
JumpInstruction: TypeAlias = Jump | JumpIfZero | JumpIfNonNegative

JUMPS = (Jump, JumpIfZero, JumpIfNonNegative)


def jump_target(instr: Instruction) -> str | None:
    if isinstance(instr, JUMPS):
        return instr.label

    return None
