from typing import List

from accvm.common.errors import RegisterIndexOutOfRange


class RegisterSet():
    acc: int        # Accumulator
    pc: int         # Program counter
    r: List[int]    # Indexed registers, fixed length

    def __init__(self, *r: int):
        self.r = list(r)
        self.acc = 0
        self.pc = 0

    @property
    def size(self) -> int:
        return len(self.r)

    def check_index(self, index: int) -> int:
        # Negative indices would silently wrap around
        if not 0 <= index < len(self.r):
            raise RegisterIndexOutOfRange(index, len(self.r))

        return index

    def copy(self) -> 'RegisterSet':
        other = RegisterSet(*self.r)
        other.acc = self.acc
        other.pc = self.pc
        return other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RegisterSet):
            return NotImplemented

        return (self.r, self.acc, self.pc) == (other.r, other.acc, other.pc)

    def __str__(self) -> str:
        lines = ['REGISTERS:']
        lines.extend(f'r[{i}] = {v}' for i, v in enumerate(self.r))
        lines.append(f'acc = {self.acc}')
        lines.append(f'pc = {self.pc}')
        return '\n'.join(lines)
