from enum import Enum


class ErrorKind(Enum):
    LABEL_NOT_FOUND = 'label-not-found'
    DUPLICATE_LABEL = 'duplicate-label'
    REGISTER_INDEX_OUT_OF_RANGE = 'register-index-out-of-range'
    INPUT_PARSE_ERROR = 'input-parse-error'
    PC_OUT_OF_RANGE = 'pc-out-of-range'
    STEP_LIMIT_EXCEEDED = 'step-limit-exceeded'
    SYNTAX_ERROR = 'syntax-error'


class VMError(Exception):
    ''' Fatal fault, never retried '''
    kind: ErrorKind


class LabelNotFound(VMError):
    kind = ErrorKind.LABEL_NOT_FOUND

    def __init__(self, name: str):
        super().__init__(f'Expected label with name {name}')
        self.name = name


class DuplicateLabel(VMError):
    kind = ErrorKind.DUPLICATE_LABEL

    def __init__(self, name: str, first: int, second: int):
        super().__init__(f'Label {name} defined at {first} and {second}')
        self.name = name
        self.first = first
        self.second = second


class RegisterIndexOutOfRange(VMError):
    kind = ErrorKind.REGISTER_INDEX_OUT_OF_RANGE

    def __init__(self, index: int, size: int):
        super().__init__(f'Register r[{index}] out of range 0..{size - 1}')
        self.index = index
        self.size = size


class InputParseError(VMError):
    kind = ErrorKind.INPUT_PARSE_ERROR

    def __init__(self, token: str | None):
        if token is None:
            message = 'Unexpected end of input'
        else:
            message = f'Expected an integer, got {token!r}'

        super().__init__(message)
        self.token = token


class ProgramCounterOutOfRange(VMError):
    kind = ErrorKind.PC_OUT_OF_RANGE

    def __init__(self, pc: int, length: int):
        super().__init__(f'pc = {pc} outside program of {length} instructions')
        self.pc = pc
        self.length = length


class StepLimitExceeded(VMError):
    kind = ErrorKind.STEP_LIMIT_EXCEEDED

    def __init__(self, limit: int):
        super().__init__(f'No halt after {limit} steps')
        self.limit = limit


class AssemblyError(VMError):
    kind = ErrorKind.SYNTAX_ERROR

    def __init__(self, message: str, lineno: int | None = None):
        if lineno is not None:
            message = f'Line {lineno}: {message}'

        super().__init__(message)
        self.lineno = lineno
