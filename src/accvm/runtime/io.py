''' Console devices of the machine '''

import sys
import re
from collections import deque
from typing import Deque, Iterable, Protocol, TextIO

from accvm.common.errors import InputParseError


INT_TOKEN = re.compile(r'[+-]?[0-9]+')


class InputSource(Protocol):
    def next_token(self) -> str | None:
        ''' Next whitespace-delimited token, None at end of input '''
        ...


class TokenReader:
    ''' Splits a text stream into tokens, one line at a time '''

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream
        self.pending: Deque[str] = deque()

    @classmethod
    def from_tokens(cls, tokens: Iterable[object]) -> 'TokenReader':
        reader = cls(None)
        reader.pending.extend(str(t) for t in tokens)
        return reader

    def next_token(self) -> str | None:
        # Only pull another line when the current one is used up,
        # so an interactive console is never read ahead
        while not self.pending:
            if self.stream is None:
                return None

            line = self.stream.readline()

            if line == '':
                return None

            self.pending.extend(line.split())

        return self.pending.popleft()


def read_int(source: InputSource) -> int:
    token = source.next_token()

    if token is None or not INT_TOKEN.fullmatch(token):
        raise InputParseError(token)

    return int(token)


def stdin_reader() -> TokenReader:
    return TokenReader(sys.stdin)
