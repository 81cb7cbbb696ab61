# type: ignore
import pytest

import unit_utils

FACTORIAL_REGISTERS = (1, 0, 1, 0, 0, 0, 0)


@pytest.fixture
def factorial_program():
    yield unit_utils.assemble_file('testdata/factorial.vasm')


@pytest.fixture
def trace_log():
    snapshots = []
    yield snapshots
