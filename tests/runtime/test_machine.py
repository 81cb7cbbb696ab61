import pytest

import accvm.common.instructions as ins
from accvm.common.errors import (
    LabelNotFound, DuplicateLabel, RegisterIndexOutOfRange, InputParseError,
    ProgramCounterOutOfRange, StepLimitExceeded, VMError, ErrorKind
)
from accvm.runtime.machine import Machine
from accvm.runtime.registers import RegisterSet

from unit_utils import make_machine, output_of


def branch_program(jump):
    return [
        ins.Load(0),
        jump('target'),
        ins.Halt(),
        ins.Label('target'),
        ins.Halt()
    ]


def test_single_halt():
    machine = make_machine([ins.Halt()])

    assert machine.run() == 1
    assert machine.registers.pc == 0
    assert machine.halted


def test_halt_step_reports_no_progress():
    machine = make_machine([ins.Halt()])

    assert not machine.step()
    assert machine.registers.pc == 0
    assert machine.halted

    # Terminal state
    assert not machine.step()
    assert machine.steps == 1


def test_label_is_a_no_op():
    machine = make_machine([ins.Label('x'), ins.Halt()], registers=(3,))

    assert machine.step()
    assert machine.registers.pc == 1
    assert machine.registers.acc == 0
    assert machine.registers.r == [3]


def test_register_operations():
    machine = make_machine(
        [ins.Load(0), ins.Add(1), ins.Sub(2), ins.Store(3), ins.Halt()],
        registers=(10, 5, 3, 0)
    )
    machine.run()

    assert machine.registers.acc == 12
    assert machine.registers.r == [10, 5, 3, 12]
    assert machine.registers.pc == 4


@pytest.mark.parametrize('value', [-7, 0, 1, 12345678901234567890])
def test_add_then_sub_keeps_acc(value):
    machine = make_machine([ins.Load(0), ins.Add(1), ins.Sub(1), ins.Halt()], registers=(42, value))
    machine.run()

    assert machine.registers.acc == 42


@pytest.mark.parametrize('acc,taken', [(-1, False), (0, True), (1, False)])
def test_jump_if_zero(acc, taken):
    machine = make_machine(branch_program(ins.JumpIfZero), registers=(acc,))
    machine.step()
    machine.step()

    assert machine.registers.pc == (3 if taken else 2)


@pytest.mark.parametrize('acc,taken', [(-5, False), (-1, False), (0, True), (7, True)])
def test_jump_if_non_negative(acc, taken):
    machine = make_machine(branch_program(ins.JumpIfNonNegative), registers=(acc,))
    machine.step()
    machine.step()

    assert machine.registers.pc == (3 if taken else 2)


def test_unconditional_jump_backwards():
    machine = make_machine([
        ins.Label('top'),
        ins.Load(0),
        ins.JumpIfZero('end'),
        ins.Sub(1),
        ins.Store(0),
        ins.Jump('top'),
        ins.Label('end'),
        ins.Halt()
    ], registers=(3, 1))

    steps = machine.run()

    assert machine.registers.r == [0, 1]
    assert machine.registers.pc == 7
    assert steps == 3 * 6 + 5


def test_construction_resets_pc():
    machine = make_machine([ins.Halt()])
    assert machine.registers.pc == 0
    assert not machine.halted


def test_construction_rejects_dangling_label():
    with pytest.raises(LabelNotFound):
        make_machine([ins.Jump('nowhere')])


def test_construction_rejects_duplicate_label():
    with pytest.raises(DuplicateLabel):
        make_machine([ins.Label('a'), ins.Label('a'), ins.Halt()])


def test_register_fault_keeps_committed_state():
    machine = make_machine([ins.Load(0), ins.Store(1), ins.Add(9), ins.Halt()], registers=(7, 0))

    with pytest.raises(RegisterIndexOutOfRange) as e:
        machine.run()

    assert e.value.kind == ErrorKind.REGISTER_INDEX_OUT_OF_RANGE
    assert machine.registers.r == [7, 7]
    assert machine.registers.acc == 7
    assert machine.registers.pc == 2


@pytest.mark.parametrize('instr', [ins.Add(-1), ins.Sub(4), ins.Store(-2), ins.Load(4)])
def test_register_index_checked(instr):
    machine = make_machine([instr, ins.Halt()])

    with pytest.raises(RegisterIndexOutOfRange):
        machine.step()


def test_falling_off_the_end():
    machine = make_machine([ins.Load(0)])

    assert machine.step()

    with pytest.raises(ProgramCounterOutOfRange) as e:
        machine.step()

    assert e.value.pc == 1


def test_empty_program():
    with pytest.raises(ProgramCounterOutOfRange):
        make_machine([]).run()


def test_input():
    machine = make_machine([ins.In('n? '), ins.Halt()], tokens=['42'])
    machine.run()

    assert machine.registers.acc == 42
    assert output_of(machine) == 'n? '


def test_input_default_prompt():
    machine = make_machine([ins.In(), ins.Halt()], tokens=['-3'])
    machine.run()

    assert machine.registers.acc == -3
    assert output_of(machine) == 'Input an integer: '


def test_malformed_input():
    machine = make_machine([ins.In(), ins.Halt()], tokens=['five'])

    with pytest.raises(InputParseError):
        machine.run()


def test_missing_input():
    machine = make_machine([ins.In(), ins.Halt()])

    with pytest.raises(InputParseError):
        machine.run()


def test_output():
    machine = make_machine([ins.Load(0), ins.Out('v = '), ins.Out(), ins.Halt()], registers=(5,))
    machine.run()

    assert output_of(machine) == 'v = 5\n5\n'


def test_output_goes_to_stdout_by_default(capsys):
    machine = Machine(RegisterSet(9), [ins.Load(0), ins.Out('r0 = '), ins.Halt()])
    machine.run()

    assert capsys.readouterr().out == 'r0 = 9\n'


def test_step_limit():
    machine = make_machine([ins.Label('spin'), ins.Jump('spin')])

    with pytest.raises(StepLimitExceeded) as e:
        machine.run(max_steps=10)

    assert e.value.limit == 10
    assert machine.steps == 10
    assert isinstance(e.value, VMError)


def test_step_limit_not_hit_on_halt():
    machine = make_machine([ins.Label('x'), ins.Halt()])

    assert machine.run(max_steps=2) == 2


def test_trace_after_every_step():
    snapshots = []
    machine = make_machine([ins.Load(0), ins.Halt()], registers=(1,), trace=snapshots.append)

    assert machine.tracing
    machine.run()

    assert len(snapshots) == 2
    assert 'acc = 1\npc = 1' in snapshots[0]
    assert snapshots[1] == machine.snapshot()


def test_trace_does_not_change_outcome():
    program = [
        ins.In(),
        ins.Label('loop'),
        ins.Out('n = '),
        ins.Sub(0),
        ins.JumpIfNonNegative('loop'),
        ins.Halt()
    ]

    plain = make_machine(program, registers=(1,), tokens=[3])
    traced = make_machine(program, registers=(1,), tokens=[3], trace=lambda _: None)

    assert plain.run() == traced.run()
    assert plain.registers == traced.registers
    assert output_of(plain) == output_of(traced)


def test_set_trace():
    machine = make_machine([ins.Halt()])
    assert not machine.tracing

    snapshots = []
    machine.set_trace(snapshots.append)
    machine.run()

    assert snapshots == [machine.snapshot()]


def test_failing_trace_leaves_machine_halted():
    def sink(snapshot):
        raise RuntimeError('sink closed')

    machine = make_machine([ins.Halt()], trace=sink)

    with pytest.raises(RuntimeError):
        machine.step()

    assert machine.halted
    assert machine.steps == 1

    machine.set_trace(None)

    assert not machine.step()
    assert machine.steps == 1
