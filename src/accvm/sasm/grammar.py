# type: ignore
''' Assembler grammar '''

import pyparsing as pp

import accvm.common.instructions as ins
from accvm.sasm.fpp import FPP


id = pp.Word(pp.alphas + '_', pp.alphanums + '_')
comment = pp.Suppress(pp.Literal('//') + pp.rest_of_line)

label = (id + pp.Suppress(':')).set_parse_action(lambda r: (FPP.on_label, r))

# Operands stay on the line of their mnemonic
INLINE_WS = ' \t'

reg_index = pp.Regex(r'[0-9]+\b').set_whitespace_chars(INLINE_WS)
target = pp.Word(pp.alphas + '_', pp.alphanums + '_').set_whitespace_chars(INLINE_WS)
prompt = pp.QuotedString('"', esc_char='\\').set_whitespace_chars(INLINE_WS)


def g_cmd(literal):
    return pp.CaselessKeyword(literal)


def g_reg_cmd(literal, cls):
    return (g_cmd(literal) + reg_index).set_parse_action(
        lambda r: (FPP.on_reg, (cls, int(r[1])))
    )


def g_jump_cmd(literal, cls):
    return (g_cmd(literal) + target).set_parse_action(
        lambda r: (FPP.on_jump, (cls, r[1]))
    )


# Register instructions
add_cmd = g_reg_cmd('add', ins.Add)
sub_cmd = g_reg_cmd('sub', ins.Sub)
sta_cmd = g_reg_cmd('sta', ins.Store)
lda_cmd = g_reg_cmd('lda', ins.Load)

# Control flow
jmp_cmd = g_jump_cmd('jmp', ins.Jump)
jz_cmd = g_jump_cmd('jz', ins.JumpIfZero)
jge_cmd = g_jump_cmd('jge', ins.JumpIfNonNegative)
hlt_cmd = g_cmd('hlt').set_parse_action(lambda r: (FPP.on_hlt, r))

# Console
in_cmd = (g_cmd('in') + pp.Optional(prompt)).set_parse_action(lambda r: (FPP.on_in, r))
out_cmd = (g_cmd('out') + pp.Optional(prompt)).set_parse_action(lambda r: (FPP.on_out, r))

asm_cmd = add_cmd \
    | sub_cmd \
    | sta_cmd \
    | lda_cmd \
    | jmp_cmd \
    | jz_cmd \
    | jge_cmd \
    | hlt_cmd \
    | in_cmd \
    | out_cmd

# Fail on unknown command
unknown = pp.Regex('.+').set_parse_action(
    lambda s, loc, r: (FPP.on_fail, (pp.lineno(loc, s), r[0]))
)

program = pp.ZeroOrMore(comment | label | asm_cmd | unknown)
