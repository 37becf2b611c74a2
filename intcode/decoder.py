"""
Intcode Instruction Decoder

Turns one raw integer word into a structured Instruction: an opcode plus
one addressing mode per parameter. The decoder is a pure function; it
never touches memory or engine state.

Word layout (decimal digits, least significant first):

    ... E D C B A
            └─┴─ opcode      value % 100
          └───── mode of parameter 0
        └─────── mode of parameter 1
      └───────── mode of parameter 2

Addressing modes:
  POSITION   (0)  parameter is an address              rendered ARG
  IMMEDIATE  (1)  parameter is a literal value         rendered #
  RELATIVE   (2)  parameter is an offset from the RB   rendered @

Only the exact word 99 is HALT. 199, 299, ... are invalid, as is any
negative word.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .errors import InvalidInstructionError


class ParameterMode(Enum):
    POSITION = 0
    IMMEDIATE = 1
    RELATIVE = 2

    @property
    def sigil(self) -> str:
        return _MODE_SIGILS[self]


_MODE_SIGILS = {
    ParameterMode.POSITION: 'ARG',
    ParameterMode.IMMEDIATE: '#',
    ParameterMode.RELATIVE: '@',
}

_MODES_BY_DIGIT = {mode.value: mode for mode in ParameterMode}


class Opcode(Enum):
    ADD = 1
    MUL = 2
    IN = 3
    OUT = 4
    JNZ = 5     # jump-if-true
    JZ = 6      # jump-if-false
    SLT = 7     # less-than
    SEQ = 8     # equals
    INCB = 9    # adjust relative base
    HALT = 99

    @property
    def mnemonic(self) -> str:
        return OPCODES[self][0]

    @property
    def param_count(self) -> int:
        return OPCODES[self][1]

    @property
    def write_index(self) -> Optional[int]:
        """Index of the parameter that names a write destination, if any."""
        return OPCODES[self][2]


# ──────────────────────────────────────────────
# Opcode table
# ──────────────────────────────────────────────
# Format: opcode -> (mnemonic, parameter_count, write_parameter_index)

OPCODES = {
    Opcode.ADD:  ('ADD',  3, 2),
    Opcode.MUL:  ('MUL',  3, 2),
    Opcode.IN:   ('IN',   1, 0),
    Opcode.OUT:  ('OUT',  1, None),
    Opcode.JNZ:  ('JNZ',  2, None),
    Opcode.JZ:   ('JZ',   2, None),
    Opcode.SLT:  ('SLT',  3, 2),
    Opcode.SEQ:  ('SEQ',  3, 2),
    Opcode.INCB: ('INCB', 1, None),
    Opcode.HALT: ('HALT', 0, None),
}

# Codes reachable through value % 100. HALT is matched on the whole word.
_OPCODES_BY_DIGITS = {op.value: op for op in Opcode if op is not Opcode.HALT}

HALT_WORD = 99


@dataclass(frozen=True)
class Instruction:
    """One decoded instruction. Built fresh on every fetch."""
    opcode: Opcode
    modes: Tuple[ParameterMode, ...] = ()

    def __str__(self) -> str:
        parts = [self.opcode.mnemonic]
        parts.extend(mode.sigil for mode in self.modes)
        return ' '.join(parts)


def decode(value: int, address: Optional[int] = None) -> Instruction:
    """Decode a raw word into an Instruction.

    `address` is only used to make the error message point at the
    offending word; it has no effect on the result.

    Raises InvalidInstructionError on an unknown opcode or a mode digit
    outside {0, 1, 2}.
    """
    if value == HALT_WORD:
        return Instruction(Opcode.HALT)

    if value < 0:
        raise InvalidInstructionError(value, address, "negative opcode word")

    opcode = _OPCODES_BY_DIGITS.get(value % 100)
    if opcode is None:
        raise InvalidInstructionError(value, address, f"unknown opcode {value % 100:02d}")

    modes = []
    for i in range(opcode.param_count):
        digit = (value // 10 ** (i + 2)) % 10
        mode = _MODES_BY_DIGIT.get(digit)
        if mode is None:
            raise InvalidInstructionError(
                value, address, f"unknown mode {digit} for parameter {i}")
        modes.append(mode)

    return Instruction(opcode, tuple(modes))


def _format_param(mode: ParameterMode, raw: int) -> str:
    if mode is ParameterMode.IMMEDIATE:
        return f'#{raw}'
    if mode is ParameterMode.RELATIVE:
        return f'@{raw}'
    return f'[{raw}]'


def disassemble(program: Sequence[int]) -> List[str]:
    """Linear listing of a program image.

    Self-modifying code and data regions mean this is only a static
    reading aid: any word that does not decode, or whose parameters
    would run past the end of the image, is listed as DATA.
    """
    lines = []
    addr = 0
    while addr < len(program):
        word = program[addr]
        try:
            instr = decode(word, addr)
        except InvalidInstructionError:
            lines.append(f'{addr:5d}: DATA {word}')
            addr += 1
            continue

        count = instr.opcode.param_count
        if addr + count >= len(program) and count:
            lines.append(f'{addr:5d}: DATA {word}')
            addr += 1
            continue

        params = [_format_param(mode, program[addr + 1 + i])
                  for i, mode in enumerate(instr.modes)]
        text = ' '.join([f'{instr.opcode.mnemonic:<5s}'] + params).rstrip()
        lines.append(f'{addr:5d}: {text}')
        addr += 1 + count
    return lines
