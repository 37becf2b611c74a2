"""
Intcode Virtual Machine
=======================
A small virtual machine for programs encoded as sequences of signed
integers ("Intcode").

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌───────────────┐
    │ Program  │───>│  Loader  │───>│ Computer │───>│ Output / Mem  │
    │ (text)   │    │ (ints)   │    │  (run)   │    │ (inspection)  │
    └──────────┘    └──────────┘    └────┬─────┘    └───────────────┘
                                         │ fetch word
                                    ┌────┴─────┐
                                    │ Decoder  │  word → Instruction
                                    └──────────┘

    - loader.py:   comma-separated text → list of ints
    - decoder.py:  pure word → (opcode, parameter modes)
    - memory.py:   sparse default-zero address space
    - computer.py: fetch/decode/execute loop, IP, relative base, I/O queues
    - errors.py:   fault taxonomy (all fatal)
"""

__version__ = "0.1.0"

from .errors import (
    IntcodeError, InvalidInstructionError, InvalidAddressError,
    InputExhaustedError, ProgramFormatError,
)
from .decoder import Opcode, ParameterMode, Instruction, decode, disassemble
from .memory import Memory
from .computer import Computer, run_program
from .loader import parse_program, load_program

__all__ = [
    'IntcodeError', 'InvalidInstructionError', 'InvalidAddressError',
    'InputExhaustedError', 'ProgramFormatError',
    'Opcode', 'ParameterMode', 'Instruction', 'decode', 'disassemble',
    'Memory', 'Computer', 'run_program', 'parse_program', 'load_program',
]
