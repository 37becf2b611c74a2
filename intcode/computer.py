"""
Intcode Execution Engine

Owns memory, the instruction pointer and the relative base, and drives
the fetch/decode/execute loop until HALT or a fault.

Execution model:
  1. Fetch the word at IP and decode it (decoder.py)
  2. HALT stops the loop; this is the only way a run ends successfully
  3. Advance IP past the opcode word
  4. Resolve parameters left to right; each one consumes one word
  5. Execute the handler: write memory, append output, jump, or move RB

Parameter resolution:
  value read    IMMEDIATE  the raw word itself
                POSITION   memory[raw]
                RELATIVE   memory[RB + raw]
  address       POSITION   raw
                RELATIVE   RB + raw
                IMMEDIATE  rejected; a literal cannot be a destination

Faults (errors.py) are fatal and propagate straight out of step()/run():
  InvalidInstructionError  bad opcode or mode digit, immediate write target
  InvalidAddressError      resolved address (or IP) below zero
  InputExhaustedError      IN with an empty input queue
A faulted Computer stays faulted; further step()/run() calls re-raise.

The relative base is a plain signed int. It may go negative between
instructions; only an address actually resolved from it must be >= 0.
"""

import logging
from collections import deque
from typing import Iterable, List, Optional, Tuple

from .decoder import Opcode, ParameterMode, decode
from .errors import (
    InputExhaustedError, IntcodeError, InvalidAddressError, InvalidInstructionError,
)
from .memory import Memory

logger = logging.getLogger(__name__)


class Computer:
    """Intcode virtual machine.

    Usage:
        vm = Computer([3, 0, 4, 0, 99], inputs=[42])
        vm.run()
        vm.output            # [42]
        vm.read_range(0, 5)  # [42, 0, 4, 0, 99]

    One Computer is one run. There is no reset; build a new one to run
    the program again.
    """

    def __init__(self, program: Iterable[int], inputs: Iterable[int] = ()):
        self.memory = Memory(program)
        self.output: List[int] = []

        self._ip = 0
        self._rb = 0
        self._input = deque(inputs)
        self._halted = False
        self._fault: Optional[IntcodeError] = None
        self._steps = 0

        # Address and raw word of the instruction being executed
        self._current: Tuple[int, int] = (0, 0)

        self._trace = False
        self._trace_output: List[str] = []

        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # State
    # ══════════════════════════════════════════════

    @property
    def instruction_pointer(self) -> int:
        return self._ip

    @property
    def relative_base(self) -> int:
        return self._rb

    @property
    def halted(self) -> bool:
        return self._halted

    @property
    def fault(self) -> Optional[IntcodeError]:
        """The fault that ended the run, or None."""
        return self._fault

    @property
    def steps(self) -> int:
        """Instructions executed so far, HALT not counted."""
        return self._steps

    @property
    def pending_input(self) -> Tuple[int, ...]:
        return tuple(self._input)

    def provide_input(self, *values: int):
        """Append values to the back of the input queue."""
        self._input.extend(values)

    def read_range(self, start: int, end: int) -> List[int]:
        return self.memory.read_range(start, end)

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> bool:
        """Execute one instruction. Returns True once HALT is reached.

        A fault is final: the failing instruction may already have
        consumed operand words, so every later step()/run() re-raises
        the original fault instead of executing from a torn IP.
        """
        if self._fault is not None:
            raise self._fault
        if self._halted:
            return True

        try:
            return self._execute_next()
        except IntcodeError as e:
            self._fault = e
            logger.debug(f"Fault at IP {self._current[0]}: {e}")
            raise

    def _execute_next(self) -> bool:
        pc = self._ip
        rb = self._rb
        self._current = (pc, 0)
        word = self.memory.read(pc)
        self._current = (pc, word)
        instr = decode(word, pc)

        if instr.opcode is Opcode.HALT:
            self._halted = True
            self._record(pc, rb, 'HALT', ())
            return True

        index = instr.opcode.write_index
        if index is not None and instr.modes[index] is ParameterMode.IMMEDIATE:
            raise InvalidInstructionError(word, pc, "immediate mode on a write parameter")

        self._ip = pc + 1
        args = self._dispatch[instr.opcode](instr.modes)
        self._steps += 1
        self._record(pc, rb, instr.opcode.mnemonic, args)
        return False

    def run(self) -> int:
        """Run until HALT. Returns the number of instructions executed."""
        logger.debug(f"[INPUT] {list(self._input)}")
        while not self.step():
            pass
        logger.info(f"Halted after {self._steps} instructions, "
                    f"{len(self.output)} values output")
        logger.debug(f"[OUTPUT] {self.output}")
        return self._steps

    # ══════════════════════════════════════════════
    # Parameter resolution
    # ══════════════════════════════════════════════

    def _fetch(self) -> int:
        """Read the word at IP, advance IP."""
        raw = self.memory.read(self._ip)
        self._ip += 1
        return raw

    def _read_addr(self, mode: ParameterMode) -> int:
        # IMMEDIATE never reaches here: values take the literal path in
        # _read_value and immediate write targets are rejected in step()
        raw = self._fetch()
        if mode is ParameterMode.RELATIVE:
            addr = self._rb + raw
        else:
            addr = raw

        if addr < 0:
            raise InvalidAddressError(addr)
        return addr

    def _read_value(self, mode: ParameterMode) -> int:
        if mode is ParameterMode.IMMEDIATE:
            return self._fetch()
        return self.memory.read(self._read_addr(mode))

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════
    # Handler signature: handler(modes) -> tuple of resolved operands,
    # used only for the trace line.

    def _build_dispatch(self) -> dict:
        """Build opcode → handler dispatch table."""
        table = {
            Opcode.ADD:  self._op_add,
            Opcode.MUL:  self._op_mul,
            Opcode.IN:   self._op_in,
            Opcode.OUT:  self._op_out,
            Opcode.JNZ:  self._op_jnz,
            Opcode.JZ:   self._op_jz,
            Opcode.SLT:  self._op_slt,
            Opcode.SEQ:  self._op_seq,
            Opcode.INCB: self._op_incb,
        }
        missing = [op.mnemonic for op in Opcode if op is not Opcode.HALT and op not in table]
        if missing:
            raise NotImplementedError(f"No handler for {', '.join(missing)}")
        return table

    def _op_add(self, modes):
        a = self._read_value(modes[0])
        b = self._read_value(modes[1])
        addr = self._read_addr(modes[2])
        self.memory.write(addr, a + b)
        return a, b, addr

    def _op_mul(self, modes):
        a = self._read_value(modes[0])
        b = self._read_value(modes[1])
        addr = self._read_addr(modes[2])
        self.memory.write(addr, a * b)
        return a, b, addr

    def _op_in(self, modes):
        addr = self._read_addr(modes[0])
        if not self._input:
            raise InputExhaustedError(self._current[0])
        value = self._input.popleft()
        self.memory.write(addr, value)
        return value, addr

    def _op_out(self, modes):
        value = self._read_value(modes[0])
        self.output.append(value)
        return (value,)

    def _op_jnz(self, modes):
        test = self._read_value(modes[0])
        target = self._read_value(modes[1])
        if test != 0:
            self._ip = target
        return test, target

    def _op_jz(self, modes):
        test = self._read_value(modes[0])
        target = self._read_value(modes[1])
        if test == 0:
            self._ip = target
        return test, target

    def _op_slt(self, modes):
        a = self._read_value(modes[0])
        b = self._read_value(modes[1])
        addr = self._read_addr(modes[2])
        self.memory.write(addr, 1 if a < b else 0)
        return a, b, addr

    def _op_seq(self, modes):
        a = self._read_value(modes[0])
        b = self._read_value(modes[1])
        addr = self._read_addr(modes[2])
        self.memory.write(addr, 1 if a == b else 0)
        return a, b, addr

    def _op_incb(self, modes):
        offset = self._read_value(modes[0])
        self._rb += offset
        return (offset,)

    # ══════════════════════════════════════════════
    # Trace / Debug
    # ══════════════════════════════════════════════

    def _record(self, pc: int, rb: int, mnemonic: str, args: tuple):
        if not (self._trace or logger.isEnabledFor(logging.DEBUG)):
            return
        line = ' '.join([f"[IP: {pc} RB: {rb}] {mnemonic}"] + [str(a) for a in args])
        if self._trace:
            self._trace_output.append(line)
        logger.debug(line)

    def enable_trace(self, enable: bool = True):
        """Enable in-memory instruction trace."""
        self._trace = enable

    def get_trace(self) -> str:
        return '\n'.join(self._trace_output)

    def clear_trace(self):
        self._trace_output.clear()


def run_program(program: Iterable[int], inputs: Iterable[int] = (),
                trace: bool = False) -> Computer:
    """Build a Computer, run it to HALT, and return it for inspection."""
    computer = Computer(program, inputs)
    computer.enable_trace(trace)
    computer.run()
    return computer
