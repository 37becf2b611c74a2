"""
Intcode error taxonomy.

Every fault is fatal to the run that raised it. Nothing in the package
catches these; the caller decides whether to rebuild a Computer with a
different image or different inputs.
"""

from typing import Optional


class IntcodeError(Exception):
    """Base class for every Intcode fault."""
    pass


class InvalidInstructionError(IntcodeError):
    """Raised when a word does not decode to a known opcode / mode."""
    def __init__(self, value: int, address: Optional[int] = None, reason: str = ""):
        self.value = value
        self.address = address
        msg = f"Invalid instruction {value}"
        if address is not None:
            msg += f" at address {address}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class InvalidAddressError(IntcodeError):
    """Raised when a resolved address is negative."""
    def __init__(self, address: int):
        self.address = address
        super().__init__(f"Invalid address: {address}")


class InputExhaustedError(IntcodeError):
    """Raised when IN executes with an empty input queue."""
    def __init__(self, instruction_pointer: int):
        self.instruction_pointer = instruction_pointer
        super().__init__(f"Input exhausted at address {instruction_pointer}")


class ProgramFormatError(IntcodeError):
    """Raised when program text is not a comma-separated integer list."""
    def __init__(self, message: str, position: int = 0):
        self.position = position
        super().__init__(f"Token {position}: {message}" if position else message)
