"""
Program image loading.

Intcode programs are distributed as a single line of comma-separated
signed integers, e.g. "1,9,10,3,2,3,11,0,99,30,40,50". Whitespace and
line breaks between tokens are ignored and a trailing comma is allowed.
"""

from pathlib import Path
from typing import List, Union

from .errors import ProgramFormatError


def parse_program(text: str) -> List[int]:
    """Parse comma-separated program text into a list of ints."""
    tokens = [tok.strip() for tok in text.split(',')]
    if tokens and tokens[-1] == '':
        tokens.pop()  # trailing comma / empty text

    program = []
    for position, tok in enumerate(tokens, start=1):
        if not tok:
            raise ProgramFormatError("empty value", position)
        try:
            program.append(int(tok))
        except ValueError:
            raise ProgramFormatError(f"not an integer: {tok!r}", position) from None
    return program


def load_program(path_or_text: Union[str, Path]) -> List[int]:
    """Load a program from a file path, or parse it if it is program text.

    A Path is always read as a file. A string containing a comma or a
    line break, or a single integer, is program text. Any other string
    names a file, and a missing one raises FileNotFoundError.
    """
    if isinstance(path_or_text, Path):
        return parse_program(path_or_text.read_text(encoding='utf-8'))

    # Program text never names a file; long text would overflow NAME_MAX
    if ',' in path_or_text or '\n' in path_or_text:
        return parse_program(path_or_text)

    p = Path(path_or_text)
    if p.is_file():
        return parse_program(p.read_text(encoding='utf-8'))

    token = path_or_text.strip()
    if not token or token.lstrip('-').isdigit():
        return parse_program(path_or_text)
    raise FileNotFoundError(f"Program file not found: {path_or_text}")
