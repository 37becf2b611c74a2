"""
Intcode Sparse Memory

Memory is a mapping from non-negative address to signed integer. Cells
that were never written read as zero, and the mapping grows as far as
the program writes. Relative addressing routinely lands far past the
end of the loaded image, so there is no fixed size.

The dict only ever holds written cells; reading never inserts.
"""

from typing import Dict, Iterable, List, Optional

from .errors import InvalidAddressError


class Memory:
    """Sparse word-addressable memory with default-zero reads."""

    def __init__(self, image: Optional[Iterable[int]] = None):
        self._cells: Dict[int, int] = {}
        if image is not None:
            self.load(image)

    # --- Core read/write ---

    def read(self, addr: int) -> int:
        if addr < 0:
            raise InvalidAddressError(addr)
        return self._cells.get(addr, 0)

    def write(self, addr: int, value: int):
        if addr < 0:
            raise InvalidAddressError(addr)
        self._cells[addr] = value

    def read_range(self, start: int, end: int) -> List[int]:
        """Read addresses [start, end). Unwritten cells come back as 0."""
        if start < 0:
            raise InvalidAddressError(start)
        return [self._cells.get(addr, 0) for addr in range(start, end)]

    # --- Bulk load ---

    def load(self, image: Iterable[int], base_addr: int = 0):
        """Write an image into consecutive cells starting at base_addr."""
        if base_addr < 0:
            raise InvalidAddressError(base_addr)
        for i, value in enumerate(image):
            self._cells[base_addr + i] = value

    # --- Introspection ---

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, addr: int) -> bool:
        return addr in self._cells

    def highest_address(self) -> int:
        """Highest written address, or -1 for empty memory."""
        return max(self._cells, default=-1)

    # --- Snapshots ---

    def snapshot(self) -> Dict[int, int]:
        """Copy of every written cell, for later diffing."""
        return dict(self._cells)

    @staticmethod
    def diff_snapshots(snap_a: Dict[int, int], snap_b: Dict[int, int]) -> Dict[int, tuple]:
        """Compare two snapshots, return {addr: (old, new)} for changes.

        A cell missing from one side counts as 0, so writing a zero into
        a fresh cell is not a change.
        """
        changes = {}
        for addr in sorted(set(snap_a) | set(snap_b)):
            old = snap_a.get(addr, 0)
            new = snap_b.get(addr, 0)
            if old != new:
                changes[addr] = (old, new)
        return changes

    # --- Dump ---

    def dump(self, start: int = 0, length: Optional[int] = None, width: int = 8) -> str:
        """Produce a text dump of memory, `width` cells per row.

        Without a length, dumps through the highest written address.
        """
        if length is None:
            length = self.highest_address() + 1 - start
        lines = []
        for offset in range(0, max(length, 0), width):
            addr = start + offset
            count = min(width, length - offset)
            cells = ' '.join(f'{value:>6d}' for value in self.read_range(addr, addr + count))
            lines.append(f'{addr:06d}  {cells}')
        return '\n'.join(lines)
