"""Sparse memory tests."""

import pytest

from intcode.errors import InvalidAddressError
from intcode.memory import Memory


class TestReadWrite:
    def test_unwritten_reads_zero(self):
        mem = Memory()
        assert mem.read(0) == 0
        assert mem.read(10 ** 9) == 0

    def test_reads_do_not_grow_memory(self):
        mem = Memory([1, 2, 3])
        mem.read(5000)
        mem.read_range(100, 200)
        assert len(mem) == 3

    def test_write_far_address(self):
        mem = Memory()
        mem.write(1_000_000, -7)
        assert mem.read(1_000_000) == -7
        assert len(mem) == 1
        assert mem.highest_address() == 1_000_000

    def test_contains_only_written_cells(self):
        mem = Memory([7])
        mem.read(40)
        mem.write(300, 0)
        assert 0 in mem
        assert 300 in mem
        assert 40 not in mem
        assert 1 not in mem

    def test_negative_address(self):
        mem = Memory()
        with pytest.raises(InvalidAddressError) as exc:
            mem.read(-1)
        assert exc.value.address == -1
        with pytest.raises(InvalidAddressError):
            mem.write(-3, 1)

    def test_values_are_unbounded(self):
        mem = Memory()
        mem.write(0, 2 ** 80)
        assert mem.read(0) == 2 ** 80


class TestRanges:
    def test_read_range_zero_fill(self):
        mem = Memory([5, 6])
        assert mem.read_range(0, 5) == [5, 6, 0, 0, 0]

    def test_empty_range(self):
        assert Memory([1]).read_range(3, 3) == []

    def test_load_at_base(self):
        mem = Memory()
        mem.load([7, 8, 9], base_addr=10)
        assert mem.read_range(9, 13) == [0, 7, 8, 9]

    def test_empty_memory(self):
        mem = Memory()
        assert len(mem) == 0
        assert mem.highest_address() == -1
        assert mem.dump() == ''


class TestSnapshots:
    def test_diff_reports_changes(self):
        mem = Memory([1, 0, 0, 0, 99])
        before = mem.snapshot()
        mem.write(0, 2)
        mem.write(50, 4)
        assert Memory.diff_snapshots(before, mem.snapshot()) == {
            0: (1, 2),
            50: (0, 4),
        }

    def test_zero_write_to_fresh_cell_is_not_a_change(self):
        mem = Memory([1])
        before = mem.snapshot()
        mem.write(20, 0)
        assert Memory.diff_snapshots(before, mem.snapshot()) == {}

    def test_snapshot_is_a_copy(self):
        mem = Memory([1])
        snap = mem.snapshot()
        mem.write(0, 9)
        assert snap == {0: 1}


class TestDump:
    def test_rows_of_eight(self):
        mem = Memory(range(10))
        rows = mem.dump().splitlines()
        assert len(rows) == 2
        assert rows[0].split() == ['000000'] + [str(i) for i in range(8)]
        assert rows[1].split() == ['000008', '8', '9']

    def test_explicit_window(self):
        mem = Memory([1, 2, 3])
        assert mem.dump(2, 3).split() == ['000002', '3', '0', '0']
