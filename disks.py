# ============================================================
# Alternating Disks - data model
# ============================================================
#
# A row holds 2n disks. Freshly built rows alternate, starting
# with a dark disk at index 0:   D L D L ... D L
# Sorting moves every light disk into the first half using only
# adjacent swaps:                 L L ... L D D ... D
# ============================================================

from enum import Enum


class DiskColor(Enum):
    LIGHT = "L"
    DARK  = "D"


class DiskRow:
    """Mutable row of light/dark disks. Only adjacent swaps change it."""

    def __init__(self, light_count: int):
        assert light_count > 0, "a row needs at least one disk pair"
        self._colors = [DiskColor.LIGHT] * (light_count * 2)
        for i in range(0, len(self._colors), 2):
            self._colors[i] = DiskColor.DARK

    def copy(self):
        other = DiskRow.__new__(DiskRow)
        other._colors = self._colors[:]
        return other

    def __eq__(self, other):
        if not isinstance(other, DiskRow):
            return NotImplemented
        return all(a == b for a, b in zip(self._colors, other._colors))

    def __len__(self):
        return self.total_count()

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"DiskRow({self.to_string()!r})"

    def total_count(self) -> int:
        return len(self._colors)

    def light_count(self) -> int:
        return self.total_count() // 2

    def dark_count(self) -> int:
        return self.light_count()

    def is_index(self, i: int) -> bool:
        return 0 <= i < self.total_count()

    def get(self, index: int) -> DiskColor:
        assert self.is_index(index), f"index {index} out of range"
        return self._colors[index]

    def colors(self) -> tuple:
        return tuple(self._colors)

    def swap(self, left_index: int):
        right_index = left_index + 1
        assert self.is_index(left_index), f"index {left_index} out of range"
        assert self.is_index(right_index), f"index {right_index} out of range"
        c = self._colors
        c[left_index], c[right_index] = c[right_index], c[left_index]

    def to_string(self) -> str:
        return " ".join(color.value for color in self._colors)

    def is_alternating(self) -> bool:
        # only even indices are inspected, odd ones are assumed light
        checked = False
        for i in range(0, self.total_count(), 2):
            if self.get(i) != DiskColor.DARK:
                return False
            checked = True
        return checked

    def is_sorted(self) -> bool:
        checked = False
        for i in range(self.total_count() // 2):
            if self.get(i) != DiskColor.LIGHT:
                return False
            checked = True
        return checked


class SortResult:
    """Outcome of one sort: the final row plus how much work it took."""
    __slots__ = ('_after', '_swap_count', '_pass_count')

    def __init__(self, after: DiskRow, swap_count: int, pass_count: int = 0):
        assert swap_count >= 0
        self._after      = after.copy()
        self._swap_count = swap_count
        self._pass_count = pass_count

    @property
    def after(self) -> DiskRow:
        return self._after.copy()

    @property
    def swap_count(self) -> int:
        return self._swap_count

    @property
    def pass_count(self) -> int:
        return self._pass_count

    def __repr__(self):
        return (f"SortResult(after={self._after.to_string()!r}, "
                f"swap_count={self._swap_count}, pass_count={self._pass_count})")
