# ============================================================
# Alternating Disks - Custom Sorter Template
# ============================================================
#
# Rules:
#   1. Define a function called  sort(row)
#   2. It must be a generator that yields (row, [i, i+1])
#      right after every adjacent swap, where i is the left index.
#   3. Mutate `row` in-place with row.swap(i) - do NOT return a new row.
#   4. Optionally set NAME = "My Algorithm"  (used as display name)
#
# Load this file from the viewer via the "[+] Load Custom Sorter" button.
# ============================================================

from disks import DiskColor

NAME = "Odd-Even Transposition"   # <-- change this to whatever you like


def sort(row):
    """Alternate between even and odd pairs until the light disks lead."""
    start = 0
    while not row.is_sorted():
        for i in range(start, row.total_count() - 1, 2):
            if row.get(i) == DiskColor.DARK and row.get(i + 1) == DiskColor.LIGHT:
                row.swap(i)
                yield row, [i, i + 1]
        start = 1 - start
