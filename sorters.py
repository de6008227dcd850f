# ============================================================
# Alternating Disks - sorting algorithms
# ============================================================
#
# Every algorithm is a generator over a DiskRow that mutates the
# row in place and yields (row, [i, i+1]) right after each swap.
# The viewer animates those steps; sort_* functions drain them on
# a private copy and count the work.
# ============================================================

import importlib.util
import inspect
import os

from disks import DiskColor, DiskRow, SortResult

ALGORITHMS = [
    ("Left-to-Right", "left_to_right"),
    ("Lawnmower",     "lawnmower"),
]

_custom_generators: dict = {}


def _sweep_right(row):
    for i in range(row.total_count() - 1):
        if row.get(i) == DiskColor.DARK and row.get(i + 1) == DiskColor.LIGHT:
            row.swap(i)
            yield row, [i, i + 1]


def _sweep_left(row):
    for j in range(row.total_count() - 1, 0, -1):
        if row.get(j) == DiskColor.LIGHT and row.get(j - 1) == DiskColor.DARK:
            row.swap(j - 1)
            yield row, [j - 1, j]


# one outer iteration of each algorithm, as a sequence of sweeps
_SWEEPS = {
    "left_to_right": (_sweep_right,),
    "lawnmower":     (_sweep_right, _sweep_left),
}


def _iterate(row, sweeps):
    while not row.is_sorted():
        for sweep in sweeps:
            yield from sweep(row)


def left_to_right(row):
    yield from _iterate(row, _SWEEPS["left_to_right"])


def lawnmower(row):
    # the backward sweep runs even when the forward one already sorted the row
    yield from _iterate(row, _SWEEPS["lawnmower"])


def _sort(before: DiskRow, sweeps) -> SortResult:
    after = before.copy()
    swaps = passes = 0
    while not after.is_sorted():
        passes += 1
        for sweep in sweeps:
            for _ in sweep(after):
                swaps += 1
    return SortResult(after, swaps, passes)


def sort_left_to_right(before: DiskRow) -> SortResult:
    return _sort(before, _SWEEPS["left_to_right"])


def sort_lawnmower(before: DiskRow) -> SortResult:
    return _sort(before, _SWEEPS["lawnmower"])


def get_generator(key, row):
    builtins = {
        "left_to_right": lambda: left_to_right(row),
        "lawnmower":     lambda: lawnmower(row),
    }
    if key in builtins: return builtins[key]()
    if key in _custom_generators: return _custom_generators[key]["fn"](row)
    raise KeyError(f"Unknown key: {key}")


def run_sorter(key, before: DiskRow) -> SortResult:
    """Drain any registered sorter on a copy of `before`. Plugins don't report passes."""
    if key in _SWEEPS:
        return _sort(before, _SWEEPS[key])
    after = before.copy()
    swaps = sum(1 for _ in get_generator(key, after))
    return SortResult(after, swaps)

# ============================================================
# ==================== CUSTOM SORTER LOADER ==================
# ============================================================

def load_custom_sorter(filepath: str):
    """
    Load a .py file as a custom disk sorter.
    Must define: NAME (str, optional) and sort(row) generator.
    Returns ((display_name, key), None) on success, (None, error_str) on failure.
    """
    try:
        filepath = os.path.abspath(filepath)
        spec   = importlib.util.spec_from_file_location("_cs", filepath)
        if spec is None:
            return None, "Not a Python file"
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        if not hasattr(module, "sort"):
            return None, "No sort(row) function found"
        if not inspect.isgeneratorfunction(module.sort):
            return None, "sort(row) must be a generator"
    except Exception as e:
        return None, str(e)

    for key, info in _custom_generators.items():
        if info["path"] == filepath:
            info["fn"] = module.sort
            return (info["name"], key), None

    name = getattr(module, "NAME", os.path.splitext(os.path.basename(filepath))[0])
    key  = f"custom_{len(_custom_generators)}"
    _custom_generators[key] = {"fn": module.sort, "path": filepath, "name": name}
    ALGORITHMS.append((name, key))
    return (name, key), None
