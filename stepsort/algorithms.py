"""
Built-in sorters.

Each sorter is a plain function sort(arr, emit) where `arr` is a
SequenceStore and `emit(a, b)` is the step emitter. Sorters mutate `arr`
in place through read/write/swap only, call `emit` at every interesting
point, and let StopRequested propagate. A cancelled sorter leaves `arr`
where it got to; it never rolls back.
"""

import enum

from stepsort.errors import StopRequested, UnknownAlgorithm

# ============================================================
# ===================== SORTING ALGORITHMS ===================
# ============================================================

def bubble_sort(arr, emit):
    n = arr.length()
    for i in range(n - 1):
        for j in range(n - 1 - i):
            emit(j, j + 1)
            if arr.read(j) > arr.read(j + 1):
                arr.swap(j, j + 1)
                emit(j, j + 1)


def selection_sort(arr, emit):
    n = arr.length()
    for i in range(n - 1):
        mi = i
        for j in range(i + 1, n):
            emit(mi, j)
            if arr.read(j) < arr.read(mi):
                mi = j
        if mi != i:
            arr.swap(mi, i)
            emit(mi, i)


def insertion_sort(arr, emit):
    # The key walks left by adjacent swaps, so the store stays a
    # permutation of the input between any two steps.
    for i in range(1, arr.length()):
        key = arr.read(i)
        j = i - 1
        while j >= 0 and arr.read(j) > key:
            emit(j, j + 1)
            arr.swap(j, j + 1)
            j -= 1
        emit(j + 1, i)


def _merge(arr, emit, lo, mid, hi):
    left  = [arr.read(x) for x in range(lo, mid + 1)]
    right = [arr.read(x) for x in range(mid + 1, hi + 1)]
    i = j = 0
    k = lo
    try:
        while i < len(left) and j < len(right):
            if left[i] <= right[j]:
                arr.write(k, left[i]); src = lo + i; i += 1
            else:
                arr.write(k, right[j]); src = mid + 1 + j; j += 1
            k += 1
            emit(k - 1, src)
        # Drain steps pair the written slot with the slot it came from.
        while i < len(left):
            arr.write(k, left[i]); i += 1; k += 1
            emit(k - 1, lo + i - 1)
        while j < len(right):
            arr.write(k, right[j]); j += 1; k += 1
            emit(k - 1, mid + j)
    except StopRequested:
        # Whatever has not been written yet still only lives in the
        # buffers; put it back so no magnitude is lost or duplicated.
        for v in left[i:] + right[j:]:
            arr.write(k, v); k += 1
        raise


def merge_sort(arr, emit):
    def _ms(lo, hi):
        if lo < hi:
            mid = lo + (hi - lo) // 2
            _ms(lo, mid)
            _ms(mid + 1, hi)
            _merge(arr, emit, lo, mid, hi)
    _ms(0, arr.length() - 1)


def _partition(arr, emit, lo, hi):
    pivot = arr.read(hi)
    i = lo - 1
    for j in range(lo, hi):
        emit(j, hi)
        if arr.read(j) <= pivot:
            i += 1
            arr.swap(i, j)
            emit(i, j)
    arr.swap(i + 1, hi)
    emit(i + 1, hi)
    return i + 1


def quick_sort(arr, emit):
    # Lomuto, last element as pivot. Sorted input is the O(n^2) worst case
    # and recurses n deep; n is capped at MAX_SIZE so that stays well under
    # the interpreter's recursion limit.
    def _q(lo, hi):
        if lo < hi:
            p = _partition(arr, emit, lo, hi)
            _q(lo, p - 1)
            _q(p + 1, hi)
    _q(0, arr.length() - 1)

# ============================================================
# ========================= REGISTRY =========================
# ============================================================

class Algorithm(enum.Enum):
    BUBBLE    = "bubble"
    SELECTION = "selection"
    INSERTION = "insertion"
    MERGE     = "merge"
    QUICK     = "quick"

    @classmethod
    def parse(cls, key):
        if isinstance(key, cls):
            return key
        try:
            return cls(str(key).strip().lower())
        except ValueError:
            raise UnknownAlgorithm(f"Unknown key: {key}") from None

    @property
    def display_name(self) -> str:
        return DISPLAY_NAMES[self]

    @property
    def sorter(self):
        return SORTERS[self]


DISPLAY_NAMES = {
    Algorithm.BUBBLE:    "Bubble Sort",
    Algorithm.SELECTION: "Selection Sort",
    Algorithm.INSERTION: "Insertion Sort",
    Algorithm.MERGE:     "Merge Sort",
    Algorithm.QUICK:     "Quick Sort",
}

SORTERS = {
    Algorithm.BUBBLE:    bubble_sort,
    Algorithm.SELECTION: selection_sort,
    Algorithm.INSERTION: insertion_sort,
    Algorithm.MERGE:     merge_sort,
    Algorithm.QUICK:     quick_sort,
}

# Menu order, as (display name, key) pairs
ALGORITHMS = [(a.display_name, a.value) for a in Algorithm]


def get_sorter(key):
    return Algorithm.parse(key).sorter
