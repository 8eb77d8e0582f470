"""
Interval merging utility for calculating effective (wall-clock) time
from overlapping compiler invocations.
"""
from typing import List, Tuple


def merge_time_intervals(intervals: List[Tuple[int, int]]) -> List[Tuple[int, int]]:
    """
    Merge overlapping or touching intervals into a disjoint, sorted union.

    Example:
        Input: [(0, 100), (50, 200), (300, 400)]
        After merge: [(0, 200), (300, 400)]

    Args:
        intervals: List of (start_us, end_us) tuples

    Returns:
        List of merged non-overlapping intervals
    """
    if not intervals:
        return []

    # Zero-length intervals cover no time
    valid = [(s, e) for s, e in intervals if s < e]
    if not valid:
        return []

    valid.sort(key=lambda x: x[0])

    merged = [valid[0]]
    for start, end in valid[1:]:
        last_start, last_end = merged[-1]
        if start <= last_end:
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))

    return merged


def merge_intervals(intervals: List[Tuple[int, int]]) -> int:
    """
    Total length of the union of the given intervals.

    Example:
        Input: [(0, 100), (50, 200)]      -> 200
        Input: [(0, 100), (150, 200)]     -> 150

    Args:
        intervals: List of (start_us, end_us) tuples

    Returns:
        Effective duration in microseconds (merged, non-overlapping)
    """
    return sum(end - start for start, end in merge_time_intervals(intervals))


def calculate_parallelism_factor(cumulative_us: int, effective_us: int) -> float:
    """
    How much parallelism was achieved: summed work over wall-clock time.

    Args:
        cumulative_us: Sum of all individual durations
        effective_us: Wall-clock time (merged intervals)

    Returns:
        Parallelism factor (>1 means compilations overlapped)
    """
    if effective_us <= 0:
        return 1.0
    return cumulative_us / effective_us
