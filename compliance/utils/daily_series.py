"""
Fixed-length per-day value series.

Every per-day metric in a monthly report (volume, minutes irrigated, loading,
weather, temperature, ...) is held in a 31-slot series indexed by day of
month. Unfilled days hold None, which is distinct from a recorded zero:
a day without irrigation is not the same as a zero-volume event.

Series loaded from storage or user input may be shorter or longer than 31
entries, so ensure_initialized() is applied before any read or write.
"""

from typing import Any, Iterable, Iterator, List, Optional

from compliance.utils.periods import MAX_DAYS_IN_MONTH, day_index


def ensure_initialized(values: Optional[Iterable[Any]], length: int = MAX_DAYS_IN_MONTH) -> List[Any]:
    """
    Pad a series with None up to `length`, or truncate a longer one.

    Idempotent: applying it to an already initialized series returns an
    equal list.

    Args:
        values: Existing series values (None is treated as empty)
        length: Target length (default: 31)

    Returns:
        New list of exactly `length` entries

    Example:
        >>> ensure_initialized([1.0, None, 2.0], length=5)
        [1.0, None, 2.0, None, None]
    """
    result = list(values) if values is not None else []
    if len(result) < length:
        result.extend([None] * (length - len(result)))
    return result[:length]


def empty_series(length: int = MAX_DAYS_IN_MONTH) -> List[Any]:
    """A series with every slot empty."""
    return [None] * length


def series_sum(values: Iterable[Optional[float]]) -> float:
    """
    Sum observed values; empty slots contribute nothing.

    Returns 0.0 for an all-empty series.
    """
    return sum((v for v in values if v is not None), 0.0)


def series_max(values: Iterable[Optional[float]]) -> float:
    """
    Maximum observed value, or 0.0 for an all-empty series.

    Never raises on empty input.
    """
    return max((v for v in values if v is not None), default=0.0)


def series_mean(values: Iterable[Optional[float]]) -> Optional[float]:
    """Mean of observed values, or None if nothing was observed."""
    observed = [v for v in values if v is not None]
    if not observed:
        return None
    return sum(observed) / len(observed)


class DailySeries:
    """
    31-slot day-of-month series with None for days without data.

    Days are 1-based. Days beyond the reporting month's last day stay None
    and are never read by the calculators.
    """

    def __init__(self, values: Optional[Iterable[Any]] = None):
        self._values = ensure_initialized(values)

    def get(self, day: int) -> Optional[Any]:
        return self._values[day_index(day)]

    def set(self, day: int, value: Optional[Any]) -> None:
        self._values[day_index(day)] = value

    def total(self) -> float:
        return series_sum(self._values)

    def maximum(self) -> float:
        return series_max(self._values)

    def to_list(self) -> List[Optional[Any]]:
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Optional[Any]]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DailySeries):
            return self._values == other._values
        if isinstance(other, list):
            return self._values == other
        return NotImplemented

    def __repr__(self) -> str:
        filled = sum(1 for v in self._values if v is not None)
        return f"<DailySeries(filled={filled}/{len(self._values)})>"
