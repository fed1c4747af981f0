"""Owned sequence of floats with summary statistics, min-max scaling and CSV persistence."""
from __future__ import annotations

import logging
import math
import numbers
import os
import statistics
import sys
from typing import IO, Iterable, Iterator, NamedTuple

from vectorfloat.services.storage import StorageError, check_separator, format_value, read_rows, write_rows

__all__: list[str] = [
    "MinMax",
    "VectorFloat",
    "scale_value",
]

logger = logging.getLogger(__name__)


class MinMax(NamedTuple):
    """Inclusive numeric range."""

    min_value: float
    max_value: float

    @property
    def range(self) -> float:
        return self.max_value - self.min_value

    @property
    def is_degenerate(self) -> bool:
        return self.max_value == self.min_value


def _to_float(value) -> float:
    if not isinstance(value, numbers.Real):
        raise TypeError(f"expected a real number, got {type(value).__name__}")
    return float(value)


def scale_value(
    x: float,
    min_source: float,
    max_source: float,
    min_target: float,
    max_target: float,
    constrain: bool = False,
) -> float:
    """
    Linearly map `x` from [min_source, max_source] onto [min_target, max_target].
    With `constrain` the result is clamped to the target range, whichever way round it is given.
    Raises ValueError if the source range has zero width.
    """
    if max_source == min_source:
        raise ValueError(f"source range [{min_source}, {max_source}] has zero width")
    if min_source == min_target and max_source == max_target:
        out = x
    else:
        width = max_source - min_source
        offset = x - min_source
        if math.isfinite(width) and math.isfinite(offset):
            ratio = offset / width
        else:
            # halve both sides so ranges wider than the largest float stay finite
            ratio = (x / 2 - min_source / 2) / (max_source / 2 - min_source / 2)
        target_width = max_target - min_target
        if math.isfinite(target_width):
            out = min_target + ratio * target_width
        else:
            out = 2 * (min_target / 2 + ratio * (max_target / 2 - min_target / 2))
    if constrain:
        lo, hi = (min_target, max_target) if min_target <= max_target else (max_target, min_target)
        if out < lo:
            out = lo
        elif out > hi:
            out = hi
    return out


class VectorFloat:
    """
    Ordered, resizable sequence of floats.

    Every instance owns its storage: construction and assignment always copy.
    Fallible operations return True/False (statistics return None on empty
    data) and log a warning instead of raising.
    """

    __slots__ = ("_data",)
    __hash__ = None  # mutable

    def __init__(self, size: int = 0, value: float = 0.0):
        if size < 0:
            raise ValueError(f"size must be >= 0, got {size}")
        self._data: list[float] = [_to_float(value)] * int(size)

    # ------------------------------------------------------------------
    # Construction / assignment
    # ------------------------------------------------------------------
    @classmethod
    def from_values(cls, values: Iterable[float]) -> "VectorFloat":
        vec = cls()
        vec._data = [_to_float(v) for v in values]
        return vec

    @classmethod
    def from_vectors(cls, vectors: Iterable["VectorFloat"]) -> "VectorFloat":
        """Concatenate `vectors` in order. Raises ValueError for an empty or mixed collection."""
        vec = cls()
        if not vec.assign_vectors(vectors):
            raise ValueError("expected a non-empty collection of VectorFloat")
        return vec

    def copy(self) -> "VectorFloat":
        vec = type(self)()
        vec._data = list(self._data)
        return vec

    __copy__ = copy

    def __deepcopy__(self, memo) -> "VectorFloat":
        return self.copy()

    def assign(self, values: Iterable[float]) -> bool:
        """Replace the contents with a copy of `values`. Contents are unchanged on failure."""
        if values is self:
            return True
        try:
            data = [_to_float(v) for v in values]
        except TypeError as exc:
            logger.warning("assign: %s", exc)
            return False
        self._data = data
        return True

    def assign_vectors(self, vectors: Iterable["VectorFloat"]) -> bool:
        """
        Replace the contents with the in-order concatenation of `vectors`.
        An empty collection, or one holding anything other than VectorFloat, fails
        and leaves the contents unchanged. A collection of empty vectors succeeds.
        """
        vectors = list(vectors)
        if not vectors:
            logger.warning("assign_vectors: the collection is empty")
            return False
        data: list[float] = []
        for i, vec in enumerate(vectors):
            if not isinstance(vec, VectorFloat):
                logger.warning("assign_vectors: item %d is %s, not VectorFloat", i, type(vec).__name__)
                return False
            data.extend(vec._data)
        self._data = data
        return True

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._data)

    @property
    def size(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[float]:
        return iter(self._data)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return VectorFloat.from_values(self._data[index])
        return self._data[index]

    def __setitem__(self, index: int, value: float) -> None:
        self._data[index] = _to_float(value)

    def __eq__(self, other) -> bool:
        if isinstance(other, VectorFloat):
            return self._data == other._data
        if isinstance(other, (list, tuple)):
            return self._data == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"VectorFloat({self._data!r})"

    def resize(self, size: int, value: float = 0.0) -> None:
        """Grow with `value` or truncate to `size` elements."""
        if size < 0:
            raise ValueError(f"size must be >= 0, got {size}")
        fill = _to_float(value)
        if size < len(self._data):
            del self._data[size:]
        else:
            self._data.extend([fill] * (size - len(self._data)))

    def clear(self) -> None:
        self._data = []

    def to_list(self) -> list[float]:
        return list(self._data)

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------
    def get_min_max(self) -> MinMax | None:
        """Minimum and maximum in a single pass; NaN if any element is NaN, None if empty."""
        if not self._data:
            logger.warning("get_min_max: vector is empty")
            return None
        lo = hi = self._data[0]
        for v in self._data:
            if v != v:
                return MinMax(math.nan, math.nan)
            if v < lo:
                lo = v
            elif v > hi:
                hi = v
        return MinMax(lo, hi)

    def get_min_value(self) -> float | None:
        minmax = self.get_min_max()
        return None if minmax is None else minmax.min_value

    def get_max_value(self) -> float | None:
        minmax = self.get_min_max()
        return None if minmax is None else minmax.max_value

    def get_mean(self) -> float | None:
        if not self._data:
            logger.warning("get_mean: vector is empty")
            return None
        return statistics.mean(self._data)

    def get_std_dev(self) -> float | None:
        """Sample standard deviation (n - 1 denominator); 0.0 for a single element."""
        if not self._data:
            logger.warning("get_std_dev: vector is empty")
            return None
        if len(self._data) == 1:
            return 0.0
        if not all(math.isfinite(x) for x in self._data):
            return math.nan
        try:
            return statistics.stdev(self._data)
        except OverflowError:
            # the exact result is larger than the largest float
            return math.inf

    # ------------------------------------------------------------------
    # Scaling
    # ------------------------------------------------------------------
    def scale(self, *args, constrain: bool = False) -> bool:
        """
        Min-max scale the vector in place.

        scale(min_target, max_target[, constrain]) uses the vector's own
        extrema as the source range; scale(min_source, max_source, min_target,
        max_target[, constrain]) uses the given source range.
        """
        if len(args) in (2, 3):
            if len(args) == 3:
                constrain = args[2]
            minmax = self.get_min_max()
            if minmax is None:
                return False
            return self.scale_from(minmax.min_value, minmax.max_value, args[0], args[1], constrain)
        if len(args) in (4, 5):
            if len(args) == 5:
                constrain = args[4]
            return self.scale_from(*args[:4], constrain=constrain)
        raise TypeError(f"scale() takes 2 to 5 positional arguments ({len(args)} given)")

    def scale_from(
        self,
        min_source: float,
        max_source: float,
        min_target: float,
        max_target: float,
        constrain: bool = False,
    ) -> bool:
        if not isinstance(constrain, bool):
            raise TypeError(f"constrain must be a bool, got {type(constrain).__name__}")
        if not self._data:
            logger.warning("scale: vector is empty")
            return False
        bounds = (min_source, max_source, min_target, max_target)
        if not all(math.isfinite(b) for b in bounds):
            logger.warning("scale: range bounds must be finite, got %s", bounds)
            return False
        if max_source == min_source:
            logger.warning("scale: source range [%s, %s] has zero width", min_source, max_source)
            return False
        scaled = [
            scale_value(x, min_source, max_source, min_target, max_target, constrain)
            for x in self._data
        ]
        if not all(math.isfinite(v) for v in scaled):
            logger.warning("scale: mapping onto [%s, %s] produced non-finite values", min_target, max_target)
            return False
        self._data = scaled
        return True

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def save(self, path: str | os.PathLike, separator: str = ",", columns: int = 1) -> bool:
        """Write the values row-major, `columns` per line. The target is replaced atomically."""
        check_separator(separator)
        n = len(self._data)
        if n == 0:
            logger.warning("save: vector is empty, nothing to write to %s", path)
            return False
        if columns < 1 or n % columns:
            logger.warning("save: %d values do not fill rows of %d columns", n, columns)
            return False
        rows = (self._data[i:i + columns] for i in range(0, n, columns))
        try:
            write_rows(path, rows, separator)
        except StorageError as exc:
            logger.warning("save: %s", exc)
            return False
        logger.debug("saved %d values to %s", n, path)
        return True

    def load(self, path: str | os.PathLike, separator: str = ",") -> bool:
        """Replace the contents with the values in `path`, read row-major. Unchanged on failure."""
        try:
            rows = read_rows(path, separator)
        except StorageError as exc:
            logger.warning("load: %s", exc)
            return False
        self._data = [v for row in rows for v in row]
        logger.debug("loaded %d values from %s", len(self._data), path)
        return True

    def print(self, title: str = "", stream: IO[str] | None = None) -> bool:
        out = sys.stdout if stream is None else stream
        try:
            if title:
                out.write(title + "\n")
            out.write("\t".join(format_value(v) for v in self._data) + "\n")
            out.flush()
        except (OSError, ValueError) as exc:
            logger.warning("print: output stream unavailable: %s", exc)
            return False
        return True
