"""Numeric statistics and scaling helpers built on VectorFloat."""
from __future__ import annotations

import math
from typing import Sequence

from vectorfloat.services.vector import MinMax, VectorFloat

__all__: list[str] = [
    "scale_values",
    "self_check",
    "vector_summary",
]


def vector_summary(values: Sequence[float] | Sequence[int]) -> dict[str, float]:
    """
    Compute length, min, max, mean and sample stddev for a sequence of numbers.
    Raises ValueError if input is empty or a statistic is not a finite float.
    """
    if not values:
        raise ValueError("'values' array must not be empty")
    vec = VectorFloat.from_values(values)
    minmax = vec.get_min_max()
    summary = {
        "length": len(vec),
        "min": minmax.min_value,
        "max": minmax.max_value,
        "mean": vec.get_mean(),
        "stddev": vec.get_std_dev(),
    }
    if not all(math.isfinite(v) for v in summary.values()):
        raise ValueError("summary statistics exceed the float range")
    return summary


def scale_values(
    values: Sequence[float],
    min_target: float,
    max_target: float,
    constrain: bool = False,
    source: MinMax | tuple[float, float] | None = None,
) -> tuple[list[float], MinMax]:
    """
    Min-max scale a copy of `values` onto [min_target, max_target].
    Uses the data's own extrema unless an explicit `source` range is given.
    Returns the scaled values and the source range used.
    Raises ValueError if the values cannot be scaled.
    """
    if not values:
        raise ValueError("'values' array must not be empty")
    vec = VectorFloat.from_values(values)
    src = MinMax(*source) if source is not None else vec.get_min_max()
    if not vec.scale_from(src.min_value, src.max_value, min_target, max_target, constrain):
        raise ValueError(
            f"cannot scale from [{src.min_value}, {src.max_value}] to [{min_target}, {max_target}]"
        )
    return vec.to_list(), src


def self_check() -> bool:
    """Run a known summary and scaling through VectorFloat; used to gate readiness."""
    try:
        summary = vector_summary([1.0, 2.0, 3.0, 4.0])
        scaled, _ = scale_values([1.0, 2.0, 3.0, 4.0], 0.0, 3.0)
    except ValueError:
        return False
    return summary["mean"] == 2.5 and scaled == [0.0, 1.0, 2.0, 3.0]
