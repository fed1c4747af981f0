import math
from typing import List, Optional
from pydantic import BaseModel, field_validator, model_validator

from vectorfloat.config import MAX_VECTOR_LENGTH


def _check_values(v):
    # Ensure at least one value is provided and all of them are finite
    if len(v) < 1:
        raise ValueError('values must have at least 1 item')
    if len(v) > MAX_VECTOR_LENGTH:
        raise ValueError(f'values must have at most {MAX_VECTOR_LENGTH} items')
    if not all(math.isfinite(x) for x in v):
        raise ValueError('values must be finite numbers')
    return v


# Input schema for /vector/summary and /vector/minmax
class VectorIn(BaseModel):
    values: List[float]  # Values to analyze

    @field_validator('values')
    def check_values(cls, v):
        return _check_values(v)

    model_config = {"extra": "forbid"}  # Forbid extra fields in input


# Input schema for /vector/scale
class ScaleIn(BaseModel):
    values: List[float]                 # Values to scale
    min_target: float                   # Lower bound of the target range
    max_target: float                   # Upper bound of the target range
    constrain: bool = False             # Clamp results to the target range
    min_source: Optional[float] = None  # Optional explicit source range,
    max_source: Optional[float] = None  # defaults to the data's own min/max

    @field_validator('values')
    def check_values(cls, v):
        return _check_values(v)

    @model_validator(mode='after')
    def check_source_pair(self):
        if (self.min_source is None) != (self.max_source is None):
            raise ValueError('min_source and max_source must be given together')
        return self

    model_config = {"extra": "forbid"}


# Output schema for summary statistics
class VectorSummary(BaseModel):
    length: int     # Number of values
    min: float      # Minimum value
    max: float      # Maximum value
    mean: float     # Mean value
    stddev: float   # Sample standard deviation


# Output schema for a numeric range
class MinMaxOut(BaseModel):
    min: float
    max: float


# Output schema for /vector/scale
class ScaleOut(BaseModel):
    values: List[float]  # Scaled values
    source: MinMaxOut    # Range the values were mapped from
    target: MinMaxOut    # Range the values were mapped onto
