from fastapi import APIRouter, HTTPException

from vectorfloat.services.numeric import scale_values, vector_summary
from vectorfloat.services.vector import VectorFloat
from vectorfloat.api.schemas import MinMaxOut, ScaleIn, ScaleOut, VectorIn, VectorSummary
from vectorfloat.observability.metrics import OPERATION_FAILURES

router = APIRouter(prefix="/vector")


@router.post("/summary", response_model=VectorSummary)
async def summary(body: VectorIn):
    """
    Accepts a JSON payload with 'values'.
    Returns length, min, max, mean and sample standard deviation.
    """
    try:
        return VectorSummary(**vector_summary(body.values))
    except ValueError as exc:
        OPERATION_FAILURES.labels("summary").inc()
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/minmax", response_model=MinMaxOut)
async def minmax(body: VectorIn):
    """Returns the minimum and maximum of 'values'."""
    result = VectorFloat.from_values(body.values).get_min_max()
    if result is None:
        OPERATION_FAILURES.labels("minmax").inc()
        raise HTTPException(status_code=400, detail="'values' array must not be empty")
    return MinMaxOut(min=result.min_value, max=result.max_value)


@router.post("/scale", response_model=ScaleOut)
async def scale(body: ScaleIn):
    """
    Min-max scales 'values' onto [min_target, max_target].
    The source range is the data's own min/max unless min_source/max_source are given.
    Responds with 400 Bad Request when the source range has zero width.
    """
    source = None
    if body.min_source is not None:
        source = (body.min_source, body.max_source)
    try:
        values, used = scale_values(
            body.values, body.min_target, body.max_target, body.constrain, source=source
        )
    except ValueError as exc:
        OPERATION_FAILURES.labels("scale").inc()
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ScaleOut(
        values=values,
        source=MinMaxOut(min=used.min_value, max=used.max_value),
        target=MinMaxOut(min=body.min_target, max=body.max_target),
    )
