# routers/samples.py
from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from dataset import get_samples
from schemas.sample import Sample, SampleQuery, SamplePage, MessageOut
from services.sample_query import execute

router = APIRouter(prefix="/api", tags=["Samples"])


# ================================================================
# LIST SAMPLES (filters + pagination)
# ================================================================
@router.get(
    "/samples",
    response_model=SamplePage,
    responses={400: {"model": MessageOut}, 500: {"model": MessageOut}},
)
def list_samples(
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    zone: Optional[str] = Query(None),
    sample_type: Optional[str] = Query(None, alias="sampleType"),
    status: Optional[str] = Query(None),
    operator: Optional[str] = Query(None),
    min_date: Optional[str] = Query(None, alias="minDate"),
    max_date: Optional[str] = Query(None, alias="maxDate"),
    samples: List[Sample] = Depends(get_samples),
):
    # page / pageSize stay strings here; coercion belongs to the query engine
    query = SampleQuery(
        page=page,
        page_size=page_size,
        zone=zone,
        sample_type=sample_type,
        status=status,
        operator=operator,
        min_date=min_date,
        max_date=max_date,
    )
    return execute(samples, query)
