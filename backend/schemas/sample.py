# schemas/sample.py
from pydantic import BaseModel, Field
from typing import Optional, List, Any, TypedDict


# ------------------------------------------------------------
# Stored record shape (environmental-samples.json).
# Type hints only: records are served as stored, never validated,
# so any key may be missing.
# ------------------------------------------------------------

class HeavyMetals(TypedDict, total=False):
    lead: float
    mercury: float
    arsenic: float


class SampleParameters(TypedDict, total=False):
    pH: float
    temperature: float
    conductivity: float
    turbidity: float
    dissolvedOxygen: float
    heavyMetals: HeavyMetals
    vocs: float
    pm25: float
    pm10: float
    noiseLevel: float


class Sample(TypedDict, total=False):
    sampleId: str
    location: str
    zone: str            # constants.sample_filters.Zone
    sampleType: str      # constants.sample_filters.SampleType
    collectionDate: str  # ISO date or datetime
    parameters: SampleParameters
    status: str          # constants.sample_filters.SampleStatus
    operator: str
    labCode: str
    notes: str


class SampleQuery(BaseModel):
    """Query string as received: every value is an optional raw string."""
    page: Optional[str] = None
    page_size: Optional[str] = Field(None, alias="pageSize")

    zone: Optional[str] = None
    sample_type: Optional[str] = Field(None, alias="sampleType")
    status: Optional[str] = None
    operator: Optional[str] = None
    min_date: Optional[str] = Field(None, alias="minDate")
    max_date: Optional[str] = Field(None, alias="maxDate")

    model_config = {
        "populate_by_name": True
    }


class SamplePage(BaseModel):
    page: int
    page_size: int = Field(..., alias="pageSize")
    total_items: int = Field(..., alias="totalItems")
    total_pages: int = Field(..., alias="totalPages")
    # List[Sample] in practice; kept as Any so records are served exactly
    # as stored in the dataset file
    items: List[Any]

    model_config = {
        "populate_by_name": True
    }


class MessageOut(BaseModel):
    message: str
