from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

class CustomFilterBase(BaseModel):
    name: str = Field(..., description="Display name of the filter")
    district: Optional[str] = Field(None, description="District the tender must be in ('Todos' means any)")
    municipalities: Optional[List[str]] = Field(None, description="Municipalities the tender may be in")
    keywords: Optional[List[str]] = Field(None, description="At least one must appear in the tender text")

class CustomFilterCreate(CustomFilterBase):
    pass

class CustomFilterUpdate(CustomFilterBase):
    pass

class CustomFilter(BaseModel):
    id: str
    user_id: str
    name: str
    district: Optional[str] = None
    municipalities: Optional[List[str]] = None
    keywords: Optional[List[str]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class DistrictsResponse(BaseModel):
    districts: List[str] = []

class MunicipalitiesResponse(BaseModel):
    district: Optional[str] = None
    municipalities: List[str] = []
