from pydantic import BaseModel, ConfigDict
from typing import Optional, List
from datetime import datetime
from enum import Enum

class TenderStatus(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"

class SortField(str, Enum):
    DEADLINE = "deadline"
    PUBLISH_DATE = "publish_date"
    PROCEDURE_NUMBER = "procedure_number"

class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

class UrgencyLevel(str, Enum):
    EXPIRED = "expired"
    TODAY = "today"
    SOON = "soon"
    NORMAL = "normal"

class TimeRemaining(BaseModel):
    """Deadline countdown shown on a tender card"""
    days: int
    text: str
    level: UrgencyLevel

class Tender(BaseModel):
    """Schema for a tender as stored"""
    id: str
    procedure_number: Optional[str] = None
    title: str
    entity: Optional[str] = None
    tax_id: Optional[str] = None
    publish_date: Optional[datetime] = None
    proposal_deadline: Optional[datetime] = None
    base_price: Optional[float] = None
    execution_term: Optional[str] = None
    urgent: bool = False
    district: Optional[str] = None
    municipality: Optional[str] = None
    single_factor_criterion: Optional[str] = None
    multi_factor_criterion: Optional[str] = None
    presentation_url: Optional[str] = None
    platform: Optional[str] = None
    source_document_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class TenderCard(Tender):
    """Tender plus the values derived for display"""
    award_criteria: List[str] = []
    time_remaining: Optional[TimeRemaining] = None
    is_favorite: bool = False

class TenderListResponse(BaseModel):
    items: List[TenderCard] = []
    total: int = 0
    status: TenderStatus
    sort_field: SortField
    sort_direction: SortDirection

class EntityTendersResponse(BaseModel):
    tax_id: str
    name: Optional[str] = None
    items: List[TenderCard] = []
    total: int = 0
    status: TenderStatus
