from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum
from app.modules.tenders.schemas import TenderCard

class ColorClass(str, Enum):
    EXPIRED = "expired"
    TODAY = "today"
    WARNING = "warning"
    NORMAL = "normal"

class TimelineBar(BaseModel):
    """A favorited tender's publication-to-deadline span, clipped to the displayed month"""
    tender_id: str
    title: str
    entity: Optional[str] = None
    start: datetime
    end: datetime
    days_remaining: Optional[int] = None
    color_class: ColorClass
    left: float = Field(..., description="Left edge as a fraction of the month width")
    width: float = Field(..., description="Width as a fraction of the month width")

class MonthDay(BaseModel):
    day: int
    weekday: str
    is_today: bool = False

class CalendarResponse(BaseModel):
    month: int
    year: int
    days_in_month: int
    days: List[MonthDay] = []
    bars: List[TimelineBar] = []
    active_favorites_count: int = 0
    previous: dict
    next: dict
    selected: Optional[TenderCard] = None
