from sqlalchemy import Column, String, DateTime, JSON
from app.core.database import Base
import datetime

class CustomFilter(Base):
    """Model representing a user's named tender filter"""
    __tablename__ = "custom_filters"

    id = Column(String(255), primary_key=True)
    user_id = Column(String(255), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    district = Column(String(100), nullable=True)
    municipalities = Column(JSON, nullable=True)
    keywords = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.now)
    updated_at = Column(DateTime, default=datetime.datetime.now, onupdate=datetime.datetime.now)

    def __repr__(self):
        return f"<CustomFilter id={self.id} name={self.name}>"
