# app/modules/auth/models.py

from sqlalchemy import Column, Integer, String, DateTime, JSON
from app.core.database import Base
import datetime


def _utcnow():
    return datetime.datetime.now(datetime.timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)


class UserSettings(Base):
    """
    Per-user settings document. The list columns are always written whole
    (read-modify-write); concurrent writers follow last-write-wins.
    """
    __tablename__ = "user_settings"

    user_id = Column(String(255), primary_key=True)
    favorites = Column(JSON, nullable=True)
    followed_entities = Column(JSON, nullable=True)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)
