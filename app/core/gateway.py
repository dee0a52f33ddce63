"""
Remote data gateway.

Thin wrapper over a SQLAlchemy session exposing the table queries the rest of
the service needs. Stores and routers never build queries themselves.
"""

import logging
from typing import Iterable, List, Optional

from fastapi import Depends
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.modules.auth.models import User, UserSettings
from app.modules.filters.models import CustomFilter
from app.modules.tenders.models import Entity, Municipality, Tender

# Configure logging
logger = logging.getLogger(__name__)

TENDER_ORDER_COLUMNS = {
    "publish_date": Tender.publish_date,
    "deadline": Tender.proposal_deadline,
}

_UNSET = object()


class DataGateway:
    def __init__(self, db: Session):
        self.db = db

    # Tenders

    def _ordered(self, query, order_by: str, ascending: bool):
        column = TENDER_ORDER_COLUMNS.get(order_by, Tender.publish_date)
        return query.order_by(column.asc() if ascending else column.desc())

    def search_tenders(self, match: Optional[str] = None, order_by: str = "publish_date",
                       ascending: bool = False) -> List[Tender]:
        """
        All tenders, optionally narrowed to those whose title or entity name
        contains ``match`` (case-insensitive).
        """
        query = self.db.query(Tender)
        if match and match.strip():
            pattern = f"%{match.strip()}%"
            query = query.filter(or_(Tender.title.ilike(pattern), Tender.entity.ilike(pattern)))
        return self._ordered(query, order_by, ascending).all()

    def get_tenders_by_ids(self, tender_ids: Iterable[str], order_by: str = "publish_date",
                           ascending: bool = False) -> List[Tender]:
        tender_ids = list(tender_ids)
        if not tender_ids:
            return []
        query = self.db.query(Tender).filter(Tender.id.in_(tender_ids))
        return self._ordered(query, order_by, ascending).all()

    def get_tenders_by_tax_id(self, tax_id: str, order_by: str = "publish_date",
                              ascending: bool = False) -> List[Tender]:
        query = self.db.query(Tender).filter(Tender.tax_id == tax_id)
        return self._ordered(query, order_by, ascending).all()

    def get_tender(self, tender_id: str) -> Optional[Tender]:
        return self.db.query(Tender).filter(Tender.id == tender_id).first()

    # User settings

    def get_user_settings(self, user_id: str) -> Optional[UserSettings]:
        return self.db.query(UserSettings).filter(UserSettings.user_id == user_id).first()

    def upsert_user_settings(self, user_id: str, favorites=_UNSET, followed_entities=_UNSET) -> UserSettings:
        """
        Insert or overwrite the settings row. Only the columns passed are
        written, each one as a whole document.
        """
        row = self.get_user_settings(user_id)
        if row is None:
            row = UserSettings(user_id=user_id)
            self.db.add(row)
        if favorites is not _UNSET:
            row.favorites = list(favorites)
        if followed_entities is not _UNSET:
            row.followed_entities = list(followed_entities)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(row)
        return row

    # Custom filters

    def list_filters(self, user_id: str) -> List[CustomFilter]:
        return (
            self.db.query(CustomFilter)
            .filter(CustomFilter.user_id == user_id)
            .order_by(CustomFilter.created_at.desc())
            .all()
        )

    def get_filter(self, filter_id: str) -> Optional[CustomFilter]:
        return self.db.query(CustomFilter).filter(CustomFilter.id == filter_id).first()

    def insert_filter(self, custom_filter: CustomFilter) -> CustomFilter:
        self.db.add(custom_filter)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(custom_filter)
        return custom_filter

    def update_filter(self, custom_filter: CustomFilter, **fields) -> CustomFilter:
        for name, value in fields.items():
            setattr(custom_filter, name, value)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(custom_filter)
        return custom_filter

    def delete_filter(self, custom_filter: CustomFilter) -> None:
        self.db.delete(custom_filter)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    # Entities

    def list_entities(self) -> List[Entity]:
        return self.db.query(Entity).order_by(Entity.name).all()

    def get_entity(self, tax_id: str) -> Optional[Entity]:
        return self.db.query(Entity).filter(Entity.tax_id == tax_id).first()

    def get_entities(self, tax_ids: Iterable[str]) -> List[Entity]:
        tax_ids = list(tax_ids)
        if not tax_ids:
            return []
        return self.db.query(Entity).filter(Entity.tax_id.in_(tax_ids)).all()

    def insert_entity_if_absent(self, tax_id: str, name: str) -> Entity:
        existing = self.get_entity(tax_id)
        if existing:
            logger.info(f"Entity {tax_id} already registered")
            return existing
        entity = Entity(tax_id=tax_id, name=name)
        self.db.add(entity)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(entity)
        return entity

    # Reference data

    def list_districts(self) -> List[str]:
        rows = (
            self.db.query(Municipality.district)
            .filter(Municipality.district.isnot(None))
            .distinct()
            .all()
        )
        return sorted({row[0] for row in rows})

    def list_municipalities(self, district: Optional[str] = None) -> List[str]:
        query = self.db.query(Municipality.municipality).filter(Municipality.municipality.isnot(None))
        if district:
            query = query.filter(Municipality.district == district)
        return sorted({row[0] for row in query.distinct().all()})

    # Users

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def add_user(self, user: User) -> User:
        self.db.add(user)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user


def get_gateway(db: Session = Depends(get_db)) -> DataGateway:
    """
    Dependency for getting a data gateway bound to the request's session
    """
    return DataGateway(db)
