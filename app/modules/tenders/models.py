from sqlalchemy import Column, String, DateTime, Float, Boolean, Text, Integer
from app.core.database import Base

class Tender(Base):
    """Model representing a public procurement notice. Rows are loaded by an external process"""
    __tablename__ = "tenders"

    id = Column(String(255), primary_key=True)
    procedure_number = Column(String(100), nullable=True)
    title = Column(Text, nullable=False)
    entity = Column(String(500), nullable=True)
    tax_id = Column(String(20), nullable=True, index=True)
    publish_date = Column(DateTime, nullable=True, index=True)
    proposal_deadline = Column(DateTime, nullable=True, index=True)
    base_price = Column(Float, nullable=True)
    execution_term = Column(Text, nullable=True)
    urgent = Column(Boolean, nullable=False, default=False)
    district = Column(String(100), nullable=True)
    municipality = Column(String(100), nullable=True)

    # Award criterion: single factor text or pipe-delimited multi factor text
    single_factor_criterion = Column(Text, nullable=True)
    multi_factor_criterion = Column(Text, nullable=True)

    presentation_url = Column(String(1024), nullable=True)
    platform = Column(String(255), nullable=True)
    source_document_url = Column(String(1024), nullable=True)

    def __repr__(self):
        return f"<Tender id={self.id} procedure_number={self.procedure_number}>"

class Entity(Base):
    """Public body issuing tenders, identified by its tax id (NIPC)"""
    __tablename__ = "entities"

    tax_id = Column(String(20), primary_key=True)
    name = Column(String(500), nullable=False)

    def __repr__(self):
        return f"<Entity tax_id={self.tax_id}>"

class Municipality(Base):
    """Reference data used to populate the custom filter form"""
    __tablename__ = "municipalities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    district = Column(String(100), nullable=True, index=True)
    municipality = Column(String(100), nullable=True)
