"""SQLAlchemy ORM models for the database-backed application store"""

from sqlalchemy import Column, Integer, Text, DateTime, JSON
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class FinanceApplicationRecord(Base):
    """One stored finance application; position preserves insertion order"""

    __tablename__ = "finance_application"

    id = Column(Integer, primary_key=True, autoincrement=True)
    position = Column(Integer, nullable=False, index=True)
    application_id = Column(Text, nullable=False, unique=True)
    outcome = Column(Text, nullable=False, index=True)
    payload = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
