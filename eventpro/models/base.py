# File: eventpro/models/base.py
from datetime import datetime
from sqlalchemy import Column, Integer, DateTime
from eventpro.db.database import Base


class BaseModel(Base):
    """Common primary key and creation timestamp for every table."""
    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
