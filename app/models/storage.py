from sqlalchemy import Column, String, DateTime, JSON, func
from datetime import datetime

from app.db.database import Base


class StorageEntry(Base):
    """A namespaced key holding one JSON document (e.g. the whole resume map)."""
    __tablename__ = "storage_entries"

    key = Column(String, primary_key=True, index=True)
    value = Column(JSON, nullable=False, default=dict)
    updatedAt = Column(DateTime, default=datetime.utcnow, server_default=func.now(), onupdate=datetime.utcnow)
