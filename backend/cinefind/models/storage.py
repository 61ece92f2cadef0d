from sqlalchemy import Column, String, Text, DateTime, func
from cinefind.db import Base

class StorageEntry(Base):
    """Key-value row holding one serialized document"""
    __tablename__ = "storage_entries"
    key = Column(String, primary_key=True, index=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
