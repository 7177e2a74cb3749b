from sqlalchemy import Column, String, DateTime, Date, Time, Integer
from datetime import datetime, timezone
from .session import Base
import uuid


def gen_uuid():
    return str(uuid.uuid4())

class EventRecord(Base):
    __tablename__ = "events"
    id = Column(String, primary_key=True, default=gen_uuid)
    user_id = Column(String, nullable=True, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    date = Column(Date, nullable=False, index=True)
    time = Column(Time, nullable=True)
    duration_minutes = Column(Integer, nullable=False, default=60)
    color = Column(String, nullable=False, default="#007bff")
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
