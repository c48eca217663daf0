import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, Text

from launchpad.core.time import utcnow
from launchpad.db.base import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    at_utc = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    action = Column(String(64), nullable=False, index=True)
    actor_user_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    launch_id = Column(String(36), ForeignKey("launches.id"), nullable=True, index=True)
    details = Column(Text, nullable=True)
