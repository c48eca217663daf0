import uuid

from sqlalchemy import Column, DateTime, String, Text

from launchpad.core.time import utcnow
from launchpad.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    external_id = Column(String(255), unique=True, nullable=False, index=True)  # Privy DID
    social_handle = Column(String(64), unique=True, nullable=True, index=True)
    display_name = Column(Text, nullable=True)
    avatar_url = Column(Text, nullable=True)
    wallet_address = Column(String(42), nullable=True)
    created_at_utc = Column(DateTime(timezone=True), default=utcnow, nullable=False)
