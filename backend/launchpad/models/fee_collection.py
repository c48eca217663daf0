import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from launchpad.core.time import utcnow
from launchpad.db.base import Base


class FeeCollection(Base):
    """Append-only ledger of on-chain fee collections."""
    __tablename__ = "fee_collections"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    launch_id = Column(String(36), ForeignKey("launches.id"), nullable=False, index=True)
    token_address = Column(String(42), nullable=False)
    # Base units as decimal strings; uint256 does not fit in BIGINT
    amount_wei = Column(String(78), nullable=False)
    asset_amount_wei = Column(String(78), nullable=True)
    tx_hash = Column(String(66), nullable=False)
    collected_at_utc = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    launch = relationship("Launch", back_populates="fee_collections")
