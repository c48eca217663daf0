"""Token launches and their deployment / claim lifecycle."""
import enum
import uuid

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from launchpad.core.time import utcnow
from launchpad.db.base import Base


class LaunchStatus(str, enum.Enum):
    PENDING = "pending"
    DEPLOYING = "deploying"
    DEPLOYED = "deployed"
    FAILED = "failed"


# Forward-only lifecycle; deployed and failed are terminal.
LAUNCH_TRANSITIONS = {
    LaunchStatus.PENDING: {LaunchStatus.DEPLOYING},
    LaunchStatus.DEPLOYING: {LaunchStatus.DEPLOYED, LaunchStatus.FAILED},
    LaunchStatus.DEPLOYED: set(),
    LaunchStatus.FAILED: set(),
}


class Launch(Base):
    __tablename__ = "launches"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    launcher_user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    # Snapshot of the target profile at creation time
    target_handle = Column(String(64), nullable=False, index=True)
    target_display_name = Column(String(256), nullable=True)
    target_avatar_url = Column(Text, nullable=True)

    token_name = Column(String(128), nullable=False)
    token_symbol = Column(String(16), nullable=False)
    token_image_url = Column(Text, nullable=False)

    # Deployment results
    token_address = Column(String(42), unique=True, nullable=True)
    deploy_tx_hash = Column(String(66), nullable=True)
    pool_id = Column(String(66), nullable=True)
    fee_router_address = Column(String(42), nullable=True)
    router_recipient_synced = Column(Boolean, default=False, nullable=False)
    request_key = Column(String(32), unique=True, nullable=False)

    status = Column(Enum(LaunchStatus), default=LaunchStatus.PENDING, nullable=False, index=True)

    # Claim
    claimed = Column(Boolean, default=False, nullable=False)
    claimed_by_user_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    claimed_at_utc = Column(DateTime(timezone=True), nullable=True)
    claimer_wallet_address = Column(String(42), nullable=True)
    claim_tx_hash = Column(String(66), nullable=True)
    vault_claim_tx_hash = Column(String(66), nullable=True)

    created_at_utc = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    launcher = relationship("User", foreign_keys=[launcher_user_id])
    claimed_by = relationship("User", foreign_keys=[claimed_by_user_id])
    fee_collections = relationship("FeeCollection", back_populates="launch")
