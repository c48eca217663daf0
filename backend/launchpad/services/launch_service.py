"""
Launch orchestration: creation, deployment and claim.

Every step re-reads the launch and writes through conditional UPDATEs keyed
on the current status / claim state, so concurrent requests cannot move a
launch backwards or claim it twice.
"""
import logging
import math
import uuid
from typing import Any

from sqlalchemy.orm import Session

from launchpad.chain.protocol import ProtocolAdapter, TokenMetadata
from launchpad.chain.results import ADAPTER_UNAVAILABLE, Err, Ok
from launchpad.core.errors import (
    AdapterUnavailable,
    ClaimOnChainFailed,
    ClaimRejected,
    DeploymentFailed,
    InvalidInput,
    NoLinkedProfile,
    NotFound,
    RateLimited,
    Unauthorized,
)
from launchpad.core.security import Identity
from launchpad.core.time import utcnow
from launchpad.models import LAUNCH_TRANSITIONS, Launch, LaunchStatus
from launchpad.schemas.launch import LaunchCreateRequest
from .audit_service import log_audit
from .rate_limit_service import LaunchRateLimiter
from .user_service import upsert_user

logger = logging.getLogger(__name__)


class LaunchOrchestrator:
    def __init__(self, db: Session, adapter: ProtocolAdapter, rate_limiter: LaunchRateLimiter | None = None):
        self.db = db
        self.adapter = adapter
        self.rate_limiter = rate_limiter or LaunchRateLimiter()

    def _get(self, launch_id: str) -> Launch:
        launch = self.db.query(Launch).filter(Launch.id == launch_id).first()
        if not launch:
            raise NotFound(f"Launch {launch_id} not found")
        self.db.refresh(launch)
        return launch

    def _transition(self, launch_id: str, current: LaunchStatus, target: LaunchStatus, **fields: Any) -> bool:
        if target not in LAUNCH_TRANSITIONS[current]:
            raise ValueError(f"Illegal launch transition {current.value} -> {target.value}")
        updated = (
            self.db.query(Launch)
            .filter(Launch.id == launch_id, Launch.status == current)
            .update({"status": target, **fields}, synchronize_session=False)
        )
        self.db.commit()
        if updated != 1:
            logger.error(f"Launch {launch_id} was not in {current.value}; {target.value} not applied")
            return False
        return True

    def create_launch(self, identity: Identity | None, body: LaunchCreateRequest) -> Launch:
        if identity is None:
            raise Unauthorized("Unauthorized")

        user = upsert_user(self.db, identity)

        if not self.rate_limiter.allow(self.db, user.id):
            raise RateLimited("Rate limit exceeded. You can launch one token per day.")

        launch_id = str(uuid.uuid4())
        launch = Launch(
            id=launch_id,
            request_key=launch_id.replace("-", ""),
            launcher_user_id=user.id,
            target_handle=body.targetHandle,
            target_display_name=body.targetDisplayName or None,
            target_avatar_url=str(body.targetAvatarUrl) if body.targetAvatarUrl else None,
            token_name=body.tokenName,
            token_symbol=body.tokenSymbol,
            token_image_url=str(body.tokenImageUrl),
            status=LaunchStatus.PENDING,
        )
        self.db.add(launch)
        self.db.commit()
        log_audit(
            self.db,
            action="LAUNCH_CREATED",
            actor_user_id=user.id,
            launch_id=launch_id,
            details={"target": body.targetHandle, "symbol": body.tokenSymbol},
        )

        self._transition(launch_id, LaunchStatus.PENDING, LaunchStatus.DEPLOYING)
        return self._deploy(launch_id, launch.request_key, user.id, body)

    def _deploy(self, launch_id: str, request_key: str, user_id: str, body: LaunchCreateRequest) -> Launch:
        metadata = TokenMetadata(name=body.tokenName, symbol=body.tokenSymbol, image_url=str(body.tokenImageUrl))
        try:
            result = self.adapter.deploy_token(metadata, request_key)
        except Exception as e:
            logger.error(f"Adapter raised during deploy of launch {launch_id}: {e}", exc_info=True)
            result = Err(ADAPTER_UNAVAILABLE, str(e) or e.__class__.__name__)

        if isinstance(result, Ok):
            deployed = result.value
            self._transition(
                launch_id,
                LaunchStatus.DEPLOYING,
                LaunchStatus.DEPLOYED,
                token_address=deployed.token_address,
                deploy_tx_hash=deployed.tx_hash,
                pool_id=deployed.pool_id,
                fee_router_address=deployed.fee_router_address,
            )
            logger.info(f"Launch {launch_id} deployed {body.tokenSymbol} at {deployed.token_address}")
            log_audit(
                self.db,
                action="LAUNCH_DEPLOYED",
                actor_user_id=user_id,
                launch_id=launch_id,
                details={"token": deployed.token_address, "tx": deployed.tx_hash, "router": deployed.fee_router_address},
            )
            return self._get(launch_id)

        self._transition(launch_id, LaunchStatus.DEPLOYING, LaunchStatus.FAILED)
        logger.error(f"Deploy failed for launch {launch_id}: [{result.kind}] {result.message}")
        log_audit(
            self.db,
            action="LAUNCH_FAILED",
            actor_user_id=user_id,
            launch_id=launch_id,
            details={"kind": result.kind, "message": result.message},
        )
        raise DeploymentFailed(
            "Token deployment failed",
            details={"launchId": launch_id, "reason": result.message},
        )

    def claim_launch(self, identity: Identity | None, launch_id: str, wallet_address: str) -> Launch:
        if identity is None:
            raise Unauthorized("Unauthorized")
        if not identity.handle:
            raise NoLinkedProfile("No X account linked to your account")

        user = upsert_user(self.db, identity, wallet_address=wallet_address)

        # Single guarded UPDATE; the only thing standing between two concurrent claims.
        matched = (
            self.db.query(Launch)
            .filter(
                Launch.id == launch_id,
                Launch.target_handle == identity.handle,
                Launch.claimed.is_(False),
                Launch.status == LaunchStatus.DEPLOYED,
            )
            .update(
                {
                    "claimed": True,
                    "claimed_by_user_id": user.id,
                    "claimed_at_utc": utcnow(),
                    "claimer_wallet_address": wallet_address,
                },
                synchronize_session=False,
            )
        )
        self.db.commit()
        if matched == 0:
            raise ClaimRejected(
                "Token not found, already claimed, not deployed, or you are not the target profile owner"
            )

        launch = self._get(launch_id)
        try:
            result = self.adapter.redirect_to_claimer(launch, wallet_address)
        except Exception as e:
            logger.error(f"Adapter raised during claim of launch {launch_id}: {e}", exc_info=True)
            result = Err(ADAPTER_UNAVAILABLE, str(e) or e.__class__.__name__)

        if isinstance(result, Ok):
            redirect = result.value
            self.db.query(Launch).filter(Launch.id == launch_id).update(
                {
                    "claim_tx_hash": redirect.claim_tx_hash,
                    "vault_claim_tx_hash": redirect.vault_claim_tx_hash,
                    "router_recipient_synced": redirect.router_recipient_synced,
                },
                synchronize_session=False,
            )
            self.db.commit()
            log_audit(
                self.db,
                action="LAUNCH_CLAIMED",
                actor_user_id=user.id,
                launch_id=launch_id,
                details={"wallet": wallet_address, "tx": redirect.claim_tx_hash},
            )
            return self._get(launch_id)

        if self.adapter.onchain_claim_is_authoritative:
            self._rollback_claim(launch_id, user.id)
            log_audit(
                self.db,
                action="CLAIM_ROLLED_BACK",
                actor_user_id=user.id,
                launch_id=launch_id,
                details={"kind": result.kind, "message": result.message},
            )
            raise ClaimOnChainFailed(
                "Failed to transfer token rewards on-chain",
                details={"launchId": launch_id, "reason": result.message},
            )

        logger.error(
            f"Router recipient not set for claimed launch {launch_id} "
            f"(router {launch.fee_router_address}): [{result.kind}] {result.message}"
        )
        log_audit(
            self.db,
            action="ROUTER_RECIPIENT_PENDING",
            actor_user_id=user.id,
            launch_id=launch_id,
            details={"router": launch.fee_router_address, "wallet": wallet_address, "message": result.message},
        )
        return self._get(launch_id)

    def _rollback_claim(self, launch_id: str, user_id: str) -> None:
        self.db.query(Launch).filter(
            Launch.id == launch_id,
            Launch.claimed.is_(True),
            Launch.claimed_by_user_id == user_id,
        ).update(
            {
                "claimed": False,
                "claimed_by_user_id": None,
                "claimed_at_utc": None,
                "claimer_wallet_address": None,
                "claim_tx_hash": None,
                "vault_claim_tx_hash": None,
            },
            synchronize_session=False,
        )
        self.db.commit()
        logger.warning(f"Rolled back claim on launch {launch_id}")


def list_launches(db: Session, page: int, limit: int, deployed_only: bool = False) -> tuple[list[Launch], dict]:
    qs = db.query(Launch)
    if deployed_only:
        qs = qs.filter(Launch.status == LaunchStatus.DEPLOYED)
    total = qs.count()
    items = qs.order_by(Launch.created_at_utc.desc()).offset((page - 1) * limit).limit(limit).all()
    pagination = {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": math.ceil(total / limit) if limit else 0,
    }
    return items, pagination


def claimable_launches(db: Session, handle: str | None) -> list[Launch]:
    if not handle:
        return []
    return (
        db.query(Launch)
        .filter(Launch.target_handle == handle)
        .order_by(Launch.created_at_utc.desc())
        .all()
    )


def get_launch(db: Session, launch_id: str) -> Launch:
    launch = db.query(Launch).filter(Launch.id == launch_id).first()
    if not launch:
        raise NotFound(f"Launch {launch_id} not found")
    return launch


def get_deployed_launch(db: Session, launch_id: str) -> Launch:
    launch = get_launch(db, launch_id)
    if launch.status != LaunchStatus.DEPLOYED or not launch.token_address:
        raise InvalidInput("Token is not deployed", details={"launchId": launch_id, "status": launch.status.value})
    return launch


def release_vested(db: Session, adapter: ProtocolAdapter, launch_id: str) -> str:
    """
    Release the admin's vested allocation for a deployed launch.

    Returns the release transaction hash. The launch row is not touched; the
    audit log keeps the record.
    """
    launch = get_deployed_launch(db, launch_id)
    result = adapter.release_vested(launch.token_address)
    if isinstance(result, Err):
        logger.error(f"Vested release failed for launch {launch_id}: [{result.kind}] {result.message}")
        raise AdapterUnavailable("Vested token release failed", details={"launchId": launch_id, "reason": result.message})

    logger.info(f"Released vested tokens of {launch.token_address} in {result.value}")
    log_audit(
        db,
        action="VESTED_RELEASED",
        launch_id=launch_id,
        details={"token": launch.token_address, "tx": result.value},
    )
    return result.value


def pending_router_launches(db: Session) -> list[Launch]:
    """Claimed launches whose fee router still points somewhere other than the claimer."""
    return (
        db.query(Launch)
        .filter(
            Launch.claimed.is_(True),
            Launch.fee_router_address.isnot(None),
            Launch.router_recipient_synced.is_(False),
        )
        .order_by(Launch.claimed_at_utc.asc())
        .all()
    )
