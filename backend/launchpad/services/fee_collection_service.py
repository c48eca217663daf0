"""
Periodic fee collection over every deployed launch.

Each launch is handled on its own: a failure (exception or ``Err``) for one
token is recorded in its result and the loop moves on. ``run`` never raises.
A router forward that fails after a successful collection only sets
``forward_error``; the collection itself still counts.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.orm import Session

from launchpad.chain.fee_router import FeeRouterAdapter
from launchpad.chain.protocol import ProtocolAdapter
from launchpad.chain.results import Err
from launchpad.models import FeeCollection, Launch, LaunchStatus
from .audit_service import log_audit

logger = logging.getLogger(__name__)


@dataclass
class LaunchFeeResult:
    launch_id: str
    token_address: str
    success: bool = False
    amount: int = 0
    asset_amount: int = 0
    tx_hash: Optional[str] = None
    forwarded: bool = False
    forward_tx_hash: Optional[str] = None
    router_recipient_synced: Optional[bool] = None
    recorded: bool = False
    error: Optional[str] = None
    forward_error: Optional[str] = None


@dataclass
class FeeCollectionSummary:
    collected: int = 0
    forwarded: int = 0
    total: int = 0
    results: list[LaunchFeeResult] = field(default_factory=list)


class FeeCollectionJob:
    def __init__(self, db: Session, adapter: ProtocolAdapter, fee_router: FeeRouterAdapter | None = None):
        self.db = db
        self.adapter = adapter
        self.fee_router = fee_router

    def deployed_launches(self) -> list[Launch]:
        return (
            self.db.query(Launch)
            .filter(Launch.status == LaunchStatus.DEPLOYED, Launch.token_address.isnot(None))
            .order_by(Launch.created_at_utc.asc())
            .all()
        )

    def run(self) -> FeeCollectionSummary:
        launches = self.deployed_launches()
        summary = FeeCollectionSummary(total=len(launches))
        logger.info(f"Fee collection started for {len(launches)} launches")

        for launch in launches:
            result = LaunchFeeResult(launch_id=launch.id, token_address=launch.token_address)
            try:
                self._process(launch, result)
            except Exception as e:
                self.db.rollback()
                message = str(e) or e.__class__.__name__
                if result.success:
                    result.forward_error = message
                else:
                    result.error = message
                logger.error(f"Fee collection failed for {launch.token_address}: {e}", exc_info=True)

            if result.recorded:
                summary.collected += 1
            if result.forwarded:
                summary.forwarded += 1
            summary.results.append(result)

        logger.info(
            f"Fee collection finished: {summary.collected} collected, "
            f"{summary.forwarded} forwarded, {summary.total} considered"
        )
        return summary

    def _process(self, launch: Launch, result: LaunchFeeResult) -> None:
        collected = self.adapter.collect_fees(launch)
        if isinstance(collected, Err):
            result.error = collected.message
            return

        fees = collected.value
        result.amount = fees.amount
        result.asset_amount = fees.asset_amount
        result.tx_hash = fees.tx_hash

        if fees.total > 0 and fees.tx_hash:
            self.db.add(
                FeeCollection(
                    launch_id=launch.id,
                    token_address=launch.token_address,
                    amount_wei=str(fees.amount),
                    asset_amount_wei=str(fees.asset_amount) if fees.asset_amount else None,
                    tx_hash=fees.tx_hash,
                )
            )
            self.db.commit()
            result.recorded = True
            log_audit(
                self.db,
                action="FEE_COLLECTED",
                launch_id=launch.id,
                details={"amount": str(fees.amount), "assetAmount": str(fees.asset_amount), "tx": fees.tx_hash},
            )

        result.success = True

        if launch.fee_router_address and self.fee_router is not None:
            self._forward(launch, result)

    def _forward(self, launch: Launch, result: LaunchFeeResult) -> None:
        """Push whatever the router holds to its recipient. Failures stay in ``forward_error``."""
        router = launch.fee_router_address

        if launch.claimed and not launch.router_recipient_synced:
            result.router_recipient_synced = self._sync_recipient(launch)

        forwarded = self.fee_router.forward(router)
        if isinstance(forwarded, Err):
            result.forward_error = forwarded.message
            logger.warning(f"Forward from router {router} failed for launch {launch.id}: {forwarded.message}")
            return

        if forwarded.value:
            result.forwarded = True
            result.forward_tx_hash = forwarded.value
            log_audit(
                self.db,
                action="FEE_FORWARDED",
                launch_id=launch.id,
                details={"router": router, "tx": forwarded.value},
            )

    def _sync_recipient(self, launch: Launch) -> bool:
        """Retry pointing the router at the claimer after a failed claim-time ``setRecipient``."""
        synced = self.fee_router.set_recipient(launch.fee_router_address, launch.claimer_wallet_address)
        if isinstance(synced, Err):
            logger.warning(f"Router {launch.fee_router_address} still not synced for launch {launch.id}: {synced.message}")
            return False

        self.db.query(Launch).filter(Launch.id == launch.id).update(
            {"router_recipient_synced": True, "claim_tx_hash": synced.value},
            synchronize_session=False,
        )
        self.db.commit()
        log_audit(
            self.db,
            action="ROUTER_RECIPIENT_SYNCED",
            launch_id=launch.id,
            details={"router": launch.fee_router_address, "tx": synced.value},
        )
        return True
