import json
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from launchpad.api.deps import get_adapter, get_db, get_fee_job, require_cron_secret
from launchpad.chain.protocol import ProtocolAdapter
from launchpad.schemas.fees import FeeCollectionSummaryOut, LaunchFeeResultOut, PendingRouterOut
from launchpad.schemas.launch import VestingReleaseOut
from launchpad.services import launch_service
from launchpad.services.audit_service import latest_entry
from launchpad.services.fee_collection_service import FeeCollectionJob

router = APIRouter(prefix="/api/cron", tags=["cron"], dependencies=[Depends(require_cron_secret)])


@router.get("/collect-fees", response_model=FeeCollectionSummaryOut)
def collect_fees(job: FeeCollectionJob = Depends(get_fee_job)):
    summary = job.run()
    return FeeCollectionSummaryOut(
        collected=summary.collected,
        forwarded=summary.forwarded,
        total=summary.total,
        results=[
            LaunchFeeResultOut(
                launchId=r.launch_id,
                tokenAddress=r.token_address,
                success=r.success,
                amount=str(r.amount),
                assetAmount=str(r.asset_amount) if r.asset_amount else None,
                txHash=r.tx_hash,
                forwarded=r.forwarded,
                forwardTxHash=r.forward_tx_hash,
                routerRecipientSynced=r.router_recipient_synced,
                error=r.error,
                forwardError=r.forward_error,
            )
            for r in summary.results
        ],
    )


@router.get("/pending-routers", response_model=List[PendingRouterOut])
def pending_routers(db: Session = Depends(get_db)):
    out = []
    for launch in launch_service.pending_router_launches(db):
        entry = latest_entry(db, launch.id, "ROUTER_RECIPIENT_PENDING")
        last_error = None
        if entry and entry.details:
            last_error = json.loads(entry.details).get("message")
        out.append(
            PendingRouterOut(
                launchId=launch.id,
                tokenAddress=launch.token_address,
                feeRouterAddress=launch.fee_router_address,
                claimerWalletAddress=launch.claimer_wallet_address,
                claimedAt=launch.claimed_at_utc,
                lastError=last_error,
            )
        )
    return out


@router.post("/release-vested/{launch_id}", response_model=VestingReleaseOut)
def release_vested(
    launch_id: str,
    db: Session = Depends(get_db),
    adapter: ProtocolAdapter = Depends(get_adapter),
):
    """Operator action: release the admin's vested allocation of a deployed token."""
    tx_hash = launch_service.release_vested(db, adapter, launch_id)
    launch = launch_service.get_launch(db, launch_id)
    return VestingReleaseOut(launchId=launch.id, tokenAddress=launch.token_address, txHash=tx_hash)
