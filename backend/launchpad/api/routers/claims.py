from fastapi import APIRouter, Depends

from launchpad.api.deps import get_orchestrator, require_identity
from launchpad.core.security import Identity
from launchpad.schemas.launch import ClaimRequest, LaunchOut, LaunchResponse
from launchpad.services.launch_service import LaunchOrchestrator

router = APIRouter(prefix="/api", tags=["claims"])


@router.post("/claim", response_model=LaunchResponse)
def claim(
    body: ClaimRequest,
    identity: Identity = Depends(require_identity),
    orchestrator: LaunchOrchestrator = Depends(get_orchestrator),
):
    launch = orchestrator.claim_launch(identity, str(body.launchId), body.walletAddress)
    return LaunchResponse(launch=LaunchOut.model_validate(launch))
