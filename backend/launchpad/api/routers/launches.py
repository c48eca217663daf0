from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from launchpad.api.deps import get_adapter, get_db, get_orchestrator, require_identity
from launchpad.chain.protocol import ProtocolAdapter
from launchpad.chain.results import Err
from launchpad.core.config import get_settings
from launchpad.core.errors import AdapterUnavailable
from launchpad.core.security import Identity
from launchpad.schemas.launch import LaunchCreateRequest, LaunchOut, LaunchPage, LaunchResponse, VestingOut
from launchpad.services import launch_service
from launchpad.services.launch_service import LaunchOrchestrator

router = APIRouter(prefix="/api", tags=["launches"])


@router.post("/launch", response_model=LaunchResponse, status_code=status.HTTP_201_CREATED)
def create_launch(
    body: LaunchCreateRequest,
    identity: Identity = Depends(require_identity),
    orchestrator: LaunchOrchestrator = Depends(get_orchestrator),
):
    launch = orchestrator.create_launch(identity, body)
    return LaunchResponse(launch=LaunchOut.model_validate(launch))


@router.get("/tokens", response_model=LaunchPage)
def list_tokens(
    page: int = Query(1, ge=1),
    limit: int = Query(get_settings().page_size_default, ge=1),
    deployedOnly: bool = Query(False),
    db: Session = Depends(get_db),
):
    limit = min(limit, get_settings().page_size_max)
    items, pagination = launch_service.list_launches(db, page, limit, deployed_only=deployedOnly)
    return {"tokens": [LaunchOut.model_validate(item) for item in items], "pagination": pagination}


@router.get("/tokens/{launch_id}/vesting", response_model=VestingOut)
def vesting(
    launch_id: str,
    db: Session = Depends(get_db),
    adapter: ProtocolAdapter = Depends(get_adapter),
):
    launch = launch_service.get_deployed_launch(db, launch_id)
    account = adapter.admin
    result = adapter.available_vested(launch.token_address, account)
    if isinstance(result, Err):
        raise AdapterUnavailable("Could not read vested amount", details={"reason": result.message})
    return VestingOut(
        launchId=launch.id,
        tokenAddress=launch.token_address,
        account=account,
        availableWei=str(result.value),
    )
