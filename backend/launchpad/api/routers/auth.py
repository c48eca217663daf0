from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from launchpad.api.deps import get_db, require_identity
from launchpad.core.security import Identity
from launchpad.schemas.launch import LaunchOut
from launchpad.schemas.user import MeResponse, UserOut
from launchpad.services import launch_service
from launchpad.services.user_service import upsert_user

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/me", response_model=MeResponse)
def me(identity: Identity = Depends(require_identity), db: Session = Depends(get_db)):
    user = upsert_user(db, identity, refresh_profile=True)
    claimable = launch_service.claimable_launches(db, user.social_handle)
    return MeResponse(
        user=UserOut.model_validate(user),
        claimableTokens=[LaunchOut.model_validate(launch) for launch in claimable],
    )
