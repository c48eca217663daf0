from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from launchpad.schemas.launch import LaunchOut


class UserOut(BaseModel):
    id: str
    externalId: str = Field(validation_alias="external_id")
    socialHandle: Optional[str] = Field(None, validation_alias="social_handle")
    displayName: Optional[str] = Field(None, validation_alias="display_name")
    avatarUrl: Optional[str] = Field(None, validation_alias="avatar_url")
    walletAddress: Optional[str] = Field(None, validation_alias="wallet_address")
    createdAt: datetime = Field(validation_alias="created_at_utc")

    model_config = {"from_attributes": True}


class MeResponse(BaseModel):
    user: UserOut
    claimableTokens: list[LaunchOut]
