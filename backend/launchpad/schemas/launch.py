from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, HttpUrl, field_validator

from launchpad.models.launch import LaunchStatus

WALLET_ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"


class LaunchCreateRequest(BaseModel):
    targetHandle: str = Field(..., min_length=1, max_length=64)
    targetDisplayName: str = Field("", max_length=256)
    targetAvatarUrl: Optional[HttpUrl] = None
    tokenName: str = Field(..., min_length=1, max_length=128)
    tokenSymbol: str = Field(..., min_length=1, max_length=16)
    tokenImageUrl: HttpUrl

    @field_validator("targetHandle")
    @classmethod
    def strip_at(cls, value: str) -> str:
        handle = value[1:] if value.startswith("@") else value
        if not handle:
            raise ValueError("handle must not be empty")
        return handle

    @field_validator("tokenSymbol")
    @classmethod
    def upper_symbol(cls, value: str) -> str:
        return value.upper()

    @field_validator("targetAvatarUrl", mode="before")
    @classmethod
    def blank_avatar(cls, value):
        return value or None


class ClaimRequest(BaseModel):
    launchId: UUID
    walletAddress: str = Field(..., pattern=WALLET_ADDRESS_PATTERN)


class LaunchOut(BaseModel):
    id: str
    launcherUserId: str = Field(validation_alias="launcher_user_id")
    targetHandle: str = Field(validation_alias="target_handle")
    targetDisplayName: Optional[str] = Field(None, validation_alias="target_display_name")
    targetAvatarUrl: Optional[str] = Field(None, validation_alias="target_avatar_url")
    tokenName: str = Field(validation_alias="token_name")
    tokenSymbol: str = Field(validation_alias="token_symbol")
    tokenImageUrl: str = Field(validation_alias="token_image_url")
    tokenAddress: Optional[str] = Field(None, validation_alias="token_address")
    deployTxHash: Optional[str] = Field(None, validation_alias="deploy_tx_hash")
    poolId: Optional[str] = Field(None, validation_alias="pool_id")
    feeRouterAddress: Optional[str] = Field(None, validation_alias="fee_router_address")
    routerRecipientSynced: bool = Field(False, validation_alias="router_recipient_synced")
    status: LaunchStatus
    claimed: bool
    claimedByUserId: Optional[str] = Field(None, validation_alias="claimed_by_user_id")
    claimedAt: Optional[datetime] = Field(None, validation_alias="claimed_at_utc")
    claimerWalletAddress: Optional[str] = Field(None, validation_alias="claimer_wallet_address")
    claimTxHash: Optional[str] = Field(None, validation_alias="claim_tx_hash")
    vaultClaimTxHash: Optional[str] = Field(None, validation_alias="vault_claim_tx_hash")
    createdAt: datetime = Field(validation_alias="created_at_utc")

    model_config = {"from_attributes": True}


class LaunchResponse(BaseModel):
    launch: LaunchOut


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int


class LaunchPage(BaseModel):
    tokens: list[LaunchOut]
    pagination: Pagination


class VestingOut(BaseModel):
    launchId: str
    tokenAddress: str
    account: str
    availableWei: str


class VestingReleaseOut(BaseModel):
    launchId: str
    tokenAddress: str
    txHash: str
