from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class LaunchFeeResultOut(BaseModel):
    launchId: str
    tokenAddress: str
    success: bool
    amount: str = "0"
    assetAmount: Optional[str] = None
    txHash: Optional[str] = None
    forwarded: bool = False
    forwardTxHash: Optional[str] = None
    routerRecipientSynced: Optional[bool] = None
    error: Optional[str] = None
    forwardError: Optional[str] = None


class FeeCollectionSummaryOut(BaseModel):
    collected: int
    forwarded: int
    total: int
    results: list[LaunchFeeResultOut]


class PendingRouterOut(BaseModel):
    launchId: str
    tokenAddress: Optional[str]
    feeRouterAddress: str
    claimerWalletAddress: str
    claimedAt: Optional[datetime]
    lastError: Optional[str] = None
