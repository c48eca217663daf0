"""
Protocol adapter interface.

An adapter wraps one token-launch protocol. Exactly one implementation is
selected at process start (``launchpad.chain.provider``); the launch
orchestrator and the fee collection job only talk to this interface.
"""
import abc
import logging
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from launchpad.chain.client import TransactionReverted
from launchpad.chain.results import ADAPTER_UNAVAILABLE, TRANSACTION_REVERTED, Err, Ok, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Recipient roles that can be repointed after deployment
ROLE_REWARD_RECIPIENT = "reward_recipient"
ROLE_VAULT_ADMIN = "vault_admin"


@dataclass(frozen=True)
class TokenMetadata:
    name: str
    symbol: str
    image_url: str


@dataclass(frozen=True)
class DeployedToken:
    token_address: str
    tx_hash: str
    pool_id: Optional[str] = None
    fee_router_address: Optional[str] = None


@dataclass(frozen=True)
class CollectedFees:
    # paired (numeraire) side, e.g. WETH
    amount: int
    tx_hash: Optional[str]
    # launched token side, when the protocol reports it separately
    asset_amount: int = 0

    @property
    def total(self) -> int:
        return self.amount + self.asset_amount


@dataclass(frozen=True)
class ClaimRedirect:
    claim_tx_hash: Optional[str] = None
    vault_claim_tx_hash: Optional[str] = None
    router_recipient_synced: bool = False


class ProtocolAdapter(abc.ABC):
    name = "base"

    # True when the on-chain redirect is the durable record of a claim, so a
    # failed redirect must undo the database claim.
    onchain_claim_is_authoritative = True

    client = None

    @property
    def admin(self) -> str:
        """Address of the platform signer; owns every role until a claim."""
        return self.client.admin_address

    @abc.abstractmethod
    def deploy_token(self, metadata: TokenMetadata, request_key: str) -> Result[DeployedToken]:
        ...

    @abc.abstractmethod
    def repoint_recipient(self, token_address: str, role: str, new_recipient: str) -> Result[str]:
        ...

    @abc.abstractmethod
    def redirect_to_claimer(self, launch, wallet_address: str) -> Result[ClaimRedirect]:
        ...

    @abc.abstractmethod
    def collect_fees(self, launch) -> Result[CollectedFees]:
        ...

    @abc.abstractmethod
    def available_vested(self, token_address: str, account: str) -> Result[int]:
        ...

    @abc.abstractmethod
    def release_vested(self, token_address: str) -> Result[str]:
        ...

    def _attempt(self, operation: str, fn: Callable[[], T]) -> Result[T]:
        return attempt(f"{self.name} {operation}", fn)


def attempt(label: str, fn: Callable[[], T]) -> Result[T]:
    """Run a chain call and convert any failure into an ``Err``."""
    try:
        return Ok(fn())
    except TransactionReverted as e:
        logger.error(f"{label} reverted: {e}")
        return Err(TRANSACTION_REVERTED, str(e))
    except Exception as e:
        logger.error(f"{label} failed: {e}", exc_info=True)
        return Err(ADAPTER_UNAVAILABLE, str(e) or e.__class__.__name__)
