"""
Helpers for deploying and driving BeneficiaryFeeRouter contracts.

Each Doppler launch gets its own router, recorded on-chain as the creator's
(immutable) fee beneficiary. The admin owns the router and repoints its
recipient at the creator's wallet once they claim; fees are forwarded on
demand by the fee collection job.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from web3 import Web3

from launchpad.chain.abi import BENEFICIARY_FEE_ROUTER_ABI, ERC20_ABI
from launchpad.chain.artifacts import ContractArtifact
from launchpad.chain.client import ZERO_ADDRESS, ChainClient, tx_hash_of
from launchpad.chain.protocol import attempt
from launchpad.chain.results import Err, Ok, Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeployedRouter:
    router_address: str
    tx_hash: str


class FeeRouterAdapter:
    def __init__(self, client: ChainClient, asset_address: str, artifact_loader: Callable[[], ContractArtifact]):
        self.client = client
        self.asset_address = asset_address
        self._artifact_loader = artifact_loader
        self._artifact: Optional[ContractArtifact] = None

    def _load_artifact(self) -> ContractArtifact:
        if self._artifact is None:
            self._artifact = self._artifact_loader()
        return self._artifact

    def deploy(self) -> Result[DeployedRouter]:
        """Deploy a router owned by the admin, with no recipient set."""

        def run() -> DeployedRouter:
            artifact = self._load_artifact()
            receipt = self.client.deploy(artifact.abi, artifact.bytecode, self.client.admin_address)
            router = Web3.to_checksum_address(receipt["contractAddress"])
            logger.info(f"Deployed fee router {router}")
            return DeployedRouter(router_address=router, tx_hash=tx_hash_of(receipt))

        return attempt("fee router deploy", run)

    def set_recipient(self, router_address: str, recipient: str) -> Result[str]:
        def run() -> str:
            receipt = self.client.transact(
                router_address,
                BENEFICIARY_FEE_ROUTER_ABI,
                "setRecipient",
                Web3.to_checksum_address(recipient),
            )
            return tx_hash_of(receipt)

        return attempt(f"fee router setRecipient on {router_address}", run)

    def get_recipient(self, router_address: str) -> Result[str]:
        return attempt(
            f"fee router recipient read on {router_address}",
            lambda: self.client.read(router_address, BENEFICIARY_FEE_ROUTER_ABI, "recipient"),
        )

    def get_balance(self, router_address: str) -> Result[int]:
        return attempt(
            f"fee router balance read on {router_address}",
            lambda: int(
                self.client.read(self.asset_address, ERC20_ABI, "balanceOf", Web3.to_checksum_address(router_address))
            ),
        )

    def forward(self, router_address: str) -> Result[Optional[str]]:
        """
        Forward the router's asset balance to its recipient.

        Returns ``Ok(None)`` without sending a transaction when no recipient
        is set yet or the balance is zero.
        """
        recipient = self.get_recipient(router_address)
        if isinstance(recipient, Err):
            return recipient
        if int(recipient.value, 16) == int(ZERO_ADDRESS, 16):
            return Ok(None)

        balance = self.get_balance(router_address)
        if isinstance(balance, Err):
            return balance
        if balance.value == 0:
            return Ok(None)

        def run() -> str:
            receipt = self.client.transact(
                router_address,
                BENEFICIARY_FEE_ROUTER_ABI,
                "forward",
                Web3.to_checksum_address(self.asset_address),
            )
            logger.info(f"Forwarded {balance.value} from {router_address} to {recipient.value}")
            return tx_hash_of(receipt)

        return attempt(f"fee router forward on {router_address}", run)
