"""
Clanker v4 adapter (direct-recipient claims).

Tokens are deployed with the admin as reward admin/recipient for both reward
slots and as vault allocation admin. A claim repoints the creator reward slot
and the vault allocation straight to the creator's wallet; those on-chain
writes are the durable record of the claim.
"""
import json
import logging

from eth_abi import encode
from web3 import Web3

from launchpad.chain.abi import (
    CLANKER_FACTORY_ABI,
    CLANKER_FEE_LOCKER_ABI,
    CLANKER_LP_LOCKER_ABI,
    CLANKER_VAULT_ABI,
)
from launchpad.chain.client import ChainClient, ChainError, tx_hash_of
from launchpad.chain.protocol import (
    ROLE_REWARD_RECIPIENT,
    ROLE_VAULT_ADMIN,
    ClaimRedirect,
    CollectedFees,
    DeployedToken,
    ProtocolAdapter,
    TokenMetadata,
)
from launchpad.chain.results import Err, Ok, Result
from launchpad.core.config import Settings

logger = logging.getLogger(__name__)

# Static pool fees, in bps of the swap (1.25% each side)
CLANKER_FEE_BPS = 125
PAIRED_FEE_BPS = 125

# Reward slots: 0 = creator (admin until claimed), 1 = platform
CREATOR_REWARD_INDEX = 0
PLATFORM_REWARD_INDEX = 1
CREATOR_REWARD_BPS = 8000
PLATFORM_REWARD_BPS = 2000

# Fees are paid out in the paired token (WETH)
FEE_IN_PAIRED = 1

# Single full-range position starting at ~10 ETH market cap
STARTING_TICK = -230400
TICK_SPACING = 200
POSITION_TICK_UPPER = 887200

# Vault: 10% of supply, 30 day lockup then 30 day linear vesting
VAULT_BPS = 1000
VAULT_LOCKUP_SECONDS = 2_592_000
VAULT_VESTING_SECONDS = 2_592_000

TOKEN_DESCRIPTION = "Launched via Pip for an X profile"
PLATFORM_NAME = "Pip"


class ClankerAdapter(ProtocolAdapter):
    name = "clanker"
    onchain_claim_is_authoritative = True

    def __init__(self, client: ChainClient, settings: Settings):
        self.client = client
        self.settings = settings

    def deployment_config(self, metadata: TokenMetadata, request_key: str) -> tuple:
        s = self.settings
        admin = self.admin
        token_config = (
            admin,
            metadata.name,
            metadata.symbol,
            Web3.keccak(text=request_key),
            metadata.image_url,
            json.dumps({"description": TOKEN_DESCRIPTION}),
            json.dumps({"interface": PLATFORM_NAME, "platform": PLATFORM_NAME, "messageId": request_key}),
            s.chain_id,
        )
        pool_config = (
            Web3.to_checksum_address(s.clanker_static_fee_hook_address),
            Web3.to_checksum_address(s.weth_address),
            STARTING_TICK,
            TICK_SPACING,
            # uniswap fee units: 1_000_000 == 100%
            encode(["uint24", "uint24"], [CLANKER_FEE_BPS * 100, PAIRED_FEE_BPS * 100]),
        )
        locker_config = (
            Web3.to_checksum_address(s.clanker_lp_locker_address),
            [admin, admin],
            [admin, admin],
            [CREATOR_REWARD_BPS, PLATFORM_REWARD_BPS],
            [STARTING_TICK],
            [POSITION_TICK_UPPER],
            [10_000],
            encode(["uint8[]"], [[FEE_IN_PAIRED, FEE_IN_PAIRED]]),
        )
        mev_module_config = (Web3.to_checksum_address(s.clanker_mev_module_address), b"")
        vault_extension = (
            Web3.to_checksum_address(s.clanker_vault_address),
            0,
            VAULT_BPS,
            encode(["address", "uint256", "uint256"], [admin, VAULT_LOCKUP_SECONDS, VAULT_VESTING_SECONDS]),
        )
        return (token_config, pool_config, locker_config, mev_module_config, [vault_extension])

    def deploy_token(self, metadata: TokenMetadata, request_key: str) -> Result[DeployedToken]:
        factory = self.settings.clanker_factory_address

        def run() -> DeployedToken:
            config = self.deployment_config(metadata, request_key)
            receipt = self.client.transact(factory, CLANKER_FACTORY_ABI, "deployToken", config)
            events = self.client.events(factory, CLANKER_FACTORY_ABI, "TokenCreated", receipt)
            if not events:
                raise ChainError(f"TokenCreated event not found (tx: {tx_hash_of(receipt)})")
            args = events[0]["args"]
            return DeployedToken(
                token_address=Web3.to_checksum_address(args["tokenAddress"]),
                tx_hash=tx_hash_of(receipt),
                pool_id=Web3.to_hex(args["poolId"]),
            )

        return self._attempt("deployToken", run)

    def repoint_recipient(self, token_address: str, role: str, new_recipient: str) -> Result[str]:
        token = Web3.to_checksum_address(token_address)
        recipient = Web3.to_checksum_address(new_recipient)
        if role == ROLE_REWARD_RECIPIENT:
            call = (self.settings.clanker_lp_locker_address, CLANKER_LP_LOCKER_ABI, "updateRewardRecipient",
                    token, CREATOR_REWARD_INDEX, recipient)
        elif role == ROLE_VAULT_ADMIN:
            call = (self.settings.clanker_vault_address, CLANKER_VAULT_ABI, "editAllocationAdmin", token, recipient)
        else:
            raise ValueError(f"Unknown recipient role: {role}")
        return self._attempt(f"repoint {role}", lambda: tx_hash_of(self.client.transact(*call)))

    def redirect_to_claimer(self, launch, wallet_address: str) -> Result[ClaimRedirect]:
        reward = self.repoint_recipient(launch.token_address, ROLE_REWARD_RECIPIENT, wallet_address)
        if isinstance(reward, Err):
            return reward
        vault = self.repoint_recipient(launch.token_address, ROLE_VAULT_ADMIN, wallet_address)
        if isinstance(vault, Err):
            return vault
        return Ok(ClaimRedirect(claim_tx_hash=reward.value, vault_claim_tx_hash=vault.value))

    def collect_fees(self, launch) -> Result[CollectedFees]:
        """Claim the admin's accrued rewards for the platform slot from the fee locker."""
        locker = self.settings.clanker_fee_locker_address
        token = Web3.to_checksum_address(launch.token_address)

        def run() -> CollectedFees:
            available = int(self.client.read(locker, CLANKER_FEE_LOCKER_ABI, "availableFees", self.admin, token))
            if available == 0:
                return CollectedFees(amount=0, tx_hash=None)
            receipt = self.client.transact(locker, CLANKER_FEE_LOCKER_ABI, "claim", self.admin, token)
            return CollectedFees(amount=available, tx_hash=tx_hash_of(receipt))

        return self._attempt("collect fees", run)

    def available_vested(self, token_address: str, account: str) -> Result[int]:
        token = Web3.to_checksum_address(token_address)
        return self._attempt(
            "vault amountAvailableToClaim",
            lambda: int(self.client.read(self.settings.clanker_vault_address, CLANKER_VAULT_ABI,
                                         "amountAvailableToClaim", token)),
        )

    def release_vested(self, token_address: str) -> Result[str]:
        token = Web3.to_checksum_address(token_address)
        return self._attempt(
            "vault claim",
            lambda: tx_hash_of(self.client.transact(self.settings.clanker_vault_address, CLANKER_VAULT_ABI,
                                                    "claim", token)),
        )
