"""
Doppler multicurve adapter (fee-router claims).

Beneficiaries of a multicurve pool are fixed when the pool is created, so
every launch first deploys its own BeneficiaryFeeRouter and registers the
router as the creator's beneficiary. Claiming only repoints the router; the
database claim record is the durable state.
"""
import logging

from eth_abi import encode
from web3 import Web3

from launchpad.chain.abi import AIRLOCK_ABI, DERC20_ABI, MULTICURVE_INITIALIZER_ABI
from launchpad.chain.client import ChainClient, ChainError, tx_hash_of
from launchpad.chain.fee_router import FeeRouterAdapter
from launchpad.chain.protocol import (
    ClaimRedirect,
    CollectedFees,
    DeployedToken,
    ProtocolAdapter,
    TokenMetadata,
)
from launchpad.chain.results import NOT_CONFIGURED, Err, Ok, Result
from launchpad.core.config import Settings

logger = logging.getLogger(__name__)

WAD = 10**18
ETHER = 10**18

INITIAL_SUPPLY = 1_000_000_000 * ETHER
NUM_TOKENS_TO_SELL = 900_000_000 * ETHER
VESTED_AMOUNT = 100_000_000 * ETHER

VESTING_CLIFF_SECONDS = 2_592_000
VESTING_DURATION_SECONDS = 2_592_000

CUSTOM_SWAP_FEE = 3000  # 0.3%
TICK_SPACING = 200

# Rehype hook fee split, must sum to WAD
LP_PERCENT_WAD = WAD * 10 // 100
BENEFICIARY_PERCENT_WAD = WAD * 90 // 100
ASSET_BUYBACK_PERCENT_WAD = 0
NUMERAIRE_BUYBACK_PERCENT_WAD = 0

# Beneficiary shares of the 90%, must sum to WAD
PROTOCOL_SHARE_WAD = WAD * 5 // 100
PLATFORM_SHARE_WAD = WAD * 5 // 100
CREATOR_SHARE_WAD = WAD * 90 // 100

# (tickLower, tickUpper, numPositions, shares)
MARKET_CAP_CURVES = [
    (-230_000, -207_000, 11, WAD * 50 // 100),
    (-207_000, -184_000, 11, WAD * 30 // 100),
    (-184_000, -161_000, 11, WAD * 20 // 100),
]


def sort_currencies(token_a: str, token_b: str) -> tuple[str, str]:
    a = Web3.to_checksum_address(token_a)
    b = Web3.to_checksum_address(token_b)
    return (a, b) if int(a, 16) < int(b, 16) else (b, a)


def beneficiary_list(protocol_owner: str, platform: str, creator: str) -> list[tuple[str, int]]:
    """Merge duplicate beneficiaries and sort by address, as the initializer requires."""
    shares: dict[str, int] = {}
    for address, share in (
        (protocol_owner, PROTOCOL_SHARE_WAD),
        (platform, PLATFORM_SHARE_WAD),
        (creator, CREATOR_SHARE_WAD),
    ):
        key = Web3.to_checksum_address(address)
        shares[key] = shares.get(key, 0) + share
    return sorted(shares.items(), key=lambda item: int(item[0], 16))


class DopplerAdapter(ProtocolAdapter):
    name = "doppler"
    onchain_claim_is_authoritative = False

    def __init__(self, client: ChainClient, settings: Settings, fee_router: FeeRouterAdapter):
        self.client = client
        self.settings = settings
        self.fee_router = fee_router

    def pool_id(self, token_address: str) -> str:
        currency0, currency1 = sort_currencies(token_address, self.settings.weth_address)
        encoded = encode(
            ["address", "address", "uint24", "int24", "address"],
            [
                currency0,
                currency1,
                CUSTOM_SWAP_FEE,
                TICK_SPACING,
                Web3.to_checksum_address(self.settings.doppler_hook_initializer_address),
            ],
        )
        return Web3.to_hex(Web3.keccak(encoded))

    def create_params(self, metadata: TokenMetadata, request_key: str, protocol_owner: str, router: str) -> tuple:
        s = self.settings
        admin = self.admin
        weth = Web3.to_checksum_address(s.weth_address)
        token_factory_data = encode(
            ["string", "string", "uint256", "uint256", "address[]", "uint256[]", "string"],
            [
                metadata.name,
                metadata.symbol,
                0,
                VESTING_CLIFF_SECONDS + VESTING_DURATION_SECONDS,
                [admin],
                [VESTED_AMOUNT],
                metadata.image_url,
            ],
        )
        rehype_calldata = encode(
            ["address", "address", "uint24", "uint256", "uint256", "uint256", "uint256"],
            [
                weth,
                admin,
                CUSTOM_SWAP_FEE,
                ASSET_BUYBACK_PERCENT_WAD,
                NUMERAIRE_BUYBACK_PERCENT_WAD,
                BENEFICIARY_PERCENT_WAD,
                LP_PERCENT_WAD,
            ],
        )
        pool_initializer_data = encode(
            ["(uint24,int24,(int24,int24,uint16,uint256)[],(address,uint96)[],address,bytes,bytes)"],
            [
                (
                    CUSTOM_SWAP_FEE,
                    TICK_SPACING,
                    MARKET_CAP_CURVES,
                    beneficiary_list(protocol_owner, admin, router),
                    Web3.to_checksum_address(s.doppler_rehype_hook_address),
                    rehype_calldata,
                    b"",
                )
            ],
        )
        return (
            INITIAL_SUPPLY,
            NUM_TOKENS_TO_SELL,
            weth,
            Web3.to_checksum_address(s.doppler_token_factory_address),
            token_factory_data,
            Web3.to_checksum_address(s.doppler_governance_factory_address),
            b"",
            Web3.to_checksum_address(s.doppler_hook_initializer_address),
            pool_initializer_data,
            Web3.to_checksum_address(s.doppler_migrator_address),
            b"",
            admin,
            # Same request key -> same salt -> CREATE2 collision, never a second token
            Web3.keccak(text=request_key),
        )

    def deploy_token(self, metadata: TokenMetadata, request_key: str) -> Result[DeployedToken]:
        router = self.fee_router.deploy()
        if isinstance(router, Err):
            return router
        router_address = router.value.router_address
        airlock = self.settings.doppler_airlock_address

        def run() -> DeployedToken:
            protocol_owner = self.client.read(airlock, AIRLOCK_ABI, "owner")
            params = self.create_params(metadata, request_key, protocol_owner, router_address)
            receipt = self.client.transact(airlock, AIRLOCK_ABI, "create", params)
            events = self.client.events(airlock, AIRLOCK_ABI, "Create", receipt)
            if not events:
                raise ChainError(f"Create event not found (tx: {tx_hash_of(receipt)})")
            token_address = Web3.to_checksum_address(events[0]["args"]["asset"])
            return DeployedToken(
                token_address=token_address,
                tx_hash=tx_hash_of(receipt),
                pool_id=self.pool_id(token_address),
                fee_router_address=router_address,
            )

        result = self._attempt("create multicurve", run)
        if isinstance(result, Err):
            logger.warning(f"Fee router {router_address} left without a pool for request {request_key}")
        return result

    def repoint_recipient(self, token_address: str, role: str, new_recipient: str) -> Result[str]:
        # Beneficiaries are immutable; the router (see redirect_to_claimer) is the only mutable hop.
        return Err(NOT_CONFIGURED, f"Doppler beneficiaries cannot be repointed (role {role})")

    def redirect_to_claimer(self, launch, wallet_address: str) -> Result[ClaimRedirect]:
        if not launch.fee_router_address:
            return Err(NOT_CONFIGURED, f"Launch {launch.id} has no fee router")
        result = self.fee_router.set_recipient(launch.fee_router_address, wallet_address)
        if isinstance(result, Err):
            return result
        return Ok(ClaimRedirect(claim_tx_hash=result.value, router_recipient_synced=True))

    def collect_fees(self, launch) -> Result[CollectedFees]:
        """Collect pool fees; the initializer distributes them to beneficiaries in the same call."""
        initializer = self.settings.doppler_hook_initializer_address
        pool_id = launch.pool_id or self.pool_id(launch.token_address)

        def run() -> CollectedFees:
            fees0, fees1 = self.client.simulate(initializer, MULTICURVE_INITIALIZER_ABI, "collectFees", pool_id)
            if fees0 == 0 and fees1 == 0:
                return CollectedFees(amount=0, tx_hash=None)
            receipt = self.client.transact(initializer, MULTICURVE_INITIALIZER_ABI, "collectFees", pool_id)
            currency0, _ = sort_currencies(launch.token_address, self.settings.weth_address)
            weth_is_currency0 = currency0 == Web3.to_checksum_address(self.settings.weth_address)
            numeraire_fees, asset_fees = (fees0, fees1) if weth_is_currency0 else (fees1, fees0)
            return CollectedFees(amount=int(numeraire_fees), asset_amount=int(asset_fees),
                                 tx_hash=tx_hash_of(receipt))

        return self._attempt("collect fees", run)

    def available_vested(self, token_address: str, account: str) -> Result[int]:
        return self._attempt(
            "computeAvailableVestedAmount",
            lambda: int(self.client.read(token_address, DERC20_ABI, "computeAvailableVestedAmount",
                                         Web3.to_checksum_address(account))),
        )

    def release_vested(self, token_address: str) -> Result[str]:
        return self._attempt(
            "release vested",
            lambda: tx_hash_of(self.client.transact(token_address, DERC20_ABI, "release")),
        )
