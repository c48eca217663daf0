"""In-memory stand-ins for the chain, the adapters and the identity provider."""
from launchpad.chain.client import TransactionReverted
from launchpad.chain.protocol import ClaimRedirect, CollectedFees, DeployedToken, ProtocolAdapter
from launchpad.chain.results import ADAPTER_UNAVAILABLE, TRANSACTION_REVERTED, Err, Ok
from launchpad.core.security import Identity
from launchpad.models import Launch, LaunchStatus, User

ADMIN_ADDRESS = "0x" + "ad" * 20
ROUTER_ADDRESS = "0x" + "f1" * 20
WALLET = "0x" + "12" * 20

ALICE = Identity(external_id="did:privy:alice", handle="alice", display_name="Alice", avatar_url="https://x.test/a.png")
BOB = Identity(external_id="did:privy:bob", handle="bob", display_name="Bob")
NO_HANDLE = Identity(external_id="did:privy:carol")


def _hash(n: int) -> bytes:
    return n.to_bytes(32, "big")


class FakeChainClient:
    """Answers reads from ``reads`` (value or callable) and records every write."""

    def __init__(self, reads=None, admin_address=ADMIN_ADDRESS):
        self.admin_address = admin_address
        self.reads = reads or {}
        self.transactions = []
        self.reverting = set()
        self.deployed = []

    def read(self, address, abi, fn_name, *args):
        value = self.reads[fn_name]
        if isinstance(value, Exception):
            raise value
        return value(*args) if callable(value) else value

    simulate = read

    def transact(self, address, abi, fn_name, *args, value=0):
        if fn_name in self.reverting:
            raise TransactionReverted("0x" + "de" * 32)
        self.transactions.append((address, fn_name, args))
        return {"transactionHash": _hash(len(self.transactions)), "status": 1}

    def deploy(self, abi, bytecode, *args):
        self.deployed.append(args)
        return {"transactionHash": _hash(1000 + len(self.deployed)), "status": 1, "contractAddress": ROUTER_ADDRESS}

    def events(self, address, abi, event_name, receipt):
        return []


class FakeAdapter(ProtocolAdapter):
    """
    Protocol adapter driven by test-set results.

    ``deploy_result`` / ``redirect_result`` / ``release_result`` and the values
    in ``fees`` may be a ``Result`` or an exception instance to raise.
    """

    name = "fake"

    def __init__(self, authoritative: bool = True, with_router: bool = False):
        self.client = FakeChainClient()
        self.onchain_claim_is_authoritative = authoritative
        self.with_router = with_router
        self.deploy_result = None
        self.redirect_result = None
        self.release_result = None
        self.fees = {}
        self.vested = 0
        self.deploy_calls = []
        self.redirect_calls = []
        self.collect_calls = []
        self.release_calls = []

    @staticmethod
    def _resolve(value):
        if isinstance(value, Exception):
            raise value
        return value

    def deploy_token(self, metadata, request_key):
        self.deploy_calls.append((metadata, request_key))
        if self.deploy_result is not None:
            return self._resolve(self.deploy_result)
        n = len(self.deploy_calls)
        return Ok(
            DeployedToken(
                token_address=f"0x{n:040x}",
                tx_hash=f"0x{n:064x}",
                pool_id=f"0x{n + 0xabc:064x}",
                fee_router_address=f"0x{n + 0xf000:040x}" if self.with_router else None,
            )
        )

    def repoint_recipient(self, token_address, role, new_recipient):
        return Ok("0x" + "0e" * 32)

    def redirect_to_claimer(self, launch, wallet_address):
        self.redirect_calls.append((launch.id, wallet_address))
        if self.redirect_result is not None:
            return self._resolve(self.redirect_result)
        if self.onchain_claim_is_authoritative:
            return Ok(ClaimRedirect(claim_tx_hash="0x" + "c1" * 32, vault_claim_tx_hash="0x" + "c2" * 32))
        return Ok(ClaimRedirect(claim_tx_hash="0x" + "c3" * 32, router_recipient_synced=True))

    def collect_fees(self, launch):
        self.collect_calls.append(launch.token_address)
        return self._resolve(self.fees.get(launch.token_address, Ok(CollectedFees(amount=0, tx_hash=None))))

    def available_vested(self, token_address, account):
        return Ok(self.vested)

    def release_vested(self, token_address):
        self.release_calls.append(token_address)
        return self._resolve(self.release_result or Ok("0x" + "7e" * 32))


class FakeFeeRouter:
    def __init__(self):
        self.recipients = {}
        self.balances = {}
        self.fail_set = False
        self.fail_forward = set()
        self.set_calls = []
        self.forward_calls = []

    def set_recipient(self, router, recipient):
        self.set_calls.append((router, recipient))
        if self.fail_set:
            return Err(ADAPTER_UNAVAILABLE, "rpc unavailable")
        self.recipients[router] = recipient
        return Ok("0x" + "5e" * 32)

    def forward(self, router):
        self.forward_calls.append(router)
        if router in self.fail_forward:
            return Err(TRANSACTION_REVERTED, "forward reverted")
        if not self.recipients.get(router) or not self.balances.get(router):
            return Ok(None)
        self.balances[router] = 0
        return Ok("0x" + "f0" * 32)


class FakeVerifier:
    def __init__(self, tokens):
        self.tokens = tokens

    def verify(self, token):
        return self.tokens.get(token)


def seed_user(db, identity: Identity) -> User:
    user = User(
        external_id=identity.external_id,
        social_handle=identity.handle,
        display_name=identity.display_name,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def seed_launch(db, launcher: User, target_handle: str = "alice", status=LaunchStatus.DEPLOYED, **fields) -> Launch:
    n = db.query(Launch).count() + 1
    values = dict(
        launcher_user_id=launcher.id,
        target_handle=target_handle,
        token_name=f"Token {n}",
        token_symbol=f"TK{n}",
        token_image_url="https://img.test/t.png",
        request_key=f"{n:032x}",
        status=status,
    )
    if status == LaunchStatus.DEPLOYED:
        values["token_address"] = f"0x{n + 0x500:040x}"
        values["deploy_tx_hash"] = f"0x{n:064x}"
    values.update(fields)
    launch = Launch(**values)
    db.add(launch)
    db.commit()
    db.refresh(launch)
    return launch
