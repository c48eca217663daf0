from types import SimpleNamespace

from web3 import Web3

from launchpad.chain.artifacts import ContractArtifact
from launchpad.chain.clanker import ClankerAdapter
from launchpad.chain.client import ZERO_ADDRESS
from launchpad.chain.doppler import CREATOR_SHARE_WAD, WAD, DopplerAdapter, beneficiary_list, sort_currencies
from launchpad.chain.fee_router import FeeRouterAdapter
from launchpad.chain.protocol import TokenMetadata
from launchpad.chain.results import ADAPTER_UNAVAILABLE, NOT_CONFIGURED, TRANSACTION_REVERTED, Err, Ok
from launchpad.core.config import Settings
from launchpad.tests.fakes import ADMIN_ADDRESS, ROUTER_ADDRESS, WALLET, FakeChainClient

ASSET = "0x" + "42" * 20
TOKEN = "0x" + "70" * 20


def router_adapter(client, loader_calls=None):
    def loader():
        if loader_calls is not None:
            loader_calls.append(1)
        return ContractArtifact(abi=[], bytecode="0x6000")

    return FeeRouterAdapter(client, ASSET, loader)


def test_forward_skips_when_no_recipient():
    client = FakeChainClient(reads={"recipient": ZERO_ADDRESS, "balanceOf": 10**18})
    assert router_adapter(client).forward(ROUTER_ADDRESS) == Ok(None)
    assert client.transactions == []


def test_forward_skips_when_balance_is_zero():
    client = FakeChainClient(reads={"recipient": WALLET, "balanceOf": 0})
    assert router_adapter(client).forward(ROUTER_ADDRESS) == Ok(None)
    assert client.transactions == []


def test_forward_sends_asset_balance():
    client = FakeChainClient(reads={"recipient": WALLET, "balanceOf": 5})
    result = router_adapter(client).forward(ROUTER_ADDRESS)

    assert isinstance(result, Ok)
    assert result.value.startswith("0x")
    address, fn_name, args = client.transactions[0]
    assert (address, fn_name) == (ROUTER_ADDRESS, "forward")
    assert args == (Web3.to_checksum_address(ASSET),)


def test_forward_read_failure_is_an_error_not_an_exception():
    client = FakeChainClient(reads={"recipient": ConnectionError("rpc down")})
    result = router_adapter(client).forward(ROUTER_ADDRESS)
    assert isinstance(result, Err)
    assert result.kind == ADAPTER_UNAVAILABLE
    assert client.transactions == []


def test_set_recipient_revert():
    client = FakeChainClient()
    client.reverting.add("setRecipient")
    result = router_adapter(client).set_recipient(ROUTER_ADDRESS, WALLET)
    assert isinstance(result, Err)
    assert result.kind == TRANSACTION_REVERTED


def test_deploy_is_owned_by_admin_and_loads_artifact_once():
    client = FakeChainClient()
    calls = []
    adapter = router_adapter(client, calls)

    first = adapter.deploy()
    adapter.deploy()

    assert first.value.router_address == Web3.to_checksum_address(ROUTER_ADDRESS)
    assert client.deployed == [(ADMIN_ADDRESS,), (ADMIN_ADDRESS,)]
    assert len(calls) == 1


def clanker(client):
    return ClankerAdapter(client, Settings(weth_address="0x4200000000000000000000000000000000000006"))


def test_clanker_redirect_repoints_reward_and_vault():
    client = FakeChainClient()
    result = clanker(client).redirect_to_claimer(SimpleNamespace(id="l1", token_address=TOKEN), WALLET)

    assert isinstance(result, Ok)
    assert [fn for _, fn, _ in client.transactions] == ["updateRewardRecipient", "editAllocationAdmin"]
    assert result.value.claim_tx_hash != result.value.vault_claim_tx_hash


def test_clanker_redirect_stops_at_first_failure():
    client = FakeChainClient()
    client.reverting.add("updateRewardRecipient")
    result = clanker(client).redirect_to_claimer(SimpleNamespace(id="l1", token_address=TOKEN), WALLET)

    assert isinstance(result, Err)
    assert client.transactions == []


def test_clanker_collect_skips_claim_without_fees():
    client = FakeChainClient(reads={"availableFees": 0})
    result = clanker(client).collect_fees(SimpleNamespace(token_address=TOKEN))

    assert result.value.amount == 0
    assert result.value.tx_hash is None
    assert client.transactions == []


def test_clanker_collect_claims_available_fees():
    client = FakeChainClient(reads={"availableFees": 1234})
    result = clanker(client).collect_fees(SimpleNamespace(token_address=TOKEN))

    assert result.value.amount == 1234
    assert result.value.tx_hash is not None
    assert [fn for _, fn, _ in client.transactions] == ["claim"]


def doppler(client, fee_router):
    return DopplerAdapter(client, Settings(weth_address="0x4200000000000000000000000000000000000006"), fee_router)


def test_beneficiaries_are_sorted_and_merged():
    low = "0x" + "01" * 20
    high = "0x" + "ff" * 20
    merged = beneficiary_list(high, high, low)

    assert [address for address, _ in merged] == [Web3.to_checksum_address(low), Web3.to_checksum_address(high)]
    assert merged[0][1] == CREATOR_SHARE_WAD
    assert sum(share for _, share in merged) == WAD


def test_sort_currencies_orders_by_address():
    weth = "0x4200000000000000000000000000000000000006"
    assert sort_currencies(TOKEN, weth) == sort_currencies(weth, TOKEN)
    assert sort_currencies(TOKEN, weth)[0] == Web3.to_checksum_address(weth)


def test_doppler_redirect_sets_router_recipient():
    client = FakeChainClient()
    adapter = doppler(client, router_adapter(client))
    launch = SimpleNamespace(id="l1", token_address=TOKEN, fee_router_address=ROUTER_ADDRESS)

    result = adapter.redirect_to_claimer(launch, WALLET)

    assert result.value.router_recipient_synced is True
    assert client.transactions[0][1] == "setRecipient"


def test_doppler_redirect_without_router():
    client = FakeChainClient()
    adapter = doppler(client, router_adapter(client))
    result = adapter.redirect_to_claimer(SimpleNamespace(id="l1", token_address=TOKEN, fee_router_address=None), WALLET)

    assert isinstance(result, Err)
    assert result.kind == NOT_CONFIGURED


def test_doppler_deploy_stops_when_router_deploy_fails():
    client = FakeChainClient()
    adapter = doppler(client, router_adapter(client))

    def broken_loader():
        raise FileNotFoundError("artifact missing")

    adapter.fee_router = FeeRouterAdapter(client, ASSET, broken_loader)

    result = adapter.deploy_token(TokenMetadata("A", "A", "https://img.test/a.png"), "ab" * 16)
    assert isinstance(result, Err)
    assert client.transactions == []


def test_clanker_vesting_goes_through_vault():
    client = FakeChainClient(reads={"amountAvailableToClaim": 500})
    adapter = clanker(client)

    assert adapter.available_vested(TOKEN, ADMIN_ADDRESS) == Ok(500)
    assert isinstance(adapter.release_vested(TOKEN), Ok)
    assert [fn for _, fn, _ in client.transactions] == ["claim"]


def test_doppler_vesting_goes_through_token():
    client = FakeChainClient(reads={"computeAvailableVestedAmount": lambda account: 9})
    adapter = doppler(client, router_adapter(client))

    assert adapter.available_vested(TOKEN, ADMIN_ADDRESS) == Ok(9)
    assert isinstance(adapter.release_vested(TOKEN), Ok)
    assert client.transactions[0][:2] == (TOKEN, "release")
