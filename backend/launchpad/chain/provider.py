"""Process-wide chain dependencies, built once from settings."""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from launchpad.chain.artifacts import load_fee_router_artifact
from launchpad.chain.clanker import ClankerAdapter
from launchpad.chain.client import ChainClient
from launchpad.chain.doppler import DopplerAdapter
from launchpad.chain.fee_router import FeeRouterAdapter
from launchpad.chain.protocol import ProtocolAdapter
from launchpad.core.config import Settings, get_settings

BACKEND_ROOT = Path(__file__).resolve().parents[2]


def resolve_path(path: str) -> Path:
    p = Path(path)
    return p if p.is_absolute() else BACKEND_ROOT / p


def build_fee_router_adapter(client: ChainClient, settings: Settings) -> FeeRouterAdapter:
    artifact_path = resolve_path(settings.fee_router_artifact_path)
    source_path = resolve_path(settings.fee_router_source_path)
    return FeeRouterAdapter(
        client,
        settings.weth_address,
        lambda: load_fee_router_artifact(artifact_path, source_path),
    )


def build_protocol_adapter(
    client: ChainClient, settings: Settings, fee_router: Optional[FeeRouterAdapter] = None
) -> ProtocolAdapter:
    protocol = settings.launch_protocol.lower()
    if protocol == "clanker":
        return ClankerAdapter(client, settings)
    if protocol == "doppler":
        return DopplerAdapter(client, settings, fee_router or build_fee_router_adapter(client, settings))
    raise ValueError(f"Unknown launch protocol: {settings.launch_protocol}")


@lru_cache(maxsize=1)
def get_chain_client() -> ChainClient:
    settings = get_settings()
    return ChainClient(
        settings.rpc_url,
        settings.admin_private_key,
        settings.chain_id,
        receipt_timeout=settings.tx_receipt_timeout_seconds,
    )


@lru_cache(maxsize=1)
def get_fee_router_adapter() -> Optional[FeeRouterAdapter]:
    settings = get_settings()
    if settings.launch_protocol.lower() != "doppler":
        return None
    return build_fee_router_adapter(get_chain_client(), settings)


@lru_cache(maxsize=1)
def get_protocol_adapter() -> ProtocolAdapter:
    return build_protocol_adapter(get_chain_client(), get_settings(), get_fee_router_adapter())
