from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(value: str | List[str]) -> List[str]:
    if isinstance(value, list):
        return value
    return [v.strip() for v in str(value).split(",") if v and v.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LAUNCHPAD_",
        extra="ignore",
    )

    app_name: str = "Pip Launchpad API"
    # values must come from environment/.env to avoid hardcoding secrets
    database_url: str = ""
    db_echo: bool = False
    log_level: str = "INFO"

    cors_origins_raw: str = "http://localhost:3000"
    enable_docs: bool = True

    # Privy (identity provider)
    privy_app_id: str = ""
    privy_app_secret: str = ""
    privy_verification_key: str = ""
    privy_api_url: str = "https://auth.privy.io/api/v1"
    privy_timeout_seconds: float = 10.0

    # Shared secret for the scheduled fee collection trigger
    cron_secret: str = ""

    # Chain access (Base mainnet)
    rpc_url: str = ""
    chain_id: int = 8453
    admin_private_key: str = ""
    tx_receipt_timeout_seconds: int = 120

    # "clanker" (direct recipient repointing) or "doppler" (fee router)
    launch_protocol: str = "doppler"

    weth_address: str = "0x4200000000000000000000000000000000000006"

    clanker_factory_address: str = "0xE85A59c628F7d27878ACeB4bf3b35733630083a9"
    clanker_fee_locker_address: str = "0xF3622742b1E446D92e45E22923Ef11C2fcD55D68"
    clanker_vault_address: str = "0x8E845EAd15737bF71904A30BdDD3aEE76d6ADF6C"
    clanker_lp_locker_address: str = ""
    clanker_static_fee_hook_address: str = ""
    clanker_mev_module_address: str = ""

    doppler_airlock_address: str = ""
    doppler_token_factory_address: str = ""
    doppler_governance_factory_address: str = ""
    doppler_hook_initializer_address: str = ""
    doppler_rehype_hook_address: str = ""
    doppler_migrator_address: str = ""

    fee_router_artifact_path: str = "contracts/BeneficiaryFeeRouter.json"
    fee_router_source_path: str = "contracts/BeneficiaryFeeRouter.sol"

    rate_limit_window_hours: int = 24
    rate_limit_max_launches: int = 1

    page_size_default: int = 20
    page_size_max: int = 100

    @property
    def cors_origins(self) -> List[str]:
        parsed = _split_csv(self.cors_origins_raw)
        return parsed or ["http://localhost:3000"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
