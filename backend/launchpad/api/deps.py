import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from launchpad.chain.fee_router import FeeRouterAdapter
from launchpad.chain.protocol import ProtocolAdapter
from launchpad.chain.provider import get_fee_router_adapter, get_protocol_adapter
from launchpad.core.errors import AdapterUnavailable, Unauthorized
from launchpad.core.security import Identity, IdentityVerifier, PrivyIdentityVerifier, verify_cron_authorization
from launchpad.db.session import SessionLocal
from launchpad.services.fee_collection_service import FeeCollectionJob
from launchpad.services.launch_service import LaunchOrchestrator

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@lru_cache(maxsize=1)
def get_identity_verifier() -> IdentityVerifier:
    return PrivyIdentityVerifier()


def get_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> Optional[Identity]:
    """The verified requester, or ``None``; callers decide whether that is an error."""
    if credentials is None:
        return None
    return verifier.verify(credentials.credentials)


def require_identity(identity: Optional[Identity] = Depends(get_identity)) -> Identity:
    if identity is None:
        raise Unauthorized("Unauthorized")
    return identity


def get_adapter() -> ProtocolAdapter:
    try:
        return get_protocol_adapter()
    except Exception as e:
        logger.error(f"Protocol adapter unavailable: {e}", exc_info=True)
        raise AdapterUnavailable("Chain adapter is not available")


def get_fee_router() -> Optional[FeeRouterAdapter]:
    try:
        return get_fee_router_adapter()
    except Exception as e:
        logger.error(f"Fee router adapter unavailable: {e}", exc_info=True)
        raise AdapterUnavailable("Fee router adapter is not available")


def get_orchestrator(db: Session = Depends(get_db), adapter: ProtocolAdapter = Depends(get_adapter)) -> LaunchOrchestrator:
    return LaunchOrchestrator(db, adapter)


def get_fee_job(
    db: Session = Depends(get_db),
    adapter: ProtocolAdapter = Depends(get_adapter),
    fee_router: Optional[FeeRouterAdapter] = Depends(get_fee_router),
) -> FeeCollectionJob:
    return FeeCollectionJob(db, adapter, fee_router)


def require_cron_secret(authorization: str = Header("")) -> None:
    if not verify_cron_authorization(authorization):
        raise Unauthorized("Unauthorized")
