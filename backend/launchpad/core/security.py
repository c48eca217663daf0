import logging
import secrets
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import httpx
import jwt

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

PRIVY_ISSUER = "privy.io"
ALGORITHM = "ES256"


@dataclass(frozen=True)
class Identity:
    """A verified requester as reported by the identity provider."""

    external_id: str
    handle: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None


class IdentityVerifier(Protocol):
    def verify(self, token: str) -> Optional[Identity]:
        ...


def identity_from_privy_user(user: Dict[str, Any]) -> Identity:
    twitter = next(
        (acct for acct in user.get("linked_accounts", []) if acct.get("type") == "twitter_oauth"),
        None,
    )
    if twitter is None:
        return Identity(external_id=user["id"])
    return Identity(
        external_id=user["id"],
        handle=twitter.get("username"),
        display_name=twitter.get("name"),
        avatar_url=twitter.get("profile_picture_url"),
    )


class PrivyIdentityVerifier:
    """Verifies Privy access tokens and loads the linked X profile."""

    def __init__(self, settings: Settings | None = None, client: httpx.Client | None = None):
        self.settings = settings or get_settings()
        self.client = client or httpx.Client(timeout=self.settings.privy_timeout_seconds)

    def decode_token(self, token: str) -> Dict[str, Any]:
        return jwt.decode(
            token,
            self.settings.privy_verification_key,
            algorithms=[ALGORITHM],
            issuer=PRIVY_ISSUER,
            audience=self.settings.privy_app_id,
            options={"require": ["iss", "iat", "exp", "sub"]},
        )

    def fetch_user(self, did: str) -> Dict[str, Any]:
        response = self.client.get(
            f"{self.settings.privy_api_url}/users/{did}",
            auth=(self.settings.privy_app_id, self.settings.privy_app_secret),
            headers={"privy-app-id": self.settings.privy_app_id},
        )
        response.raise_for_status()
        return response.json()

    def verify(self, token: str) -> Optional[Identity]:
        try:
            claims = self.decode_token(token)
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected Privy token: {e}")
            return None
        try:
            user = self.fetch_user(claims["sub"])
        except httpx.HTTPError as e:
            logger.warning(f"Privy user lookup failed for {claims['sub']}: {e}")
            return None
        return identity_from_privy_user(user)


def verify_cron_authorization(authorization: str, settings: Settings | None = None) -> bool:
    settings = settings or get_settings()
    if not settings.cron_secret:
        return False
    expected = f"Bearer {settings.cron_secret}"
    return secrets.compare_digest(authorization.encode("utf-8"), expected.encode("utf-8"))
