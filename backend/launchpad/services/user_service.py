from sqlalchemy.orm import Session

from launchpad.core.security import Identity
from launchpad.models import User


def get_by_external_id(db: Session, external_id: str) -> User | None:
    return db.query(User).filter(User.external_id == external_id).first()


def upsert_user(db: Session, identity: Identity, wallet_address: str | None = None, refresh_profile: bool = False) -> User:
    """
    Get or create the user for an identity.

    New users get the identity's profile fields. Existing users keep theirs
    unless ``refresh_profile`` is set. A given wallet address always
    overwrites the stored one.
    """
    user = get_by_external_id(db, identity.external_id)
    if not user:
        user = User(
            external_id=identity.external_id,
            social_handle=identity.handle,
            display_name=identity.display_name,
            avatar_url=identity.avatar_url,
            wallet_address=wallet_address,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    changed = False
    if refresh_profile:
        user.social_handle = identity.handle
        user.display_name = identity.display_name
        user.avatar_url = identity.avatar_url
        changed = True
    if wallet_address is not None:
        user.wallet_address = wallet_address
        changed = True
    if changed:
        db.add(user)
        db.commit()
        db.refresh(user)
    return user
