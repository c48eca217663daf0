from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from launchpad.core.config import get_settings
from launchpad.core.time import utcnow
from launchpad.models import Launch, LaunchStatus


class LaunchRateLimiter:
    """
    Rolling-window launch quota per user, derived from the launches table.

    Failed launches do not count, so a user whose deployment failed can retry
    straight away.
    """

    def __init__(self, window: timedelta | None = None, max_launches: int | None = None):
        settings = get_settings()
        self.window = window or timedelta(hours=settings.rate_limit_window_hours)
        self.max_launches = max_launches if max_launches is not None else settings.rate_limit_max_launches

    def recent_launches(self, db: Session, user_id: str, now: datetime | None = None) -> int:
        since = (now or utcnow()) - self.window
        return (
            db.query(Launch)
            .filter(
                Launch.launcher_user_id == user_id,
                Launch.created_at_utc >= since,
                Launch.status != LaunchStatus.FAILED,
            )
            .count()
        )

    def allow(self, db: Session, user_id: str, now: datetime | None = None) -> bool:
        return self.recent_launches(db, user_id, now) < self.max_launches
