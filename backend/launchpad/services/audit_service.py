import json
from typing import Any

from sqlalchemy.orm import Session

from launchpad.core.time import utcnow
from launchpad.models import AuditLog


def _normalize_details(details: Any) -> str | None:
    if details is None:
        return None
    if isinstance(details, str):
        return json.dumps({"message": details})
    try:
        return json.dumps(details, default=str)
    except TypeError:
        return json.dumps({"repr": repr(details)})


def log_audit(
    db: Session,
    action: str,
    actor_user_id: str | None = None,
    launch_id: str | None = None,
    details: Any = None,
):
    entry = AuditLog(
        at_utc=utcnow(),
        action=action,
        actor_user_id=actor_user_id,
        launch_id=launch_id,
        details=_normalize_details(details),
    )
    db.add(entry)
    db.commit()


def latest_entry(db: Session, launch_id: str, action: str) -> AuditLog | None:
    return (
        db.query(AuditLog)
        .filter(AuditLog.launch_id == launch_id, AuditLog.action == action)
        .order_by(AuditLog.at_utc.desc())
        .first()
    )
