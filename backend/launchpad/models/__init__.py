from .user import User
from .launch import LAUNCH_TRANSITIONS, Launch, LaunchStatus
from .fee_collection import FeeCollection
from .audit import AuditLog

__all__ = [
    "User",
    "Launch",
    "LaunchStatus",
    "LAUNCH_TRANSITIONS",
    "FeeCollection",
    "AuditLog",
]
