"""
Error kinds surfaced by the launch and claim flows.

Every error carries a machine-readable ``kind`` plus a human-readable
message; the API renders both (see ``launchpad.main``).
"""
from typing import Any

from fastapi import HTTPException, status


class LaunchpadError(HTTPException):
    kind = "Error"
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Any = None):
        super().__init__(status_code=self.http_status, detail=message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict:
        payload = {"error": self.kind, "message": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class Unauthorized(LaunchpadError):
    kind = "Unauthorized"
    http_status = status.HTTP_401_UNAUTHORIZED


class InvalidInput(LaunchpadError):
    kind = "ValidationError"
    http_status = status.HTTP_400_BAD_REQUEST


class RateLimited(LaunchpadError):
    kind = "RateLimited"
    http_status = status.HTTP_429_TOO_MANY_REQUESTS


class NoLinkedProfile(LaunchpadError):
    kind = "NoLinkedProfile"
    http_status = status.HTTP_400_BAD_REQUEST


class ClaimRejected(LaunchpadError):
    kind = "ClaimRejected"
    http_status = status.HTTP_404_NOT_FOUND


class DeploymentFailed(LaunchpadError):
    kind = "DeploymentFailed"
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR


class ClaimOnChainFailed(LaunchpadError):
    kind = "ClaimOnChainFailed"
    http_status = status.HTTP_502_BAD_GATEWAY


class AdapterUnavailable(LaunchpadError):
    kind = "AdapterUnavailable"
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE


class NotFound(LaunchpadError):
    kind = "NotFound"
    http_status = status.HTTP_404_NOT_FOUND
