"""Error taxonomy shared by the resolvers, the upstream clients and the API.

Every error carries the HTTP status the API answers with, so the core only
raises and the HTTP layer alone decides how a failure is rendered.
"""


class SlotRewardsError(Exception):
    """Base class for all errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Human readable description returned in the error body
        """
        super().__init__(message)
        self.message = message


class InvalidRequest(SlotRewardsError):
    """Malformed slot, or a slot beyond the current head."""

    status_code = 400


class NotFound(SlotRewardsError):
    """Upstream reports that the requested resource does not exist."""

    status_code = 404


class UpstreamUnavailable(SlotRewardsError):
    """Transport-level failure talking to the beacon or execution source."""


class DecodeError(SlotRewardsError):
    """Upstream response does not have the expected shape."""


class DataIntegrityAnomaly(SlotRewardsError):
    """Upstream data is internally inconsistent."""


__all__ = [
    "DataIntegrityAnomaly",
    "DecodeError",
    "InvalidRequest",
    "NotFound",
    "SlotRewardsError",
    "UpstreamUnavailable",
]
