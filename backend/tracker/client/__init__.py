from tracker.client.api import ApiError, ApiUnavailable, TrackerApi
from tracker.client.storage import LocalStorage
from tracker.client.tracker import Notification, TeamTracker, ValidationError

__all__ = [
    "ApiError",
    "ApiUnavailable",
    "TrackerApi",
    "LocalStorage",
    "Notification",
    "TeamTracker",
    "ValidationError",
]
