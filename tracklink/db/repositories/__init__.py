"""Repository classes for the tracking store."""

from tracklink.db.repositories.base import BaseRepository
from tracklink.db.repositories.tracking import (
    MERGEABLE_FIELDS,
    TrackingHistoryRepository,
    TrackingRepository,
)

__all__ = [
    "BaseRepository",
    "MERGEABLE_FIELDS",
    "TrackingHistoryRepository",
    "TrackingRepository",
]
