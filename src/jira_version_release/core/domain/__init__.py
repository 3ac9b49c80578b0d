"""
Domain - Entities, matching rules and events of a version release.
"""

from .entities import TrackerEndpoint, RemoteVersion, VersionMatch
from .matching import build_full_pattern, select_version, next_version_name
from .events import (
    DomainEvent,
    ReleaseStarted,
    VersionReleased,
    VersionCreated,
    NoMatchingVersion,
    ReleaseCompleted,
    EventBus,
)

__all__ = [
    "TrackerEndpoint",
    "RemoteVersion",
    "VersionMatch",
    "build_full_pattern",
    "select_version",
    "next_version_name",
    "DomainEvent",
    "ReleaseStarted",
    "VersionReleased",
    "VersionCreated",
    "NoMatchingVersion",
    "ReleaseCompleted",
    "EventBus",
]
