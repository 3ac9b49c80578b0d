"""
Ports - Abstract interfaces for external dependencies.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .version_tracker import (
    VersionTrackerPort,
    VersionTrackerError,
    TrackerConnectionError,
    AuthenticationError,
    RemoteCallError,
    Session,
)
from .config_provider import (
    ConfigProviderPort,
    ConfigurationError,
    AppConfig,
    ReleaseConfig,
)

__all__ = [
    "VersionTrackerPort",
    "VersionTrackerError",
    "TrackerConnectionError",
    "AuthenticationError",
    "RemoteCallError",
    "Session",
    "ConfigProviderPort",
    "ConfigurationError",
    "AppConfig",
    "ReleaseConfig",
]
