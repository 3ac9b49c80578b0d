"""
Version Tracker Port - Abstract interface for managing project versions.

Implementations talk to a concrete tracker (JIRA). The orchestrator only
depends on this port, which keeps it testable with a mock.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from ..domain.entities import RemoteVersion, TrackerEndpoint


# =============================================================================
# Exceptions
# =============================================================================

class VersionTrackerError(Exception):
    """Base exception for version tracker errors."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause


class TrackerConnectionError(VersionTrackerError):
    """Opening a session failed: bad URL, unreachable host or rejected login."""
    
    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.url = url


class AuthenticationError(TrackerConnectionError):
    """The tracker rejected the credentials."""
    pass


class RemoteCallError(VersionTrackerError):
    """A call on an open session failed."""
    
    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.endpoint = endpoint
        self.status_code = status_code


# =============================================================================
# Session
# =============================================================================

@dataclass
class Session:
    """An authenticated session against one tracker endpoint."""
    
    endpoint: TrackerEndpoint
    token: str = field(default="", repr=False)
    cookie_name: str = "JSESSIONID"
    closed: bool = False


# =============================================================================
# Port Interface
# =============================================================================

class VersionTrackerPort(ABC):
    """
    Abstract interface for version management in an issue tracker.
    
    One port instance serves one release run. Every call except
    connect() requires the session it returned.
    """
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Get the tracker name (e.g., 'Jira')."""
        ...
    
    @property
    @abstractmethod
    def dry_run(self) -> bool:
        """True if write operations are only logged."""
        ...
    
    @abstractmethod
    def connect(self, endpoint: TrackerEndpoint) -> Session:
        """
        Open an authenticated session.
        
        Raises:
            TrackerConnectionError: URL malformed or host unreachable
            AuthenticationError: Credentials rejected
        """
        ...
    
    @abstractmethod
    def get_versions(self, session: Session, project_key: str) -> list[RemoteVersion]:
        """
        Get all versions of a project in tracker order.
        
        Raises:
            RemoteCallError: On failure
        """
        ...
    
    @abstractmethod
    def release_version(
        self,
        session: Session,
        project_key: str,
        version: RemoteVersion,
        release_date: date,
    ) -> None:
        """
        Mark a version released as of release_date.
        
        Raises:
            RemoteCallError: On failure
        """
        ...
    
    @abstractmethod
    def create_version(
        self,
        session: Session,
        project_key: str,
        name: str,
    ) -> Optional[RemoteVersion]:
        """
        Create a new unreleased version.
        
        Returns:
            The created version, or None in dry-run mode
            
        Raises:
            RemoteCallError: On failure
        """
        ...
    
    @abstractmethod
    def disconnect(self, session: Session) -> None:
        """
        End the session.
        
        Raises:
            RemoteCallError: On failure
        """
        ...
    
    @abstractmethod
    def server_info(self, endpoint: TrackerEndpoint) -> dict[str, Any]:
        """
        Get server information without logging in.
        
        Raises:
            TrackerConnectionError: If no tracker answers at the endpoint URL
        """
        ...
