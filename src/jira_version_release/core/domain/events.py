"""
Domain Events - Things that happened during a release cycle.

Events are immutable records of something that occurred.
They let the CLI and tests observe a run without coupling to it.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Optional
from uuid import uuid4


@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""
    
    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)
    
    @property
    def event_type(self) -> str:
        """Get the event type name."""
        return self.__class__.__name__


@dataclass(frozen=True)
class ReleaseStarted(DomainEvent):
    """Event: A release cycle started for a finished build."""
    
    project_key: str = ""
    build_number: int = 0
    instance_name: str = ""
    dry_run: bool = True


@dataclass(frozen=True)
class VersionReleased(DomainEvent):
    """Event: A version was marked released."""
    
    project_key: str = ""
    version_name: str = ""
    release_date: Optional[date] = None


@dataclass(frozen=True)
class VersionCreated(DomainEvent):
    """Event: The version for the next build was created."""
    
    project_key: str = ""
    version_name: str = ""


@dataclass(frozen=True)
class NoMatchingVersion(DomainEvent):
    """Event: No in-flight version matched the build."""
    
    project_key: str = ""
    build_number: int = 0
    name_pattern: str = ""


@dataclass(frozen=True)
class ReleaseCompleted(DomainEvent):
    """Event: A release cycle finished."""
    
    project_key: str = ""
    released_version: Optional[str] = None
    created_version: Optional[str] = None
    matched: bool = False


class EventBus:
    """
    Simple event bus for publishing and subscribing to domain events.
    """
    
    def __init__(self):
        self._handlers: dict[type, list[Callable]] = {}
        self._history: list[DomainEvent] = []
    
    def subscribe(self, event_type: type, handler: Callable) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)
    
    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers."""
        self._history.append(event)
        
        for handler in self._handlers.get(type(event), []):
            handler(event)
        
        # Catch-all handlers
        for handler in self._handlers.get(DomainEvent, []):
            handler(event)
    
    def get_history(self) -> list[DomainEvent]:
        """Get all published events."""
        return self._history.copy()
    
    def clear_history(self) -> None:
        """Clear event history."""
        self._history.clear()
