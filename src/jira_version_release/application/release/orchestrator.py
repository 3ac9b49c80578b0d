"""
Release Orchestrator - Drives one release cycle for a finished build.

This is the main entry point for release operations.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional

from ...core.domain.entities import TrackerEndpoint
from ...core.domain.events import (
    EventBus,
    NoMatchingVersion,
    ReleaseCompleted,
    ReleaseStarted,
    VersionCreated,
    VersionReleased,
)
from ...core.domain.matching import build_full_pattern, next_version_name, select_version
from ...core.ports.config_provider import ReleaseConfig
from ...core.ports.version_tracker import Session, VersionTrackerError, VersionTrackerPort


@dataclass
class ReleaseResult:
    """Result of a release cycle."""
    
    project_key: str = ""
    build_number: int = 0
    dry_run: bool = True
    
    matched: bool = False
    released_version: Optional[str] = None
    created_version: Optional[str] = None
    
    messages: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    
    @property
    def success(self) -> bool:
        """True if a version was released and its successor created."""
        return self.matched and self.created_version is not None
    
    def add_warning(self, warning: str) -> None:
        """Add a warning message."""
        self.warnings.append(warning)


class ReleaseOrchestrator:
    """
    Orchestrates the release of the version belonging to a build.
    
    Phases:
    1. Connect to the tracker
    2. Fetch the project's versions
    3. Select the in-flight version matching the build
    4. Release it
    5. Create the version for the next build
    6. Disconnect (best-effort)
    
    Remote errors propagate to the caller. A release that succeeded
    before a failing create is not rolled back.
    """
    
    def __init__(
        self,
        tracker: VersionTrackerPort,
        endpoint: TrackerEndpoint,
        config: ReleaseConfig,
        event_bus: Optional[EventBus] = None,
        output: Optional[Callable[[str], None]] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize the orchestrator.
        
        Args:
            tracker: Version tracker port
            endpoint: Tracker endpoint to connect to
            config: Release configuration (project, naming pattern)
            event_bus: Optional event bus
            output: Optional sink for human-readable progress lines
            today: Clock returning the release date (defaults to date.today)
        """
        self.tracker = tracker
        self.endpoint = endpoint
        self.config = config
        self.event_bus = event_bus or EventBus()
        self.output = output
        self.today = today or date.today
        self.logger = logging.getLogger("ReleaseOrchestrator")
    
    # -------------------------------------------------------------------------
    # Main Entry Point
    # -------------------------------------------------------------------------
    
    def release(self, build_number: Optional[int] = None) -> ReleaseResult:
        """
        Release the version matching a build and create the next one.
        
        Args:
            build_number: Number of the finished build (defaults to config)
            
        Returns:
            ReleaseResult; ``matched`` is False when no version matched
            
        Raises:
            ValueError: Build number missing or negative
            re.error: Naming pattern is not a valid regular expression
            TrackerConnectionError: Connecting failed
            RemoteCallError: Listing, releasing or creating failed
        """
        if build_number is None:
            build_number = self.config.build_number
        if build_number is None:
            raise ValueError("No build number given")
        
        project_key = self.config.project_key
        name_pattern = self.config.name_pattern or ""
        
        # Fail on bad input before touching the tracker
        re.compile(build_full_pattern(name_pattern, build_number))
        re.compile(name_pattern)
        
        result = ReleaseResult(
            project_key=project_key,
            build_number=build_number,
            dry_run=self.tracker.dry_run,
        )
        
        self.event_bus.publish(ReleaseStarted(
            project_key=project_key,
            build_number=build_number,
            instance_name=self.endpoint.name,
            dry_run=self.tracker.dry_run,
        ))
        self.logger.info(
            f"Releasing build {build_number} of {project_key} on {self.endpoint.name}"
        )
        
        session = self.tracker.connect(self.endpoint)
        try:
            self._run(session, result, name_pattern)
        finally:
            self._disconnect(session, result)
        
        self.event_bus.publish(ReleaseCompleted(
            project_key=project_key,
            released_version=result.released_version,
            created_version=result.created_version,
            matched=result.matched,
        ))
        
        return result
    
    # -------------------------------------------------------------------------
    # Phases
    # -------------------------------------------------------------------------
    
    def _run(self, session: Session, result: ReleaseResult, name_pattern: str) -> None:
        """Select, release and create within an open session."""
        project_key = result.project_key
        build_number = result.build_number
        
        versions = self.tracker.get_versions(session, project_key)
        self.logger.info(f"Found {len(versions)} versions in {project_key}")
        
        match = select_version(versions, name_pattern, build_number)
        if match is None:
            self._report(
                result,
                f"No version matching build {build_number} found in project {project_key}",
            )
            self.event_bus.publish(NoMatchingVersion(
                project_key=project_key,
                build_number=build_number,
                name_pattern=name_pattern,
            ))
            return
        
        result.matched = True
        
        release_date = self.today()
        self.tracker.release_version(session, project_key, match.version, release_date)
        result.released_version = match.name
        self._report(result, f"Released version {match.name} in project {project_key}")
        self.event_bus.publish(VersionReleased(
            project_key=project_key,
            version_name=match.name,
            release_date=release_date,
        ))
        
        new_name = next_version_name(match.prefix, build_number)
        self.tracker.create_version(session, project_key, new_name)
        result.created_version = new_name
        self._report(result, f"Created version {new_name} in project {project_key}")
        self.event_bus.publish(VersionCreated(
            project_key=project_key,
            version_name=new_name,
        ))
    
    def _disconnect(self, session: Session, result: ReleaseResult) -> None:
        """End the session; failures are recorded as warnings."""
        try:
            self.tracker.disconnect(session)
        except VersionTrackerError as e:
            self.logger.warning(f"Disconnecting from {self.endpoint.name} failed: {e}")
            result.add_warning(f"Disconnect failed: {e}")
    
    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    
    def _report(self, result: ReleaseResult, message: str) -> None:
        """Send a progress line to the output sink if provided."""
        if result.dry_run:
            message = f"[DRY-RUN] {message}"
        result.messages.append(message)
        if self.output:
            self.output(message)
        self.logger.info(message)
