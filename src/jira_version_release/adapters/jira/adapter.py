"""
Jira Adapter - Implements VersionTrackerPort for Atlassian Jira.

This is the main entry point for Jira integration.
"""

import logging
from datetime import date
from typing import Any, Callable, Optional

from ...core.domain.entities import RemoteVersion, TrackerEndpoint
from ...core.ports.version_tracker import (
    RemoteCallError,
    Session,
    VersionTrackerPort,
)
from .client import JiraApiClient


class JiraVersionAdapter(VersionTrackerPort):
    """
    Jira implementation of the VersionTrackerPort.
    
    Translates between domain entities and Jira's version API.
    """
    
    def __init__(
        self,
        dry_run: bool = True,
        client_factory: Optional[Callable[..., JiraApiClient]] = None,
    ):
        """
        Initialize the Jira adapter.
        
        Args:
            dry_run: If True, don't make changes
            client_factory: Builds the API client for an endpoint URL
        """
        self._dry_run = dry_run
        self._client_factory = client_factory or JiraApiClient
        self._client: Optional[JiraApiClient] = None
        self.logger = logging.getLogger("JiraVersionAdapter")
    
    # -------------------------------------------------------------------------
    # VersionTrackerPort Implementation - Properties
    # -------------------------------------------------------------------------
    
    @property
    def name(self) -> str:
        return "Jira"
    
    @property
    def dry_run(self) -> bool:
        return self._dry_run
    
    @property
    def is_connected(self) -> bool:
        return self._client is not None and self._client.is_connected
    
    # -------------------------------------------------------------------------
    # VersionTrackerPort Implementation - Session
    # -------------------------------------------------------------------------
    
    def connect(self, endpoint: TrackerEndpoint) -> Session:
        client = self._client_factory(endpoint.base_url, dry_run=self._dry_run)
        cookie_name, token = client.login(endpoint.user, endpoint.password)
        
        self._client = client
        self.logger.info(f"Connected to {endpoint.name} ({endpoint.base_url})")
        return Session(endpoint=endpoint, token=token, cookie_name=cookie_name)
    
    def disconnect(self, session: Session) -> None:
        client = self._require_client(session)
        try:
            client.logout()
        finally:
            session.closed = True
            self._client = None
        self.logger.info(f"Disconnected from {session.endpoint.name}")

    def server_info(self, endpoint: TrackerEndpoint) -> dict[str, Any]:
        client = self._client_factory(endpoint.base_url, dry_run=self._dry_run)
        return client.get_server_info()

    # -------------------------------------------------------------------------
    # VersionTrackerPort Implementation - Versions
    # -------------------------------------------------------------------------
    
    def get_versions(self, session: Session, project_key: str) -> list[RemoteVersion]:
        client = self._require_client(session)
        data = client.get_project_versions(project_key)
        versions = [self._parse_version(item, project_key) for item in data]
        self.logger.debug(f"Found {len(versions)} versions in {project_key}")
        return versions
    
    def release_version(
        self,
        session: Session,
        project_key: str,
        version: RemoteVersion,
        release_date: date,
    ) -> None:
        client = self._require_client(session)
        
        if self._dry_run:
            self.logger.info(
                f"[DRY-RUN] Would release {version.name} in {project_key} as of {release_date}"
            )
            return
        
        client.put(
            f"version/{version.id}",
            json={
                "released": True,
                "releaseDate": release_date.isoformat(),
            }
        )
        version.released = True
        version.release_date = release_date
        self.logger.info(f"Released {version.name} in {project_key}")
    
    def create_version(
        self,
        session: Session,
        project_key: str,
        name: str,
    ) -> Optional[RemoteVersion]:
        client = self._require_client(session)
        
        if self._dry_run:
            self.logger.info(f"[DRY-RUN] Would create version {name} in {project_key}")
            return None
        
        data = client.post(
            "version",
            json={"name": name, "project": project_key}
        )
        self.logger.info(f"Created version {name} in {project_key}")
        
        if not data:
            return RemoteVersion(id="", name=name, project_key=project_key)
        return self._parse_version(data, project_key)
    
    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------
    
    def _require_client(self, session: Session) -> JiraApiClient:
        """Get the client serving session."""
        if self._client is None or session.closed:
            raise RemoteCallError(
                f"No open session for {session.endpoint.name}; call connect() first"
            )
        return self._client
    
    def _parse_version(self, data: dict[str, Any], project_key: str) -> RemoteVersion:
        """Parse Jira API response into RemoteVersion."""
        release_date = None
        raw_date = data.get("releaseDate")
        if raw_date:
            try:
                release_date = date.fromisoformat(raw_date)
            except ValueError:
                self.logger.debug(f"Ignoring unparsable release date '{raw_date}'")
        
        return RemoteVersion(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            released=bool(data.get("released", False)),
            archived=bool(data.get("archived", False)),
            release_date=release_date,
            project_key=project_key,
        )
