"""Tests for the Jira version adapter."""

from datetime import date
from unittest.mock import Mock

import pytest

from jira_version_release.adapters.jira import JiraVersionAdapter
from jira_version_release.core.domain.entities import RemoteVersion, TrackerEndpoint
from jira_version_release.core.ports.version_tracker import (
    AuthenticationError,
    RemoteCallError,
)


@pytest.fixture
def endpoint():
    return TrackerEndpoint(name="main", url="https://jira.example.com/", user="ci", password="secret")


@pytest.fixture
def mock_client():
    client = Mock()
    client.login.return_value = ("JSESSIONID", "abc123")
    client.is_connected = True
    client.get_project_versions.return_value = [
        {"id": "10001", "name": "REL-9", "released": True, "archived": False,
         "releaseDate": "2024-03-01"},
        {"id": "10002", "name": "REL-10", "released": False, "archived": False},
        {"id": "10003", "name": "REL-old", "archived": True},
    ]
    client.post.return_value = {"id": "10004", "name": "REL-11", "released": False}
    return client


@pytest.fixture
def factory(mock_client):
    return Mock(return_value=mock_client)


@pytest.fixture
def adapter(factory):
    return JiraVersionAdapter(dry_run=False, client_factory=factory)


class TestConnect:
    """Tests for connect/disconnect."""
    
    def test_connect(self, adapter, factory, mock_client, endpoint):
        session = adapter.connect(endpoint)
        
        factory.assert_called_once_with("https://jira.example.com", dry_run=False)
        mock_client.login.assert_called_once_with("ci", "secret")
        assert session.token == "abc123"
        assert session.endpoint is endpoint
        assert adapter.is_connected
    
    def test_connect_propagates_authentication_error(self, adapter, mock_client, endpoint):
        mock_client.login.side_effect = AuthenticationError("rejected")
        
        with pytest.raises(AuthenticationError):
            adapter.connect(endpoint)
        
        assert not adapter.is_connected
    
    def test_disconnect(self, adapter, mock_client, endpoint):
        session = adapter.connect(endpoint)
        
        adapter.disconnect(session)
        
        mock_client.logout.assert_called_once()
        assert session.closed
        assert not adapter.is_connected
    
    def test_disconnect_failure_still_closes_session(self, adapter, mock_client, endpoint):
        mock_client.logout.side_effect = RemoteCallError("logout failed")
        session = adapter.connect(endpoint)
        
        with pytest.raises(RemoteCallError):
            adapter.disconnect(session)
        
        assert session.closed
    
    def test_calls_after_disconnect_fail(self, adapter, endpoint):
        session = adapter.connect(endpoint)
        adapter.disconnect(session)
        
        with pytest.raises(RemoteCallError, match="connect"):
            adapter.get_versions(session, "PROJ")


class TestVersions:
    """Tests for version operations."""
    
    def test_get_versions_keeps_order_and_flags(self, adapter, endpoint):
        session = adapter.connect(endpoint)
        
        versions = adapter.get_versions(session, "PROJ")
        
        assert [v.name for v in versions] == ["REL-9", "REL-10", "REL-old"]
        assert versions[0].released and versions[0].release_date == date(2024, 3, 1)
        assert versions[1].is_in_flight
        assert versions[2].archived
        assert all(v.project_key == "PROJ" for v in versions)
    
    def test_release_version(self, adapter, mock_client, endpoint):
        session = adapter.connect(endpoint)
        version = RemoteVersion(id="10002", name="REL-10")
        
        adapter.release_version(session, "PROJ", version, date(2024, 5, 17))
        
        mock_client.put.assert_called_once_with(
            "version/10002",
            json={"released": True, "releaseDate": "2024-05-17"},
        )
        assert version.released
        assert version.release_date == date(2024, 5, 17)
    
    def test_create_version(self, adapter, mock_client, endpoint):
        session = adapter.connect(endpoint)
        
        created = adapter.create_version(session, "PROJ", "REL-11")
        
        mock_client.post.assert_called_once_with(
            "version",
            json={"name": "REL-11", "project": "PROJ"},
        )
        assert created.id == "10004"
        assert created.name == "REL-11"
        assert not created.released
    
    def test_release_error_propagates(self, adapter, mock_client, endpoint):
        mock_client.put.side_effect = RemoteCallError("forbidden", status_code=403)
        session = adapter.connect(endpoint)
        
        with pytest.raises(RemoteCallError):
            adapter.release_version(session, "PROJ", RemoteVersion(id="1", name="REL-1"), date.today())


class TestDryRun:
    """Tests for dry-run mode."""
    
    @pytest.fixture
    def adapter(self, factory):
        return JiraVersionAdapter(dry_run=True, client_factory=factory)
    
    def test_reads_are_real(self, adapter, mock_client, endpoint):
        session = adapter.connect(endpoint)
        
        assert len(adapter.get_versions(session, "PROJ")) == 3
        mock_client.get_project_versions.assert_called_once_with("PROJ")
    
    def test_writes_are_skipped(self, adapter, mock_client, endpoint):
        session = adapter.connect(endpoint)
        version = RemoteVersion(id="10002", name="REL-10")
        
        adapter.release_version(session, "PROJ", version, date.today())
        created = adapter.create_version(session, "PROJ", "REL-11")
        
        mock_client.put.assert_not_called()
        mock_client.post.assert_not_called()
        assert created is None
        assert not version.released


class TestServerInfo:
    """Tests for server_info."""
    
    def test_uses_fresh_client(self, adapter, factory, mock_client, endpoint):
        mock_client.get_server_info.return_value = {"version": "9.4.0"}
        
        assert adapter.server_info(endpoint) == {"version": "9.4.0"}
        mock_client.login.assert_not_called()
