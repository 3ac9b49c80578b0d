"""Tests for the low-level Jira API client."""

import json
from unittest.mock import Mock

import pytest
import requests

from jira_version_release.adapters.jira.client import JiraApiClient
from jira_version_release.core.ports.version_tracker import (
    AuthenticationError,
    RemoteCallError,
    TrackerConnectionError,
)


BASE_URL = "https://jira.example.com"


def make_response(status=200, data=None):
    response = Mock()
    response.status_code = status
    response.ok = status < 400
    response.text = json.dumps(data) if data is not None else ""
    response.json.return_value = data
    return response


@pytest.fixture
def http():
    return Mock()


@pytest.fixture
def client(http):
    return JiraApiClient(BASE_URL + "/", dry_run=False, session=http)


class TestLogin:
    """Tests for session login."""
    
    def test_success(self, client, http):
        http.post.return_value = make_response(
            200, {"session": {"name": "JSESSIONID", "value": "abc123"}}
        )
        
        name, token = client.login("ci", "secret")
        
        assert (name, token) == ("JSESSIONID", "abc123")
        assert client.is_connected
        http.post.assert_called_once()
        args, kwargs = http.post.call_args
        assert args[0] == f"{BASE_URL}/rest/auth/1/session"
        assert kwargs["json"] == {"username": "ci", "password": "secret"}
        http.cookies.set.assert_called_with("JSESSIONID", "abc123")
    
    @pytest.mark.parametrize("status", [401, 403])
    def test_rejected_credentials(self, client, http, status):
        http.post.return_value = make_response(status, {"errorMessages": ["Login failed"]})
        
        with pytest.raises(AuthenticationError) as exc_info:
            client.login("ci", "wrong")
        
        assert isinstance(exc_info.value, TrackerConnectionError)
        assert not client.is_connected
    
    def test_unreachable_host(self, client, http):
        http.post.side_effect = requests.exceptions.ConnectionError("refused")
        
        with pytest.raises(TrackerConnectionError) as exc_info:
            client.login("ci", "secret")
        
        assert not isinstance(exc_info.value, AuthenticationError)
        assert isinstance(exc_info.value.cause, requests.exceptions.ConnectionError)
    
    @pytest.mark.parametrize("url", ["jira.example.com", "ftp://jira.example.com", "https://", ""])
    def test_malformed_url(self, http, url):
        client = JiraApiClient(url, dry_run=False, session=http)
        
        with pytest.raises(TrackerConnectionError, match="Malformed"):
            client.login("ci", "secret")
        
        http.post.assert_not_called()
    
    def test_server_error_is_connection_error(self, client, http):
        http.post.return_value = make_response(500, {"error": "boom"})
        
        with pytest.raises(TrackerConnectionError) as exc_info:
            client.login("ci", "secret")
        
        assert not isinstance(exc_info.value, AuthenticationError)
    
    def test_unexpected_body(self, client, http):
        http.post.return_value = make_response(200, {"unexpected": True})
        
        with pytest.raises(TrackerConnectionError):
            client.login("ci", "secret")


class TestLogout:
    """Tests for session logout."""
    
    def test_success(self, client, http):
        http.post.return_value = make_response(
            200, {"session": {"name": "JSESSIONID", "value": "abc123"}}
        )
        http.delete.return_value = make_response(204)
        client.login("ci", "secret")
        
        client.logout()
        
        http.delete.assert_called_once()
        assert http.delete.call_args[0][0] == f"{BASE_URL}/rest/auth/1/session"
        assert not client.is_connected
    
    def test_failure(self, client, http):
        http.delete.return_value = make_response(500)
        
        with pytest.raises(RemoteCallError):
            client.logout()
        
        assert not client.is_connected
    
    def test_network_failure(self, client, http):
        http.delete.side_effect = requests.exceptions.ConnectionError("reset")
        
        with pytest.raises(RemoteCallError):
            client.logout()


class TestRequests:
    """Tests for API requests."""
    
    def test_get_project_versions(self, client, http):
        versions = [{"id": "1", "name": "REL-1", "released": False, "archived": False}]
        http.request.return_value = make_response(200, versions)
        
        assert client.get_project_versions("PROJ") == versions
        
        method, url = http.request.call_args[0]
        assert method == "GET"
        assert url == f"{BASE_URL}/rest/api/2/project/PROJ/versions"
    
    def test_not_found(self, client, http):
        http.request.return_value = make_response(404, {"errorMessages": ["No project"]})
        
        with pytest.raises(RemoteCallError) as exc_info:
            client.get("project/NOPE/versions")
        
        assert exc_info.value.status_code == 404
        assert exc_info.value.endpoint == "project/NOPE/versions"
    
    def test_timeout(self, client, http):
        http.request.side_effect = requests.exceptions.Timeout("slow")
        
        with pytest.raises(RemoteCallError, match="timed out"):
            client.get("project/PROJ/versions")
    
    def test_empty_body(self, client, http):
        http.request.return_value = make_response(204)
        
        assert client.put("version/1", json={"released": True}) == {}
    
    def test_dry_run_skips_writes(self, http):
        client = JiraApiClient(BASE_URL, dry_run=True, session=http)
        
        assert client.post("version", json={"name": "REL-2"}) == {}
        assert client.put("version/1", json={"released": True}) == {}
        
        http.request.assert_not_called()


class TestServerInfo:
    """Tests for get_server_info."""
    
    def test_success(self, client, http):
        http.request.return_value = make_response(200, {"version": "8.20.0"})
        
        assert client.get_server_info()["version"] == "8.20.0"
    
    def test_failure_is_connection_error(self, client, http):
        http.request.side_effect = requests.exceptions.ConnectionError("refused")
        
        with pytest.raises(TrackerConnectionError):
            client.get_server_info()


def make_html_response(status=200):
    response = Mock()
    response.status_code = status
    response.ok = status < 400
    response.text = "<html><body>Please log in</body></html>"
    response.json.side_effect = json.JSONDecodeError("Expecting value", response.text, 0)
    return response


class TestNonJsonResponses:
    """Tests for replies that are not JSON."""
    
    def test_list_versions_html_body(self, client, http):
        http.request.return_value = make_html_response()
        
        with pytest.raises(RemoteCallError) as exc_info:
            client.get_project_versions("PROJ")
        
        assert exc_info.value.status_code == 200
        assert exc_info.value.endpoint == "project/PROJ/versions"
        assert isinstance(exc_info.value.cause, ValueError)
    
    def test_write_html_body(self, client, http):
        http.request.return_value = make_html_response()
        
        with pytest.raises(RemoteCallError, match="Invalid JSON"):
            client.put("version/1", json={"released": True})
        with pytest.raises(RemoteCallError, match="Invalid JSON"):
            client.post("version", json={"name": "REL-2"})
    
    def test_server_info_html_body(self, client, http):
        http.request.return_value = make_html_response()
        
        with pytest.raises(TrackerConnectionError):
            client.get_server_info()
