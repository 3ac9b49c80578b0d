"""
Jira API Client - Low-level HTTP client for the Jira REST API.

This handles the raw HTTP communication with Jira, including the
cookie-based session login used to manage versions.
The JiraVersionAdapter uses this to implement the VersionTrackerPort.
"""

import logging
from typing import Any, Optional
from urllib.parse import urlparse

import requests

from ...core.ports.version_tracker import (
    AuthenticationError,
    RemoteCallError,
    TrackerConnectionError,
)


class JiraApiClient:
    """
    Low-level Jira REST API client.
    
    Handles session login/logout, request/response, and error handling.
    """
    
    API_VERSION = "2"
    AUTH_PATH = "rest/auth/1/session"
    DEFAULT_TIMEOUT = 30
    
    def __init__(
        self,
        base_url: str,
        dry_run: bool = True,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the Jira client.
        
        Args:
            base_url: Jira instance URL (e.g., https://jira.example.com)
            dry_run: If True, don't make write operations
            timeout: Per-request timeout in seconds
            session: Optional preconfigured requests session
        """
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}/rest/api/{self.API_VERSION}"
        self.auth_url = f"{self.base_url}/{self.AUTH_PATH}"
        self.dry_run = dry_run
        self.timeout = timeout
        self.logger = logging.getLogger("JiraApiClient")
        
        self.headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        
        self._session = session or requests.Session()
        self._session.headers.update(self.headers)
        
        self._token: Optional[str] = None
    
    # -------------------------------------------------------------------------
    # Session Handling
    # -------------------------------------------------------------------------
    
    def validate_url(self) -> None:
        """
        Check that the base URL is a usable http(s) URL.
        
        Raises:
            TrackerConnectionError: If the URL is malformed
        """
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise TrackerConnectionError(
                f"Malformed JIRA URL: '{self.base_url}'",
                url=self.base_url,
            )
    
    def login(self, user: str, password: str) -> tuple[str, str]:
        """
        Open a cookie-based session.
        
        Args:
            user: Account name
            password: Account password
            
        Returns:
            (cookie name, session token)
            
        Raises:
            TrackerConnectionError: URL malformed or host unreachable
            AuthenticationError: Credentials rejected
        """
        self.validate_url()
        
        try:
            response = self._session.post(
                self.auth_url,
                json={"username": user, "password": password},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            self.logger.error(f"{type(e).__name__} while connecting to {self.base_url}")
            raise TrackerConnectionError(
                f"Connection to {self.base_url} failed: {e}",
                url=self.base_url,
                cause=e,
            )
        
        if response.status_code in (401, 403):
            self.logger.error(f"Login to {self.base_url} rejected for user '{user}'")
            raise AuthenticationError(
                f"Authentication failed for user '{user}'. Check JIRA_USER and JIRA_PASSWORD.",
                url=self.base_url,
            )
        
        if not response.ok:
            self.logger.error(f"Login error {response.status_code} from {self.base_url}")
            raise TrackerConnectionError(
                f"Login failed with status {response.status_code}: {response.text[:500]}",
                url=self.base_url,
            )
        
        try:
            session_info = response.json()["session"]
            name, token = session_info["name"], session_info["value"]
        except (ValueError, KeyError, TypeError) as e:
            raise TrackerConnectionError(
                f"Unexpected login response from {self.base_url}",
                url=self.base_url,
                cause=e,
            )
        
        self._session.cookies.set(name, token)
        self._token = token
        self.logger.debug(f"Logged in to {self.base_url} as {user}")
        return name, token
    
    def logout(self) -> None:
        """
        End the session.
        
        Raises:
            RemoteCallError: On failure
        """
        try:
            response = self._session.delete(self.auth_url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"{type(e).__name__} while logging out from {self.base_url}")
            raise RemoteCallError(f"Logout failed: {e}", endpoint=self.AUTH_PATH, cause=e)
        finally:
            self._token = None
        
        if not response.ok and response.status_code != 401:
            raise RemoteCallError(
                f"Logout failed with status {response.status_code}",
                endpoint=self.AUTH_PATH,
                status_code=response.status_code,
            )
    
    @property
    def is_connected(self) -> bool:
        """Check if logged in."""
        return self._token is not None
    
    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------
    
    def request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> Any:
        """
        Make a request to the Jira API within the current session.
        
        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint (e.g., 'project/PROJ/versions')
            **kwargs: Additional arguments for requests
            
        Returns:
            Decoded JSON response
            
        Raises:
            RemoteCallError: On API errors
        """
        url = f"{self.api_url}/{endpoint}"
        kwargs.setdefault("timeout", self.timeout)
        
        try:
            response = self._session.request(method, url, **kwargs)
        except requests.exceptions.ConnectionError as e:
            self.logger.error(f"Connection failed during {method} {endpoint}")
            raise RemoteCallError(f"Connection failed: {e}", endpoint=endpoint, cause=e)
        except requests.exceptions.Timeout as e:
            self.logger.error(f"Timeout during {method} {endpoint}")
            raise RemoteCallError(f"Request timed out: {e}", endpoint=endpoint, cause=e)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"{type(e).__name__} during {method} {endpoint}")
            raise RemoteCallError(f"Request failed: {e}", endpoint=endpoint, cause=e)
        
        return self._handle_response(response, endpoint)
    
    def get(self, endpoint: str, **kwargs) -> Any:
        """GET request."""
        return self.request("GET", endpoint, **kwargs)
    
    def post(self, endpoint: str, json: dict = None, **kwargs) -> Any:
        """POST request (checks dry_run)."""
        if self.dry_run:
            self.logger.info(f"[DRY-RUN] Would POST to {endpoint}")
            return {}
        return self.request("POST", endpoint, json=json, **kwargs)
    
    def put(self, endpoint: str, json: dict = None, **kwargs) -> Any:
        """PUT request (checks dry_run)."""
        if self.dry_run:
            self.logger.info(f"[DRY-RUN] Would PUT to {endpoint}")
            return {}
        return self.request("PUT", endpoint, json=json, **kwargs)
    
    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------
    
    def _handle_response(
        self,
        response: requests.Response,
        endpoint: str
    ) -> Any:
        """Handle API response and errors."""
        if response.ok:
            if not response.text:
                return {}
            try:
                return response.json()
            except ValueError as e:
                self.logger.error(f"Invalid JSON from {endpoint}: {response.text[:200]}")
                raise RemoteCallError(
                    f"Invalid JSON from {endpoint}",
                    endpoint=endpoint,
                    status_code=response.status_code,
                    cause=e,
                )
        
        status = response.status_code
        error_body = response.text[:500] if response.text else ""
        self.logger.error(f"Jira API error {status} for {endpoint}: {error_body}")
        
        if status == 401:
            message = "Session is not authenticated or has expired"
        elif status == 403:
            message = f"Permission denied for {endpoint}"
        elif status == 404:
            message = f"Not found: {endpoint}"
        else:
            message = f"API error {status}: {error_body}"
        
        raise RemoteCallError(message, endpoint=endpoint, status_code=status)
    
    # -------------------------------------------------------------------------
    # Convenience Methods
    # -------------------------------------------------------------------------
    
    def get_server_info(self) -> dict[str, Any]:
        """
        Get server information; works without logging in.
        
        Raises:
            TrackerConnectionError: If the server does not answer as Jira
        """
        self.validate_url()
        try:
            return self.get("serverInfo")
        except RemoteCallError as e:
            raise TrackerConnectionError(
                f"No Jira instance answering at {self.base_url}: {e}",
                url=self.base_url,
                cause=e,
            )
    
    def get_project_versions(self, project_key: str) -> list[dict[str, Any]]:
        """Get all versions of a project."""
        data = self.get(f"project/{project_key}/versions")
        return data if isinstance(data, list) else []
