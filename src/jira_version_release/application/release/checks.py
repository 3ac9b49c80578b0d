"""
Endpoint Checks - Verify a tracker endpoint before a job relies on it.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ...core.domain.entities import TrackerEndpoint
from ...core.ports.version_tracker import (
    TrackerConnectionError,
    VersionTrackerError,
    VersionTrackerPort,
)


logger = logging.getLogger("EndpointChecks")


@dataclass
class CheckResult:
    """Outcome of an endpoint check."""
    
    ok: bool
    message: str = ""
    
    @classmethod
    def passed(cls, message: str = "") -> "CheckResult":
        return cls(ok=True, message=message)
    
    @classmethod
    def failed(cls, message: str) -> "CheckResult":
        return cls(ok=False, message=message)


def _error_message(error: VersionTrackerError) -> str:
    """Prefer the underlying cause's message when it has one."""
    cause: Optional[Exception] = error.cause
    if cause is not None and str(cause):
        return str(cause)
    return str(error)


def check_url(tracker: VersionTrackerPort, url: Optional[str]) -> CheckResult:
    """
    Check that a Jira instance answers at url, without logging in.
    
    An empty URL is not an error; there is nothing to check yet.
    """
    url = (url or "").strip()
    if not url:
        return CheckResult.passed("No URL specified")
    
    try:
        info = tracker.server_info(TrackerEndpoint(name="check", url=url))
    except TrackerConnectionError as e:
        logger.warning(f"URL check for {url} failed: {e}")
        return CheckResult.failed(_error_message(e))
    
    version = info.get("version", "unknown version")
    return CheckResult.passed(f"{info.get('serverTitle', 'Jira')} {version} at {url}")


def check_logon(tracker: VersionTrackerPort, endpoint: TrackerEndpoint) -> CheckResult:
    """
    Check that the endpoint accepts its credentials.
    
    Without URL or user the check cannot be made and passes.
    """
    if not endpoint.url or not endpoint.user:
        return CheckResult.passed("URL or user missing, logon not checked")
    
    try:
        session = tracker.connect(endpoint)
    except TrackerConnectionError as e:
        logger.warning(f"Logon check for {endpoint.name} failed: {e}")
        return CheckResult.failed(_error_message(e))
    
    try:
        tracker.disconnect(session)
    except VersionTrackerError as e:
        logger.warning(f"Logout after logon check failed: {e}")
    
    return CheckResult.passed(f"Logged in to {endpoint.name} as {endpoint.user}")
