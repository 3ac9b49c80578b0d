"""
Release Module - Orchestration of a version release cycle.
"""

from .orchestrator import ReleaseOrchestrator, ReleaseResult
from .checks import CheckResult, check_url, check_logon

__all__ = [
    "ReleaseOrchestrator",
    "ReleaseResult",
    "CheckResult",
    "check_url",
    "check_logon",
]
