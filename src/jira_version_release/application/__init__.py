"""
Application Layer - Use cases and orchestration.

This layer contains:
- release/: Release orchestrator and endpoint checks
"""

from .release import (
    ReleaseOrchestrator,
    ReleaseResult,
    CheckResult,
    check_url,
    check_logon,
)

__all__ = [
    "ReleaseOrchestrator",
    "ReleaseResult",
    "CheckResult",
    "check_url",
    "check_logon",
]
