"""
Adapters - Concrete implementations of ports.

This module contains implementations for:
- Version trackers: Jira
- Config: Environment variables, .env and instances files
"""

from .jira import JiraVersionAdapter
from .config import EnvironmentConfigProvider

__all__ = [
    "JiraVersionAdapter",
    "EnvironmentConfigProvider",
]
