"""
Domain Entities - Objects a release cycle works with.

Endpoints come from configuration, versions come from the tracker.
Nothing here is persisted locally.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class TrackerEndpoint:
    """
    A single JIRA instance and the account used to manage its versions.

    One JIRA instance usually hosts projects of many CI jobs, so endpoints
    are configured once and selected by name.
    """
    
    name: str
    url: str
    user: str = ""
    password: str = field(default="", repr=False)
    
    @property
    def base_url(self) -> str:
        """URL without trailing slash."""
        return self.url.rstrip("/")


@dataclass
class RemoteVersion:
    """A version record as returned by the tracker."""
    
    id: str
    name: str
    released: bool = False
    archived: bool = False
    release_date: Optional[date] = None
    project_key: Optional[str] = None
    
    @property
    def is_in_flight(self) -> bool:
        """True if the version is neither released nor archived."""
        return not (self.released or self.archived)
    
    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class VersionMatch:
    """
    A version selected for release together with its name prefix.
    
    The prefix is the part of the version name matched by the naming
    pattern, i.e. everything before the build number.
    """
    
    version: RemoteVersion
    prefix: str
    
    @property
    def name(self) -> str:
        return self.version.name
