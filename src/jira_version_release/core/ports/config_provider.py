"""
Config Provider Port - Abstract interface for configuration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from ..domain.entities import TrackerEndpoint


class ConfigurationError(Exception):
    """Configuration is missing or inconsistent."""
    pass


@dataclass
class ReleaseConfig:
    """Per-job release parameters."""
    
    project_key: str = ""
    name_pattern: str = ""
    instance_name: Optional[str] = None
    build_number: Optional[int] = None
    dry_run: bool = True
    verbose: bool = False


@dataclass
class AppConfig:
    """Complete application configuration."""
    
    endpoints: list[TrackerEndpoint] = field(default_factory=list)
    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    
    def find_endpoint(self, name: Optional[str] = None) -> TrackerEndpoint:
        """
        Select the endpoint a job is configured for.
        
        Without a name, the only configured endpoint is used.
        
        Raises:
            ConfigurationError: If no endpoint can be selected
        """
        if name is None:
            if len(self.endpoints) == 1:
                return self.endpoints[0]
            if not self.endpoints:
                raise ConfigurationError("No JIRA instance configured")
            names = ", ".join(e.name for e in self.endpoints)
            raise ConfigurationError(
                f"Several JIRA instances configured ({names}); choose one with --instance"
            )
        
        for endpoint in self.endpoints:
            if endpoint.name == name:
                return endpoint
        
        raise ConfigurationError(f"Unknown JIRA instance: {name}")


class ConfigProviderPort(ABC):
    """Abstract interface for configuration providers."""
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Get the provider name."""
        ...
    
    @abstractmethod
    def load(self) -> AppConfig:
        """Load complete configuration."""
        ...
    
    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Get a single configuration value."""
        ...
    
    @abstractmethod
    def validate(self) -> list[str]:
        """
        Validate configuration.
        
        Returns:
            List of validation errors (empty if valid)
        """
        ...
