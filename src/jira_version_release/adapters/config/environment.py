"""
Environment Config Provider - Load configuration from environment variables.

Supports:
- Environment variables (JIRA_URL, JIRA_USER, JIRA_PASSWORD, BUILD_NUMBER, ...)
- .env files
- A JSON instances file listing several JIRA instances
- Command line argument overrides
"""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Optional

from ...core.domain.entities import TrackerEndpoint
from ...core.ports.config_provider import (
    AppConfig,
    ConfigProviderPort,
    ReleaseConfig,
)


class EnvironmentConfigProvider(ConfigProviderPort):
    """
    Configuration provider that loads from environment variables, .env
    files and an optional instances file.
    """
    
    DEFAULT_INSTANCE = "default"

    ENV_MAPPING = {
        "JIRA_URL": "jira_url",
        "JIRA_USER": "jira_user",
        "JIRA_PASSWORD": "jira_password",
        "JIRA_INSTANCE": "jira_instance",
        "JIRA_INSTANCES_FILE": "instances_file",
        "JIRA_PROJECT": "project_key",
        "JIRA_VERSION_PATTERN": "name_pattern",
        "JIRA_RELEASE_EXECUTE": "execute",
        "JIRA_RELEASE_VERBOSE": "verbose",
        "BUILD_NUMBER": "build_number",
    }
    
    def __init__(
        self,
        env_file: Optional[Path] = None,
        cli_overrides: Optional[dict[str, Any]] = None,
        environ: Optional[dict[str, str]] = None,
    ):
        """
        Initialize the config provider.
        
        Args:
            env_file: Path to .env file (auto-detected if not specified)
            cli_overrides: Command line argument overrides
            environ: Environment to read (defaults to os.environ)
        """
        self._values: dict[str, Any] = {}
        self._env_file = env_file
        self._cli_overrides = cli_overrides or {}
        self._environ = os.environ if environ is None else environ
        self._file_endpoints: list[TrackerEndpoint] = []
        self._load_errors: list[str] = []
        self.logger = logging.getLogger("EnvironmentConfigProvider")
        
        # Load configuration
        self._load_env_file()
        self._load_environment()
        self._apply_cli_overrides()
        self._load_instances_file()
    
    # -------------------------------------------------------------------------
    # ConfigProviderPort Implementation
    # -------------------------------------------------------------------------
    
    @property
    def name(self) -> str:
        return "Environment"
    
    def load(self) -> AppConfig:
        """Load complete configuration."""
        release = ReleaseConfig(
            project_key=self.get("project_key", ""),
            name_pattern=self.get("name_pattern", ""),
            instance_name=self.get("jira_instance"),
            build_number=self._parse_build_number(self.get("build_number")),
            dry_run=not self._as_bool(self.get("execute", False)),
            verbose=self._as_bool(self.get("verbose", False)),
        )
        
        return AppConfig(
            endpoints=self._build_endpoints(),
            release=release,
        )
    
    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        key = key.lower().replace("-", "_")
        return self._values.get(key, default)
    
    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        key = key.lower().replace("-", "_")
        self._values[key] = value
    
    def validate(self) -> list[str]:
        """Validate configuration."""
        errors = list(self._load_errors)
        
        endpoints = self._build_endpoints()
        if not endpoints:
            errors.append(
                "Missing JIRA_URL - set in environment, .env file or use --instances-file"
            )
        for endpoint in endpoints:
            if not endpoint.user:
                errors.append(f"Missing user for JIRA instance '{endpoint.name}' (JIRA_USER)")
        
        if not self.get("project_key"):
            errors.append("Missing JIRA project key - use --project or JIRA_PROJECT")
        
        raw_build = self.get("build_number")
        if raw_build is None or raw_build == "":
            errors.append("Missing build number - use --build-number or BUILD_NUMBER")
        elif self._parse_build_number(raw_build) is None:
            errors.append(f"Build number must be a non-negative integer, got '{raw_build}'")
        
        pattern = self.get("name_pattern", "")
        try:
            re.compile(pattern)
        except re.error as e:
            errors.append(f"Invalid version name pattern '{pattern}': {e}")
        
        return errors
    
    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------
    
    def _build_endpoints(self) -> list[TrackerEndpoint]:
        """Merge instances file endpoints with the one from JIRA_URL."""
        endpoints = list(self._file_endpoints)
        
        url = self.get("jira_url")
        if url:
            name = self.get("jira_instance") or self.DEFAULT_INSTANCE
            endpoint = TrackerEndpoint(
                name=name,
                url=url,
                user=self.get("jira_user", ""),
                password=self.get("jira_password", ""),
            )
            endpoints = [e for e in endpoints if e.name != name]
            endpoints.append(endpoint)
        
        return endpoints
    
    def _load_env_file(self) -> None:
        """Load values from .env file."""
        env_file = self._find_env_file()
        if not env_file:
            return
        
        for line in env_file.read_text().splitlines():
            line = line.strip()
            
            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue
            
            if "=" not in line:
                continue
            
            key, value = line.split("=", 1)
            key = key.strip().upper()
            value = value.strip().strip('"').strip("'")
            
            config_key = self.ENV_MAPPING.get(key)
            if config_key:
                self._values[config_key] = value
    
    def _find_env_file(self) -> Optional[Path]:
        """Find .env file."""
        if self._env_file is not None:
            return self._env_file if self._env_file.exists() else None
        
        cwd_env = Path.cwd() / ".env"
        if cwd_env.exists():
            return cwd_env
        
        return None
    
    def _load_environment(self) -> None:
        """Load values from environment variables."""
        for env_key, config_key in self.ENV_MAPPING.items():
            raw_value = self._environ.get(env_key)
            if raw_value is not None:
                self._values[config_key] = raw_value
    
    def _apply_cli_overrides(self) -> None:
        """Apply CLI argument overrides."""
        cli_mapping = {
            "build_number": "build_number",
            "project": "project_key",
            "pattern": "name_pattern",
            "instance": "jira_instance",
            "instances_file": "instances_file",
            "jira_url": "jira_url",
            "user": "jira_user",
            "execute": "execute",
            "verbose": "verbose",
        }
        
        for cli_key, config_key in cli_mapping.items():
            if cli_key in self._cli_overrides and self._cli_overrides[cli_key] is not None:
                self._values[config_key] = self._cli_overrides[cli_key]
    
    def _load_instances_file(self) -> None:
        """Load JIRA instances from a JSON file."""
        path = self.get("instances_file")
        if not path:
            return
        
        path = Path(path)
        if not path.exists():
            self._load_errors.append(f"Instances file not found: {path}")
            return
        
        try:
            data = json.loads(path.read_text())
        except ValueError as e:
            self._load_errors.append(f"Instances file {path} is not valid JSON: {e}")
            return
        
        if isinstance(data, dict):
            data = data.get("instances", [])

        if not isinstance(data, list):
            self._load_errors.append(
                f"Instances file {path} must contain a list of instances"
            )
            return

        seen: set[str] = set()
        for index, item in enumerate(data):
            if not isinstance(item, dict) or not item.get("name") or not item.get("url"):
                self._load_errors.append(
                    f"Instance #{index + 1} in {path} needs at least 'name' and 'url'"
                )
                continue
            if "password" not in item and "pass" in item:
                item = dict(item, password=item["pass"])
            not_strings = [
                key for key in ("name", "url", "user", "password")
                if not isinstance(item.get(key, ""), str)
            ]
            if not_strings:
                self._load_errors.append(
                    f"Instance #{index + 1} in {path}: {', '.join(not_strings)} must be text"
                )
                continue
            if item["name"] in seen:
                self._load_errors.append(f"Duplicate instance name in {path}: {item['name']}")
                continue
            seen.add(item["name"])
            self._file_endpoints.append(TrackerEndpoint(
                name=item["name"],
                url=item["url"],
                user=item.get("user", ""),
                password=item.get("password", ""),
            ))
        
        self.logger.debug(f"Loaded {len(self._file_endpoints)} instances from {path}")
    
    @staticmethod
    def _as_bool(value: Any) -> bool:
        """Convert boolean-ish values."""
        if isinstance(value, str):
            return value.strip().lower() in ("true", "1", "yes")
        return bool(value)
    
    @staticmethod
    def _parse_build_number(value: Any) -> Optional[int]:
        """Parse a build number, None if missing or invalid."""
        if value is None or isinstance(value, bool):
            return None
        try:
            number = int(str(value).strip())
        except ValueError:
            return None
        return number if number >= 0 else None
