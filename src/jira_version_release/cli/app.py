"""
CLI Application - Entry point for the post-build release step.

Usage:
    # See what would happen for the current CI build (default is dry-run)
    jira-version-release --project PROJ --pattern 'REL-'

    # Release REL-41 and create REL-42
    jira-version-release --project PROJ --pattern 'REL-' --build-number 41 --execute

    # Check URL and credentials of a configured instance
    jira-version-release --check --instance main

Environment Variables:
    JIRA_URL, JIRA_USER, JIRA_PASSWORD: Single JIRA instance
    JIRA_INSTANCE: Name of that instance (default: "default")
    JIRA_INSTANCES_FILE: JSON file listing several instances
    JIRA_PROJECT, JIRA_VERSION_PATTERN: Release parameters
    BUILD_NUMBER: Number of the finished build (set by Jenkins)
"""

import argparse
import logging
import re
import sys
from typing import Optional

from .. import __version__
from ..adapters.config import EnvironmentConfigProvider
from ..adapters.jira import JiraVersionAdapter
from ..application.release import ReleaseOrchestrator, check_logon, check_url
from ..core.ports.config_provider import AppConfig, ConfigurationError
from ..core.ports.version_tracker import (
    AuthenticationError,
    RemoteCallError,
    TrackerConnectionError,
    VersionTrackerError,
)
from .exit_codes import ExitCode
from .output import Console


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="jira-version-release",
        description="Release the JIRA version of a finished build and create the next one",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    
    parser.add_argument(
        "--build-number", "-b",
        type=str,
        help="Number of the finished build (or set BUILD_NUMBER env var)"
    )
    
    parser.add_argument(
        "--project", "-p",
        type=str,
        help="JIRA project key (or set JIRA_PROJECT env var)"
    )
    
    parser.add_argument(
        "--pattern",
        type=str,
        help="Regular expression matching the version name before the build number, e.g. 'REL-'"
    )
    
    parser.add_argument(
        "--instance", "-i",
        type=str,
        help="Name of the JIRA instance to use (or set JIRA_INSTANCE env var)"
    )
    
    parser.add_argument(
        "--instances-file",
        type=str,
        help="JSON file listing JIRA instances (name, url, user, password)"
    )
    
    parser.add_argument(
        "--jira-url",
        type=str,
        help="JIRA instance URL (or set JIRA_URL env var)"
    )
    
    parser.add_argument(
        "--user", "-u",
        type=str,
        help="JIRA user (or set JIRA_USER env var); the password is read from JIRA_PASSWORD"
    )
    
    parser.add_argument(
        "--execute",
        action="store_true",
        default=None,
        help="Actually release and create versions (default is dry-run)"
    )
    
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only check URL and credentials of the selected instance"
    )
    
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=None,
        help="Enable verbose logging"
    )
    
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output"
    )
    
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    
    return parser


def run_check(config: AppConfig, console: Console) -> int:
    """Check URL and logon of the selected instance."""
    try:
        endpoint = config.find_endpoint(config.release.instance_name)
    except ConfigurationError as e:
        console.error(str(e))
        return ExitCode.CONFIG_ERROR
    
    console.header(f"Checking JIRA instance '{endpoint.name}'")
    tracker = JiraVersionAdapter(dry_run=True)
    
    url_result = check_url(tracker, endpoint.url)
    console.check_result("URL", url_result)
    if not url_result.ok:
        return ExitCode.CONNECTION_ERROR
    
    logon_result = check_logon(tracker, endpoint)
    console.check_result("Logon", logon_result)
    if not logon_result.ok:
        return ExitCode.CONNECTION_ERROR
    
    return ExitCode.SUCCESS


def run(args: argparse.Namespace) -> int:
    """
    Run the release step.
    
    Args:
        args: Parsed command line arguments
        
    Returns:
        Process exit code
    """
    logger = logging.getLogger("main")
    
    provider = EnvironmentConfigProvider(cli_overrides=vars(args))
    config = provider.load()
    if config.release.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    console = Console(color=not args.no_color, verbose=config.release.verbose)
    
    if args.check:
        return run_check(config, console)
    
    errors = provider.validate()
    if errors:
        console.error("Configuration errors:")
        for error in errors:
            console.detail(error)
        return ExitCode.CONFIG_ERROR
    
    try:
        endpoint = config.find_endpoint(config.release.instance_name)
    except ConfigurationError as e:
        console.error(str(e))
        return ExitCode.CONFIG_ERROR
    
    console.header(f"JIRA version release - {config.release.project_key}")
    console.debug(f"Instance: {endpoint.name} ({endpoint.base_url}), user: {endpoint.user}")
    if config.release.dry_run:
        console.dry_run_banner()
    
    tracker = JiraVersionAdapter(dry_run=config.release.dry_run)
    orchestrator = ReleaseOrchestrator(
        tracker=tracker,
        endpoint=endpoint,
        config=config.release,
        output=console.progress_line,
    )
    
    try:
        result = orchestrator.release()
    except AuthenticationError as e:
        logger.error(f"Authentication failed: {e}")
        console.error(f"Authentication failed: {e}")
        return ExitCode.CONNECTION_ERROR
    except TrackerConnectionError as e:
        logger.error(f"Connection failed: {e}")
        console.error(f"Connection failed: {e}")
        return ExitCode.CONNECTION_ERROR
    except RemoteCallError as e:
        logger.error(f"JIRA call failed: {e}")
        console.error(f"JIRA call failed: {e}")
        return ExitCode.REMOTE_ERROR
    except VersionTrackerError as e:
        logger.error(f"JIRA error: {e}")
        console.error(f"JIRA error: {e}")
        return ExitCode.ERROR
    except (ValueError, re.error) as e:
        console.error(str(e))
        return ExitCode.CONFIG_ERROR
    
    console.release_result(result)
    
    if not result.matched:
        return ExitCode.NO_MATCH
    return ExitCode.SUCCESS


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    
    setup_logging(bool(args.verbose))
    
    try:
        return int(run(args))
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return ExitCode.INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
