"""
Exit Codes - Process exit status of the CLI.

CI jobs use these to decide whether a post-build step failed.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes returned by main()."""
    
    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    CONNECTION_ERROR = 3
    REMOTE_ERROR = 4
    NO_MATCH = 5
    INTERRUPTED = 130
