"""
jira-version-release - Release JIRA versions at the end of a CI build.

Marks the unreleased JIRA version matching a finished build as released
and creates the version for the next build.
"""

__version__ = "1.2.0"
