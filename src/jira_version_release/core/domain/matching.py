"""
Version Matching - Pick the in-flight version that belongs to a build.

A version belongs to build N when its whole name matches the naming
pattern followed by N, e.g. pattern ``REL-`` selects ``REL-10`` for
build 10 but neither ``REL-9`` nor ``REL-100``.
"""

import logging
import re
from typing import Iterable, Optional

from .entities import RemoteVersion, VersionMatch


logger = logging.getLogger("VersionMatching")


def build_full_pattern(name_pattern: str, build_number: int) -> str:
    """
    Build the expression a version name must fully match.
    
    No separator is inserted between pattern and build number; the
    pattern has to carry it.
    """
    if build_number < 0:
        raise ValueError(f"Build number must not be negative: {build_number}")
    return f"{name_pattern}{build_number}"


def select_version(
    versions: Iterable[RemoteVersion],
    name_pattern: str,
    build_number: int,
) -> Optional[VersionMatch]:
    """
    Select the version matching a build.
    
    Versions are scanned in the given order. Released and archived
    versions are skipped. The first version whose name fully matches
    ``name_pattern + build_number`` wins, any later match is ignored.
    
    Args:
        versions: Versions in the order returned by the tracker
        name_pattern: Regular expression matching the name prefix
        build_number: Number of the finished build
        
    Returns:
        VersionMatch with the captured prefix, or None if nothing matches
        
    Raises:
        ValueError: If build_number is negative
        re.error: If name_pattern is not a valid regular expression
    """
    full_regex = re.compile(build_full_pattern(name_pattern, build_number))
    prefix_regex = re.compile(name_pattern)
    
    for version in versions:
        if not version.is_in_flight:
            logger.debug(f"Skipping {version.name}: released or archived")
            continue
        
        if not full_regex.fullmatch(version.name):
            continue
        
        prefix = prefix_regex.search(version.name)
        if prefix is not None:
            logger.debug(f"Matched {version.name} with prefix '{prefix.group(0)}'")
            return VersionMatch(version=version, prefix=prefix.group(0))
    
    return None


def next_version_name(prefix: str, build_number: int) -> str:
    """Name of the version following build_number."""
    return f"{prefix}{build_number + 1}"
