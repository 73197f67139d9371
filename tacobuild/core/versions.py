"""
Version parsing and version-gated behavior.

Cordova versions follow npm semantic versioning, which allows pre-release
suffixes that PEP 440 does not (e.g. ``3.6.3-0.2.13``). ``parse_version``
maps those onto ``packaging.version.Version`` so standard comparisons work,
and the two classification functions below are the only places that decide
behavior from a version number.
"""

import re
from enum import Enum
from typing import Optional, Union

from packaging.version import InvalidVersion, Version

from tacobuild.core.exceptions import InvalidVersionError

VersionLike = Union[str, Version]

# Cordova CLI 3.7.0 split the library out as cordova-lib; before that the
# "cordova" package version did not match the library version.
CORDOVA_LIB_MIN_VERSION = Version("3.7.0")

# cordova-ios 3.9.0 and later produce the .ipa during build.
IOS_AUTO_PACKAGE_MIN_VERSION = Version("3.9.0")

_SEMVER_RE = re.compile(
    r"^v?(?P<core>\d+\.\d+\.\d+)"
    r"(?:-(?P<prerelease>[0-9A-Za-z.-]+))?"
    r"(?:\+[0-9A-Za-z.-]+)?$"
)


class ToolchainNaming(Enum):
    """Which npm package a toolchain version is published under."""

    LEGACY = "cordova"
    MODERN = "cordova-lib"

    @property
    def package_name(self) -> str:
        return self.value

    @property
    def nested_attribute(self) -> Optional[str]:
        """Attribute of the loaded module that holds the toolchain, if any."""
        if self is ToolchainNaming.MODERN:
            return "cordova"
        return None


class IpaPackaging(Enum):
    """Whether an installed iOS platform needs a separate ipa step."""

    NEEDS_MANUAL_PACKAGING = "manual"
    AUTO_PACKAGED = "auto"


def parse_version(text: VersionLike) -> Version:
    """
    Parse a semantic version string.

    A pre-release sorts below its release, so ``3.7.0-rc.1 < 3.7.0``.

    Args:
        text: Version string (or an already parsed Version)

    Returns:
        Comparable Version

    Raises:
        InvalidVersionError: If the string is not a version

    Example:
        >>> parse_version("3.6.3-0.2.13") < parse_version("3.7.0")
        True
    """
    if isinstance(text, Version):
        return text

    value = str(text).strip()
    match = _SEMVER_RE.match(value)
    try:
        if match:
            if match.group("prerelease"):
                return Version(f"{match.group('core')}.dev0")
            return Version(match.group("core"))
        return Version(value)
    except InvalidVersion as e:
        raise InvalidVersionError(f"Invalid version: {text!r}") from e


def classify_toolchain(version: VersionLike) -> ToolchainNaming:
    """Pick the package naming scheme for a toolchain version."""
    if parse_version(version) < CORDOVA_LIB_MIN_VERSION:
        return ToolchainNaming.LEGACY
    return ToolchainNaming.MODERN


def classify_ios_platform(version: VersionLike) -> IpaPackaging:
    """Decide whether an installed cordova-ios version needs createIpa."""
    if parse_version(version) < IOS_AUTO_PACKAGE_MIN_VERSION:
        return IpaPackaging.NEEDS_MANUAL_PACKAGING
    return IpaPackaging.AUTO_PACKAGED


__all__ = [
    "CORDOVA_LIB_MIN_VERSION",
    "IOS_AUTO_PACKAGE_MIN_VERSION",
    "ToolchainNaming",
    "IpaPackaging",
    "parse_version",
    "classify_toolchain",
    "classify_ios_platform",
]
