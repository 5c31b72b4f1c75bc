"""Models the semantic versions compared by the gate."""

import re
from dataclasses import dataclass, field
from typing import Self

from .exceptions import VersionParseError

_PREFIX_PATTERN = re.compile(r"\d+\.\d+\.\d+")
_IDENTIFIERS = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"
_VERSION_PATTERN = re.compile(
    rf"(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    rf"(?:-(?P<pre_release>{_IDENTIFIERS}))?"
    rf"(?:\+(?P<build>{_IDENTIFIERS}))?"
)


@dataclass(frozen=True, order=True)
class SemanticVersion:
    """Semantic version representation.

    Only the numeric triple takes part in ordering and equality. Pre-release
    and build metadata are kept for display.

    Attributes:
        major: Major version number.
        minor: Minor version number.
        patch: Patch version number.
        pre_release: Pre-release identifiers without the leading "-".
        build: Build metadata without the leading "+".
    """

    major: int
    minor: int
    patch: int
    pre_release: str = field(default="", compare=False)
    build: str = field(default="", compare=False)

    def __post_init__(self: Self) -> None:
        """Reject negative components."""
        if self.major < 0 or self.minor < 0 or self.patch < 0:
            raise VersionParseError(f"Invalid version: {self}")

    @classmethod
    def parse(cls, version_str: str) -> Self:
        """Parse a semantic version string.

        Args:
            version_str: Version string in format "major.minor.patch", with an
                optional "-pre.release" and "+build" suffix.

        Returns:
            Parsed SemanticVersion instance.

        Raises:
            VersionParseError: If the version string format is invalid.
        """
        match = _VERSION_PATTERN.fullmatch(version_str)
        if match is None:
            raise VersionParseError(f"Invalid version format: {version_str!r}")

        try:
            major = int(match["major"])
            minor = int(match["minor"])
            patch = int(match["patch"])
        except ValueError as e:
            raise VersionParseError(
                f"Invalid version format: {version_str[:32]!r}..."
            ) from e

        return cls(
            major,
            minor,
            patch,
            pre_release=match["pre_release"] or "",
            build=match["build"] or "",
        )

    @property
    def core(self: Self) -> tuple[int, int, int]:
        """The (major, minor, patch) triple."""
        return (self.major, self.minor, self.patch)

    def __str__(self: Self) -> str:
        """Return string representation of version.

        Returns:
            Version string in format "major.minor.patch[-pre][+build]".
        """
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre_release:
            text += f"-{self.pre_release}"
        if self.build:
            text += f"+{self.build}"
        return text

    def __repr__(self: Self) -> str:
        """Return detailed string representation.

        Returns:
            Detailed version representation.
        """
        return f"SemanticVersion({self.major}, {self.minor}, {self.patch})"


def extract_version_prefix(raw: str) -> str | None:
    """Return the leading "major.minor.patch" of a version string.

    Trailing text such as build metadata is ignored, so "1.2.3+456" gives
    "1.2.3". Returns None if the string does not start with a version.
    """
    match = _PREFIX_PATTERN.match(raw)
    return match.group(0) if match else None
