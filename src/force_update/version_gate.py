"""Decides whether the installed build must be upgraded."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Self
from urllib.parse import quote

from .exceptions import VersionParseError
from .platform import PlatformKind
from .semantic_version import SemanticVersion, extract_version_prefix

logger = logging.getLogger(__name__)

APP_STORE_URL = "https://apps.apple.com/app/id"
PLAY_STORE_URL = "https://play.google.com/store/apps/details?id="

REMOTE_VERSION_NOT_SET = "remote version not set"
LOCAL_VERSION_UNPARSABLE = "local version unparsable"
VERSION_PARSE_FAILURE = "version parse failure"


class DecisionKind(str, Enum):
    """Possible outcomes of a gate evaluation."""

    UPDATE_REQUIRED = "update_required"
    NO_UPDATE_NEEDED = "no_update_needed"
    NOT_APPLICABLE = "not_applicable"
    INDETERMINATE = "indeterminate"


@dataclass(frozen=True)
class GateDecision:
    """Result of comparing the installed version against the required one.

    Attributes:
        kind: What the gate decided.
        reason: Why the decision is indeterminate, None otherwise.
        current: Installed version, when it could be parsed.
        required: Required version, when it could be parsed.
    """

    kind: DecisionKind
    reason: str | None = None
    current: SemanticVersion | None = None
    required: SemanticVersion | None = None

    @classmethod
    def not_applicable(cls) -> Self:
        """Decision for platforms that never enforce updates."""
        return cls(DecisionKind.NOT_APPLICABLE)

    @classmethod
    def indeterminate(cls, reason: str) -> Self:
        """Decision for inputs that could not be compared."""
        return cls(DecisionKind.INDETERMINATE, reason)

    @property
    def update_required(self: Self) -> bool:
        """Whether the user must be blocked until they update."""
        return self.kind is DecisionKind.UPDATE_REQUIRED

    def __str__(self: Self) -> str:
        """Return a human readable summary of the decision."""
        if self.kind is DecisionKind.INDETERMINATE:
            return f"indeterminate ({self.reason})"
        if self.kind is DecisionKind.NOT_APPLICABLE:
            return "not applicable"
        return (
            f"{self.kind.value.replace('_', ' ')} "
            f"(current: {self.current}, required: {self.required})"
        )


def evaluate(
    remote_version_raw: str, local_version_raw: str, platform: PlatformKind
) -> GateDecision:
    """Evaluate whether the local build is older than the required version.

    Malformed input never blocks the user: anything that cannot be parsed
    yields an indeterminate decision instead of an error.

    Args:
        remote_version_raw: Minimum version from the remote source, may be empty.
        local_version_raw: Version of the running build. Only its leading
            "major.minor.patch" is used.
        platform: Platform the build runs on.

    Returns:
        The gate decision.

    Example:
        >>> evaluate("1.2.4", "1.2.3+build.7", PlatformKind.ANDROID).update_required
        True
    """
    if not platform.is_gated:
        logger.debug("Forced updates are not enforced on %s", platform.value)
        return GateDecision.not_applicable()

    if not remote_version_raw.strip():
        logger.info("Required version not set. Ignoring.")
        return GateDecision.indeterminate(REMOTE_VERSION_NOT_SET)

    local_prefix = extract_version_prefix(local_version_raw)
    if local_prefix is None:
        logger.warning(
            "Could not extract a valid version from %r", local_version_raw
        )
        return GateDecision.indeterminate(LOCAL_VERSION_UNPARSABLE)

    try:
        required = SemanticVersion.parse(remote_version_raw.strip())
        current = SemanticVersion.parse(local_prefix)
    except VersionParseError as e:
        logger.warning("Version parsing failed: %s", e)
        return GateDecision.indeterminate(VERSION_PARSE_FAILURE)

    if current < required:
        kind = DecisionKind.UPDATE_REQUIRED
    else:
        kind = DecisionKind.NO_UPDATE_NEEDED
    decision = GateDecision(kind, current=current, required=required)
    logger.info("Gate decision: %s", decision)
    return decision


def store_url(
    platform: PlatformKind,
    ios_app_store_id: str,
    android_package_name: str,
) -> str | None:
    """Build the store listing URL for a platform.

    Args:
        platform: Platform the build runs on.
        ios_app_store_id: App Store identifier, may be empty.
        android_package_name: Play Store package name.

    Returns:
        The listing URL, or None when there is no store to send users to.
    """
    if platform is PlatformKind.IOS:
        return APP_STORE_URL + ios_app_store_id if ios_app_store_id else None
    if platform is PlatformKind.ANDROID:
        return PLAY_STORE_URL + quote(android_package_name, safe="")

    logger.debug("No store URL for platform: %s", platform.value)
    return None
