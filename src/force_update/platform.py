"""Detection of the platform the application runs on."""

import functools
import logging
import os
import sys
from enum import Enum
from typing import Self

logger = logging.getLogger(__name__)

PLATFORM_ENV_VAR = "FORCE_UPDATE_PLATFORM"


class PlatformKind(str, Enum):
    """Platforms an application build can run on."""

    IOS = "ios"
    ANDROID = "android"
    WEB = "web"
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    OTHER = "other"

    @property
    def is_gated(self: Self) -> bool:
        """Whether forced updates are enforced on this platform.

        Only mobile store platforms have a store listing to send users to.
        """
        return self in (PlatformKind.IOS, PlatformKind.ANDROID)

    @classmethod
    def from_sys_platform(cls, value: str) -> "PlatformKind":
        """Map a ``sys.platform`` value to a platform kind.

        Args:
            value: A ``sys.platform`` style identifier.

        Returns:
            The matching platform, or OTHER if unknown.
        """
        if value == "ios":
            return cls.IOS
        if value == "android":
            return cls.ANDROID
        if value in ("emscripten", "wasi"):
            return cls.WEB
        if value in ("win32", "cygwin"):
            return cls.WINDOWS
        if value == "darwin":
            return cls.MACOS
        if value.startswith("linux"):
            return cls.LINUX
        return cls.OTHER


def detect_platform() -> PlatformKind:
    """Detect the platform from the environment and the interpreter.

    The ``FORCE_UPDATE_PLATFORM`` environment variable takes precedence.
    Interpreters older than 3.13 on Android report "linux", so Android is also
    recognized by ``sys.getandroidapilevel``.
    """
    override = os.environ.get(PLATFORM_ENV_VAR, "").strip().lower()
    if override:
        try:
            return PlatformKind(override)
        except ValueError:
            logger.warning(
                "Ignoring unknown %s value: %r", PLATFORM_ENV_VAR, override
            )

    if hasattr(sys, "getandroidapilevel"):
        return PlatformKind.ANDROID
    return PlatformKind.from_sys_platform(sys.platform)


@functools.cache
def current_platform() -> PlatformKind:
    """Return the platform of this process.

    Detected on first access and cached for the lifetime of the process.
    """
    platform = detect_platform()
    logger.debug("Detected platform: %s", platform.value)
    return platform
