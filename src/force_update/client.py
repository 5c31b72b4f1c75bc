"""Client deciding whether a forced update is required."""

import logging
from typing import TYPE_CHECKING, Self

from .exceptions import FetchError, ForceUpdateError
from .package_info import PackageInfo, PackageInfoCache
from .platform import PlatformKind, current_platform
from .types import FetchRequiredVersion, PackageInfoLoader, PlatformAccessor
from .version_gate import GateDecision, evaluate, store_url

if TYPE_CHECKING:
    from .config import ForceUpdateConfig

logger = logging.getLogger(__name__)


class ForceUpdateClient:
    """Checks whether a forced upgrade is required for the app.

    Compares the installed version with the required version fetched from a
    remote source, and builds the store URL for the current platform.

    Attributes:
        ios_app_store_id: App Store identifier used to build the iOS URL.
        android_package_name: Play Store package name. Defaults to the
            package identifier from the package info.

    Example:
        ```python
        async def fetch_required_version() -> str:
            return remote_config["required_version"]

        client = ForceUpdateClient(
            fetch_required_version,
            ios_app_store_id="123456789",
            package_info=shared_package_info("my-app"),
        )
        if await client.is_app_update_required():
            ...
        ```
    """

    def __init__(  # noqa: PLR0913
        self: Self,
        fetch_required_version: FetchRequiredVersion,
        ios_app_store_id: str,
        package_info: PackageInfoCache | PackageInfoLoader,
        *,
        android_package_name: str | None = None,
        platform: PlatformAccessor = current_platform,
    ) -> None:
        """Initialize the client.

        Args:
            fetch_required_version: Async callable returning the required
                version string. An empty string means "not configured".
            ios_app_store_id: App Store identifier, may be empty.
            package_info: Cache or loader for the installed package info.
            android_package_name: Overrides the Play Store package name.
            platform: Returns the platform the app runs on.
        """
        self._fetch_required_version = fetch_required_version
        self.ios_app_store_id = ios_app_store_id
        self.android_package_name = android_package_name
        self._platform = platform
        self._package_info = (
            package_info
            if isinstance(package_info, PackageInfoCache)
            else PackageInfoCache(package_info)
        )

    @classmethod
    def from_config(
        cls,
        config: "ForceUpdateConfig",
        fetch_required_version: FetchRequiredVersion,
        package_info: PackageInfoCache | PackageInfoLoader,
    ) -> Self:
        """Create a client from a loaded configuration.

        Args:
            config: Loaded configuration.
            fetch_required_version: Async callable returning the required version.
            package_info: Cache or loader for the installed package info.

        Returns:
            Configured client.
        """
        platform = config.platform
        return cls(
            fetch_required_version,
            config.ios_app_store_id,
            package_info,
            android_package_name=config.android_package_name,
            platform=(lambda: platform) if platform else current_platform,
        )

    @property
    def platform(self: Self) -> PlatformKind:
        """Platform the app runs on."""
        return self._platform()

    async def package_info(self: Self) -> PackageInfo:
        """Return the cached package info.

        Raises:
            FetchError: If the package info cannot be loaded.
        """
        try:
            return await self._package_info.get()
        except ForceUpdateError:
            raise
        except Exception as e:
            raise FetchError(f"Failed to read package info: {e}") from e

    async def fetch_required_version(self: Self) -> str:
        """Fetch the required version string from the remote source.

        Raises:
            FetchError: If the remote source fails.
        """
        try:
            return await self._fetch_required_version()
        except ForceUpdateError:
            raise
        except Exception as e:
            raise FetchError(f"Failed to fetch required version: {e}") from e

    async def evaluate(self: Self) -> GateDecision:
        """Evaluate the gate for the running build.

        Platforms that are never gated return without fetching anything.

        Returns:
            The gate decision.

        Raises:
            FetchError: If the required version or package info cannot be read.
        """
        platform = self.platform
        if not platform.is_gated:
            return GateDecision.not_applicable()

        required_version = await self.fetch_required_version()
        info = await self.package_info()
        return evaluate(required_version, info.version, platform)

    async def is_app_update_required(self: Self) -> bool:
        """Check whether a forced app update is required.

        Returns:
            True if the installed build is older than the required version.
        """
        return (await self.evaluate()).update_required

    async def store_url(self: Self) -> str | None:
        """Return the store URL for the current platform.

        Returns:
            The listing URL, or None if the platform has no store listing or
            no App Store identifier is configured.
        """
        platform = self.platform
        if platform is PlatformKind.ANDROID:
            package_name = self.android_package_name
            if package_name is None:
                package_name = (await self.package_info()).package_id
            return store_url(platform, self.ios_app_store_id, package_name)
        return store_url(platform, self.ios_app_store_id, "")
