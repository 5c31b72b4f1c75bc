"""Metadata of the installed application package."""

import asyncio
import inspect
import logging
from importlib import metadata
from typing import Self

from pydantic import BaseModel, ConfigDict

from .exceptions import FetchError
from .types import PackageInfoLoader

logger = logging.getLogger(__name__)


class PackageInfo(BaseModel):
    """Version and identifier of the running application.

    Attributes:
        version: Version string of the installed build, e.g. "1.2.3+45".
        package_id: Store package identifier, e.g. "com.example.app".
    """

    model_config = ConfigDict(frozen=True)

    version: str
    package_id: str

    @classmethod
    def from_distribution(cls, name: str) -> Self:
        """Read package info from an installed Python distribution.

        Args:
            name: Distribution name.

        Returns:
            PackageInfo using the distribution name as package identifier.

        Raises:
            FetchError: If the distribution is not installed.
        """
        try:
            version = metadata.version(name)
        except metadata.PackageNotFoundError as e:
            raise FetchError(f"Distribution {name!r} is not installed") from e
        return cls(version=version, package_id=name)


class PackageInfoCache:
    """Loads package info at most once and shares it with every caller.

    Concurrent first callers wait on the same load. Once loaded, the value
    never changes. A failed load is not remembered, so the next call retries.
    An in-flight load belongs to the event loop that started it; callers on
    another loop start their own load.
    """

    def __init__(self: Self, loader: PackageInfoLoader) -> None:
        """Initialize the cache.

        Args:
            loader: Sync or async callable returning the package info.
        """
        self._loader = loader
        self._value: PackageInfo | None = None
        self._pending: asyncio.Task[PackageInfo] | None = None

    @property
    def loaded(self: Self) -> bool:
        """Whether the package info has been loaded."""
        return self._value is not None

    async def get(self: Self) -> PackageInfo:
        """Return the package info, loading it on first use."""
        if self._value is not None:
            return self._value

        loop = asyncio.get_running_loop()
        pending = self._pending
        if pending is None or pending.get_loop() is not loop:
            pending = loop.create_task(self._load())
            self._pending = pending
        return await asyncio.shield(pending)

    async def _load(self: Self) -> PackageInfo:
        try:
            result = self._loader()
            if inspect.isawaitable(result):
                result = await result
        finally:
            if self._pending is asyncio.current_task():
                self._pending = None

        self._value = result
        logger.debug(
            "Loaded package info: %s %s", result.package_id, result.version
        )
        return result


_shared: dict[str, PackageInfoCache] = {}


def shared_package_info(distribution: str) -> PackageInfoCache:
    """Return the process-wide package info cache for a distribution.

    Args:
        distribution: Name of the installed distribution.

    Returns:
        The same cache instance for every call with the same name.
    """
    cache = _shared.get(distribution)
    if cache is None:
        cache = PackageInfoCache(
            lambda: PackageInfo.from_distribution(distribution)
        )
        _shared[distribution] = cache
    return cache
