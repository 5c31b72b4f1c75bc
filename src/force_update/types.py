"""Type aliases needed in the package."""

from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import TYPE_CHECKING, TypeAlias

from .platform import PlatformKind

if TYPE_CHECKING:
    from .lifecycle import LifecycleState
    from .package_info import PackageInfo
    from .prompter import PromptOutcome

StoreUrl: TypeAlias = str

FetchRequiredVersion: TypeAlias = Callable[[], Awaitable[str]]
ShowPrompt: TypeAlias = Callable[
    [bool], Awaitable["PromptOutcome | bool | str | None"]
]
OpenStoreListing: TypeAlias = Callable[[StoreUrl], Awaitable[None]]
ExceptionHandler: TypeAlias = Callable[[Exception, TracebackType | None], None]

PlatformAccessor: TypeAlias = Callable[[], PlatformKind]
PackageInfoLoader: TypeAlias = Callable[
    [], "PackageInfo | Awaitable[PackageInfo]"
]
LifecycleListener: TypeAlias = Callable[["LifecycleState"], Awaitable[None]]
