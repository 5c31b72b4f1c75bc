"""force_update - block outdated app builds behind an update prompt.

Decides on app start and resume whether the running build is older than a
remotely declared minimum version, and keeps prompting the user until they
update or, if allowed, dismiss the prompt.
"""

from ._version import __version__
from .client import ForceUpdateClient
from .config import ForceUpdateConfig, load_config
from .exceptions import (
    ConfigError,
    FetchError,
    ForceUpdateError,
    PromptError,
    StoreOpenError,
    VersionParseError,
)
from .lifecycle import AppLifecycle, LifecycleState
from .package_info import PackageInfo, PackageInfoCache, shared_package_info
from .platform import PlatformKind, current_platform
from .prompter import PromptOutcome, PromptState, UpdatePrompter, transition
from .semantic_version import SemanticVersion
from .types import (
    ExceptionHandler,
    FetchRequiredVersion,
    OpenStoreListing,
    ShowPrompt,
)
from .version_gate import DecisionKind, GateDecision, evaluate, store_url

__all__ = [
    "AppLifecycle",
    "ConfigError",
    "DecisionKind",
    "ExceptionHandler",
    "FetchError",
    "FetchRequiredVersion",
    "ForceUpdateClient",
    "ForceUpdateConfig",
    "ForceUpdateError",
    "GateDecision",
    "LifecycleState",
    "OpenStoreListing",
    "PackageInfo",
    "PackageInfoCache",
    "PlatformKind",
    "PromptError",
    "PromptOutcome",
    "PromptState",
    "SemanticVersion",
    "ShowPrompt",
    "StoreOpenError",
    "UpdatePrompter",
    "VersionParseError",
    "__version__",
    "current_platform",
    "evaluate",
    "load_config",
    "shared_package_info",
    "store_url",
    "transition",
]
