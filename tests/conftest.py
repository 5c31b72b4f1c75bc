"""Shared fixtures for force_update tests."""

import asyncio
import sys
from collections.abc import Callable, Iterator
from typing import Any, Self

import pytest

from force_update import (
    AppLifecycle,
    ForceUpdateClient,
    PackageInfo,
    PlatformKind,
    PromptOutcome,
    UpdatePrompter,
)

PACKAGE_ID = "com.example.app"
APP_STORE_ID = "123456789"
INT_MAX_STR_DIGITS = 4300


class FakeStore:
    """Scripted stand-ins for the injected collaborators."""

    def __init__(self: Self) -> None:
        self.required_version = "2.0.0"
        self.fetch_error: Exception | None = None
        self.fetch_count = 0
        self.outcomes: list[PromptOutcome] = []
        self.prompt_calls: list[bool] = []
        self.opened: list[str] = []
        self.prompt_gate: asyncio.Event | None = None

    async def fetch_required_version(self: Self) -> str:
        self.fetch_count += 1
        if self.fetch_error is not None:
            raise self.fetch_error
        return self.required_version

    async def show_prompt(self: Self, allow_cancel: bool) -> PromptOutcome:
        self.prompt_calls.append(allow_cancel)
        if self.prompt_gate is not None:
            await self.prompt_gate.wait()
        return self.outcomes.pop(0)

    async def open_store_listing(self: Self, url: str) -> None:
        self.opened.append(url)


@pytest.fixture
def store() -> FakeStore:
    """Fresh set of fake collaborators."""
    return FakeStore()


@pytest.fixture
def package_info() -> PackageInfo:
    """Package info of an installed 1.2.3 build."""
    return PackageInfo(version="1.2.3+45", package_id=PACKAGE_ID)


@pytest.fixture
def make_client(
    store: FakeStore, package_info: PackageInfo
) -> Callable[..., ForceUpdateClient]:
    """Factory for clients bound to the fake store."""

    def factory(
        platform: PlatformKind = PlatformKind.ANDROID,
        ios_app_store_id: str = APP_STORE_ID,
    ) -> ForceUpdateClient:
        return ForceUpdateClient(
            store.fetch_required_version,
            ios_app_store_id,
            lambda: package_info,
            platform=lambda: platform,
        )

    return factory


@pytest.fixture
def lifecycle() -> AppLifecycle:
    """Lifecycle event source without listeners."""
    return AppLifecycle()


@pytest.fixture
def make_prompter(
    store: FakeStore,
    make_client: Callable[..., ForceUpdateClient],
    lifecycle: AppLifecycle,
) -> Callable[..., UpdatePrompter]:
    """Factory for prompters wired to the fake store and lifecycle."""

    def factory(
        allow_cancel: bool = False,
        platform: PlatformKind = PlatformKind.ANDROID,
        **kwargs: Any,
    ) -> UpdatePrompter:
        options: dict[str, Any] = {
            "show_prompt": store.show_prompt,
            "open_store_listing": store.open_store_listing,
            "lifecycle": lifecycle,
            **kwargs,
        }
        return UpdatePrompter(
            make_client(platform), allow_cancel=allow_cancel, **options
        )

    return factory


@pytest.fixture
def int_digit_limit() -> Iterator[int]:
    """Pin the interpreter's int/str conversion limit to its default."""
    previous = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(INT_MAX_STR_DIGITS)
    yield INT_MAX_STR_DIGITS
    sys.set_int_max_str_digits(previous)
