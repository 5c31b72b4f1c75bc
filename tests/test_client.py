"""Tests ForceUpdateClient."""

from collections.abc import Callable

import pytest

from force_update import (
    DecisionKind,
    FetchError,
    ForceUpdateClient,
    ForceUpdateConfig,
    PackageInfo,
    PackageInfoCache,
    PlatformKind,
)

from .conftest import APP_STORE_ID, PACKAGE_ID, FakeStore

ClientFactory = Callable[..., ForceUpdateClient]


# Evaluation tests
@pytest.mark.asyncio
async def test_update_required(make_client: ClientFactory) -> None:
    """Test an older installed build requires an update."""
    client = make_client(PlatformKind.ANDROID)
    decision = await client.evaluate()
    assert decision.kind is DecisionKind.UPDATE_REQUIRED
    assert await client.is_app_update_required()


@pytest.mark.asyncio
async def test_no_update_needed(make_client: ClientFactory, store: FakeStore) -> None:
    """Test a current build passes."""
    store.required_version = "1.2.3"
    client = make_client(PlatformKind.IOS)
    assert (await client.evaluate()).kind is DecisionKind.NO_UPDATE_NEEDED
    assert not await client.is_app_update_required()


@pytest.mark.asyncio
async def test_unset_required_version(
    make_client: ClientFactory, store: FakeStore
) -> None:
    """Test an empty remote value does not require an update."""
    store.required_version = ""
    decision = await make_client().evaluate()
    assert decision.kind is DecisionKind.INDETERMINATE


@pytest.mark.asyncio
@pytest.mark.parametrize("platform", [PlatformKind.WEB, PlatformKind.LINUX])
async def test_not_gated_platform_skips_fetch(
    make_client: ClientFactory, store: FakeStore, platform: PlatformKind
) -> None:
    """Test non-mobile platforms never fetch the required version."""
    decision = await make_client(platform).evaluate()
    assert decision.kind is DecisionKind.NOT_APPLICABLE
    assert store.fetch_count == 0


@pytest.mark.asyncio
async def test_fetch_failure_wrapped(
    make_client: ClientFactory, store: FakeStore
) -> None:
    """Test transport errors surface as FetchError."""
    error = ConnectionError("offline")
    store.fetch_error = error
    with pytest.raises(FetchError, match="offline") as exc_info:
        await make_client().evaluate()
    assert exc_info.value.__cause__ is error


@pytest.mark.asyncio
async def test_fetch_error_not_rewrapped(
    make_client: ClientFactory, store: FakeStore
) -> None:
    """Test a FetchError from the fetcher passes through unchanged."""
    error = FetchError("remote config unavailable")
    store.fetch_error = error
    with pytest.raises(FetchError) as exc_info:
        await make_client().evaluate()
    assert exc_info.value is error


@pytest.mark.asyncio
async def test_package_info_failure_wrapped(store: FakeStore) -> None:
    """Test package info errors surface as FetchError."""

    def loader() -> PackageInfo:
        raise OSError("no metadata")

    client = ForceUpdateClient(
        store.fetch_required_version,
        APP_STORE_ID,
        loader,
        platform=lambda: PlatformKind.ANDROID,
    )
    with pytest.raises(FetchError, match="package info"):
        await client.evaluate()


# Store URL tests
@pytest.mark.asyncio
async def test_store_url_ios(make_client: ClientFactory) -> None:
    """Test the iOS URL uses the App Store identifier."""
    url = await make_client(PlatformKind.IOS).store_url()
    assert url == f"https://apps.apple.com/app/id{APP_STORE_ID}"


@pytest.mark.asyncio
async def test_store_url_ios_without_id(make_client: ClientFactory) -> None:
    """Test iOS without an App Store identifier has no URL."""
    assert await make_client(PlatformKind.IOS, ios_app_store_id="").store_url() is None


@pytest.mark.asyncio
async def test_store_url_android_uses_package_id(make_client: ClientFactory) -> None:
    """Test the Android URL uses the installed package identifier."""
    url = await make_client(PlatformKind.ANDROID).store_url()
    assert url == f"https://play.google.com/store/apps/details?id={PACKAGE_ID}"


@pytest.mark.asyncio
async def test_store_url_android_override(
    store: FakeStore, package_info: PackageInfo
) -> None:
    """Test an explicit package name wins over the package info."""
    client = ForceUpdateClient(
        store.fetch_required_version,
        "",
        lambda: package_info,
        android_package_name="org.example.other",
        platform=lambda: PlatformKind.ANDROID,
    )
    url = await client.store_url()
    assert url == "https://play.google.com/store/apps/details?id=org.example.other"


@pytest.mark.asyncio
async def test_store_url_desktop(make_client: ClientFactory) -> None:
    """Test desktop platforms have no store URL."""
    assert await make_client(PlatformKind.MACOS).store_url() is None


# Construction tests
@pytest.mark.asyncio
async def test_shares_given_cache(store: FakeStore, package_info: PackageInfo) -> None:
    """Test clients share a cache passed to them."""
    calls: list[int] = []

    def loader() -> PackageInfo:
        calls.append(1)
        return package_info

    cache = PackageInfoCache(loader)
    clients = [
        ForceUpdateClient(
            store.fetch_required_version,
            APP_STORE_ID,
            cache,
            platform=lambda: PlatformKind.ANDROID,
        )
        for _ in range(2)
    ]
    for client in clients:
        await client.evaluate()
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_from_config(store: FakeStore, package_info: PackageInfo) -> None:
    """Test creating a client from configuration."""
    config = ForceUpdateConfig(
        ios_app_store_id="42",
        android_package_name="com.example.configured",
        platform=PlatformKind.IOS,
    )
    client = ForceUpdateClient.from_config(
        config, store.fetch_required_version, lambda: package_info
    )
    assert client.platform is PlatformKind.IOS
    assert client.android_package_name == "com.example.configured"
    assert await client.store_url() == "https://apps.apple.com/app/id42"
