# ABOUTME: Dependency container for the dashboard using Pydantic BaseModel.
# ABOUTME: Holds the httpx.AsyncClient, settings, and persisted-state store shared by the fetchers.

import httpx
from pydantic import BaseModel, ConfigDict

from tnradar.config import Settings
from tnradar.store import JsonFileStore, KeyValueStore, MemoryStore


class DashboardDeps(BaseModel):
    """Collaborators injected into the dashboard."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    settings: Settings
    store: KeyValueStore


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create an httpx client with the configured timeout and User-Agent.

    No retry transport: a failed request is reported once and the user re-triggers.
    """
    return httpx.AsyncClient(
        timeout=settings.http_timeout,
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    )


def create_store(settings: Settings) -> KeyValueStore:
    if settings.state_file is None:
        return MemoryStore()
    return JsonFileStore(settings.state_file)


def create_deps(settings: Settings) -> DashboardDeps:
    return DashboardDeps(
        http_client=create_http_client(settings),
        settings=settings,
        store=create_store(settings),
    )
