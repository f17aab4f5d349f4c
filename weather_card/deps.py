# ABOUTME: Dependency container for the weather card using Pydantic BaseModel.
# ABOUTME: Holds the settings and the shared httpx.AsyncClient used for provider calls.

import httpx
from pydantic import BaseModel, ConfigDict

from weather_card.config import Settings


class WeatherDeps(BaseModel):
    """Dependencies injected into the controller."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    settings: Settings
    http_client: httpx.AsyncClient


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the httpx client shared by all three provider requests.

    No retry transport is installed; a failed fetch is only repeated when the user resubmits.
    """
    return httpx.AsyncClient(timeout=settings.http_timeout)
