# ABOUTME: ASGI web entry point exposing the weather card's actions as JSON endpoints.
# ABOUTME: Builds a Starlette app around one WeatherController and its shared HTTP client.

import json
import logging
from contextlib import asynccontextmanager

import httpx
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from weather_card.config import Settings, load_settings
from weather_card.controller import WeatherController
from weather_card.deps import WeatherDeps, create_http_client

logger = logging.getLogger(__name__)


def create_app(settings: Settings, client: httpx.AsyncClient | None = None) -> Starlette:
    """Build the Starlette app.

    When no client is passed one is created and closed with the app's lifespan.
    """
    owns_client = client is None
    http_client = client if client is not None else create_http_client(settings)
    controller = WeatherController(WeatherDeps(settings=settings, http_client=http_client))

    async def state(request: Request) -> JSONResponse:
        return JSONResponse(controller.snapshot())

    async def search(request: Request) -> JSONResponse:
        try:
            body = json.loads(await request.body() or b"{}")
        except ValueError:
            # JSONDecodeError and UnicodeDecodeError
            return JSONResponse({"error": "Request body must be JSON"}, status_code=400)
        if not isinstance(body, dict):
            return JSONResponse({"error": "Request body must be a JSON object"}, status_code=400)

        query = body.get("query")
        if query is not None and not isinstance(query, str):
            return JSONResponse({"error": "'query' must be a string"}, status_code=400)

        await controller.submit(query)
        return JSONResponse(controller.snapshot())

    async def select_day(request: Request) -> JSONResponse:
        day = request.path_params["day"]
        try:
            controller.select_day(day)
        except KeyError:
            return JSONResponse({"error": f"No forecast for {day}"}, status_code=404)
        return JSONResponse(controller.snapshot())

    async def close_detail(request: Request) -> JSONResponse:
        controller.close_detail()
        return JSONResponse(controller.snapshot())

    async def toggle_theme(request: Request) -> JSONResponse:
        controller.toggle_theme()
        return JSONResponse(controller.snapshot())

    async def notifications(request: Request) -> JSONResponse:
        return JSONResponse([n.model_dump() for n in controller.drain_notifications()])

    @asynccontextmanager
    async def lifespan(app):
        yield
        if owns_client:
            await http_client.aclose()

    app = Starlette(
        routes=[
            Route("/api/state", state, methods=["GET"]),
            Route("/api/search", search, methods=["POST"]),
            Route("/api/days/{day}/select", select_day, methods=["POST"]),
            Route("/api/detail/close", close_detail, methods=["POST"]),
            Route("/api/theme/toggle", toggle_theme, methods=["POST"]),
            Route("/api/notifications", notifications, methods=["GET"]),
        ],
        lifespan=lifespan,
    )
    app.state.controller = controller
    return app


_app: Starlette | None = None


def get_app() -> Starlette:
    """Module-level app, built from the environment on first use."""
    global _app
    if _app is None:
        _app = create_app(load_settings())
        logger.info("Weather card app created")
    return _app


async def app(scope, receive, send):
    """ASGI callable for servers, e.g. `uvicorn weather_card.web:app`."""
    await get_app()(scope, receive, send)
