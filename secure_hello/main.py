import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from .config import Settings, resolve_api_key

logger = logging.getLogger(__name__)

GREETING = "Hello, Secure Go World!"


class Greeting:
    """Answers every request, whatever its method or path, with the greeting."""

    async def __call__(self, scope, receive, send) -> None:
        request = Request(scope, receive)
        api_key = resolve_api_key(request.app.state.settings)
        logger.info("Request received. Using key (don't log keys!): %s", api_key)
        response = PlainTextResponse(GREETING)
        await response(scope, receive, send)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    app = FastAPI(
        title="Secure Hello",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings if settings is not None else Settings.from_env()

    # An ASGI endpoint rather than a function, so the route has no method list.
    app.add_route("/{path:path}", Greeting())

    return app
