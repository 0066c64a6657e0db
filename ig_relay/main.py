"""FastAPI application initialization."""

from contextlib import asynccontextmanager

import logfire
import sentry_sdk
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from starlette.exceptions import HTTPException as StarletteHTTPException

from ig_relay import __version__
from ig_relay.api import webhook
from ig_relay.config import get_settings
from ig_relay.logging_config import redact_tokens, setup_logfire
from ig_relay.middleware.correlation_id import CorrelationIDMiddleware
from ig_relay.services.conversation_store import InMemoryConversationStore
from ig_relay.services.message_processor import get_message_processor


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the conversation store and message processor for this process."""
    settings = get_settings()

    setup_logfire(app, settings)

    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            traces_sample_rate=settings.sentry_traces_sample_rate,
            environment=settings.env,
            integrations=[FastApiIntegration()],
        )

    store = InMemoryConversationStore()
    app.state.conversation_store = store
    app.state.message_processor = get_message_processor(settings, store)

    logfire.info(
        "Application startup complete",
        environment=settings.env,
        settings=redact_tokens(settings.model_dump()),
    )

    yield

    logfire.info(
        "Application shutdown complete",
        conversation_count=len(store),
    )


app = FastAPI(
    title="Instagram DM Relay",
    description="Instagram messaging webhook that replies to direct messages",
    version=__version__,
    lifespan=lifespan,
    # Only the webhook routes are served
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

app.add_middleware(CorrelationIDMiddleware)

app.include_router(webhook.router, prefix="/webhooks", tags=["webhook"])


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """Answer unknown paths and unsupported methods alike with 404."""
    if exc.status_code in (404, 405):
        return PlainTextResponse("Not Found", status_code=404)
    return await http_exception_handler(request, exc)


def run() -> None:
    """Serve the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "ig_relay.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.env == "local",
    )


if __name__ == "__main__":
    run()
