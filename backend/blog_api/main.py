"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blog_api.config import get_settings
from blog_api.infrastructure.dependencies import get_chat_provider
from blog_api.infrastructure.logging.log_config import setup_logging
from blog_api.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging and resolve the chat provider."""
    settings = get_settings()
    setup_logging()

    # Fail fast on an unknown LLM_PROVIDER
    provider = get_chat_provider()
    logger.info(
        "%s v%s starting (env=%s, provider=%s)",
        settings.app_title,
        settings.app_version,
        settings.app_env,
        provider.provider_name,
    )

    yield

    logger.info("Shutting down — in-memory articles are discarded")


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies as 400 with ``{error, message}``."""
    if request.url.path.endswith("/generate-articles"):
        error = "Please provide an array of titles"
    else:
        error = "Invalid request body"
    message = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": error, "message": message},
    )


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(api_router)

    return app


app = create_app()


def run() -> None:
    """Console entry point — serve the app with uvicorn on the configured port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "blog_api.main:app",
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
