from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.gzip import GZipMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from .api.middleware.basic_auth import BasicAuthMiddleware
from .api.middleware.security import SecurityMiddleware
from .api.v1.router import api_router
from .config import settings
from .core.errors import ModelConfigurationError, ModelGatewayError
from .utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


async def model_configuration_error_handler(_request: Request, exc: ModelConfigurationError):
    return JSONResponse(status_code=500, content={"error": str(exc)})


async def model_gateway_error_handler(_request: Request, exc: ModelGatewayError):
    return JSONResponse(status_code=500, content={"error": str(exc)})


def _validation_message(exc: RequestValidationError) -> str:
    messages = []
    for err in exc.errors():
        msg = str(err.get("msg", "Invalid request"))
        messages.append(msg.removeprefix("Value error, "))
    return "; ".join(messages) or "Invalid request"


async def chat_validation_error_handler(request: Request, exc: RequestValidationError):
    """Chat routes answer `{"error": ...}`; other routes keep FastAPI's `detail` body."""
    if request.url.path.endswith("/chat"):
        return JSONResponse(status_code=422, content={"error": _validation_message(exc)})
    return await request_validation_exception_handler(request, exc)


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title="Reply Advisor API",
        debug=settings.debug,
        version="0.1.0",
        root_path=settings.root_path or "",
    )

    app.add_exception_handler(ModelConfigurationError, model_configuration_error_handler)
    app.add_exception_handler(ModelGatewayError, model_gateway_error_handler)
    app.add_exception_handler(RequestValidationError, chat_validation_error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=[
            "Accept",
            "Accept-Language",
            "Content-Language",
            "Content-Type",
            "Authorization",
            "X-Requested-With",
        ],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Proxy headers (X-Forwarded-*) when behind a reverse proxy
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

    # Trusted hosts (configure in env for production)
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)

    # GZip compression
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Every request, CORS preflight and health checks included, passes basic auth.
    # Added after CORS so it wraps it, and before SecurityMiddleware so 401/500
    # responses still get the security headers.
    app.add_middleware(BasicAuthMiddleware)

    app.add_middleware(SecurityMiddleware)

    app.include_router(api_router, prefix=settings.api_prefix)
    logger.info("Application created", extra={"api_prefix": settings.api_prefix, "model": settings.reply_model})
    return app


app = create_app()
