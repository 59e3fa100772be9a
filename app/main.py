import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routers import chat, itineraries, meta
from app.core.config import settings
from app.core.errors import APIError, error_content
from app.core.logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

_STATUS_CODES = {
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_409_CONFLICT: "TURN_IN_PROGRESS",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Starting %s: itinerary model=%s, enrichment model=%s, model credentials %s, map embeds %s",
        settings.project_name,
        settings.openai_model_itinerary,
        settings.openai_model_enrichment,
        "configured" if settings.openai_api_key else "MISSING",
        "enabled" if settings.google_maps_api_key else "disabled",
    )
    yield
    logger.info("Shutting down %s", settings.project_name)


async def api_error_handler(request: Request, exc: HTTPException):
    if isinstance(exc, APIError):
        if exc.status_code >= 500:
            logger.warning("%s %s failed with %s: %s", request.method, request.url.path, exc.code, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_content(exc.code, str(exc.detail), exc.details),
        )
    code = _STATUS_CODES.get(exc.status_code) or ("VALIDATION_ERROR" if exc.status_code < 500 else "INTERNAL_ERROR")
    return JSONResponse(status_code=exc.status_code, content=error_content(code, str(exc.detail)))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    first_error = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(item) for item in first_error.get("loc", []) if item != "body")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_content(
            "VALIDATION_ERROR",
            "The trip request is malformed.",
            {"field": field, "reason": first_error.get("msg")},
        ),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_content("INTERNAL_ERROR", "Trip planning failed unexpectedly. Please try again."),
    )


def create_app() -> FastAPI:
    application = FastAPI(title=settings.project_name, lifespan=lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in (itineraries.router, chat.router, meta.router):
        application.include_router(router, prefix=settings.api_v1_prefix)

    application.add_exception_handler(HTTPException, api_error_handler)
    application.add_exception_handler(RequestValidationError, request_validation_handler)
    application.add_exception_handler(Exception, unhandled_error_handler)

    @application.get("/health")
    async def health():
        return {
            "status": "ok",
            "modelConfigured": bool(settings.openai_api_key),
            "mapEmbeds": bool(settings.google_maps_api_key),
        }

    return application


app = create_app()
