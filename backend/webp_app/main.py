"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from webp_app.api.routes import router
from webp_app.config import CORS_ORIGINS, logger as config_logger
from webp_app.conversion.service import shutdown_conversion_service

logging.getLogger("uvicorn").setLevel(logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config_logger.info("WebP converter API started")
    yield
    shutdown_conversion_service()
    config_logger.info("WebP converter API shutting down")


app = FastAPI(
    title="WebP Converter API",
    description="Convert uploaded images to WebP with a chosen quality and get the result inline.",
    version="1.0.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS if CORS_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Keep every error body in the {"error": ...} shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


app.include_router(router)


def run() -> None:
    import uvicorn
    from webp_app.config import HOST, PORT
    uvicorn.run("webp_app.main:app", host=HOST, port=PORT)


if __name__ == "__main__":
    run()
