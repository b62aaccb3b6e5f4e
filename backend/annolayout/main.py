"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from annolayout.config import get_settings
from annolayout.deps import get_layout_service
from annolayout.routers import layout

logger = logging.getLogger("annolayout")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = get_layout_service().config
    logger.info(
        "Started %s (max_iterations=%d, step=%d, margin=%s)",
        settings.app_name, config.max_iterations, config.step_size, config.margin_from_bounds,
    )
    yield
    logger.info("Shutting down %s", settings.app_name)


settings = get_settings()

app = FastAPI(
    title="AnnoLayout API",
    version=settings.version,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins if not settings.debug else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Register routers
app.include_router(layout.router)


@app.get("/health")
async def health_check() -> dict:
    return {"status": "healthy", "version": settings.version}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("annolayout.main:app", host="0.0.0.0", port=8001, reload=True)
