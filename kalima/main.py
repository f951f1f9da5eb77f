"""
Kalima Backend - Main FastAPI Application
"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
import time

from kalima.config import settings
from kalima.api.route_table import build_route_table
from kalima.api.routes import (
    admin,
    articles,
    auth,
    categories,
    favorites,
    pages,
    preferences,
    search,
    suggestions,
    views,
)
from kalima.exceptions import ContentNotFoundError, FetchFailureError, TranslationValidationError
from kalima.services.views import view_service

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan handler for startup and shutdown events"""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    # Route table is built once and shared by the view dispatcher
    route_table = build_route_table()
    app.state.route_table = route_table
    view_service.route_table = route_table
    logger.info(f"Route table ready ({len(route_table.routes)} routes)")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Kalima Backend API - multilingual articles for language learners",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time to response headers"""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.exception_handler(ContentNotFoundError)
async def not_found_handler(request: Request, exc: ContentNotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc), "kind": exc.kind, "backLink": exc.parent_path},
    )


@app.exception_handler(FetchFailureError)
async def fetch_failure_handler(request: Request, exc: FetchFailureError):
    logger.error(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "detail": "Content store unavailable",
            "message": str(exc) if settings.DEBUG else "An error occurred",
        },
    )


@app.exception_handler(TranslationValidationError)
async def validation_failure_handler(request: Request, exc: TranslationValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": "Translation validation failed", "problems": exc.problems},
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions"""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "message": str(exc) if settings.DEBUG else "An error occurred",
        },
    )


app.include_router(auth.router)
app.include_router(articles.router)
app.include_router(categories.router)
app.include_router(pages.router)
app.include_router(search.router)
app.include_router(favorites.router)
app.include_router(suggestions.router)
app.include_router(preferences.router)
app.include_router(admin.router)
app.include_router(views.router)


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check endpoint"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "debug_mode": settings.DEBUG,
        "firebase_configured": bool(settings.FIREBASE_CREDENTIALS_JSON or settings.FIREBASE_CREDENTIALS_PATH),
        "features": {
            "authentication": bool(settings.FIREBASE_WEB_API_KEY),
            "image_search": bool(settings.UNSPLASH_ACCESS_KEY),
        },
    }


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - API health check"""
    return {
        "status": "online",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "kalima.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG
    )
