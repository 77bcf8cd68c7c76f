"""
MugShop - Custom Mug Shop Back Office
FastAPI Application Entry Point
"""
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from sqlalchemy.exc import DisconnectionError, OperationalError
import logging
import os

from mugshop.core import settings, engine, Base, dispose_engine
from mugshop.core.exceptions import MugShopError
from mugshop.core.logging_config import setup_logging
from mugshop.api.router import api_router
import mugshop.models  # noqa: F401  (register tables on Base.metadata)

logger = logging.getLogger("mugshop")

# Lifespan for startup/shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Create tables if not exist
    setup_logging()
    Base.metadata.create_all(bind=engine)
    logger.info(f"{settings.APP_NAME} starting on port {settings.APP_PORT}")

    yield

    # Shutdown
    dispose_engine()
    logger.info(f"{settings.APP_NAME} shutting down")

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Catalog, Stock, Orders & Design Uploads for a Custom Mug Shop",
    version="1.0.0",
    lifespan=lifespan
)

# Serve locally stored design uploads
if settings.STORAGE_BACKEND.lower() == "local":
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

# Error translation
@app.exception_handler(MugShopError)
async def mugshop_error_handler(request: Request, exc: MugShopError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "error": exc.code})

@app.exception_handler(OperationalError)
@app.exception_handler(DisconnectionError)
async def persistence_error_handler(request: Request, exc: Exception):
    logger.error(f"{request.method} {request.url.path} database unavailable: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": "Database unavailable", "error": "persistence_unavailable"}
    )

# Include routers
app.include_router(api_router, prefix="/api")

# Health check
@app.get("/health")
async def health_check():
    return {"status": "healthy", "app": settings.APP_NAME}

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.APP_PORT,
        reload=settings.DEBUG
    )
