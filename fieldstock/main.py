# fieldstock/main.py
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from fieldstock.config.settings import settings
from fieldstock.config.database import engine
from fieldstock.core.exceptions import InventoryError
from fieldstock.core.middleware import setup_middleware
from fieldstock.api.v1.router import api_router
from fieldstock.shared.database.models import Base
from fieldstock.shared.schemas.common import ErrorResponse

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    print("🚀 FieldStock API Starting...")
    print(f"📍 Version: {settings.version}")
    print(f"🌍 Environment: {'Development' if settings.debug else 'Production'}")
    print(f"🕒 Business timezone: {settings.business_timezone}")
    print(f"🗄️  Database: {settings.database_url.split('@')[1] if '@' in settings.database_url else settings.database_url}")

    if settings.create_tables_on_startup:
        Base.metadata.create_all(bind=engine)
        print("✅ Tablas verificadas")

    yield

    # Shutdown
    print("🛑 FieldStock API Shutting down...")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Inventario de bodegas y tecnicos de campo con transferencias aprobadas",
    docs_url="/docs",
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# Setup middleware
setup_middleware(app)


@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError):
    if exc.status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path}: {exc.detail}")
    else:
        logger.warning(f"⚠️ {request.method} {request.url.path}: [{exc.error_code}] {exc.detail}")

    body = ErrorResponse(
        message=exc.detail,
        error_code=exc.error_code,
        details=exc.details or None
    )
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(body))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    body = ErrorResponse(
        message="Datos de entrada invalidos",
        error_code="validation_error",
        details={"errors": [
            {key: value for key, value in error.items() if key != "ctx"}
            for error in exc.errors()
        ]}
    )
    return JSONResponse(status_code=400, content=jsonable_encoder(body))


# Include routers
app.include_router(api_router, prefix="/api/v1")


# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "🚀 FieldStock API - Inventario de bodegas y tecnicos",
        "version": settings.version,
        "status": "running",
        "environment": "production" if not settings.debug else "development",
        "docs": "/docs",
        "api": "/api/v1"
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "version": settings.version,
        "app": settings.app_name,
        "environment": "production" if not settings.debug else "development"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "fieldstock.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
