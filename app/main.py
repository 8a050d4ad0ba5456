from datetime import datetime, timezone
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from app.core.config import settings
from app.database.database import init_db, dispose_db

# Import middleware and error handlers
from app.common.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from app.common.errors import register_error_handlers

# Import routers
from app.modules.auth.router import auth_router
from app.modules.search.router import router as search_router
from app.modules.movimientos.router import router as movimientos_router
from app.modules.facturas.router import router as facturas_router
from app.modules.clientes.router import router as clientes_router
from app.modules.cotizaciones.router import router as cotizaciones_router
from app.modules.remisiones.router import router as remisiones_router

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.ENVIRONMENT == "production" else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api"

# FastAPI app
app = FastAPI(
    title="EVA API",
    description="Backend contable: facturas, cotizaciones, remisiones, clientes y movimientos de caja",
    version="1.0.0",
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None
)

# Add middleware (order matters!)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

register_error_handlers(app)

# Include routers
app.include_router(auth_router, prefix=API_PREFIX, tags=["Auth"])
app.include_router(search_router, prefix=API_PREFIX)
app.include_router(movimientos_router, prefix=API_PREFIX)
app.include_router(facturas_router, prefix=API_PREFIX)
app.include_router(clientes_router, prefix=API_PREFIX)
app.include_router(cotizaciones_router, prefix=API_PREFIX)
app.include_router(remisiones_router, prefix=API_PREFIX)


@app.get("/")
async def read_root():
    return {
        "message": "EVA API is running",
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT
    }


@app.get(f"{API_PREFIX}/health")
async def health_check():
    return {
        "status": "OK",
        "message": "Backend EVA funcionando",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@app.on_event("startup")
async def startup_event():
    logger.info("EVA API starting up...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    # create_all solo crea las tablas que faltan
    init_db()


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("EVA API shutting down...")
    dispose_db()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT)
