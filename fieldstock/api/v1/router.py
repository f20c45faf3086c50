# fieldstock/api/v1/router.py
from fastapi import APIRouter
from fieldstock.modules.item_types.router import router as item_types_router
from fieldstock.modules.inventory.router import router as inventory_router
from fieldstock.modules.transfers.router import router as transfers_router
from fieldstock.modules.operations.router import router as operations_router
from fieldstock.modules.system_logs.router import router as system_logs_router

from fieldstock.config.settings import settings


# Crear router principal de la API v1
api_router = APIRouter()

api_router.include_router(
    item_types_router,
    prefix="/item-types",
    tags=["Item Types"]
)

api_router.include_router(
    inventory_router,
    prefix="/inventory",
    tags=["Inventory Ledger"]
)

api_router.include_router(
    transfers_router,
    prefix="/transfers",
    tags=["Transfers"]
)

api_router.include_router(
    operations_router,
    prefix="/operations",
    tags=["Operations"]
)

api_router.include_router(
    system_logs_router,
    prefix="/system-logs",
    tags=["System Logs"]
)


@api_router.get("/")
async def api_root():
    """Root endpoint de la API"""
    return {
        "message": "FieldStock API v1",
        "version": settings.version,
        "status": "active",
        "docs": "/docs",
        "available_endpoints": {
            "item_types": "/api/v1/item-types",
            "inventory": "/api/v1/inventory",
            "transfers": "/api/v1/transfers",
            "operations": "/api/v1/operations",
            "system_logs": "/api/v1/system-logs"
        }
    }


@api_router.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.version,
        "modules": {
            "item_types": {
                "status": "active",
                "features": ["Catalogo", "Reglas de empaque", "Carga inicial"]
            },
            "inventory": {
                "status": "active",
                "features": ["Cajas/unidades por dueno", "Registros historicos", "Fijo ↔ movil"]
            },
            "transfers": {
                "status": "active",
                "features": ["Solicitar", "Aceptar", "Rechazar", "Limpieza de auditoria"]
            },
            "operations": {
                "status": "active",
                "features": ["Historial agrupado", "Detalle por operacion"]
            },
            "system_logs": {
                "status": "active",
                "features": ["Auditoria de ediciones manuales", "Valores antes/despues"]
            }
        }
    }
