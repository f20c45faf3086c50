# fieldstock/modules/system_logs/__init__.py
"""
Modulo de Auditoria - Registro de acciones administrativas

Cada edicion manual de inventario, importacion legacy, transferencia interna
de tecnico y borrado de solicitudes deja una entrada en system_logs dentro de
la misma transaccion que el cambio.

Arquitectura:
- repository.py: Alta y consulta de entradas
- service.py: Consulta con filtros
- router.py: GET /system-logs
"""

from .router import router
from .repository import SystemLogsRepository
from .service import SystemLogsService

__all__ = [
    "router",
    "SystemLogsRepository",
    "SystemLogsService"
]
