# fieldstock/modules/operations/__init__.py
"""
Modulo de Operaciones - Vista derivada del historial de transferencias

Una operacion agrupa las solicitudes terminadas que comparten bodega, tecnico,
dia, usuario, estado y notas. Nunca se persiste: se recalcula en cada consulta
a partir de las filas de transfer_requests.

Arquitectura:
- grouping.py: Motor de agrupacion (funcion pura)
- router.py: Endpoints de consulta
- service.py: Carga de filas y zona horaria del negocio
- schemas.py: Modelos de respuesta
"""

from .router import router
from .service import OperationsService
from .grouping import group_operations, find_operation

__all__ = [
    "router",
    "OperationsService",
    "group_operations",
    "find_operation"
]
