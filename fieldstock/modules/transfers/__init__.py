# fieldstock/modules/transfers/__init__.py
"""
Modulo de Transferencias - Bodega → inventario movil del tecnico

Flujo:
- Solicitud creada en 'pending' (sin tocar inventario)
- Aceptar: descuenta la bodega y suma al inventario movil en una sola transaccion
- Rechazar: registra el motivo, nunca toca inventario
- Estados terminales inmutables; reintentos responden AlreadyProcessed
- Limpieza de auditoria: borrado masivo solo de solicitudes terminadas

Arquitectura:
- router.py: Endpoints de transferencias
- service.py: Ciclo de vida y efectos en el ledger
- repository.py: Acceso a datos de transferencias
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import TransfersService
from .repository import TransfersRepository

__all__ = [
    "router",
    "TransfersService",
    "TransfersRepository"
]
