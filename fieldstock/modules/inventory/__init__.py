# fieldstock/modules/inventory/__init__.py
"""
Modulo de Inventario - Consulta y ajuste del ledger cajas/unidades

- Inventario por dueno (bodega, tecnico fijo, tecnico movil)
- Ajuste absoluto por producto y carga de registros historicos
- Movimiento de stock entre inventario fijo y movil de un tecnico
"""

from .router import router
from .service import InventoryService

__all__ = ["router", "InventoryService"]
