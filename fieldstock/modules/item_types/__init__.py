# fieldstock/modules/item_types/__init__.py
"""
Modulo de Tipos de Producto - Catalogo canonico

Todo el sistema resuelve la identidad de un producto a traves de este catalogo:
- Alta, edicion y activacion/visibilidad de tipos
- Regla de empaque (box_only / unit_only / both) y unidades por caja
- Carga inicial del catalogo por defecto

Arquitectura:
- router.py: Endpoints del catalogo
- service.py: Reglas de negocio
- repository.py: Acceso a datos
- schemas.py: Modelos de request/response
- defaults.py: Catalogo inicial
"""

from .router import router
from .service import ItemTypesService
from .repository import ItemTypesRepository

__all__ = [
    "router",
    "ItemTypesService",
    "ItemTypesRepository"
]
