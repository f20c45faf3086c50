# fieldstock/modules/inventory/router.py
from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.orm import Session
from typing import Dict

from fieldstock.config.database import get_db
from fieldstock.core.dependencies import get_current_actor
from fieldstock.shared.schemas.enums import OwnerKind
from .service import InventoryService
from .schemas import (
    OwnerInventoryResponse, SetInventoryRequest,
    StockTransferRequest, StockTransferResponse
)

router = APIRouter()


@router.post("/technicians/{technician_id}/stock-transfer", response_model=StockTransferResponse)
async def transfer_technician_stock(
    data: StockTransferRequest,
    technician_id: str = Path(..., description="ID del tecnico"),
    actor_id: str = Depends(get_current_actor),
    db: Session = Depends(get_db)
):
    """
    Mover stock entre inventario fijo y movil del mismo tecnico

    **Validaciones:**
    - Tipo de producto existente y empaque compatible
    - Stock suficiente en el inventario origen
    - Origen y destino distintos
    """
    service = InventoryService(db)
    return await service.transfer_technician_stock(technician_id, data, actor_id)


@router.get("/{owner_kind}/{owner_id}", response_model=OwnerInventoryResponse)
async def get_owner_inventory(
    owner_kind: OwnerKind = Path(..., description="warehouse | technician_fixed | technician_moving"),
    owner_id: str = Path(...),
    db: Session = Depends(get_db)
):
    """
    Inventario actual de un owner

    Para cada tipo del catalogo: registro dinamico si existe, si no el campo
    legacy del registro agregado. `total_units` = cajas × unidades por caja + unidades.
    """
    service = InventoryService(db)
    return await service.get_owner_inventory(owner_kind, owner_id)


@router.put("/{owner_kind}/{owner_id}/legacy", response_model=OwnerInventoryResponse)
async def set_legacy_inventory(
    fields: Dict[str, int] = Body(..., examples=[{"n950_boxes": 10, "n950_units": 4}]),
    owner_kind: OwnerKind = Path(...),
    owner_id: str = Path(...),
    actor_id: str = Depends(get_current_actor),
    db: Session = Depends(get_db)
):
    """Importar campos del registro agregado legacy"""
    service = InventoryService(db)
    return await service.set_legacy_inventory(owner_kind, owner_id, fields, actor_id)


@router.put("/{owner_kind}/{owner_id}/{item_type_id}", response_model=OwnerInventoryResponse)
async def set_inventory(
    data: SetInventoryRequest,
    owner_kind: OwnerKind = Path(...),
    owner_id: str = Path(...),
    item_type_id: str = Path(...),
    actor_id: str = Depends(get_current_actor),
    db: Session = Depends(get_db)
):
    """Edicion manual de cajas y unidades (override administrativo)"""
    service = InventoryService(db)
    return await service.set_inventory(owner_kind, owner_id, item_type_id, data, actor_id)
