# fieldstock/modules/transfers/router.py
from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from fieldstock.config.database import get_db
from fieldstock.core.dependencies import get_current_actor
from fieldstock.shared.schemas.common import DeleteResponse
from fieldstock.shared.schemas.enums import TransferStatus
from .service import TransfersService
from .schemas import (
    TransferRequestCreate, TransferBatchCreate, TransferRejection, BulkDeleteRequest,
    TransferResponse, TransferActionResponse, TransferBatchResponse
)

router = APIRouter()


@router.post("", response_model=TransferResponse, status_code=status.HTTP_201_CREATED)
async def create_transfer_request(
    transfer_data: TransferRequestCreate,
    actor_id: str = Depends(get_current_actor),
    db: Session = Depends(get_db)
):
    """
    Solicitar productos de una bodega para el inventario movil de un tecnico

    **Validaciones:**
    - Cantidad mayor que cero
    - Tipo de producto existente y activo
    - Empaque compatible con la regla del producto

    La solicitud queda en `pending`; el inventario no cambia hasta aceptarla.
    """
    service = TransfersService(db)
    return await service.submit(transfer_data, actor_id)


@router.post("/batch", response_model=TransferBatchResponse, status_code=status.HTTP_201_CREATED)
async def create_transfer_batch(
    batch: TransferBatchCreate,
    actor_id: str = Depends(get_current_actor),
    db: Session = Depends(get_db)
):
    """Varias lineas de producto en una sola accion; todas o ninguna"""
    service = TransfersService(db)
    return await service.submit_batch(batch, actor_id)


@router.get("", response_model=List[TransferResponse])
async def list_transfers(
    technician_id: Optional[str] = Query(None),
    warehouse_id: Optional[str] = Query(None),
    status: Optional[TransferStatus] = Query(None),
    db: Session = Depends(get_db)
):
    """Solicitudes (pendientes y procesadas), mas recientes primero"""
    service = TransfersService(db)
    return await service.list_transfers(
        technician_id=technician_id,
        warehouse_id=warehouse_id,
        status=status
    )


@router.delete("", response_model=DeleteResponse)
async def bulk_delete_transfers(
    request: BulkDeleteRequest,
    actor_id: str = Depends(get_current_actor),
    db: Session = Depends(get_db)
):
    """
    Borrar solicitudes terminadas (limpieza de auditoria)

    Si algun ID sigue `pending` no se borra nada.
    """
    service = TransfersService(db)
    deleted = await service.bulk_delete(request.ids, actor_id)
    return DeleteResponse(
        success=True,
        message=f"{len(deleted)} solicitudes borradas por {actor_id}",
        deleted_ids=deleted,
        deleted_count=len(deleted)
    )


@router.get("/{transfer_id}", response_model=TransferResponse)
async def get_transfer(
    transfer_id: int = Path(..., gt=0),
    db: Session = Depends(get_db)
):
    service = TransfersService(db)
    return await service.get_transfer(transfer_id)


@router.post("/{transfer_id}/accept", response_model=TransferActionResponse)
async def accept_transfer(
    transfer_id: int = Path(..., gt=0),
    actor_id: str = Depends(get_current_actor),
    db: Session = Depends(get_db)
):
    """
    Aceptar solicitud

    **Proceso (una sola transaccion):**
    1. pending → accepted
    2. Descontar de la bodega
    3. Sumar al inventario movil del tecnico

    Stock insuficiente: 409 `insufficient_stock`, la solicitud sigue pendiente.
    Solicitud ya procesada: 409 `already_processed`, sin cambios en inventario.
    """
    service = TransfersService(db)
    return await service.accept(transfer_id, actor_id)


@router.post("/{transfer_id}/reject", response_model=TransferActionResponse)
async def reject_transfer(
    rejection: Optional[TransferRejection] = Body(None),
    transfer_id: int = Path(..., gt=0),
    actor_id: str = Depends(get_current_actor),
    db: Session = Depends(get_db)
):
    """Rechazar solicitud con motivo opcional; nunca modifica inventario"""
    service = TransfersService(db)
    reason = rejection.reason if rejection else None
    return await service.reject(transfer_id, reason, actor_id)
