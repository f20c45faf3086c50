# fieldstock/modules/operations/router.py
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from fieldstock.config.database import get_db
from .service import OperationsService
from .schemas import OperationResponse

router = APIRouter()


@router.get("", response_model=List[OperationResponse])
async def list_operations(
    technician_id: Optional[str] = Query(None),
    warehouse_id: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """
    Historial de operaciones

    Agrupa las solicitudes aceptadas y rechazadas por bodega, tecnico, dia,
    usuario, estado y notas. Las pendientes no aparecen.
    """
    service = OperationsService(db)
    return await service.list_operations(
        technician_id=technician_id,
        warehouse_id=warehouse_id
    )


@router.get("/{group_key}", response_model=OperationResponse)
async def get_operation(
    group_key: str = Path(..., description="Clave opaca devuelta por el listado"),
    db: Session = Depends(get_db)
):
    """Detalle de una operacion con todas sus lineas"""
    service = OperationsService(db)
    return await service.get_operation(group_key)
