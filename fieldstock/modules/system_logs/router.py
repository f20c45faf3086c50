# fieldstock/modules/system_logs/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime

from fieldstock.config.database import get_db
from fieldstock.shared.schemas.enums import AuditAction
from .service import SystemLogsService
from .schemas import SystemLogResponse

router = APIRouter()


@router.get("", response_model=List[SystemLogResponse])
async def list_system_logs(
    actor_id: Optional[str] = Query(None),
    action: Optional[AuditAction] = Query(None),
    entity_type: Optional[str] = Query(None, description="warehouse | technician_fixed | technician_moving | technician | transfer_request"),
    entity_id: Optional[str] = Query(None),
    start_date: Optional[datetime] = Query(None, description="UTC"),
    end_date: Optional[datetime] = Query(None, description="UTC"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    """
    Registro de auditoria de acciones administrativas

    Ediciones manuales de inventario, importaciones legacy, transferencias
    internas de tecnico y borrados de solicitudes, con valores antes/despues.
    """
    service = SystemLogsService(db)
    return await service.list_logs(
        actor_id=actor_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
        offset=offset
    )
