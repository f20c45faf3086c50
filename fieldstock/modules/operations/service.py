# fieldstock/modules/operations/service.py
from datetime import tzinfo
from typing import List, Optional
from sqlalchemy.orm import Session
from dateutil import tz
import logging

from fieldstock.config.settings import settings
from fieldstock.core.exceptions import NotFound
from fieldstock.modules.transfers.repository import TransfersRepository
from .grouping import group_operations, find_operation
from .schemas import OperationResponse

logger = logging.getLogger(__name__)


def business_zone(name: Optional[str] = None) -> tzinfo:
    """Zona horaria usada para el dia calendario de cada operacion"""
    name = name or settings.business_timezone
    zone = tz.gettz(name)
    if zone is None:
        logger.warning(f"⚠️ Zona horaria desconocida '{name}', usando UTC")
        return tz.UTC
    return zone


class OperationsService:
    def __init__(self, db: Session, zone: Optional[tzinfo] = None):
        self.db = db
        self.repository = TransfersRepository(db)
        self.zone = zone or business_zone()

    async def list_operations(
        self,
        technician_id: Optional[str] = None,
        warehouse_id: Optional[str] = None
    ) -> List[OperationResponse]:
        """Historial agrupado; una sola consulta para leer un estado consistente"""
        transfers = self.repository.list_processed(
            technician_id=technician_id,
            warehouse_id=warehouse_id
        )
        operations = group_operations(transfers, self.zone)

        logger.info(f"📋 {len(operations)} operaciones a partir de {len(transfers)} solicitudes")
        return [OperationResponse.model_validate(op) for op in operations]

    async def get_operation(self, group_key: str) -> OperationResponse:
        operation = find_operation(self.repository.list_processed(), group_key, self.zone)
        if operation is None:
            raise NotFound(
                f"Operacion no encontrada: {group_key}",
                details={"group_key": group_key}
            )
        return OperationResponse.model_validate(operation)
