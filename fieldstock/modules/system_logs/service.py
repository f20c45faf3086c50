# fieldstock/modules/system_logs/service.py
from typing import List, Optional
from datetime import datetime
from sqlalchemy.orm import Session

from fieldstock.core.exceptions import ValidationError
from fieldstock.shared.schemas.enums import AuditAction
from .repository import SystemLogsRepository
from .schemas import SystemLogResponse


class SystemLogsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = SystemLogsRepository(db)

    async def list_logs(
        self,
        actor_id: Optional[str] = None,
        action: Optional[AuditAction] = None,
        entity_type: Optional[str] = None,
        entity_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: int = 100,
        offset: int = 0
    ) -> List[SystemLogResponse]:
        """Entradas de auditoria, mas recientes primero"""
        if start_date and end_date and start_date > end_date:
            raise ValidationError("start_date no puede ser posterior a end_date")

        entries = self.repository.list_logs(
            actor_id=actor_id,
            action=action.value if action else None,
            entity_type=entity_type,
            entity_id=entity_id,
            start_date=start_date,
            end_date=end_date,
            limit=limit,
            offset=offset
        )
        return [SystemLogResponse.model_validate(entry) for entry in entries]
