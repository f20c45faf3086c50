# fieldstock/modules/system_logs/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import and_, desc
from typing import Any, Dict, List, Optional
from datetime import datetime

from fieldstock.shared.database.models import SystemLog, utcnow
from fieldstock.shared.schemas.enums import AuditAction


class SystemLogsRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        actor_id: str,
        action: AuditAction,
        entity_type: str,
        entity_id: str,
        description: str,
        details: Optional[Dict[str, Any]] = None,
        severity: str = "info"
    ) -> SystemLog:
        """Agregar entrada sin commit; va en la transaccion del cambio auditado"""
        entry = SystemLog(
            actor_id=actor_id,
            action=AuditAction(action).value,
            entity_type=entity_type,
            entity_id=entity_id,
            description=description,
            details=details,
            severity=severity,
            created_at=utcnow()
        )
        self.db.add(entry)
        self.db.flush()
        return entry

    def list_logs(
        self,
        actor_id: Optional[str] = None,
        action: Optional[str] = None,
        entity_type: Optional[str] = None,
        entity_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: int = 100,
        offset: int = 0
    ) -> List[SystemLog]:
        filters = []
        if actor_id:
            filters.append(SystemLog.actor_id == actor_id)
        if action:
            filters.append(SystemLog.action == action)
        if entity_type:
            filters.append(SystemLog.entity_type == entity_type)
        if entity_id:
            filters.append(SystemLog.entity_id == entity_id)
        if start_date:
            filters.append(SystemLog.created_at >= start_date)
        if end_date:
            filters.append(SystemLog.created_at <= end_date)

        query = self.db.query(SystemLog)
        if filters:
            query = query.filter(and_(*filters))
        return query.order_by(
            desc(SystemLog.created_at), desc(SystemLog.id)
        ).offset(offset).limit(limit).all()
