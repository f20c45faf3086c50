# fieldstock/modules/system_logs/schemas.py
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, Optional
from datetime import datetime

from fieldstock.shared.schemas.enums import AuditAction


class SystemLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    actor_id: str
    action: AuditAction
    entity_type: str
    entity_id: str
    description: str
    details: Optional[Dict[str, Any]] = None
    severity: str
    created_at: datetime
