# fieldstock/modules/operations/schemas.py
from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import date, datetime

from fieldstock.shared.schemas.enums import PackagingType, TransferStatus


class OperationItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    item_type_id: str
    packaging_type: PackagingType
    quantity: int


class OperationResponse(BaseModel):
    """Operacion derivada; group_key sirve para pedir el detalle"""
    model_config = ConfigDict(from_attributes=True)

    group_key: str
    warehouse_id: str
    technician_id: str
    day: date
    performed_by: str
    status: TransferStatus
    notes: Optional[str] = None
    created_at: datetime
    responded_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    items: List[OperationItemResponse]
    total_quantity: int
