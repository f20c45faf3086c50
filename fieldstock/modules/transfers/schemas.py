# fieldstock/modules/transfers/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime

from fieldstock.shared.schemas.common import BaseResponse
from fieldstock.shared.schemas.enums import PackagingType, TransferStatus


class TransferRequestCreate(BaseModel):
    warehouse_id: str = Field(..., min_length=1, description="Bodega origen")
    technician_id: str = Field(..., min_length=1, description="Tecnico destino (inventario movil)")
    item_type_id: str = Field(..., min_length=1, description="Tipo de producto")
    packaging_type: PackagingType = Field(..., description="box | unit")
    quantity: int = Field(..., gt=0, description="Cantidad a transferir")
    notes: Optional[str] = Field(None, max_length=500, description="Notas adicionales")


class TransferLine(BaseModel):
    item_type_id: str = Field(..., min_length=1)
    packaging_type: PackagingType
    quantity: int = Field(..., gt=0)


class TransferBatchCreate(BaseModel):
    """Varias lineas de una misma accion: misma bodega, tecnico y notas"""
    warehouse_id: str = Field(..., min_length=1)
    technician_id: str = Field(..., min_length=1)
    notes: Optional[str] = Field(None, max_length=500)
    items: List[TransferLine] = Field(..., min_length=1)


class TransferRejection(BaseModel):
    reason: Optional[str] = Field(None, max_length=500, description="Motivo del rechazo")


class BulkDeleteRequest(BaseModel):
    ids: List[int] = Field(..., min_length=1, description="IDs de solicitudes terminadas")


class TransferResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    warehouse_id: str
    technician_id: str
    item_type_id: str
    packaging_type: PackagingType
    quantity: int
    performed_by: str
    notes: Optional[str] = None
    status: TransferStatus
    rejection_reason: Optional[str] = None
    created_at: datetime
    responded_at: Optional[datetime] = None


class LedgerBalance(BaseModel):
    owner_kind: str
    owner_id: str
    item_type_id: str
    packaging_type: PackagingType
    balance: int


class TransferActionResponse(BaseResponse):
    transfer: TransferResponse
    ledger: List[LedgerBalance] = Field(default_factory=list)


class TransferBatchResponse(BaseResponse):
    transfers: List[TransferResponse]
