# fieldstock/modules/inventory/schemas.py
from pydantic import BaseModel, Field, model_validator
from typing import Optional, List

from fieldstock.shared.schemas.common import BaseResponse
from fieldstock.shared.schemas.enums import (
    ItemCategory, OwnerKind, PackagingRule, PackagingType, TechnicianInventory
)


class InventoryEntry(BaseModel):
    """Contadores de un tipo de producto; total_units es solo para mostrar"""
    item_type_id: str
    name_local: str
    name_alt: str
    category: ItemCategory
    packaging_rule: PackagingRule
    units_per_box: int
    is_active: bool
    boxes: int
    units: int
    total_units: int
    source: str = Field(..., description="dynamic | legacy | none")


class OwnerInventoryResponse(BaseResponse):
    owner_kind: OwnerKind
    owner_id: str
    items: List[InventoryEntry]
    total_boxes: int
    total_units: int


class SetInventoryRequest(BaseModel):
    boxes: int = Field(..., ge=0, description="Cajas")
    units: int = Field(..., ge=0, description="Unidades sueltas")


class StockTransferRequest(BaseModel):
    item_type_id: str = Field(..., description="Tipo de producto")
    packaging_type: PackagingType
    quantity: int = Field(..., gt=0, description="Cantidad a mover")
    from_inventory: TechnicianInventory
    to_inventory: TechnicianInventory
    notes: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def validate_direction(self):
        if self.from_inventory == self.to_inventory:
            raise ValueError("El inventario origen y destino deben ser distintos")
        return self


class StockTransferResponse(BaseResponse):
    technician_id: str
    item_type_id: str
    packaging_type: PackagingType
    quantity: int
    from_inventory: TechnicianInventory
    to_inventory: TechnicianInventory
    from_balance: int
    to_balance: int
