# fieldstock/modules/item_types/schemas.py
from pydantic import BaseModel, Field, field_validator, ConfigDict, AfterValidator
from typing import Optional, Annotated
from datetime import datetime

from fieldstock.shared.schemas.common import BaseResponse
from fieldstock.shared.schemas.enums import ItemCategory, PackagingRule


def _not_blank(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("El nombre no puede estar vacio")
    return value.strip() if value is not None else value


Name = Annotated[str, AfterValidator(_not_blank)]

# Segmentos fijos de las rutas /item-types y /inventory
RESERVED_IDS = frozenset({"active", "seed", "legacy"})


class ItemTypeCreate(BaseModel):
    id: Optional[str] = Field(None, max_length=64, description="ID opcional; se genera si no se envia")
    name_local: Name = Field(..., max_length=255, description="Nombre local")
    name_alt: Name = Field(..., max_length=255, description="Nombre alterno")
    category: ItemCategory = ItemCategory.OTHER
    packaging_rule: PackagingRule = PackagingRule.BOTH
    units_per_box: int = Field(1, gt=0, description="Unidades por caja")
    is_active: bool = True
    is_visible: bool = True
    sort_order: int = 0
    icon: Optional[str] = Field(None, max_length=50)
    color: Optional[str] = Field(None, max_length=20)

    @field_validator("id")
    @classmethod
    def validate_id(cls, v):
        if v is not None and not v.strip():
            raise ValueError("El ID no puede estar vacio")
        if v in RESERVED_IDS or (v is not None and "/" in v):
            raise ValueError(f"ID reservado o invalido: {v}")
        return v


class ItemTypeUpdate(BaseModel):
    """Parche parcial; el id es inmutable"""
    model_config = ConfigDict(extra="forbid")

    name_local: Optional[Name] = Field(None, max_length=255)
    name_alt: Optional[Name] = Field(None, max_length=255)
    category: Optional[ItemCategory] = None
    packaging_rule: Optional[PackagingRule] = None
    units_per_box: Optional[int] = Field(None, gt=0)
    is_active: Optional[bool] = None
    is_visible: Optional[bool] = None
    sort_order: Optional[int] = None
    icon: Optional[str] = Field(None, max_length=50)
    color: Optional[str] = Field(None, max_length=20)


class ToggleActive(BaseModel):
    is_active: bool


class ToggleVisibility(BaseModel):
    is_visible: bool


class ItemTypeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name_local: str
    name_alt: str
    category: ItemCategory
    packaging_rule: PackagingRule
    units_per_box: int
    is_active: bool
    is_visible: bool
    sort_order: int
    icon: Optional[str] = None
    color: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SeedResponse(BaseResponse):
    created_count: int
