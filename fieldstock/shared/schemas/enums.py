# fieldstock/shared/schemas/enums.py

"""
Enumeraciones compartidas entre el catalogo, el ledger y las transferencias
"""

from enum import Enum


class ItemCategory(str, Enum):
    """Product families in the catalog"""
    DEVICES = "devices"
    PAPERS = "papers"
    SIM = "sim"
    ACCESSORIES = "accessories"
    OTHER = "other"


class PackagingRule(str, Enum):
    """Which packaging types an item type can be moved in"""
    BOX_ONLY = "box_only"
    UNIT_ONLY = "unit_only"
    BOTH = "both"

    def allows(self, packaging_type: "PackagingType") -> bool:
        if self is PackagingRule.BOTH:
            return True
        if self is PackagingRule.BOX_ONLY:
            return packaging_type == PackagingType.BOX
        return packaging_type == PackagingType.UNIT


class PackagingType(str, Enum):
    """Denomination of a movement or a ledger counter"""
    BOX = "box"
    UNIT = "unit"

    @property
    def counter(self) -> str:
        return "boxes" if self is PackagingType.BOX else "units"


class OwnerKind(str, Enum):
    """Who holds an inventory record"""
    WAREHOUSE = "warehouse"
    TECHNICIAN_FIXED = "technician_fixed"
    TECHNICIAN_MOVING = "technician_moving"


class TechnicianInventory(str, Enum):
    """Technician-side inventories used by direct stock transfers"""
    FIXED = "fixed"
    MOVING = "moving"

    @property
    def owner_kind(self) -> OwnerKind:
        if self is TechnicianInventory.FIXED:
            return OwnerKind.TECHNICIAN_FIXED
        return OwnerKind.TECHNICIAN_MOVING


class TransferStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class AuditAction(str, Enum):
    """Administrative writes recorded in system_logs"""
    INVENTORY_SET = "inventory_set"
    LEGACY_IMPORT = "legacy_import"
    STOCK_TRANSFER = "stock_transfer"
    TRANSFERS_DELETE = "transfers_delete"
