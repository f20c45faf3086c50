# fieldstock/shared/database/models.py
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Text, JSON,
    ForeignKey, UniqueConstraint, CheckConstraint, Index,
)
from sqlalchemy.orm import relationship, declarative_base
from datetime import datetime, timezone

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp; every DateTime column stores UTC"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# =====================================================
# MIXIN PARA TIMESTAMPS
# =====================================================
class TimestampMixin:
    """Adds created_at and updated_at columns"""
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


# =====================================================
# CATALOGO
# =====================================================

class ItemType(Base, TimestampMixin):
    """Catalog entry for a trackable product"""
    __tablename__ = "item_types"

    id = Column(String(64), primary_key=True)
    name_local = Column(String(255), nullable=False)
    name_alt = Column(String(255), nullable=False)
    category = Column(String(20), nullable=False, default="other")
    packaging_rule = Column(String(20), nullable=False, default="both")
    units_per_box = Column(Integer, nullable=False, default=1)
    is_active = Column(Boolean, nullable=False, default=True)
    is_visible = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)
    icon = Column(String(50))
    color = Column(String(20))

    __table_args__ = (
        CheckConstraint("units_per_box > 0", name="ck_item_types_units_per_box"),
    )

    def total_units(self, boxes: int, units: int) -> int:
        """Display total; stored counters are never converted"""
        if self.packaging_rule == "unit_only":
            return units
        return boxes * self.units_per_box + units


# =====================================================
# LEDGER
# =====================================================

class InventoryRecord(Base):
    """Boxes/units counters for one (owner, item type)"""
    __tablename__ = "inventory_records"

    id = Column(Integer, primary_key=True, index=True)
    owner_kind = Column(String(30), nullable=False)
    owner_id = Column(String(64), nullable=False)
    item_type_id = Column(String(64), ForeignKey("item_types.id"), nullable=False)
    boxes = Column(Integer, nullable=False, default=0)
    units = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    item_type = relationship("ItemType")

    __table_args__ = (
        UniqueConstraint("owner_kind", "owner_id", "item_type_id", name="uq_inventory_owner_item"),
        CheckConstraint("boxes >= 0", name="ck_inventory_boxes"),
        CheckConstraint("units >= 0", name="ck_inventory_units"),
        Index("ix_inventory_owner", "owner_kind", "owner_id"),
    )


class LegacyInventory(Base):
    """Pre-ledger aggregate record with one column pair per starter item type"""
    __tablename__ = "legacy_inventories"

    id = Column(Integer, primary_key=True, index=True)
    owner_kind = Column(String(30), nullable=False)
    owner_id = Column(String(64), nullable=False)

    n950_boxes = Column(Integer, nullable=False, default=0)
    n950_units = Column(Integer, nullable=False, default=0)
    i9000s_boxes = Column(Integer, nullable=False, default=0)
    i9000s_units = Column(Integer, nullable=False, default=0)
    i9100_boxes = Column(Integer, nullable=False, default=0)
    i9100_units = Column(Integer, nullable=False, default=0)
    roll_paper_boxes = Column(Integer, nullable=False, default=0)
    roll_paper_units = Column(Integer, nullable=False, default=0)
    stickers_boxes = Column(Integer, nullable=False, default=0)
    stickers_units = Column(Integer, nullable=False, default=0)
    new_batteries_boxes = Column(Integer, nullable=False, default=0)
    new_batteries_units = Column(Integer, nullable=False, default=0)
    mobily_sim_boxes = Column(Integer, nullable=False, default=0)
    mobily_sim_units = Column(Integer, nullable=False, default=0)
    stc_sim_boxes = Column(Integer, nullable=False, default=0)
    stc_sim_units = Column(Integer, nullable=False, default=0)
    zain_sim_boxes = Column(Integer, nullable=False, default=0)
    zain_sim_units = Column(Integer, nullable=False, default=0)
    lebara_boxes = Column(Integer, nullable=False, default=0)
    lebara_units = Column(Integer, nullable=False, default=0)

    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint("owner_kind", "owner_id", name="uq_legacy_owner"),
    )


# item type id -> (boxes column, units column)
LEGACY_FIELDS = {
    "n950": ("n950_boxes", "n950_units"),
    "i9000s": ("i9000s_boxes", "i9000s_units"),
    "i9100": ("i9100_boxes", "i9100_units"),
    "rollPaper": ("roll_paper_boxes", "roll_paper_units"),
    "stickers": ("stickers_boxes", "stickers_units"),
    "newBatteries": ("new_batteries_boxes", "new_batteries_units"),
    "mobilySim": ("mobily_sim_boxes", "mobily_sim_units"),
    "stcSim": ("stc_sim_boxes", "stc_sim_units"),
    "zainSim": ("zain_sim_boxes", "zain_sim_units"),
    "lebaraSim": ("lebara_boxes", "lebara_units"),
}


# =====================================================
# TRANSFERENCIAS
# =====================================================

class TransferRequest(Base):
    """Warehouse -> technician moving stock request, gated by approval"""
    __tablename__ = "transfer_requests"

    id = Column(Integer, primary_key=True, index=True)
    warehouse_id = Column(String(64), nullable=False, index=True)
    technician_id = Column(String(64), nullable=False, index=True)
    item_type_id = Column(String(64), ForeignKey("item_types.id"), nullable=False)
    packaging_type = Column(String(10), nullable=False)
    quantity = Column(Integer, nullable=False)
    performed_by = Column(String(64), nullable=False)
    notes = Column(Text)
    status = Column(String(20), nullable=False, default="pending", index=True)
    rejection_reason = Column(Text)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    responded_at = Column(DateTime)

    item_type = relationship("ItemType")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_transfer_quantity"),
    )

    @property
    def is_terminal(self) -> bool:
        return self.status != "pending"


# =====================================================
# AUDITORIA
# =====================================================

class SystemLog(Base):
    """Audit entry for an administrative write, stored with the write itself"""
    __tablename__ = "system_logs"

    id = Column(Integer, primary_key=True, index=True)
    actor_id = Column(String(64), nullable=False, index=True)
    action = Column(String(50), nullable=False, index=True)
    entity_type = Column(String(30), nullable=False)
    entity_id = Column(String(150), nullable=False)
    description = Column(Text, nullable=False)
    details = Column(JSON)
    severity = Column(String(10), nullable=False, default="info")
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    __table_args__ = (
        Index("ix_system_logs_entity", "entity_type", "entity_id"),
    )
