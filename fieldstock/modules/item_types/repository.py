# fieldstock/modules/item_types/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List, Dict, Any, Optional

from fieldstock.shared.database.models import ItemType, utcnow


class ItemTypesRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, item_type_id: str) -> Optional[ItemType]:
        return self.db.query(ItemType).filter(ItemType.id == item_type_id).first()

    def list_all(self) -> List[ItemType]:
        return self.db.query(ItemType).order_by(ItemType.sort_order, ItemType.id).all()

    def list_active(self) -> List[ItemType]:
        """Activos y visibles, en el orden del catalogo"""
        return self.db.query(ItemType).filter(
            ItemType.is_active.is_(True),
            ItemType.is_visible.is_(True)
        ).order_by(ItemType.sort_order, ItemType.id).all()

    def count(self) -> int:
        return self.db.query(func.count(ItemType.id)).scalar() or 0

    def create(self, data: Dict[str, Any]) -> ItemType:
        """Agregar al session sin commit"""
        item_type = ItemType(**data)
        self.db.add(item_type)
        self.db.flush()
        return item_type

    def update(self, item_type: ItemType, changes: Dict[str, Any]) -> ItemType:
        for field, value in changes.items():
            setattr(item_type, field, value)
        item_type.updated_at = utcnow()
        self.db.flush()
        return item_type
