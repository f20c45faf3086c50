# fieldstock/modules/item_types/service.py
from typing import List
from sqlalchemy.orm import Session
import logging
import uuid

from fieldstock.core.exceptions import AlreadySeeded, NotFound, ValidationError
from fieldstock.shared.database.models import ItemType
from fieldstock.shared.database.transaction import transaction
from .repository import ItemTypesRepository
from .schemas import ItemTypeCreate, ItemTypeUpdate
from .defaults import DEFAULT_ITEM_TYPES

logger = logging.getLogger(__name__)

NON_NULLABLE_FIELDS = (
    "name_local", "name_alt", "category", "packaging_rule", "units_per_box",
    "is_active", "is_visible", "sort_order",
)


class ItemTypesService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ItemTypesRepository(db)

    async def list_item_types(self) -> List[ItemType]:
        return self.repository.list_all()

    async def list_active_item_types(self) -> List[ItemType]:
        return self.repository.list_active()

    async def get_item_type(self, item_type_id: str) -> ItemType:
        item_type = self.repository.get_by_id(item_type_id)
        if not item_type:
            raise NotFound(f"Tipo de producto {item_type_id} no encontrado")
        return item_type

    async def create_item_type(self, data: ItemTypeCreate) -> ItemType:
        """Crear tipo; el ID se genera si no viene en la solicitud"""
        if not data.name_local.strip() or not data.name_alt.strip():
            raise ValidationError("Los nombres son obligatorios")

        values = data.model_dump()
        if data.id:
            if self.repository.get_by_id(data.id):
                raise ValidationError(
                    f"El tipo de producto {data.id} ya existe",
                    details={"id": data.id}
                )
        else:
            values["id"] = uuid.uuid4().hex

        values["category"] = data.category.value
        values["packaging_rule"] = data.packaging_rule.value

        with transaction(self.db, "crear tipo de producto"):
            item_type = self.repository.create(values)

        logger.info(f"✅ Tipo de producto creado: {item_type.id} ({item_type.name_alt})")
        return item_type

    async def update_item_type(self, item_type_id: str, patch: ItemTypeUpdate) -> ItemType:
        item_type = await self.get_item_type(item_type_id)

        changes = patch.model_dump(exclude_unset=True)
        nulls = [field for field in NON_NULLABLE_FIELDS if field in changes and changes[field] is None]
        if nulls:
            raise ValidationError(f"Campos que no pueden ser nulos: {nulls}")
        if "category" in changes:
            changes["category"] = changes["category"].value
        if "packaging_rule" in changes:
            changes["packaging_rule"] = changes["packaging_rule"].value

        with transaction(self.db, "actualizar tipo de producto"):
            self.repository.update(item_type, changes)

        logger.info(f"✏️ Tipo de producto actualizado: {item_type_id} {sorted(changes)}")
        return item_type

    async def toggle_active(self, item_type_id: str, is_active: bool) -> ItemType:
        """Solo cambia la bandera; el inventario existente no se toca"""
        item_type = await self.get_item_type(item_type_id)
        with transaction(self.db, "cambiar estado activo"):
            self.repository.update(item_type, {"is_active": is_active})
        return item_type

    async def toggle_visibility(self, item_type_id: str, is_visible: bool) -> ItemType:
        item_type = await self.get_item_type(item_type_id)
        with transaction(self.db, "cambiar visibilidad"):
            self.repository.update(item_type, {"is_visible": is_visible})
        return item_type

    async def seed_defaults(self, if_empty: bool = False) -> int:
        """
        Cargar el catalogo por defecto.

        Con el catalogo no vacio lanza AlreadySeeded, o no hace nada si
        `if_empty` es True. Nunca duplica filas.
        """
        existing = self.repository.count()
        if existing:
            if if_empty:
                logger.info(f"ℹ️ Catalogo ya cargado ({existing} tipos), no se siembra")
                return 0
            raise AlreadySeeded(
                f"El catalogo ya tiene {existing} tipos de producto",
                details={"existing_count": existing}
            )

        with transaction(self.db, "sembrar catalogo"):
            for values in DEFAULT_ITEM_TYPES:
                self.repository.create(dict(values))

        logger.info(f"🌱 Catalogo sembrado: {len(DEFAULT_ITEM_TYPES)} tipos")
        return len(DEFAULT_ITEM_TYPES)
