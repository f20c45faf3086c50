# fieldstock/shared/services/ledger_service.py
from typing import Dict, List, Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import and_
from dataclasses import dataclass
import logging

from fieldstock.core.exceptions import InsufficientStock, ValidationError
from fieldstock.shared.database.models import (
    InventoryRecord, ItemType, LegacyInventory, LEGACY_FIELDS, utcnow
)
from fieldstock.shared.schemas.enums import OwnerKind, PackagingType

logger = logging.getLogger(__name__)


@dataclass
class LedgerEntry:
    """Resolved counters for one (owner, item type)"""
    owner_kind: str
    owner_id: str
    item_type_id: str
    boxes: int = 0
    units: int = 0
    source: str = "none"  # dynamic | legacy | none


class LedgerService:
    """
    Ledger de inventario: contadores boxes/units por (owner_kind, owner_id, item_type_id).

    - get() nunca devuelve None: registro en cero si no existe
    - adjust() es un UPDATE condicional en SQL y NO hace commit; el llamador controla la transaccion
    - set_absolute() es el override administrativo; tampoco hace commit
    - Un registro dinamico es autoritativo; si no existe se lee el campo legacy.
      Nunca se suman.
    """

    @staticmethod
    def get_item_type(db: Session, item_type_id: str) -> ItemType:
        item_type = db.query(ItemType).filter(ItemType.id == item_type_id).first()
        if not item_type:
            raise ValidationError(f"Tipo de producto desconocido: {item_type_id}")
        return item_type

    @staticmethod
    def _find_record(
        db: Session,
        owner_kind: OwnerKind,
        owner_id: str,
        item_type_id: str,
        for_update: bool = False
    ) -> Optional[InventoryRecord]:
        query = db.query(InventoryRecord).filter(
            and_(
                InventoryRecord.owner_kind == OwnerKind(owner_kind).value,
                InventoryRecord.owner_id == owner_id,
                InventoryRecord.item_type_id == item_type_id
            )
        )
        if for_update:
            query = query.with_for_update()  # ⚠️ LOCK para evitar race conditions
        return query.first()

    @staticmethod
    def _find_legacy(db: Session, owner_kind: OwnerKind, owner_id: str) -> Optional[LegacyInventory]:
        return db.query(LegacyInventory).filter(
            and_(
                LegacyInventory.owner_kind == OwnerKind(owner_kind).value,
                LegacyInventory.owner_id == owner_id
            )
        ).first()

    @staticmethod
    def _legacy_counters(legacy: Optional[LegacyInventory], item_type_id: str) -> Optional[Tuple[int, int]]:
        if legacy is None or item_type_id not in LEGACY_FIELDS:
            return None
        boxes_field, units_field = LEGACY_FIELDS[item_type_id]
        return getattr(legacy, boxes_field) or 0, getattr(legacy, units_field) or 0

    @staticmethod
    def get(db: Session, owner_kind: OwnerKind, owner_id: str, item_type_id: str) -> LedgerEntry:
        owner_kind = OwnerKind(owner_kind)
        entry = LedgerEntry(owner_kind=owner_kind.value, owner_id=owner_id, item_type_id=item_type_id)

        record = LedgerService._find_record(db, owner_kind, owner_id, item_type_id)
        if record:
            entry.boxes, entry.units, entry.source = record.boxes, record.units, "dynamic"
            return entry

        legacy = LedgerService._legacy_counters(
            LedgerService._find_legacy(db, owner_kind, owner_id), item_type_id
        )
        if legacy is not None:
            entry.boxes, entry.units = legacy
            entry.source = "legacy"
        return entry

    @staticmethod
    def _get_or_create_locked(
        db: Session,
        owner_kind: OwnerKind,
        owner_id: str,
        item_type_id: str
    ) -> InventoryRecord:
        record = LedgerService._find_record(db, owner_kind, owner_id, item_type_id, for_update=True)
        if record:
            return record

        # Primer write: se migra el valor legacy al registro dinamico
        boxes, units = LedgerService._legacy_counters(
            LedgerService._find_legacy(db, owner_kind, owner_id), item_type_id
        ) or (0, 0)

        record = InventoryRecord(
            owner_kind=OwnerKind(owner_kind).value,
            owner_id=owner_id,
            item_type_id=item_type_id,
            boxes=boxes,
            units=units,
            updated_at=utcnow()
        )
        db.add(record)
        db.flush()

        if boxes or units:
            logger.info(
                f"   ✨ Registro dinamico creado desde legacy: {owner_kind.value}/{owner_id}/{item_type_id} "
                f"boxes={boxes} units={units}"
            )
        return record

    @staticmethod
    def adjust(
        db: Session,
        owner_kind: OwnerKind,
        owner_id: str,
        item_type_id: str,
        packaging_type: PackagingType,
        delta: int
    ) -> InventoryRecord:
        """
        Sumar/restar `delta` al contador del tipo de empaque indicado.

        Raises:
            ValidationError: delta en cero o tipo de producto desconocido
            InsufficientStock: el contador quedaria negativo (registro sin cambios)
        """
        owner_kind = OwnerKind(owner_kind)
        packaging_type = PackagingType(packaging_type)

        if delta == 0:
            raise ValidationError("El ajuste debe ser distinto de cero")

        LedgerService.get_item_type(db, item_type_id)

        record = LedgerService._get_or_create_locked(db, owner_kind, owner_id, item_type_id)
        counter = packaging_type.counter
        column = getattr(InventoryRecord, counter)

        # El contador se calcula en SQL: dos ajustes concurrentes nunca pisan su resultado
        updated = db.query(InventoryRecord).filter(
            and_(
                InventoryRecord.id == record.id,
                column + delta >= 0
            )
        ).update(
            {column: column + delta, InventoryRecord.updated_at: utcnow()},
            synchronize_session=False
        )
        db.refresh(record)

        if not updated:
            available = getattr(record, counter)
            logger.warning(
                f"❌ Stock insuficiente {owner_kind.value}/{owner_id} {item_type_id}: "
                f"{counter}={available}, delta={delta}"
            )
            raise InsufficientStock(
                f"Stock insuficiente de {item_type_id} ({counter}) en {owner_kind.value} {owner_id}. "
                f"Disponible: {available}, Solicitado: {-delta}",
                details={
                    "owner_kind": owner_kind.value,
                    "owner_id": owner_id,
                    "item_type_id": item_type_id,
                    "packaging_type": packaging_type.value,
                    "available": available,
                    "requested": -delta,
                }
            )

        after = getattr(record, counter)
        logger.info(
            f"   📦 {owner_kind.value}/{owner_id} {item_type_id} {counter}: {after - delta} → {after} ({delta:+d})"
        )
        return record

    @staticmethod
    def set_absolute(
        db: Session,
        owner_kind: OwnerKind,
        owner_id: str,
        item_type_id: str,
        boxes: int,
        units: int
    ) -> InventoryRecord:
        """Edicion manual: fija ambos contadores sin pasar por el ciclo de transferencias"""
        if boxes < 0 or units < 0:
            raise ValidationError("Las cantidades no pueden ser negativas")

        LedgerService.get_item_type(db, item_type_id)

        record = LedgerService._get_or_create_locked(db, owner_kind, owner_id, item_type_id)
        record.boxes = boxes
        record.units = units
        record.updated_at = utcnow()
        db.flush()
        return record

    @staticmethod
    def legacy_values(db: Session, owner_kind: OwnerKind, owner_id: str, fields) -> Dict[str, int]:
        """Valores actuales de columnas legacy; 0 si el owner no tiene registro agregado"""
        allowed = {column for pair in LEGACY_FIELDS.values() for column in pair}
        legacy = LedgerService._find_legacy(db, owner_kind, owner_id)
        return {
            name: (getattr(legacy, name) or 0) if legacy else 0
            for name in fields if name in allowed
        }

    @staticmethod
    def set_legacy(db: Session, owner_kind: OwnerKind, owner_id: str, fields: Dict[str, int]) -> LegacyInventory:
        """Importar/actualizar el registro agregado legacy de un owner"""
        allowed = {column for pair in LEGACY_FIELDS.values() for column in pair}
        unknown = set(fields) - allowed
        if unknown:
            raise ValidationError(f"Campos legacy desconocidos: {sorted(unknown)}")
        negative = [name for name, value in fields.items() if value < 0]
        if negative:
            raise ValidationError(f"Campos legacy negativos: {sorted(negative)}")

        legacy = LedgerService._find_legacy(db, owner_kind, owner_id)
        if not legacy:
            legacy = LegacyInventory(owner_kind=OwnerKind(owner_kind).value, owner_id=owner_id)
            db.add(legacy)

        for name, value in fields.items():
            setattr(legacy, name, value)
        legacy.updated_at = utcnow()
        db.flush()
        return legacy

    @staticmethod
    def snapshot(db: Session, owner_kind: OwnerKind, owner_id: str) -> List[Tuple[ItemType, LedgerEntry]]:
        """
        Inventario actual de un owner para cada tipo del catalogo, resuelto con
        la regla dinamico-o-legacy. Incluye tipos inactivos: el stock historico
        sigue siendo consultable.
        """
        owner_kind = OwnerKind(owner_kind)
        item_types = db.query(ItemType).order_by(ItemType.sort_order, ItemType.id).all()

        records = {
            record.item_type_id: record
            for record in db.query(InventoryRecord).filter(
                and_(
                    InventoryRecord.owner_kind == owner_kind.value,
                    InventoryRecord.owner_id == owner_id
                )
            ).all()
        }
        legacy = LedgerService._find_legacy(db, owner_kind, owner_id)

        result = []
        for item_type in item_types:
            entry = LedgerEntry(owner_kind=owner_kind.value, owner_id=owner_id, item_type_id=item_type.id)
            record = records.get(item_type.id)
            if record:
                entry.boxes, entry.units, entry.source = record.boxes, record.units, "dynamic"
            else:
                counters = LedgerService._legacy_counters(legacy, item_type.id)
                if counters is not None:
                    entry.boxes, entry.units = counters
                    entry.source = "legacy"
            result.append((item_type, entry))
        return result
